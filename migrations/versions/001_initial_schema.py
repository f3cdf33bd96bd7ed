"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Active plan per owner
    op.create_table(
        "betting_data",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.String(64), nullable=False),
        sa.Column("config_json", sa.JSON(), nullable=True),
        sa.Column("plan_json", sa.JSON(), nullable=True),
        sa.Column("current_balance", sa.Float(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_betting_data_id"), "betting_data", ["id"], unique=False)
    op.create_index(op.f("ix_betting_data_owner_id"), "betting_data", ["owner_id"], unique=True)

    # Saved plans
    op.create_table(
        "saved_plans",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("owner_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("config", sa.JSON(), nullable=False),
        sa.Column("plan", sa.JSON(), nullable=False),
        sa.Column("saved_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_saved_plans_id"), "saved_plans", ["id"], unique=False)
    op.create_index(op.f("ix_saved_plans_owner_id"), "saved_plans", ["owner_id"], unique=False)
    op.create_index(op.f("ix_saved_plans_saved_at"), "saved_plans", ["saved_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_saved_plans_saved_at"), table_name="saved_plans")
    op.drop_index(op.f("ix_saved_plans_owner_id"), table_name="saved_plans")
    op.drop_index(op.f("ix_saved_plans_id"), table_name="saved_plans")
    op.drop_table("saved_plans")
    op.drop_index(op.f("ix_betting_data_owner_id"), table_name="betting_data")
    op.drop_index(op.f("ix_betting_data_id"), table_name="betting_data")
    op.drop_table("betting_data")

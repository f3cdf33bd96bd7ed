from sqlalchemy import (
    Column, Integer, String, DateTime, Float, JSON, func
)

from app.db.database import Base


class BettingData(Base):
    """The active plan of an owner: config, plan and balance stored as JSON blobs."""
    __tablename__ = "betting_data"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(64), unique=True, nullable=False, index=True)

    # BettingConfig and list of DayResult, exactly as produced by the plan engine
    config_json = Column(JSON, nullable=True)
    plan_json = Column(JSON, nullable=True)

    current_balance = Column(Float, nullable=False, default=0)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class SavedPlan(Base):
    """A named copy of a config and plan the owner can load later."""
    __tablename__ = "saved_plans"

    id = Column(String(36), primary_key=True, index=True)
    owner_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    config = Column(JSON, nullable=False)
    plan = Column(JSON, nullable=False)
    saved_at = Column(DateTime(timezone=True), nullable=False, index=True)

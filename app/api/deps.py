"""Shared route dependencies."""

from fastapi import Header


async def get_owner_id(
    x_owner_id: str = Header(..., min_length=1, max_length=64, description="Plan owner identity"),
) -> str:
    """
    Owner key for the stored plan.

    Authentication happens upstream; this API only needs a stable identity
    to key the stored config and plan by.
    """
    return x_owner_id

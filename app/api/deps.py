"""API Dependencies"""

from uuid import UUID
from fastapi import Query

from app.database import get_db

__all__ = ["get_db", "building_id_query"]


def building_id_query(
    building_id: UUID = Query(..., description="Building whose tariff is requested"),
) -> UUID:
    """Required ?building_id= query parameter for tariff lookups."""
    return building_id

from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.core.exceptions import NotFoundError
from app.services.utility_service import UtilityRateService
from app.schemas.utility import UtilityRateCreate, UtilityRateResponse
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[UtilityRateResponse])
async def get_current_rates(
    building_id: UUID = Depends(deps.building_id_query),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Latest tariff configured for a building."""
    rate = await UtilityRateService.get_latest_rate(db, building_id)
    if not rate:
        raise NotFoundError("No utility rates found for this building.")
    return SuccessResponse(data=UtilityRateResponse.model_validate(rate))


@router.post("", response_model=SuccessResponse[UtilityRateResponse], status_code=status.HTTP_201_CREATED)
async def create_rates(
    rate_in: UtilityRateCreate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    rate = await UtilityRateService.create_rate(db, rate_in)
    return SuccessResponse(
        data=UtilityRateResponse.model_validate(rate),
        message="Utility rates created successfully",
    )

from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.core.exceptions import NotFoundError
from app.services.tenant_service import TenantService
from app.schemas.tenant import TenantCreate, TenantResponse
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[TenantResponse]])
async def list_tenants(
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    tenants = await TenantService.list_tenants(db)
    return SuccessResponse(data=[TenantResponse.model_validate(t) for t in tenants])


@router.post("", response_model=SuccessResponse[TenantResponse], status_code=status.HTTP_201_CREATED)
async def create_tenant(
    tenant_in: TenantCreate,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Register a tenant. payment_term (days) drives the length of every
    billing cycle for the tenant's bills.
    """
    tenant = await TenantService.create_tenant(db, tenant_in)
    return SuccessResponse(
        data=TenantResponse.model_validate(tenant),
        message="Tenant created successfully",
    )


@router.get("/{tenant_id}", response_model=SuccessResponse[TenantResponse])
async def get_tenant(
    tenant_id: UUID,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    tenant = await TenantService.get_tenant_by_id(db, tenant_id)
    if not tenant:
        raise NotFoundError("Tenant not found.")
    return SuccessResponse(data=TenantResponse.model_validate(tenant))

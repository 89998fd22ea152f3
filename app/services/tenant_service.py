from typing import Optional, List
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.tenant import Tenant
from app.schemas.tenant import TenantCreate


class TenantService:
    """Service layer for Tenant operations"""

    @staticmethod
    async def get_tenant_by_id(db: AsyncSession, tenant_id: UUID) -> Optional[Tenant]:
        result = await db.execute(
            select(Tenant).where(Tenant.id == tenant_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def list_tenants(db: AsyncSession) -> List[Tenant]:
        result = await db.execute(
            select(Tenant).order_by(Tenant.full_name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def create_tenant(db: AsyncSession, data: TenantCreate) -> Tenant:
        tenant = Tenant(**data.model_dump())
        db.add(tenant)
        await db.commit()
        await db.refresh(tenant)
        return tenant

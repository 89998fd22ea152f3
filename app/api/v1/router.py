"""API V1 Router"""

from fastapi import APIRouter

from app.api.v1.endpoints import bills, utility_bills, tenants, utility_rates

api_router = APIRouter()

api_router.include_router(bills.router, prefix="/bills", tags=["Rent Billing"])
api_router.include_router(utility_bills.router, prefix="/utility-bills", tags=["Utility Billing"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["Tenants"])
api_router.include_router(utility_rates.router, prefix="/utility-rates", tags=["Utility Rates"])

from fastapi import APIRouter

from billingdesk.api.routes import catalog, price_lines, proration

api_router = APIRouter()

api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
api_router.include_router(proration.router, prefix="/pro-rata", tags=["pro-rata"])
api_router.include_router(price_lines.router, prefix="/price-lines", tags=["price-lines"])

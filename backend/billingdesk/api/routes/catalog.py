from __future__ import annotations

from fastapi import APIRouter

from billingdesk.schemas.catalog import AddOnOut, ProductOut
from billingdesk.services import catalog as catalog_service

router = APIRouter()


@router.get("/products", response_model=list[ProductOut])
def list_products():
    return [ProductOut.model_validate(p) for p in catalog_service.PRODUCTS]


@router.get("/add-ons", response_model=list[AddOnOut])
def list_add_ons():
    return [AddOnOut.model_validate(a) for a in catalog_service.ADD_ONS]

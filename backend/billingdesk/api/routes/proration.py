from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from billingdesk.core.config import settings
from billingdesk.models.enums import Lang, ProrationPolicy
from billingdesk.schemas.common import AddOnIn
from billingdesk.schemas.proration import FromInvoiceCreate, ProrationOut, QuoteCreate, QuoteOut
from billingdesk.services import catalog as catalog_service
from billingdesk.services import proration as proration_service
from billingdesk.services.proration import AddOnLine, ProrationResult
from billingdesk.services.script import build_script, clean_script

logger = logging.getLogger(__name__)

router = APIRouter()


def _product(product_id: str | None) -> catalog_service.Product | None:
    if not product_id:
        return None
    try:
        return catalog_service.get_product(product_id)
    except catalog_service.CatalogLookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown product: {product_id}")


def _terms(product: catalog_service.Product | None, anchor_day: int | None, policy: ProrationPolicy | None) -> tuple[int, ProrationPolicy]:
    if anchor_day is None:
        anchor_day = product.anchor_day if product else settings.default_anchor_day
    if policy is None:
        policy = product.policy if product else ProrationPolicy.RATIO
    return anchor_day, policy


def _add_on_lines(add_on_ids: list[str], add_ons: list[AddOnIn], lang: Lang) -> list[AddOnLine]:
    try:
        lines = catalog_service.add_on_lines(add_on_ids, lang)
    except catalog_service.CatalogLookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e.args[0]))
    return lines + [AddOnLine(label=a.label, price=a.price) for a in add_ons]


def _to_out(product_id: str | None, anchor_day: int, result: ProrationResult, lang: Lang) -> QuoteOut:
    script = build_script(result, lang, currency=settings.currency_label)
    return QuoteOut(
        product_id=product_id,
        anchor_day=anchor_day,
        result=ProrationOut.model_validate(result),
        script=script,
        script_plain=clean_script(script),
    )


@router.post("/quote", response_model=QuoteOut)
def quote(payload: QuoteCreate):
    product = _product(payload.product_id)
    anchor_day, policy = _terms(product, payload.anchor_day, payload.policy)
    lang = payload.lang or settings.default_lang

    monthly = payload.monthly_price
    if monthly is None:
        if product is None:
            raise HTTPException(status_code=422, detail="monthly_price is required without product_id")
        monthly = product.default_base_price

    result = proration_service.compute_invoice(
        monthly,
        payload.activation_date,
        anchor_day,
        policy,
        _add_on_lines(payload.add_on_ids, payload.add_ons, lang),
        proration_base_price=payload.proration_base_price,
    )
    logger.info(
        "proration_quote: product=%s policy=%s anchor_day=%d activation=%s invoice=%s",
        payload.product_id,
        policy.value,
        anchor_day,
        payload.activation_date.isoformat(),
        result.invoice_after_tax,
    )
    return _to_out(payload.product_id, anchor_day, result, lang)


@router.post("/from-invoice", response_model=QuoteOut)
def from_invoice(payload: FromInvoiceCreate):
    product = _product(payload.product_id)
    anchor_day, policy = _terms(product, payload.anchor_day, payload.policy)
    lang = payload.lang or settings.default_lang

    result = proration_service.compute_from_full_invoice(
        payload.invoice_amount,
        payload.activation_date,
        anchor_day,
        policy,
        _add_on_lines(payload.add_on_ids, payload.add_ons, lang),
    )
    logger.info(
        "proration_from_invoice: product=%s policy=%s anchor_day=%d invoice=%s monthly=%s",
        payload.product_id,
        policy.value,
        anchor_day,
        payload.invoice_amount,
        result.monthly_before_tax,
    )
    return _to_out(payload.product_id, anchor_day, result, lang)

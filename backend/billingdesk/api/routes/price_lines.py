from __future__ import annotations

from fastapi import APIRouter

from billingdesk.schemas.price_lines import PriceLineOut, PriceLinesCreate, PriceLinesOut
from billingdesk.services.price_lines import VOICE_RATE, build_all_lines
from billingdesk.services.proration import VAT_RATE

router = APIRouter()


@router.post("", response_model=PriceLinesOut)
def price_lines(payload: PriceLinesCreate):
    lines = build_all_lines(payload.base_net, VAT_RATE, payload.addon)
    return PriceLinesOut(
        vat_rate=VAT_RATE,
        voice_rate=VOICE_RATE,
        lines={name: PriceLineOut.model_validate(line) for name, line in lines.items()},
    )

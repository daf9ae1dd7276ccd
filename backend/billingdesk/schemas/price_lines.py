from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from billingdesk.schemas.common import ApiModel


class PriceLinesCreate(BaseModel):
    base_net: Decimal = Field(ge=0)
    addon: Decimal = Field(default=Decimal("0"), ge=0)


class PriceLineOut(ApiModel):
    net: Decimal
    vat: Decimal
    gross: Decimal
    after_addon: Decimal


class PriceLinesOut(BaseModel):
    vat_rate: Decimal
    voice_rate: Decimal
    lines: dict[str, PriceLineOut]

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from billingdesk.models.enums import Lang, ProrationPolicy
from billingdesk.schemas.common import AddOnIn, ApiModel


class QuoteCreate(BaseModel):
    activation_date: dt.date
    # With product_id, missing anchor_day / policy / monthly_price come from the catalog.
    product_id: str | None = None
    monthly_price: Decimal | None = None
    anchor_day: int | None = None
    policy: ProrationPolicy | None = None
    proration_base_price: Decimal | None = None
    add_on_ids: list[str] = Field(default_factory=list)
    add_ons: list[AddOnIn] = Field(default_factory=list)
    lang: Lang | None = None


class FromInvoiceCreate(BaseModel):
    activation_date: dt.date
    invoice_amount: Decimal
    product_id: str | None = None
    anchor_day: int | None = None
    policy: ProrationPolicy | None = None
    add_on_ids: list[str] = Field(default_factory=list)
    add_ons: list[AddOnIn] = Field(default_factory=list)
    lang: Lang | None = None


class AddOnBreakdownOut(ApiModel):
    label: str
    before_tax: Decimal
    vat: Decimal
    after_tax: Decimal


class ProrationOut(ApiModel):
    policy: ProrationPolicy
    activation_date: dt.date
    cycle_start: dt.date
    cycle_end: dt.date
    next_cycle_end: dt.date
    cycle_days: int
    pro_days: int
    ratio: Decimal
    vat_rate: Decimal
    monthly_before_tax: Decimal
    monthly_after_tax: Decimal
    proration_base_price: Decimal
    proration_before_tax: Decimal
    proration_after_tax: Decimal
    add_ons: list[AddOnBreakdownOut]
    add_ons_total_before_tax: Decimal
    add_ons_after_tax: Decimal
    invoice_before_tax: Decimal
    invoice_vat: Decimal
    invoice_after_tax: Decimal


class QuoteOut(BaseModel):
    product_id: str | None
    anchor_day: int
    result: ProrationOut
    script: str
    script_plain: str

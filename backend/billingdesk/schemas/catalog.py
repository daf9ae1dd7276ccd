from __future__ import annotations

from decimal import Decimal

from billingdesk.models.enums import ProrationPolicy
from billingdesk.schemas.common import ApiModel, LocalizedText


class ProductOut(ApiModel):
    id: str
    label: LocalizedText
    anchor_day: int
    default_base_price: Decimal
    policy: ProrationPolicy
    description: LocalizedText


class AddOnOut(ApiModel):
    id: str
    label: LocalizedText
    price: Decimal
    explain: LocalizedText

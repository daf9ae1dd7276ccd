from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from billingdesk.services.proration import VAT_RATE

VOICE_RATE = Decimal("0.4616")


@dataclass(frozen=True)
class PriceLine:
    net: Decimal
    vat: Decimal  # included in gross
    gross: Decimal
    after_addon: Decimal


def _finite_or_zero(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        x = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")
    return x if x.is_finite() else Decimal("0")


def compute_line(base: Any, multiplier: Decimal, addon: Any = 0) -> PriceLine:
    net = _finite_or_zero(base)
    gross = net * multiplier
    return PriceLine(net=net, vat=gross - net, gross=gross, after_addon=gross + _finite_or_zero(addon))


def build_all_lines(base: Any, vat: Decimal = VAT_RATE, addon: Any = 0) -> dict[str, PriceLine]:
    """
    Price lines for a net base A: data/A at 1+VAT, voice at 1+46.16 %, and
    "Nos" halfway between the two.
    """
    m_data = Decimal("1") + vat
    m_voice = Decimal("1") + VOICE_RATE
    m_nos = (m_voice + m_data) / 2
    return {
        "A": compute_line(base, m_data, addon),
        "Nos": compute_line(base, m_nos, addon),
        "Voice": compute_line(base, m_voice, addon),
        "Data": compute_line(base, m_data, addon),
    }

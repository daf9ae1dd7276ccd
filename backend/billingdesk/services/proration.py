from __future__ import annotations

import datetime as dt
import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from billingdesk.models.enums import ProrationPolicy
from billingdesk.services.billing_period import BillingPeriod, resolve_period
from billingdesk.services.dates import anchor_date, normalize_utc
from billingdesk.services.errors import InvalidAmount, InvalidAnchor, InvalidDate

logger = logging.getLogger(__name__)

VAT_RATE = Decimal("0.16")
MAX_AMOUNT_EXPONENT = 15  # amounts must stay below 1e16
FLAT_DIVISOR = 30  # ADSL/FTTH prorate per 30-day month whatever the cycle length

_ZERO = Decimal("0")
_ONE = Decimal("1")
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

_PRODUCT_POLICIES: dict[str, ProrationPolicy] = {
    "iew": ProrationPolicy.ANCHOR_TAX,
    "adsl": ProrationPolicy.FLAT_THIRTY,
    "ftth": ProrationPolicy.FLAT_THIRTY,
}


@dataclass(frozen=True)
class AddOnLine:
    label: str
    price: Decimal  # monthly, before tax


@dataclass(frozen=True)
class AddOnBreakdown:
    label: str
    before_tax: Decimal
    vat: Decimal
    after_tax: Decimal


@dataclass(frozen=True)
class ProrationResult:
    policy: ProrationPolicy
    activation_date: dt.date
    cycle_start: dt.date
    cycle_end: dt.date
    next_cycle_end: dt.date
    cycle_days: int
    # Effective values used for the money math (policy overrides applied).
    pro_days: int
    ratio: Decimal
    vat_rate: Decimal
    monthly_before_tax: Decimal
    monthly_after_tax: Decimal
    proration_base_price: Decimal
    proration_before_tax: Decimal
    proration_after_tax: Decimal
    add_ons: tuple[AddOnBreakdown, ...]
    add_ons_total_before_tax: Decimal
    add_ons_after_tax: Decimal
    invoice_before_tax: Decimal
    invoice_vat: Decimal
    invoice_after_tax: Decimal


@dataclass(frozen=True)
class _PolicyTerms:
    ratio: Decimal
    pro_days: int
    vat_rate: Decimal
    uses_proration_base: bool = False


def policy_for_product(product_id: str | None) -> ProrationPolicy:
    """iew -> ANCHOR_TAX, adsl/ftth -> FLAT_THIRTY, anything else -> RATIO."""
    if not product_id:
        return ProrationPolicy.RATIO
    return _PRODUCT_POLICIES.get(product_id.strip().lower(), ProrationPolicy.RATIO)


# --- validation -------------------------------------------------------------


def to_amount(value: Any, *, field: str = "amount") -> Decimal:
    """Coerce a caller-supplied price into a finite, non-negative Decimal."""
    if isinstance(value, bool):
        raise InvalidAmount(f"{field} must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmount(f"{field} must be a number") from None
    if not amount.is_finite():
        raise InvalidAmount(f"{field} must be finite")
    if amount < 0:
        raise InvalidAmount(f"{field} must be a non-negative number")
    if amount.adjusted() > MAX_AMOUNT_EXPONENT:
        raise InvalidAmount(f"{field} is too large")
    return amount


def validate_anchor_day(anchor_day: Any) -> int:
    if isinstance(anchor_day, bool) or not isinstance(anchor_day, int):
        raise InvalidAnchor("anchor_day must be an integer")
    if not 1 <= anchor_day <= 31:
        raise InvalidAnchor("anchor_day must be between 1 and 31")
    return anchor_day


def parse_activation(value: Any) -> dt.date:
    """Accepts an ISO YYYY-MM-DD string, a date or a datetime."""
    if isinstance(value, dt.date):
        return normalize_utc(value)
    if isinstance(value, str) and _ISO_DATE.fullmatch(value.strip()):
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError:
            raise InvalidDate(f"Invalid activation date: {value!r}") from None
    raise InvalidDate(f"Invalid activation date: {value!r}")


def _resolve(act: dt.date, anchor_day: int) -> BillingPeriod:
    try:
        return resolve_period(act, anchor_day)
    except (ValueError, OverflowError):
        # Cycle boundaries fall outside the supported calendar (year 1..9999).
        raise InvalidDate(f"Activation date out of range: {act.isoformat()}") from None


def _coerce_add_ons(add_ons: Iterable[AddOnLine | Mapping[str, Any]] | None) -> list[AddOnLine]:
    out: list[AddOnLine] = []
    for item in add_ons or ():
        if isinstance(item, AddOnLine):
            label, price = item.label, item.price
        else:
            label, price = item.get("label", ""), item.get("price")
        out.append(AddOnLine(label=str(label), price=to_amount(price, field=f"add-on {label!r} price")))
    return out


# --- policies ---------------------------------------------------------------


def _ratio_terms(period: BillingPeriod, anchor_day: int) -> _PolicyTerms:
    # Predates the tax split: amounts are taken as-is.
    return _PolicyTerms(ratio=period.ratio, pro_days=period.pro_days, vat_rate=_ZERO)


def _anchor_tax_terms(period: BillingPeriod, anchor_day: int) -> _PolicyTerms:
    act = period.activation_date
    if act == anchor_date(act.year, act.month, anchor_day):
        # Activation on the billing day: nothing partial to charge.
        return _PolicyTerms(ratio=_ZERO, pro_days=0, vat_rate=VAT_RATE)
    return _PolicyTerms(ratio=period.ratio, pro_days=period.pro_days, vat_rate=VAT_RATE)


def _flat_thirty_terms(period: BillingPeriod, anchor_day: int) -> _PolicyTerms:
    ratio = Decimal(period.pro_days) / Decimal(FLAT_DIVISOR)
    return _PolicyTerms(ratio=ratio, pro_days=period.pro_days, vat_rate=VAT_RATE, uses_proration_base=True)


_POLICY_TERMS: dict[ProrationPolicy, Callable[[BillingPeriod, int], _PolicyTerms]] = {
    ProrationPolicy.RATIO: _ratio_terms,
    ProrationPolicy.ANCHOR_TAX: _anchor_tax_terms,
    ProrationPolicy.FLAT_THIRTY: _flat_thirty_terms,
}


def _build_result(
    *,
    policy: ProrationPolicy,
    period: BillingPeriod,
    terms: _PolicyTerms,
    monthly: Decimal,
    proration_base: Decimal,
    add_ons: list[AddOnLine],
) -> ProrationResult:
    vat = terms.vat_rate
    gross = _ONE + vat

    proration = proration_base * terms.ratio
    lines = tuple(
        AddOnBreakdown(label=a.label, before_tax=a.price, vat=a.price * vat, after_tax=a.price * gross) for a in add_ons
    )
    add_ons_total = sum((a.price for a in add_ons), _ZERO)

    invoice_before_tax = monthly + proration + add_ons_total
    invoice_vat = invoice_before_tax * vat

    return ProrationResult(
        policy=policy,
        activation_date=period.activation_date,
        cycle_start=period.cycle_start,
        cycle_end=period.cycle_end,
        next_cycle_end=period.next_cycle_end,
        cycle_days=period.cycle_days,
        pro_days=terms.pro_days,
        ratio=terms.ratio,
        vat_rate=vat,
        monthly_before_tax=monthly,
        monthly_after_tax=monthly * gross,
        proration_base_price=proration_base,
        proration_before_tax=proration,
        proration_after_tax=proration * gross,
        add_ons=lines,
        add_ons_total_before_tax=add_ons_total,
        add_ons_after_tax=add_ons_total * gross,
        invoice_before_tax=invoice_before_tax,
        invoice_vat=invoice_vat,
        invoice_after_tax=invoice_before_tax + invoice_vat,
    )


# --- public API -------------------------------------------------------------


def compute_invoice(
    monthly_price: Any,
    activation: Any,
    anchor_day: Any,
    policy: ProrationPolicy | str = ProrationPolicy.RATIO,
    add_ons: Iterable[AddOnLine | Mapping[str, Any]] | None = None,
    *,
    proration_base_price: Any = None,
) -> ProrationResult:
    """
    First-invoice breakdown for a subscription activated mid-cycle.

    All inputs are validated before any computation; failures raise
    InvalidAmount / InvalidAnchor / InvalidDate. proration_base_price only
    applies to FLAT_THIRTY (prorate against the undiscounted price while the
    monthly line keeps the regular one).
    """
    monthly = to_amount(monthly_price, field="monthly_price")
    base_price = None if proration_base_price is None else to_amount(proration_base_price, field="proration_base_price")
    anchor = validate_anchor_day(anchor_day)
    act = parse_activation(activation)
    lines = _coerce_add_ons(add_ons)
    policy = ProrationPolicy(policy)

    period = _resolve(act, anchor)
    terms = _POLICY_TERMS[policy](period, anchor)
    proration_base = base_price if (terms.uses_proration_base and base_price is not None) else monthly

    result = _build_result(
        policy=policy,
        period=period,
        terms=terms,
        monthly=monthly,
        proration_base=proration_base,
        add_ons=lines,
    )
    logger.debug(
        "proration_computed: policy=%s anchor_day=%d activation=%s cycle_end=%s pro_days=%d ratio=%s invoice=%s",
        policy.value,
        anchor,
        act.isoformat(),
        result.cycle_end.isoformat(),
        result.pro_days,
        result.ratio,
        result.invoice_after_tax,
    )
    return result


def compute_from_full_invoice(
    invoice_amount: Any,
    activation: Any,
    anchor_day: Any,
    policy: ProrationPolicy | str = ProrationPolicy.RATIO,
    add_ons: Iterable[AddOnLine | Mapping[str, Any]] | None = None,
) -> ProrationResult:
    """
    Derive the regular monthly fee from this month's full invoice.

    invoice = (monthly * (1 + ratio) + addons) * (1 + vat)
      => monthly = (invoice / (1 + vat) - addons) / (1 + ratio)
    """
    invoice = to_amount(invoice_amount, field="invoice_amount")
    if invoice == 0:
        raise InvalidAmount("invoice_amount must be a positive number")
    anchor = validate_anchor_day(anchor_day)
    act = parse_activation(activation)
    lines = _coerce_add_ons(add_ons)
    policy = ProrationPolicy(policy)

    terms = _POLICY_TERMS[policy](_resolve(act, anchor), anchor)
    add_ons_total = sum((a.price for a in lines), _ZERO)
    monthly = (invoice / (_ONE + terms.vat_rate) - add_ons_total) / (_ONE + terms.ratio)
    if monthly < 0:
        raise InvalidAmount("add-ons exceed the invoice amount")

    return compute_invoice(monthly, act, anchor, policy, lines)

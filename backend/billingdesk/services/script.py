from __future__ import annotations

import datetime as dt
import re
from decimal import ROUND_HALF_UP, Decimal

from billingdesk.models.enums import Lang
from billingdesk.services.proration import ProrationResult

LRM = "\u200e"


def q_jd(x: Decimal) -> Decimal:
    return x.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)


def fmt3(x: Decimal) -> str:
    return f"{q_jd(x):.3f}"


def dmy(d: dt.date) -> str:
    return d.strftime("%d-%m-%Y")


def _pct(rate: Decimal) -> str:
    s = f"{rate * 100:f}"
    return s.rstrip("0").rstrip(".") if "." in s else s


def _money(x: Decimal, currency: str) -> str:
    # LRM keeps "JD 1.000" left-to-right inside Arabic text.
    return f"{currency} {fmt3(x)}{LRM}"


def build_script(result: ProrationResult, lang: Lang | str = Lang.AR, *, currency: str = "JD") -> str:
    """
    Ready-to-send explanation of a first invoice (markdown bold, LRM marks).

    Amounts are the after-tax figures; for RATIO they equal the before-tax ones.
    """
    lang = Lang(lang)
    start = dmy(result.activation_date)
    end = dmy(result.cycle_end)
    nxt = dmy(result.next_cycle_end)

    invoice = _money(result.invoice_after_tax, currency)
    monthly = _money(result.monthly_after_tax, currency)
    pro = _money(result.proration_after_tax, currency)
    recurring = _money(result.monthly_after_tax + result.add_ons_after_tax, currency)

    if lang == Lang.AR:
        text = (
            f"أوضّح لحضرتك أن **قيمة فاتورة هذا الشهر هي {invoice}**. "
            f"تتضمن هذه الفاتورة **نسبة وتناسب بقيمة {pro}** عن المدة من {start} حتى {end}، "
            f"إضافةً إلى **قيمة الاشتراك الأساسية لهذا الشهر {monthly}** عن المدة من {end} حتى {nxt}."
        )
        if result.add_ons:
            labels = "، ".join(a.label for a in result.add_ons)
            text += f" كما تتضمن الفاتورة إضافات بقيمة {_money(result.add_ons_after_tax, currency)} ({labels})."
        if result.vat_rate:
            text += f" جميع المبالغ شاملة ضريبة المبيعات {_pct(result.vat_rate)}%."
        text += f" ابتداءً من الفاتورة القادمة ستصدر القيمة الشهرية كما تم الاتفاق ({recurring}). تاريخ إصدار الفاتورة: {end}."
        return text

    text = (
        f"Just to clarify, **this month's invoice is {invoice}**. "
        f"It includes a **proration of {pro}** for the period from {start} to {end}, "
        f"plus the **base subscription for this month of {monthly}** covering {end} to {nxt}."
    )
    if result.add_ons:
        labels = ", ".join(a.label for a in result.add_ons)
        text += f" It also includes add-ons totalling {_money(result.add_ons_after_tax, currency)} ({labels})."
    if result.vat_rate:
        text += f" All amounts include {_pct(result.vat_rate)}% VAT."
    text += f" Starting next invoice, the monthly amount will be {recurring}. Invoice date: {end}."
    return text


def clean_script(text: str) -> str:
    """Clipboard form: no markdown bold, no LRM, tidy spacing before punctuation."""
    s = text.replace("**", "").replace(LRM, "")
    s = re.sub(r"\s+([،:])", r"\1", s)
    s = re.sub(r"\s{2,}", " ", s)
    return s.strip()

from __future__ import annotations

import enum


class ProrationPolicy(str, enum.Enum):
    RATIO = "RATIO"  # monthly * days ratio, no tax split
    ANCHOR_TAX = "ANCHOR_TAX"  # Internet Everywhere: net base + VAT, zero proration on anchor day
    FLAT_THIRTY = "FLAT_THIRTY"  # ADSL/FTTH: pro_days / 30, optional undiscounted proration base


class Lang(str, enum.Enum):
    AR = "ar"
    EN = "en"

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from billingdesk.models.enums import Lang, ProrationPolicy
from billingdesk.services.proration import AddOnLine, policy_for_product


class CatalogLookupError(KeyError):
    pass


@dataclass(frozen=True)
class Product:
    id: str
    label: dict[str, str]
    anchor_day: int
    default_base_price: Decimal
    description: dict[str, str]

    @property
    def policy(self) -> ProrationPolicy:
        return policy_for_product(self.id)


@dataclass(frozen=True)
class AddOn:
    id: str
    label: dict[str, str]
    price: Decimal
    explain: dict[str, str]


PRODUCTS: tuple[Product, ...] = (
    Product(
        id="iew",
        label={"en": "Internet Everywhere", "ar": "إنترنت في كل مكان"},
        anchor_day=15,
        default_base_price=Decimal("29"),
        description={
            "en": "Mobile broadband with a mid-month billing anchor.",
            "ar": "خدمة إنترنت متنقلة بدورة فوترة في منتصف الشهر.",
        },
    ),
    Product(
        id="mobile-postpaid",
        label={"en": "Mobile Postpaid", "ar": "موبايل فوترة"},
        anchor_day=15,
        default_base_price=Decimal("18"),
        description={
            "en": "Standard postpaid mobile plan aligned to day 15.",
            "ar": "باقة موبايل مفوترة بمرتكز فوترة على اليوم 15.",
        },
    ),
    Product(
        id="ftth",
        label={"en": "FTTH", "ar": "ألياف ضوئية"},
        anchor_day=1,
        default_base_price=Decimal("35"),
        description={
            "en": "Fiber to the home with a first-of-month anchor.",
            "ar": "خدمة ألياف منزلية بمرتكز فوترة في اليوم الأول من الشهر.",
        },
    ),
    Product(
        id="adsl",
        label={"en": "ADSL", "ar": "خدمة ADSL"},
        anchor_day=1,
        default_base_price=Decimal("22"),
        description={
            "en": "Legacy broadband aligned with first-of-month billing.",
            "ar": "إنترنت تقليدي مع فوترة تبدأ في بداية الشهر.",
        },
    ),
)

ADD_ONS: tuple[AddOn, ...] = (
    AddOn(
        id="anghami",
        label={"en": "Anghami", "ar": "أنغامي"},
        price=Decimal("2"),
        explain={"en": "Music streaming add-on applied monthly.", "ar": "إضافة بث موسيقي تُطبق شهرياً."},
    ),
    AddOn(
        id="tod-mobile",
        label={"en": "TOD Mobile", "ar": "TOD موبايل"},
        price=Decimal("6"),
        explain={
            "en": "Mobile-only TOD subscription (up to 6 JD).",
            "ar": "اشتراك TOD على الأجهزة المحمولة (حتى 6 دنانير).",
        },
    ),
    AddOn(
        id="tod-view",
        label={"en": "TOD View", "ar": "TOD View"},
        price=Decimal("10"),
        explain={"en": "Streaming-only TOD View package.", "ar": "باقة TOD View للبث فقط."},
    ),
    AddOn(
        id="tod-1k",
        label={"en": "TOD 1K", "ar": "TOD 1K"},
        price=Decimal("12"),
        explain={"en": "TOD 1K entertainment bundle.", "ar": "باقة TOD 1K الترفيهية."},
    ),
    AddOn(
        id="tod-4k",
        label={"en": "TOD 4K", "ar": "TOD 4K"},
        price=Decimal("16"),
        explain={"en": "TOD 4K premium experience add-on.", "ar": "إضافة TOD 4K المميزة."},
    ),
)

_PRODUCTS_BY_ID = {p.id: p for p in PRODUCTS}
_ADD_ONS_BY_ID = {a.id: a for a in ADD_ONS}


def get_product(product_id: str) -> Product:
    try:
        return _PRODUCTS_BY_ID[product_id]
    except KeyError:
        raise CatalogLookupError(f"Unknown product: {product_id}") from None


def get_add_on(add_on_id: str) -> AddOn:
    try:
        return _ADD_ONS_BY_ID[add_on_id]
    except KeyError:
        raise CatalogLookupError(f"Unknown add-on: {add_on_id}") from None


def add_on_lines(add_on_ids: Iterable[str], lang: Lang = Lang.EN) -> list[AddOnLine]:
    """Catalog add-ons as engine input lines, in the order given."""
    lang = Lang(lang)
    return [AddOnLine(label=a.label[lang.value], price=a.price) for a in (get_add_on(i) for i in add_on_ids)]

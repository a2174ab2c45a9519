# 💰 aliviral/infrastructure/parsers/extractors/price.py
"""
💰 Ціни та знижка.

🔹 Поточна ціна: state price-модуль → DOM → JSON-LD offer → meta → legacy regex → `pdp_npi`.
🔹 Стара ціна і знижка — аналогічні каскади; знижку можна обчислити з двох цін.
🔹 Голі числа форматуються символом валюти (`19.99` + USD → `$19.99`),
   рядки з власним маркером валюти лишаються як є.
🔹 `pdp_npi` — query-параметр з полями через `!`: після 3-літерного коду валюти
   йдуть одна-дві суми; менша з двох завжди поточна.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import math	# 🔢 Округлення знижки
import re	# 🧵 Legacy-патерни, розбір чисел
from dataclasses import dataclass	# 🧱 Розкодований pdp_npi
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple	# 🧰 Типізація

from .base import _scalar_to_str, logger
from .json_ld import product_offer_price

if TYPE_CHECKING:
    from .context import ExtractionContext

PriceExtractor = Callable[["ExtractionContext"], Optional[str]]

# ================================
# 💱 ВАЛЮТИ
# ================================
DEFAULT_CURRENCY = "USD"

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "RUB": "₽",
    "INR": "₹",
    "BRL": "R$",
    "KRW": "₩",
    "PLN": "zł",
    "UAH": "₴",
    "TRY": "₺",
    "ILS": "₪",
    "VND": "₫",
}	# 💱 Код → символ

_CURRENCY_MARKER_RE = re.compile(r"[^\d\s.,\-]")	# 💱 Будь-що, крім цифр і роздільників
_NUMBER_RE = re.compile(r"\d[\d\s.,]*")
_CURRENCY_CODE_RE = re.compile(r"^[A-Z]{3}$")
_NUMERIC_FIELD_RE = re.compile(r"^\d+(?:\.\d+)?$")


def has_currency_marker(value: str) -> bool:
    return bool(_CURRENCY_MARKER_RE.search(value))


def format_price(value: Optional[str], currency: Optional[str] = None) -> Optional[str]:
    """
    💱 Додає символ/код валюти до голого числа.

    `("19.99", "USD")` → `"$19.99"`, `("19.99", "CHF")` → `"CHF 19.99"`,
    `("US $19.99", ...)` → без змін.
    """
    text = (value or "").strip()
    if not text:
        return None
    if has_currency_marker(text):
        return text
    code = (currency or DEFAULT_CURRENCY).upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    return f"{symbol}{text}" if symbol else f"{code} {text}"


def parse_amount(value: Optional[str]) -> Optional[float]:
    """🔢 Перше число з рядка ціни (`"US $1,299.50"` → 1299.5, `"12,5 €"` → 12.5, `"1.299"` → 1299)."""
    match = _NUMBER_RE.search(value or "")
    if not match:
        return None
    number = re.sub(r"\s", "", match.group(0)).rstrip(".,")
    if "," in number and "." in number:
        if number.rfind(",") > number.rfind("."):	# 🇪🇺 1.299,50
            number = number.replace(".", "").replace(",", ".")
        else:
            number = number.replace(",", "")
    elif "," in number:
        head, _, tail = number.partition(",")
        if number.count(",") == 1 and 1 <= len(tail) <= 2:	# 🇪🇺 12,5 / 12,99
            number = f"{head}.{tail}"
        else:
            number = number.replace(",", "")
    elif number.count(".") > 1 or len(number.partition(".")[2]) == 3:	# 🇪🇺 1.299 / 1.299.000
        number = number.replace(".", "")
    try:
        return float(number)
    except ValueError:
        return None


def compute_discount(original: Optional[str], current: Optional[str]) -> Optional[str]:
    """📉 `round((orig - cur) / orig * 100)` як рядок; None, якщо ціни не числові або orig ≤ cur."""
    orig = parse_amount(original)
    cur = parse_amount(current)
    if orig is None or cur is None or orig <= 0 or cur > orig:
        return None
    percent = math.floor((orig - cur) / orig * 100 + 0.5)	# 🔢 Округлення half-up
    return str(int(percent))


# ================================
# 🔐 pdp_npi
# ================================
@dataclass(frozen=True)
class PdpNpiPrice:
    """🔐 Розкодовані поля `pdp_npi`."""

    current: str
    original: Optional[str]
    currency: str

    def formatted_current(self) -> str:
        return format_price(self.current, self.currency) or self.current

    def formatted_original(self) -> Optional[str]:
        return format_price(self.original, self.currency) if self.original else None


def decode_pdp_npi(raw: Optional[str]) -> Optional[PdpNpiPrice]:
    """
    🔐 Розбирає значення `pdp_npi`.

    Очікує вже URL-декодоване значення (`ExtractionContext.query_param`);
    повторно `%xx` не декодується.

    Перше поле з трьох великих літер — код валюти; наступні одне-два числові поля
    — суми. Якщо їх дві й перша більша, вони міняються місцями.
    """
    if not raw:
        return None
    fields = raw.split("!")
    for idx, field in enumerate(fields):
        if not _CURRENCY_CODE_RE.match(field):
            continue
        amounts = []
        for candidate in fields[idx + 1 : idx + 3]:
            if not _NUMERIC_FIELD_RE.match(candidate):
                break
            amounts.append(candidate)
        if not amounts:
            return None
        current, original = amounts[0], (amounts[1] if len(amounts) > 1 else None)
        if original is not None and float(current) > float(original):
            current, original = original, current
        return PdpNpiPrice(current=current, original=original, currency=field)
    return None


def pdp_npi_from_context(ctx: "ExtractionContext") -> Optional[PdpNpiPrice]:
    return decode_pdp_npi(ctx.query_param("pdp_npi"))


# ================================
# 💱 ВИЗНАЧЕННЯ ВАЛЮТИ
# ================================
def detect_currency(ctx: "ExtractionContext") -> Optional[str]:
    """💱 JSON-LD `priceCurrency` → meta → state `currencyCode` → `pdp_npi`."""
    offer = product_offer_price(ctx.json_ld_product)
    candidates = (
        offer.currency if offer else None,
        ctx.meta("product:price:currency", "og:price:currency"),
        ctx.state_key("currencyCode"),
    )
    for candidate in candidates:
        if candidate and _CURRENCY_CODE_RE.match(candidate.strip().upper()):
            return candidate.strip().upper()
    npi = pdp_npi_from_context(ctx)
    return npi.currency if npi else None


# ================================
# 💰 ПОТОЧНА ЦІНА
# ================================
CURRENT_PRICE_STATE_PATHS = (
    "priceModule.formatedActivityPrice",
    "priceModule.formatedPrice",
    "priceModule.minActivityAmount.formatedAmount",
    "priceModule.minAmount.formatedAmount",
    "skuModule.skuPriceList.0.skuVal.skuActivityAmount.formatedAmount",
    "skuModule.skuPriceList.0.skuVal.skuAmount.formatedAmount",
    "priceComponent.discountPrice.minActivityAmount.formatedAmount",
    "priceComponent.discountPrice.minAmount.formatedAmount",
)

CURRENT_PRICE_SELECTORS = (
    ".product-price-current",
    ".uniform-banner-box-price",
    '[class*="price--currentPriceText"]',
    '[itemprop="price"]',
)

CURRENT_PRICE_PATTERNS = (
    re.compile(r'"formatedAmount"\s*:\s*"([^"]+)"'),
    re.compile(r'"actPriceText"\s*:\s*"([^"]+)"'),
    re.compile(r'"formatedActivityPrice"\s*:\s*"([^"]+)"'),
    re.compile(r'"minPrice"\s*:\s*"?([\d.,]+)'),
    re.compile(r'"salePrice"\s*:\s*"?([\d.,]+)'),
)


def current_price_from_state(ctx: "ExtractionContext") -> Optional[str]:
    return format_price(ctx.state_text(*CURRENT_PRICE_STATE_PATHS), detect_currency(ctx))


def current_price_from_dom(ctx: "ExtractionContext") -> Optional[str]:
    return format_price(ctx.select_text(*CURRENT_PRICE_SELECTORS), detect_currency(ctx))


def current_price_from_json_ld(ctx: "ExtractionContext") -> Optional[str]:
    offer = product_offer_price(ctx.json_ld_product)
    if offer is None:
        return None
    return format_price(offer.amount, offer.currency or detect_currency(ctx))


def current_price_from_meta(ctx: "ExtractionContext") -> Optional[str]:
    amount = ctx.meta("product:price:amount", "og:price:amount", "price")
    return format_price(amount, detect_currency(ctx))


def current_price_from_regex(ctx: "ExtractionContext") -> Optional[str]:
    for pattern in CURRENT_PRICE_PATTERNS:
        value = ctx.search(pattern)
        if value:
            return format_price(value, detect_currency(ctx))
    return None


def current_price_from_pdp_npi(ctx: "ExtractionContext") -> Optional[str]:
    npi = pdp_npi_from_context(ctx)
    if npi is None:
        return None
    logger.debug("🔐 Ціну розкодовано з pdp_npi: %s %s", npi.currency, npi.current)
    return npi.formatted_current()


CURRENT_PRICE_EXTRACTORS: Tuple[PriceExtractor, ...] = (
    current_price_from_state,
    current_price_from_dom,
    current_price_from_json_ld,
    current_price_from_meta,
    current_price_from_regex,
    current_price_from_pdp_npi,
)


# ================================
# 🏷️ СТАРА ЦІНА
# ================================
ORIGINAL_PRICE_SELECTORS = (
    ".product-price-original",
    '[class*="price--originalText"]',
)

ORIGINAL_PRICE_PATTERNS = (
    re.compile(r'"oldPriceText"\s*:\s*"([^"]+)"'),
    re.compile(r'"origPriceText"\s*:\s*"([^"]+)"'),
)


def original_price_from_state(ctx: "ExtractionContext") -> Optional[str]:
    """🏷️ `formatedPrice` — стара ціна лише поруч з акційною; далі `maxAmount` / `origPrice`."""
    value = None
    if ctx.state_text("priceModule.formatedActivityPrice"):
        value = ctx.state_text("priceModule.formatedPrice")
    value = value or ctx.state_text(
        "priceModule.maxAmount.formatedAmount",
        "priceComponent.origPrice.minAmount.formatedAmount",
        "skuModule.skuPriceList.0.skuVal.skuAmount.formatedAmount",
    )
    current = ctx.state_text(*CURRENT_PRICE_STATE_PATHS)
    if value and current and value.strip() == current.strip():	# 🚫 Це та сама ціна
        return None
    return format_price(value, detect_currency(ctx))


def original_price_from_dom(ctx: "ExtractionContext") -> Optional[str]:
    return format_price(ctx.select_text(*ORIGINAL_PRICE_SELECTORS), detect_currency(ctx))


def original_price_from_regex(ctx: "ExtractionContext") -> Optional[str]:
    for pattern in ORIGINAL_PRICE_PATTERNS:
        value = ctx.search(pattern)
        if value:
            return format_price(value, detect_currency(ctx))
    return None


def original_price_from_pdp_npi(ctx: "ExtractionContext") -> Optional[str]:
    npi = pdp_npi_from_context(ctx)
    return npi.formatted_original() if npi else None


ORIGINAL_PRICE_EXTRACTORS: Tuple[PriceExtractor, ...] = (
    original_price_from_state,
    original_price_from_dom,
    original_price_from_regex,
    original_price_from_pdp_npi,
)


# ================================
# 📉 ЗНИЖКА
# ================================
DISCOUNT_PATTERNS = (
    re.compile(r'"discount"\s*:\s*"?(\d+)"?'),
    re.compile(r'"discountRate"\s*:\s*"?(\d+)"?'),
)

_DIGITS_RE = re.compile(r"\d+")


def _digits(value: Optional[str]) -> Optional[str]:
    match = _DIGITS_RE.search(value or "")
    return match.group(0) if match else None


def discount_from_state(ctx: "ExtractionContext") -> Optional[str]:
    raw = ctx.state_value("priceModule.discount", "priceModule.discountRate", "priceComponent.discount")
    return _digits(_scalar_to_str(raw))


def discount_from_dom(ctx: "ExtractionContext") -> Optional[str]:
    return _digits(ctx.select_text(".product-price-mark", '[class*="price--discount"]'))


def discount_from_regex(ctx: "ExtractionContext") -> Optional[str]:
    for pattern in DISCOUNT_PATTERNS:
        value = ctx.search(pattern)
        if value:
            return value
    return None


DISCOUNT_EXTRACTORS: Tuple[PriceExtractor, ...] = (
    discount_from_state,
    discount_from_dom,
    discount_from_regex,
)


__all__ = [
    "CURRENCY_SYMBOLS",
    "CURRENT_PRICE_EXTRACTORS",
    "DISCOUNT_EXTRACTORS",
    "ORIGINAL_PRICE_EXTRACTORS",
    "PdpNpiPrice",
    "compute_discount",
    "decode_pdp_npi",
    "detect_currency",
    "format_price",
    "parse_amount",
]

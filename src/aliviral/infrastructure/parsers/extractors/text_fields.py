# 🏷️ aliviral/infrastructure/parsers/extractors/text_fields.py
"""
🏷️ Текстові поля товару: назва, опис, рейтинг, кількість відгуків.

Кожне поле — кортеж екстракторів у порядку пріоритету для `first_present`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re	# 🧵 Очищення назви та legacy-патерни
from typing import TYPE_CHECKING, Callable, Optional, Tuple	# 🧰 Типізація

from .base import _norm_ws
from .json_ld import product_description, product_name, product_rating, product_review_count

if TYPE_CHECKING:
    from .context import ExtractionContext

TextExtractor = Callable[["ExtractionContext"], Optional[str]]

_VENDOR_RE = re.compile(r"aliexpress", re.IGNORECASE)


# ================================
# 🏷️ НАЗВА
# ================================
TITLE_SELECTORS = (
    "h1.product-title-text",
    'h1[data-pl="product-title"]',
    '[itemprop="name"]',
    ".product-title",
)

TITLE_STATE_PATHS = (
    "data.titleModule.subject",
    "titleModule.subject",
    "data.productInfoComponent.subject",
    "productInfoComponent.subject",
    "pageModule.title",
)


def clean_title(raw: Optional[str]) -> str:
    """🧹 Текст до першого `|`, без `AliExpress` і роздільників ` - `, зі стиснутими пробілами."""
    title = (raw or "").split("|", 1)[0]
    title = _VENDOR_RE.sub("", title, count=1)
    title = title.replace(" - ", "")
    return _norm_ws(title)


def title_from_dom(ctx: "ExtractionContext") -> Optional[str]:
    return ctx.select_text(*TITLE_SELECTORS)


def title_from_json_ld(ctx: "ExtractionContext") -> Optional[str]:
    return product_name(ctx.json_ld_product)


def title_from_state(ctx: "ExtractionContext") -> Optional[str]:
    return ctx.state_text(*TITLE_STATE_PATHS)


def title_from_meta(ctx: "ExtractionContext") -> Optional[str]:
    return ctx.meta("og:title", "twitter:title")


def title_from_title_tag(ctx: "ExtractionContext") -> Optional[str]:
    tag = ctx.soup.find("title")
    return _norm_ws(tag.get_text()) if tag is not None else None


TITLE_EXTRACTORS: Tuple[TextExtractor, ...] = (
    title_from_dom,
    title_from_json_ld,
    title_from_state,
    title_from_meta,
    title_from_title_tag,
)


# ================================
# 📝 ОПИС
# ================================
def description_from_meta(ctx: "ExtractionContext") -> Optional[str]:
    return ctx.meta("description")


def description_from_og(ctx: "ExtractionContext") -> Optional[str]:
    return ctx.meta("og:description")


def description_from_json_ld(ctx: "ExtractionContext") -> Optional[str]:
    return product_description(ctx.json_ld_product)


DESCRIPTION_EXTRACTORS: Tuple[TextExtractor, ...] = (
    description_from_meta,
    description_from_og,
    description_from_json_ld,
)


# ================================
# ⭐ РЕЙТИНГ
# ================================
_RATING_PATTERNS = (
    re.compile(r'"averageStar"\s*:\s*"?([\d.]+)'),
    re.compile(r'"averageStarRate"\s*:\s*"?([\d.]+)'),
    re.compile(r'"starRating"\s*:\s*"?([\d.]+)'),
)


def rating_from_state(ctx: "ExtractionContext") -> Optional[str]:
    return ctx.state_key("averageStar", "averageStarRate", "starRating")


def rating_from_json_ld(ctx: "ExtractionContext") -> Optional[str]:
    return product_rating(ctx.json_ld_product)


def rating_from_regex(ctx: "ExtractionContext") -> Optional[str]:
    for pattern in _RATING_PATTERNS:
        value = ctx.search(pattern)
        if value:
            return value
    return None


RATING_EXTRACTORS: Tuple[TextExtractor, ...] = (
    rating_from_state,
    rating_from_json_ld,
    rating_from_regex,
)


# ================================
# 💬 ВІДГУКИ
# ================================
_REVIEWS_PATTERNS = (
    re.compile(r'"totalValidNum"\s*:\s*"?(\d+)'),
    re.compile(r'"totalFeedbackCount"\s*:\s*"?(\d+)'),
    re.compile(r'"reviewCount"\s*:\s*"?(\d+)'),
)


def reviews_from_state(ctx: "ExtractionContext") -> Optional[str]:
    return ctx.state_key("totalValidNum", "totalFeedbackCount", "reviewCount")


def reviews_from_json_ld(ctx: "ExtractionContext") -> Optional[str]:
    return product_review_count(ctx.json_ld_product)


def reviews_from_regex(ctx: "ExtractionContext") -> Optional[str]:
    for pattern in _REVIEWS_PATTERNS:
        value = ctx.search(pattern)
        if value:
            return value
    return None


REVIEWS_EXTRACTORS: Tuple[TextExtractor, ...] = (
    reviews_from_state,
    reviews_from_json_ld,
    reviews_from_regex,
)


__all__ = [
    "DESCRIPTION_EXTRACTORS",
    "RATING_EXTRACTORS",
    "REVIEWS_EXTRACTORS",
    "TITLE_EXTRACTORS",
    "clean_title",
]

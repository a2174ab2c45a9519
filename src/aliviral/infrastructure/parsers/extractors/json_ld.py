# 🧾 aliviral/infrastructure/parsers/extractors/json_ld.py
"""
🧾 JSON-LD — пошук вузла `Product` та читання його полів.

🔹 Збирає усі `<script type="application/ld+json">`; зламані блоки пропускаються.
🔹 DFS через dict/list (включно з `@graph`) до першого вузла з `@type` ∋ `Product`.
🔹 Віддає назву, опис, зображення, ціну першої пропозиції з валютою та рейтинг.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup	# 🥣 DOM-дерево
from bs4.element import Tag	# 🧱 Тип DOM-вузла

# 🔠 Системні імпорти
from dataclasses import dataclass	# 🧱 Ціна з валютою
from typing import Any, Dict, Iterator, List, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from aliviral.errors import ParseFailure	# 🚨 Локально відновлювана помилка

from .base import _as_list, _norm_ws, _scalar_to_str, _try_json_loads, logger

JSON_LD_SELECTOR = 'script[type="application/ld+json"]'
_MAX_DEPTH = 30


@dataclass(frozen=True)
class OfferPrice:
    """💰 Ціна першої пропозиції та її валюта (якщо вказана)."""

    amount: str
    currency: Optional[str] = None


# ================================
# 📄 БЛОКИ JSON-LD
# ================================
def iter_json_ld_blocks(soup: BeautifulSoup) -> Iterator[Any]:
    """📄 Розібрані JSON-LD скрипти сторінки (зламані → debug-лог і пропуск)."""
    for idx, script in enumerate(soup.select(JSON_LD_SELECTOR), start=1):
        if not isinstance(script, Tag):
            continue
        raw = (script.string or script.get_text() or "").strip()
        obj = _try_json_loads(raw)
        if obj is None:
            if raw:
                failure = ParseFailure(f"JSON-LD block #{idx}")
                logger.debug("📄 %s", failure.message, extra=failure.to_log_extra())
            continue
        yield obj


def _is_product(node: Dict[str, Any]) -> bool:
    return any(str(t).strip().lower() == "product" for t in _as_list(node.get("@type")))


def find_product_node(obj: Any, _depth: int = 0) -> Optional[Dict[str, Any]]:
    """🔎 DFS: перший dict, у якого `@type` дорівнює або містить `Product`."""
    if _depth > _MAX_DEPTH:
        return None
    if isinstance(obj, dict):
        if _is_product(obj):
            return obj
        children: List[Any] = list(obj.values())
    elif isinstance(obj, list):
        children = obj
    else:
        return None
    for child in children:
        found = find_product_node(child, _depth + 1)
        if found is not None:
            return found
    return None


def find_json_ld_product(soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
    """📦 Перший Product серед усіх JSON-LD блоків сторінки."""
    for block in iter_json_ld_blocks(soup):
        product = find_product_node(block)
        if product is not None:
            logger.debug("📦 JSON-LD Product знайдено: %s", str(product.get("name", ""))[:60])
            return product
    return None


# ================================
# 🏷️ ПОЛЯ ПРОДУКТУ
# ================================
def product_name(product: Optional[Dict[str, Any]]) -> Optional[str]:
    if not product:
        return None
    return _scalar_to_str(product.get("name"))


def product_description(product: Optional[Dict[str, Any]]) -> Optional[str]:
    """📝 Опис (рядок або обʼєкт з `@value`), очищений від HTML."""
    if not product:
        return None
    description = product.get("description")
    if isinstance(description, dict):
        description = description.get("@value") or description.get("value") or description.get("text")
    if not isinstance(description, str) or not description.strip():
        return None
    cleaned = _norm_ws(BeautifulSoup(description, "lxml").get_text(" ", strip=True))
    return cleaned or None


def product_images(product: Optional[Dict[str, Any]]) -> List[str]:
    """🖼️ Сирі URL з поля `image` (рядок, список або `{url|contentUrl}`)."""
    if not product:
        return []
    urls: List[str] = []
    for item in _as_list(product.get("image")):
        if isinstance(item, str):
            urls.append(item)
        elif isinstance(item, dict):
            candidate = item.get("url") or item.get("contentUrl")
            if isinstance(candidate, str):
                urls.append(candidate)
    return urls


def _first_offer(offers: Any) -> Optional[Dict[str, Any]]:
    """💸 Перша пропозиція: список, одиночний dict або AggregateOffer з вкладеними `offers`."""
    for offer in _as_list(offers):
        if not isinstance(offer, dict):
            continue
        nested = offer.get("offers")
        if nested and not any(offer.get(key) not in (None, "") for key in ("price", "lowPrice", "highPrice")):
            inner = _first_offer(nested)
            if inner is not None:
                return inner
        return offer
    return None


def product_offer_price(product: Optional[Dict[str, Any]]) -> Optional[OfferPrice]:
    """💰 `price` → `lowPrice` → `highPrice` → `priceSpecification.price` першої пропозиції."""
    if not product:
        return None
    offer = _first_offer(product.get("offers"))
    if offer is None:
        return None

    spec = offer.get("priceSpecification")
    spec_first = _as_list(spec)[0] if _as_list(spec) else None
    spec_price = spec_first.get("price") if isinstance(spec_first, dict) else None

    for raw in (offer.get("price"), offer.get("lowPrice"), offer.get("highPrice"), spec_price):
        amount = _scalar_to_str(raw)
        if amount:
            currency = _scalar_to_str(offer.get("priceCurrency"))
            if currency is None and isinstance(spec_first, dict):
                currency = _scalar_to_str(spec_first.get("priceCurrency"))
            return OfferPrice(amount=amount, currency=currency.upper() if currency else None)
    return None


def product_rating(product: Optional[Dict[str, Any]]) -> Optional[str]:
    if not product or not isinstance(product.get("aggregateRating"), dict):
        return None
    return _scalar_to_str(product["aggregateRating"].get("ratingValue"))


def product_review_count(product: Optional[Dict[str, Any]]) -> Optional[str]:
    if not product or not isinstance(product.get("aggregateRating"), dict):
        return None
    rating = product["aggregateRating"]
    return _scalar_to_str(rating.get("reviewCount")) or _scalar_to_str(rating.get("ratingCount"))


__all__ = [
    "JSON_LD_SELECTOR",
    "OfferPrice",
    "find_json_ld_product",
    "find_product_node",
    "iter_json_ld_blocks",
    "product_description",
    "product_images",
    "product_name",
    "product_offer_price",
    "product_rating",
    "product_review_count",
]

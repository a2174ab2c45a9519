# 🖼️ aliviral/infrastructure/parsers/extractors/images.py
"""
🖼️ Збір зображень і відео товару з усіх джерел сторінки.

🔹 Обʼєднання (у порядку вставки): JSON-LD → state-шляхи → масив `imagePathList`
   → поштучні ключі (`imageUrl`, `imgUrl`, `image`, `mainImage`, `summImagePathList`)
   → абсолютні `alicdn.com` URL → protocol-relative `//aeNN.alicdn.com` URL.
🔹 Кожен кандидат проходить нормалізацію та ignore-лист (`ImageSet`).
🔹 Якщо є товарні картинки `/kf/` — лишаються лише вони.
🔹 `og:image` / `twitter:image` ставиться першим; ліміт 30; порожньо → плейсхолдер.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re	# 🧵 Патерни URL
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Tuple	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from aliviral.domain.products.images import (	# 🖼️ Чисті правила URL
    DEFAULT_IMAGES_LIMIT,
    PLACEHOLDER_IMAGE,
    ImageSet,
)
from aliviral.shared.utils.collections import uniq_keep_order	# ♻️ Унікалізація відео

from .base import _as_list, logger
from .json_ld import product_images

if TYPE_CHECKING:
    from .context import ExtractionContext

ImageSource = Callable[["ExtractionContext"], Iterable[str]]

PRODUCT_IMAGE_MARKER = "/kf/"	# 🛍️ Шлях товарних фото на CDN

IMAGE_STATE_PATHS = (
    "imageModule.imagePathList",
    "imageComponent.imagePathList",
    "imageModule.summImagePathList",
    "imageComponent.summImagePathList",
)

_SLASH = r"(?:\\?/)"	# 🧵 `/` або екранований `\/`
_QUOTED_RE = re.compile(r"""["']([^"']+)["']""")
_IMAGE_PATH_LIST_RE = re.compile(r'"(?:imagePathList|summImagePathList)"\s*:\s*\[([^\]]*)\]')
_IMAGE_KEY_RE = re.compile(r'"(?:imageUrl|imgUrl|image|mainImage)"\s*:\s*"([^"]+)"')
_ABSOLUTE_CDN_RE = re.compile(
    rf"""['"](https?:{_SLASH}{_SLASH}[^'"\s]*alicdn\.com[^'"\s]*\.(?:jpe?g|png|webp))['"]""",
    re.IGNORECASE,
)
_PROTOCOL_RELATIVE_CDN_RE = re.compile(
    rf"""['"]({_SLASH}{_SLASH}ae\d+\.alicdn\.com[^'"\s]+\.(?:jpe?g|png|webp))['"]""",
    re.IGNORECASE,
)
_VIDEO_RE = re.compile(rf"""https?:{_SLASH}{_SLASH}[^"'\s]+?\.mp4""", re.IGNORECASE)


# ================================
# 🔎 ДЖЕРЕЛА КАНДИДАТІВ
# ================================
def images_from_json_ld(ctx: "ExtractionContext") -> List[str]:
    return product_images(ctx.json_ld_product)


def images_from_state(ctx: "ExtractionContext") -> List[str]:
    urls: List[str] = []
    for path in IMAGE_STATE_PATHS:
        value = ctx.state_value(path)
        urls.extend(item for item in _as_list(value) if isinstance(item, str))
    return urls


def images_from_path_list(ctx: "ExtractionContext") -> List[str]:
    urls: List[str] = []
    for match in _IMAGE_PATH_LIST_RE.finditer(ctx.html):
        urls.extend(_QUOTED_RE.findall(match.group(1)))
    return urls


def images_from_keys(ctx: "ExtractionContext") -> List[str]:
    return _IMAGE_KEY_RE.findall(ctx.html)


def images_from_absolute_cdn(ctx: "ExtractionContext") -> List[str]:
    return _ABSOLUTE_CDN_RE.findall(ctx.html)


def images_from_protocol_relative_cdn(ctx: "ExtractionContext") -> List[str]:
    return _PROTOCOL_RELATIVE_CDN_RE.findall(ctx.html)


IMAGE_SOURCES: Tuple[ImageSource, ...] = (
    images_from_json_ld,
    images_from_state,
    images_from_path_list,
    images_from_keys,
    images_from_absolute_cdn,
    images_from_protocol_relative_cdn,
)


def primary_image(ctx: "ExtractionContext") -> Optional[str]:
    return ctx.meta("og:image", "twitter:image")


# ================================
# 🖼️ ЗБІРКА СПИСКУ
# ================================
def collect_images(
    ctx: "ExtractionContext",
    *,
    limit: int = DEFAULT_IMAGES_LIMIT,
    prefer_product_images: bool = True,
) -> List[str]:
    """
    🖼️ Фінальний список зображень товару (ніколи не порожній).

    Args:
        ctx: Контекст екстракції.
        limit: Максимальна кількість URL.
        prefer_product_images: Лишати тільки `/kf/`-картинки, якщо такі знайдено.
    """
    collected = ImageSet()
    for source in IMAGE_SOURCES:
        try:
            added = collected.extend(source(ctx))
        except Exception as exc:	# ⚠️ Зламане джерело не зупиняє збір
            logger.debug("🖼️ Джерело %s впало: %s", source.__name__, exc)
            continue
        if added:
            logger.debug("🖼️ %s: +%d", source.__name__, added)

    logger.info("🖼️ Знайдено зображень у HTML: %d", len(collected))

    final = collected
    if prefer_product_images:
        product_only = [url for url in collected if PRODUCT_IMAGE_MARKER in url]
        logger.debug("🛍️ Товарних зображень (%s): %d", PRODUCT_IMAGE_MARKER, len(product_only))
        if product_only:
            final = ImageSet(product_only)

    final.prepend(primary_image(ctx))
    images = final.to_list(limit)
    if not images:
        logger.warning("⚠️ Зображень не знайдено → плейсхолдер.")
        return [PLACEHOLDER_IMAGE]
    return images


def collect_videos(ctx: "ExtractionContext") -> List[str]:
    """🎬 Унікальні `.mp4` URL у порядку появи."""
    found = (match.replace("\\/", "/") for match in _VIDEO_RE.findall(ctx.html))
    return list(uniq_keep_order(found))


__all__ = [
    "IMAGE_SOURCES",
    "PRODUCT_IMAGE_MARKER",
    "collect_images",
    "collect_videos",
    "primary_image",
]

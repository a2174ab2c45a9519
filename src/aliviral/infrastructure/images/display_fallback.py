# 🖼️ aliviral/infrastructure/images/display_fallback.py
"""
🖼️ Відображення зображень із захистом від hotlink-блокування.

Стан одного зображення: пряме завантаження → одна спроба через image-проксі
→ остаточна відмова (рендерер підставляє плейсхолдер). Функції чисті:
рендерер зберігає `DisplayAttempt` і викликає `on_load_error` після збою.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування
from dataclasses import dataclass, replace	# 🧱 Іммутабельний стан
from enum import Enum	# 🏷️ Стани автомата
from typing import Optional	# 🧰 Типізація
from urllib.parse import quote	# 🌐 Кодування URL

# 🧩 Внутрішні модулі проєкту
from aliviral.domain.products.entities import ProductRecord	# 📦 Запис товару
from aliviral.domain.products.images import PLACEHOLDER_IMAGE	# 🪧 Запасне зображення
from aliviral.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера

logger = logging.getLogger(f"{LOG_NAME}.images.display")

DEFAULT_IMAGE_PROXY_BASE = "https://images.weserv.nl/?url="	# 🌐 Image-проксі


class ImageLoadState(str, Enum):
    DIRECT = "direct"
    PROXY_RETRIED = "proxy_retried"
    FAILED = "failed"


@dataclass(frozen=True)
class DisplayAttempt:
    """🧱 Стан показу одного зображення: оригінальний URL і чи вже пробували проксі."""

    original_url: str
    proxy_tried: bool = False
    failed: bool = False

    @property
    def state(self) -> ImageLoadState:
        if self.failed:
            return ImageLoadState.FAILED
        return ImageLoadState.PROXY_RETRIED if self.proxy_tried else ImageLoadState.DIRECT


def proxy_rewrite(url: str, proxy_base: str = DEFAULT_IMAGE_PROXY_BASE) -> str:
    """🌐 Прибирає схему, кодує решту URL і додає префікс image-проксі."""
    stripped = url
    for scheme in ("https://", "http://", "//"):
        if stripped.lower().startswith(scheme):
            stripped = stripped[len(scheme):]
            break
    return f"{proxy_base}{quote(stripped, safe='')}"


def start_attempt(record: ProductRecord, index: int = 0) -> DisplayAttempt:
    """▶️ Початковий стан для `index`-го зображення запису (за межами → плейсхолдер)."""
    images = record.images or [PLACEHOLDER_IMAGE]
    url = images[index] if 0 <= index < len(images) else PLACEHOLDER_IMAGE
    return DisplayAttempt(original_url=url)


def resolve_display_url(
    record: ProductRecord,
    attempt: Optional[DisplayAttempt] = None,
    *,
    proxy_base: str = DEFAULT_IMAGE_PROXY_BASE,
) -> Optional[str]:
    """
    🖼️ URL, який рендерер має спробувати зараз.

    DIRECT → оригінал; PROXY_RETRIED → проксі-переписаний; FAILED → None
    (рендерер показує плейсхолдер). Без `attempt` береться головне зображення.
    """
    attempt = attempt or start_attempt(record)
    state = attempt.state
    if state is ImageLoadState.DIRECT:
        return attempt.original_url
    if state is ImageLoadState.PROXY_RETRIED:
        return proxy_rewrite(attempt.original_url, proxy_base)
    return None


def on_load_error(attempt: DisplayAttempt) -> DisplayAttempt:
    """⏭️ Переводить автомат далі: DIRECT → PROXY_RETRIED → FAILED (термінальний)."""
    if attempt.state is ImageLoadState.DIRECT:
        logger.info("🖼️ Пряме завантаження не вдалося, пробуємо проксі: %s", attempt.original_url[:80])
        return replace(attempt, proxy_tried=True)
    if attempt.state is ImageLoadState.PROXY_RETRIED:
        logger.warning("⚠️ Зображення недоступне навіть через проксі: %s", attempt.original_url[:80])
        return replace(attempt, failed=True)
    return attempt


__all__ = [
    "DEFAULT_IMAGE_PROXY_BASE",
    "DisplayAttempt",
    "ImageLoadState",
    "on_load_error",
    "proxy_rewrite",
    "resolve_display_url",
    "start_attempt",
]

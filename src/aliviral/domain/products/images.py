# 🖼️ aliviral/domain/products/images.py
"""
🖼️ Чисті правила для URL зображень товару.

🔹 `normalize_image_url` — канонізує сирий рядок у абсолютний https-URL без resize-суфіксів.
🔹 `is_ignored_image` — відсіює плейсхолдери, логотипи, іконки, аватарки.
🔹 `ImageSet` — впорядкована множина унікальних URL (ідемпотентне додавання).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import html															# 🧼 Декодування HTML-сутностей
import logging														# 🧾 Логування
import re															# 🧪 Патерни суфіксів
from typing import Iterable, Iterator, List, Optional				# 🧰 Типізація

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("aliviral.images")

# ================================
# 📦 КОНСТАНТИ
# ================================
PLACEHOLDER_IMAGE = "https://placehold.co/400x400/1e293b/white?text=No+Image"	# 🪧 Запасне зображення
MAX_URL_LENGTH = 300												# 📏 Довші URL: сміття з JS
DEFAULT_IMAGES_LIMIT = 30											# ✂️ Ліміт списку зображень

_IMAGE_EXT = r"\.(?:jpe?g|png|webp|avif|gif)"
_RESIZE_SUFFIX_RE = re.compile(rf"({_IMAGE_EXT})_[^/?#]*$", re.IGNORECASE)	# ✂️ foo.jpg_50x50.jpg → foo.jpg
_IGNORED_RE = re.compile(
    r"placeholder|placehold\.|/logo|logo[._-]|icon|avatar|sprite|favicon|loading|blank\.|1x1|\.svg$|\.gif$",
    re.IGNORECASE,
)																	# 🚫 Не-товарні картинки


# ================================
# 🧼 НОРМАЛІЗАЦІЯ
# ================================
def strip_resize_suffix(url: str) -> str:
    """✂️ Прибирає CDN-суфікс розміру після розширення (`.jpg_220x220.jpg_.webp` → `.jpg`)."""
    return _RESIZE_SUFFIX_RE.sub(r"\1", url)


def normalize_image_url(raw: Optional[str]) -> Optional[str]:
    """
    🧼 Канонізує кандидат у URL зображення.

    Повертає абсолютний `https://` URL без лапок, HTML-сутностей, query-частини
    та resize-суфікса, або None для порожніх/невалідних значень.
    """
    if not isinstance(raw, str):
        return None
    url = raw.strip().strip("'\"").strip()
    if not url:
        return None
    url = html.unescape(url)
    url = url.replace("\\u002F", "/").replace("\\u002f", "/").replace("\\/", "/")
    url = url.split("#", 1)[0].split("?", 1)[0]						# ✂️ query/fragment
    if url.startswith("//"):
        url = f"https:{url}"
    elif url.lower().startswith("http://"):
        url = f"https://{url[7:]}"
    if not url.lower().startswith("https://") or len(url) <= len("https://"):
        return None
    url = strip_resize_suffix(url)
    if len(url) > MAX_URL_LENGTH or any(ch.isspace() for ch in url):
        return None
    return url


def is_ignored_image(url: str) -> bool:
    """🚫 True для плейсхолдерів, логотипів, іконок, аватарок та інших не-товарних картинок."""
    return bool(_IGNORED_RE.search(url or ""))


def clean_image_url(raw: Optional[str]) -> Optional[str]:
    """🧼 Нормалізація + фільтр ignore-листа в одному кроці."""
    url = normalize_image_url(raw)
    if url is None or is_ignored_image(url):
        return None
    return url


# ================================
# ♻️ ВПОРЯДКОВАНА МНОЖИНА
# ================================
class ImageSet:
    """
    ♻️ Впорядкований набір унікальних нормалізованих URL.

    Кожен кандидат проходить `clean_image_url`, тож повторне додавання
    вже нормалізованого списку нічого не змінює.
    """

    def __init__(self, initial: Iterable[str] = ()) -> None:
        self._items: List[str] = []
        self._seen: set = set()
        for url in initial:
            self.add_unique_image(url)

    def add_unique_image(self, raw: Optional[str]) -> bool:
        """➕ Додає URL у кінець; повертає True, якщо набір змінився."""
        url = clean_image_url(raw)
        if url is None or url in self._seen:
            return False
        self._items.append(url)
        self._seen.add(url)
        return True

    def extend(self, raws: Iterable[Optional[str]]) -> int:
        """➕ Додає кілька кандидатів; повертає кількість нових."""
        return sum(1 for raw in raws if self.add_unique_image(raw))

    def prepend(self, raw: Optional[str]) -> bool:
        """⬆️ Ставить URL першим (переносить, якщо він уже є)."""
        url = clean_image_url(raw)
        if url is None:
            return False
        if url in self._seen:
            self._items.remove(url)
        else:
            self._seen.add(url)
        self._items.insert(0, url)
        return True

    def to_list(self, limit: Optional[int] = None) -> List[str]:
        if isinstance(limit, int) and limit > 0:
            return list(self._items[:limit])
        return list(self._items)

    def __contains__(self, raw: object) -> bool:
        return isinstance(raw, str) and normalize_image_url(raw) in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


__all__ = [
    "PLACEHOLDER_IMAGE",
    "DEFAULT_IMAGES_LIMIT",
    "MAX_URL_LENGTH",
    "ImageSet",
    "clean_image_url",
    "is_ignored_image",
    "normalize_image_url",
    "strip_resize_suffix",
]

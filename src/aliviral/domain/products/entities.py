# 📦 aliviral/domain/products/entities.py
"""
📦 Доменна сутність `ProductRecord` — єдиний результат аналізу сторінки товару.

🔹 Створюється заново на кожен виклик екстракції або ручного вводу.
🔹 Єдина дозволена часткова мутація — злиття списку зображень (`merge_images`).
🔹 `to_dict()` віддає поля з іменами, які чекають рендерер і генератор постів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування
from dataclasses import dataclass, field                            # 🧱 Опис сутності
from typing import Any, Dict, Iterable, List, Optional              # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from .images import DEFAULT_IMAGES_LIMIT, PLACEHOLDER_IMAGE, ImageSet	# 🖼️ Правила для URL зображень

# ================================
# 🪵 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(__name__)


# ================================
# 📏 КОНСТАНТИ ЗА ЗАМОВЧУВАННЯМ
# ================================
DESCRIPTION_MAX_LEN = 250                                           # 📄 Ліміт опису
DEFAULT_TITLE = "AliExpress Product"                                # 🏷️ Останній фолбек назви
PRICE_SENTINEL = "$--.--"                                           # 💵 Ціна, яку не вдалося знайти
DEFAULT_DISCOUNT = "0%"
DEFAULT_RATING = "4.8"
DEFAULT_REVIEWS = "120+"
DEFAULT_DESCRIPTION = "Product details available on AliExpress."
DEFAULT_FEATURES = ("Global Shipping", "Top Rated", "Secure Payment", "Buyer Protection")


def truncate_description(text: Optional[str]) -> str:
    """✂️ Обрізає опис до 250 символів."""
    return (text or "").strip()[:DESCRIPTION_MAX_LEN]


# ================================
# 📦 СУТНІСТЬ
# ================================
@dataclass
class ProductRecord:
    """
    Нормалізований запис товару.

    Інваріанти: `images` без дублікатів та ігнорованих URL; `image` — перший
    елемент `images`, коли список непорожній.
    """

    name: str
    current_price: str = PRICE_SENTINEL
    original_price: str = ""
    discount: str = DEFAULT_DISCOUNT
    description: str = DEFAULT_DESCRIPTION
    image: str = PLACEHOLDER_IMAGE
    images: List[str] = field(default_factory=lambda: [PLACEHOLDER_IMAGE])
    videos: List[str] = field(default_factory=list)
    rating: str = DEFAULT_RATING
    reviews: str = DEFAULT_REVIEWS
    features: List[str] = field(default_factory=lambda: list(DEFAULT_FEATURES))
    url: Optional[str] = None

    def __post_init__(self) -> None:
        self.description = truncate_description(self.description)
        if self.images:
            self.image = self.images[0]                             # 🔐 image ∈ images

    # ================================
    # 🔍 ПЕРЕВІРКИ
    # ================================
    def has_usable_name(self) -> bool:
        """✅ Пост-умова пайплайна: назва непорожня після trim."""
        return bool((self.name or "").strip())

    def has_only_placeholder(self) -> bool:
        return self.images == [PLACEHOLDER_IMAGE]

    # ================================
    # 🖼️ ЗЛИТТЯ ЗОБРАЖЕНЬ
    # ================================
    def merge_images(self, urls: Iterable[str], *, limit: int = DEFAULT_IMAGES_LIMIT) -> int:
        """
        🖼️ Додає URL (ручне доповнення) через пайплайн нормалізації.

        Плейсхолдер прибирається, щойно зʼявляється справжнє зображення.
        Повертає кількість доданих URL.
        """
        current = [] if self.has_only_placeholder() else self.images
        image_set = ImageSet(current)
        added = image_set.extend(urls)
        merged = image_set.to_list(limit)
        if merged:
            self.images = merged
            self.image = merged[0]
        logger.debug("🖼️ merge_images: +%d → %d зображень.", added, len(self.images))
        return added

    # ================================
    # 📤 СЕРІАЛІЗАЦІЯ
    # ================================
    def to_dict(self) -> Dict[str, Any]:
        """📤 Поля у форматі споживачів (рендерер, генератор постів)."""
        return {
            "name": self.name,
            "currentPrice": self.current_price,
            "originalPrice": self.original_price,
            "discount": self.discount,
            "description": self.description,
            "image": self.image,
            "images": list(self.images),
            "videos": list(self.videos),
            "rating": self.rating,
            "reviews": self.reviews,
            "features": list(self.features),
            "url": self.url,
        }


__all__ = [
    "ProductRecord",
    "DESCRIPTION_MAX_LEN",
    "DEFAULT_TITLE",
    "PRICE_SENTINEL",
    "DEFAULT_DISCOUNT",
    "DEFAULT_RATING",
    "DEFAULT_REVIEWS",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_FEATURES",
    "truncate_description",
]

# 📦 aliviral/config/setup/container.py
"""
📦 Контейнер залежностей аналізатора товарів.

🔹 Створює сервіси в правильному порядку DI: опції → резолвер → фетчер → екстрактор → сервіс.
🔹 Інкапсулює конфігурацію мережевого шару, зображень і метрик.
🔹 Дає єдину точку доступу до `ProductAnalysisService` та нових сесій.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                             # 🌐 Підміна транспорту (тести)

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from typing import TYPE_CHECKING, Any, Optional                          # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту
from aliviral.domain.products.images import DEFAULT_IMAGES_LIMIT         # ✂️ Ліміт зображень
from aliviral.infrastructure.images.display_fallback import DEFAULT_IMAGE_PROXY_BASE  # 🌐 Image-проксі
from aliviral.infrastructure.parsers.product_extractor import ProductExtractor  # 🧠 Екстрактор
from aliviral.infrastructure.services.analysis_service import AnalysisSession, ProductAnalysisService  # 🚀 Пайплайн
from aliviral.infrastructure.url.short_link_resolver import ShortLinkResolver  # 🔗 Розгортання посилань
from aliviral.infrastructure.web._fetcher_options import FetcherOptions  # 🧾 Мережеві опції
from aliviral.infrastructure.web.proxy_fetcher import ProxyFetcher       # 🌍 Проксі-фетчер
from aliviral.shared.metrics import maybe_start_prometheus               # 📈 Bootstrap метрик
from aliviral.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

if TYPE_CHECKING:
    from aliviral.config.config_service import ConfigService             # 🗂️ Тип під час перевірки

logger = logging.getLogger(LOG_NAME)                                     # 🧾 Модульний логер контейнера


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _int_or_default(value: Any, default: int) -> int:
    """
    Повертає ціле число або запасне значення, якщо каст неможливий.
    """
    if value is None:                                                    # 🚫 Значення відсутнє
        return default
    try:
        return int(value)
    except (TypeError, ValueError):                                      # ⚠️ Неможливо привести до int
        return default


def bootstrap_logging(config: Optional["ConfigService"] = None) -> logging.Logger:
    """
    Зчитує конфіг логування і запускає кореневий логер.
    """
    from aliviral.config.config_service import ConfigService             # 🧭 Локальний імпорт для уникнення циклів

    cfg = config or ConfigService()
    node = cfg.get("logging", {}) or {}                                  # 📄 Вузол логування
    return init_logging_from_config(node)


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """
    Координує ініціалізацію мережевого шару, парсера та сервісу аналізу.

    `setup_logging=True` спершу налаштовує логування з вузла `logging` конфігу.
    """

    def __init__(
        self,
        config: "ConfigService",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        setup_logging: bool = False,
    ):
        self.config = config                                              # ⚙️ Джерело конфігурацій DI
        self._transport = transport                                       # 🧪 Підміна HTTP-транспорту
        if setup_logging:                                                 # 🧾 Логування за конфігом
            bootstrap_logging(self.config)
        logger.info("🚀 Стартуємо побудову контейнера залежностей")
        self._bootstrap_metrics_if_enabled()
        self._setup_network()
        self._setup_parsing()
        self._setup_services()
        logger.info("✅ Контейнер ініціалізовано успішно")

    # ================================
    # 📈 МЕТРИКИ
    # ================================
    def _bootstrap_metrics_if_enabled(self) -> None:
        """
        Стартує Prometheus-експортер, якщо це дозволено конфігурацією.
        """
        enabled = self.config.get("metrics.enabled", False)
        if isinstance(enabled, str):
            enabled = enabled.strip().lower() in {"1", "true", "yes", "on"}
        if not enabled:
            logger.debug("📉 Prometheus вимкнено конфігом")
            return
        port = _int_or_default(self.config.get("metrics.prometheus.port"), 9108)
        try:
            maybe_start_prometheus(port)
        except OSError:                                                  # ⚠️ Порт зайнятий / немає прав
            logger.exception("⚠️ Не вдалося стартувати експортер метрик на порті %s", port)

    # ================================
    # 🌐 МЕРЕЖА
    # ================================
    def _setup_network(self) -> None:
        self.fetcher_options = FetcherOptions.from_config(self.config)
        self.resolver = ShortLinkResolver(self.fetcher_options, transport=self._transport)
        self.fetcher = ProxyFetcher(
            self.fetcher_options,
            resolver=self.resolver,
            transport=self._transport,
        )
        logger.debug(
            "🌐 Бекенди: fetch=%s resolve=%s",
            [b.name for b in self.fetcher.backends],
            [b.name for b in self.resolver.backends],
        )

    # ================================
    # 🧠 ПАРСИНГ
    # ================================
    def _setup_parsing(self) -> None:
        self.images_limit = _int_or_default(self.config.get("images.limit"), DEFAULT_IMAGES_LIMIT)
        self.image_proxy_base = str(self.config.get("images.proxy_base") or DEFAULT_IMAGE_PROXY_BASE)
        self.extractor = ProductExtractor(images_limit=self.images_limit)

    # ================================
    # 🚀 СЕРВІСИ
    # ================================
    def _setup_services(self) -> None:
        self.analysis_service = ProductAnalysisService(
            self.fetcher,
            self.extractor,
            enable_progress=self.fetcher_options.enable_progress,
        )

    def new_session(self) -> AnalysisSession:
        """🧠 Нова сесія з власним «поточним» товаром."""
        return AnalysisSession(self.analysis_service, image_proxy_base=self.image_proxy_base)


__all__ = ["Container", "bootstrap_logging"]

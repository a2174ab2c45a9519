# 🧾 aliviral/infrastructure/web/_fetcher_options.py
"""
🧾 Налаштування мережевого шару (резолвер коротких посилань + проксі-фетчер).

🔹 Іммутабельні опції: таймаути, пороги довжини тіла, порядок бекендів.
🔹 Зчитуються з ConfigService або ENV (префікс `ALIVIRAL_FETCHER_`).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування ініціалізації
import os	# 🌱 Зчитування ENV
from dataclasses import dataclass, replace	# 🧱 Dataclass для опцій
from typing import Any, Optional, Tuple	# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from aliviral.shared.utils.logger import LOG_NAME	# 🏷️ Базове імʼя логера

from .proxy_backends import BACKENDS, DEFAULT_FETCH_BACKENDS, DEFAULT_RESOLVE_BACKENDS

# ================================
# 🧾 ЛОГЕР ТА КОНСТАНТИ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.web.options")

_BOOL_TRUE = {"1", "true", "yes", "on", "y", "t"}
_BOOL_FALSE = {"0", "false", "no", "off", "n", "f"}

DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


# ================================
# 🛠️ ХЕЛПЕРИ КОНВЕРСІЙ
# ================================
def _parse_bool(val: Optional[str], default: bool) -> bool:
    """🔀 Перетворює ENV-рядок у bool з fallback."""
    if val is None:
        return default
    cleaned = val.strip().lower()
    if cleaned in _BOOL_TRUE:
        return True
    if cleaned in _BOOL_FALSE:
        return False
    logger.warning("⚠️ Некоректне булеве значення '%s' → fallback=%s.", val, default)
    return default


def _to_bool(val: Any, default: bool) -> bool:
    """🔀 bool з YAML лишається як є, рядок з ENV розбирається `_parse_bool`."""
    if isinstance(val, bool):
        return val
    return _parse_bool(None if val is None else str(val), default)


def _to_float(val: Optional[str], default_val: float) -> float:
    try:
        return float(val) if val is not None else default_val
    except ValueError:
        logger.warning("⚠️ Неможливо перетворити '%s' у float → fallback=%s.", val, default_val)
        return default_val


def _to_int(val: Optional[str], default_val: int) -> int:
    try:
        return int(val) if val is not None else default_val
    except ValueError:
        logger.warning("⚠️ Неможливо перетворити '%s' у int → fallback=%s.", val, default_val)
        return default_val


def _to_names(val: Any, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """🗂️ Список бекендів із YAML-списку або рядка через кому."""
    if val is None:
        return default
    items = val.split(",") if isinstance(val, str) else list(val)
    names = tuple(str(item).strip().lower() for item in items if str(item).strip())
    return names or default


# ================================
# 🧱 МОДЕЛЬ ОПЦІЙ
# ================================
@dataclass(frozen=True)
class FetcherOptions:
    """🧱 Параметри мережевого шару."""

    fetch_timeout_sec: float = 25.0	# ⏱️ Таймаут однієї спроби завантаження
    resolve_timeout_sec: float = 20.0	# ⏱️ Таймаут однієї спроби розгортання
    min_body_chars: int = 500	# 📏 Коротше: збій бекенда
    gateway_max_chars: int = 10_000	# 🚪 Коротше і без маркерів: можлива gateway-сторінка
    fetch_backends: Tuple[str, ...] = DEFAULT_FETCH_BACKENDS	# 🌐 Порядок проксі для HTML
    resolve_backends: Tuple[str, ...] = DEFAULT_RESOLVE_BACKENDS	# 🔗 Порядок проксі для редиректів
    accept_header: str = DEFAULT_ACCEPT	# 📨 Accept для HTML
    enable_progress: bool = False	# ⏳ rich-спінер під час завантаження

    def __post_init__(self) -> None:
        """🛡️ Валідує інваріанти одразу після створення."""
        if self.fetch_timeout_sec <= 0 or self.resolve_timeout_sec <= 0:
            raise ValueError("timeouts must be > 0")
        if self.min_body_chars < 0:
            raise ValueError("min_body_chars must be >= 0")
        if self.gateway_max_chars <= 0:
            raise ValueError("gateway_max_chars must be > 0")
        unknown = [name for name in (*self.fetch_backends, *self.resolve_backends) if name not in BACKENDS]
        if unknown:
            raise ValueError(f"unknown proxy backends: {unknown}")
        if not self.fetch_backends:
            raise ValueError("fetch_backends must not be empty")

    # ================================
    # 🧱 КОНСТРУКТОРИ
    # ================================
    @classmethod
    def default(cls) -> "FetcherOptions":
        return cls()

    @classmethod
    def from_config(cls, config: Any) -> "FetcherOptions":
        """⚙️ Будує опції з ConfigService (відсутні ключі → дефолти)."""
        d = cls.default()
        opts = cls(
            fetch_timeout_sec=config.get("fetcher.timeout_sec", d.fetch_timeout_sec, cast=float),
            resolve_timeout_sec=config.get("resolver.timeout_sec", d.resolve_timeout_sec, cast=float),
            min_body_chars=config.get("fetcher.min_body_chars", d.min_body_chars, cast=int),
            gateway_max_chars=config.get("fetcher.gateway_max_chars", d.gateway_max_chars, cast=int),
            fetch_backends=_to_names(config.get("fetcher.backends"), d.fetch_backends),
            resolve_backends=_to_names(config.get("resolver.backends"), d.resolve_backends),
            enable_progress=_to_bool(config.get("fetcher.enable_progress"), d.enable_progress),
        )
        logger.debug("⚙️ FetcherOptions з конфігу: %s", opts)
        return opts

    @classmethod
    def from_env(cls, prefix: str = "ALIVIRAL_FETCHER_") -> "FetcherOptions":
        """🌱 Будує опції з ENV (невідомі значення → дефолти)."""
        d = cls.default()
        opts = cls(
            fetch_timeout_sec=_to_float(os.getenv(f"{prefix}TIMEOUT_SEC"), d.fetch_timeout_sec),
            resolve_timeout_sec=_to_float(os.getenv(f"{prefix}RESOLVE_TIMEOUT_SEC"), d.resolve_timeout_sec),
            min_body_chars=_to_int(os.getenv(f"{prefix}MIN_BODY_CHARS"), d.min_body_chars),
            gateway_max_chars=_to_int(os.getenv(f"{prefix}GATEWAY_MAX_CHARS"), d.gateway_max_chars),
            fetch_backends=_to_names(os.getenv(f"{prefix}BACKENDS"), d.fetch_backends),
            resolve_backends=_to_names(os.getenv(f"{prefix}RESOLVE_BACKENDS"), d.resolve_backends),
            enable_progress=_parse_bool(os.getenv(f"{prefix}ENABLE_PROGRESS"), d.enable_progress),
        )
        logger.info("🌱 FetcherOptions зібрано з ENV (prefix=%s).", prefix)
        return opts

    def merge(self, **overrides: Any) -> "FetcherOptions":
        """🔀 Повертає новий екземпляр із підмінними полями."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


DEFAULT_FETCHER_OPTIONS = FetcherOptions.default()

__all__ = ["FetcherOptions", "DEFAULT_FETCHER_OPTIONS", "DEFAULT_ACCEPT"]

# ⚙️ aliviral/config/config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з пакетного config.yaml та змінних середовища (.env).
- Надає єдиний метод .get() з крапковими ключами та опційним приведенням типу.
- Працює як Singleton.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Callable, Dict, Optional  # 🧩 Типізація

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("aliviral.config")

# ================================
# 🌱 ENV → КЛЮЧІ КОНФІГУ
# ================================
_ENV_KEYS: Dict[str, str] = {
    "ALIVIRAL_LOG_LEVEL": "logging.level",
    "ALIVIRAL_LOG_FILE": "logging.file",
    "ALIVIRAL_FETCH_TIMEOUT_SEC": "fetcher.timeout_sec",
    "ALIVIRAL_RESOLVE_TIMEOUT_SEC": "resolver.timeout_sec",
    "ALIVIRAL_IMAGES_LIMIT": "images.limit",
    "ALIVIRAL_IMAGE_PROXY_BASE": "images.proxy_base",
    "ALIVIRAL_METRICS_ENABLED": "metrics.enabled",
    "ALIVIRAL_METRICS_PORT": "metrics.prometheus.port",
}                                           # 🗺️ Змінна середовища → крапковий ключ


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних конфігураційних параметрів проєкту.
    Працює як Singleton — конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None  # 🧩 Singleton-екземпляр
    _config: Dict[str, Any]                      # 📦 Обʼєднана конфігурація

    def __new__(cls, yaml_path: Optional[Path] = None) -> "ConfigService":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs(yaml_path)  # 🔄 Завантаження під час першого виклику
            cls._instance = instance
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """♻️ Скидає Singleton (для тестів і перезавантаження конфігу)."""
        cls._instance = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigService":
        """🧪 Створює незалежний екземпляр із готового словника (без файлів і ENV)."""
        instance = super().__new__(cls)
        instance._config = {}
        instance._deep_update(instance._config, data)
        return instance

    def _load_all_configs(self, yaml_path: Optional[Path]) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет: config.yaml → .env/ENV (ENV перекриває YAML).
        """
        path = yaml_path or Path(__file__).parent / "config.yaml"
        try:
            with open(path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("⚠️ Не вдалося завантажити %s: %s", path.name, e)

        load_dotenv()                                       # 🔐 Ініціалізує змінні середовища з файлу .env
        env_vars = {
            dotted: os.getenv(env_name)
            for env_name, dotted in _ENV_KEYS.items()
            if os.getenv(env_name) not in (None, "")
        }
        self._deep_update(self._config, self._unflatten_dict(env_vars))
        logger.debug("✅ Конфігурацію завантажено (env overrides=%s).", sorted(env_vars))

    def get(self, key: str, default: Any = None, cast: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'fetcher.timeout_sec').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.
            cast (Callable | None): Приведення типу; при помилці повертається default.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        if cast is None or value is None:
            return value
        try:
            return cast(value)
        except (TypeError, ValueError):
            logger.warning("⚠️ Ключ '%s': не вдалося привести %r → default=%r", key, value, default)
            return default

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'fetcher.timeout_sec' → {'fetcher': {'timeout_sec': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """🔁 Рекурсивно обʼєднує два словники (вкладені dict — глибоко)."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value

# 🌐 aliviral/infrastructure/web/proxy_backends.py
"""
🌐 Реєстр сторонніх CORS-проксі, через які завантажуються сторінки AliExpress.

🔹 Кожен бекенд має власну конвенцію виклику (query-параметр або шлях).
🔹 Деякі бекенди загортають HTML у JSON (`{"contents": "..."}`).
🔹 Бекенди взаємозамінні: порядок задається конфігурацією за іменами.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import json															# 📄 Розбір JSON-обгорток
import logging														# 🧾 Логування
from dataclasses import dataclass									# 🧱 Опис бекенда
from enum import Enum												# 🏷️ Формат відповіді
from typing import Callable, Dict, Iterable, List, Tuple			# 🧰 Типізація
from urllib.parse import quote										# 🔗 Кодування цільового URL

# 🧩 Внутрішні модулі проєкту
from aliviral.shared.utils.logger import LOG_NAME					# 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.proxy_backends")

_URI_COMPONENT_SAFE = "-_.!~*'()"									# 🔗 Як encodeURIComponent у браузері


def encode_uri_component(value: str) -> str:
    """🔗 Кодує значення як компонент URI."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


# ================================
# 🧱 МОДЕЛЬ БЕКЕНДА
# ================================
class ResponseFormat(str, Enum):
    """Як читати тіло відповіді бекенда."""

    RAW = "raw"														# 📄 HTML як є
    JSON_CONTENTS = "json_contents"									# 📦 JSON з полем `contents`


@dataclass(frozen=True)
class ProxyBackend:
    """Один проксі-бекенд: як загорнути URL і як прочитати відповідь."""

    name: str
    label: str
    wrap: Callable[[str], str]
    response_format: ResponseFormat = ResponseFormat.RAW

    def build_url(self, target_url: str) -> str:
        return self.wrap(target_url)

    def read_body(self, text: str) -> str:
        """📥 Дістає HTML з тіла відповіді (для JSON-обгорток — поле `contents`)."""
        if self.response_format is ResponseFormat.RAW:
            return text
        try:
            payload = json.loads(text or "{}")
        except json.JSONDecodeError:
            logger.debug("📦 %s: відповідь не JSON, беремо як є.", self.label)
            return text
        if isinstance(payload, dict):
            return str(payload.get("contents") or "")
        return ""


# ================================
# 📜 ВІДОМІ БЕКЕНДИ
# ================================
ALLORIGINS_RAW = ProxyBackend(
    name="allorigins_raw",
    label="AllOrigins",
    wrap=lambda u: f"https://api.allorigins.win/raw?url={encode_uri_component(u)}",
)
ALLORIGINS_JSON = ProxyBackend(
    name="allorigins_json",
    label="AllOrigins (JSON)",
    wrap=lambda u: f"https://api.allorigins.win/get?url={encode_uri_component(u)}",
    response_format=ResponseFormat.JSON_CONTENTS,
)
CODETABS = ProxyBackend(
    name="codetabs",
    label="CodeTabs",
    wrap=lambda u: f"https://api.codetabs.com/v1/proxy?quest={encode_uri_component(u)}",
)
THINGPROXY = ProxyBackend(
    name="thingproxy",
    label="ThingProxy",
    wrap=lambda u: f"https://thingproxy.freeboard.io/fetch/{u}",
)

BACKENDS: Dict[str, ProxyBackend] = {
    backend.name: backend for backend in (ALLORIGINS_RAW, ALLORIGINS_JSON, CODETABS, THINGPROXY)
}																	# 🗂️ Імʼя → бекенд

DEFAULT_FETCH_BACKENDS: Tuple[str, ...] = ("allorigins_raw", "codetabs", "thingproxy")
DEFAULT_RESOLVE_BACKENDS: Tuple[str, ...] = ("allorigins_json", "codetabs")


def backends_by_name(names: Iterable[str]) -> List[ProxyBackend]:
    """🗂️ Повертає бекенди у заданому порядку; невідомі імена пропускаються з попередженням."""
    result: List[ProxyBackend] = []
    for name in names:
        backend = BACKENDS.get(str(name).strip().lower())
        if backend is None:
            logger.warning("⚠️ Невідомий проксі-бекенд '%s' — пропускаємо.", name)
            continue
        result.append(backend)
    return result


__all__ = [
    "ResponseFormat",
    "ProxyBackend",
    "ALLORIGINS_RAW",
    "ALLORIGINS_JSON",
    "CODETABS",
    "THINGPROXY",
    "BACKENDS",
    "DEFAULT_FETCH_BACKENDS",
    "DEFAULT_RESOLVE_BACKENDS",
    "backends_by_name",
    "encode_uri_component",
]

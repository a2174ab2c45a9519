# tests/conftest.py
import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

# 1) Добавляем src в sys.path, чтобы работал импорт "aliviral.…" без установки пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from aliviral.config.config_service import ConfigService  # noqa: E402


# ──────────────────────────────────────────────────────────────────────────────
#                          🔧 Общие фикстуры
# ──────────────────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _reset_config_singleton():
    """Каждый тест получает свежий ConfigService."""
    ConfigService.reset()
    yield
    ConfigService.reset()


def proxied_target(request: httpx.Request) -> str:
    """Достаёт исходный URL из запроса к любому прокси-бэкенду."""
    params = request.url.params
    if "url" in params:
        return params["url"]
    if "quest" in params:
        return params["quest"]
    raw_path = request.url.raw_path.decode()
    marker = "/fetch/"
    return raw_path.split(marker, 1)[1] if marker in raw_path else str(request.url)


class RecordingTransport:
    """MockTransport, который запоминает (host, целевой URL) каждого запроса."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.calls: List[tuple] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._dispatch)

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.url.host, proxied_target(request)))
        return self._handler(request)

    @property
    def hosts(self) -> List[str]:
        return [host for host, _ in self.calls]

    @property
    def targets(self) -> List[str]:
        return [target for _, target in self.calls]


@pytest.fixture
def recording_transport():
    """Фабрика RecordingTransport: recording_transport(handler)."""
    return RecordingTransport


def product_html(title: str = "Smart Watch Pro", filler: int = 800) -> str:
    """Минимальная «настоящая» страница товара длиннее порога в 500 символов."""
    return (
        "<html><head>"
        f'<meta property="og:title" content="{title} | AliExpress">'
        "</head><body>"
        f'<h1 class="product-title-text">{title}</h1>'
        f"<p>{'x' * filler}</p>"
        "</body></html>"
    )


@pytest.fixture
def make_product_html():
    """Фабрика HTML страницы товара: make_product_html(title=..., filler=...)."""
    return product_html

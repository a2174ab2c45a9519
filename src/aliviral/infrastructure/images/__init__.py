# 🖼️ aliviral/infrastructure/images/__init__.py
"""🖼️ Показ зображень із fallback через image-проксі."""

from .display_fallback import (
    DEFAULT_IMAGE_PROXY_BASE,
    DisplayAttempt,
    ImageLoadState,
    on_load_error,
    proxy_rewrite,
    resolve_display_url,
    start_attempt,
)

__all__ = [
    "DEFAULT_IMAGE_PROXY_BASE",
    "DisplayAttempt",
    "ImageLoadState",
    "on_load_error",
    "proxy_rewrite",
    "resolve_display_url",
    "start_attempt",
]

# 🧰 aliviral/shared/utils/__init__.py
"""
🧰 Пакет спільних утиліт: логування та колекції.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    LogTag,
    get_logger,
    init_logging,
    init_logging_from_config,
    log_event,
)

# 🔁 Колекції
from .collections import uniq_keep_order

__all__ = [
    # logging
    "LOG_NAME",
    "LogTag",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    "log_event",
    # collections
    "uniq_keep_order",
]

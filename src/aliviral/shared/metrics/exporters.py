# 📈 aliviral/shared/metrics/exporters.py
"""📈 Ледачий запуск HTTP-експортера Prometheus (`/metrics`)."""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import start_http_server	# 📈 Вбудований HTTP-сервер метрик

# 🔠 Системні імпорти
import logging	# 🧾 Логування
import threading	# 🔒 Одноразовий старт

# 🧩 Внутрішні модулі проєкту
from aliviral.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера

logger = logging.getLogger(f"{LOG_NAME}.metrics")

_lock = threading.Lock()
_started_port: int = 0


def maybe_start_prometheus(port: int = 9108, addr: str = "0.0.0.0") -> bool:
    """
    📈 Стартує експортер один раз на процес.

    Returns:
        bool: True, якщо сервер запущено саме цим викликом.
    """
    global _started_port
    with _lock:
        if _started_port:
            logger.debug("📈 Експортер уже працює на порті %s", _started_port)
            return False
        start_http_server(port, addr=addr)
        _started_port = port
    logger.info("📈 Prometheus-експортер слухає %s:%s", addr, port)
    return True


__all__ = ["maybe_start_prometheus"]

# 📊 aliviral/shared/metrics/__init__.py
"""
📊 Prometheus-метрики пайплайна аналізу товару.

🔹 `PROXY_ATTEMPTS` — спроби через проксі-бекенди (backend × outcome).
🔹 `SHORT_LINK_RESOLUTIONS` — результати розгортання коротких посилань.
🔹 `EXTRACTIONS` — результати екстракції (complete / incomplete).
🔹 `PAGE_FETCH_SECONDS` — гістограма тривалості повного ланцюжка завантаження.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Histogram                      # 📊 Prometheus-метрики

from .exporters import maybe_start_prometheus                          # 📈 HTTP-експортер

# ================================
# 🌐 ПРОКСІ
# ================================
PROXY_ATTEMPTS = Counter(
    "proxy_attempts_total",                                          # 🏷️ Імʼя метрики
    "Proxy backend attempts by outcome",                             # 📝 Опис у Prometheus
    ["backend", "outcome"],
)

SHORT_LINK_RESOLUTIONS = Counter(
    "short_link_resolutions_total",
    "Short link resolution results",
    ["outcome"],
)

# ================================
# 🧾 ЕКСТРАКЦІЯ
# ================================
EXTRACTIONS = Counter(
    "extractions_total",
    "Product extraction results",
    ["outcome"],
)

# ================================
# ⏱️ ЛАТЕНТНІСТЬ
# ================================
PAGE_FETCH_SECONDS = Histogram(
    "page_fetch_seconds",
    "Time to fetch a product page through the proxy chain",
)


__all__ = [
    "PROXY_ATTEMPTS",
    "SHORT_LINK_RESOLUTIONS",
    "EXTRACTIONS",
    "PAGE_FETCH_SECONDS",
    "maybe_start_prometheus",
]

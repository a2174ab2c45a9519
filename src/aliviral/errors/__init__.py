# 🚨 aliviral/errors/__init__.py
"""🚨 Публічні винятки пайплайна."""

from .custom_errors import (
    AppError,
    ErrorCode,
    ExtractionIncomplete,
    FetchExhausted,
    ParseFailure,
    ProxyFailure,
    ResolutionFailure,
)

__all__ = [
    "AppError",
    "ErrorCode",
    "ExtractionIncomplete",
    "FetchExhausted",
    "ParseFailure",
    "ProxyFailure",
    "ResolutionFailure",
]

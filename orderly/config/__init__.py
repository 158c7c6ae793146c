"""
Orderly Config — Public API
=============================
"""

from orderly.config.settings import DEFAULT_SETTINGS, OrderlySettings

__all__ = [
    "OrderlySettings",
    "DEFAULT_SETTINGS",
]

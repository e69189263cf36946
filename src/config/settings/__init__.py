"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.phone import (
    DEFAULT_CACHE_TTL_SECONDS,
    PhoneResolutionSettings,
    get_phone_resolution_settings,
)
from config.settings.wppconnect import (
    WppConnectSettings,
    get_wppconnect_settings,
)

__all__ = [
    "DEFAULT_CACHE_TTL_SECONDS",
    "BaseSettings",
    "Environment",
    "PhoneResolutionSettings",
    "WppConnectSettings",
    "get_base_settings",
    "get_phone_resolution_settings",
    "get_wppconnect_settings",
]

"""Stores — implementações concretas de armazenamento.

Módulos disponíveis:
    - phone_resolution_cache: cache em memória com TTL das resoluções
"""

from __future__ import annotations

from app.infra.stores.phone_resolution_cache import (
    DEFAULT_TTL_SECONDS,
    MemoryPhoneResolutionCache,
)

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "MemoryPhoneResolutionCache",
]

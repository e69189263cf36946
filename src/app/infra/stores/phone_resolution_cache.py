"""Cache em memória de resoluções de telefone com TTL.

Escopo de um processo: sem persistência, compartilhamento ou replicação.
O relógio é injetável para que testes avancem o tempo sem dormir.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from app.domain.phone_number import CacheEntry, CacheStats
from app.protocols.phone_resolution import ResolutionCacheProtocol

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60  # 24h


class MemoryPhoneResolutionCache(ResolutionCacheProtocol):
    """Mapa entrada bruta -> CacheEntry com expiração preguiçosa."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds deve ser > 0")
        self._ttl_seconds = ttl_seconds
        self._clock = clock or time.time
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> CacheEntry | None:
        """Retorna a entrada se existir e não estiver expirada."""
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock(), self._ttl_seconds):
            return None
        return entry

    def set(
        self,
        key: str,
        *,
        normalized: str,
        has_ninth_digit: bool,
        verified: bool = False,
    ) -> CacheEntry:
        """Grava uma entrada nova (sobrescreve por completo)."""
        entry = CacheEntry(
            normalized=normalized,
            has_ninth_digit=has_ninth_digit,
            created_at=self._clock(),
            verified=verified,
        )
        self._entries[key] = entry
        return entry

    def sweep(self) -> int:
        """Remove entradas expiradas; entradas válidas não são afetadas."""
        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if entry.is_expired(now, self._ttl_seconds)
        ]
        for key in expired:
            del self._entries[key]

        if expired:
            logger.info(
                "phone_cache_swept",
                extra={
                    "component": "phone_resolution_cache",
                    "action": "sweep",
                    "result": "ok",
                    "items_removed": len(expired),
                    "items_remaining": len(self._entries),
                },
            )
        return len(expired)

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.info(
            "phone_cache_cleared",
            extra={
                "component": "phone_resolution_cache",
                "action": "clear",
                "result": "ok",
                "items_cleared": count,
            },
        )

    def stats(self) -> CacheStats:
        """Retorna estatísticas do cache (útil para debug/monitoramento)."""
        now = self._clock()
        entries = list(self._entries.values())
        with_ninth = sum(1 for e in entries if e.has_ninth_digit)
        return CacheStats(
            total=len(entries),
            with_ninth_digit=with_ninth,
            without_ninth_digit=len(entries) - with_ninth,
            expired=sum(1 for e in entries if e.is_expired(now, self._ttl_seconds)),
            verified=sum(1 for e in entries if e.verified),
            oldest_entry=min((e.created_at for e in entries), default=None),
        )

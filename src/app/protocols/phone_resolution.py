"""Protocolos de domínio para resolução de identificadores WhatsApp.

Interfaces leves dependidas pelo resolver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.phone_number import CacheEntry, CacheStats

# Predicado externo: "este identificador existe na plataforma?"
ExistsCheck = Callable[[str], Awaitable[bool]]


class ResolutionCacheProtocol(ABC):
    """Contrato do cache de resoluções (chave = entrada bruta).

    Entradas expiradas nunca são retornadas por get(), mas só são removidas
    por sweep().
    """

    @abstractmethod
    def get(self, key: str) -> CacheEntry | None:
        """Retorna a entrada válida (não expirada) ou None."""

    @abstractmethod
    def set(
        self,
        key: str,
        *,
        normalized: str,
        has_ninth_digit: bool,
        verified: bool = False,
    ) -> CacheEntry:
        """Cria ou sobrescreve a entrada inteira para a chave."""

    @abstractmethod
    def sweep(self) -> int:
        """Remove entradas expiradas.

        Returns:
            Quantidade de entradas removidas.
        """

    @abstractmethod
    def clear(self) -> None:
        """Remove todas as entradas."""

    @abstractmethod
    def stats(self) -> CacheStats:
        """Retorna contadores sem efeitos colaterais."""


class PhoneExistenceCheckerProtocol(Protocol):
    """Contrato para consulta de existência de um identificador na plataforma."""

    async def exists(self, identifier: str) -> bool:
        """Retorna True se o identificador (ex: 5511...@c.us) estiver registrado."""
        ...

"""Modelos de domínio da resolução de identificadores WhatsApp.

Value objects imutáveis: produzidos a cada resolução e nunca alterados.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class NormalizationReason(StrEnum):
    """Motivo (auditável) do identificador escolhido."""

    FROM_CACHE = "from_cache"
    MOBILE_WITH_NINTH_DIGIT = "mobile_with_ninth_digit"
    MOBILE_NINTH_DIGIT_ADDED = "mobile_ninth_digit_added"
    LANDLINE = "landline"
    INTERNATIONAL = "international"
    VERIFIED_WITH_NINTH_DIGIT = "verified_with_ninth_digit"
    VERIFIED_WITHOUT_NINTH_DIGIT = "verified_without_ninth_digit"
    NOT_FOUND_USING_MODERN_FORMAT = "not_found_using_modern_format"

    @property
    def is_mobile_guess(self) -> bool:
        """True para palpites de celular ainda não verificados na plataforma."""
        return self in (
            NormalizationReason.MOBILE_WITH_NINTH_DIGIT,
            NormalizationReason.MOBILE_NINTH_DIGIT_ADDED,
        )

    @property
    def is_verified(self) -> bool:
        """True quando a plataforma foi consultada."""
        return self in (
            NormalizationReason.VERIFIED_WITH_NINTH_DIGIT,
            NormalizationReason.VERIFIED_WITHOUT_NINTH_DIGIT,
            NormalizationReason.NOT_FOUND_USING_MODERN_FORMAT,
        )


@dataclass(frozen=True, slots=True)
class NormalizedResult:
    """Resultado da resolução de um número bruto.

    Attributes:
        original: Entrada bruta, preservada literalmente (chave do cache)
        normalized: Identificador da plataforma já com sufixo (ex: 5511...@c.us)
        has_ninth_digit: Se o identificador inclui o nono dígito
        was_modified: Se normalized difere de original
        area_code: DDD extraído ou None se não for número brasileiro reconhecido
        reason: Motivo da escolha
    """

    original: str
    normalized: str
    has_ninth_digit: bool
    was_modified: bool
    area_code: str | None
    reason: NormalizationReason

    @property
    def digits(self) -> str:
        """Identificador sem o sufixo de endereçamento."""
        return self.normalized.split("@", 1)[0]

    def to_dict(self) -> dict[str, Any]:
        """Serializa para dict (reason como string)."""
        data = asdict(self)
        data["reason"] = str(self.reason)
        return data


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Entrada do cache de resoluções, chaveada pela entrada bruta.

    Attributes:
        normalized: Identificador resolvido (com sufixo)
        has_ninth_digit: Se o identificador inclui o nono dígito
        created_at: Epoch em segundos da gravação
        verified: Resposta definitiva, sem necessidade de nova consulta
    """

    normalized: str
    has_ninth_digit: bool
    created_at: float
    verified: bool = False

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, now: float, ttl_seconds: float) -> bool:
        return self.age(now) >= ttl_seconds


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Contadores do cache (somente leitura)."""

    total: int
    with_ninth_digit: int
    without_ninth_digit: int
    expired: int
    verified: int
    oldest_entry: float | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

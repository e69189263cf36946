"""Settings da resolução de telefones brasileiros.

TTL do cache de resoluções e sufixo de endereçamento da plataforma.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from app.constants.brazil_phone import WHATSAPP_USER_SUFFIX

DEFAULT_CACHE_TTL_SECONDS: int = 86400  # 24h


@dataclass(frozen=True)
class PhoneResolutionSettings:
    """Configurações do resolver de identificadores.

    Attributes:
        cache_ttl_seconds: Janela de validade de uma resolução em cache
        address_suffix: Marcador de endereçamento anexado aos dígitos
    """

    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    address_suffix: str = WHATSAPP_USER_SUFFIX

    def validate(self) -> list[str]:
        """Valida configurações do resolver.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.cache_ttl_seconds <= 0:
            errors.append("PHONE_CACHE_TTL_SECONDS deve ser > 0")

        if not self.address_suffix.startswith("@"):
            errors.append("WHATSAPP_ADDRESS_SUFFIX deve começar com '@'")

        return errors


def _load_from_env() -> PhoneResolutionSettings:
    """Carrega PhoneResolutionSettings de variáveis de ambiente."""
    return PhoneResolutionSettings(
        cache_ttl_seconds=int(
            os.getenv("PHONE_CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS))
        ),
        address_suffix=os.getenv("WHATSAPP_ADDRESS_SUFFIX", WHATSAPP_USER_SUFFIX),
    )


@lru_cache(maxsize=1)
def get_phone_resolution_settings() -> PhoneResolutionSettings:
    """Retorna instância cacheada de PhoneResolutionSettings."""
    return _load_from_env()

"""Settings do servidor WPPConnect.

Usado pelo verificador de existência de números (check-number-status).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class WppConnectSettings:
    """Configurações do WPPConnect Server.

    Attributes:
        base_url: URL base do servidor (ex: http://localhost:21465)
        session: Nome da sessão WhatsApp no servidor
        token: Bearer token gerado para a sessão
        request_timeout_seconds: Timeout de cada consulta HTTP
    """

    base_url: str = ""
    session: str = ""
    token: str = ""
    request_timeout_seconds: float = 10.0

    def get_check_number_endpoint(self, digits: str) -> str:
        """Retorna URL de check-number-status para os dígitos informados.

        Raises:
            ValueError: Se base_url ou session não configurados.
        """
        if not self.base_url or not self.session:
            raise ValueError("WPPCONNECT_BASE_URL e WPPCONNECT_SESSION são obrigatórios")
        return f"{self.base_url.rstrip('/')}/api/{self.session}/check-number-status/{digits}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do WPPConnect.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.base_url:
            errors.append("WPPCONNECT_BASE_URL não configurado")

        if not self.session:
            errors.append("WPPCONNECT_SESSION não configurado")

        if not self.token:
            errors.append("WPPCONNECT_TOKEN não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("WPPCONNECT_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> WppConnectSettings:
    """Carrega WppConnectSettings a partir de variáveis de ambiente."""
    return WppConnectSettings(
        base_url=os.getenv("WPPCONNECT_BASE_URL", ""),
        session=os.getenv("WPPCONNECT_SESSION", ""),
        token=os.getenv("WPPCONNECT_TOKEN", ""),
        request_timeout_seconds=float(os.getenv("WPPCONNECT_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_wppconnect_settings() -> WppConnectSettings:
    """Retorna instância cacheada de WppConnectSettings."""
    return _load_from_env()

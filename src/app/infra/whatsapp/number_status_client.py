"""Verificador de existência de números via WPPConnect Server.

Implementação concreta do predicado `exists` usado por
BrazilianPhoneResolver.resolve_verified (endpoint check-number-status).
Erros HTTP e de transporte propagam: o resolver decide o fallback.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from app.protocols.phone_resolution import PhoneExistenceCheckerProtocol
from app.services.phone_transformer import clean_digits, strip_address_suffix
from config.settings import WppConnectSettings, get_wppconnect_settings
from utils.masking import mask_phone

logger = logging.getLogger(__name__)


class NumberStatus(BaseModel):
    """Status de um número no WhatsApp (payload do WPPConnect)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    number_exists: bool = Field(default=False, alias="numberExists")
    can_receive_message: bool | None = Field(default=None, alias="canReceiveMessage")
    is_business: bool | None = Field(default=None, alias="isBusiness")

    @classmethod
    def from_payload(cls, payload: Any) -> NumberStatus:
        """Aceita o corpo com ou sem o envelope {"status", "response"}."""
        if not isinstance(payload, dict):
            return cls()
        body = payload.get("response", payload)
        if not isinstance(body, dict):
            return cls()
        return cls.model_validate(body)


class WppConnectNumberStatusClient(PhoneExistenceCheckerProtocol):
    """Consulta check-number-status no WPPConnect Server."""

    def __init__(
        self,
        *,
        settings: WppConnectSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_wppconnect_settings()
        self._http_client = http_client

    async def exists(self, identifier: str) -> bool:
        """Retorna True se o identificador estiver registrado no WhatsApp.

        Raises:
            httpx.HTTPError: Falha de transporte ou status HTTP de erro.
            ValueError: Settings incompletas.
        """
        status = await self.check_number_status(identifier)
        return status.number_exists

    async def check_number_status(self, identifier: str) -> NumberStatus:
        """Consulta o status completo do número."""
        digits = clean_digits(strip_address_suffix(identifier))
        url = self._settings.get_check_number_endpoint(digits)
        headers = {"Authorization": f"Bearer {self._settings.token}"}

        if self._http_client is not None:
            response = await self._http_client.get(url, headers=headers)
        else:
            async with httpx.AsyncClient(
                timeout=self._settings.request_timeout_seconds
            ) as client:
                response = await client.get(url, headers=headers)

        response.raise_for_status()
        status = NumberStatus.from_payload(response.json())

        logger.debug(
            "wppconnect_number_status",
            extra={
                "component": "wppconnect_client",
                "candidate": mask_phone(digits),
                "number_exists": status.number_exists,
                "status_code": response.status_code,
            },
        )
        return status

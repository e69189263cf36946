"""Filters de logging para injeção de contexto e mascaramento.

- CorrelationIdFilter: injeta correlation_id e service
- PhoneMaskingFilter: mascara campos de telefone passados via `extra`
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils.masking import mask_phone

if TYPE_CHECKING:
    from collections.abc import Callable

# Campos de `extra` que podem carregar telefone ou identificador da plataforma
PHONE_FIELDS = frozenset({"phone", "candidate", "normalized"})


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Se correlation_id já foi passado via `extra`, o valor é preservado.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class PhoneMaskingFilter(logging.Filter):
    """Mascara telefones em campos conhecidos do record.

    Mantém apenas os 4 últimos dígitos; nunca descarta o record.
    """

    def __init__(self, fields: frozenset[str] = PHONE_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for field in self._fields:
            value = getattr(record, field, None)
            if isinstance(value, str) and _has_clear_digits(value):
                setattr(record, field, mask_phone(value))
        return True


def _has_clear_digits(value: str) -> bool:
    # Valores já mascarados mantêm no máximo 4 dígitos visíveis
    return sum(char.isdigit() for char in value) > 4

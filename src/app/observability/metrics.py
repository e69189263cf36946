"""Registro de métricas via structured logging.

As métricas saem como logs estruturados (`metric_type` + campos) e são
agregadas depois pelo backend de logs.

Métricas suportadas:
- cache_lookup: counter de hit/miss do cache de resoluções
- phone_verification: counter por desfecho da verificação na plataforma
- verification_unavailable: counter de falhas do verificador externo
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_cache_lookup(hit: bool, correlation_id: str | None = None) -> None:
    """Registra consulta ao cache de resoluções."""
    logger.debug(
        "metric_cache_lookup",
        extra={
            "metric_type": "cache_lookup",
            "component": "phone_resolver",
            "result": "hit" if hit else "miss",
            "correlation_id": correlation_id,
        },
    )


def record_verification(
    outcome: str,
    checks: int,
    correlation_id: str | None = None,
) -> None:
    """Registra desfecho de uma verificação na plataforma.

    Args:
        outcome: Motivo final (ex: "verified_with_ninth_digit")
        checks: Quantidade de chamadas ao predicado externo
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_phone_verification",
        extra={
            "metric_type": "phone_verification",
            "component": "phone_resolver",
            "outcome": outcome,
            "checks": checks,
            "correlation_id": correlation_id,
        },
    )


def record_verification_unavailable(
    error_type: str,
    correlation_id: str | None = None,
) -> None:
    """Registra falha do verificador externo (degradação silenciosa)."""
    logger.warning(
        "metric_verification_unavailable",
        extra={
            "metric_type": "verification_unavailable",
            "component": "phone_resolver",
            "error_type": error_type,
            "correlation_id": correlation_id,
        },
    )

"""Bootstrap da aplicação — inicialização e wiring.

Composition root: configura logging, valida settings e conecta
implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_phone_resolver, get_number_status_client

    initialize_app()
    resolver = get_phone_resolver()
    checker = get_number_status_client()
    result = await resolver.resolve_verified("(11) 98765-4321", checker.exists)
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.infra.whatsapp.number_status_client import WppConnectNumberStatusClient
from app.observability import get_correlation_id
from app.services.phone_resolver import BrazilianPhoneResolver
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_phone_resolution_settings,
    get_wppconnect_settings,
)

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa logging em nível DEBUG para testes."""
    configure_logging(
        level="DEBUG",
        service_name=f"{get_base_settings().service_name}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        RuntimeError: Configuração inválida em ambiente estrito.
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"phone: {error}" for error in get_phone_resolution_settings().validate())
    errors.extend(f"wppconnect: {error}" for error in get_wppconnect_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


@lru_cache(maxsize=1)
def get_phone_resolver() -> BrazilianPhoneResolver:
    """Obtém o resolver do processo (singleton, dono do cache)."""
    return BrazilianPhoneResolver(settings=get_phone_resolution_settings())


@lru_cache(maxsize=1)
def get_number_status_client() -> WppConnectNumberStatusClient:
    """Obtém o verificador WPPConnect (singleton)."""
    return WppConnectNumberStatusClient(settings=get_wppconnect_settings())

"""Formatters de logging estruturado.

Todo log sai como JSON com os campos obrigatórios abaixo. Nomes de
evento em snake_case vão em `message`; dados contextuais vão em `extra`.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-17 10:30:00,123",
            "level": "INFO",
            "logger": "app.services.phone_resolver",
            "message": "phone_verified",
            "correlation_id": "abc-123",
            "service": "zap_resolver",
            "phone": "*********4321"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)

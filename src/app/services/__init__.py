"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.phone_resolver import BrazilianPhoneResolver

__all__ = [
    "BrazilianPhoneResolver",
]

"""Protocolos e contratos do core da aplicação."""

from .phone_resolution import (
    ExistsCheck,
    PhoneExistenceCheckerProtocol,
    ResolutionCacheProtocol,
)

__all__ = [
    "ExistsCheck",
    "PhoneExistenceCheckerProtocol",
    "ResolutionCacheProtocol",
]

"""Observabilidade — correlation_id e métricas.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_verification_unavailable
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_cache_lookup,
    record_verification,
    record_verification_unavailable,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_cache_lookup",
    "record_verification",
    "record_verification_unavailable",
    "reset_correlation_id",
    "set_correlation_id",
]

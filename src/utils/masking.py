"""Mascaramento de telefones para logs (sem PII)."""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")


def mask_phone(value: str) -> str:
    """Mascara um telefone mantendo apenas os 4 últimos dígitos.

    Exemplos:
        >>> mask_phone("+55 (11) 98765-4321")
        '*********4321'
        >>> mask_phone("123")
        '***'
    """
    digits = _NON_DIGITS.sub("", str(value))
    if len(digits) <= 4:
        return "*" * len(digits)
    return "*" * (len(digits) - 4) + digits[-4:]

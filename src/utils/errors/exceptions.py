"""Exceções da normalização de telefones."""

from __future__ import annotations


class PhoneNormalizationError(ValueError):
    """Base para falhas de normalização de telefone."""


class InvalidLengthError(PhoneNormalizationError):
    """Número com quantidade de dígitos fora da faixa aceita.

    Erro do chamador: não deve ser re-tentado.
    """

    def __init__(self, digit_count: int, min_digits: int, max_digits: int) -> None:
        self.digit_count = digit_count
        self.min_digits = min_digits
        self.max_digits = max_digits
        if digit_count < min_digits:
            detail = f"muito curto: {digit_count} dígitos (mínimo {min_digits})"
        else:
            detail = f"muito longo: {digit_count} dígitos (máximo {max_digits})"
        super().__init__(f"Número de telefone {detail}")


class VerificationUnavailableError(RuntimeError):
    """Falha do verificador externo de existência (uso interno).

    Nunca chega ao chamador: a resolução degrada para o palpite determinístico.
    """

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Verificação indisponível: {type(cause).__name__}")

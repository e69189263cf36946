"""Transformações puras de números de celular brasileiros.

Em 2012 a ANATEL passou a exigir o nono dígito ('9') à esquerda dos números
móveis. Contas de WhatsApp registradas antes da migração podem continuar
indexadas no formato antigo de 8 dígitos, então precisamos gerar as duas
formas de forma segura:

    Celular: 55 + DDD(2) + 9XXXX-XXXX  (13 dígitos)
    Antigo:  55 + DDD(2) + XXXX-XXXX   (12 dígitos)

Todas as funções operam sobre strings apenas com dígitos, são determinísticas
e nunca levantam exceção. Inserção e remoção são no-op quando não conseguem
justificar a alteração (DDD inválido, comprimento ou dígito inesperado).
"""

from __future__ import annotations

import re

from app.constants.brazil_phone import (
    BRAZIL_COUNTRY_CODE,
    MOBILE_LEADING_DIGITS,
    NINTH_DIGIT,
    VALID_AREA_CODES,
    WHATSAPP_USER_SUFFIX,
)

_NON_DIGITS = re.compile(r"\D")

# 55 + DDD ocupam as posições 0-3; o número local começa no índice 4
_LOCAL_START = 4
_LEGACY_LENGTH = 12
_MODERN_LENGTH = 13


def clean_digits(raw: str) -> str:
    """Remove todo caractere não numérico."""
    return _NON_DIGITS.sub("", str(raw))


def add_country_code(digits: str) -> str:
    """Prefixa '55' em números locais (10 ou 11 dígitos) sem código do país.

    Outros comprimentos ficam intactos: podem já ter o código, ser
    estrangeiros ou inválidos (rejeitados adiante).
    """
    if not digits.startswith(BRAZIL_COUNTRY_CODE) and len(digits) in (10, 11):
        return BRAZIL_COUNTRY_CODE + digits
    return digits


def extract_area_code(digits: str) -> str | None:
    """Retorna o DDD se o número for brasileiro com DDD conhecido.

    None indica número internacional ou não reconhecido (não é erro).
    """
    if digits.startswith(BRAZIL_COUNTRY_CODE) and len(digits) >= _LOCAL_START:
        area_code = digits[2:_LOCAL_START]
        return area_code if area_code in VALID_AREA_CODES else None
    return None


def is_mobile_number(digits: str) -> bool:
    """Classifica o número como celular pelo comprimento e primeiro dígito local."""
    if not digits.startswith(BRAZIL_COUNTRY_CODE):
        return False
    if len(digits) == _MODERN_LENGTH:
        return digits[_LOCAL_START] == NINTH_DIGIT
    if len(digits) == _LEGACY_LENGTH:
        return digits[_LOCAL_START] in MOBILE_LEADING_DIGITS
    return False


def remove_ninth_digit(digits: str) -> str:
    """Remove o nono dígito de um celular de 13 dígitos com DDD válido.

    Retorna a entrada inalterada quando a remoção não se justifica.
    """
    if (
        len(digits) == _MODERN_LENGTH
        and extract_area_code(digits) is not None
        and digits[_LOCAL_START] == NINTH_DIGIT
    ):
        return digits[:_LOCAL_START] + digits[_LOCAL_START + 1:]
    return digits


def add_ninth_digit(digits: str) -> str:
    """Insere o nono dígito em um celular de 12 dígitos com DDD válido.

    Retorna a entrada inalterada quando a inserção não se justifica.
    """
    if (
        len(digits) == _LEGACY_LENGTH
        and extract_area_code(digits) is not None
        and digits[_LOCAL_START] in MOBILE_LEADING_DIGITS
    ):
        return digits[:_LOCAL_START] + NINTH_DIGIT + digits[_LOCAL_START:]
    return digits


def generate_both_formats(
    raw: str,
    suffix: str = WHATSAPP_USER_SUFFIX,
) -> tuple[str, str]:
    """Gera os identificadores (com 9, sem 9) para um número bruto.

    Args:
        raw: Número em qualquer formato.
        suffix: Marcador de endereçamento da plataforma.

    Returns:
        Tupla (with9, without9), ambos já com sufixo. Iguais quando o número
        não é um celular brasileiro ambíguo.
    """
    digits = add_country_code(clean_digits(raw))
    # Número já no formato moderno é o próprio with9; nunca reconstruir por inserção
    if len(digits) == _MODERN_LENGTH and is_mobile_number(digits):
        with9 = digits
        without9 = remove_ninth_digit(digits)
    else:
        without9 = digits
        with9 = add_ninth_digit(digits)
    return f"{with9}{suffix}", f"{without9}{suffix}"


def strip_address_suffix(identifier: str, suffix: str = WHATSAPP_USER_SUFFIX) -> str:
    """Remove o sufixo de endereçamento, se presente."""
    if suffix and identifier.endswith(suffix):
        return identifier[: -len(suffix)]
    return identifier


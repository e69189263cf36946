"""Constantes de numeração telefônica brasileira.

Tabela de DDDs válidos e marcadores usados na normalização do nono dígito.
"""

from __future__ import annotations

from typing import Final

BRAZIL_COUNTRY_CODE: Final[str] = "55"
NINTH_DIGIT: Final[str] = "9"

# Celulares nunca começam com 0-5 no número local
MOBILE_LEADING_DIGITS: Final[frozenset[str]] = frozenset({"6", "7", "8", "9"})

MIN_PHONE_DIGITS: Final[int] = 10
MAX_PHONE_DIGITS: Final[int] = 15

# Sufixo de endereçamento de usuários no WhatsApp Web (wppconnect/whatsapp-web.js)
WHATSAPP_USER_SUFFIX: Final[str] = "@c.us"

VALID_AREA_CODES: Final[frozenset[str]] = frozenset(
    {
        # Sul
        "41", "42", "43", "44", "45", "46",  # PR
        "47", "48", "49",  # SC
        "51", "53", "54", "55",  # RS
        # Sudeste
        "11", "12", "13", "14", "15", "16", "17", "18", "19",  # SP
        "21", "22", "24",  # RJ
        "27", "28",  # ES
        "31", "32", "33", "34", "35", "37", "38",  # MG
        # Centro-Oeste
        "61",  # DF
        "62", "64",  # GO
        "65", "66",  # MT
        "67",  # MS
        # Nordeste
        "71", "73", "74", "75", "77",  # BA
        "79",  # SE
        "81", "87",  # PE
        "82",  # AL
        "83",  # PB
        "84",  # RN
        "85", "88",  # CE
        "86", "89",  # PI
        "98", "99",  # MA
        # Norte
        "63",  # TO
        "68",  # AC
        "69",  # RO
        "91", "93", "94",  # PA
        "92", "97",  # AM
        "95",  # RR
        "96",  # AP
    }
)

"""Configuração do pytest para o projeto."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings import (  # noqa: E402
    get_base_settings,
    get_phone_resolution_settings,
    get_wppconnect_settings,
)


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Settings são lidas de env com lru_cache; isola cada teste."""
    for getter in (get_base_settings, get_phone_resolution_settings, get_wppconnect_settings):
        getter.cache_clear()
    yield
    for getter in (get_base_settings, get_phone_resolution_settings, get_wppconnect_settings):
        getter.cache_clear()

"""Resolver de identificadores WhatsApp para telefones brasileiros.

Duas operações, separadas de propósito:

- resolve(): síncrona, sem IO. Classifica o número e faz um único palpite
  (formato moderno para celulares), gravando o resultado no cache.
- resolve_verified(): assíncrona. Para celulares ambíguos consulta o
  predicado externo `exists` primeiro com o nono dígito e depois sem ele,
  memorizando a resposta autoritativa.

Falhas do predicado nunca chegam ao chamador: a resolução degrada para o
palpite determinístico e a falha é registrada (log + métrica + contador).
Chamadas concorrentes para o mesmo número não são coalescidas; ambas
convergem para a mesma resposta e a última gravação no cache prevalece.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from app.constants.brazil_phone import (
    BRAZIL_COUNTRY_CODE,
    MAX_PHONE_DIGITS,
    MIN_PHONE_DIGITS,
)
from app.domain.phone_number import CacheEntry, CacheStats, NormalizationReason, NormalizedResult
from app.infra.stores.phone_resolution_cache import MemoryPhoneResolutionCache
from app.observability import (
    get_correlation_id,
    record_cache_lookup,
    record_verification,
    record_verification_unavailable,
)
from app.protocols.phone_resolution import ExistsCheck, ResolutionCacheProtocol
from app.services.phone_transformer import (
    add_country_code,
    add_ninth_digit,
    clean_digits,
    extract_area_code,
    generate_both_formats,
    is_mobile_number,
    strip_address_suffix,
)
from config.logging import log_fallback
from config.settings import PhoneResolutionSettings, get_phone_resolution_settings
from utils.errors import InvalidLengthError, VerificationUnavailableError
from utils.masking import mask_phone

logger = logging.getLogger(__name__)

_COMPONENT = "phone_resolver"


class BrazilianPhoneResolver:
    """Resolve números brutos para o identificador reconhecido pela plataforma."""

    def __init__(
        self,
        *,
        cache: ResolutionCacheProtocol | None = None,
        settings: PhoneResolutionSettings | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._settings = settings or get_phone_resolution_settings()
        self._suffix = self._settings.address_suffix
        self._cache = cache or MemoryPhoneResolutionCache(
            ttl_seconds=self._settings.cache_ttl_seconds,
            clock=clock,
        )
        self._verification_failures = 0

    @property
    def verification_failures(self) -> int:
        """Quantas vezes o predicado externo falhou desde a criação."""
        return self._verification_failures

    def resolve(self, raw: str) -> NormalizedResult:
        """Resolve sem consultar a plataforma (palpite determinístico).

        Raises:
            InvalidLengthError: Menos de 10 ou mais de 15 dígitos.
        """
        entry = self._cache.get(raw)
        record_cache_lookup(entry is not None, get_correlation_id())
        if entry is not None:
            return self._from_cache(raw, entry)

        result = self._classify(raw)
        self._store(raw, result, verified=not result.reason.is_mobile_guess)
        return result

    async def resolve_verified(self, raw: str, exists: ExistsCheck) -> NormalizedResult:
        """Resolve consultando a plataforma quando o nono dígito é ambíguo.

        Args:
            raw: Número em qualquer formato.
            exists: Predicado assíncrono "o identificador existe?".

        Returns:
            Resultado verificado, ou o palpite de resolve() se o predicado falhar.

        Raises:
            InvalidLengthError: Menos de 10 ou mais de 15 dígitos.
        """
        entry = self._cache.get(raw)
        hit = entry is not None and entry.verified
        record_cache_lookup(hit, get_correlation_id())
        if hit:
            return self._from_cache(raw, entry)

        baseline = self._classify(raw)
        if not baseline.reason.is_mobile_guess:
            self._store(raw, baseline, verified=True)
            return baseline

        with9, without9 = generate_both_formats(raw, self._suffix)
        try:
            result, checks = await self._verify(raw, baseline, with9, without9, exists)
        except Exception as exc:
            self._on_verification_unavailable(VerificationUnavailableError(exc), raw)
            self._store(raw, baseline, verified=False)
            return baseline

        self._store(raw, result, verified=True)
        record_verification(str(result.reason), checks, get_correlation_id())
        return result

    def generate_both_formats(self, raw: str) -> tuple[str, str]:
        """Retorna (with9, without9) com o sufixo configurado."""
        return generate_both_formats(raw, self._suffix)

    def sweep(self) -> int:
        """Remove entradas expiradas do cache; retorna quantas saíram."""
        return self._cache.sweep()

    invalidate = sweep

    def clear(self) -> None:
        self._cache.clear()

    def stats(self) -> CacheStats:
        return self._cache.stats()

    def _classify(self, raw: str) -> NormalizedResult:
        digits = add_country_code(clean_digits(raw))
        if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
            raise InvalidLengthError(len(digits), MIN_PHONE_DIGITS, MAX_PHONE_DIGITS)

        area_code = extract_area_code(digits)
        mobile = is_mobile_number(digits)
        if mobile and len(digits) == 13:
            has_ninth_digit = True
            normalized = digits
            reason = NormalizationReason.MOBILE_WITH_NINTH_DIGIT
        elif mobile and area_code is not None:
            # Sem DDD conhecido não há como justificar a inserção do nono dígito
            has_ninth_digit = True
            normalized = add_ninth_digit(digits)
            reason = NormalizationReason.MOBILE_NINTH_DIGIT_ADDED
        else:
            has_ninth_digit = False
            normalized = digits
            reason = (
                NormalizationReason.LANDLINE
                if digits.startswith(BRAZIL_COUNTRY_CODE)
                else NormalizationReason.INTERNATIONAL
            )

        identifier = f"{normalized}{self._suffix}"
        logger.debug(
            "phone_classified",
            extra={
                "component": _COMPONENT,
                "phone": mask_phone(raw),
                "area_code": area_code,
                "reason": str(reason),
            },
        )
        return NormalizedResult(
            original=raw,
            normalized=identifier,
            has_ninth_digit=has_ninth_digit,
            was_modified=raw != identifier,
            area_code=area_code,
            reason=reason,
        )

    async def _verify(
        self,
        raw: str,
        baseline: NormalizedResult,
        with9: str,
        without9: str,
        exists: ExistsCheck,
    ) -> tuple[NormalizedResult, int]:
        # Formato moderno primeiro; o antigo só vale para registros pré-2012
        if await exists(with9):
            return self._verified(
                raw, baseline, with9, True, NormalizationReason.VERIFIED_WITH_NINTH_DIGIT
            ), 1

        if without9 == with9:
            checks = 1
        else:
            checks = 2
            if await exists(without9):
                return self._verified(
                    raw,
                    baseline,
                    without9,
                    False,
                    NormalizationReason.VERIFIED_WITHOUT_NINTH_DIGIT,
                ), checks

        logger.warning(
            "phone_not_found_on_platform",
            extra={"component": _COMPONENT, "phone": mask_phone(raw), "checks": checks},
        )
        return self._verified(
            raw, baseline, with9, True, NormalizationReason.NOT_FOUND_USING_MODERN_FORMAT
        ), checks

    def _verified(
        self,
        raw: str,
        baseline: NormalizedResult,
        identifier: str,
        has_ninth_digit: bool,
        reason: NormalizationReason,
    ) -> NormalizedResult:
        return NormalizedResult(
            original=raw,
            normalized=identifier,
            has_ninth_digit=has_ninth_digit,
            was_modified=raw != identifier,
            area_code=baseline.area_code,
            reason=reason,
        )

    def _from_cache(self, raw: str, entry: CacheEntry) -> NormalizedResult:
        digits = strip_address_suffix(entry.normalized, self._suffix)
        return NormalizedResult(
            original=raw,
            normalized=entry.normalized,
            has_ninth_digit=entry.has_ninth_digit,
            was_modified=raw != entry.normalized,
            area_code=extract_area_code(digits),
            reason=NormalizationReason.FROM_CACHE,
        )

    def _store(self, raw: str, result: NormalizedResult, *, verified: bool) -> None:
        self._cache.set(
            raw,
            normalized=result.normalized,
            has_ninth_digit=result.has_ninth_digit,
            verified=verified,
        )

    def _on_verification_unavailable(
        self,
        error: VerificationUnavailableError,
        raw: str,
    ) -> None:
        self._verification_failures += 1
        error_type = type(error.cause).__name__
        log_fallback(
            logger,
            _COMPONENT,
            reason="verification_unavailable",
            error_type=error_type,
        )
        logger.debug(
            "phone_verification_skipped",
            extra={"component": _COMPONENT, "phone": mask_phone(raw)},
        )
        record_verification_unavailable(error_type, get_correlation_id())

"""Testes do BrazilianPhoneResolver — caminho verificado (resolve_verified)."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from app.domain.phone_number import NormalizationReason
from app.services.phone_resolver import BrazilianPhoneResolver
from config.settings import PhoneResolutionSettings
from tests.fakes.fake_clock import FakeClock
from tests.fakes.fake_exists_check import FakeExistsCheck
from utils.errors import InvalidLengthError

DAY = 24 * 60 * 60
RAW = "11987654321"
WITH9 = "5511987654321@c.us"
WITHOUT9 = "551187654321@c.us"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def resolver(clock: FakeClock) -> BrazilianPhoneResolver:
    return BrazilianPhoneResolver(settings=PhoneResolutionSettings(), clock=clock)


class TestVerificationOutcomes:
    """Precedência: moderno primeiro, depois antigo, depois fallback moderno."""

    @pytest.mark.asyncio
    async def test_found_with_ninth_digit(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck(registered={WITH9})

        result = await resolver.resolve_verified(RAW, exists)

        assert result.reason == NormalizationReason.VERIFIED_WITH_NINTH_DIGIT
        assert result.normalized == WITH9
        assert len(result.digits) == 13
        assert result.has_ninth_digit is True
        assert result.area_code == "11"
        assert exists.calls == [WITH9]

    @pytest.mark.asyncio
    async def test_found_without_ninth_digit(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck(registered={WITHOUT9})

        result = await resolver.resolve_verified(RAW, exists)

        assert result.reason == NormalizationReason.VERIFIED_WITHOUT_NINTH_DIGIT
        assert result.normalized == WITHOUT9
        assert result.has_ninth_digit is False
        assert result.area_code == "11"
        assert exists.calls == [WITH9, WITHOUT9]

    @pytest.mark.asyncio
    async def test_not_found_uses_modern_format(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck()

        result = await resolver.resolve_verified(RAW, exists)

        assert result.reason == NormalizationReason.NOT_FOUND_USING_MODERN_FORMAT
        assert result.normalized == WITH9
        assert result.has_ninth_digit is True
        assert exists.calls == [WITH9, WITHOUT9]

    @pytest.mark.asyncio
    async def test_legacy_input_is_verified_too(self, resolver: BrazilianPhoneResolver) -> None:
        """Entrada antiga (8 dígitos locais) também testa os dois formatos."""
        exists = FakeExistsCheck(registered={"558187654321@c.us"})

        result = await resolver.resolve_verified("8187654321", exists)

        assert result.reason == NormalizationReason.VERIFIED_WITHOUT_NINTH_DIGIT
        assert result.normalized == "558187654321@c.us"
        assert exists.calls == ["5581987654321@c.us", "558187654321@c.us"]


class TestModernInputCandidates:
    """Número digitado com 9 é sempre o primeiro candidato consultado."""

    TYPED = "11912345678"
    MODERN = "5511912345678@c.us"
    LEGACY = "551112345678@c.us"

    @pytest.mark.asyncio
    async def test_miss_keeps_typed_modern_form(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck()

        result = await resolver.resolve_verified(self.TYPED, exists)

        assert result.reason == NormalizationReason.NOT_FOUND_USING_MODERN_FORMAT
        assert result.normalized == self.MODERN
        assert result.has_ninth_digit is True
        assert exists.calls == [self.MODERN, self.LEGACY]

    @pytest.mark.asyncio
    async def test_hit_on_modern_form(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck(registered={self.MODERN})

        result = await resolver.resolve_verified(self.TYPED, exists)

        assert result.reason == NormalizationReason.VERIFIED_WITH_NINTH_DIGIT
        assert result.normalized == self.MODERN
        assert exists.calls == [self.MODERN]

    @pytest.mark.asyncio
    async def test_hit_on_legacy_form(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck(registered={self.LEGACY})

        result = await resolver.resolve_verified(self.TYPED, exists)

        assert result.reason == NormalizationReason.VERIFIED_WITHOUT_NINTH_DIGIT
        assert result.normalized == self.LEGACY
        assert result.has_ninth_digit is False

    @pytest.mark.asyncio
    async def test_unknown_area_code_is_checked_once(
        self, resolver: BrazilianPhoneResolver
    ) -> None:
        exists = FakeExistsCheck()

        result = await resolver.resolve_verified("5520987654321", exists)

        assert result.reason == NormalizationReason.NOT_FOUND_USING_MODERN_FORMAT
        assert result.normalized == "5520987654321@c.us"
        assert result.area_code is None
        assert exists.calls == ["5520987654321@c.us"]


class TestPassthrough:
    """Números não ambíguos nunca chegam ao predicado."""

    @pytest.mark.asyncio
    async def test_landline_is_not_checked(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck(registered={"551133334444@c.us"})

        result = await resolver.resolve_verified("551133334444", exists)

        assert result.reason == NormalizationReason.LANDLINE
        assert result.normalized == "551133334444@c.us"
        assert exists.calls == []

    @pytest.mark.asyncio
    async def test_international_is_not_checked(self, resolver: BrazilianPhoneResolver) -> None:
        exists = AsyncMock(return_value=True)

        result = await resolver.resolve_verified("4930123456789", exists)

        assert result.reason == NormalizationReason.INTERNATIONAL
        exists.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_length_propagates(self, resolver: BrazilianPhoneResolver) -> None:
        exists = AsyncMock(return_value=True)

        with pytest.raises(InvalidLengthError):
            await resolver.resolve_verified("123456789", exists)
        exists.assert_not_awaited()


class TestVerificationCache:
    """Memoização das respostas verificadas."""

    @pytest.mark.asyncio
    async def test_verified_answer_is_reused(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck(registered={WITHOUT9})
        await resolver.resolve_verified(RAW, exists)

        second = await resolver.resolve_verified(RAW, exists)
        sync = resolver.resolve(RAW)

        assert second.reason == NormalizationReason.FROM_CACHE
        assert second.normalized == WITHOUT9
        assert second.has_ninth_digit is False
        assert sync.normalized == WITHOUT9
        assert exists.calls == [WITH9, WITHOUT9]

    @pytest.mark.asyncio
    async def test_not_found_is_cached(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck()
        await resolver.resolve_verified(RAW, exists)

        result = await resolver.resolve_verified(RAW, exists)

        assert result.reason == NormalizationReason.FROM_CACHE
        assert result.normalized == WITH9
        assert len(exists.calls) == 2

    @pytest.mark.asyncio
    async def test_revalidates_after_ttl(
        self, resolver: BrazilianPhoneResolver, clock: FakeClock
    ) -> None:
        exists = FakeExistsCheck()
        await resolver.resolve_verified(RAW, exists)

        clock.advance(DAY)
        exists.registered = {WITHOUT9}
        result = await resolver.resolve_verified(RAW, exists)

        assert result.reason == NormalizationReason.VERIFIED_WITHOUT_NINTH_DIGIT
        assert len(exists.calls) == 4

    @pytest.mark.asyncio
    async def test_unverified_guess_does_not_block_verification(
        self, resolver: BrazilianPhoneResolver
    ) -> None:
        """Um palpite de resolve() em cache ainda é verificado."""
        resolver.resolve(RAW)
        exists = FakeExistsCheck(registered={WITHOUT9})

        result = await resolver.resolve_verified(RAW, exists)

        assert result.reason == NormalizationReason.VERIFIED_WITHOUT_NINTH_DIGIT
        assert resolver.resolve(RAW).normalized == WITHOUT9

    @pytest.mark.asyncio
    async def test_stats_after_verification(self, resolver: BrazilianPhoneResolver) -> None:
        await resolver.resolve_verified(RAW, FakeExistsCheck(registered={WITHOUT9}))
        await resolver.resolve_verified("551133334444", FakeExistsCheck())

        stats = resolver.stats()
        assert stats.total == 2
        assert stats.verified == 2
        assert stats.without_ninth_digit == 2


class TestVerificationUnavailable:
    """Falhas do predicado degradam para o palpite determinístico."""

    @pytest.mark.asyncio
    async def test_error_returns_baseline(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck(error=ConnectionError("session closed"))

        result = await resolver.resolve_verified(RAW, exists)

        assert result.reason == NormalizationReason.MOBILE_WITH_NINTH_DIGIT
        assert result.normalized == WITH9
        assert resolver.verification_failures == 1

    @pytest.mark.asyncio
    async def test_error_on_second_check_returns_baseline(
        self, resolver: BrazilianPhoneResolver
    ) -> None:
        exists = AsyncMock(side_effect=[False, TimeoutError()])

        result = await resolver.resolve_verified("4187654321", exists)

        assert result.reason == NormalizationReason.MOBILE_NINTH_DIGIT_ADDED
        assert result.normalized == "5541987654321@c.us"
        assert exists.await_count == 2

    @pytest.mark.asyncio
    async def test_failed_verification_is_retried_next_call(
        self, resolver: BrazilianPhoneResolver
    ) -> None:
        """O palpite gravado após a falha não é tratado como resposta definitiva."""
        await resolver.resolve_verified(RAW, FakeExistsCheck(error=RuntimeError("boom")))

        exists = FakeExistsCheck(registered={WITH9})
        result = await resolver.resolve_verified(RAW, exists)

        assert result.reason == NormalizationReason.VERIFIED_WITH_NINTH_DIGIT
        assert exists.calls == [WITH9]

    @pytest.mark.asyncio
    async def test_error_is_logged_without_phone(
        self, resolver: BrazilianPhoneResolver, caplog: pytest.LogCaptureFixture
    ) -> None:
        exists = FakeExistsCheck(error=ConnectionError("down"))

        with caplog.at_level(logging.DEBUG):
            await resolver.resolve_verified(RAW, exists)

        fallback = [r for r in caplog.records if getattr(r, "fallback_used", False)]
        assert len(fallback) == 1
        assert fallback[0].reason == "verification_unavailable"
        assert fallback[0].error_type == "ConnectionError"
        assert "metric_verification_unavailable" in caplog.text
        assert "987654321" not in caplog.text

    @pytest.mark.asyncio
    async def test_cancellation_is_not_swallowed(self, resolver: BrazilianPhoneResolver) -> None:
        exists = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await resolver.resolve_verified(RAW, exists)


class TestConcurrency:
    """Chamadas simultâneas não são coalescidas, mas convergem."""

    @pytest.mark.asyncio
    async def test_concurrent_calls_converge(self, resolver: BrazilianPhoneResolver) -> None:
        exists = FakeExistsCheck(registered={WITHOUT9})

        first, second = await asyncio.gather(
            resolver.resolve_verified(RAW, exists),
            resolver.resolve_verified(RAW, exists),
        )

        assert first.normalized == second.normalized == WITHOUT9
        assert resolver.resolve(RAW).normalized == WITHOUT9

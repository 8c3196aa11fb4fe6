"""Unit tests for the Supabase-backed rate limiter."""

from datetime import datetime, timedelta, timezone

import pytest
from postgrest.exceptions import APIError

from ehds_gateway.infrastructure.database.models import RateLimitRecord, parse_timestamp
from ehds_gateway.infrastructure.database.repositories import RateLimitRepository
from ehds_gateway.infrastructure.rate_limit import RateLimiter, RateLimitResult

START = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_limiter(fake_supabase, max_requests=3, window_seconds=3600):
    fake_supabase.now = START
    return RateLimiter(
        RateLimitRepository(fake_supabase),
        max_requests=max_requests,
        window_seconds=window_seconds,
        clock=lambda: fake_supabase.now,
    )


class TestRateLimiter:
    """Test window accounting."""

    @pytest.mark.asyncio
    async def test_first_request_opens_window(self, fake_supabase):
        limiter = make_limiter(fake_supabase)

        result = await limiter.check("api-data:1.2.3.4")

        assert result == RateLimitResult(
            allowed=True, limit=3, remaining=2, reset_at=START + timedelta(hours=1)
        )

    @pytest.mark.asyncio
    async def test_limit_reached_then_rejected(self, fake_supabase):
        """Test the (max+1)-th request inside the window is rejected."""
        limiter = make_limiter(fake_supabase)

        results = [await limiter.check("api-data:1.2.3.4") for _ in range(4)]

        assert [r.allowed for r in results] == [True, True, True, False]
        assert [r.remaining for r in results] == [2, 1, 0, 0]
        assert results[-1].reset_at == START + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_rejection_does_not_extend_count(self, fake_supabase):
        limiter = make_limiter(fake_supabase, max_requests=1)

        for _ in range(5):
            await limiter.check("api-data:1.2.3.4")

        assert fake_supabase.rate_limits["api-data:1.2.3.4"]["request_count"] == 1

    @pytest.mark.asyncio
    async def test_window_expiry_resets_budget(self, fake_supabase):
        """Test a new window starts once the old one has elapsed."""
        limiter = make_limiter(fake_supabase)
        for _ in range(4):
            await limiter.check("api-data:1.2.3.4")

        fake_supabase.advance(3601)
        result = await limiter.check("api-data:1.2.3.4")

        assert result.allowed is True
        assert result.remaining == 2
        assert result.reset_at == fake_supabase.now + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_identifiers_are_independent(self, fake_supabase):
        limiter = make_limiter(fake_supabase, max_requests=1)

        first = await limiter.check("api-data:1.2.3.4")
        other_ip = await limiter.check("api-data:5.6.7.8")
        other_action = await limiter.check("feedback:1.2.3.4")

        assert first.allowed and other_ip.allowed and other_action.allowed

    @pytest.mark.asyncio
    async def test_store_error_fails_open(self, fake_supabase):
        """Test an unreachable store lets the request through with full budget."""
        limiter = make_limiter(fake_supabase)
        fake_supabase.rpc_error = APIError({"message": "connection refused", "code": "08006"})

        result = await limiter.check("api-data:1.2.3.4")

        assert result.allowed is True
        assert result.remaining == 3
        assert result.reset_at == START + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_empty_rpc_result_fails_open(self, fake_supabase):
        limiter = make_limiter(fake_supabase)
        fake_supabase.consume = lambda **kwargs: []

        result = await limiter.check("api-data:1.2.3.4")

        assert result.allowed is True

    @pytest.mark.asyncio
    async def test_unconfigured_store_fails_open(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
        limiter = RateLimiter(RateLimitRepository(), max_requests=10, window_seconds=60)

        result = await limiter.check("api-data:1.2.3.4")

        assert result.allowed is True
        assert result.remaining == 10


class TestRateLimitResult:
    """Test header rendering."""

    def test_headers(self):
        result = RateLimitResult(allowed=True, limit=100, remaining=42, reset_at=START)
        assert result.headers() == {
            "X-RateLimit-Limit": "100",
            "X-RateLimit-Remaining": "42",
            "X-RateLimit-Reset": str(int(START.timestamp())),
        }

    def test_retry_after_rounds_up_and_is_positive(self):
        result = RateLimitResult(allowed=False, limit=1, remaining=0, reset_at=START)
        assert result.retry_after(START - timedelta(seconds=90.2)) == 91
        assert result.retry_after(START + timedelta(seconds=5)) == 1


class TestRateLimitRecord:
    """Test parsing rows returned by consume_rate_limit."""

    def test_from_row(self):
        record = RateLimitRecord.from_row(
            {
                "identifier": "api-data:1.2.3.4",
                "request_count": "7",
                "window_start": "2025-03-01T09:00:00.123456+00:00",
                "allowed": False,
            }
        )
        assert record.request_count == 7
        assert record.window_start == START + timedelta(microseconds=123456)
        assert record.allowed is False

    def test_naive_timestamp_assumed_utc(self):
        assert parse_timestamp("2025-03-01T09:00:00") == START
        assert parse_timestamp("2025-03-01T09:00:00Z") == START


class TestRateLimitConfiguration:
    """Test which credentials enable the persisted rate limit."""

    @pytest.fixture
    def anon_only(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)

    def test_anon_key_alone_does_not_enable_rate_limit(self, anon_only):
        """Test the anon key cannot call consume_rate_limit, so the store counts as unconfigured."""
        assert not RateLimitRepository().is_configured()

    def test_service_role_key_enables_rate_limit(self, anon_only, monkeypatch):
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
        assert RateLimitRepository().is_configured()

    @pytest.mark.asyncio
    async def test_anon_only_skips_rpc_round_trip(self, anon_only, monkeypatch):
        """Test no RPC is attempted when only the anon key is set."""
        repo = RateLimitRepository()

        def consume(*args, **kwargs):
            raise AssertionError("consume_rate_limit must not be called")

        monkeypatch.setattr(repo, "consume", consume)
        limiter = RateLimiter(repo, max_requests=5, window_seconds=60)

        result = await limiter.check("api-data:1.2.3.4")

        assert result.allowed is True
        assert result.remaining == 5


class TestRateLimitResetHeader:
    """Test reset header rounding."""

    def test_reset_rounds_up_like_retry_after(self):
        reset_at = START + timedelta(milliseconds=400)
        result = RateLimitResult(allowed=False, limit=1, remaining=0, reset_at=reset_at)

        assert result.headers()["X-RateLimit-Reset"] == str(int(START.timestamp()) + 1)
        assert result.retry_after(START) == 1

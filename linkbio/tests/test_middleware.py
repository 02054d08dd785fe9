from __future__ import annotations

from linkbio.shared.logging.sensitive_filter import sanitize_message
from linkbio.shared.middleware.rate_limit import InMemoryRateLimiter


def test_rate_limiter_blocks_after_limit() -> None:
    limiter = InMemoryRateLimiter(limit=2, window_seconds=60.0)

    assert limiter.allow("/auth/login:1.2.3.4")
    assert limiter.allow("/auth/login:1.2.3.4")
    assert not limiter.allow("/auth/login:1.2.3.4")
    assert limiter.allow("/auth/login:5.6.7.8")


def test_sanitizer_masks_tokens_and_emails() -> None:
    message = sanitize_message(
        "refreshToken=abcdefgh12345 Bearer eyJhbGciOiJIUzI1NiJ9.payload user alice@example.com"
    )

    assert "abcdefgh12345" not in message
    assert "eyJhbGciOiJIUzI1NiJ9.payload" not in message
    assert "***@example.com" in message

from datetime import datetime, timedelta

import pytest

from security.tokens import TokenService, to_timestamp


@pytest.fixture
def service():
    return TokenService("unit-test-secret", lifetime_seconds=3 * 24 * 60 * 60)


def test_issue_then_verify_returns_subject(service):
    claims = service.verify(service.issue(42))
    assert claims is not None
    assert claims.subject_id == 42


def test_issue_time_keeps_microseconds(service):
    issued = datetime.utcnow() - timedelta(hours=1)
    claims = service.verify(service.issue(7, issued_at=issued))
    assert claims is not None
    assert claims.issued_at == pytest.approx(to_timestamp(issued), abs=1e-6)


def test_expired_token_is_rejected(service):
    issued = datetime.utcnow() - timedelta(days=3, seconds=5)
    assert service.verify(service.issue(1, issued_at=issued)) is None


def test_token_just_inside_window_is_accepted(service):
    issued = datetime.utcnow() - timedelta(days=2, hours=23)
    assert service.verify(service.issue(1, issued_at=issued)) is not None


def test_tampered_signature_is_rejected(service):
    token = service.issue(1)
    head, payload, sig = token.split(".")
    flipped = "A" if sig[10] != "A" else "B"
    forged = ".".join([head, payload, sig[:10] + flipped + sig[11:]])
    assert service.verify(forged) is None


def test_token_signed_with_another_secret_is_rejected(service):
    other = TokenService("someone-else", lifetime_seconds=3600)
    assert service.verify(other.issue(1)) is None


@pytest.mark.parametrize("garbage", ["", None, "not-a-token", "a.b.c"])
def test_malformed_tokens_are_rejected(service, garbage):
    assert service.verify(garbage) is None


def test_missing_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("", lifetime_seconds=60)


def test_to_timestamp_orders_like_datetimes():
    a = datetime(2026, 5, 1, 12, 0, 0, 1)
    b = datetime(2026, 5, 1, 12, 0, 0, 2)
    assert to_timestamp(a) < to_timestamp(b)
    assert to_timestamp(a) == to_timestamp(a)

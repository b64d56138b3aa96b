"""
Unit tests for JWTTokenCodec.

These tests cover:
- the sign/verify round trip for every supported HMAC algorithm
- expiry boundaries (TTL 0, negative TTL, frozen clock)
- tampering and malformed input
- the configuration fault when the key is missing or the algorithm unsupported
- per-call key loading (rotation without rebuilding the codec)
"""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from freezegun import freeze_time
from sessiongate.infra.jwt.jwt_token_codec import JWTTokenCodec
from sessiongate.services._shared.ports import (
    SigningFault,
    TokenSettings,
    TokenState,
    TokenType,
)

from tests.helpers.utils import make_claims, tamper

SECRET = "unit-test-secret-0123456789abcdef-0123456789abcdef-0123456789abcdef"


@pytest.fixture
def codec():
    return JWTTokenCodec(TokenSettings.static(SECRET))


def test_round_trip_returns_equal_claims(codec):
    claims = make_claims(user_id=7, session_id=42)
    signed = codec.sign(claims, timedelta(minutes=5))
    assert signed.ok and signed.fault is None

    result = codec.verify(signed.token)
    assert result.state is TokenState.VALID
    assert result.claims == claims


@pytest.mark.parametrize("algorithm", ["HS256", "HS384", "HS512"])
def test_round_trip_per_algorithm(codec, algorithm):
    claims = make_claims(token_type=TokenType.REFRESH)
    signed = codec.sign(claims, timedelta(minutes=5), algorithm)
    assert jwt.get_unverified_header(signed.token)["alg"] == algorithm
    assert codec.verify(signed.token).claims == claims


def test_optional_profile_fields_round_trip_as_none(codec):
    claims = make_claims(email=None)
    result = codec.verify(codec.sign(claims, timedelta(minutes=5)).token)
    assert result.claims == claims
    assert result.claims.phone_number is None


def test_payload_uses_registered_claim_names(codec):
    token = codec.sign(make_claims(user_id=3, session_id=9), timedelta(minutes=5)).token
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload["sub"] == "3"
    assert payload["sid"] == 9
    assert payload["typ"] == "access"
    assert payload["exp"] - payload["iat"] == 300
    assert "password_hash" not in payload


@pytest.mark.parametrize("ttl", [timedelta(0), timedelta(seconds=-30)])
def test_non_positive_ttl_verifies_as_expired_not_invalid(codec, ttl):
    claims = make_claims()
    result = codec.verify(codec.sign(claims, ttl).token)
    assert result.state is TokenState.EXPIRED
    assert result.claims == claims


def test_valid_before_ttl_and_expired_after():
    codec = JWTTokenCodec(TokenSettings.static(SECRET))
    with freeze_time("2026-01-01 12:00:00") as frozen:
        token = codec.sign(make_claims(), timedelta(seconds=60)).token

        frozen.tick(timedelta(seconds=59))
        assert codec.verify(token).state is TokenState.VALID

        frozen.tick(timedelta(seconds=1))
        assert codec.verify(token).state is TokenState.EXPIRED

        frozen.tick(timedelta(days=30))
        assert codec.verify(token).state is TokenState.EXPIRED


def test_leeway_extends_validity():
    codec = JWTTokenCodec(TokenSettings.static(SECRET, leeway=timedelta(seconds=30)))
    with freeze_time("2026-01-01 12:00:00") as frozen:
        token = codec.sign(make_claims(), timedelta(seconds=60)).token
        frozen.tick(timedelta(seconds=75))
        assert codec.verify(token).state is TokenState.VALID
        frozen.tick(timedelta(seconds=30))
        assert codec.verify(token).state is TokenState.EXPIRED


def test_tampered_signature_is_invalid(codec):
    token = codec.sign(make_claims(), timedelta(minutes=5)).token
    result = codec.verify(tamper(token))
    assert result.state is TokenState.INVALID
    assert result.claims is None


def test_tampered_expired_token_is_invalid_not_expired(codec):
    token = codec.sign(make_claims(), timedelta(seconds=-10)).token
    assert codec.verify(tamper(token)).state is TokenState.INVALID


def test_token_signed_with_another_key_is_invalid(codec):
    other = JWTTokenCodec(TokenSettings.static("another-secret-" + "x" * 56))
    token = other.sign(make_claims(), timedelta(minutes=5)).token
    assert codec.verify(token).state is TokenState.INVALID


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c", "Bearer xyz", None])
def test_malformed_input_is_invalid(codec, garbage):
    assert codec.verify(garbage).state is TokenState.INVALID


def test_unsigned_token_is_invalid(codec):
    payload = make_claims().to_payload() | {"exp": 4102444800, "iat": 0}
    token = jwt.encode(payload, None, algorithm="none")
    assert codec.verify(token).state is TokenState.INVALID


@pytest.mark.parametrize("missing", ["sub", "sid", "typ", "role", "exp"])
def test_payload_missing_required_claim_is_invalid(codec, missing):
    payload = make_claims().to_payload() | {"exp": 4102444800, "iat": 0}
    payload.pop(missing)
    token = jwt.encode(payload, SECRET, algorithm="HS256")
    assert codec.verify(token).state is TokenState.INVALID


@pytest.mark.parametrize(
    "override",
    [{"sid": "not-a-number"}, {"sid": True}, {"typ": "id"}, {"sub": "abc"}, {"role": 5}],
)
def test_payload_with_malformed_claim_is_invalid(codec, override):
    payload = make_claims().to_payload() | {"exp": 4102444800, "iat": 0} | override
    token = jwt.encode(payload, SECRET, algorithm="HS256")
    assert codec.verify(token).state is TokenState.INVALID


def test_sign_without_key_reports_missing_key():
    codec = JWTTokenCodec(TokenSettings.static(None))
    result = codec.sign(make_claims(), timedelta(minutes=5))
    assert result.token is None
    assert result.fault is SigningFault.MISSING_KEY


def test_empty_key_counts_as_missing():
    codec = JWTTokenCodec(TokenSettings.static(""))
    assert codec.sign(make_claims(), timedelta(minutes=5)).fault is SigningFault.MISSING_KEY


@pytest.mark.parametrize("token", ["", "garbage", None])
def test_verify_without_key_reports_config_fault_for_any_input(token):
    keyless = JWTTokenCodec(TokenSettings.static(None))
    assert keyless.verify(token).state is TokenState.CONFIG_FAULT


def test_verify_without_key_reports_config_fault_for_genuine_token(codec):
    token = codec.sign(make_claims(), timedelta(minutes=5)).token
    keyless = JWTTokenCodec(TokenSettings.static(None))
    result = keyless.verify(token)
    assert result.state is TokenState.CONFIG_FAULT
    assert result.claims is None


@pytest.mark.parametrize("algorithm", ["RS256", "none", "HS1"])
def test_sign_with_unsupported_algorithm(codec, algorithm):
    result = codec.sign(make_claims(), timedelta(minutes=5), algorithm)
    assert result.fault is SigningFault.UNSUPPORTED_ALGORITHM


def test_verify_with_unsupported_configured_algorithm_is_config_fault():
    codec = JWTTokenCodec(TokenSettings.static(SECRET, algorithm="RS256"))
    assert codec.verify("anything").state is TokenState.CONFIG_FAULT


def test_key_loader_is_called_on_every_operation():
    keys = {"current": SECRET}
    calls = []

    def loader():
        calls.append(1)
        return keys["current"]

    codec = JWTTokenCodec(TokenSettings(key_loader=loader))
    token = codec.sign(make_claims(), timedelta(minutes=5)).token
    assert codec.verify(token).is_valid

    keys["current"] = None
    assert codec.verify(token).is_config_fault

    keys["current"] = "rotated-secret-" + "y" * 56
    assert codec.verify(token).state is TokenState.INVALID
    assert len(calls) == 4

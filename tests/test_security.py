"""
tests.test_security

Password hashing and session token primitives.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from pet_adoption.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, issue_token
from pet_adoption.auth.passwords import hash_password, verify_password
from pet_adoption.settings import Settings

CFG = JwtConfig(alg="HS256", issuer="pet-adoption-api", audience="spa", secret="s3cret")


def test_hash_is_salted_and_verifies() -> None:
    first = hash_password("correct horse", rounds=4)
    second = hash_password("correct horse", rounds=4)

    assert first != second
    assert "correct horse" not in first
    assert verify_password("correct horse", first)
    assert verify_password("correct horse", second)


@pytest.mark.parametrize("password", ["abc123", "s3nh@Forte", "ünïcødé!"])
def test_any_single_character_mutation_fails(password: str) -> None:
    hashed = hash_password(password, rounds=4)
    for i, ch in enumerate(password):
        mutated = password[:i] + ("x" if ch != "x" else "y") + password[i + 1 :]
        assert not verify_password(mutated, hashed)


def test_verify_rejects_malformed_hash() -> None:
    assert not verify_password("whatever", "not-a-bcrypt-hash")


def test_token_round_trip_carries_identity_claims() -> None:
    token = issue_token(cfg=CFG, subject="id-1", role="shelter", entity_id="ent-9")
    payload = decode_and_validate(cfg=CFG, token=token)

    assert payload["sub"] == "id-1"
    assert payload["role"] == "shelter"
    assert payload["entity_id"] == "ent-9"
    assert payload["exp"] > payload["iat"]


def test_expired_token_is_rejected() -> None:
    token = issue_token(
        cfg=CFG, subject="id-1", role="admin", entity_id=None, ttl=timedelta(seconds=-5)
    )
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)


@pytest.mark.parametrize(
    "other",
    [
        JwtConfig(alg="HS256", issuer="pet-adoption-api", audience="spa", secret="other"),
        JwtConfig(alg="HS256", issuer="someone-else", audience="spa", secret="s3cret"),
        JwtConfig(alg="HS256", issuer="pet-adoption-api", audience="admin-ui", secret="s3cret"),
    ],
)
def test_token_from_other_key_issuer_or_audience_is_rejected(other: JwtConfig) -> None:
    token = issue_token(cfg=other, subject="id-1", role="admin", entity_id=None)
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)


def test_malformed_token_is_rejected() -> None:
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token="not.a.jwt")


def test_config_ttl_comes_from_settings() -> None:
    cfg = JwtConfig.from_settings(Settings(jwt_ttl_minutes=15))
    assert cfg.ttl == timedelta(minutes=15)

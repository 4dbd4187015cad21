"""Unit tests for app.core.security: bcrypt password hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.config import settings
from app.core.exceptions import InvalidInputError
from app.core.security import (
    ACCESS_TOKEN_LIFETIME,
    PASSWORD_MAX_BYTES,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_access_token,
    verify_password,
)


class TestHashPassword(unittest.TestCase):
    """hash_password salts every call; verify_password accepts only the original plaintext."""

    def test_hash_verifies_against_plaintext(self) -> None:
        digest = hash_password("s3cret-pass")
        self.assertTrue(verify_password("s3cret-pass", digest))

    def test_same_plaintext_gives_different_digests(self) -> None:
        first = hash_password("repeatable")
        second = hash_password("repeatable")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("repeatable", first))
        self.assertTrue(verify_password("repeatable", second))

    def test_other_plaintext_does_not_verify(self) -> None:
        digest = hash_password("password-one")
        self.assertFalse(verify_password("password-two", digest))

    def test_digest_is_not_plaintext(self) -> None:
        self.assertNotIn("visible", hash_password("visible"))

    def test_empty_plaintext_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            hash_password("")

    def test_none_plaintext_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            hash_password(None)

    def test_short_password_is_hashable(self) -> None:
        # Minimum length is a signup policy, not a hasher rule.
        self.assertTrue(verify_password("a", hash_password("a")))

    def test_password_at_byte_limit_is_hashable(self) -> None:
        password = "a" * PASSWORD_MAX_BYTES
        self.assertTrue(verify_password(password, hash_password(password)))

    def test_password_over_byte_limit_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            hash_password("a" * (PASSWORD_MAX_BYTES + 1))

    def test_multibyte_password_counted_in_bytes(self) -> None:
        # 40 characters, 80 bytes in UTF-8
        with self.assertRaises(InvalidInputError):
            hash_password("\u00e9" * 40)


class TestVerifyPasswordFailsClosed(unittest.TestCase):
    """Malformed digests and missing input return False instead of raising."""

    def test_malformed_digest(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))

    def test_empty_digest(self) -> None:
        self.assertFalse(verify_password("anything", ""))

    def test_none_digest(self) -> None:
        self.assertFalse(verify_password("anything", None))

    def test_empty_plaintext(self) -> None:
        self.assertFalse(verify_password("", hash_password("real")))

    def test_suffix_past_byte_limit_does_not_verify(self) -> None:
        digest = hash_password("a" * 71 + "Y")
        self.assertFalse(verify_password("a" * 71 + "YX", digest))
        self.assertFalse(verify_password("a" * 71 + "Y" + "a" * 100, digest))


def _tamper_signature(token: str) -> str:
    header, payload, signature = token.split(".")
    i = len(signature) // 2
    replacement = "A" if signature[i] != "A" else "B"
    return ".".join([header, payload, signature[:i] + replacement + signature[i + 1 :]])


class TestAccessToken(unittest.TestCase):
    """verify_access_token returns the subject for valid tokens and None for everything else."""

    def test_round_trip_returns_subject(self) -> None:
        token = create_access_token(sub="abc123")
        self.assertEqual(verify_access_token(token), "abc123")

    def test_payload_carries_seven_day_expiry(self) -> None:
        payload = decode_access_token(create_access_token(sub="abc123"))
        self.assertEqual(payload["sub"], "abc123")
        self.assertEqual(payload["exp"] - payload["iat"], 7 * 24 * 60 * 60)

    def test_still_valid_just_before_expiry(self) -> None:
        issued = datetime.now(UTC) - ACCESS_TOKEN_LIFETIME + timedelta(minutes=1)
        token = create_access_token(sub="abc123", issued_at=issued)
        self.assertEqual(verify_access_token(token), "abc123")

    def test_expired_token_is_invalid(self) -> None:
        issued = datetime.now(UTC) - ACCESS_TOKEN_LIFETIME - timedelta(seconds=1)
        token = create_access_token(sub="abc123", issued_at=issued)
        self.assertIsNone(verify_access_token(token))

    def test_tampered_signature_is_invalid(self) -> None:
        token = create_access_token(sub="abc123")
        self.assertIsNone(verify_access_token(_tamper_signature(token)))

    def test_wrong_secret_is_invalid(self) -> None:
        now = datetime.now(UTC)
        forged = jwt.encode(
            {"sub": "abc123", "iat": now, "exp": now + timedelta(days=1)},
            "some-other-secret",
            algorithm=settings.JWT_ALGORITHM,
        )
        self.assertIsNone(verify_access_token(forged))

    def test_missing_subject_is_invalid(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iat": now, "exp": now + timedelta(days=1)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        self.assertIsNone(verify_access_token(token))

    def test_garbage_and_empty_are_invalid(self) -> None:
        self.assertIsNone(verify_access_token("not.a.token"))
        self.assertIsNone(verify_access_token(""))
        self.assertIsNone(verify_access_token(None))


if __name__ == "__main__":
    unittest.main()

"""Unit tests for usermanager.core.security: password hashing and the token service."""

import unittest
from unittest.mock import patch

import bcrypt
import jwt

from usermanager.core.config import settings
from usermanager.core.security import (
    InvalidCredentialError,
    create_access_token,
    decode_access_token,
    hash_password,
    issue_token,
    verify_against_dummy_hash,
    verify_password,
    verify_token,
)
from usermanager.models import Role
from usermanager.schemas.auth import Identity

SECRET = "unit-test-secret"


class TestPasswordHashing(unittest.TestCase):
    """Hashes are salted bcrypt strings that verify only the original password."""

    def test_hash_differs_from_plaintext_and_is_salted(self) -> None:
        first = hash_password("secret1")
        second = hash_password("secret1")
        self.assertNotEqual(first, "secret1")
        self.assertNotEqual(first, second)
        self.assertTrue(first.startswith("$2"))

    def test_verify_correct_and_wrong_password(self) -> None:
        hashed = hash_password("secret1")
        self.assertTrue(verify_password("secret1", hashed))
        self.assertFalse(verify_password("secret2", hashed))

    def test_malformed_or_missing_hash_is_rejected(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("secret1", None))
        self.assertFalse(verify_password("secret1", ""))


class TestDummyHashCheck(unittest.TestCase):
    def test_performs_bcrypt_check_and_fails(self) -> None:
        with patch("usermanager.core.security.bcrypt.checkpw", wraps=bcrypt.checkpw) as checkpw:
            self.assertFalse(verify_against_dummy_hash("secret1"))
        checkpw.assert_called_once()


class TestTokenService(unittest.TestCase):
    """issue_token / verify_token: any signature, structure or expiry failure is one error type."""

    def test_round_trip_keeps_payload_and_sets_expiry(self) -> None:
        token = issue_token({"sub": "7", "role": "user"}, SECRET, 60)
        claims = verify_token(token, SECRET)
        self.assertEqual(claims["sub"], "7")
        self.assertEqual(claims["role"], "user")
        self.assertEqual(claims["exp"] - claims["iat"], 60)

    def test_expired_token_is_invalid(self) -> None:
        token = issue_token({"sub": "7"}, SECRET, -5)
        with self.assertRaises(InvalidCredentialError):
            verify_token(token, SECRET)

    def test_wrong_secret_is_invalid(self) -> None:
        token = issue_token({"sub": "7"}, SECRET, 60)
        with self.assertRaises(InvalidCredentialError):
            verify_token(token, "another-secret")

    def test_tampered_payload_is_invalid(self) -> None:
        token = issue_token({"sub": "7", "role": "user"}, SECRET, 60)
        forged = jwt.encode({"sub": "7", "role": "admin"}, "attacker", algorithm="HS256")
        header, _, signature = token.split(".")
        _, payload, _ = forged.split(".")
        with self.assertRaises(InvalidCredentialError):
            verify_token(f"{header}.{payload}.{signature}", SECRET)

    def test_garbage_is_invalid(self) -> None:
        for token in ("", "abc", "a.b.c"):
            with self.subTest(token=token), self.assertRaises(InvalidCredentialError):
                verify_token(token, SECRET)


class TestAccessToken(unittest.TestCase):
    """create_access_token / decode_access_token use configured settings and yield an Identity."""

    def test_round_trip_identity(self) -> None:
        identity = Identity(id=3, username="alice", role=Role.ADMIN)
        decoded = decode_access_token(create_access_token(identity))
        self.assertEqual(decoded, identity)

    def test_lifetime_matches_setting(self) -> None:
        token = create_access_token(Identity(id=3, username="alice", role=Role.USER))
        claims = verify_token(token, settings.JWT_SECRET.get_secret_value())
        self.assertEqual(claims["exp"] - claims["iat"], settings.JWT_EXPIRATION)

    def test_missing_claims_are_invalid(self) -> None:
        secret = settings.JWT_SECRET.get_secret_value()
        token = issue_token({"sub": "3", "role": "user"}, secret, 60)
        with self.assertRaises(InvalidCredentialError):
            decode_access_token(token)

    def test_unknown_role_is_invalid(self) -> None:
        secret = settings.JWT_SECRET.get_secret_value()
        token = issue_token({"sub": "3", "username": "x", "role": "superuser"}, secret, 60)
        with self.assertRaises(InvalidCredentialError):
            decode_access_token(token)

    def test_non_numeric_subject_is_invalid(self) -> None:
        secret = settings.JWT_SECRET.get_secret_value()
        token = issue_token({"sub": "alice", "username": "alice", "role": "user"}, secret, 60)
        with self.assertRaises(InvalidCredentialError):
            decode_access_token(token)

    def test_identity_is_immutable(self) -> None:
        identity = Identity(id=3, username="alice", role=Role.USER)
        with self.assertRaises(Exception):
            identity.role = Role.ADMIN  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()

"""Unit tests for storefront.core.security: predicates, password checks and session tokens."""

import unittest
from unittest.mock import patch

import jwt

from storefront.core import security
from storefront.core.security import (
    contains_sql_injection,
    create_session_token,
    decode_session_token,
    hash_password,
    is_bcrypt_hash,
    is_valid_email,
    is_valid_hex_color,
    is_valid_phone,
    is_valid_uuid,
    sanitize_string,
    validate_payload_size,
    verify_password,
)


class TestIsValidUuid(unittest.TestCase):
    def test_canonical_lowercase(self) -> None:
        self.assertTrue(is_valid_uuid("123e4567-e89b-12d3-a456-426614174000"))

    def test_uppercase_accepted(self) -> None:
        self.assertTrue(is_valid_uuid("123E4567-E89B-12D3-A456-426614174000"))

    def test_wrong_shapes_rejected(self) -> None:
        for value in (
            "not-a-uuid",
            "",
            "123e4567e89b12d3a456426614174000",
            "123e4567-e89b-12d3-a456-42661417400",
            "123e4567-e89b-12d3-a456-4266141740000",
            "g23e4567-e89b-12d3-a456-426614174000",
            " 123e4567-e89b-12d3-a456-426614174000",
        ):
            with self.subTest(value=value):
                self.assertFalse(is_valid_uuid(value))

    def test_non_string_rejected(self) -> None:
        self.assertFalse(is_valid_uuid(None))  # type: ignore[arg-type]


class TestTrailingNewline(unittest.TestCase):
    """A final newline must not slip past the end anchor."""

    def test_rejected_by_every_anchored_predicate(self) -> None:
        self.assertFalse(is_valid_uuid("123e4567-e89b-12d3-a456-426614174000\n"))
        self.assertFalse(is_valid_hex_color("#ffffff\n"))
        self.assertFalse(is_valid_email("a@b.co\n"))


class TestFieldPredicates(unittest.TestCase):
    def test_email(self) -> None:
        self.assertTrue(is_valid_email("owner@shop.mx"))
        self.assertFalse(is_valid_email("owner@shop"))
        self.assertFalse(is_valid_email("two words@shop.mx"))
        self.assertFalse(is_valid_email("a" * 250 + "@shop.mx"))

    def test_hex_color_requires_six_digits(self) -> None:
        self.assertTrue(is_valid_hex_color("#1a2B3c"))
        self.assertFalse(is_valid_hex_color("#fff"))
        self.assertFalse(is_valid_hex_color("000000"))
        self.assertFalse(is_valid_hex_color("#12345g"))

    def test_phone(self) -> None:
        self.assertTrue(is_valid_phone("+52 (55) 1234-5678"))
        self.assertTrue(is_valid_phone("5512345678"))
        self.assertFalse(is_valid_phone("12345"))
        self.assertFalse(is_valid_phone("55-1234-abcd"))
        self.assertFalse(is_valid_phone("1" * 21))

    def test_payload_size_counts_utf8_bytes(self) -> None:
        self.assertTrue(validate_payload_size("a" * 10, 10))
        self.assertFalse(validate_payload_size("a" * 11, 10))
        # Each "ñ" is two bytes in UTF-8.
        self.assertFalse(validate_payload_size("ñ" * 6, 10))
        self.assertTrue(validate_payload_size(b"x" * 10, 10))

    def test_sql_screen(self) -> None:
        self.assertTrue(contains_sql_injection("1; DROP TABLE users"))
        self.assertTrue(contains_sql_injection("name' --"))
        self.assertTrue(contains_sql_injection("union all"))
        self.assertFalse(contains_sql_injection("Blue cotton shirt"))
        # Known false positive: ordinary words that are SQL keywords.
        self.assertTrue(contains_sql_injection("Select your size"))

    def test_sanitize_string(self) -> None:
        self.assertEqual(sanitize_string("  <b>Hola</b>  "), "bHola/b")
        self.assertEqual(len(sanitize_string("x" * 2000)), 1000)
        self.assertEqual(sanitize_string(None), "")  # type: ignore[arg-type]


class TestPasswords(unittest.TestCase):
    def setUp(self) -> None:
        rounds = patch.object(security, "BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

    def test_bcrypt_round_trip(self) -> None:
        stored = hash_password("s3cret")
        self.assertTrue(is_bcrypt_hash(stored))
        self.assertTrue(verify_password("s3cret", stored))
        self.assertFalse(verify_password("S3cret", stored))

    def test_legacy_plain_text_requires_exact_match(self) -> None:
        self.assertTrue(verify_password("hunter2", "hunter2"))
        self.assertFalse(verify_password("hunter2 ", "hunter2"))
        self.assertFalse(verify_password("Hunter2", "hunter2"))

    def test_missing_stored_password_never_matches(self) -> None:
        self.assertFalse(verify_password("", None))
        self.assertFalse(verify_password("", ""))

    def test_all_bcrypt_prefixes_recognized(self) -> None:
        for prefix in ("$2a$", "$2b$", "$2y$"):
            with self.subTest(prefix=prefix):
                self.assertTrue(is_bcrypt_hash(prefix + "12$abc"))
        self.assertFalse(is_bcrypt_hash("plain"))
        self.assertFalse(is_bcrypt_hash(None))

    def test_corrupt_bcrypt_value_does_not_raise(self) -> None:
        self.assertFalse(verify_password("x", "$2b$not-a-real-hash"))


class TestSessionTokens(unittest.TestCase):
    def test_round_trip_carries_identity(self) -> None:
        token = create_session_token("123e4567-e89b-12d3-a456-426614174000", "a@b.co", "admin")
        payload = decode_session_token(token)
        self.assertEqual(payload["sub"], "123e4567-e89b-12d3-a456-426614174000")
        self.assertEqual(payload["email"], "a@b.co")
        self.assertEqual(payload["role"], "admin")
        self.assertGreater(payload["exp"], payload["iat"])

    def test_tampered_token_rejected(self) -> None:
        token = create_session_token("123e4567-e89b-12d3-a456-426614174000", "a@b.co", "admin")
        forged = jwt.encode({"sub": "x", "role": "admin"}, "some-other-secret", algorithm="HS256")
        with self.assertRaises(jwt.PyJWTError):
            decode_session_token(forged)
        # Payload swapped in from another token; signature no longer matches.
        other = create_session_token("00000000-0000-0000-0000-000000000000", "e@f.co", "admin")
        header, _, signature = token.split(".")
        spliced = ".".join([header, other.split(".")[1], signature])
        with self.assertRaises(jwt.PyJWTError):
            decode_session_token(spliced)

"""
Tests for session token issuing and verification in src/domains/auth/tokens.py
"""

import time

import pytest

from src.domains.auth.models import Identity
from src.domains.auth.tokens import SESSION_TOKEN_TTL_SECONDS, SessionTokenService
from tests.fixtures.auth_fixtures import TEST_ADDRESS, TEST_FID, AuthTestData

BASE64URL_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
)


class TestIssueSessionToken:
    """Test minting of session tokens."""

    def test_token_has_three_segments(self, session_tokens: SessionTokenService):
        token = session_tokens.issue(Identity(fid=TEST_FID, address=TEST_ADDRESS))

        segments = token.split(".")
        assert len(segments) == 3
        assert all(segments)
        assert "=" not in token

    def test_header_is_fixed(self, session_tokens: SessionTokenService):
        token = session_tokens.issue(Identity(fid=TEST_FID, address=TEST_ADDRESS))

        header_segment = token.split(".")[0]
        assert header_segment == AuthTestData.b64url(b'{"alg":"HS256","typ":"JWT"}')

    def test_payload_claims(self, session_tokens: SessionTokenService):
        token = session_tokens.issue(
            Identity(fid=TEST_FID, address=TEST_ADDRESS), now=1_700_000_000
        )

        payload = AuthTestData.decode_payload(token)
        assert payload == {
            "fid": TEST_FID,
            "address": TEST_ADDRESS.lower(),
            "iat": 1_700_000_000,
            "exp": 1_700_000_000 + 86400,
        }

    def test_lifetime_is_24_hours(self, session_tokens: SessionTokenService):
        token = session_tokens.issue(Identity(fid=TEST_FID, address=TEST_ADDRESS))

        payload = AuthTestData.decode_payload(token)
        assert payload["exp"] - payload["iat"] == SESSION_TOKEN_TTL_SECONDS == 86400

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            SessionTokenService("")


class TestVerifySessionToken:
    """Test verification of session tokens."""

    def test_round_trip_lowercases_address(self, session_tokens: SessionTokenService):
        token = session_tokens.issue(Identity(fid=TEST_FID, address=TEST_ADDRESS))

        result = session_tokens.verify(token)

        assert result == Identity(fid=TEST_FID, address=TEST_ADDRESS.lower())

    def test_accepts_hand_built_token(self, test_jwt_secret: str):
        """Tokens built field by field with HMAC-SHA256 are accepted."""
        now = int(time.time())
        token = AuthTestData.make_token(
            {
                "fid": TEST_FID,
                "address": "0x1234567890abcdef",
                "iat": now,
                "exp": now + 86400,
            },
            test_jwt_secret,
        )

        result = SessionTokenService(test_jwt_secret).verify(token)

        assert result == Identity(fid=TEST_FID, address="0x1234567890abcdef")

    def test_every_single_character_change_is_rejected(
        self, session_tokens: SessionTokenService
    ):
        token = session_tokens.issue(Identity(fid=TEST_FID, address=TEST_ADDRESS))
        assert session_tokens.verify(token) is not None

        for index, char in enumerate(token):
            if char == ".":
                continue
            replacement = "A" if char != "A" else "B"
            tampered = token[:index] + replacement + token[index + 1 :]
            assert session_tokens.verify(tampered) is None, f"position {index}"

    def test_last_signature_character_variants_rejected(
        self, session_tokens: SessionTokenService
    ):
        """Changing unused trailing bits of the signature is still a change."""
        token = session_tokens.issue(Identity(fid=TEST_FID, address=TEST_ADDRESS))

        for char in BASE64URL_ALPHABET:
            if char == token[-1]:
                continue
            assert session_tokens.verify(token[:-1] + char) is None

    def test_wrong_secret_rejected(self, session_tokens: SessionTokenService):
        token = session_tokens.issue(Identity(fid=TEST_FID, address=TEST_ADDRESS))

        other = SessionTokenService("another-secret-key-for-testing-32-chars")

        assert other.verify(token) is None

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "not-a-credential",
            "only.two",
            "a.b.c.d",
            "...",
            "invalid-token",
            "eyJhbGciOiJIUzI1NiJ9.%%%.@@@",
        ],
    )
    def test_malformed_tokens_rejected(
        self, session_tokens: SessionTokenService, token: str
    ):
        assert session_tokens.verify(token) is None

    def test_non_string_input_rejected(self, session_tokens: SessionTokenService):
        assert session_tokens.verify(None) is None  # type: ignore[arg-type]

    def test_non_json_payload_rejected(
        self, session_tokens: SessionTokenService, test_jwt_secret: str
    ):
        header_segment = AuthTestData.b64url(b'{"alg":"HS256","typ":"JWT"}')
        payload_segment = AuthTestData.b64url(b"this is not json")
        token = AuthTestData.sign_segments(
            header_segment, payload_segment, test_jwt_secret
        )

        assert session_tokens.verify(token) is None

    def test_expired_token_rejected(
        self, session_tokens: SessionTokenService, test_jwt_secret: str
    ):
        now = int(time.time())
        token = AuthTestData.make_token(
            {
                "fid": TEST_FID,
                "address": "0x1234567890abcdef",
                "iat": now - 86400 * 2,
                "exp": now - 86400,
            },
            test_jwt_secret,
        )

        assert session_tokens.verify(token) is None

    def test_expiry_uses_reference_time(self, session_tokens: SessionTokenService):
        token = session_tokens.issue(
            Identity(fid=TEST_FID, address=TEST_ADDRESS), now=1_000
        )

        assert session_tokens.verify(token, now=1_000 + 86400) is not None
        assert session_tokens.verify(token, now=1_000 + 86401) is None

    def test_token_without_expiry_accepted(
        self, session_tokens: SessionTokenService, test_jwt_secret: str
    ):
        token = AuthTestData.make_token(
            {"fid": TEST_FID, "address": "0xabc"}, test_jwt_secret
        )

        assert session_tokens.verify(token) == Identity(fid=TEST_FID, address="0xabc")

    def test_unknown_claims_rejected(
        self, session_tokens: SessionTokenService, test_jwt_secret: str
    ):
        now = int(time.time())
        token = AuthTestData.make_token(
            {
                "fid": TEST_FID,
                "address": "0xabc",
                "iat": now,
                "exp": now + 60,
                "admin": True,
            },
            test_jwt_secret,
        )

        assert session_tokens.verify(token) is None

    def test_string_fid_rejected(
        self, session_tokens: SessionTokenService, test_jwt_secret: str
    ):
        now = int(time.time())
        token = AuthTestData.make_token(
            {"fid": "12345", "address": "0xabc", "iat": now, "exp": now + 60},
            test_jwt_secret,
        )

        assert session_tokens.verify(token) is None

    def test_other_algorithm_rejected(
        self, session_tokens: SessionTokenService, test_jwt_secret: str
    ):
        now = int(time.time())
        token = AuthTestData.make_token(
            {"fid": TEST_FID, "address": "0xabc", "iat": now, "exp": now + 60},
            test_jwt_secret,
            header={"alg": "none", "typ": "JWT"},
        )

        assert session_tokens.verify(token) is None

    def test_unexpected_token_type_rejected(
        self, session_tokens: SessionTokenService, test_jwt_secret: str
    ):
        now = int(time.time())
        token = AuthTestData.make_token(
            {"fid": TEST_FID, "address": "0xabc", "iat": now, "exp": now + 60},
            test_jwt_secret,
            header={"alg": "HS256", "typ": "at+jwt"},
        )

        assert session_tokens.verify(token) is None

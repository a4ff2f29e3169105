"""
Tests for the credential codec and the token service
"""

import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from fin_api.errors import BadParamInput, TokenError
from fin_api.security.passwords import digest_password, validate_email, verify_password
from fin_api.security.tokens import TokenService
from tests.conftest import TEST_SECRET


def _b64(data: dict) -> str:
    raw = json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


class TestPasswordDigest:

    def test_digest_is_deterministic(self):
        assert digest_password("pw") == digest_password("pw")

    def test_different_passwords_differ(self):
        assert digest_password("pw") != digest_password("pw2")
        assert digest_password("") != digest_password(" ")

    def test_digest_is_not_plaintext(self):
        digest = digest_password("pw")
        assert digest != "pw"
        assert len(digest) == 64

    def test_verify_password(self):
        digest = digest_password("secret")
        assert verify_password("secret", digest)
        assert not verify_password("Secret", digest)


class TestEmailValidation:

    def test_valid_email_is_normalized(self):
        assert validate_email("  A@B.com ") == "a@b.com"

    @pytest.mark.parametrize("email", ["", "plainaddress", "a@", "@b.com", "a b@c.com", "a@-b.com"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(BadParamInput):
            validate_email(email)


class TestTokenService:

    def test_issue_and_verify(self, token_service):
        token = token_service.issue(42, "a@b.com")
        claims = token_service.verify(token)

        assert claims["userid"] == 42
        assert claims["email"] == "a@b.com"
        assert claims["authorized"] is True

    def test_expiry_is_a_day_out(self, token_service):
        claims = token_service.verify(token_service.issue(1, "a@b.com"))
        expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
        remaining = expires_at - datetime.now(timezone.utc)

        assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)

    def test_expired_token_rejected(self):
        service = TokenService(TEST_SECRET, expires_in=timedelta(seconds=-30))
        token = service.issue(1, "a@b.com")

        with pytest.raises(TokenError, match="expired"):
            service.verify(token)

    def test_token_signed_with_other_key_rejected(self, token_service):
        other = TokenService("another-signing-key-with-enough-length-too")
        with pytest.raises(TokenError):
            token_service.verify(other.issue(1, "a@b.com"))

    def test_unsigned_token_rejected(self, token_service):
        payload = {"userid": 1, "exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())}
        forged = f"{_b64({'alg': 'none', 'typ': 'JWT'})}.{_b64(payload)}."

        with pytest.raises(TokenError, match="signing method"):
            token_service.verify(forged)

    def test_token_without_expiry_rejected(self, token_service):
        token = jwt.encode({"userid": 1}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(TokenError):
            token_service.verify(token)

    def test_garbage_rejected(self, token_service):
        with pytest.raises(TokenError):
            token_service.verify("not-a-token")

    def test_non_hmac_algorithm_refused(self):
        with pytest.raises(ValueError):
            TokenService(TEST_SECRET, algorithm="RS256")

    def test_empty_key_refused(self):
        with pytest.raises(ValueError):
            TokenService("")

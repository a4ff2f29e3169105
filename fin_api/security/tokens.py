"""Issuing and verifying signed bearer tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from fin_api.errors import TokenError


HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class TokenService:
    """
    Signs and verifies time-limited identity assertions.

    The signing key and algorithm are supplied at construction so that key
    material comes from configuration and can be rotated without code changes.
    Only the HMAC family is accepted; a token whose header names any other
    algorithm is rejected before its signature is checked.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256",
                 expires_in: timedelta = timedelta(hours=24)):
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")
        if not secret_key:
            raise ValueError("A signing key is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: int, email: str) -> str:
        payload = {
            "authorized": True,
            "userid": user_id,
            "email": email,
            "exp": datetime.now(timezone.utc) + self.expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the claims of a valid token, raise TokenError otherwise."""
        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as e:
            raise TokenError("Token is malformed") from e

        if header.get("alg") not in HMAC_ALGORITHMS:
            raise TokenError("Unexpected signing method")

        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenError("Token is expired") from e
        except jwt.InvalidTokenError as e:
            raise TokenError("Token is invalid") from e

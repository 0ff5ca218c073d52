"""
Access token signing and verification (HS256 JWT).

Tokens carry sub=email, iat and exp as integer epoch seconds, a random jti
so two tokens minted in the same second differ, plus any extra claims.
Expiry is checked here against an injectable clock rather than by the JWT
library, so there is no leeway and boundaries are exact.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from jose import JWTError, jwt

from src.domain.result import Error, Result, Return

ALGORITHM = "HS256"


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenSigner:
    def __init__(
        self,
        secret: str,
        ttl_seconds: int = 25,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def __repr__(self) -> str:
        return f"TokenSigner(ttl_seconds={self.ttl_seconds})"

    def issue(self, subject: str, extra_claims: Optional[Dict[str, Any]] = None) -> str:
        """
        Issue a signed access token for subject.

        Args:
            subject: Account email
            extra_claims: Additional claims; cannot override sub/jti/iat/exp

        Returns:
            JWT token string
        """
        now = self.clock()
        payload = dict(extra_claims or {})
        payload.update(
            {
                "sub": subject,
                "jti": uuid4().hex,
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(seconds=self.ttl_seconds)).timestamp()),
            }
        )
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def _decode_signed(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError:
            return None

    def decode(self, token: str) -> Result[Dict[str, Any]]:
        """Signature and expiry check, reporting why a token is rejected"""
        claims = self._decode_signed(token)
        if claims is None:
            return Return.err(Error("TOKEN_INVALID", "Invalid token"))

        exp = claims.get("exp")
        if not isinstance(exp, int):
            return Return.err(Error("TOKEN_INVALID", "Invalid token"))

        if exp <= int(self.clock().timestamp()):
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))

        return Return.ok(claims)

    def verify(self, token: str, expected_subject: str) -> bool:
        result = self.decode(token)
        if result.is_err():
            return False
        return result.value.get("sub") == expected_subject

    def extract_subject(self, token: str) -> Result[str]:
        """Read sub from a correctly signed token; expiry is not checked"""
        claims = self._decode_signed(token)
        if claims is None or not isinstance(claims.get("sub"), str):
            return Return.err(Error("TOKEN_MALFORMED", "Token cannot be parsed"))
        return Return.ok(claims["sub"])

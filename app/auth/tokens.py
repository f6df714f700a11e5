"""HS256 bearer tokens carrying user identity claims."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt as pyjwt

from app.auth.models import UserRecord
from app.core.errors import AuthenticationFailure, SigningFailure

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    email: str
    role: str
    issued_at: int
    not_before: int
    expires_at: int
    issuer: str
    audience: str


class TokenIssuer:
    """Signs and verifies tokens with a secret fixed at construction time."""

    def __init__(
        self,
        secret: str,
        *,
        issuer: str = "niyam-api",
        audience: str = "users",
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._ttl = ttl
        self._clock = clock

    def issue(self, user: UserRecord) -> str:
        """Build claims for *user* and return the signed token string.

        Raises:
            SigningFailure: the secret is empty or PyJWT rejected the payload.
        """
        if not self._secret:
            raise SigningFailure("failed to sign token", details="signing secret is empty")

        now = self._clock()
        payload = {
            "sub": str(user.id),
            "userId": str(user.id),
            "email": user.email,
            "role": user.role,
            "iat": now,
            "nbf": now,
            "exp": now + self._ttl,
            "iss": self._issuer,
            "aud": [self._audience],
        }
        try:
            return pyjwt.encode(payload, self._secret, algorithm=ALGORITHM)
        except (pyjwt.PyJWTError, TypeError, ValueError) as exc:
            raise SigningFailure("failed to sign token", details=str(exc)) from exc

    def verify(self, token: str) -> TokenClaims:
        """Decode *token*, checking signature, validity window, issuer and audience.

        Raises:
            AuthenticationFailure: for any invalid, expired or foreign token.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "nbf", "sub"]},
            )
        except pyjwt.PyJWTError as exc:
            raise AuthenticationFailure(details=str(exc)) from exc

        return TokenClaims(
            subject=payload["sub"],
            email=payload.get("email", ""),
            role=payload.get("role", "user"),
            issued_at=payload["iat"],
            not_before=payload["nbf"],
            expires_at=payload["exp"],
            issuer=payload["iss"],
            audience=self._audience,
        )

# learnify/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from learnify.core.config import Settings
from learnify.core.errors import (
    TokenExpiredError,
    TokenGenerationError,
    TokenInvalidError,
)
from learnify.schemas.auth import TokenClaims

_REQUIRED_CLAIMS = ["exp", "iss", "aud", "userId", "email", "role"]


def build_password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class PasswordHasher:
    def __init__(self, context: CryptContext):
        self._context = context

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            # malformed hash in storage
            return False


class TokenService:
    """
    Issues and verifies the signed bearer tokens handed out at login.

    Tokens are stateless: logging out is the client discarding its token.
    """

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 60 * 24,
        issuer: str = "learnify-api",
        audience: str = "learnify-users",
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expires_minutes=settings.JWT_EXPIRES_MINUTES,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
        )

    def issue(
        self,
        claims: TokenClaims,
        *,
        expires_delta: Optional[timedelta] = None,
        now: Optional[datetime] = None,
    ) -> str:
        if not self.secret:
            raise TokenGenerationError("secret key is not configured")

        issued_at = now or datetime.now(timezone.utc)
        expire = issued_at + (expires_delta or timedelta(minutes=self.expires_minutes))
        payload = {
            "userId": claims.user_id,
            "email": claims.email,
            "role": claims.role,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": issued_at,
            "exp": expire,
        }
        try:
            return jwt.encode(payload, self.secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise TokenGenerationError(str(exc)) from exc

    def verify(self, token: str, *, now: Optional[datetime] = None) -> TokenClaims:
        """
        Check signature, issuer, audience and expiry.

        Expiry is compared against ``now`` (defaults to the current time), so a
        token issued at T with the default lifetime is accepted at T+23h and
        rejected at T+25h.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"require": _REQUIRED_CLAIMS, "verify_exp": False},
            )
        except jwt.PyJWTError as exc:
            raise TokenInvalidError() from exc

        current = now or datetime.now(timezone.utc)
        if payload["exp"] <= current.timestamp():
            raise TokenExpiredError()

        try:
            return TokenClaims(
                user_id=payload["userId"],
                email=payload["email"],
                role=payload["role"],
            )
        except PydanticValidationError as exc:
            raise TokenInvalidError() from exc

    def decode(self, token: str) -> Dict[str, Any]:
        # No signature check: never use the result for authorization.
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as exc:
            raise TokenInvalidError() from exc

    def is_expired(self, token: str, *, now: Optional[datetime] = None) -> bool:
        try:
            payload = self.decode(token)
        except TokenInvalidError:
            return True
        exp = payload.get("exp")
        if exp is None:
            return True
        current = now or datetime.now(timezone.utc)
        return exp <= current.timestamp()

"""
VendorHub Backend — Credential & Token Services
=================================================

What:  Password hashing (passlib/bcrypt) and bearer token issue/verify (PyJWT).
How:   Both classes are configured entirely through constructor arguments;
       module-level instances are built from `settings` for the routes.

Password hashing:
    bcrypt with a fixed work factor (BCRYPT_ROUNDS, default 10). Hashing and
    verification are CPU-bound (~50-100ms at 10 rounds), so the async
    wrappers push them onto Starlette's thread pool instead of stalling the
    event loop for every other request.

Tokens:
    HS256 JWT carrying {sub, iat, exp}. One static secret signs and verifies;
    there is no revocation list, refresh token or key rotation.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

import jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from vendorhub.config import Settings, settings
from vendorhub.exceptions import TokenExpiredError, TokenInvalidError, TokenMissingError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted one-way hashing of vendor passwords."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """False for a wrong password or an unparseable hash; never raises."""
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False

    async def hash_async(self, plaintext: str) -> str:
        return await run_in_threadpool(self.hash, plaintext)

    async def verify_async(self, plaintext: str, hashed: str) -> bool:
        return await run_in_threadpool(self.verify, plaintext, hashed)


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a bearer token."""
    subject: str
    issued_at: datetime
    expires_at: datetime

    @property
    def vendor_id(self) -> uuid.UUID:
        return uuid.UUID(self.subject)


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    verify() either returns TokenClaims or raises exactly one of:
        TokenMissingError  - no token presented
        TokenExpiredError  - signature fine, `exp` in the past
        TokenInvalidError  - bad signature, malformed token, bad subject
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 3600):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenService":
        return cls(
            secret=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            expires_in=config.jwt_expires_in,
        )

    def issue(
        self,
        subject: Union[str, uuid.UUID],
        expires_in: Optional[int] = None,
    ) -> str:
        """
        Sign a token for `subject`.

        Args:
            subject: Vendor id; stored as a string in the `sub` claim.
            expires_in: Lifetime override in seconds (defaults to the service lifetime).
        """
        now = datetime.now(timezone.utc)
        lifetime = self.expires_in if expires_in is None else expires_in
        payload: Dict[str, Any] = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=lifetime)).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> TokenClaims:
        if not token or not token.strip():
            raise TokenMissingError()

        try:
            payload = jwt.decode(
                token.strip(),
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(reason=type(e).__name__)

        subject = payload["sub"]
        try:
            uuid.UUID(str(subject))
        except ValueError:
            raise TokenInvalidError(reason="subject is not a vendor id")

        return TokenClaims(
            subject=str(subject),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
token_service = TokenService.from_settings(settings)

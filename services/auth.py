"""Bearer token verification and admin checks."""

import logging
from dataclasses import dataclass, field

from jose import JWTError, jwt

from core.exceptions import AuthenticationError, AuthorizationError
from storage.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedUser:
    uid: str
    claims: dict = field(default_factory=dict)
    is_admin: bool = False


def parse_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer`` header value."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Unauthorized")
    token = authorization[len("Bearer ") :].strip()
    if not token:
        raise AuthenticationError("Unauthorized")
    return token


class TokenVerifier:
    """Verifies identity provider ID tokens (JWT) with python-jose."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", audience: str | None = None):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience

    def verify(self, token: str) -> dict:
        """
        Decode and verify a token.

        Raises:
            AuthenticationError: Bad signature, expired, or no subject
        """
        options = {"verify_aud": self.audience is not None}
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            raise AuthenticationError("Invalid token") from e

        if not claims.get("sub"):
            raise AuthenticationError("Token has no subject")
        return claims


class AdminVerifier:
    """Admin if the token carries the admin claim, or the uid is in the admins table."""

    def __init__(self, token_verifier: TokenVerifier, user_store: UserStore):
        self.token_verifier = token_verifier
        self.users = user_store

    async def require_admin(self, authorization: str | None) -> AuthenticatedUser:
        """
        Resolve the caller and require admin rights.

        Raises:
            AuthenticationError: Missing or invalid bearer token
            AuthorizationError: Valid token, not an admin
        """
        token = parse_bearer_token(authorization)
        claims = self.token_verifier.verify(token)
        uid = claims["sub"]

        if claims.get("admin") is True:
            return AuthenticatedUser(uid=uid, claims=claims, is_admin=True)

        if await self.users.is_admin(uid):
            await self._promote_claim(uid)
            return AuthenticatedUser(uid=uid, claims=claims, is_admin=True)

        logger.info(f"Rejected non-admin caller {uid}")
        raise AuthorizationError("Forbidden")

    async def _promote_claim(self, uid: str) -> None:
        """Record the admin custom claim; failure never blocks the request."""
        try:
            await self.users.set_custom_claims(uid, admin=True)
        except Exception as e:
            logger.warning(f"Could not set admin claim for {uid}: {e}")
            await self.users.session.rollback()

    async def grant_admin(self, uid: str) -> None:
        await self.users.add_admin(uid)
        await self.users.set_custom_claims(uid, admin=True)
        logger.info(f"Granted admin to {uid}")

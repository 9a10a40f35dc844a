"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from src.config import Settings
from src.exceptions import InternalError, InvalidTokenError
from src.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    A mismatch returns False. A stored hash that passlib cannot parse is a
    data problem, not a bad credential, so it raises InternalError.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Stored password hash could not be verified: {e}")
        raise InternalError("malformed password hash") from e


class TokenService:
    """Issues and validates signed, expiring bearer tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(minutes=settings.jwt_expiration_minutes),
        )

    def issue(self, user_id: str, email: str) -> str:
        """Create a token whose subject is the user id and issuer is the email."""
        if not self.secret:
            raise InternalError("token error: signing secret is not configured")

        expire = datetime.now(UTC) + self.ttl
        to_encode = {
            "sub": user_id,
            "iss": email,
            "exp": expire,
        }
        try:
            return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)
        except JWTError as e:
            raise InternalError(f"token error: {e}") from e

    def validate(self, token: str) -> TokenClaims:
        """
        Decode and verify a token.

        Only ``self.algorithm`` is accepted, so a token re-signed with another
        algorithm (or with ``none``) fails verification.

        Raises:
            InvalidTokenError: on a bad signature, malformed token, disallowed
                algorithm, expiry, or missing claims.
        """
        if not self.secret:
            raise InvalidTokenError("invalid token: signing secret is not configured")

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise InvalidTokenError("token has expired") from e
        except JWTError as e:
            raise InvalidTokenError(f"invalid token: {e}") from e

        user_id = payload.get("sub")
        issuer = payload.get("iss")
        expires_at = payload.get("exp")
        if not user_id or not issuer or expires_at is None:
            raise InvalidTokenError("invalid token: required claims missing")

        return TokenClaims(
            user_id=user_id,
            issuer=issuer,
            expires_at=datetime.fromtimestamp(expires_at, tz=UTC),
        )

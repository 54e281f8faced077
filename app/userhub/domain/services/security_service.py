import json
import secrets
from datetime import UTC, datetime, timedelta
from functools import cached_property
from typing import Any, Type, TypeVar

import jwt
from jwt import InvalidKeyError, InvalidTokenError
from passlib.context import CryptContext
from passlib.exc import UnknownHashError
from pydantic import BaseModel, ValidationError
from userhub.core.config import settings
from userhub.core.exceptions import errors
from userhub.core.logging import get_logger
from userhub.domain.schemas import AuthSessionState, AuthSessionToken

logger = get_logger(__name__)

ALGORITHM = "HS256"

T = TypeVar("T")

# pbkdf2_sha256 embeds a random per-hash salt in the hash string
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class SecurityService:
    """Service for handling password hashes and JWT access tokens"""

    def __init__(self, secret_key: str | None = None, token_max_age: int | None = None):
        self.algorithm = ALGORITHM
        self.secret_key = secret_key or settings.AUTH_SECRET_KEY
        self.token_max_age = token_max_age or settings.AUTH_TOKEN_MAX_AGE

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, *, plain_password: str, hashed_password: str) -> bool:
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except (UnknownHashError, ValueError, TypeError):
            logger.debug(
                f"{__name__}.verify_password:: Unable to verify password due to hashing error",
                exc_info=True,
            )
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return pwd_context.hash(secrets.token_hex(16))

    def burn_verification(self, plain_password: str) -> None:
        """
        Spend the same hashing work as a real verification, against a hash
        nothing can match. Used when there is no stored hash to check.
        """
        pwd_context.verify(plain_password, self._dummy_hash)

    def create_jwt_token(self, subject: str | Any, expiry_time_in_secs: timedelta | None = None) -> str:
        """
        Create a JWT token with the given subject and expiry time.

        Args:
            subject: The subject of the token. Pydantic models are stored as JSON.
            expiry_time_in_secs: Token lifetime, defaults to ``AUTH_TOKEN_MAX_AGE``

        Returns:
            Encoded JWT token string
        """
        if isinstance(subject, BaseModel):
            token_subject = json.dumps(subject.model_dump(mode="json"))
        else:
            token_subject = str(subject)

        if expiry_time_in_secs is None:
            expiry_time_in_secs = timedelta(seconds=self.token_max_age)

        now = datetime.now(UTC)
        payload = {
            "aud": settings.APP_NAME,
            "exp": now + expiry_time_in_secs,
            "iat": now,
            "nbf": now,
            "sub": token_subject,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a JWT token.

        Raises:
            InvalidTokenError: If the token is invalid or expired
        """
        try:
            return jwt.decode(
                jwt=token,
                audience=settings.APP_NAME,
                key=self.secret_key,
                options={"require": ["exp", "iat", "nbf", "sub", "aud"]},
                algorithms=[self.algorithm],
            )
        except (InvalidTokenError, InvalidKeyError) as error:
            raise errors.InvalidTokenError() from error

    def get_token_data(self, decoded_token: dict[str, Any], target_type: Type[T]) -> T:
        """
        Parse the subject of a decoded token into ``target_type``.

        Args:
            decoded_token: The decoded JWT token payload
            target_type: A pydantic model (e.g. AuthSessionState) or a plain type

        Raises:
            InvalidTokenError: If the subject is missing or doesn't fit the type
        """
        try:
            subject = decoded_token.get("sub")
            if subject is None:
                raise ValueError("Token subject (sub) is missing")

            if isinstance(target_type, type) and issubclass(target_type, BaseModel):
                return target_type.model_validate_json(subject)  # type: ignore[return-value]

            return subject if isinstance(subject, target_type) else target_type(subject)  # type: ignore[call-arg]

        except (ValueError, ValidationError, TypeError) as error:
            logger.error(f"Failed to parse token data into {target_type.__name__}: {error}")
            raise errors.InvalidTokenError() from error

    def generate_access_token(self, auth_session_state: AuthSessionState) -> AuthSessionToken:
        """
        Issue an access token carrying the account id and role.
        """
        token = self.create_jwt_token(
            subject=auth_session_state,
            expiry_time_in_secs=timedelta(seconds=self.token_max_age),
        )
        return AuthSessionToken(token=token, expires_in=self.token_max_age)


security_service = SecurityService()

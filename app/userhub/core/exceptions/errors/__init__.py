from .account import AccountAlreadyExistsError, AccountNotFoundError  # noqa: F401
from .auth import InvalidTokenError  # noqa: F401
from .base import InternalServerError, NotFoundError, ServiceError, UnauthorizedError  # noqa: F401

__all__ = [
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "InvalidTokenError",
    "InternalServerError",
    "NotFoundError",
    "ServiceError",
    "UnauthorizedError",
]

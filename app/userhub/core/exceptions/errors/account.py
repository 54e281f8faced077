from fastapi import status

from .base import NotFoundError, ServiceError


class AccountNotFoundError(NotFoundError):
    """
    This error is raised when an account is not found in the system.
    """

    type_ = "account_not_found"
    title = "Account Not Found"
    detail = "User not found"


class AccountAlreadyExistsError(ServiceError):
    """
    This error is raised when an attempt is made to create an account whose email is taken.
    """

    type_ = "account_already_exists"
    title = "Account Already Exists"
    detail = "User already exists"
    status = status.HTTP_409_CONFLICT

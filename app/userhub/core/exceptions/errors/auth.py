from .base import UnauthorizedError


class InvalidTokenError(UnauthorizedError):
    """
    An error indicating that the provided access token is invalid or expired.
    """

    type_ = "invalid_token"
    title = "Invalid or expired authentication token"
    detail = "Please login to continue."

from typing import Literal

from pydantic import BaseModel, EmailStr, Field
from userhub.domain.enums import AccountRoleEnum
from userhub.domain.schemas.account import AccountProfile


class AuthLoginRequest(BaseModel):
    """
    Represents a login attempt.

    Attributes:
        email (EmailStr): The claimed account email.
        password (str): The plaintext password to verify.
    """

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class AuthSessionState(BaseModel):
    """
    Claims carried inside an access token.

    Attributes:
        id (str): The account identifier.
        role (AccountRoleEnum): The account role at the time of login.
    """

    id: str
    role: AccountRoleEnum


class AuthSessionToken(BaseModel):
    """
    Represents an issued token.

    Attributes:
        scope (Literal["access"]): The scope of the token.
        token (str): The encoded JWT.
        expires_in (int): Lifetime of the token in seconds.
    """

    scope: Literal["access"] = "access"
    token: str
    expires_in: int


class AuthLoginResponse(BaseModel):
    """
    Returned after a successful login.

    Attributes:
        user (AccountProfile): The public profile of the authenticated account.
        token (str): The access token.
        expires_in (int): Lifetime of the token in seconds.
    """

    user: AccountProfile
    token: str
    expires_in: int

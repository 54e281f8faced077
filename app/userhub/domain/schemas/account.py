from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints
from pydantic.alias_generators import to_camel
from userhub.domain.enums import AccountRoleEnum

PlainPassword = Annotated[str, StringConstraints(min_length=8, max_length=128)]

# Fields owned by the service; callers can never set them through profile data
PROTECTED_ACCOUNT_FIELDS: frozenset[str] = frozenset(
    {"id", "password", "role", "createdAt", "updatedAt", "created_at", "updated_at"}
)


class AccountCreate(BaseModel):
    """
    Schema for creating a new account.

    Any additional fields are kept and stored alongside the account as
    profile data, except the ones in ``PROTECTED_ACCOUNT_FIELDS``.
    """

    model_config = ConfigDict(extra="allow")

    email: EmailStr
    password: PlainPassword

    def profile_fields(self) -> dict[str, Any]:
        return {k: v for k, v in (self.model_extra or {}).items() if k not in PROTECTED_ACCOUNT_FIELDS}


class AccountUpdate(BaseModel):
    """
    Schema for a partial account update.

    Only fields the caller actually sent are applied. Password and role changes
    are not accepted here.
    """

    model_config = ConfigDict(extra="allow")

    email: EmailStr | None = None

    def changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        if data.get("email", "") is None:
            del data["email"]
        return {k: v for k, v in data.items() if k not in PROTECTED_ACCOUNT_FIELDS}


class AccountPasswordUpdate(BaseModel):
    """Schema for replacing an account password."""

    password: PlainPassword


class AccountProfile(BaseModel):
    """
    Public view of an account: the stored record without its password hash.

    Serialized with camelCase keys to match the stored documents; extra
    profile fields pass through untouched.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str
    email: str
    role: AccountRoleEnum = AccountRoleEnum.MEMBER
    created_at: datetime
    updated_at: datetime

from enum import StrEnum


class AccountRoleEnum(StrEnum):
    """
    Enumeration representing the roles an account can hold.

    Attributes:\n
        MEMBER: Default role given to every new account.
        ADMIN: Administrative account.
    """

    MEMBER = "member"
    ADMIN = "admin"

    def is_admin(self) -> bool:
        return self == AccountRoleEnum.ADMIN

from .account import AccountRoleEnum  # noqa: F401

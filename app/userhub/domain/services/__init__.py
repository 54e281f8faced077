from .account_service import AccountService, to_account_profile  # noqa: F401
from .auth_service import AuthService  # noqa: F401
from .security_service import SecurityService, security_service  # noqa: F401

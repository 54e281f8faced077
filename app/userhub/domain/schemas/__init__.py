from .account import (  # noqa: F401
    PROTECTED_ACCOUNT_FIELDS,
    AccountCreate,
    AccountPasswordUpdate,
    AccountProfile,
    AccountUpdate,
)
from .activity import ActivityFeed  # noqa: F401
from .auth import AuthLoginRequest, AuthLoginResponse, AuthSessionState, AuthSessionToken  # noqa: F401

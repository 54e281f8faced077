from .accounts.endpoints import router as account_router  # noqa: F401
from .auth.endpoints import router as auth_router  # noqa: F401
from .health.endpoints import router as health_router  # noqa: F401

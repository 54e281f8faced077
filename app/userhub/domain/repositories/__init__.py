from .account_repository import AccountRepository  # noqa: F401
from .activity_repository import ActivityRepository  # noqa: F401
from .base_repository import BaseRepository  # noqa: F401

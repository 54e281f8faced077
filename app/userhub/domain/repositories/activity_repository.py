from userhub.core.constants import ACTIVITY_OWNER_FIELD
from userhub.domain.repositories.base_repository import BaseRepository
from userhub.libs.docstore import Document


class ActivityRepository(BaseRepository):
    """Read access to one activity collection (posts, comments or votes)."""

    async def find_by_account(self, account_id: str) -> list[Document]:
        return await self.find_by(**{ACTIVITY_OWNER_FIELD: account_id})

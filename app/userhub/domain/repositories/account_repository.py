from userhub.core.constants import USERS_COLLECTION
from userhub.domain.repositories.base_repository import BaseRepository
from userhub.libs.docstore import Document, DocumentStore


class AccountRepository(BaseRepository):
    def __init__(self, store: DocumentStore):
        super().__init__(collection=USERS_COLLECTION, store=store)

    async def find_by_email(self, email: str) -> list[Document]:
        """
        All accounts registered under ``email``.

        Uniqueness is only checked before insert, so more than one match is
        possible after concurrent sign-ups.
        """
        return await self.find_by(email=email)

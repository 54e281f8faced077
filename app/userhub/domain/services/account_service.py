from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from pydantic import ValidationError
from userhub.core.constants import (
    COMMENTS_COLLECTION,
    POSTS_COLLECTION,
    SENSITIVE_ACCOUNT_FIELDS,
    USERS_CACHE_KEY,
    USERS_CACHE_TTL,
    VOTES_COLLECTION,
)
from userhub.core.exceptions import errors
from userhub.core.helpers.misc import utc_now
from userhub.core.logging import add_to_log_context, get_logger
from userhub.domain.enums import AccountRoleEnum
from userhub.domain.repositories import AccountRepository, ActivityRepository
from userhub.domain.schemas import AccountCreate, AccountProfile, AccountUpdate, ActivityFeed
from userhub.domain.services.security_service import SecurityService, security_service
from userhub.libs.cache import CacheError, CacheService
from userhub.libs.docstore import Document, DocumentStore

logger = get_logger(__name__)


def to_account_profile(document: Document) -> AccountProfile:
    """Project a stored account onto its public shape, dropping sensitive fields."""
    public_data = {k: v for k, v in document.data.items() if k not in SENSITIVE_ACCOUNT_FIELDS}
    return AccountProfile.model_validate({**public_data, "id": document.id})


class AccountService:
    """
    Account CRUD plus the cached account listing.

    The listing lives in a single cache slot that only account deletion
    invalidates. Creations and updates show up once the slot expires.
    """

    def __init__(
        self,
        store: DocumentStore,
        cache_service: CacheService,
        security: SecurityService = security_service,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.account_repository = AccountRepository(store=store)
        self.post_repository = ActivityRepository(collection=POSTS_COLLECTION, store=store)
        self.comment_repository = ActivityRepository(collection=COMMENTS_COLLECTION, store=store)
        self.vote_repository = ActivityRepository(collection=VOTES_COLLECTION, store=store)
        self.cache_service = cache_service
        self.security_service = security
        self.clock = clock

    async def create_account(self, account_data: AccountCreate) -> AccountProfile:
        """
        Create a new account with the default role.

        The email check and the insert are two separate store calls; two
        concurrent sign-ups with one email can both get through.

        Raises:
            AccountAlreadyExistsError: If an account already uses the email
        """
        existing_accounts = await self.account_repository.find_by_email(account_data.email)

        if existing_accounts:
            logger.warning(f"{__name__}.create_account:: account already exists for {account_data.email}")
            raise errors.AccountAlreadyExistsError()

        now = self.clock()
        record: dict[str, Any] = {
            **account_data.profile_fields(),
            "email": account_data.email,
            "password": self.security_service.hash_password(account_data.password),
            "role": AccountRoleEnum.MEMBER.value,
            "createdAt": now,
            "updatedAt": now,
        }

        account_id = await self.account_repository.create(record)
        logger.info(f"{__name__}.create_account:: created account {account_id}")

        return to_account_profile(Document(id=account_id, data=record))

    async def get_accounts(self) -> list[AccountProfile]:
        """
        Every account's public profile, served from cache when possible.

        On a miss (or an unreadable cache) the listing is rebuilt from the store
        and written back for ``USERS_CACHE_TTL`` seconds. Concurrent misses each
        rebuild and the last write wins.
        """
        cached_accounts = await self.cache_service.get(USERS_CACHE_KEY)

        if cached_accounts is not None:
            try:
                accounts = [AccountProfile.model_validate(item) for item in cached_accounts]
                logger.debug(f"{__name__}.get_accounts:: cache hit for {USERS_CACHE_KEY}")
                return accounts
            except (ValidationError, TypeError):
                logger.warning(
                    f"{__name__}.get_accounts:: discarding malformed cache entry {USERS_CACHE_KEY}",
                    exc_info=True,
                )

        logger.debug(f"{__name__}.get_accounts:: cache miss for {USERS_CACHE_KEY}, reading store")

        documents = await self.account_repository.find_all()
        accounts = [to_account_profile(document) for document in documents]

        await self.cache_service.set(
            USERS_CACHE_KEY,
            [account.model_dump(mode="json", by_alias=True) for account in accounts],
            ttl=USERS_CACHE_TTL,
        )

        return accounts

    async def get_account(self, id: str) -> AccountProfile:
        """
        Raises:
            AccountNotFoundError: If no account has this id
        """
        document = await self.account_repository.find_one_by_id(id)
        if document is None:
            raise errors.AccountNotFoundError()

        return to_account_profile(document)

    async def update_account(self, id: str, account_update: AccountUpdate) -> AccountProfile:
        """
        Merge the supplied fields into the account and refresh ``updatedAt``.

        Returns:
            AccountProfile: The account as stored after the update

        Raises:
            AccountNotFoundError: If no account has this id
        """
        with add_to_log_context(account_id=id):
            document = await self.account_repository.find_one_by_id(id)
            if document is None:
                raise errors.AccountNotFoundError()

            await self.account_repository.update(id, {**account_update.changes(), "updatedAt": self.clock()})

            updated_document = await self.account_repository.find_one_by_id(id)
            if updated_document is None:
                # deleted between the update and the re-read
                raise errors.AccountNotFoundError()

            logger.info(f"{__name__}.update_account:: updated account {id}")
            return to_account_profile(updated_document)

    async def delete_account(self, id: str) -> None:
        """
        Delete the account, then drop the cached listing so the next read rebuilds it.

        Raises:
            AccountNotFoundError: If no account has this id; nothing is deleted or invalidated
            CacheError: If the listing could not be invalidated; the account is already deleted
        """
        with add_to_log_context(account_id=id):
            document = await self.account_repository.find_one_by_id(id)
            if document is None:
                raise errors.AccountNotFoundError()

            await self.account_repository.delete(id)

            try:
                await self.cache_service.invalidate(USERS_CACHE_KEY)
            except CacheError as e:
                logger.error(f"{__name__}.delete_account:: failed to invalidate {USERS_CACHE_KEY}: {e.message}")
                raise

            logger.debug(f"{__name__}.delete_account:: invalidated {USERS_CACHE_KEY}")
            logger.info(f"{__name__}.delete_account:: deleted account {id}")

    async def change_password(self, id: str, new_password: str) -> None:
        """
        Replace the stored password hash. The cached listing is left alone as it
        never contains passwords.

        Raises:
            AccountNotFoundError: If no account has this id
        """
        with add_to_log_context(account_id=id):
            document = await self.account_repository.find_one_by_id(id)
            if document is None:
                raise errors.AccountNotFoundError()

            await self.account_repository.update(
                id,
                {
                    "password": self.security_service.hash_password(new_password),
                    "updatedAt": self.clock(),
                },
            )
            logger.info(f"{__name__}.change_password:: password changed for account {id}")

    async def get_activity_feed(self, id: str) -> ActivityFeed:
        """
        Posts, comments and votes authored by the account, read one collection after another.
        """
        posts = await self.post_repository.find_by_account(id)
        comments = await self.comment_repository.find_by_account(id)
        votes = await self.vote_repository.find_by_account(id)

        return ActivityFeed(
            posts=[document.to_dict() for document in posts],
            comments=[document.to_dict() for document in comments],
            votes=[document.to_dict() for document in votes],
        )

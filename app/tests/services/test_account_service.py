from datetime import UTC, datetime, timedelta

import pytest
from userhub.core.constants import USERS_CACHE_KEY, USERS_CACHE_TTL, USERS_COLLECTION
from userhub.core.exceptions import errors
from userhub.domain.enums import AccountRoleEnum
from userhub.domain.schemas import AccountCreate, AccountUpdate
from userhub.domain.services import AccountService
from userhub.libs.cache import CacheConnectionError, CacheResponse, CacheService, MemoryCacheConfiguration
from userhub.libs.cache.providers.memory import MemoryCacheProvider

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class SteppingClock:
    """Returns T0, then advances one minute per call."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> datetime:
        now = T0 + timedelta(minutes=self.calls)
        self.calls += 1
        return now


class FrozenMonotonicClock:
    """Monotonic stand-in that only moves when told to."""

    def __init__(self) -> None:
        self.now = 500.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def new_account(email: str = "ada@example.com", password: str = "correct-horse", **extra) -> AccountCreate:
    return AccountCreate(email=email, password=password, **extra)


async def snapshot(store) -> list[dict]:
    return [document.to_dict() for document in await store.find(USERS_COLLECTION)]


class TestAccountCreation:
    """Test cases for AccountService.create_account"""

    @pytest.fixture(autouse=True)
    def setup(self, store, cache_service, security):
        self.store = store
        self.security = security
        self.clock = SteppingClock()
        self.account_service = AccountService(
            store=store, cache_service=cache_service, security=security, clock=self.clock
        )

    @pytest.mark.asyncio
    async def test_create_then_get_returns_supplied_fields(self):
        """A created account reads back with its fields, the default role and both timestamps."""
        created = await self.account_service.create_account(
            new_account(firstName="Ada", lastName="Lovelace", age=36)
        )

        fetched = await self.account_service.get_account(created.id)
        dumped = fetched.model_dump(by_alias=True)

        assert fetched.id == created.id
        assert fetched.email == "ada@example.com"
        assert dumped["firstName"] == "Ada"
        assert dumped["lastName"] == "Lovelace"
        assert dumped["age"] == 36
        assert fetched.role == AccountRoleEnum.MEMBER
        assert fetched.created_at == T0
        assert fetched.updated_at == T0
        assert "password" not in dumped

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self):
        """The second account with the same email is rejected and only one record persists."""
        await self.account_service.create_account(new_account())

        with pytest.raises(errors.AccountAlreadyExistsError) as exc_info:
            await self.account_service.create_account(new_account(password="another-password"))

        assert exc_info.value.status == 409
        assert len(await self.store.find(USERS_COLLECTION, {"email": "ada@example.com"})) == 1

    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self):
        created = await self.account_service.create_account(new_account())

        stored = await self.store.get(USERS_COLLECTION, created.id)

        assert stored.data["password"] != "correct-horse"
        assert self.security.verify_password(plain_password="correct-horse", hashed_password=stored.data["password"])

    @pytest.mark.asyncio
    async def test_protected_fields_are_ignored(self):
        """Callers cannot choose their own role, id or timestamps at sign-up."""
        created = await self.account_service.create_account(
            new_account(role="admin", id="chosen-id", createdAt="1999-01-01T00:00:00Z")
        )

        stored = await self.store.get(USERS_COLLECTION, created.id)

        assert created.id != "chosen-id"
        assert stored.data["role"] == "member"
        assert stored.data["createdAt"] == T0

    @pytest.mark.asyncio
    async def test_snake_case_timestamps_are_ignored(self):
        created = await self.account_service.create_account(
            new_account(created_at="bogus", updated_at="bogus2")
        )

        stored = await self.store.get(USERS_COLLECTION, created.id)
        dumped = created.model_dump(by_alias=True)

        assert "created_at" not in stored.data
        assert "updated_at" not in stored.data
        assert dumped["createdAt"] == T0
        assert "created_at" not in dumped


class TestAccountListing:
    """Test cases for the cached account listing"""

    @pytest.fixture(autouse=True)
    def setup(self, store, cache_service, security):
        self.store = store
        self.cache_service = cache_service
        self.account_service = AccountService(store=store, cache_service=cache_service, security=security)

    @pytest.mark.asyncio
    async def test_second_listing_is_served_from_cache(self):
        await self.account_service.create_account(new_account())
        await self.account_service.create_account(new_account(email="grace@example.com"))

        first = await self.account_service.get_accounts()
        reads_after_first = self.store.reads[USERS_COLLECTION]

        second = await self.account_service.get_accounts()

        assert self.store.reads[USERS_COLLECTION] == reads_after_first
        assert [a.model_dump() for a in second] == [a.model_dump() for a in first]
        assert {a.email for a in second} == {"ada@example.com", "grace@example.com"}

    @pytest.mark.asyncio
    async def test_miss_caches_listing_for_one_hour(self):
        clock = FrozenMonotonicClock()
        cache_service = CacheService(provider=MemoryCacheProvider(MemoryCacheConfiguration(), clock=clock))
        account_service = AccountService(store=self.store, cache_service=cache_service)
        await account_service.create_account(new_account())

        await account_service.get_accounts()
        reads_after_miss = self.store.reads[USERS_COLLECTION]

        assert await cache_service.provider.ttl(USERS_CACHE_KEY) == USERS_CACHE_TTL == 3600

        clock.advance(3599)
        await account_service.get_accounts()
        assert self.store.reads[USERS_COLLECTION] == reads_after_miss

        clock.advance(1)
        await account_service.get_accounts()
        assert self.store.reads[USERS_COLLECTION] == reads_after_miss + 1

    @pytest.mark.asyncio
    async def test_listing_never_exposes_passwords(self):
        await self.account_service.create_account(new_account())

        accounts = await self.account_service.get_accounts()
        cached = await self.cache_service.get(USERS_CACHE_KEY)

        assert all("password" not in a.model_dump(by_alias=True) for a in accounts)
        assert all("password" not in entry for entry in cached)

    @pytest.mark.asyncio
    async def test_delete_invalidates_listing(self):
        ada = await self.account_service.create_account(new_account())
        await self.account_service.create_account(new_account(email="grace@example.com"))
        await self.account_service.get_accounts()

        await self.account_service.delete_account(ada.id)
        assert await self.cache_service.exists(USERS_CACHE_KEY) is False

        reads_before = self.store.reads[USERS_COLLECTION]
        accounts = await self.account_service.get_accounts()

        assert self.store.reads[USERS_COLLECTION] > reads_before
        assert [a.email for a in accounts] == ["grace@example.com"]

    @pytest.mark.asyncio
    async def test_create_does_not_invalidate_listing(self):
        """New accounts only appear once the cached listing is dropped or expires."""
        await self.account_service.create_account(new_account())
        await self.account_service.get_accounts()

        await self.account_service.create_account(new_account(email="grace@example.com"))
        accounts = await self.account_service.get_accounts()

        assert [a.email for a in accounts] == ["ada@example.com"]

    @pytest.mark.asyncio
    async def test_update_does_not_invalidate_listing(self):
        ada = await self.account_service.create_account(new_account(firstName="Ada"))
        await self.account_service.get_accounts()

        await self.account_service.update_account(ada.id, AccountUpdate(firstName="Augusta"))
        accounts = await self.account_service.get_accounts()

        assert accounts[0].model_dump(by_alias=True)["firstName"] == "Ada"

    @pytest.mark.asyncio
    async def test_malformed_cache_entry_falls_back_to_store(self):
        await self.account_service.create_account(new_account())
        await self.cache_service.set(USERS_CACHE_KEY, [{"unexpected": True}])

        accounts = await self.account_service.get_accounts()

        assert [a.email for a in accounts] == ["ada@example.com"]
        assert (await self.cache_service.get(USERS_CACHE_KEY))[0]["email"] == "ada@example.com"


class TestAccountListingWithoutCache:
    """The listing keeps working when the cache backend is down"""

    @pytest.fixture(autouse=True)
    def setup(self, store, unreachable_cache_service, security):
        self.store = store
        self.account_service = AccountService(
            store=store, cache_service=unreachable_cache_service, security=security
        )

    @pytest.mark.asyncio
    async def test_cache_fault_reads_store_every_time(self):
        await self.account_service.create_account(new_account())

        first = await self.account_service.get_accounts()
        second = await self.account_service.get_accounts()

        assert [a.email for a in first] == [a.email for a in second] == ["ada@example.com"]
        assert self.store.reads[USERS_COLLECTION] >= 3

    @pytest.mark.asyncio
    async def test_delete_reports_failed_invalidation(self):
        """The store delete runs, then the invalidation fault reaches the caller."""
        ada = await self.account_service.create_account(new_account())

        with pytest.raises(CacheConnectionError):
            await self.account_service.delete_account(ada.id)

        assert await self.store.get(USERS_COLLECTION, ada.id) is None


class UndeletableCacheProvider(MemoryCacheProvider):
    """Memory cache whose backend drops out on delete."""

    async def delete(self, key: str) -> CacheResponse:
        raise CacheConnectionError("cache is down")


class TestAccountDeletionWithBrokenInvalidation:
    """A delete never looks successful while the stale listing survives"""

    @pytest.fixture(autouse=True)
    def setup(self, store, security):
        self.store = store
        self.cache_service = CacheService(provider=UndeletableCacheProvider(MemoryCacheConfiguration()))
        self.account_service = AccountService(store=store, cache_service=self.cache_service, security=security)

    @pytest.mark.asyncio
    async def test_failed_invalidation_is_raised_after_store_delete(self):
        ada = await self.account_service.create_account(new_account())
        await self.account_service.create_account(new_account(email="grace@example.com"))
        await self.account_service.get_accounts()

        with pytest.raises(CacheConnectionError):
            await self.account_service.delete_account(ada.id)

        assert await self.store.get(USERS_COLLECTION, ada.id) is None
        assert await self.cache_service.exists(USERS_CACHE_KEY) is True


class TestAccountMutations:
    """Test cases for update, delete and password changes"""

    @pytest.fixture(autouse=True)
    def setup(self, store, cache_service, security):
        self.store = store
        self.cache_service = cache_service
        self.security = security
        self.clock = SteppingClock()
        self.account_service = AccountService(
            store=store, cache_service=cache_service, security=security, clock=self.clock
        )

    @pytest.mark.asyncio
    async def test_get_missing_account(self):
        with pytest.raises(errors.AccountNotFoundError) as exc_info:
            await self.account_service.get_account("missing-id")

        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_update_missing_account_does_not_mutate(self):
        await self.account_service.create_account(new_account())
        before = await snapshot(self.store)
        writes_before = self.store.writes[USERS_COLLECTION]

        with pytest.raises(errors.AccountNotFoundError):
            await self.account_service.update_account("missing-id", AccountUpdate(firstName="Nobody"))

        assert await snapshot(self.store) == before
        assert self.store.writes[USERS_COLLECTION] == writes_before

    @pytest.mark.asyncio
    async def test_delete_missing_account_does_not_mutate(self):
        await self.account_service.create_account(new_account())
        await self.account_service.get_accounts()
        before = await snapshot(self.store)

        with pytest.raises(errors.AccountNotFoundError):
            await self.account_service.delete_account("missing-id")

        assert await snapshot(self.store) == before
        assert await self.cache_service.exists(USERS_CACHE_KEY) is True

    @pytest.mark.asyncio
    async def test_change_password_on_missing_account_does_not_mutate(self):
        await self.account_service.create_account(new_account())
        before = await snapshot(self.store)
        writes_before = self.store.writes[USERS_COLLECTION]

        with pytest.raises(errors.AccountNotFoundError):
            await self.account_service.change_password("missing-id", "a-new-password")

        assert await snapshot(self.store) == before
        assert self.store.writes[USERS_COLLECTION] == writes_before

    @pytest.mark.asyncio
    async def test_update_merges_fields_and_refreshes_updated_at(self):
        ada = await self.account_service.create_account(new_account(firstName="Ada", city="London"))

        updated = await self.account_service.update_account(ada.id, AccountUpdate(firstName="Augusta"))
        dumped = updated.model_dump(by_alias=True)

        assert dumped["firstName"] == "Augusta"
        assert dumped["city"] == "London"
        assert updated.created_at == T0
        assert updated.updated_at > updated.created_at

    @pytest.mark.asyncio
    async def test_update_ignores_password_and_role(self):
        ada = await self.account_service.create_account(new_account())
        stored_hash = (await self.store.get(USERS_COLLECTION, ada.id)).data["password"]

        updated = await self.account_service.update_account(
            ada.id, AccountUpdate(role="admin", password="plaintext-password")
        )
        stored = await self.store.get(USERS_COLLECTION, ada.id)

        assert updated.role == AccountRoleEnum.MEMBER
        assert stored.data["role"] == "member"
        assert stored.data["password"] == stored_hash

    @pytest.mark.asyncio
    async def test_update_ignores_snake_case_timestamps(self):
        ada = await self.account_service.create_account(new_account())

        await self.account_service.update_account(ada.id, AccountUpdate(created_at="bogus", updated_at="bogus2"))
        stored = await self.store.get(USERS_COLLECTION, ada.id)

        assert "created_at" not in stored.data
        assert "updated_at" not in stored.data
        assert stored.data["createdAt"] == T0

    @pytest.mark.asyncio
    async def test_change_password_stores_verifiable_hash(self):
        ada = await self.account_service.create_account(new_account())
        await self.account_service.get_accounts()

        await self.account_service.change_password(ada.id, "brand-new-password")
        stored = await self.store.get(USERS_COLLECTION, ada.id)

        assert stored.data["password"] != "brand-new-password"
        assert self.security.verify_password(
            plain_password="brand-new-password", hashed_password=stored.data["password"]
        )
        assert not self.security.verify_password(
            plain_password="correct-horse", hashed_password=stored.data["password"]
        )
        assert stored.data["updatedAt"] > stored.data["createdAt"]
        assert await self.cache_service.exists(USERS_CACHE_KEY) is True


class TestActivityFeed:
    """Test cases for AccountService.get_activity_feed"""

    @pytest.fixture(autouse=True)
    def setup(self, store, cache_service, security):
        self.store = store
        self.account_service = AccountService(store=store, cache_service=cache_service, security=security)

    @pytest.mark.asyncio
    async def test_feed_collects_authored_documents(self):
        post_id = await self.store.add("posts", {"userId": "u1", "title": "Notes on the engine"})
        await self.store.add("posts", {"userId": "u2", "title": "Someone else"})
        comment_id = await self.store.add("comments", {"userId": "u1", "body": "Agreed"})

        feed = await self.account_service.get_activity_feed("u1")

        assert feed.posts == [{"id": post_id, "userId": "u1", "title": "Notes on the engine"}]
        assert feed.comments == [{"id": comment_id, "userId": "u1", "body": "Agreed"}]
        assert feed.votes == []

    @pytest.mark.asyncio
    async def test_feed_for_unknown_account_is_empty(self):
        feed = await self.account_service.get_activity_feed("nobody")

        assert feed.posts == feed.comments == feed.votes == []

from pydantic import EmailStr
from userhub.core.exceptions import errors
from userhub.core.logging import get_logger
from userhub.domain.repositories import AccountRepository
from userhub.domain.schemas import AuthLoginResponse, AuthSessionState
from userhub.domain.services.account_service import to_account_profile
from userhub.domain.services.security_service import SecurityService, security_service
from userhub.libs.docstore import DocumentStore

logger = get_logger(__name__)


class AuthService:
    """
    Credential verification and access-token issuance.

    Reads the store only; never writes and never touches the cache.
    """

    def __init__(self, store: DocumentStore, security: SecurityService = security_service):
        self.account_repository = AccountRepository(store=store)
        self.security_service = security

    async def login(self, *, email: EmailStr, password: str) -> AuthLoginResponse:
        """
        Verify ``password`` for the account registered under ``email`` and issue a token.

        An unknown email and a wrong password fail identically, and both paths
        do one password verification so they cost about the same time.

        Raises:
            UnauthorizedError: If the credentials don't match an account
        """
        accounts = await self.account_repository.find_by_email(email)

        if not accounts:
            self.security_service.burn_verification(password)
            logger.info(f"{__name__}.login:: failed login attempt")
            raise errors.UnauthorizedError()

        # duplicates can only come from the sign-up race; first one wins
        account = accounts[0]

        if not self.security_service.verify_password(
            plain_password=password,
            hashed_password=str(account.data.get("password", "")),
        ):
            logger.info(f"{__name__}.login:: failed login attempt")
            raise errors.UnauthorizedError()

        profile = to_account_profile(account)
        session_token = self.security_service.generate_access_token(
            AuthSessionState(id=account.id, role=profile.role),
        )

        logger.info(f"{__name__}.login:: account {account.id} logged in")

        return AuthLoginResponse(user=profile, token=session_token.token, expires_in=session_token.expires_in)

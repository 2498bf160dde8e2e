import logging
import uuid
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import verify_token
from app.db.repositories.account_repository import AccountRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import Account, Credential, User

logger = logging.getLogger(__name__)


def parse_uuid(value) -> Optional[uuid.UUID]:
    """Opaque ids arrive as strings; anything that is not a UUID matches nothing"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class AuthenticationService:
    """Resolves credentials and accounts from access tokens"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.account_repository = AccountRepository(session)

    async def get_credential_from_access_token(self, access_token: str) -> Optional[Credential]:
        """Credential for a signed, unexpired access token that is on record"""
        if verify_token(access_token) is None:
            logger.info("Rejected access token with invalid signature or expiry")
            return None

        credential = await self.account_repository.get_credential_by_access_token(access_token)
        if credential is None or not credential.is_access_token_valid():
            return None

        return credential

    async def get_account_from_credential(self, credential: Credential) -> Optional[Account]:
        """Current state of the account behind a credential"""
        return await self.account_repository.get_by_uuid(credential.account.uuid)


class UserService:
    """Lookups of user profiles"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def get_user_from_credential(self, credential: Credential) -> Optional[User]:
        return await self.user_repository.get_by_owner_account(credential.account.uuid)

    async def get_user_from_id(self, user_id) -> Optional[User]:
        user_uuid = parse_uuid(user_id)
        if user_uuid is None:
            return None
        return await self.user_repository.get_by_uuid(user_uuid)

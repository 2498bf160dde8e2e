from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
import uuid

from app.db.models.account import Account as AccountModel, Credential as CredentialModel
from app.domains.identity.entities import Account, Credential


class AccountRepository:
    """Accounts and the credentials issued to them"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, account: Account) -> Account:
        db_account = AccountModel(
            uuid=account.uuid,
            email=account.email,
            is_guest=account.is_guest,
            activate_date=account.activate_date
        )

        self.session.add(db_account)
        await self.session.commit()
        await self.session.refresh(db_account)
        return self._to_domain(db_account)

    async def get_by_uuid(self, account_uuid: uuid.UUID) -> Optional[Account]:
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.uuid == account_uuid)
        )
        db_account = result.scalar_one_or_none()
        return self._to_domain(db_account) if db_account else None

    async def create_credential(self, credential: Credential) -> Credential:
        db_credential = CredentialModel(
            uuid=credential.uuid,
            account_id=credential.account.uuid,
            access_token=credential.access_token,
            access_token_expire_date=credential.access_token_expire_date
        )

        self.session.add(db_credential)
        await self.session.commit()
        return await self.get_credential_by_access_token(credential.access_token)

    async def get_credential_by_access_token(self, access_token: str) -> Optional[Credential]:
        result = await self.session.execute(
            select(CredentialModel)
            .options(selectinload(CredentialModel.account))
            .where(CredentialModel.access_token == access_token)
        )
        db_credential = result.scalar_one_or_none()
        if not db_credential:
            return None

        return Credential(
            uuid=db_credential.uuid,
            account=self._to_domain(db_credential.account),
            access_token=db_credential.access_token,
            access_token_expire_date=db_credential.access_token_expire_date
        )

    def _to_domain(self, db_account: AccountModel) -> Account:
        return Account(
            uuid=db_account.uuid,
            is_guest=db_account.is_guest,
            activate_date=db_account.activate_date,
            email=db_account.email,
            created_at=db_account.created_at,
            updated_at=db_account.updated_at
        )

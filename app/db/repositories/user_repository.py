from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
import uuid

from app.db.models.user import User as UserModel
from app.domains.identity.entities import User


class UserRepository:
    """Repository for user profiles"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Create a user profile"""
        db_user = UserModel(
            uuid=user.uuid,
            owner_account=user.owner_account,
            display_id=user.display_id,
            display_name=user.display_name,
            avatar=user.avatar,
            verified=user.verified
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("User with this display id already exists")

    async def get_by_uuid(self, user_uuid: uuid.UUID) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.uuid == user_uuid)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_owner_account(self, account_uuid: uuid.UUID) -> Optional[User]:
        """First profile owned by an account"""
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.owner_account == account_uuid)
            .order_by(UserModel.created_at.asc())
            .limit(1)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    def _to_domain(self, db_user: UserModel) -> User:
        return User(
            uuid=db_user.uuid,
            owner_account=db_user.owner_account,
            display_id=db_user.display_id,
            display_name=db_user.display_name,
            avatar=db_user.avatar,
            verified=bool(db_user.verified),
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )

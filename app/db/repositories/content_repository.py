from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
import uuid

from app.db.models.content import Content as ContentModel, Engagement as EngagementModel
from app.db.repositories.user_repository import UserRepository

if TYPE_CHECKING:
    from app.domains.contents.entities import Content
    from app.domains.contents.schemas import ContentType, SortDirection

LIKE_ENGAGEMENT = "like"

SORT_COLUMNS = {
    "createdAt": ContentModel.created_at,
    "updatedAt": ContentModel.updated_at,
}


class ContentRepository:
    """Repository for contents; soft-deleted rows are never returned"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, content: "Content") -> "Content":
        db_content = ContentModel(
            uuid=content.uuid,
            author_id=content.author.uuid,
            type=content.type.value,
            payload=content.payload,
            is_deleted=content.is_deleted,
            created_at=content.created_at,
            updated_at=content.updated_at
        )

        self.session.add(db_content)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("Invalid author_id")
        return await self.get_by_uuid(content.uuid)

    async def get_by_uuid(self, content_uuid: uuid.UUID) -> Optional["Content"]:
        result = await self.session.execute(
            self._select_visible().where(ContentModel.uuid == content_uuid)
        )
        db_content = result.scalar_one_or_none()
        return self._to_domain(db_content) if db_content else None

    async def get_by_author(
        self,
        author_id: uuid.UUID,
        content_type: Optional["ContentType"] = None,
        sort_field: str = "updatedAt",
        sort_direction: "SortDirection" = "desc",
        limit: int = 25,
        offset: int = 0
    ) -> List["Content"]:
        """Contents of an author, optionally of one type, sorted and paged"""
        column = SORT_COLUMNS.get(sort_field, ContentModel.updated_at)
        direction = getattr(sort_direction, "value", sort_direction)
        order = column.asc() if direction == "asc" else column.desc()

        query = self._select_visible().where(ContentModel.author_id == author_id)
        if content_type is not None:
            query = query.where(ContentModel.type == content_type.value)

        result = await self.session.execute(
            query.order_by(order, ContentModel.uuid).offset(offset).limit(limit)
        )
        return [self._to_domain(db_content) for db_content in result.scalars().all()]

    async def count_by_author(self, author_id: uuid.UUID, content_type: Optional["ContentType"] = None) -> int:
        query = select(func.count(ContentModel.uuid)).where(
            and_(ContentModel.author_id == author_id, ContentModel.is_deleted.is_(False))
        )
        if content_type is not None:
            query = query.where(ContentModel.type == content_type.value)

        result = await self.session.execute(query)
        return result.scalar()

    async def update(self, content: "Content") -> Optional["Content"]:
        stmt = (
            update(ContentModel)
            .where(ContentModel.uuid == content.uuid)
            .values(
                type=content.type.value,
                payload=content.payload,
                is_deleted=content.is_deleted,
                deleted_at=content.deleted_at,
                updated_at=content.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_uuid(content.uuid)

    async def has_engagement(self, content_uuid: uuid.UUID, user_uuid: uuid.UUID, engagement_type: str = LIKE_ENGAGEMENT) -> bool:
        result = await self.session.execute(
            select(func.count(EngagementModel.uuid)).where(
                and_(
                    EngagementModel.content_id == content_uuid,
                    EngagementModel.user_id == user_uuid,
                    EngagementModel.type == engagement_type
                )
            )
        )
        return result.scalar() > 0

    async def add_engagement(self, content_uuid: uuid.UUID, user_uuid: uuid.UUID, engagement_type: str = LIKE_ENGAGEMENT) -> None:
        self.session.add(EngagementModel(content_id=content_uuid, user_id=user_uuid, type=engagement_type))
        try:
            await self.session.commit()
        except IntegrityError:
            # a concurrent request recorded the same engagement
            await self.session.rollback()

    async def remove_engagement(self, content_uuid: uuid.UUID, user_uuid: uuid.UUID, engagement_type: str = LIKE_ENGAGEMENT) -> bool:
        stmt = delete(EngagementModel).where(
            and_(
                EngagementModel.content_id == content_uuid,
                EngagementModel.user_id == user_uuid,
                EngagementModel.type == engagement_type
            )
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _select_visible(self):
        return (
            select(ContentModel)
            .options(selectinload(ContentModel.author), selectinload(ContentModel.engagements))
            .where(ContentModel.is_deleted.is_(False))
            .execution_options(populate_existing=True)
        )

    def _to_domain(self, db_content: ContentModel) -> "Content":
        from app.domains.contents.entities import Content

        return Content(
            uuid=db_content.uuid,
            author=UserRepository(self.session)._to_domain(db_content.author),
            type=db_content.type,
            payload=dict(db_content.payload or {}),
            liked_by=[e.user_id for e in db_content.engagements if e.type == LIKE_ENGAGEMENT],
            is_deleted=db_content.is_deleted,
            deleted_at=db_content.deleted_at,
            created_at=db_content.created_at,
            updated_at=db_content.updated_at
        )

import logging
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.content_repository import ContentRepository
from app.domains.contents.entities import Content
from app.domains.contents.schemas import ContentQueryOptions, SaveContentDto
from app.domains.identity.entities import User
from app.domains.identity.services import parse_uuid

logger = logging.getLogger(__name__)


class ContentService:
    """Content persistence, edit permissions and likes"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.content_repository = ContentRepository(session)

    async def create_content_from_user(self, user: User, content_data: SaveContentDto) -> Content:
        """Create a content authored by the user"""
        content = Content.create_content(
            author=user,
            type=content_data.type,
            payload=content_data.payload
        )
        created = await self.content_repository.create(content)
        logger.info(f"Content {created.uuid} ({created.type.value}) created by user {user.uuid}")
        return created

    async def get_content_from_id(self, content_id) -> Optional[Content]:
        """Visible content by id; malformed ids resolve to None"""
        content_uuid = parse_uuid(content_id)
        if content_uuid is None:
            return None
        return await self.content_repository.get_by_uuid(content_uuid)

    def check_user_permission_for_edit_content(self, user: Optional[User], content: Content) -> bool:
        """Only the author may edit a content"""
        return user is not None and content.author.uuid == user.uuid

    async def update_content_from_id(self, content_id, content_data: SaveContentDto) -> Optional[Content]:
        content = await self.get_content_from_id(content_id)

        if not content:
            return None

        content.update(content_data.type, content_data.payload)
        return await self.content_repository.update(content)

    async def delete_content(self, content: Content) -> None:
        """Soft delete"""
        content.delete()
        await self.content_repository.update(content)
        logger.info(f"Content {content.uuid} deleted")

    async def like_content(self, content: Content, user: User) -> None:
        if await self.content_repository.has_engagement(content.uuid, user.uuid):
            logger.debug(f"User {user.uuid} already likes content {content.uuid}")
            return
        await self.content_repository.add_engagement(content.uuid, user.uuid)
        content.liked_by.add(user.uuid)

    async def un_like_content(self, content: Content, user: User) -> None:
        removed = await self.content_repository.remove_engagement(content.uuid, user.uuid)
        if not removed:
            logger.debug(f"User {user.uuid} did not like content {content.uuid}")
        content.liked_by.discard(user.uuid)

    async def get_contents_from_user(
        self,
        user: User,
        options: ContentQueryOptions
    ) -> Tuple[List[Content], int]:
        """A page of the user's contents and the total matching count"""
        contents = await self.content_repository.get_by_author(
            user.uuid,
            content_type=options.type,
            sort_field=options.sort_by.field,
            sort_direction=options.sort_by.type,
            limit=options.limit,
            offset=options.offset
        )
        total = await self.content_repository.count_by_author(user.uuid, options.type)
        return contents, total

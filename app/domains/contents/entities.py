import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from app.domains.contents.schemas import (
    ContentPayload, ContentType, LikedPayload
)
from app.domains.identity.entities import User
from app.domains.identity.schemas import AuthorPayload


class Content:
    """Content item authored by a user"""

    def __init__(
        self,
        uuid: uuid.UUID,
        author: User,
        type: ContentType,
        payload: Dict[str, Any],
        liked_by: Optional[Iterable[uuid.UUID]] = None,
        is_deleted: bool = False,
        deleted_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.author = author
        self.type = ContentType(type)
        self.payload = payload
        self.liked_by = set(liked_by or ())
        self.is_deleted = is_deleted
        self.deleted_at = deleted_at
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    @property
    def liked_count(self) -> int:
        return len(self.liked_by)

    def update(self, type: ContentType, payload: Dict[str, Any]) -> None:
        """Replace type and body"""
        self.type = ContentType(type)
        self.payload = payload
        self.updated_at = datetime.utcnow()

    def delete(self) -> None:
        """Soft delete: the row stays but is no longer visible"""
        self.is_deleted = True
        self.deleted_at = datetime.utcnow()
        self.updated_at = self.deleted_at

    def is_liked_by(self, user: Optional[User]) -> bool:
        return user is not None and user.uuid in self.liked_by

    def to_content_payload(self, viewer: Optional[User] = None) -> ContentPayload:
        """Projection returned to API clients"""
        return ContentPayload(
            id=str(self.uuid),
            type=self.type,
            payload=self.payload,
            liked=LikedPayload(count=self.liked_count, liked=self.is_liked_by(viewer)),
            author=AuthorPayload(
                id=str(self.author.uuid),
                castcle_id=self.author.display_id,
                display_name=self.author.display_name,
                avatar=self.author.avatar,
                verified=self.author.verified
            ),
            created=self.created_at,
            updated=self.updated_at
        )

    @classmethod
    def create_content(cls, author: User, type: ContentType, payload: Dict[str, Any]) -> "Content":
        """Build a new content for an author"""
        return cls(
            uuid=uuid.uuid4(),
            author=author,
            type=type,
            payload=payload
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Content):
            return False
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __repr__(self) -> str:
        return f"Content(uuid={self.uuid}, type={self.type.value}, author={self.author.uuid})"

import enum
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from app.core.schemas import CamelModel, PayloadResponse
from app.domains.identity.schemas import AuthorPayload


class ContentType(str, enum.Enum):
    SHORT = "short"
    BLOG = "blog"
    IMAGE = "image"
    LINK = "link"
    RECAST = "recast"
    QUOTE = "quote"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class ShortPayload(BaseModel):
    """Body of a short post"""
    message: str = Field(..., min_length=1, max_length=280)
    link: Optional[List[Dict[str, Any]]] = None
    photo: Optional[Dict[str, Any]] = None


class BlogPayload(BaseModel):
    """Body of a blog post"""
    header: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    link: Optional[List[Dict[str, Any]]] = None
    photo: Optional[Dict[str, Any]] = None


PAYLOAD_SCHEMAS = {
    ContentType.SHORT: ShortPayload,
    ContentType.BLOG: BlogPayload,
}


class SaveContentDto(BaseModel):
    """Body for creating or updating a content"""
    type: ContentType
    payload: Dict[str, Any]

    @model_validator(mode="after")
    def validate_payload(self):
        schema = PAYLOAD_SCHEMAS.get(self.type)
        if schema is not None:
            self.payload = schema.model_validate(self.payload).model_dump(exclude_none=True)
        return self


class SortBy(BaseModel):
    field: str
    type: SortDirection


class ContentQueryOptions(BaseModel):
    """Listing options after query parameter normalization"""
    sort_by: SortBy = SortBy(field="updatedAt", type=SortDirection.DESC)
    page: int = 1
    limit: int = 25
    type: Optional[ContentType] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


DEFAULT_CONTENT_QUERY_OPTIONS = ContentQueryOptions()

SORTABLE_FIELDS = ("createdAt", "updatedAt")
MAX_LIMIT = 100


class FeaturePayload(CamelModel):
    slug: str = "feed"
    key: str = "feature.feed"
    name: str = "Feed"


class LikedPayload(CamelModel):
    count: int = 0
    liked: bool = False


class ContentPayload(CamelModel):
    """Externally visible projection of a content"""
    id: str
    type: ContentType
    payload: Dict[str, Any]
    feature: FeaturePayload = FeaturePayload()
    liked: LikedPayload = LikedPayload()
    author: AuthorPayload
    created: datetime
    updated: datetime


class Pagination(CamelModel):
    previous: Optional[int] = None
    current: int = Field(1, alias="self")
    next: Optional[int] = None
    limit: int = 25

    @classmethod
    def create(cls, options: ContentQueryOptions, total: int) -> "Pagination":
        last_page = max(1, -(-total // options.limit))
        return cls(
            previous=options.page - 1 if options.page > 1 else None,
            current=options.page,
            next=options.page + 1 if options.page < last_page else None,
            limit=options.limit
        )


class ContentResponse(PayloadResponse[ContentPayload]):
    """Single content envelope"""


class ContentsResponse(PayloadResponse[List[ContentPayload]]):
    """Content listing envelope"""
    pagination: Pagination

from app.domains.contents.entities import Content
from app.domains.contents.schemas import (
    ContentType, SortDirection, SortBy, SaveContentDto, ShortPayload, BlogPayload,
    ContentQueryOptions, DEFAULT_CONTENT_QUERY_OPTIONS, ContentPayload,
    Pagination, ContentResponse, ContentsResponse
)

__all__ = [
    "Content",
    "ContentType", "SortDirection", "SortBy", "SaveContentDto", "ShortPayload", "BlogPayload",
    "ContentQueryOptions", "DEFAULT_CONTENT_QUERY_OPTIONS", "ContentPayload",
    "Pagination", "ContentResponse", "ContentsResponse"
]

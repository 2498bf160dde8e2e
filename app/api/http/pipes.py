"""
Query parameter parsers for content listing.

Each parser accepts the raw query value and never fails: anything missing or
malformed falls back to the listing default.
"""
import re
from typing import Optional

from fastapi import Query

from app.domains.contents.schemas import (
    ContentQueryOptions, ContentType, DEFAULT_CONTENT_QUERY_OPTIONS,
    MAX_LIMIT, SORTABLE_FIELDS, SortBy, SortDirection
)

SORT_BY_PATTERN = re.compile(r"^(asc|desc)\((\w+)\)$")


def parse_sort_by(value: Optional[str]) -> SortBy:
    """`desc(createdAt)` -> SortBy(field="createdAt", type="desc")"""
    if value:
        match = SORT_BY_PATTERN.match(value.strip())
        if match and match.group(2) in SORTABLE_FIELDS:
            return SortBy(field=match.group(2), type=SortDirection(match.group(1)))
    return DEFAULT_CONTENT_QUERY_OPTIONS.sort_by.model_copy()


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_page(value: Optional[str]) -> int:
    page = _parse_int(value)
    if page is None or page < 1:
        return DEFAULT_CONTENT_QUERY_OPTIONS.page
    return page


def parse_limit(value: Optional[str]) -> int:
    limit = _parse_int(value)
    if limit is None or limit < 1:
        return DEFAULT_CONTENT_QUERY_OPTIONS.limit
    return min(limit, MAX_LIMIT)


def parse_content_type(value: Optional[str]) -> Optional[ContentType]:
    try:
        return ContentType(value)
    except ValueError:
        return DEFAULT_CONTENT_QUERY_OPTIONS.type


def get_content_query_options(
    sort_by: Optional[str] = Query(None, alias="sortBy", description="asc(field) or desc(field)"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    type: Optional[str] = Query(None, description="content type filter"),
) -> ContentQueryOptions:
    return ContentQueryOptions(
        sort_by=parse_sort_by(sort_by),
        page=parse_page(page),
        limit=parse_limit(limit),
        type=parse_content_type(type),
    )

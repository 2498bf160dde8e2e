from typing import Optional

from app.core.schemas import CamelModel


class AuthorPayload(CamelModel):
    """Public projection of a user as a content author"""
    id: str
    type: str = "people"
    castcle_id: str
    display_name: str
    avatar: Optional[str] = None
    verified: bool = False

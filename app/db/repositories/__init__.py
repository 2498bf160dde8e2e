from app.db.repositories.account_repository import AccountRepository
from app.db.repositories.user_repository import UserRepository
from app.db.repositories.content_repository import ContentRepository

__all__ = [
    "AccountRepository",
    "UserRepository",
    "ContentRepository"
]

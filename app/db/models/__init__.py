from app.db.models.account import Account, Credential
from app.db.models.user import User
from app.db.models.content import Content, Engagement

__all__ = [
    "Account",
    "Credential",
    "User",
    "Content",
    "Engagement"
]

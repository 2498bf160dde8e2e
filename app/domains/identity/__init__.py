from app.domains.identity.entities import Account, Credential, User
from app.domains.identity.schemas import AuthorPayload

__all__ = [
    "Account", "Credential", "User",
    "AuthorPayload"
]

import uuid
from datetime import datetime
from typing import Optional


class Account:
    """Authentication identity; a guest account has not been claimed yet"""

    def __init__(
        self,
        uuid: uuid.UUID,
        is_guest: bool = True,
        activate_date: Optional[datetime] = None,
        email: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.is_guest = is_guest
        self.activate_date = activate_date
        self.email = email
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    @property
    def is_activated(self) -> bool:
        return self.activate_date is not None

    def can_mutate_content(self) -> bool:
        """Only claimed and activated accounts may create or change content"""
        return not self.is_guest and self.is_activated

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Account(uuid={self.uuid}, is_guest={self.is_guest}, activated={self.is_activated})"


class Credential:
    """Access token issued to an account"""

    def __init__(
        self,
        uuid: uuid.UUID,
        account: Account,
        access_token: str,
        access_token_expire_date: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.account = account
        self.access_token = access_token
        self.access_token_expire_date = access_token_expire_date

    def is_access_token_valid(self, now: Optional[datetime] = None) -> bool:
        if self.access_token_expire_date is None:
            return True
        now = now or datetime.utcnow()
        return self.access_token_expire_date.replace(tzinfo=None) > now.replace(tzinfo=None)

    def __repr__(self) -> str:
        return f"Credential(uuid={self.uuid}, account={self.account.uuid})"


class User:
    """Profile owned by exactly one account; author and editor of content"""

    def __init__(
        self,
        uuid: uuid.UUID,
        owner_account: uuid.UUID,
        display_id: str,
        display_name: str,
        avatar: Optional[str] = None,
        verified: bool = False,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.owner_account = owner_account
        self.display_id = display_id
        self.display_name = display_name
        self.avatar = avatar
        self.verified = verified
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"User(uuid={self.uuid}, display_id={self.display_id})"

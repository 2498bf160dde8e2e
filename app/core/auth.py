import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.core.exceptions import ApiException, ErrorStatus
from app.core.security import extract_token_from_header
from app.domains.identity.entities import Credential
from app.domains.identity.services import AuthenticationService, UserService
from app.domains.contents.services import ContentService

logger = logging.getLogger(__name__)


class CredentialRequest:
    """Request context handed to route handlers once headers and credential are resolved"""

    def __init__(self, credential: Credential, language: str):
        self.credential = credential
        self.language = language

    @property
    def account(self):
        return self.credential.account


def get_authentication_service(db: AsyncSession = Depends(get_db)) -> AuthenticationService:
    return AuthenticationService(db)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_content_service(db: AsyncSession = Depends(get_db)) -> ContentService:
    return ContentService(db)


def parse_language(accept_language: Optional[str]) -> Optional[str]:
    """Primary subtag of the first Accept-Language entry"""
    if not accept_language:
        return None
    first = accept_language.split(",")[0].split(";")[0].strip()
    if not first or first == "*":
        return settings.default_language
    return first.split("-")[0].lower()


async def get_request_language(
    accept_language: Optional[str] = Header(None),
    accept_version: Optional[str] = Header(None)
) -> str:
    """Required headers: Accept-Language and Accept-Version"""
    language = parse_language(accept_language)
    if not language or not accept_version:
        raise ApiException(ErrorStatus.MISSING_AUTHORIZATION_HEADERS, language)

    if accept_version.strip() != settings.api_version:
        logger.info(f"Unsupported API version requested: {accept_version}")
        raise ApiException(ErrorStatus.REQUEST_URL_NOT_FOUND, language)

    return language


async def get_credential_request(
    language: str = Depends(get_request_language),
    authorization: Optional[str] = Header(None),
    auth_service: AuthenticationService = Depends(get_authentication_service)
) -> CredentialRequest:
    """Resolve the bearer token into a credential"""
    token = extract_token_from_header(authorization)
    if not token:
        raise ApiException(ErrorStatus.MISSING_AUTHORIZATION_HEADERS, language)

    credential = await auth_service.get_credential_from_access_token(token)
    if not credential:
        raise ApiException(ErrorStatus.INVALID_ACCESS_TOKEN, language)

    return CredentialRequest(credential=credential, language=language)

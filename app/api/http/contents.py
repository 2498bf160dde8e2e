import logging

from fastapi import APIRouter, Body, Depends, status

from app.api.http.pipes import get_content_query_options
from app.core.auth import (
    CredentialRequest, get_authentication_service, get_content_service,
    get_credential_request, get_request_language, get_user_service
)
from app.core.exceptions import ApiException, ErrorStatus
from app.domains.contents.entities import Content
from app.domains.contents.schemas import (
    ContentQueryOptions, ContentResponse, ContentsResponse, Pagination, SaveContentDto
)
from app.domains.contents.services import ContentService
from app.domains.identity.services import AuthenticationService, UserService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/contents",
    tags=["contents"],
    dependencies=[Depends(get_request_language)]
)


async def get_content_if_exist(
    content_id: str,
    req: CredentialRequest,
    content_service: ContentService
) -> Content:
    """Content by id or REQUEST_URL_NOT_FOUND"""
    content = await content_service.get_content_from_id(content_id)
    if content:
        return content
    raise ApiException(ErrorStatus.REQUEST_URL_NOT_FOUND, req.language)


async def check_permission_for_update(
    content: Content,
    req: CredentialRequest,
    user_service: UserService,
    content_service: ContentService
):
    """Account must be claimed and activated, and the user allowed to edit the content; returns the user"""
    if not req.account.can_mutate_content():
        logger.info(f"Account {req.account.uuid} may not modify content {content.uuid}")
        raise ApiException(ErrorStatus.FORBIDDEN_REQUEST, req.language)

    user = await user_service.get_user_from_credential(req.credential)
    if content_service.check_user_permission_for_edit_content(user, content):
        return user

    logger.info(f"User {getattr(user, 'uuid', None)} has no edit permission on content {content.uuid}")
    raise ApiException(ErrorStatus.FORBIDDEN_REQUEST, req.language)


async def check_acting_user(
    author_id: str,
    req: CredentialRequest,
    auth_service: AuthenticationService,
    user_service: UserService
):
    """The user named in the body must belong to the requesting account, which may mutate content"""
    account = await auth_service.get_account_from_credential(req.credential)
    if account is None or not account.can_mutate_content():
        logger.info(f"Account {req.account.uuid} may not react to content")
        raise ApiException(ErrorStatus.FORBIDDEN_REQUEST, req.language)

    user = await user_service.get_user_from_id(author_id)
    if user is None or user.owner_account != account.uuid:
        logger.info(f"Account {req.account.uuid} may not act as user {author_id}")
        raise ApiException(ErrorStatus.FORBIDDEN_REQUEST, req.language)
    return user


@router.post("/feed", response_model=ContentResponse, status_code=status.HTTP_201_CREATED)
async def create_feed_content(
    body: SaveContentDto,
    req: CredentialRequest = Depends(get_credential_request),
    user_service: UserService = Depends(get_user_service),
    content_service: ContentService = Depends(get_content_service)
):
    """Create a feed content for the requesting user"""
    if not req.account.can_mutate_content():
        raise ApiException(ErrorStatus.FORBIDDEN_REQUEST, req.language)

    user = await user_service.get_user_from_credential(req.credential)
    if user is None:
        raise ApiException(ErrorStatus.FORBIDDEN_REQUEST, req.language)

    content = await content_service.create_content_from_user(user, body)
    return ContentResponse(payload=content.to_content_payload(user))


@router.get("", response_model=ContentsResponse)
async def get_contents(
    options: ContentQueryOptions = Depends(get_content_query_options),
    req: CredentialRequest = Depends(get_credential_request),
    user_service: UserService = Depends(get_user_service),
    content_service: ContentService = Depends(get_content_service)
):
    """Contents of the requesting user, filtered, sorted and paginated"""
    user = await user_service.get_user_from_credential(req.credential)
    if user is None:
        return ContentsResponse(payload=[], pagination=Pagination.create(options, 0))

    contents, total = await content_service.get_contents_from_user(user, options)
    return ContentsResponse(
        payload=[content.to_content_payload(user) for content in contents],
        pagination=Pagination.create(options, total)
    )


@router.get("/{content_id}", response_model=ContentResponse)
async def get_content_from_id(
    content_id: str,
    req: CredentialRequest = Depends(get_credential_request),
    user_service: UserService = Depends(get_user_service),
    content_service: ContentService = Depends(get_content_service)
):
    content = await get_content_if_exist(content_id, req, content_service)
    user = await user_service.get_user_from_credential(req.credential)
    return ContentResponse(payload=content.to_content_payload(user))


@router.put("/{content_id}", response_model=ContentResponse)
async def update_content_from_id(
    body: SaveContentDto,
    content_id: str,
    req: CredentialRequest = Depends(get_credential_request),
    user_service: UserService = Depends(get_user_service),
    content_service: ContentService = Depends(get_content_service)
):
    content = await get_content_if_exist(content_id, req, content_service)
    user = await check_permission_for_update(content, req, user_service, content_service)

    updated_content = await content_service.update_content_from_id(content.uuid, body)
    if not updated_content:
        raise ApiException(ErrorStatus.REQUEST_URL_NOT_FOUND, req.language)

    return ContentResponse(payload=updated_content.to_content_payload(user))


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content_from_id(
    content_id: str,
    req: CredentialRequest = Depends(get_credential_request),
    user_service: UserService = Depends(get_user_service),
    content_service: ContentService = Depends(get_content_service)
):
    content = await get_content_if_exist(content_id, req, content_service)
    await check_permission_for_update(content, req, user_service, content_service)
    await content_service.delete_content(content)


@router.put("/{content_id}/liked", status_code=status.HTTP_204_NO_CONTENT)
async def like_content(
    content_id: str,
    author_id: str = Body(..., embed=True, alias="authorId"),
    req: CredentialRequest = Depends(get_credential_request),
    auth_service: AuthenticationService = Depends(get_authentication_service),
    user_service: UserService = Depends(get_user_service),
    content_service: ContentService = Depends(get_content_service)
):
    # TODO: push a feed item to followers once feed items exist
    content = await get_content_if_exist(content_id, req, content_service)
    user = await check_acting_user(author_id, req, auth_service, user_service)
    await content_service.like_content(content, user)


@router.put("/{content_id}/unliked", status_code=status.HTTP_204_NO_CONTENT)
async def un_like_content(
    content_id: str,
    author_id: str = Body(..., embed=True, alias="authorId"),
    req: CredentialRequest = Depends(get_credential_request),
    auth_service: AuthenticationService = Depends(get_authentication_service),
    user_service: UserService = Depends(get_user_service),
    content_service: ContentService = Depends(get_content_service)
):
    content = await get_content_if_exist(content_id, req, content_service)
    user = await check_acting_user(author_id, req, auth_service, user_service)
    await content_service.un_like_content(content, user)

import logging
from typing import Callable, Optional

from fastapi import Header, Request

from app.core.auth import parse_language
from app.core.exceptions import ApiException, ErrorStatus

logger = logging.getLogger(__name__)

ROLES_ATTRIBUTE = "__roles__"

ADMIN_ROLE = "admin"
TESTER_ROLE = "tester"


def roles(role: str) -> Callable:
    """Declare the role a route handler requires"""
    def decorator(endpoint: Callable) -> Callable:
        setattr(endpoint, ROLES_ATTRIBUTE, role)
        return endpoint
    return decorator


def get_declared_role(endpoint: Optional[Callable]) -> Optional[str]:
    return getattr(endpoint, ROLES_ATTRIBUTE, None)


class RolesGuard:
    """
    Gate on the role declared by the matched route handler.

    Only the handler's declared role is compared with the accepted roles; the
    authenticated user's own role is not consulted yet.
    """

    accepted_roles = (ADMIN_ROLE, TESTER_ROLE)

    def can_activate(self, request: Request) -> bool:
        endpoint = request.scope.get("endpoint")
        declared_role = get_declared_role(endpoint)
        logger.debug(f"Declared role for {getattr(endpoint, '__name__', endpoint)}: {declared_role}")

        return declared_role in self.accepted_roles

    async def __call__(self, request: Request, accept_language: Optional[str] = Header(None)) -> None:
        if not self.can_activate(request):
            raise ApiException(ErrorStatus.FORBIDDEN_REQUEST, parse_language(accept_language))

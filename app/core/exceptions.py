import enum
import logging
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger(__name__)


class ErrorStatus(enum.Enum):
    """API error catalogue: (code, http status)"""

    INTERNAL_SERVER_ERROR = ("1001", status.HTTP_500_INTERNAL_SERVER_ERROR)
    REQUEST_URL_NOT_FOUND = ("1002", status.HTTP_404_NOT_FOUND)
    MISSING_AUTHORIZATION_HEADERS = ("1003", status.HTTP_401_UNAUTHORIZED)
    INVALID_ACCESS_TOKEN = ("1004", status.HTTP_401_UNAUTHORIZED)
    FORBIDDEN_REQUEST = ("1007", status.HTTP_403_FORBIDDEN)

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def status_code(self) -> int:
        return self.value[1]


ERROR_MESSAGES = {
    ErrorStatus.INTERNAL_SERVER_ERROR: {
        "en": "Internal server error. Please try again later.",
        "th": "ระบบขัดข้อง กรุณาลองใหม่อีกครั้ง",
    },
    ErrorStatus.REQUEST_URL_NOT_FOUND: {
        "en": "The requested URL was not found.",
        "th": "ไม่พบ URL ที่ร้องขอ",
    },
    ErrorStatus.MISSING_AUTHORIZATION_HEADERS: {
        "en": "Missing authorization headers.",
        "th": "ไม่พบ header สำหรับการยืนยันตัวตน",
    },
    ErrorStatus.INVALID_ACCESS_TOKEN: {
        "en": "Invalid access token or access token expired.",
        "th": "access token ไม่ถูกต้องหรือหมดอายุ",
    },
    ErrorStatus.FORBIDDEN_REQUEST: {
        "en": "You are not allowed to perform this request.",
        "th": "คุณไม่มีสิทธิ์ในการดำเนินการนี้",
    },
}


def get_error_message(error_status: ErrorStatus, language: Optional[str] = None) -> str:
    """Localized message for a status; unknown languages fall back to the default"""
    messages = ERROR_MESSAGES[error_status]
    if language in messages:
        return messages[language]
    return messages.get(settings.default_language, messages["en"])


class ApiException(Exception):
    """
    Business-rule violation raised by route handlers and request dependencies.

    Carries the error status and the request language; rendering into an HTTP
    response is left to `api_exception_handler`.
    """

    def __init__(self, error_status: ErrorStatus, language: Optional[str] = None):
        self.status = error_status
        self.language = language or settings.default_language
        self.message = get_error_message(error_status, self.language)
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.status.status_code

    def to_response_body(self) -> dict:
        return {
            "statusCode": self.status.status_code,
            "code": self.status.code,
            "message": self.message,
        }


async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    logger.info(
        f"{request.method} {request.url.path} rejected with {exc.status.name} ({exc.status.code})"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())

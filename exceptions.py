"""
API 예외 클래스

모든 에러 응답은 {"message": ..., **extra} 형태로 내려간다.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException
from starlette import status


class APIException(HTTPException):
    """공통 API 예외"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.extra = extra or {}


class ValidationError(APIException):
    def __init__(self, detail: str = "Validation failed"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR",
        )


class ConflictError(APIException):
    """이메일/전화번호 중복"""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT",
        )


class UnauthorizedError(APIException):
    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
        )


class ForbiddenError(APIException):
    def __init__(self, detail: str = "Access denied", extra: Optional[Dict[str, Any]] = None):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN",
            extra=extra,
        )


class AccountLockedError(APIException):
    def __init__(
        self,
        detail: str = "Account is temporarily locked due to multiple failed login attempts. "
                      "Please try again later.",
    ):
        super().__init__(
            status_code=status.HTTP_423_LOCKED,
            detail=detail,
            error_code="ACCOUNT_LOCKED",
        )


class NotFoundError(APIException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND",
        )


class InvalidTokenError(APIException):
    """만료되었거나 일치하지 않는 토큰 / OTP"""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="INVALID_TOKEN",
        )


class ServiceFailureError(APIException):
    """저장소 또는 알림 발송 실패"""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="SERVICE_FAILURE",
        )

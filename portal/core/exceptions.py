"""
Error taxonomy for the portal.

Every error is an HTTPException so FastAPI turns it into a ``{"detail": ...}``
body without extra wiring; the body is what clients show as a notification.
"""

from typing import Optional

from fastapi import HTTPException, status


class PortalError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Request failed"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class AuthenticationRequired(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class PermissionDenied(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action"


class ValidationError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class StoreError(PortalError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Storage backend request failed"


class PartialUploadError(PortalError):
    """Blob was stored but its metadata row was not.

    ``rolled_back`` tells whether the stored blob was removed again; when it
    is False the blob at ``file_path`` is orphaned and needs cleanup.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to upload file"

    def __init__(self, file_path: str, rolled_back: bool, cause: Optional[BaseException] = None):
        super().__init__()
        self.file_path = file_path
        self.rolled_back = rolled_back
        self.cause = cause

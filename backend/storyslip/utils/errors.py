"""HTTP errors raised by the service layer.

Conflicts are expected outcomes for a collaborative editor, so they carry a
structured ``detail`` dict the client can use to resolve them.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder


class NotFound(HTTPException):
    def __init__(self, message: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


class LockNotFound(NotFound):
    def __init__(self, message: str = "Lock not found or expired"):
        super().__init__(message)


class NotLockHolder(HTTPException):
    def __init__(self, locked_by: str, expires_at: Any):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "message": "Lock is held by another user",
                "locked_by": locked_by,
                "expires_at": _iso(expires_at),
            },
        )


class LockConflict(HTTPException):
    def __init__(self, locked_by: str, expires_at: Any):
        self.locked_by = locked_by
        self.expires_at = expires_at
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "Content is currently locked by another user",
                "locked_by": locked_by,
                "expires_at": _iso(expires_at),
            },
        )


class VersionConflict(HTTPException):
    def __init__(self, payload: Dict[str, Any]):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=jsonable_encoder({"message": "Content has changed since your base version", **payload}),
        )


class ValidationError(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message)


class DatabaseError(HTTPException):
    def __init__(self, message: str = "Database write failed, please retry"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _iso(value: Any) -> Optional[str]:
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)

"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    ACCOUNT_BANNED = "ACCOUNT_BANNED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    NOTICE_NOT_FOUND = "NOTICE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_UPLOAD = "INVALID_UPLOAD"

    # Conflict errors (409)
    ALREADY_LIKED = "ALREADY_LIKED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Upstream errors (502)
    IDENTITY_PROVIDER_ERROR = "IDENTITY_PROVIDER_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
        )


class AdminRequiredError(AuthorizationError):
    """Operation is restricted to administrators."""

    def __init__(self) -> None:
        super().__init__(
            message="Administrator privileges required",
            error_code=ErrorCode.ADMIN_REQUIRED,
        )


class AccountBannedError(AuthorizationError):
    """Banned accounts cannot publish content."""

    def __init__(self) -> None:
        super().__init__(
            message="Your account has been banned from posting",
            error_code=ErrorCode.ACCOUNT_BANNED,
        )


class DocumentNotFoundError(AppException):
    """A document is missing from its collection."""

    def __init__(
        self,
        collection: str,
        document_id: str,
        error_code: ErrorCode = ErrorCode.DOCUMENT_NOT_FOUND,
        label: str = "Document",
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=f"{label} not found: {document_id}",
            status_code=404,
            details={"collection": collection, "id": document_id},
        )


class ProfileNotFoundError(DocumentNotFoundError):
    """Profile not found."""

    def __init__(self, uid: str) -> None:
        super().__init__("users", uid, ErrorCode.PROFILE_NOT_FOUND, "Profile")


class EventNotFoundError(DocumentNotFoundError):
    """Event not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__("events", event_id, ErrorCode.EVENT_NOT_FOUND, "Event")


class NoticeNotFoundError(DocumentNotFoundError):
    """Notice not found."""

    def __init__(self, notice_id: str) -> None:
        super().__init__("notices", notice_id, ErrorCode.NOTICE_NOT_FOUND, "Notice")


class PostNotFoundError(DocumentNotFoundError):
    """Forum post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__("forumPosts", post_id, ErrorCode.POST_NOT_FOUND, "Post")


class CommentNotFoundError(DocumentNotFoundError):
    """Forum comment not found."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            "forumComments", comment_id, ErrorCode.COMMENT_NOT_FOUND, "Comment"
        )


class LostFoundItemNotFoundError(DocumentNotFoundError):
    """Lost & found item not found."""

    def __init__(self, item_id: str) -> None:
        super().__init__("lostFound", item_id, ErrorCode.ITEM_NOT_FOUND, "Item")


class LocationNotFoundError(DocumentNotFoundError):
    """Campus location not found."""

    def __init__(self, location_id: str) -> None:
        super().__init__(
            "campusLocations", location_id, ErrorCode.LOCATION_NOT_FOUND, "Location"
        )


class AlreadyLikedError(AppException):
    """The user already liked this post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_LIKED,
            message="You have already liked this post",
            status_code=409,
            details={"post_id": post_id},
        )


class InvalidUploadError(AppException):
    """Uploaded file was rejected."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_UPLOAD,
            message=message,
            status_code=400,
        )


class SessionNotFoundError(AuthenticationError):
    """Browser session cookie is missing or expired."""

    def __init__(self) -> None:
        super().__init__(
            message="Session not found or expired",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )


class IdentityProviderError(AppException):
    """The identity provider rejected or failed a request."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(
            error_code=ErrorCode.IDENTITY_PROVIDER_ERROR,
            message=message,
            status_code=status_code,
        )


class StorageError(AppException):
    """The object store rejected or failed a request."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message=message,
            status_code=502,
        )

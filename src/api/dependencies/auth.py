"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.v1.dependencies import get_profile_service, get_session_registry
from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode, SessionNotFoundError
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.sessions.registry import BrowserSession, SessionRegistry

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    session_id: Annotated[
        str | None, Cookie(alias=settings.session_cookie_name)
    ] = None,
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    registry: SessionRegistry = Depends(get_session_registry),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    A bearer token wins when present. Without one, the identity signed in
    on the browser session named by the session cookie is used.

    Raises:
        AuthenticationError: If no identity is available or the token is invalid
    """
    if not credentials:
        session = registry.get(session_id)
        identity = session.monitor.identity if session is not None else None
        if identity is None:
            raise AuthenticationError(
                message="Authorization header or signed-in session required",
                error_code=ErrorCode.UNAUTHORIZED,
            )
        return TokenUser.from_identity(identity)

    token = credentials.credentials
    user = await auth_provider.validate_token(token)

    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]


async def get_current_profile(
    user: CurrentUser,
    profiles: ProfileService = Depends(get_profile_service),
) -> Profile:
    """
    Dependency to get the profile of the authenticated user.

    The profile is provisioned on the first authenticated request of a new
    identity, the same way a browser session provisions it on sign-in.
    """
    return await profiles.resolve(user.to_identity())


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]


def get_browser_session(
    session_id: Annotated[
        str | None, Cookie(alias=settings.session_cookie_name)
    ] = None,
    registry: SessionRegistry = Depends(get_session_registry),
) -> BrowserSession:
    """
    Dependency to get the browser session named by the session cookie.

    Raises:
        SessionNotFoundError: If the cookie is missing or the session expired
    """
    session = registry.get(session_id)
    if session is None:
        raise SessionNotFoundError()
    return session


CurrentSession = Annotated[BrowserSession, Depends(get_browser_session)]

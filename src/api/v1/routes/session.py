"""Browser session API routes.

These endpoints expose one Session Monitor per browser. The session is
addressed by an HTTP-only cookie; operations never fail because of the
identity provider or the profile store. Failures surface as notifications
in the returned state instead.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from api.dependencies.auth import CurrentSession
from api.v1.dependencies import get_session_registry
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import ProfileResponse, ProfileUpdate
from api.v1.schemas.session import (
    IdentityResponse,
    SessionDetailResponse,
    SessionResponse,
    SignInRequest,
    ToastResponse,
)
from core.config import settings
from core.rate_limit import limiter
from infrastructure.sessions.registry import BrowserSession, SessionRegistry

router = APIRouter(prefix="/session", tags=["session"])

_NO_SESSION = {401: {"model": ErrorResponse, "description": "No live session for the cookie"}}


def _build_session_response(session: BrowserSession) -> SessionDetailResponse:
    state = session.monitor.state
    return SessionDetailResponse(
        data=SessionResponse(
            phase=state.phase,
            loading=state.loading,
            identity=(
                IdentityResponse.model_validate(state.identity) if state.identity else None
            ),
            profile=(
                ProfileResponse.model_validate(state.profile) if state.profile else None
            ),
            notifications=[
                ToastResponse.model_validate(toast) for toast in session.toasts.drain()
            ],
        )
    )


def _set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_idle_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


@router.post(
    "",
    response_model=SessionDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a browser session",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def open_session(
    request: Request,
    response: Response,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionDetailResponse:
    """Start a session monitor and hand its id back in a cookie."""
    session = await registry.open()
    _set_session_cookie(response, session.id)
    return _build_session_response(session)


@router.get(
    "",
    response_model=SessionDetailResponse,
    summary="Get session state",
    responses=_NO_SESSION,
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_session(
    request: Request,
    session: CurrentSession,
) -> SessionDetailResponse:
    """Current identity, profile and loading flag, plus pending notifications."""
    return _build_session_response(session)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Close the browser session",
    responses=_NO_SESSION,
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def close_session(
    request: Request,
    response: Response,
    session: CurrentSession,
    registry: SessionRegistry = Depends(get_session_registry),
) -> None:
    """Detach the monitor and forget the cookie. Does not sign out at the provider."""
    registry.close(session.id)
    response.delete_cookie(settings.session_cookie_name, path="/")
    return None


@router.post(
    "/sign-in",
    response_model=SessionDetailResponse,
    summary="Sign in with Google",
    responses=_NO_SESSION,
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def sign_in(
    request: Request,
    body: SignInRequest,
    session: CurrentSession,
) -> SessionDetailResponse:
    """Exchange a Google ID token for a provider session and load the profile."""
    await session.monitor.sign_in_with_google(body.credential)
    return _build_session_response(session)


@router.post(
    "/sign-out",
    response_model=SessionDetailResponse,
    summary="Sign out",
    responses=_NO_SESSION,
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def sign_out(
    request: Request,
    session: CurrentSession,
) -> SessionDetailResponse:
    """Sign out at the identity provider. The session itself stays open."""
    await session.monitor.sign_out()
    return _build_session_response(session)


@router.patch(
    "/profile",
    response_model=SessionDetailResponse,
    summary="Update the signed-in user's profile",
    responses=_NO_SESSION,
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_session_profile(
    request: Request,
    body: ProfileUpdate,
    session: CurrentSession,
) -> SessionDetailResponse:
    """Optimistically update the profile held by the session and persist it.

    Without a signed-in identity this is a no-op.
    """
    await session.monitor.update_profile(body.to_fields())
    return _build_session_response(session)

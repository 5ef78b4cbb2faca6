"""Supabase Auth client and per-session identity provider.

Google sign-in happens in the browser; the resulting Google ID token is
exchanged here for a Supabase session using the GoTrue ``id_token`` grant.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx
import structlog

from core.config import settings
from core.exceptions import IdentityProviderError
from domain.entities.profile import Identity
from infrastructure.auth.provider import IdentityListener

logger = structlog.get_logger()


@dataclass(frozen=True)
class AuthSession:
    """Tokens and identity returned by a successful sign-in."""

    access_token: str
    refresh_token: str | None
    expires_in: int | None
    identity: Identity


def identity_from_user(user: dict[str, Any]) -> Identity:
    """Build an Identity from a GoTrue user object."""
    metadata = user.get("user_metadata") or {}
    return Identity(
        id=str(user["id"]),
        display_name=metadata.get("full_name") or metadata.get("name"),
        email=user.get("email"),
        photo_url=metadata.get("avatar_url") or metadata.get("picture"),
    )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    return (
        body.get("error_description")
        or body.get("msg")
        or body.get("message")
        or body.get("error")
        or f"HTTP {response.status_code}"
    )


class SupabaseAuthClient:
    """Thin async client for the Supabase GoTrue endpoints used by the portal."""

    def __init__(
        self,
        base_url: str = settings.supabase_url,
        anon_key: str = settings.supabase_anon_key,
        timeout: float = settings.http_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{self._base_url}/auth/v1",
            headers={"apikey": self._anon_key},
            timeout=self._timeout,
            transport=self._transport,
        )

    async def sign_in_with_id_token(
        self, id_token: str, provider: str = "google"
    ) -> AuthSession:
        """Exchange a third-party ID token for a Supabase session."""
        try:
            async with self._client() as client:
                response = await client.post(
                    "/token",
                    params={"grant_type": "id_token"},
                    json={"provider": provider, "id_token": id_token},
                )
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"Identity provider unreachable: {exc}") from exc

        if response.status_code >= 400:
            status = 401 if response.status_code in (400, 401, 403) else 502
            raise IdentityProviderError(_error_message(response), status_code=status)

        body = response.json()
        return AuthSession(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token"),
            expires_in=body.get("expires_in"),
            identity=identity_from_user(body["user"]),
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``."""
        try:
            async with self._client() as client:
                response = await client.post(
                    "/logout",
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"Identity provider unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise IdentityProviderError(_error_message(response))


class SupabaseIdentityProvider:
    """Sign-in state of a single browser session, backed by Supabase Auth."""

    def __init__(self, auth_client: SupabaseAuthClient) -> None:
        self._auth_client = auth_client
        self._session: Optional[AuthSession] = None
        self._listeners: list[IdentityListener] = []
        self._delivery_lock = asyncio.Lock()

    @property
    def current_identity(self) -> Optional[Identity]:
        return self._session.identity if self._session else None

    @property
    def access_token(self) -> Optional[str]:
        return self._session.access_token if self._session else None

    async def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        async with self._delivery_lock:
            await listener(self.current_identity)
        return unsubscribe

    async def sign_in_interactive(self, credential: str) -> Identity:
        session = await self._auth_client.sign_in_with_id_token(credential)
        self._session = session
        logger.info("identity_signed_in", uid=session.identity.id)
        await self._emit(session.identity)
        return session.identity

    async def sign_out(self) -> None:
        if self._session is None:
            await self._emit(None)
            return

        await self._auth_client.sign_out(self._session.access_token)
        uid = self._session.identity.id
        self._session = None
        logger.info("identity_signed_out", uid=uid)
        await self._emit(None)

    async def _emit(self, identity: Optional[Identity]) -> None:
        async with self._delivery_lock:
            for listener in list(self._listeners):
                await listener(identity)

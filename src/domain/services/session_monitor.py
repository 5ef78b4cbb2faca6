"""Session monitor: the single source of truth for who is signed in.

One monitor exists per browser session. It follows the identity provider's
state changes, resolves or provisions the matching profile, and publishes
(identity, profile, loading) snapshots to registered observers.

Every collaborator failure is converted into a toast notification here;
nothing raised by the identity provider or the profile store escapes to the
caller of a monitor operation.
"""

from typing import Any, Callable, Optional, Protocol

import structlog

from domain.entities.profile import Identity, Profile
from domain.entities.session import SessionPhase, SessionState, ToastVariant
from domain.policies import AccessPolicy, default_policy
from domain.services.profile_service import ProfileService
from infrastructure.auth.provider import IIdentityProvider

logger = structlog.get_logger()

SessionObserver = Callable[[SessionState], None]


class INotifier(Protocol):
    """Sink for transient user-visible notifications."""

    def notify(
        self,
        title: str,
        description: str,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> None: ...


def _describe(exc: Exception, fallback: str) -> str:
    message = getattr(exc, "message", None) or str(exc)
    return message or fallback


class SessionMonitor:
    """Tracks the current identity and profile of one browser session."""

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        profiles: ProfileService,
        notifier: INotifier,
        rollback_on_failure: bool = True,
        policy: AccessPolicy = default_policy,
    ) -> None:
        self._provider = identity_provider
        self._profiles = profiles
        self._notifier = notifier
        self._rollback_on_failure = rollback_on_failure
        self._policy = policy

        self._identity: Optional[Identity] = None
        self._profile: Optional[Profile] = None
        self._loading = True
        self._phase = SessionPhase.UNRESOLVED

        self._observers: list[SessionObserver] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

    # --- state ---

    @property
    def state(self) -> SessionState:
        return SessionState(
            identity=self._identity,
            profile=self._profile,
            loading=self._loading,
            phase=self._phase,
        )

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def access_token(self) -> Optional[str]:
        return self._provider.access_token

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """Register for state snapshots; returns a function that unregisters."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _publish(self) -> None:
        snapshot = self.state
        for observer in list(self._observers):
            observer(snapshot)

    # --- lifecycle ---

    async def start(self) -> None:
        """Attach to the identity provider. Idempotent."""
        if self._unsubscribe is None:
            self._unsubscribe = await self._provider.subscribe(self._on_identity_change)

    def close(self) -> None:
        """Detach from the identity provider and drop all observers."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._observers.clear()

    async def _on_identity_change(self, identity: Optional[Identity]) -> None:
        self._identity = identity

        if identity is None:
            self._profile = None
            self._phase = SessionPhase.SIGNED_OUT
        else:
            self._phase = SessionPhase.PROFILE_LOADING
            self._publish()
            try:
                self._profile = await self._profiles.resolve(identity)
                self._phase = SessionPhase.PROFILE_READY
            except Exception:
                logger.exception("profile_resolve_failed", uid=identity.id)
                self._profile = None
                self._phase = SessionPhase.PROFILE_ERROR
                self._notifier.notify(
                    "Error",
                    "Failed to load user profile. Please try again.",
                    ToastVariant.DESTRUCTIVE,
                )

        self._loading = False
        self._publish()

    # --- operations ---

    async def sign_in_with_google(self, credential: str) -> None:
        """Interactive sign-in. Failures become a notification, never an exception."""
        self._loading = True
        self._phase = SessionPhase.AUTHENTICATING
        self._publish()
        try:
            await self._provider.sign_in_interactive(credential)
        except Exception as exc:
            logger.warning("sign_in_failed", error=str(exc))
            self._phase = (
                SessionPhase.SIGNED_OUT if self._identity is None else self._settled_phase()
            )
            self._notifier.notify(
                "Sign In Failed",
                _describe(exc, "Failed to sign in with Google. Please try again."),
                ToastVariant.DESTRUCTIVE,
            )
        else:
            self._notifier.notify("Welcome!", "You have successfully signed in.")
        finally:
            self._loading = False
            self._publish()

    async def sign_out(self) -> None:
        """Sign out at the provider; local state follows from the provider's event."""
        try:
            await self._provider.sign_out()
        except Exception as exc:
            logger.warning("sign_out_failed", error=str(exc))
            self._notifier.notify(
                "Sign Out Failed",
                _describe(exc, "Failed to sign out. Please try again."),
                ToastVariant.DESTRUCTIVE,
            )
        else:
            self._notifier.notify("Signed Out", "You have successfully signed out.")

    async def update_profile(self, partial: dict[str, Any]) -> None:
        """Merge ``partial`` into the profile, optimistically, then persist it.

        Only user-editable fields are applied. When the write fails and
        rollback is enabled, the previous profile is restored unless the
        profile changed again in the meantime.
        """
        identity = self._identity
        if identity is None:
            return

        fields = self._policy.self_editable(partial)
        if not fields:
            return

        previous = self._profile
        base = previous or Profile(uid=identity.id)
        optimistic = base.merged(fields)
        self._profile = optimistic
        self._publish()

        try:
            await self._profiles.merge_update(identity.id, fields)
        except Exception as exc:
            logger.warning("profile_update_failed", uid=identity.id, error=str(exc))
            if self._rollback_on_failure and self._profile is optimistic:
                self._profile = previous
                self._publish()
            self._notifier.notify(
                "Update Failed",
                _describe(exc, "Failed to update profile. Please try again."),
                ToastVariant.DESTRUCTIVE,
            )
        else:
            self._notifier.notify(
                "Profile Updated", "Your profile has been successfully updated."
            )

    def _settled_phase(self) -> SessionPhase:
        return SessionPhase.PROFILE_READY if self._profile else SessionPhase.PROFILE_ERROR

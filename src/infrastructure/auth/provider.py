"""Authentication and identity provider protocols."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol

from domain.entities.profile import Identity


@dataclass
class TokenUser:
    """Represents a user extracted from an auth token."""

    id: str
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    role: Optional[str] = None

    def to_identity(self) -> Identity:
        return Identity(
            id=self.id,
            display_name=self.display_name,
            email=self.email,
            photo_url=self.photo_url,
        )

    @classmethod
    def from_identity(cls, identity: Identity) -> "TokenUser":
        return cls(
            id=identity.id,
            email=identity.email or "",
            display_name=identity.display_name,
            photo_url=identity.photo_url,
        )


class IAuthProvider(Protocol):
    """Protocol for bearer token validation."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create an authentication token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...


IdentityListener = Callable[[Optional[Identity]], Awaitable[None]]


class IIdentityProvider(Protocol):
    """Sign-in state of one browser session at the identity provider.

    Listeners are invoked one at a time; a delivery finishes before the next
    state change is handed to any listener.
    """

    @property
    def current_identity(self) -> Optional[Identity]:
        """Identity of the signed-in user, if any."""
        ...

    @property
    def access_token(self) -> Optional[str]:
        """Provider-issued bearer token for the signed-in user, if any."""
        ...

    async def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """
        Register a state-change listener.

        The listener is called with the current identity before this returns,
        then on every sign-in and sign-out.

        Returns:
            A callable that removes the listener
        """
        ...

    async def sign_in_interactive(self, credential: str) -> Identity:
        """Exchange an interactive sign-in credential for a provider session."""
        ...

    async def sign_out(self) -> None:
        """Revoke the provider session."""
        ...

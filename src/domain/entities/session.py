"""Session state and user-facing notification entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from domain.entities.profile import Identity, Profile


class SessionPhase(StrEnum):
    """Lifecycle of a browser session.

    UNRESOLVED -> AUTHENTICATING -> PROFILE_LOADING -> PROFILE_READY | PROFILE_ERROR
    -> SIGNED_OUT -> ... (cycles on repeated sign-in/out, no terminal phase).
    """

    UNRESOLVED = "unresolved"
    AUTHENTICATING = "authenticating"
    PROFILE_LOADING = "profile_loading"
    PROFILE_READY = "profile_ready"
    PROFILE_ERROR = "profile_error"
    SIGNED_OUT = "signed_out"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of (identity, profile, loading) handed to observers."""

    identity: Identity | None = None
    profile: Profile | None = None
    loading: bool = True
    phase: SessionPhase = SessionPhase.UNRESOLVED


class ToastVariant(StrEnum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Toast:
    """Transient user-visible notification."""

    title: str
    description: str
    variant: ToastVariant = ToastVariant.DEFAULT
    created_at: datetime = field(default_factory=datetime.utcnow)

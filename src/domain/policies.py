"""Access policy shared by every mutating operation.

All ownership and role checks live here so that services never compare
``isAdmin`` or owner ids inline.
"""

from typing import Any

from core.exceptions import AccountBannedError, AdminRequiredError, AuthorizationError
from domain.entities.profile import Profile

# Profile fields a user may change on their own profile.
SELF_EDITABLE_FIELDS = frozenset({"displayName", "bio", "socialLinks", "photoURL"})


class AccessPolicy:
    """Authorization decisions for portal content and profiles."""

    def is_admin(self, profile: Profile | None) -> bool:
        return bool(profile and profile.is_admin)

    def can_modify(self, profile: Profile | None, owner_id: str) -> bool:
        """Owners and admins can edit or delete a resource."""
        if profile is None:
            return False
        return profile.uid == owner_id or profile.is_admin

    def can_post_notice(self, profile: Profile | None) -> bool:
        return bool(profile and (profile.is_admin or profile.is_faculty))

    def require_can_create(self, profile: Profile) -> None:
        if profile.is_banned:
            raise AccountBannedError()

    def require_can_modify(self, profile: Profile, owner_id: str) -> None:
        if not self.can_modify(profile, owner_id):
            raise AuthorizationError("Only the author or an administrator can do this")

    def require_can_post_notice(self, profile: Profile) -> None:
        self.require_can_create(profile)
        if not self.can_post_notice(profile):
            raise AuthorizationError("Only faculty and admin can post notices")

    def require_admin(self, profile: Profile) -> None:
        if not profile.is_admin:
            raise AdminRequiredError()

    def self_editable(self, partial: dict[str, Any]) -> dict[str, Any]:
        """Subset of ``partial`` a user may write to their own profile."""
        return {k: v for k, v in partial.items() if k in SELF_EDITABLE_FIELDS}


default_policy = AccessPolicy()

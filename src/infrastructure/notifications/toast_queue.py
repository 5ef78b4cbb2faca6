"""In-memory toast queue for one browser session."""

from collections import deque

import structlog

from domain.entities.session import Toast, ToastVariant

logger = structlog.get_logger()


class ToastQueue:
    """Collects transient notifications until the browser fetches them.

    Oldest toasts are dropped once ``limit`` is reached.
    """

    def __init__(self, limit: int = 20) -> None:
        self._toasts: deque[Toast] = deque(maxlen=limit)

    def notify(
        self,
        title: str,
        description: str,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> None:
        self._toasts.append(Toast(title=title, description=description, variant=variant))
        log = logger.warning if variant is ToastVariant.DESTRUCTIVE else logger.info
        log("toast", title=title, description=description, variant=variant.value)

    def drain(self) -> list[Toast]:
        """Return pending toasts and clear the queue."""
        toasts = list(self._toasts)
        self._toasts.clear()
        return toasts

    def __len__(self) -> int:
        return len(self._toasts)

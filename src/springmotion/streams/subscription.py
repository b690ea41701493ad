"""Subscription handle shared by reactive parameters and motion streams."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

__all__ = ["Subscription"]


@dataclass(eq=False)
class Subscription:
    """Handle returned by every ``subscribe`` call.

    ``unsubscribe`` is idempotent; the owner's cancel hook runs exactly once.
    """

    handler: Any
    _on_cancel: Optional[Callable[["Subscription"], None]] = field(default=None, repr=False)
    active: bool = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        if self._on_cancel is not None:
            self._on_cancel(self)

"""
Ambient context merged into the attributes of every posted event.

The store is process-wide: every thread sees the same context, and changes
apply to events posted after the change.
"""

import threading
from collections.abc import Mapping
from typing import Any


class ContextStore:
    """Thread-safe holder for ambient event context."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._context: dict[str, Any] = {}

    def set_context(self, partial: Mapping[str, Any]) -> None:
        """Merge ``partial`` into the stored context, overwriting existing keys."""
        with self._lock:
            self._context = {**self._context, **partial}

    def clear_context(self) -> None:
        """Reset the stored context to empty."""
        with self._lock:
            self._context = {}

    def current_context(self) -> dict[str, Any]:
        """Return a snapshot copy of the stored context."""
        with self._lock:
            return dict(self._context)

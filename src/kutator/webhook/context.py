"""
Per-review cancellation and deadline context.

A ReviewContext is handed to every mutator of a review. Decoding and diffing
are CPU bound and ignore it; mutators that perform their own I/O are expected
to consult it and fail fast once it is cancelled or past its deadline.
"""

import threading
import time

from kutator.errors import MutationError


class ReviewContext:
    """Cancellation signal and optional deadline for a single review."""

    def __init__(
        self,
        uid: str = "",
        timeout: float | None = None,
        deadline: float | None = None,
    ):
        """
        Initialize review context.

        Args:
            uid: Admission request UID, used as log correlation ID
            timeout: Seconds from now until the review expires
            deadline: Absolute expiry on the time.monotonic() clock; takes
                precedence over timeout
        """
        self.uid = uid
        if deadline is None and timeout is not None:
            deadline = time.monotonic() + timeout
        self.deadline = deadline
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Cancel the review; safe to call from any thread."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without a deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        if self._cancelled.is_set():
            raise MutationError("review cancelled")
        if self.cancelled:
            raise MutationError("review deadline exceeded")


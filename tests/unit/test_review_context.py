"""Unit tests for the review cancellation context."""

import threading
import time

import pytest

from kutator.errors import MutationError
from kutator.webhook.context import ReviewContext


class TestReviewContext:
    def test_fresh_context_is_active(self):
        ctx = ReviewContext(uid="u")

        assert ctx.cancelled is False
        assert ctx.remaining() is None
        ctx.raise_if_cancelled()

    def test_cancel(self):
        ctx = ReviewContext()
        ctx.cancel()

        assert ctx.cancelled is True
        with pytest.raises(MutationError, match="review cancelled"):
            ctx.raise_if_cancelled()

    def test_cancel_from_another_thread(self):
        ctx = ReviewContext()
        worker = threading.Thread(target=ctx.cancel)
        worker.start()
        worker.join()

        assert ctx.cancelled is True

    def test_timeout_sets_deadline(self):
        ctx = ReviewContext(timeout=60)

        assert 0 < ctx.remaining() <= 60
        assert ctx.cancelled is False

    def test_past_deadline(self):
        ctx = ReviewContext(deadline=time.monotonic() - 0.1)

        assert ctx.cancelled is True
        assert ctx.remaining() == 0.0
        with pytest.raises(MutationError, match="deadline exceeded"):
            ctx.raise_if_cancelled()

    def test_deadline_takes_precedence_over_timeout(self):
        deadline = time.monotonic() + 5
        ctx = ReviewContext(timeout=600, deadline=deadline)

        assert ctx.deadline == deadline

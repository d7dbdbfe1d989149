"""Completion request scheduling.

Hides the policy for overlapping requests: either one in flight at a time
with later submissions queued in order, or every submission dispatched at
once with replies arriving in completion order.
"""

from collections import deque

from ..config.models import RequestPolicy
from .events import CompletionRequest


class RequestScheduler:
    """Tracks outstanding completion requests under a policy."""

    def __init__(self, policy: RequestPolicy = RequestPolicy.SERIAL) -> None:
        self._policy = policy
        self._in_flight = 0
        self._queue: deque[CompletionRequest] = deque()

    @property
    def policy(self) -> RequestPolicy:
        return self._policy

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def queued(self) -> int:
        return len(self._queue)

    @property
    def pending(self) -> int:
        """Requests submitted but not yet answered."""
        return self._in_flight + len(self._queue)

    def submit(self, request: CompletionRequest) -> CompletionRequest | None:
        """Register a request. Returns it when it should be dispatched now."""
        if self._policy is RequestPolicy.SERIAL and self._in_flight > 0:
            self._queue.append(request)
            return None
        self._in_flight += 1
        return request

    def complete(self) -> CompletionRequest | None:
        """Register a finished request. Returns the next one to dispatch, if any."""
        self._in_flight = max(0, self._in_flight - 1)
        if self._queue and self._in_flight == 0:
            self._in_flight += 1
            return self._queue.popleft()
        return None

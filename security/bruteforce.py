import math
import time
from dataclasses import dataclass

from flask import current_app

from security.errors import RateLimited


@dataclass
class AttemptRecord:
    count: int = 0
    last_try: float = 0.0
    blocked_until: float | None = None


class AttemptThrottle:
    """
    Per-identifier failed-login counter.

    States: no record (clear), 1..N-1 failures (accumulating), and
    N or more failures with `blocked_until` set (blocked). State lives in
    process memory only and is lost on restart; records idle for a whole
    block window are dropped on the next failure. Increments are not atomic
    across concurrent requests, so the threshold can be overshot slightly.
    """

    def __init__(self, max_attempts: int = 4, block_seconds: int = 300, clock=time.time):
        self.max_attempts = max_attempts
        self.block_seconds = block_seconds
        self.clock = clock
        self._records: dict[str, AttemptRecord] = {}

    def check(self, identifier: str) -> None:
        """Raises RateLimited while the identifier is blocked."""
        record = self._records.get(identifier)
        if not record or record.blocked_until is None:
            return

        now = self.clock()
        if now < record.blocked_until:
            raise RateLimited(max(math.ceil(record.blocked_until - now), 1))

    def record_failure(self, identifier: str) -> tuple[int, bool]:
        """
        Returns (fail_count, blocked_now).
        """
        now = self.clock()
        self._prune(now)
        record = self._records.setdefault(identifier, AttemptRecord())
        record.count += 1
        record.last_try = now

        if record.count >= self.max_attempts:
            record.blocked_until = now + self.block_seconds
            return record.count, True
        return record.count, False

    def _prune(self, now: float) -> None:
        # a record is forgotten one full window after its last activity
        cutoff = now - self.block_seconds
        stale = [
            key for key, record in self._records.items()
            if max(record.last_try, record.blocked_until or 0.0) < cutoff
        ]
        for key in stale:
            del self._records[key]

    def record_success(self, identifier: str) -> None:
        self._records.pop(identifier, None)

    def get(self, identifier: str) -> AttemptRecord | None:
        return self._records.get(identifier)


def get_attempt_throttle() -> AttemptThrottle:
    return current_app.extensions["attempt_throttle"]

"""Fixed-capacity ring buffer holding points awaiting a flush.

Purpose
-------
Accumulate encoded points in arrival order so the flush controller can write
them to the sink as one batch.

Contents
--------
* :class:`RingBuffer` with explicit full/empty signalling.
* ``FULL_POLICIES`` accepted by the constructor.

System Role
-----------
Owned exclusively by :class:`~lib_log_influx.application.use_cases.write_point.BufferedPointWriter`,
which serialises every access behind its flush lock. The buffer itself is not
thread-safe.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, TypeVar

from .errors import BufferEmptyError, BufferFullError

T = TypeVar("T")

FULL_POLICIES = frozenset({"error", "overwrite"})


class RingBuffer(Generic[T]):
    """FIFO queue bounded by ``capacity``.

    With the ``"error"`` policy a push into a full buffer raises
    :class:`BufferFullError`; with ``"overwrite"`` the oldest entry is evicted
    and returned. Popping an empty buffer raises :class:`BufferEmptyError`.

    Examples
    --------
    >>> buffer = RingBuffer(capacity=2)
    >>> buffer.push("a"); buffer.push("b")
    >>> buffer.is_full
    True
    >>> buffer.pop()
    'a'
    >>> len(buffer)
    1
    """

    def __init__(self, *, capacity: int, full_policy: str = "error") -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        policy = full_policy.lower()
        if policy not in FULL_POLICIES:
            raise ValueError("full_policy must be 'error' or 'overwrite'")
        self._capacity = capacity
        self._full_policy = policy
        self._items: Deque[T] = deque()

    @property
    def capacity(self) -> int:
        """Return the configured maximum number of entries."""

        return self._capacity

    @property
    def full_policy(self) -> str:
        return self._full_policy

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def push(self, item: T) -> T | None:
        """Append ``item``; return the evicted entry under the overwrite policy."""
        if not self.is_full:
            self._items.append(item)
            return None
        if self._full_policy == "error" or self._capacity == 0:
            raise BufferFullError(f"ring buffer full (capacity={self._capacity})")
        evicted = self._items.popleft()
        self._items.append(item)
        return evicted

    def pop(self) -> T:
        """Remove and return the oldest entry."""
        try:
            return self._items.popleft()
        except IndexError as exc:
            raise BufferEmptyError("ring buffer empty") from exc

    def drain(self) -> list[T]:
        """Pop entries until the buffer reports empty, oldest first."""
        drained: list[T] = []
        while True:
            try:
                drained.append(self.pop())
            except BufferEmptyError:
                break
        return drained

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["FULL_POLICIES", "RingBuffer"]

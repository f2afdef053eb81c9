"""Scratch writer pool.

A pool owns one pre-allocated ``BufferWriter`` that top-level encodes borrow
to avoid allocating a large buffer per call. The scratch writer has a single
owner at a time: while it is checked out, further checkouts (from another
thread or from a re-entrant encode) receive a freshly allocated writer.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from .cursor import DEFAULT_CAPACITY, BufferWriter

logger = logging.getLogger(__name__)


class WriterPool:
    """Hands out exclusive writers for top-level encodes.

    Example:
        >>> pool = WriterPool(capacity=1024)
        >>> with pool.checkout() as writer:
        ...     writer.write(WireType.UINT8, 1)
        ...     data = writer.finalize()
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self.capacity = capacity
        self._scratch = BufferWriter(bytearray(capacity))
        self._lock = threading.Lock()

    @contextmanager
    def checkout(self) -> Iterator[BufferWriter]:
        """Borrow a writer for the duration of one top-level encode."""
        if not self._lock.acquire(blocking=False):
            logger.debug("Scratch writer busy, allocating a %d byte writer", self.capacity)
            yield BufferWriter(bytearray(self.capacity))
            return

        try:
            yield self._scratch
        finally:
            self._scratch.reset()
            self._lock.release()

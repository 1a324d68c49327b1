"""
One-directional, unbounded, non-blocking message channel.

Each :class:`Channel` has exactly one producer thread and one consumer
thread.  Sends never block and receives never wait: an empty channel is a
normal condition and yields ``None``.  Either end may :meth:`close` the
channel; afterwards sends fail and receives fail once the remaining
messages have been drained.
"""

from __future__ import annotations

import threading
from queue import Empty, Queue
from typing import Generic, Optional, TypeVar

from schip8.core.errors import ChannelClosedError

T = TypeVar("T")


class Channel(Generic[T]):
    """FIFO channel built on :class:`queue.Queue`.

    Parameters
    ----------
    name:
        Label used in error messages, e.g. ``"ui->emu"``.
    """

    def __init__(self, name: str = "channel") -> None:
        self.name: str = name
        self._queue: Queue = Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, message: T) -> None:
        """Enqueue *message* without blocking.

        Raises:
            ChannelClosedError: If the channel has been closed.
        """
        if self._closed.is_set():
            raise ChannelClosedError(f"{self.name}: send on closed channel")
        self._queue.put_nowait(message)

    def try_recv(self) -> Optional[T]:
        """Return the oldest pending message, or ``None`` if there is none.

        Raises:
            ChannelClosedError: If the channel is closed and drained.
        """
        try:
            return self._queue.get_nowait()
        except Empty:
            if not self._closed.is_set():
                return None
        # A message sent just before close() may have landed after the
        # first poll.
        try:
            return self._queue.get_nowait()
        except Empty:
            raise ChannelClosedError(
                f"{self.name}: channel closed by the other end"
            ) from None

    def close(self) -> None:
        self._closed.set()

    def __len__(self) -> int:
        return self._queue.qsize()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"Channel({self.name!r}, {state}, pending={len(self)})"

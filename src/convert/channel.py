"""Single-slot record handoff between parser and writer threads.

This module provides the bounded channel connecting the two pipeline
stages. The producer blocks while the slot is full, which keeps at most
one record in flight and preserves parse order.
"""

from __future__ import annotations

from contextlib import contextmanager
import threading
from typing import Callable, Iterator

from core.errors import ChannelAbortedError, ChannelProtocolError
from core.types import Record


class RecordChannel:
    """Single-producer, single-consumer handoff with capacity one."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._slot: Record | None = None
        self._closed = False
        self._aborted = False

    @property
    def closed(self) -> bool:
        """Return whether the producer signalled no more records."""
        with self._condition:
            return self._closed

    @property
    def aborted(self) -> bool:
        """Return whether either side abandoned the run."""
        with self._condition:
            return self._aborted

    def send(self, record: Record) -> None:
        """Hand one record to the consumer, blocking while the slot is full.

        Raises:
            ChannelProtocolError: If the channel is already closed.
            ChannelAbortedError: If the consumer abandoned the run.
        """
        with self._condition:
            if self._closed:
                raise ChannelProtocolError("Cannot send on a closed record channel.")
            while self._slot is not None and not self._aborted:
                self._condition.wait()
            if self._aborted:
                raise ChannelAbortedError("Record channel was aborted by the consumer.")
            self._slot = record
            self._condition.notify_all()

    def receive(self) -> Record | None:
        """Take the next record, or None once the producer closed the channel.

        Raises:
            ChannelAbortedError: If the producer abandoned the run.
        """
        with self._condition:
            while self._slot is None and not self._closed and not self._aborted:
                self._condition.wait()
            if self._aborted:
                raise ChannelAbortedError("Record channel was aborted by the producer.")
            record = self._slot
            self._slot = None
            self._condition.notify_all()
            return record

    def close(self) -> None:
        """Signal that no more records will be sent.

        Raises:
            ChannelProtocolError: If the channel is already closed.
        """
        with self._condition:
            if self._closed:
                raise ChannelProtocolError("Record channel closed twice.")
            self._closed = True
            self._condition.notify_all()

    def abort(self) -> None:
        """Release a peer blocked on the channel after a fatal failure."""
        with self._condition:
            if self._aborted:
                return
            self._aborted = True
            self._slot = None
            self._condition.notify_all()

    def __iter__(self) -> Iterator[Record]:
        while True:
            record = self.receive()
            if record is None:
                return
            yield record

    @contextmanager
    def sending(self) -> Iterator[Callable[[Record], None]]:
        """Yield the producer's send function and own the channel's end of life.

        The channel is closed when the block exits normally and aborted when
        it raises, so each run closes it exactly once.
        """
        try:
            yield self.send
        except BaseException:
            self.abort()
            raise
        self.close()

    @contextmanager
    def receiving(self) -> Iterator[RecordChannel]:
        """Yield the consumer view, aborting the channel if consumption fails."""
        try:
            yield self
        except BaseException:
            self.abort()
            raise

"""Unit tests for the single-slot record channel."""

from __future__ import annotations

import threading
import time

import pytest

from convert.channel import RecordChannel
from core.errors import ChannelAbortedError, ChannelProtocolError
from core.types import Header, Record

_HEADER = Header(columns=("id",))


def _record(value: str) -> Record:
    return Record(header=_HEADER, values=(value,))


def test_channel_preserves_send_order() -> None:
    """Consumer should observe records in the order they were sent."""
    channel = RecordChannel()
    received: list[str] = []

    def _consume() -> None:
        received.extend(record.values[0] for record in channel)

    consumer = threading.Thread(target=_consume)
    consumer.start()
    with channel.sending() as send:
        for index in range(50):
            send(_record(str(index)))
    consumer.join(timeout=5)

    assert received == [str(index) for index in range(50)]


def test_receive_returns_none_after_close() -> None:
    """Closed channel should report no more records instead of blocking."""
    channel = RecordChannel()
    channel.close()

    assert channel.receive() is None


def test_close_drains_pending_record_first() -> None:
    """A record sent before close should still be delivered."""
    channel = RecordChannel()
    channel.send(_record("1"))
    channel.close()

    assert [record.values for record in channel] == [("1",)]


def test_send_blocks_while_slot_is_full() -> None:
    """Producer should wait until the consumer drains the previous record."""
    channel = RecordChannel()
    channel.send(_record("1"))
    second_sent = threading.Event()

    def _produce() -> None:
        channel.send(_record("2"))
        second_sent.set()

    producer = threading.Thread(target=_produce)
    producer.start()
    time.sleep(0.05)
    blocked_before_receive = not second_sent.is_set()
    first = channel.receive()
    producer.join(timeout=5)

    assert blocked_before_receive and first is not None and second_sent.is_set()


def test_send_after_close_raises_protocol_error() -> None:
    """Sending on a closed channel is a usage error."""
    channel = RecordChannel()
    channel.close()

    with pytest.raises(ChannelProtocolError):
        channel.send(_record("1"))

    assert channel.closed


def test_double_close_raises_protocol_error() -> None:
    """Closing twice is a usage error."""
    channel = RecordChannel()
    channel.close()

    with pytest.raises(ChannelProtocolError):
        channel.close()

    assert channel.closed


def test_sending_context_aborts_on_failure() -> None:
    """A failing producer should release a blocked consumer."""
    channel = RecordChannel()
    outcome: list[BaseException] = []

    def _consume() -> None:
        try:
            channel.receive()
        except ChannelAbortedError as error:
            outcome.append(error)

    consumer = threading.Thread(target=_consume)
    consumer.start()
    with pytest.raises(RuntimeError):
        with channel.sending():
            raise RuntimeError("parse failed")
    consumer.join(timeout=5)

    assert channel.aborted and not channel.closed and len(outcome) == 1


def test_receiving_context_aborts_blocked_producer() -> None:
    """A failing consumer should release a producer waiting on a full slot."""
    channel = RecordChannel()
    channel.send(_record("1"))
    outcome: list[BaseException] = []

    def _produce() -> None:
        try:
            channel.send(_record("2"))
        except ChannelAbortedError as error:
            outcome.append(error)

    producer = threading.Thread(target=_produce)
    producer.start()
    with pytest.raises(OSError):
        with channel.receiving():
            raise OSError("disk full")
    producer.join(timeout=5)

    assert channel.aborted and len(outcome) == 1


def test_abort_after_close_is_noop_for_producer() -> None:
    """Aborting a closed channel should not raise."""
    channel = RecordChannel()
    channel.close()

    channel.abort()
    channel.abort()

    assert channel.aborted and channel.closed

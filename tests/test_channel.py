"""Tests for the one-directional message channel."""

from __future__ import annotations

import threading

import pytest

from schip8.core.channel import Channel
from schip8.core.errors import ChannelClosedError


class TestChannel:

    def test_empty_channel_yields_none(self):
        assert Channel().try_recv() is None

    def test_fifo_order(self):
        channel = Channel()
        for i in range(5):
            channel.send(i)
        assert len(channel) == 5
        assert [channel.try_recv() for _ in range(5)] == list(range(5))
        assert channel.try_recv() is None

    def test_send_after_close_fails(self):
        channel = Channel("ui->emu")
        channel.close()
        with pytest.raises(ChannelClosedError, match="ui->emu"):
            channel.send("late")

    def test_pending_messages_drain_after_close(self):
        channel = Channel()
        channel.send("a")
        channel.send("b")
        channel.close()
        assert channel.try_recv() == "a"
        assert channel.try_recv() == "b"
        with pytest.raises(ChannelClosedError):
            channel.try_recv()

    def test_cross_thread_delivery(self):
        channel = Channel()
        producer = threading.Thread(target=lambda: [channel.send(i) for i in range(100)])
        producer.start()
        producer.join()
        received = []
        while (message := channel.try_recv()) is not None:
            received.append(message)
        assert received == list(range(100))

    def test_repr(self):
        channel = Channel("emu->ui")
        channel.send(1)
        assert repr(channel) == "Channel('emu->ui', open, pending=1)"

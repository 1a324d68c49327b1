"""Tests for the presentation-side loop with fake collaborators."""

from __future__ import annotations

from collections import deque
from typing import List, Optional

import numpy as np
import pytest

from schip8.core.channel import Channel
from schip8.core.messages import (
    BeepEvent,
    DrawEvent,
    FaultEvent,
    KeysMessage,
    PauseMessage,
    QuitAck,
    QuitMessage,
    ResetMessage,
)
from schip8.core.types import GFX_H, GFX_W, Mode
from schip8.shell.interfaces import AudioSink, InputEvent, InputKind, InputSource, Renderer
from schip8.shell.presentation_loop import PresentationLoop


class RecordingRenderer(Renderer):
    def __init__(self) -> None:
        self.frames: List[Mode] = []

    def present(self, mode, frame) -> None:
        self.frames.append(mode)


class RecordingAudio(AudioSink):
    def __init__(self) -> None:
        self.states: List[bool] = []

    def set_audio(self, on: bool) -> None:
        self.states.append(on)


class ScriptedInput(InputSource):
    def __init__(self, *events: InputEvent) -> None:
        self.events = deque(events)

    def push(self, *events: InputEvent) -> None:
        self.events.extend(events)

    def poll_input(self) -> Optional[InputEvent]:
        return self.events.popleft() if self.events else None


def keypad(*pressed: int) -> InputEvent:
    return InputEvent(InputKind.KEYPAD, tuple(i in pressed for i in range(16)))


def blank_draw() -> DrawEvent:
    return DrawEvent(Mode.STANDARD, np.zeros((GFX_W, GFX_H), dtype=bool))


@pytest.fixture
def rig(clock):
    renderer = RecordingRenderer()
    audio = RecordingAudio()
    source = ScriptedInput()
    to_emu = Channel("ui->emu")
    to_ui = Channel("emu->ui")
    loop = PresentationLoop(
        renderer, audio, source, to_emu, to_ui, idle_sleep=0.0, clock=clock,
    )
    return loop, renderer, audio, source, to_emu, to_ui


def drain(channel):
    out = []
    while (message := channel.try_recv()) is not None:
        out.append(message)
    return out


class TestInputForwarding:

    def test_keypad_snapshot_forwarded(self, rig):
        loop, _, _, source, to_emu, _ = rig
        source.push(keypad(4))
        loop.step()
        (message,) = drain(to_emu)
        assert isinstance(message, KeysMessage)
        assert message.keys[4]
        assert sum(message.keys) == 1

    def test_pause_toggles(self, rig):
        loop, _, _, source, to_emu, _ = rig
        source.push(InputEvent(InputKind.TOGGLE_PAUSE), InputEvent(InputKind.TOGGLE_PAUSE))
        loop.step()
        assert loop.paused
        loop.step()
        assert not loop.paused
        assert drain(to_emu) == [PauseMessage(True), PauseMessage(False)]

    def test_keypad_suppressed_while_paused(self, rig):
        loop, _, _, source, to_emu, _ = rig
        source.push(InputEvent(InputKind.TOGGLE_PAUSE), keypad(1))
        loop.step()
        loop.step()
        assert drain(to_emu) == [PauseMessage(True)]

    def test_reset_unpauses(self, rig):
        loop, _, _, source, to_emu, _ = rig
        source.push(InputEvent(InputKind.TOGGLE_PAUSE), InputEvent(InputKind.RESET))
        loop.step()
        loop.step()
        assert not loop.paused
        assert drain(to_emu) == [PauseMessage(True), ResetMessage(), PauseMessage(False)]

    def test_quit_sent_once(self, rig):
        loop, _, _, source, to_emu, _ = rig
        source.push(InputEvent(InputKind.QUIT), InputEvent(InputKind.QUIT))
        loop.step()
        loop.step()
        assert loop.quit_requested
        assert drain(to_emu) == [QuitMessage()]


class TestEmulatorEvents:

    def test_beep_drives_audio(self, rig):
        loop, _, audio, _, _, to_ui = rig
        to_ui.send(BeepEvent(True))
        to_ui.send(BeepEvent(False))
        loop.step()
        loop.step()
        assert audio.states == [True, False]

    def test_draw_rate_limited(self, rig, clock):
        loop, renderer, _, _, _, to_ui = rig
        to_ui.send(blank_draw())
        loop.step()
        assert renderer.frames == []

        clock.advance(1.0)
        to_ui.send(blank_draw())
        to_ui.send(blank_draw())
        loop.step()
        loop.step()
        assert renderer.frames == [Mode.STANDARD]

    def test_draw_skipped_while_paused(self, rig, clock):
        loop, renderer, _, source, _, to_ui = rig
        source.push(InputEvent(InputKind.TOGGLE_PAUSE))
        clock.advance(1.0)
        to_ui.send(blank_draw())
        loop.step()
        assert renderer.frames == []

    def test_quit_ack_stops(self, rig):
        loop, _, _, _, _, to_ui = rig
        to_ui.send(QuitAck())
        assert loop.step() is True
        assert loop.fault is None

    def test_fault_stops(self, rig):
        loop, _, _, _, _, to_ui = rig
        to_ui.send(FaultEvent("Unknown opcode $FFFF at $200"))
        assert loop.step() is True
        assert loop.fault == "Unknown opcode $FFFF at $200"


class TestPresentationRun:

    def test_run_closes_both_channels(self, rig):
        loop, _, _, source, to_emu, to_ui = rig
        source.push(InputEvent(InputKind.QUIT))
        to_ui.send(QuitAck())
        loop.run()
        assert loop.fault is None
        assert to_emu.closed
        assert to_ui.closed

    def test_run_records_disconnect(self, rig):
        loop, _, _, _, to_emu, to_ui = rig
        to_ui.close()
        loop.run()
        assert loop.fault is not None
        assert "emu->ui" in loop.fault
        assert to_emu.closed

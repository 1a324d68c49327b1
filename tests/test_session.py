"""End-to-end tests of the two-thread session with fake collaborators."""

from __future__ import annotations

import random
from typing import Optional

from schip8.core.interpreter import Interpreter
from schip8.shell.interfaces import AudioSink, InputEvent, InputKind, InputSource, Renderer
from schip8.shell.session import run_session


class NullRenderer(Renderer):
    def __init__(self) -> None:
        self.presented = 0

    def present(self, mode, frame) -> None:
        self.presented += 1


class NullAudio(AudioSink):
    def set_audio(self, on: bool) -> None:
        pass


class QuitAfter(InputSource):
    """Report nothing for *polls* polls, then ask to quit."""

    def __init__(self, polls: int) -> None:
        self.remaining = polls

    def poll_input(self) -> Optional[InputEvent]:
        if self.remaining > 0:
            self.remaining -= 1
            return None
        return InputEvent(InputKind.QUIT)


class Idle(InputSource):
    def poll_input(self) -> Optional[InputEvent]:
        return None


def make_interpreter(rom: bytes) -> Interpreter:
    interp = Interpreter(rng=random.Random(0))
    interp.load_rom(rom)
    return interp


class TestSession:

    def test_clean_quit(self):
        # JP self
        interp = make_interpreter(b"\x12\x00")
        fault = run_session(interp, NullRenderer(), NullAudio(), QuitAfter(20))
        assert fault is None

    def test_unknown_opcode_ends_session(self):
        interp = make_interpreter(b"\xFF\xFF")
        fault = run_session(interp, NullRenderer(), NullAudio(), Idle())
        assert fault is not None
        assert "Unknown opcode $FFFF at $200" in fault

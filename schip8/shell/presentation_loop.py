"""
Presentation-side main loop for SCHIP8.

The :class:`PresentationLoop` owns the renderer, audio and input
collaborators and runs on the main thread.  Each iteration it:

1. Polls one input event and forwards it to the emulator as a control
   message.  Keypad changes are dropped while paused.
2. Applies at most one emulator event.  Redraws go through their own
   120 Hz rate limiter so the screen refresh is independent of the
   instruction rate.
3. Sleeps briefly.

It stops on :class:`~schip8.core.messages.QuitAck` (normal shutdown) or
:class:`~schip8.core.messages.FaultEvent` (the emulator failed).
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from schip8.core.channel import Channel
from schip8.core.errors import ChannelClosedError
from schip8.core.messages import (
    BeepEvent,
    ControlMessage,
    DrawEvent,
    EmulatorEvent,
    FaultEvent,
    KeysMessage,
    PauseMessage,
    QuitAck,
    QuitMessage,
    ResetMessage,
)
from schip8.core.metronome import RateLimiter
from schip8.core.types import IDLE_SLEEP, REFRESH_HZ
from schip8.shell.interfaces import AudioSink, InputKind, InputSource, Renderer

logger = logging.getLogger(__name__)


class PresentationLoop:
    """Forward user input to the emulator and present what it produces.

    Parameters
    ----------
    renderer, audio, input_source:
        Collaborators; the loop takes exclusive ownership.
    outbound:
        Control messages for the emulation thread.
    inbound:
        Events from the emulation thread.
    refresh_hz:
        Maximum redraw rate.
    idle_sleep:
        Seconds to sleep between iterations.
    clock:
        Monotonic clock for the redraw rate limiter.
    """

    def __init__(
        self,
        renderer: Renderer,
        audio: AudioSink,
        input_source: InputSource,
        outbound: Channel[ControlMessage],
        inbound: Channel[EmulatorEvent],
        *,
        refresh_hz: float = REFRESH_HZ,
        idle_sleep: float = IDLE_SLEEP,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._renderer = renderer
        self._audio = audio
        self._input = input_source
        self._outbound = outbound
        self._inbound = inbound
        self._idle_sleep = idle_sleep

        self._refresh_gfx_rate = RateLimiter(refresh_hz, clock)

        self._paused: bool = False
        self._quit_sent: bool = False
        self.fault: Optional[str] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def quit_requested(self) -> bool:
        """``True`` once a quit message has been sent to the emulator."""
        return self._quit_sent

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Loop until the emulator acknowledges quit or reports a fault.

        Both channels are closed on exit.  A channel that closes before the
        shutdown handshake completes is recorded in :attr:`fault`.
        """
        logger.info("Presentation loop started")
        try:
            while True:
                if self.step():
                    break
                time.sleep(self._idle_sleep)
        except ChannelClosedError as exc:
            logger.error("Lost contact with the emulator: %s", exc)
            self.fault = str(exc)
        finally:
            self._outbound.close()
            self._inbound.close()
            logger.info("Presentation loop stopped")

    def step(self) -> bool:
        """Run one loop iteration.

        Returns:
            ``True`` once the loop should stop.
        """
        self._process_key_presses()
        return self._process_emu_events()

    # ------------------------------------------------------------------
    # Per-iteration work
    # ------------------------------------------------------------------

    def _process_key_presses(self) -> None:
        event = self._input.poll_input()
        if event is None:
            return

        if event.kind == InputKind.QUIT:
            if not self._quit_sent:
                self._quit_sent = True
                self._outbound.send(QuitMessage())
        elif event.kind == InputKind.TOGGLE_PAUSE:
            self._paused = not self._paused
            self._outbound.send(PauseMessage(self._paused))
        elif event.kind == InputKind.RESET:
            self._outbound.send(ResetMessage())
            self._paused = False
            self._outbound.send(PauseMessage(False))
        elif event.kind == InputKind.KEYPAD:
            if not self._paused:
                self._outbound.send(KeysMessage(tuple(event.keys)))

    def _process_emu_events(self) -> bool:
        """Apply at most one emulator event.  Returns ``True`` to stop."""
        event = self._inbound.try_recv()
        if event is None:
            return False

        if isinstance(event, BeepEvent):
            self._audio.set_audio(event.on)
        elif isinstance(event, DrawEvent):
            self._refresh_gfx_rate.on_tick(lambda: self._refresh(event))
        elif isinstance(event, QuitAck):
            return True
        elif isinstance(event, FaultEvent):
            logger.error("Emulator fault: %s", event.reason)
            self.fault = event.reason
            return True
        else:
            logger.warning("Ignoring unexpected emulator event %r", event)
        return False

    def _refresh(self, event: DrawEvent) -> None:
        if not self._paused:
            self._renderer.present(event.mode, event.frame)

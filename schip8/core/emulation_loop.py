"""
Emulation-side main loop for SCHIP8.

The :class:`EmulationLoop` is the only code that ever touches its
:class:`~schip8.core.interpreter.Interpreter`.  It runs on its own thread
and talks to the presentation thread exclusively through two
:class:`~schip8.core.channel.Channel` objects.

Each iteration:

1. Apply at most one inbound control message.
2. At the instruction rate (500 Hz), run one cycle and publish a
   :class:`DrawEvent` if the interpreter lit any pixels.
3. At the timer rate (60 Hz), count the timers down and publish a
   :class:`BeepEvent` whenever the beep state flips.
4. Sleep briefly.

While paused the rate limiters keep ticking but their actions are skipped.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from schip8.core.channel import Channel
from schip8.core.errors import Chip8Error, UnknownOpcodeError
from schip8.core.interpreter import Interpreter
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
from schip8.core.types import CPU_HZ, IDLE_SLEEP, NUM_KEYS, TIMER_HZ

logger = logging.getLogger(__name__)


class EmulationLoop:
    """Drive an interpreter at fixed logical rates.

    Parameters
    ----------
    interpreter:
        A loaded interpreter.  The loop takes exclusive ownership.
    inbound:
        Control messages from the presentation thread.
    outbound:
        Events for the presentation thread.
    cpu_hz:
        Instruction rate.
    timer_hz:
        Delay/sound timer rate.
    idle_sleep:
        Seconds to sleep between iterations.
    clock:
        Monotonic clock shared by both rate limiters.
    """

    def __init__(
        self,
        interpreter: Interpreter,
        inbound: Channel[ControlMessage],
        outbound: Channel[EmulatorEvent],
        *,
        cpu_hz: float = CPU_HZ,
        timer_hz: float = TIMER_HZ,
        idle_sleep: float = IDLE_SLEEP,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._interpreter = interpreter
        self._inbound = inbound
        self._outbound = outbound
        self._idle_sleep = idle_sleep

        self._clock_rate = RateLimiter(cpu_hz, clock)
        self._timer_rate = RateLimiter(timer_hz, clock)

        self._paused: bool = False
        self._beeping: bool = False
        self._running: bool = False
        self.fault: Optional[Chip8Error] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def beeping(self) -> bool:
        """The beep state most recently published to the presentation side."""
        return self._beeping

    @property
    def running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Loop until a quit request or a fatal fault.

        Any :class:`~schip8.core.errors.Chip8Error` is logged and kept in
        :attr:`fault`.  The outbound channel is always closed on exit so
        the presentation side notices if this thread dies early.
        """
        self._running = True
        logger.info("Emulation loop started")
        try:
            while self._running:
                if self.step():
                    break
                time.sleep(self._idle_sleep)
        except Chip8Error as exc:
            logger.error("Emulation stopped: %s", exc)
            self.fault = exc
        finally:
            self._running = False
            self._outbound.close()
            logger.info("Emulation loop stopped")

    def step(self) -> bool:
        """Run one loop iteration.

        Returns:
            ``True`` once the loop should stop.
        """
        if self._process_ui_events():
            return True
        try:
            self._clock_rate.on_tick(self._execute_cycle)
        except UnknownOpcodeError as exc:
            logger.error("Fatal decode fault: %s", exc)
            self.fault = exc
            self._outbound.send(FaultEvent(str(exc)))
            return True
        self._timer_rate.on_tick(self._update_timers)
        return False

    # ------------------------------------------------------------------
    # Per-iteration work
    # ------------------------------------------------------------------

    def _process_ui_events(self) -> bool:
        """Apply at most one control message.  Returns ``True`` on quit."""
        message = self._inbound.try_recv()
        if message is None:
            return False

        if isinstance(message, KeysMessage):
            self._interpreter.keys = list(message.keys[:NUM_KEYS])
        elif isinstance(message, PauseMessage):
            if message.paused != self._paused:
                logger.info("Emulation %s", "paused" if message.paused else "resumed")
            self._paused = message.paused
        elif isinstance(message, ResetMessage):
            logger.info("Resetting interpreter")
            self._interpreter.reset()
        elif isinstance(message, QuitMessage):
            self._outbound.send(QuitAck())
            return True
        else:
            logger.warning("Ignoring unexpected control message %r", message)
        return False

    def _execute_cycle(self) -> None:
        if self._paused:
            return
        interpreter = self._interpreter
        interpreter.execute_cycle()
        if interpreter.draw:
            self._outbound.send(
                DrawEvent(interpreter.mode, interpreter.frame_buffer.snapshot())
            )
            interpreter.draw = False

    def _update_timers(self) -> None:
        if self._paused:
            return
        self._interpreter.update_timers()
        if self._beeping != self._interpreter.beeping:
            self._beeping = not self._beeping
            self._outbound.send(BeepEvent(self._beeping))

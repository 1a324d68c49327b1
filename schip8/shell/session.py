"""
Thread wiring for one SCHIP8 run.

:func:`run_session` creates the two channels, starts the
:class:`~schip8.core.emulation_loop.EmulationLoop` on a daemon thread and
runs the :class:`~schip8.shell.presentation_loop.PresentationLoop` on the
calling thread.  pygame requires its window and event queue to be serviced
from the main thread, so the presentation side always stays there.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from schip8.core.channel import Channel
from schip8.core.emulation_loop import EmulationLoop
from schip8.core.interpreter import Interpreter
from schip8.core.messages import ControlMessage, EmulatorEvent
from schip8.core.types import CPU_HZ, REFRESH_HZ, TIMER_HZ
from schip8.shell.interfaces import AudioSink, InputSource, Renderer
from schip8.shell.presentation_loop import PresentationLoop

logger = logging.getLogger(__name__)

# Seconds to wait for the emulation thread after the presentation loop ends.
_JOIN_TIMEOUT: float = 2.0


def run_session(
    interpreter: Interpreter,
    renderer: Renderer,
    audio: AudioSink,
    input_source: InputSource,
    *,
    cpu_hz: float = CPU_HZ,
    timer_hz: float = TIMER_HZ,
    refresh_hz: float = REFRESH_HZ,
) -> Optional[str]:
    """Run *interpreter* until the user quits or a fault stops it.

    Returns:
        ``None`` after a clean shutdown, otherwise a description of the
        fault that ended the session.
    """
    to_emu: Channel[ControlMessage] = Channel("ui->emu")
    to_ui: Channel[EmulatorEvent] = Channel("emu->ui")

    emulation = EmulationLoop(
        interpreter, to_emu, to_ui, cpu_hz=cpu_hz, timer_hz=timer_hz,
    )
    presentation = PresentationLoop(
        renderer, audio, input_source, to_emu, to_ui, refresh_hz=refresh_hz,
    )

    thread = threading.Thread(target=emulation.run, name="schip8-emulation", daemon=True)
    thread.start()
    try:
        presentation.run()
    finally:
        # The presentation loop has closed both channels, so the emulation
        # thread stops on its next poll.
        thread.join(_JOIN_TIMEOUT)
        if thread.is_alive():
            logger.warning("Emulation thread did not stop within %.1fs", _JOIN_TIMEOUT)

    if emulation.fault is not None:
        return str(emulation.fault)
    return presentation.fault

"""
Messages exchanged between the presentation and emulation threads.

Inbound (presentation -> emulation) control messages:

=================  ===========================================
Message            Effect on the emulation loop
=================  ===========================================
``KeysMessage``    replace the 16-key keypad snapshot
``PauseMessage``   pause or resume cycles and timers
``ResetMessage``   reset the interpreter and reload the ROM
``QuitMessage``    acknowledge and stop
=================  ===========================================

Outbound (emulation -> presentation) events:

=================  ===========================================
Event              Effect on the presentation loop
=================  ===========================================
``DrawEvent``      redraw (rate limited) with the given frame
``BeepEvent``      start or stop the beep
``QuitAck``        stop; the emulation thread has finished
``FaultEvent``     stop; the emulation thread hit a fatal fault
=================  ===========================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

import numpy as np

from schip8.core.types import Mode


# ---------------------------------------------------------------------------
# Presentation -> emulation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KeysMessage:
    keys: Tuple[bool, ...]


@dataclass(frozen=True)
class PauseMessage:
    paused: bool


@dataclass(frozen=True)
class ResetMessage:
    pass


@dataclass(frozen=True)
class QuitMessage:
    pass


ControlMessage = Union[KeysMessage, PauseMessage, ResetMessage, QuitMessage]


# ---------------------------------------------------------------------------
# Emulation -> presentation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DrawEvent:
    """A snapshot of the canvas.  *frame* is owned by the receiver."""

    mode: Mode
    frame: np.ndarray = field(repr=False)


@dataclass(frozen=True)
class BeepEvent:
    on: bool


@dataclass(frozen=True)
class QuitAck:
    pass


@dataclass(frozen=True)
class FaultEvent:
    reason: str


EmulatorEvent = Union[DrawEvent, BeepEvent, QuitAck, FaultEvent]

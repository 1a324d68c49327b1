"""
SCHIP8 -- CHIP-8 / SUPER-CHIP interpreter

Command-line entry point.  Parses arguments, loads the ROM into a fresh
interpreter and runs it in a pygame window.

Usage examples::

    # Run a ROM
    schip8 roms/INVADERS

    # Larger window, faster CPU, no beep
    schip8 roms/ANT --scale 12 --cpu-hz 1000 --no-audio

    # Log pause/reset and mixer details
    schip8 roms/BLINKY -v

Controls: 1234/QWER/ASDF/ZXCV for the keypad, Return to pause, Backspace to
reset, Escape to quit.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from schip8.core.errors import RomLoadError
from schip8.core.types import CPU_HZ
from schip8.platform.audio import AudioDevice
from schip8.platform.input_handler import InputHandler
from schip8.platform.window import Window
from schip8.shell.services.machine_factory import MachineFactory
from schip8.shell.session import run_session


# ---------------------------------------------------------------------------
# CLI definition
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="schip8",
        description=(
            "SCHIP8 -- CHIP-8 / SUPER-CHIP interpreter.  "
            "Load a ROM file and play it in a pygame window."
        ),
    )

    parser.add_argument(
        "rom",
        help="Path to the ROM file",
    )

    # Display
    parser.add_argument(
        "--scale", "-s",
        type=int,
        default=8,
        help="Display scale factor (1-16).  Default: 8.",
    )

    # Timing
    parser.add_argument(
        "--cpu-hz",
        type=float,
        default=CPU_HZ,
        metavar="HZ",
        help=f"Instructions per second.  Default: {CPU_HZ}.",
    )

    # Audio
    parser.add_argument(
        "--no-audio",
        action="store_true",
        default=False,
        help="Disable the beep.",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
    )

    return parser


def _configure_logging(verbosity: int) -> None:
    """Set up the root logger based on requested verbosity."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` to use ``sys.argv``.

    Returns
    -------
    int
        Exit code (0 on success, 1 on a load or emulation fault).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    logger = logging.getLogger("schip8.main")

    if args.cpu_hz <= 0:
        parser.error("--cpu-hz must be positive")

    rom_path: str = os.path.expanduser(args.rom)

    # Load faults are reported before any thread starts.
    try:
        interpreter = MachineFactory.create(rom_path)
    except RomLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    window: Optional[Window] = None
    audio: Optional[AudioDevice] = None
    logger.info("Starting emulation ...")
    try:
        window = Window(scale=args.scale)
        audio = AudioDevice(enabled=not args.no_audio)
        fault = run_session(
            interpreter,
            window,
            audio,
            InputHandler(),
            cpu_hz=args.cpu_hz,
        )
    except KeyboardInterrupt:
        fault = None
    finally:
        if audio is not None:
            audio.shutdown()
        if window is not None:
            window.shutdown()

    if fault is not None:
        print(f"Fatal error: {fault}", file=sys.stderr)
        return 1

    logger.info("Exited cleanly")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Signal handling utilities for the dirscan CLI.

Listings are often piped into ``head`` or ``grep -m``; the handlers here let the
CLI notice a closed pipe or Ctrl+C and exit with the conventional status
instead of a traceback.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Optional


class SignalHandler:
    """Records SIGPIPE and SIGINT so the CLI can stop writing and pick its exit code.

    Attributes:
        sigpipe_received: Event set when a SIGPIPE signal is received.
        sigint_received: Event set when a SIGINT signal is received.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler = signal.getsignal(signal.SIGPIPE) if hasattr(signal, "SIGPIPE") else None
        self.original_sigint_handler = signal.getsignal(signal.SIGINT)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        signal.signal(signal.SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    def should_stop(self) -> bool:
        """True once either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def exit_code(self) -> Optional[int]:
        """Exit status implied by the received signals, or None."""
        if self.sigpipe_received.is_set():
            return 141
        if self.sigint_received.is_set():
            return 130
        return None


# Singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE (where the platform has it) and SIGINT handlers."""
    if hasattr(signal, "SIGPIPE"):
        signal.signal(signal.SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Redirect stdout to the null device after SIGPIPE or SIGINT.

    Keeps the interpreter from reporting a second broken pipe while flushing at exit.
    """
    if signal_handler.should_stop():
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)

"""Line output for the dirscan CLI that stops cleanly on SIGPIPE and SIGINT."""

import errno
import os
import types
from typing import Optional, Type

from dirscan.cli.signal_handler import signal_handler


class SafeWriter:
    """Write listing lines to a file descriptor while watching for signals.

    Attributes:
        fd: The file descriptor being written to.
        lines_written: Number of lines written so far.
    """

    def __init__(self, fd: int):
        if not isinstance(fd, int):
            raise TypeError(f"Expected a file descriptor, got {type(fd).__name__}")
        self.fd = fd
        self.lines_written = 0
        self._closed = False

    def write_line(self, line: str) -> None:
        """Write one line followed by a newline.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is closed.
            OSError: If another I/O error occurs.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.should_stop():
            raise BrokenPipeError()

        try:
            os.write(self.fd, (line + "\n").encode("utf-8"))
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise
        self.lines_written += 1

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.close()

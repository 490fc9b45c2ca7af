"""Terminal prompts: line input and single-key confirmation."""

import asyncio
import logging
import os
import sys
from typing import Optional, TextIO

from rich.console import Console

from ai_tutorial_runner.core.exceptions import UserCancelled

logger = logging.getLogger(__name__)

ENTER_KEYS = frozenset({"\r", "\n"})
CANCEL_KEYS = frozenset({"\x1b", "\x03", "q", "Q"})

# One keypress from a real terminal may arrive as a multi-byte chunk
# (arrow keys, pastes); it is compared as a whole.
_READ_CHUNK = 32


class InputSession:
    """
    Scoped terminal input mode.

    On entry a TTY is switched to raw mode (unbuffered, unechoed, no signal
    keys) or, with ``raw=False``, forced into cooked line mode. The exact prior
    attributes are restored on exit, whether the block returned, was
    cancelled or raised. Streams that are not terminals are read as-is.
    """

    def __init__(self, stream: Optional[TextIO] = None, raw: bool = True):
        self.stream = stream if stream is not None else sys.stdin
        self.raw = raw
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[list] = None

    @property
    def is_terminal(self) -> bool:
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def __enter__(self) -> "InputSession":
        if not self.is_terminal:
            return self

        import termios
        import tty

        self._fd = self.stream.fileno()
        self._saved_attrs = termios.tcgetattr(self._fd)
        if self.raw:
            tty.setraw(self._fd)
        else:
            attrs = termios.tcgetattr(self._fd)
            attrs[3] |= termios.ICANON | termios.ECHO | termios.ISIG
            termios.tcsetattr(self._fd, termios.TCSANOW, attrs)
        logger.debug(f"Terminal input mode: {'raw' if self.raw else 'cooked'}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._saved_attrs is not None:
            import termios

            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
            logger.debug("Terminal input mode restored")
        self._fd = None

    async def read_key(self) -> str:
        """Wait for the next keypress without blocking the event loop."""
        if self._fd is None:
            return self.stream.read(1)

        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()
        fd = self._fd

        def _on_readable() -> None:
            if not future.done():
                future.set_result(os.read(fd, _READ_CHUNK))

        loop.add_reader(fd, _on_readable)
        try:
            data = await future
        finally:
            loop.remove_reader(fd)
        return data.decode("utf-8", errors="replace")

    def read_line(self) -> str:
        """
        Read one line and drop its line terminator.

        Raises:
            UserCancelled: at end of input
        """
        line = self.stream.readline()
        if not line:
            raise UserCancelled("End of input")
        return line.rstrip("\r\n")


def prompt_line(
    message: str,
    console: Optional[Console] = None,
    stream: Optional[TextIO] = None,
) -> str:
    """
    Display ``message`` and return one line of input verbatim.

    Raises:
        UserCancelled: if input is closed before a line arrives
    """
    console = console or Console()
    with InputSession(stream, raw=False) as session:
        console.print(message, end="")
        return session.read_line()


async def wait_for_key(
    message: str,
    console: Optional[Console] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Display ``message`` and wait for a single keypress.

    Enter resolves the wait; Escape, Ctrl-C, ``q`` and ``Q`` cancel it.
    Any other key is ignored.

    Raises:
        UserCancelled: on a cancel key or end of input
    """
    console = console or Console()
    console.print(message)

    with InputSession(stream, raw=True) as session:
        while True:
            key = await session.read_key()
            if not key:
                raise UserCancelled("End of input")
            if key in ENTER_KEYS:
                return
            if key in CANCEL_KEYS:
                raise UserCancelled()
            logger.debug(f"Ignoring key {key!r}")

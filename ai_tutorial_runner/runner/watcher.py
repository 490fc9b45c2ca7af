"""Wait for the tutorial configuration file to appear."""

import asyncio
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from ai_tutorial_runner.core.exceptions import ConfigTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
DEFAULT_POLL_INTERVAL = 0.5


@contextmanager
def waiting_spinner(
    message: str,
    enabled: bool = True,
    console: Optional[Console] = None,
) -> Iterator[Optional[Progress]]:
    """
    Render a spinner line for the duration of the block.

    The progress display is transient, so the line is cleared on every exit
    path including exceptions and cancellation.
    """
    if not enabled:
        yield None
        return

    with Progress(
        SpinnerColumn(style="cyan"),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        refresh_per_second=10,
    ) as progress:
        progress.add_task(message, total=None)
        yield progress


async def wait_for_file(
    path: Union[str, Path],
    timeout: float = DEFAULT_TIMEOUT,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    *,
    spinner: bool = False,
    console: Optional[Console] = None,
) -> Path:
    """
    Poll until ``path`` exists.

    Args:
        path: File to wait for
        timeout: Seconds before giving up
        poll_interval: Seconds between existence checks
        spinner: Show a terminal spinner while waiting
        console: Console the spinner renders to

    Returns:
        The path, once it exists

    Raises:
        ConfigTimeoutError: if the file did not appear in time
    """
    target = Path(path)
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    logger.debug(f"Waiting up to {timeout}s for {target}")
    with waiting_spinner("Waiting for config file...", enabled=spinner, console=console):
        while True:
            if target.exists():
                logger.debug(f"Found {target}")
                return target

            remaining = deadline - loop.time()
            if remaining <= 0:
                raise ConfigTimeoutError(str(target), timeout)

            await asyncio.sleep(min(poll_interval, remaining))

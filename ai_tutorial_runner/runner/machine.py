"""Top-level tutorial runner: install, wait, confirm, execute."""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ai_tutorial_runner.core.config import RunnerConfig
from ai_tutorial_runner.core.exceptions import ExecutionFailed, UserCancelled
from ai_tutorial_runner.runner.executor import run_command, run_script
from ai_tutorial_runner.runner.parser import RunConfig, read_run_config
from ai_tutorial_runner.runner.prompt import prompt_line, wait_for_key
from ai_tutorial_runner.runner.watcher import wait_for_file

logger = logging.getLogger(__name__)


class RunnerState(str, Enum):
    """States of the runner pipeline."""
    INSTALLING = "installing"
    WAITING_FOR_CONFIG = "waiting_for_config"
    PARSED = "parsed"
    AWAITING_CONFIRM = "awaiting_confirm"
    EXECUTING = "executing"
    AWAITING_RERUN = "awaiting_rerun"
    EXIT = "exit"


class RunnerVariant(BaseModel):
    """How a particular runner entry point behaves."""

    model_config = {"frozen": True}

    name: str
    config_file: str = Field(description="Config file naming the tutorial script")
    spinner: bool = Field(default=True, description="Animate while waiting for the config")
    key_prompt: bool = Field(default=True, description="Single-key confirm instead of a line prompt")
    rerun: bool = Field(default=False, description="Offer to run the script again")
    banner: bool = Field(default=False, description="Print the welcome banner")


START = RunnerVariant(
    name="start",
    config_file=".ai-tutorial.conf",
    spinner=False,
    key_prompt=False,
)
RUN_ONCE = RunnerVariant(
    name="run-once",
    config_file=".api-tutorial/script.conf",
)
RUN = RunnerVariant(
    name="run",
    config_file="env/run.conf",
    rerun=True,
    banner=True,
)

VARIANTS = {variant.name: variant for variant in (START, RUN_ONCE, RUN)}


class TutorialRunner:
    """
    Drives one runner session through its states.

    ``run()`` returns the process exit status for graceful endings (including
    user cancellation). Timeouts, config errors and child failures propagate
    as :class:`TutorialRunnerError` for the caller to report.
    """

    def __init__(
        self,
        variant: RunnerVariant = RUN,
        config: Optional[RunnerConfig] = None,
        console: Optional[Console] = None,
        stdin: Optional[TextIO] = None,
    ):
        self.variant = variant
        self.config = config or RunnerConfig.from_env()
        self.console = console or Console()
        self.stdin = stdin

        self.state = RunnerState.INSTALLING
        self.history: List[RunnerState] = [self.state]
        self.run_config: Optional[RunConfig] = None
        self.runs = 0

    def _transition(self, state: RunnerState) -> None:
        logger.debug(f"Runner {self.variant.name}: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    async def run(self) -> int:
        """Run the full pipeline and return the exit status."""
        if self.variant.banner:
            self._print_banner()

        self._install()

        self._transition(RunnerState.WAITING_FOR_CONFIG)
        await self._wait_for_config()

        self._transition(RunnerState.PARSED)
        self.run_config = read_run_config(self.variant.config_file)
        if not self.variant.key_prompt:
            self.console.print(f"File to execute: {escape(self.run_config.file_path)}")

        while True:
            self._transition(RunnerState.AWAITING_CONFIRM)
            try:
                await self._confirm()
            except UserCancelled:
                self.console.print("[yellow]\nReturning to terminal...[/yellow]")
                return self._exit()

            self._transition(RunnerState.EXECUTING)
            self._execute()

            if not self.variant.rerun:
                return self._exit()

            self._transition(RunnerState.AWAITING_RERUN)
            try:
                await self._ask_run_again()
            except UserCancelled:
                self.console.print("[yellow]\nExiting...[/yellow]")
                return self._exit()

    def _exit(self) -> int:
        self._transition(RunnerState.EXIT)
        return 0

    def _print_banner(self) -> None:
        self.console.print(Panel(
            "[bold cyan]AI Tutorial Interactive Runner[/bold cyan]\n\n"
            "[dim]This script will:\n"
            "  1. Install dependencies\n"
            "  2. Wait for the tutorial configuration\n"
            "  3. Execute the tutorial example[/dim]",
            border_style="cyan",
        ))

    def _install(self) -> None:
        """One-shot dependency install; failures never stop the runner."""
        command = self.config.install_command
        if not command:
            logger.debug("No install command configured")
            return

        requirements = self.config.requirements_file
        if requirements and not Path(requirements).exists():
            logger.debug(f"Skipping install, {requirements} not found")
            return

        if not self.variant.banner:
            self.console.print("Installing dependencies...")
        try:
            run_command(command)
        except ExecutionFailed as e:
            logger.warning(f"Dependency install failed: {e}")
            self.console.print(f"[yellow]⚠️  Dependency install failed: {escape(str(e))}[/yellow]")
            return

        if not self.variant.banner:
            self.console.print("\n✅ Dependencies installed\n")

    async def _wait_for_config(self) -> None:
        config_file = self.variant.config_file
        if not self.variant.spinner:
            self.console.print(f"Waiting for {escape(config_file)} to be created...")

        await wait_for_file(
            config_file,
            timeout=self.config.max_wait,
            poll_interval=self.config.poll_interval,
            spinner=self.variant.spinner,
            console=self.console,
        )

        if not self.variant.spinner:
            self.console.print(f"✅ {escape(config_file)} found\n")

    async def _confirm(self) -> None:
        file_path = escape(self.run_config.file_path)
        if self.variant.key_prompt:
            await wait_for_key(
                f"[bold]\nPress enter to execute [cyan]{file_path}[/cyan] "
                f"(or ESC to return to terminal):[/bold]",
                console=self.console,
                stream=self.stdin,
            )
        else:
            prompt_line(
                "\nPress Enter to execute the file...\n",
                console=self.console,
                stream=self.stdin,
            )

    async def _ask_run_again(self) -> None:
        await wait_for_key(
            "[bold]\nPress enter to run again (or ESC to exit):[/bold]",
            console=self.console,
            stream=self.stdin,
        )

    def _execute(self) -> None:
        file_path = self.run_config.file_path
        if self.variant.banner:
            self.console.print("[green]\n▶ Executing...\n[/green]")
        else:
            self.console.print(f"\nExecuting: {escape(file_path)}\n")

        self.runs += 1
        run_script(file_path, self.config.interpreter)

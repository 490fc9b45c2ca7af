"""CLI for the tutorial runner and API key setup."""

import asyncio
import sys
from typing import NoReturn

import click
import openai
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ai_tutorial_runner import __version__
from ai_tutorial_runner.bridge.host import resolve_host_bridge
from ai_tutorial_runner.bridge.listener import ApiKeyListener
from ai_tutorial_runner.bridge.setup_env import setup_api_key
from ai_tutorial_runner.bridge.store import CredentialStore
from ai_tutorial_runner.bridge.sync import check_and_set_api_key, sync_api_key_to_parent
from ai_tutorial_runner.core.config import Config
from ai_tutorial_runner.core.exceptions import (
    CredentialEmptyError,
    CredentialError,
    TutorialRunnerError,
    UserCancelled,
)
from ai_tutorial_runner.core.logging import setup_logging
from ai_tutorial_runner.runner.machine import VARIANTS, TutorialRunner
from ai_tutorial_runner.tutorial.hello_world import say_hello

console = Console()


def setup_cli_logging(config: Config, verbose: bool = False) -> None:
    """Set up logging for CLI."""
    level = "DEBUG" if verbose else config.log_level

    setup_logging(
        level=level,
        log_file=config.log_file,
        handler=RichHandler(
            console=console,
            rich_tracebacks=True,
            show_time=False,
        ),
    )


def _fail(error: Exception, prefix: str = "✗ Error") -> NoReturn:
    console.print(f"\n[red]{prefix}: {escape(str(error))}[/red]")
    sys.exit(1)


def _store(config: Config) -> CredentialStore:
    return CredentialStore.from_config(config.credentials)


def _run_variant(config: Config, name: str) -> None:
    runner = TutorialRunner(VARIANTS[name], config=config.runner, console=console)
    try:
        exit_code = asyncio.run(runner.run())
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(1)
    except TutorialRunnerError as e:
        _fail(e)
    sys.exit(exit_code)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """🎓 AI Tutorial Runner - set up your API key and run tutorial scripts."""
    config = Config.from_env()
    setup_cli_logging(config, verbose)
    ctx.obj = config


@cli.command()
@click.pass_obj
def start(config: Config):
    """Wait for .ai-tutorial.conf, then run its script once after Enter."""
    _run_variant(config, "start")


@cli.command(name="run-once")
@click.pass_obj
def run_once(config: Config):
    """Wait for .api-tutorial/script.conf and run its script once.

    Press Enter to execute, or ESC / q to return to the terminal.
    """
    _run_variant(config, "run-once")


@cli.command()
@click.pass_obj
def run(config: Config):
    """Interactive runner for env/run.conf with a run-again loop.

    Installs dependencies, waits for the tutorial configuration, then
    executes the tutorial script each time you press Enter.
    """
    _run_variant(config, "run")


@cli.command(name="setup-env")
@click.pass_obj
def setup_env(config: Config):
    """Prompt for an OpenAI API key, verify it and save it to env/.env."""
    try:
        setup_api_key(
            _store(config),
            resolve_host_bridge(),
            console=console,
            storage_key=config.credentials.storage_key,
        )
    except CredentialEmptyError as e:
        _fail(e, prefix="❌ Error")
    except CredentialError as e:
        console.print("[red]❌ Connection failed![/red]")
        console.print(f"[red]   {escape(e.message)}[/red]")
        sys.exit(1)
    except UserCancelled:
        console.print("\n[yellow]Setup cancelled, no API key saved[/yellow]")


@cli.command(name="check-key")
@click.pass_obj
def check_key(config: Config):
    """Copy an API key from the browser host's storage into env/.env."""
    store = _store(config)
    api_key = check_and_set_api_key(store, resolve_host_bridge(), config.credentials.storage_key)
    if api_key is None:
        console.print('[dim]ℹ️  No API key configured. Run "ai-tutorial setup-env" to configure.[/dim]')


@cli.command(name="sync-key")
@click.pass_obj
def sync_key(config: Config):
    """Send the API key in env/.env to the embedding parent window."""
    sync_api_key_to_parent(_store(config), resolve_host_bridge(), config.credentials.storage_key)


@cli.command()
@click.pass_obj
def listen(config: Config):
    """Listen for API key messages from the embedding browser host."""
    listener = ApiKeyListener(
        _store(config),
        resolve_host_bridge(),
        storage_key=config.credentials.storage_key,
        sync_delay=config.credentials.sync_delay,
    )

    async def listen_loop():
        if not listener.start():
            return
        listener.schedule_sync()
        try:
            await asyncio.Event().wait()
        finally:
            listener.stop()

    try:
        asyncio.run(listen_loop())
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped listening[/yellow]")


@cli.command()
@click.pass_obj
def hello(config: Config):
    """Run the hello-world tutorial with the saved API key."""
    try:
        reply = say_hello(config.credentials.env_path, config=config.tutorial)
    except openai.OpenAIError as e:
        _fail(e)
    console.print(reply, markup=False)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

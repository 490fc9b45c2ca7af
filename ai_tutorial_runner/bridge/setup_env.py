"""Interactive API key setup: prompt, validate, persist, mirror."""

from typing import Optional, TextIO

from openai import OpenAI
from rich.console import Console
from rich.markup import escape

from ai_tutorial_runner.bridge.host import HostBridge
from ai_tutorial_runner.bridge.messages import DEFAULT_STORAGE_KEY, save_api_key
from ai_tutorial_runner.bridge.store import CredentialStore
from ai_tutorial_runner.bridge.sync import mirror_to_storage, post_to_parent
from ai_tutorial_runner.core.exceptions import CredentialEmptyError
from ai_tutorial_runner.core.logging import get_logger
from ai_tutorial_runner.llm.validation import ClientFactory, is_valid_api_key, validate_api_key
from ai_tutorial_runner.runner.prompt import prompt_line

logger = get_logger("ai_tutorial_runner.bridge")

API_KEY_URL = "https://platform.openai.com/api-keys"


def mirror_api_key(
    bridge: Optional[HostBridge],
    value: str,
    storage_key: str = DEFAULT_STORAGE_KEY,
) -> bool:
    """
    Copy ``value`` to the host: its key-value store and the parent window.

    Both are optional; nothing here raises.
    """
    if bridge is None:
        logger.debug("No host window, API key kept in credential file only")
        return False

    stored = mirror_to_storage(bridge, value, storage_key)
    posted = post_to_parent(bridge, save_api_key(value, storage_key))
    return stored or posted


def _print_instructions(console: Console) -> None:
    console.print("\n[bold]🔑 OpenAI API Key Setup[/bold]\n")
    console.print(f"To get your API key, visit: [link={API_KEY_URL}]{API_KEY_URL}[/link]")
    console.print("1. Sign in to your OpenAI account")
    console.print("2. Navigate to API Keys section")
    console.print('3. Click "Create new secret key"')
    console.print("4. Copy the key (you won't be able to see it again)\n")


def setup_api_key(
    store: CredentialStore,
    bridge: Optional[HostBridge] = None,
    *,
    console: Optional[Console] = None,
    stream: Optional[TextIO] = None,
    client_factory: ClientFactory = OpenAI,
    storage_key: str = DEFAULT_STORAGE_KEY,
) -> str:
    """
    Make sure a working API key is saved to the credential file.

    An existing valid key is kept. Otherwise the user is prompted, the key is
    checked against OpenAI, written to the file and mirrored to the host.

    Returns:
        The key in effect afterwards

    Raises:
        CredentialEmptyError: blank input; nothing is written
        CredentialInvalidError: OpenAI rejected the key (or its subclasses
            for rate limiting and connection failures)
        UserCancelled: input closed before a key was entered; nothing is
            written
    """
    console = console or Console()

    existing = store.read()
    if existing:
        console.print("\n🔍 Checking existing API key...")
        if is_valid_api_key(existing, client_factory):
            console.print("[green]✅ API key is already configured and valid![/green]\n")
            return existing
        console.print("[yellow]⚠️  Existing API key is invalid. Please provide a new one.[/yellow]\n")

    _print_instructions(console)
    api_key = prompt_line("", console=console, stream=stream).strip()
    if not api_key:
        raise CredentialEmptyError()

    console.print("\n🔍 Testing connection to OpenAI...")
    validate_api_key(api_key, client_factory)
    console.print("[green]✅ Connection successful! API key is valid.[/green]\n")

    # Another entry point may have written the file while we were prompting.
    current = store.read()
    if current == api_key:
        console.print(f"[green]✅ API key already saved to {escape(str(store.env_path))}[/green]\n")
        mirror_api_key(bridge, api_key, storage_key)
        return api_key
    if current and is_valid_api_key(current, client_factory):
        # Whoever wrote it got it from the host or mirrored it there.
        console.print("[green]✅ Another process has already configured a valid API key.[/green]\n")
        return current

    try:
        store.write(api_key)
    except OSError as e:
        logger.warning("Could not write credential file", path=str(store.env_path), error=str(e))
        current = store.read()
        if current and is_valid_api_key(current, client_factory):
            console.print("[green]✅ Another process has already configured a valid API key.[/green]\n")
            return current
        console.print("[yellow]⚠️  Warning: Could not write to file, but continuing...[/yellow]\n")
        return api_key

    console.print(f"[green]✅ API key saved to {escape(str(store.env_path))}[/green]")
    console.print('[yellow]⚠️  Make sure to add "env/" to your .gitignore file![/yellow]\n')

    mirror_api_key(bridge, api_key, storage_key)
    return api_key

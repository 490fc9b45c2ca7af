"""
AI Tutorial Runner
==================

Setup and runner commands for an AI tutorial sandbox: save an OpenAI API key,
relay it to an embedding browser host, wait for a generated config naming a
tutorial script, and run that script once the user presses Enter.

Main Components:
- TutorialRunner: install, wait for config, confirm, execute
- CredentialStore: the env/.env key file
- ApiKeyListener: keeps the key in step with an embedding browser host
- setup_api_key: interactive key entry and validation

Quick Start:
    >>> import asyncio
    >>> from ai_tutorial_runner import TutorialRunner
    >>> from ai_tutorial_runner.runner import RUN
    >>>
    >>> exit_code = asyncio.run(TutorialRunner(RUN).run())
"""

__version__ = "1.0.0"
__author__ = "AI Tutorial Team"

# Lazy imports for better performance
_LAZY_IMPORTS = {
    "TutorialRunner": ("ai_tutorial_runner.runner.machine", "TutorialRunner"),
    "RunnerVariant": ("ai_tutorial_runner.runner.machine", "RunnerVariant"),
    "CredentialStore": ("ai_tutorial_runner.bridge.store", "CredentialStore"),
    "ApiKeyListener": ("ai_tutorial_runner.bridge.listener", "ApiKeyListener"),
    "HostBridge": ("ai_tutorial_runner.bridge.host", "HostBridge"),
    "setup_api_key": ("ai_tutorial_runner.bridge.setup_env", "setup_api_key"),
    "Config": ("ai_tutorial_runner.core.config", "Config"),
}


def __getattr__(name: str):
    """Lazy import mechanism for main components."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        from importlib import import_module
        module = import_module(module_path)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "TutorialRunner",
    "RunnerVariant",
    "CredentialStore",
    "ApiKeyListener",
    "HostBridge",
    "setup_api_key",
    "Config",
    "__version__",
]

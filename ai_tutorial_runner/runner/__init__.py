"""Tutorial runner pipeline - watch, parse, prompt, execute."""

from ai_tutorial_runner.runner.executor import run_script
from ai_tutorial_runner.runner.machine import (
    RUN,
    RUN_ONCE,
    START,
    VARIANTS,
    RunnerState,
    RunnerVariant,
    TutorialRunner,
)
from ai_tutorial_runner.runner.parser import RunConfig, read_file_path, read_run_config
from ai_tutorial_runner.runner.prompt import InputSession, prompt_line, wait_for_key
from ai_tutorial_runner.runner.watcher import wait_for_file

__all__ = [
    "TutorialRunner",
    "RunnerState",
    "RunnerVariant",
    "RUN",
    "RUN_ONCE",
    "START",
    "VARIANTS",
    "RunConfig",
    "read_file_path",
    "read_run_config",
    "InputSession",
    "prompt_line",
    "wait_for_key",
    "wait_for_file",
    "run_script",
]

"""Bundled tutorial examples."""

from ai_tutorial_runner.tutorial.hello_world import say_hello

__all__ = [
    "say_hello",
]

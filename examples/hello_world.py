"""
Hello World Tutorial
====================

Loads the API key saved by `ai-tutorial setup-env` from env/.env and asks
the model for a three word greeting.

Usage:
    python examples/hello_world.py

Or point the runner at it:
    echo "file=examples/hello_world.py" > env/run.conf
    ai-tutorial run
"""

from ai_tutorial_runner.tutorial.hello_world import say_hello


if __name__ == "__main__":
    print(say_hello())

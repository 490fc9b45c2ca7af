import sys

import pytest

from ai_tutorial_runner.core.exceptions import ExecutionFailed
from ai_tutorial_runner.runner.executor import build_command, run_command, run_script


def test_build_command_defaults_to_current_python() -> None:
    assert build_command("demo.py") == [sys.executable, "demo.py"]


def test_build_command_uses_interpreter_prefix() -> None:
    assert build_command("demo.ts", ["npx", "tsx"]) == ["npx", "tsx", "demo.ts"]


def test_run_script_executes_child(tmp_path) -> None:
    marker = tmp_path / "ran.txt"
    script = tmp_path / "lesson.py"
    script.write_text(f"open({str(marker)!r}, 'w').write('ok')\n")

    run_script(str(script), [sys.executable])

    assert marker.read_text() == "ok"


def test_non_zero_exit_raises_execution_failed(tmp_path) -> None:
    script = tmp_path / "broken.py"
    script.write_text("import sys\nsys.exit(3)\n")

    with pytest.raises(ExecutionFailed) as excinfo:
        run_script(str(script), [sys.executable])

    assert excinfo.value.returncode == 3
    assert "exit code 3" in str(excinfo.value)


def test_missing_interpreter_raises_execution_failed(tmp_path) -> None:
    with pytest.raises(ExecutionFailed) as excinfo:
        run_command([str(tmp_path / "no-such-interpreter"), "x.py"])

    assert excinfo.value.returncode is None
    assert excinfo.value.reason

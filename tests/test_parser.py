import pytest

from ai_tutorial_runner.core.exceptions import ConfigError
from ai_tutorial_runner.runner.parser import RunConfig, read_file_path, read_run_config


def test_reads_single_directive(tmp_path) -> None:
    conf = tmp_path / "run.conf"
    conf.write_text("file=examples/demo.py\n")

    assert read_file_path(conf) == "examples/demo.py"


def test_directive_found_among_other_lines_and_whitespace(tmp_path) -> None:
    conf = tmp_path / "run.conf"
    conf.write_text("# generated\nmode=tutorial\n\n   file=  lessons/02_chat.py   \ntitle=Chat\n")

    assert read_file_path(conf) == "lessons/02_chat.py"


def test_first_directive_wins(tmp_path) -> None:
    conf = tmp_path / "run.conf"
    conf.write_text("file=first.py\nfile=second.py\n")

    assert read_file_path(conf) == "first.py"


def test_handles_crlf_line_endings(tmp_path) -> None:
    conf = tmp_path / "run.conf"
    conf.write_bytes(b"title=x\r\nfile=win.py\r\n")

    assert read_file_path(conf) == "win.py"


def test_missing_directive_is_config_error(tmp_path) -> None:
    conf = tmp_path / "run.conf"
    conf.write_text("title=Chat\nmode=tutorial\n")

    with pytest.raises(ConfigError, match="No file parameter found"):
        read_file_path(conf)


def test_empty_directive_is_config_error(tmp_path) -> None:
    conf = tmp_path / "run.conf"
    conf.write_text("file=\n")

    with pytest.raises(ConfigError):
        read_file_path(conf)


def test_missing_file_is_wrapped_as_config_error(tmp_path) -> None:
    with pytest.raises(ConfigError, match="Failed to read config file") as excinfo:
        read_file_path(tmp_path / "nope.conf")

    assert excinfo.value.path.endswith("nope.conf")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_read_run_config_returns_model(tmp_path) -> None:
    conf = tmp_path / "run.conf"
    conf.write_text("file=a.py\n")

    assert read_run_config(conf) == RunConfig(file_path="a.py")

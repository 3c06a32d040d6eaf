"""Tests for main.py CLI functionality."""

import logging
from unittest.mock import patch

import pytest

from decaes_runner.core.exceptions import ToolNotFound
from decaes_runner.core.logging_config import get_logger
from decaes_runner.main import EXIT_TOOL_NOT_FOUND, EXIT_USAGE, build_parser, main


class TestMainCLI:
    """Tests for the main CLI functionality."""

    def test_main_with_no_args_shows_help(self):
        with patch("argparse.ArgumentParser.print_help") as mock_help:
            with patch("sys.exit") as mock_exit:
                main([])
                mock_help.assert_called_once()
                mock_exit.assert_called_once_with(1)

    def test_main_version_command(self):
        with patch("builtins.print") as mock_print:
            with pytest.raises(SystemExit) as excinfo:
                main(["version"])
        assert excinfo.value.code == 0
        mock_print.assert_any_call("DECAES runner CLI")
        mock_print.assert_any_call("Version 0.1.0")

    def test_parser_forwards_trailing_flags(self):
        args = build_parser().parse_args(
            ["run", "4", "image.nii.gz", "--T2map", "--TE", "7e-3", "--T2Range", "10e-3", "2.0"]
        )
        assert args.nthreads == "4"
        assert args.args == ["image.nii.gz", "--T2map", "--TE", "7e-3", "--T2Range", "10e-3", "2.0"]
        assert args.dry_run is False
        assert args.julia is None

    def test_parser_options_before_thread_count(self):
        args = build_parser().parse_args(
            ["run", "--julia", "/opt/julia", "--dry-run", "2", "@settings.txt"]
        )
        assert args.julia == "/opt/julia"
        assert args.dry_run is True
        assert args.args == ["@settings.txt"]

    def test_run_exits_with_child_status(self):
        with patch("decaes_runner.main.run_decaes", return_value=3) as mock_run:
            with pytest.raises(SystemExit) as excinfo:
                main(["run", "4", "image.nii.gz", "--T2map"])
        assert excinfo.value.code == 3
        call = mock_run.call_args
        assert call.args == ("4", "image.nii.gz", "--T2map")
        assert call.kwargs["return_status"] is True

    def test_run_passes_julia_override(self):
        with patch("decaes_runner.main.run_decaes", return_value=0) as mock_run:
            with pytest.raises(SystemExit):
                main(["run", "--julia", "/opt/julia/bin/julia", "1", "image.nii.gz"])
        assert mock_run.call_args.kwargs["config"].julia_binary == "/opt/julia/bin/julia"

    def test_dry_run_prints_command(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("DECAES_TEMP_DIR", str(tmp_path))
        with pytest.raises(SystemExit) as excinfo:
            main(["run", "--dry-run", "4", "image.nii.gz", "--T2map"])
        assert excinfo.value.code == 0
        out = capsys.readouterr().out
        line = next(l for l in out.splitlines() if l.startswith("JULIA_NUM_THREADS=4 "))
        assert "--startup-file=no -O3" in line
        assert line.endswith("image.nii.gz --T2map")
        assert list(tmp_path.iterdir()) == []

    def test_dry_run_writes_nothing_and_launches_nothing(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("DECAES_TEMP_DIR", str(tmp_path))
        with patch("decaes_runner.core.runner.subprocess.call") as mock_call:
            with patch("decaes_runner.core.bootstrap.tempfile.mkstemp") as mock_mkstemp:
                with pytest.raises(SystemExit) as excinfo:
                    main(["run", "--dry-run", "4", "image.nii.gz"])
        assert excinfo.value.code == 0
        mock_call.assert_not_called()
        mock_mkstemp.assert_not_called()

    def test_invalid_thread_count_exit_code(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["run", "--dry-run", "abc", "image.nii.gz"])
        assert excinfo.value.code == EXIT_USAGE

    def test_missing_input_exit_code(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["run", "--dry-run", "4"])
        assert excinfo.value.code == EXIT_USAGE

    def test_tool_not_found_exit_code(self):
        with patch("decaes_runner.main.run_decaes", side_effect=ToolNotFound("julia")):
            with pytest.raises(SystemExit) as excinfo:
                main(["run", "4", "image.nii.gz"])
        assert excinfo.value.code == EXIT_TOOL_NOT_FOUND

    def test_keyboard_interrupt(self):
        with patch("decaes_runner.main.run_decaes", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as excinfo:
                main(["run", "4", "image.nii.gz"])
        assert excinfo.value.code == 130


class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)

    @property
    def messages(self):
        return [record.getMessage() for record in self.records]


@pytest.fixture
def runner_log(monkeypatch, tmp_path):
    """Record what the runner logger lets through, restoring its level afterwards."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("DECAES_TEMP_DIR", str(tmp_path))
    runner_logger = get_logger()
    original_level = runner_logger.level
    runner_logger.setLevel(logging.INFO)
    handler = _RecordingHandler()
    runner_logger.addHandler(handler)
    yield handler
    runner_logger.removeHandler(handler)
    runner_logger.setLevel(original_level)


class TestDebugLogging:
    """Tests for the --debug flag."""

    def test_debug_logs_command(self, runner_log):
        with patch("decaes_runner.core.runner.subprocess.call", return_value=0):
            with pytest.raises(SystemExit) as excinfo:
                main(["run", "--debug", "4", "image.nii.gz", "--T2map"])
        assert excinfo.value.code == 0
        commands = [m for m in runner_log.messages if m.startswith("Command: ")]
        assert len(commands) == 1
        assert commands[0].endswith("image.nii.gz --T2map")
        assert any(m.startswith("Wrote bootstrap script") for m in runner_log.messages)

    def test_without_debug_command_is_not_logged(self, runner_log):
        with patch("decaes_runner.core.runner.subprocess.call", return_value=0):
            with pytest.raises(SystemExit):
                main(["run", "4", "image.nii.gz", "--T2map"])
        assert not any(m.startswith("Command: ") for m in runner_log.messages)
        assert "DECAES finished" in runner_log.messages

    def test_dry_run_does_not_report_finished(self, runner_log, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["run", "--debug", "--dry-run", "4", "image.nii.gz"])
        assert excinfo.value.code == 0
        assert "DECAES finished" not in runner_log.messages
        assert any("DECAES not started" in m for m in runner_log.messages)
        assert capsys.readouterr().out.strip().endswith("image.nii.gz")

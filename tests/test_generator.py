"""Tests for the external generator adapter."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from postflow.config import GeneratorConfig
from postflow.errors import GeneratorError
from postflow.generator import Generator, visible_items


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


class TestCommands:
    def test_build_command(self):
        gen = Generator(GeneratorConfig())
        assert gen.build_command() == ["hugo", "--minify"]

    def test_preview_adds_draft_flag(self):
        gen = Generator(GeneratorConfig())
        assert gen.build_command(preview=True) == ["hugo", "--minify", "--buildDrafts"]

    def test_serve_always_includes_drafts(self):
        gen = Generator(GeneratorConfig())
        assert gen.serve_command() == ["hugo", "server", "--buildDrafts"]

    def test_custom_generator(self):
        cfg = GeneratorConfig(command="zola", build_args=["build"], preview_args=["--drafts"])
        assert Generator(cfg).build_command(preview=True) == ["zola", "build", "--drafts"]

    def test_visible_items_is_exported(self):
        assert visible_items([]) == []


class TestBuild:
    @patch("postflow.generator.subprocess.run")
    def test_success_returns_stdout(self, mock_run: MagicMock, tmp_path: Path):
        mock_run.return_value = _completed(stdout="Total in 42 ms\n")
        output = Generator(GeneratorConfig(timeout=10), site_root=tmp_path).build()

        assert output == "Total in 42 ms"
        args, kwargs = mock_run.call_args
        assert args[0] == ["hugo", "--minify"]
        assert kwargs["cwd"] == tmp_path
        assert kwargs["timeout"] == 10

    @patch("postflow.generator.subprocess.run")
    def test_preview_build(self, mock_run: MagicMock):
        mock_run.return_value = _completed()
        Generator(GeneratorConfig()).build(preview=True)
        assert "--buildDrafts" in mock_run.call_args[0][0]

    @patch("postflow.generator.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_binary(self, _mock_run: MagicMock):
        with pytest.raises(GeneratorError, match="not found"):
            Generator(GeneratorConfig()).build()

    @patch(
        "postflow.generator.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="hugo", timeout=5),
    )
    def test_timeout(self, _mock_run: MagicMock):
        with pytest.raises(GeneratorError, match="timed out after 5s"):
            Generator(GeneratorConfig(timeout=5)).build()

    @patch("postflow.generator.subprocess.run")
    def test_nonzero_exit(self, mock_run: MagicMock):
        mock_run.return_value = _completed(returncode=255, stderr="Error: template missing")
        with pytest.raises(GeneratorError, match="exit 255.*template missing"):
            Generator(GeneratorConfig()).build()


class TestServe:
    @patch("postflow.generator.subprocess.run")
    def test_returns_exit_code(self, mock_run: MagicMock, tmp_path: Path):
        mock_run.return_value = _completed(returncode=0)
        assert Generator(GeneratorConfig(), site_root=tmp_path).serve() == 0
        assert mock_run.call_args[0][0] == ["hugo", "server", "--buildDrafts"]
        assert mock_run.call_args[1]["cwd"] == tmp_path

    @patch("postflow.generator.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_binary(self, _mock_run: MagicMock):
        with pytest.raises(GeneratorError):
            Generator(GeneratorConfig()).serve()

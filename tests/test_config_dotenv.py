from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_async_writer import cli as cli_module
from lib_async_writer import config as writer_config


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> None:
    """Reset shared dotenv state around each test."""

    writer_config._reset_dotenv_state_for_testing()
    yield
    writer_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values that were not already set."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("ASYNC_WRITER_CAPACITY=128\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv("ASYNC_WRITER_CAPACITY", raising=False)

    loaded = writer_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["ASYNC_WRITER_CAPACITY"] == "128"
    assert writer_config.WriterSettings.from_env().capacity == 128

    os.environ.pop("ASYNC_WRITER_CAPACITY", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    (tmp_path / ".env").write_text("ASYNC_WRITER_NEWLINE=crlf\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ASYNC_WRITER_NEWLINE", "lf")

    result = writer_config.enable_dotenv()

    assert result is not None
    assert os.environ["ASYNC_WRITER_NEWLINE"] == "lf"


def test_enable_dotenv_searches_from_explicit_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    project = tmp_path / "project"
    deep = project / "a" / "b"
    deep.mkdir(parents=True)
    env_file = project / ".env"
    env_file.write_text("ASYNC_WRITER_THREAD_NAME=from-dotenv\n")
    monkeypatch.delenv("ASYNC_WRITER_THREAD_NAME", raising=False)

    loaded = writer_config.enable_dotenv(search_from=deep)

    assert loaded == env_file.resolve()
    assert os.environ["ASYNC_WRITER_THREAD_NAME"] == "from-dotenv"
    assert writer_config.enable_dotenv(search_from=tmp_path) == env_file.resolve()

    os.environ.pop("ASYNC_WRITER_THREAD_NAME", None)


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(writer_config, "enable_dotenv", record_enable)
    monkeypatch.delenv(writer_config.DOTENV_ENV_VAR, raising=False)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {writer_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []

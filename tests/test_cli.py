"""
End-to-end tests for the lq-wallet console script.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from loguru import logger
from typer.testing import CliRunner

from lqwallet.cli import app
from lqwallet.session import SessionContext
from lqwallet.version import __version__

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """The shell points loguru at the runner's stderr; drop that sink afterwards."""
    yield
    logger.remove()


@pytest.fixture(autouse=True)
def console_output(context: SessionContext) -> None:
    """Command output goes to the runner's stdout."""
    context.echo = typer.echo


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"lq-wallet {__version__}" in result.stdout


def test_create_address_exit(context: SessionContext, isolated_data_dir: Path) -> None:
    with patch("lqwallet.cli.build_session_context", return_value=context):
        result = runner.invoke(
            app, ["--data-dir", str(isolated_data_dir)], input="create\naddress\nexit\n"
        )

    assert result.exit_code == 0
    out = result.stdout
    assert "Welcome to the Liquid Wallet CLI" in out
    assert "Network initialized: ElementsRegtest" in out
    assert "New wallet created" in out
    assert "Mnemonic (WRITE THIS DOWN AND KEEP IT SAFE): " in out
    assert out.count("Receive address: ") == 2
    assert out.rstrip().endswith("Program exited")
    assert context.store.exists()


def test_end_of_input_exits_cleanly(context: SessionContext) -> None:
    with patch("lqwallet.cli.build_session_context", return_value=context):
        result = runner.invoke(app, [], input="help\n")

    assert result.exit_code == 0
    assert "Available commands:" in result.stdout
    assert "Exiting..." in result.stdout
    assert result.stdout.rstrip().endswith("Program exited")


def test_network_unavailable(context: SessionContext) -> None:
    degraded = SessionContext(context.settings, context.store, None, "invalid policy asset")

    with patch("lqwallet.cli.build_session_context", return_value=degraded):
        result = runner.invoke(app, [], input="balance\ncreate\nq\n")

    assert result.exit_code == 0
    out = result.stdout
    assert "Network unavailable: invalid policy asset - wallet commands are disabled" in out
    assert out.count("Network unavailable: invalid policy asset") == 3
    assert not context.store.exists()


def test_invalid_command_keeps_running(context: SessionContext) -> None:
    with patch("lqwallet.cli.build_session_context", return_value=context):
        result = runner.invoke(app, [], input="nope\nload\nquit\n")

    assert result.exit_code == 0
    assert "Unknown command: nope" in result.stdout
    assert "No existing wallet found. Use 'create' to create a new wallet." in result.stdout


def test_startup_writes_config_template(context: SessionContext, tmp_path: Path) -> None:
    data_dir = tmp_path / "custom"

    with patch("lqwallet.cli.build_session_context", return_value=context):
        result = runner.invoke(app, ["--data-dir", str(data_dir)], input="exit\n")

    assert result.exit_code == 0
    config_path = data_dir / "config.toml"
    assert config_path.exists()
    assert "# Liquid Wallet CLI Configuration" in config_path.read_text()


def test_existing_config_is_kept(context: SessionContext, isolated_data_dir: Path) -> None:
    isolated_data_dir.mkdir(parents=True, exist_ok=True)
    config_path = isolated_data_dir / "config.toml"
    config_path.write_text('[logging]\nlevel = "WARNING"\n')

    with patch("lqwallet.cli.build_session_context", return_value=context):
        result = runner.invoke(app, [], input="exit\n")

    assert result.exit_code == 0
    assert config_path.read_text() == '[logging]\nlevel = "WARNING"\n'

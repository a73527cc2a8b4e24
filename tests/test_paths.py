"""
Tests for data directory path helpers.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from lqwallet.paths import get_config_path, get_default_data_dir, get_mnemonic_path


def test_default_data_dir_is_relative_to_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("LQWALLET_DATA_DIR", raising=False)

    data_dir = get_default_data_dir()

    assert data_dir == Path("wallet_data")
    assert (tmp_path / "wallet_data").is_dir()


def test_default_data_dir_from_env(isolated_data_dir: Path) -> None:
    assert get_default_data_dir() == isolated_data_dir
    assert isolated_data_dir.is_dir()


def test_mnemonic_path(tmp_path: Path) -> None:
    assert get_mnemonic_path(tmp_path) == tmp_path / "mnemonic.txt"
    assert get_mnemonic_path(tmp_path, "other.txt") == tmp_path / "other.txt"
    assert not (tmp_path / "mnemonic.txt").exists()


def test_config_path_does_not_create_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("LQWALLET_DATA_DIR", raising=False)

    assert get_config_path() == Path("wallet_data") / "config.toml"
    assert not (tmp_path / "wallet_data").exists()


def test_config_path_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LQWALLET_CONFIG_FILE", str(tmp_path / "custom.toml"))

    assert get_config_path(tmp_path / "ignored") == tmp_path / "custom.toml"

"""
Path utilities for the wallet data directory.

All wallet files (the mnemonic and the optional config.toml) live in a single
data directory, ``./wallet_data`` by default or ``$LQWALLET_DATA_DIR`` if set.
"""

from __future__ import annotations

import os
from pathlib import Path

from lqwallet.constants import CONFIG_FILE_NAME, DEFAULT_DATA_DIR_NAME, DEFAULT_MNEMONIC_FILE


def get_default_data_dir() -> Path:
    """
    Get the default wallet data directory.

    Returns ./wallet_data (relative to the working directory) or
    $LQWALLET_DATA_DIR if set. Creates the directory if it doesn't exist.
    """
    env_path = os.getenv("LQWALLET_DATA_DIR")
    data_dir = Path(env_path) if env_path else Path(DEFAULT_DATA_DIR_NAME)

    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_mnemonic_path(data_dir: Path | None = None, file_name: str = DEFAULT_MNEMONIC_FILE) -> Path:
    """
    Get the path to the mnemonic file.

    Args:
        data_dir: Optional data directory (defaults to get_default_data_dir())
        file_name: File name inside the data directory

    Returns:
        Path to the mnemonic file (the file itself is not created)
    """
    if data_dir is None:
        data_dir = get_default_data_dir()
    return data_dir / file_name


def get_config_path(data_dir: Path | None = None) -> Path:
    """Get the path to the config file without creating anything."""
    env_path = os.getenv("LQWALLET_CONFIG_FILE")
    if env_path:
        return Path(env_path)

    if data_dir is None:
        env_data_dir = os.getenv("LQWALLET_DATA_DIR")
        data_dir = Path(env_data_dir) if env_data_dir else Path(DEFAULT_DATA_DIR_NAME)
    return data_dir / CONFIG_FILE_NAME

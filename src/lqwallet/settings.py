"""
Unified settings management for the Liquid wallet CLI.

This module provides a centralized configuration system using pydantic-settings
that supports:
1. TOML configuration file (<data_dir>/config.toml)
2. Environment variables
3. CLI arguments (via typer, passed as overrides)

Priority (highest to lowest):
1. CLI arguments
2. Environment variables
3. Config file
4. Default values

Environment Variable Naming:
    - Use uppercase with double underscore for nested settings
    - Examples: NETWORK__ESPLORA_URL, WALLET__MNEMONIC_PASSWORD, LOGGING__LEVEL
    - Maps to TOML sections: NETWORK__ESPLORA_URL -> [network] esplora_url
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lqwallet.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ESPLORA_URL,
    DEFAULT_MNEMONIC_FILE,
    REGTEST_POLICY_ASSET,
    VALID_WORD_COUNTS,
)
from lqwallet.models import LiquidNetwork
from lqwallet.paths import get_config_path, get_default_data_dir, get_mnemonic_path

_ASSET_ID_RE = re.compile(r"^[0-9a-f]{64}$")


def check_asset_id(value: str) -> str:
    """Normalize an asset id to lowercase hex, raising ValueError if malformed."""
    value = value.strip().lower()
    if not _ASSET_ID_RE.match(value):
        raise ValueError(f"Invalid asset id (expected 64 hex characters): {value!r}")
    return value


class NetworkSettings(BaseModel):
    """Liquid network and chain-query client configuration."""

    network: LiquidNetwork = Field(
        default=LiquidNetwork.REGTEST,
        description="Liquid network (liquid, liquidtestnet, regtest)",
    )
    policy_asset: str = Field(
        default=REGTEST_POLICY_ASSET,
        description="Native (policy) asset id, only used for regtest",
    )
    esplora_url: str = Field(
        default=DEFAULT_ESPLORA_URL,
        description="Esplora / waterfalls endpoint URL",
    )
    waterfalls: bool = Field(
        default=True,
        description="Use the waterfalls indexing protocol for scans",
    )
    default_asset: str | None = Field(
        default=None,
        description="Default asset for 'send' (the policy asset when unset)",
    )

    @field_validator("policy_asset", "default_asset")
    @classmethod
    def validate_asset_id(cls, v: str | None) -> str | None:
        return check_asset_id(v) if v is not None else None


class WalletSettings(BaseModel):
    """Wallet configuration."""

    mnemonic_file: str = Field(
        default=DEFAULT_MNEMONIC_FILE,
        description="Mnemonic file name inside the data directory",
    )
    word_count: int = Field(
        default=12,
        description="Number of words for newly created mnemonics",
    )
    mnemonic_password: SecretStr | None = Field(
        default=None,
        description="Password to encrypt the mnemonic file (plaintext when unset)",
    )

    @field_validator("word_count")
    @classmethod
    def validate_word_count(cls, v: int) -> int:
        if v not in VALID_WORD_COUNTS:
            raise ValueError(f"word_count must be one of {VALID_WORD_COUNTS}")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Log level: TRACE, DEBUG, INFO, WARNING, ERROR",
    )


class LiquidWalletSettings(BaseSettings):
    """
    Main settings class.

    Loads configuration from multiple sources with the following priority:
    1. Overrides passed to the constructor (CLI arguments)
    2. Environment variables
    3. TOML config file (<data_dir>/config.toml)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path | None = Field(
        default=None,
        description="Data directory (defaults to ./wallet_data)",
    )

    network: NetworkSettings = Field(default_factory=NetworkSettings)
    wallet: WalletSettings = Field(default_factory=WalletSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources and their priority.

        Priority (highest to lowest):
        1. init_settings (CLI arguments passed to constructor)
        2. env_settings (environment variables with __ delimiter)
        3. toml_settings (config.toml file)
        4. defaults (in field definitions)
        """
        # A data_dir override also moves the config file lookup
        data_dir = None
        if isinstance(init_settings, InitSettingsSource):
            data_dir = init_settings.init_kwargs.get("data_dir")
        toml_source = TomlConfigSettingsSource(
            settings_cls, Path(data_dir) if data_dir is not None else None
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    def get_data_dir(self) -> Path:
        """Get the data directory, using default if not set."""
        if self.data_dir is not None:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            return self.data_dir
        return get_default_data_dir()

    def get_mnemonic_path(self) -> Path:
        return get_mnemonic_path(self.get_data_dir(), self.wallet.mnemonic_file)

    def get_mnemonic_password(self) -> str | None:
        pwd = self.wallet.mnemonic_password
        if pwd is None:
            return None
        return pwd.get_secret_value() or None


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """
    Custom settings source that reads from a TOML config file.

    The config file is expected at $LQWALLET_CONFIG_FILE, or config.toml in
    the given data directory, $LQWALLET_DATA_DIR or ./wallet_data.
    """

    def __init__(
        self, settings_cls: type[BaseSettings], data_dir: Path | None = None
    ) -> None:
        super().__init__(settings_cls)
        self._data_dir = data_dir
        self._config: dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from TOML file."""
        config_path = get_config_path(self._data_dir)

        if not config_path.exists():
            logger.debug(f"Config file not found at {config_path}, using defaults")
            return

        import tomllib

        try:
            with open(config_path, "rb") as f:
                self._config = tomllib.load(f)
            logger.info(f"Loaded config from {config_path}")
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Invalid TOML syntax in config file {config_path}")
            logger.error(f"Error: {e}")
            logger.error("Tip: Make sure section headers like [network] are uncommented")
            sys.exit(1)
        except OSError as e:
            logger.error(f"Failed to read config from {config_path}: {e}")
            sys.exit(1)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        value = self._config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return all config values as a flat dict for pydantic-settings."""
        return self._config


def generate_config_template() -> str:
    """
    Generate a config file template with all settings commented out.

    Users see every available setting with its default and description and
    only uncomment what they want to change.
    """
    lines: list[str] = [
        "# Liquid Wallet CLI Configuration",
        "#",
        "# Settings are commented out by default - uncomment to override.",
        "#",
        "# Priority (highest to lowest):",
        "#   1. CLI arguments",
        "#   2. Environment variables",
        "#   3. This config file",
        "#   4. Built-in defaults",
        "#",
        "# Environment variables use uppercase with double underscore for nesting:",
        "#   NETWORK__ESPLORA_URL=http://127.0.0.1:3102/",
        "#",
        "",
    ]

    def add_section(title: str, model_cls: type[BaseModel], prefix: str) -> None:
        lines.append(f"# {'=' * 60}")
        lines.append(f"# {title}")
        lines.append(f"# {'=' * 60}")
        lines.append(f"[{prefix}]")
        lines.append("")

        for field_name, field_info in model_cls.model_fields.items():
            if field_info.description:
                lines.append(f"# {field_info.description}")

            default = field_info.default
            if isinstance(default, bool):
                value_str = str(default).lower()
            elif isinstance(default, LiquidNetwork):
                value_str = f'"{default.value}"'
            elif isinstance(default, str):
                value_str = f'"{default}"'
            elif default is None:
                lines.append(f"# {field_name} = ")
                lines.append("")
                continue
            else:
                value_str = str(default)

            lines.append(f"# {field_name} = {value_str}")
            lines.append("")

    lines.append("# Data directory for wallet files")
    lines.append("# Defaults to ./wallet_data or $LQWALLET_DATA_DIR")
    lines.append("# data_dir = ")
    lines.append("")

    add_section("Network Settings", NetworkSettings, "network")
    add_section("Wallet Settings", WalletSettings, "wallet")
    add_section("Logging Settings", LoggingSettings, "logging")

    return "\n".join(lines)


def ensure_config_file(data_dir: Path | None = None) -> Path:
    """
    Ensure the config file exists, creating a template if it doesn't.

    Args:
        data_dir: Optional data directory path. Uses default if not provided.

    Returns:
        Path to the config file.
    """
    if data_dir is None:
        data_dir = get_default_data_dir()

    config_path = data_dir / CONFIG_FILE_NAME

    if not config_path.exists():
        logger.info(f"Creating config file template at {config_path}")
        data_dir.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_template())

    return config_path


# Global settings instance (lazy-loaded)
_settings: LiquidWalletSettings | None = None


def get_settings(**overrides: Any) -> LiquidWalletSettings:
    """
    Get the settings instance.

    On first call, loads settings from all sources. Subsequent calls
    return the cached instance unless reset_settings() is called.

    Args:
        **overrides: Optional settings overrides (highest priority)

    Returns:
        LiquidWalletSettings instance
    """
    global _settings
    if _settings is None or overrides:
        _settings = LiquidWalletSettings(**overrides)
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None


__all__ = [
    "LiquidWalletSettings",
    "NetworkSettings",
    "WalletSettings",
    "LoggingSettings",
    "get_settings",
    "reset_settings",
    "generate_config_template",
    "ensure_config_file",
]

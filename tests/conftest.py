"""
Pytest configuration and fixtures for lqwallet tests.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from _lqwallet_test_helpers import TEST_MNEMONIC, FakeNetworkContext, RecordingEcho

from lqwallet.secret_store import SecretStore
from lqwallet.session import SessionContext
from lqwallet.settings import LiquidWalletSettings, reset_settings


@pytest.fixture(autouse=True)
def isolated_data_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point every test at its own data directory and clear the settings cache."""
    data_dir = tmp_path / "wallet_data"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LQWALLET_DATA_DIR", str(data_dir))
    monkeypatch.delenv("LQWALLET_CONFIG_FILE", raising=False)
    reset_settings()
    yield data_dir
    reset_settings()


@pytest.fixture
def test_mnemonic() -> str:
    """Test mnemonic (BIP39 test vector)"""
    return TEST_MNEMONIC


@pytest.fixture
def settings(isolated_data_dir: Path) -> LiquidWalletSettings:
    return LiquidWalletSettings(data_dir=isolated_data_dir)


@pytest.fixture
def fake_network() -> FakeNetworkContext:
    return FakeNetworkContext()


@pytest.fixture
def context(settings: LiquidWalletSettings, fake_network: FakeNetworkContext) -> SessionContext:
    """Session context with a fake network, recorded output and no wallet loaded."""
    store = SecretStore(settings.get_mnemonic_path())
    return SessionContext(settings, store, fake_network, echo=RecordingEcho())


@pytest.fixture
def loaded_context(context: SessionContext, test_mnemonic: str) -> SessionContext:
    """Session context with the test mnemonic saved and opened."""
    context.store.save(test_mnemonic)
    context.open_wallet(test_mnemonic)
    return context

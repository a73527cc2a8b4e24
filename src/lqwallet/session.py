"""
Wallet session and the explicit session context passed to every command.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import typer
from loguru import logger

from lqwallet.network import NetworkContext, init_network
from lqwallet.secret_store import SecretStore
from lqwallet.settings import LiquidWalletSettings

NO_WALLET_MESSAGE = "Please load or create a wallet first (use 'create' or 'load')"


@dataclass(frozen=True)
class WalletSession:
    """Active signer and wallet view. Both are always set together."""

    signer: Any
    wollet: Any
    descriptor: str

    def receive_address(self) -> str:
        return str(self.wollet.address(None).address())


class SessionContext:
    """
    Process-wide state for one interactive run.

    Built once by :func:`build_session_context` and handed to every command
    handler. ``network`` is None when network initialization failed, in which
    case ``network_error`` says why. ``echo`` writes progress lines that must
    reach the console before a command finishes.
    """

    def __init__(
        self,
        settings: LiquidWalletSettings,
        store: SecretStore,
        network: NetworkContext | None,
        network_error: str | None = None,
        echo: Callable[[str], None] = typer.echo,
    ) -> None:
        self.settings = settings
        self.store = store
        self.network = network
        self.network_error = network_error
        self.echo = echo
        self.wallet: WalletSession | None = None

    def default_asset(self) -> str:
        """Asset used by 'send' when none is given."""
        if self.settings.network.default_asset:
            return self.settings.network.default_asset
        if self.network is None:
            raise RuntimeError(self.network_unavailable_message())
        return self.network.policy_asset()

    def network_unavailable_message(self) -> str | None:
        if self.network is not None:
            return None
        reason = f": {self.network_error}" if self.network_error else ""
        return f"Network unavailable{reason}"

    def open_wallet(self, mnemonic: str) -> WalletSession:
        """Derive and activate the wallet for ``mnemonic``."""
        if self.network is None:
            raise RuntimeError(self.network_unavailable_message())
        signer, descriptor, wollet = self.network.derive_wallet(mnemonic)
        self.wallet = WalletSession(signer=signer, wollet=wollet, descriptor=str(descriptor))
        return self.wallet


def build_session_context(settings: LiquidWalletSettings) -> SessionContext:
    """
    Run the startup sequence: data directory, secret store, network.

    A network initialization failure is logged and leaves the context in a
    degraded state instead of aborting startup.
    """
    store = SecretStore(settings.get_mnemonic_path(), settings.get_mnemonic_password())

    network: NetworkContext | None = None
    network_error: str | None = None
    try:
        network = init_network(settings.network)
    except Exception as e:
        network_error = str(e) or type(e).__name__
        logger.error(f"Failed to initialize network: {network_error}")

    return SessionContext(settings, store, network, network_error)

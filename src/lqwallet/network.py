"""
Liquid network selection and the chain-query client.

The network context is built once at startup from the network settings and
shared by every command. Chain queries are blocking calls into ``lwk``; they
are pushed to the event loop's default executor so the command loop only
suspends at these I/O boundaries.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any

from loguru import logger

from lqwallet.constants import SCAN_START_INDEX
from lqwallet.models import LiquidNetwork
from lqwallet.settings import NetworkSettings


class NetworkContext:
    """Selected ``lwk.Network`` plus an ``lwk.EsploraClient`` pointed at it."""

    def __init__(self, network: Any, client: Any, name: str) -> None:
        self.network = network
        self.client = client
        self.name = name

    def tx_builder(self) -> Any:
        return self.network.tx_builder()

    def policy_asset(self) -> str:
        return str(self.network.policy_asset())

    def parse_address(self, address: str) -> Any:
        import lwk

        return lwk.Address(address)

    def derive_wallet(self, mnemonic: str) -> tuple[Any, Any, Any]:
        """
        Derive the signer, descriptor and wallet view for a mnemonic.

        Derivation is deterministic: the same phrase on the same network always
        yields the same descriptor and therefore the same addresses.

        Returns:
            (signer, descriptor, wollet)
        """
        import lwk

        signer = lwk.Signer(lwk.Mnemonic(mnemonic), self.network)
        descriptor = signer.wpkh_slip77_descriptor()
        wollet = lwk.Wollet(self.network, descriptor, datadir=None)
        return signer, descriptor, wollet

    async def full_scan(self, wollet: Any) -> Any | None:
        """Scan the chain for ``wollet`` from the first index. Returns an update or None."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, partial(self.client.full_scan_to_index, wollet, SCAN_START_INDEX)
        )

    async def broadcast(self, tx: Any) -> str:
        """Broadcast a finalized transaction and return its txid."""
        loop = asyncio.get_running_loop()
        txid = await loop.run_in_executor(None, self.client.broadcast, tx)
        return str(txid)

    def __str__(self) -> str:
        return self.name


def create_network(settings: NetworkSettings) -> Any:
    """Build the ``lwk.Network`` for the configured Liquid network."""
    import lwk

    if settings.network == LiquidNetwork.REGTEST:
        return lwk.Network.regtest(settings.policy_asset)
    if settings.network == LiquidNetwork.LIQUID_TESTNET:
        return lwk.Network.testnet()
    if settings.network == LiquidNetwork.LIQUID:
        return lwk.Network.mainnet()
    raise ValueError(f"Unknown network: {settings.network}")


def create_client(settings: NetworkSettings, network: Any) -> Any:
    """Build the chain-query client (waterfalls or plain Esplora)."""
    import lwk

    if settings.waterfalls:
        return lwk.EsploraClient.new_waterfalls(settings.esplora_url, network)
    return lwk.EsploraClient(settings.esplora_url, network)


def init_network(settings: NetworkSettings) -> NetworkContext:
    """
    Initialize the network context.

    Raises:
        Exception: Whatever ``lwk`` raises for an invalid asset id or URL;
            the caller decides how to degrade.
    """
    network = create_network(settings)
    client = create_client(settings, network)
    context = NetworkContext(network, client, str(network))
    logger.debug(
        f"Chain client for {context.name} at {settings.esplora_url} "
        f"(waterfalls={settings.waterfalls})"
    )
    return context

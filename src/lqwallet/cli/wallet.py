"""
Wallet commands: create, load, scan, balance, address, txs.
"""

from __future__ import annotations

from loguru import logger

from lqwallet.cli.registry import PreconditionError, commands
from lqwallet.display import format_balance, format_transactions
from lqwallet.models import CommandOutcome
from lqwallet.secret_store import generate_mnemonic_secure, validate_mnemonic
from lqwallet.network import NetworkContext
from lqwallet.session import NO_WALLET_MESSAGE, SessionContext, WalletSession


def require_network(ctx: SessionContext) -> NetworkContext:
    """Return the network context, or refuse the command if it is unavailable."""
    if ctx.network is None:
        raise PreconditionError(ctx.network_unavailable_message())
    return ctx.network


def require_wallet(ctx: SessionContext) -> tuple[WalletSession, NetworkContext]:
    """Return the active wallet and network, or refuse the command."""
    network = require_network(ctx)
    if ctx.wallet is None:
        raise PreconditionError(NO_WALLET_MESSAGE)
    return ctx.wallet, network


async def refresh_wallet(network: NetworkContext, wallet: WalletSession) -> bool:
    """
    Scan the chain and apply the resulting update to the wallet view.

    Returns:
        True if an update was applied, False if the scan found nothing new
    """
    logger.info("Scanning blockchain...")
    update = await network.full_scan(wallet.wollet)
    if update is None:
        logger.debug("Scan returned no update")
        return False
    wallet.wollet.apply_update(update)
    logger.debug("Scan update applied")
    return True


@commands.command("create", summary="Create a new wallet", action="creating wallet")
async def create_wallet(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    if ctx.store.exists():
        return CommandOutcome.precondition(
            f"A wallet already exists at {ctx.store.path}.",
            "Delete it first to create a new one, or use 'load' to open it.",
        )
    require_network(ctx)

    logger.info("Creating new wallet...")
    mnemonic = generate_mnemonic_secure(ctx.settings.wallet.word_count)
    ctx.store.save(mnemonic)
    wallet = ctx.open_wallet(mnemonic)

    return CommandOutcome.ok(
        "New wallet created",
        f"Mnemonic (WRITE THIS DOWN AND KEEP IT SAFE): {mnemonic}",
        f"Descriptor: {wallet.descriptor}",
        f"Receive address: {wallet.receive_address()}",
    )


@commands.command("load", summary="Load the existing wallet", action="loading wallet")
async def load_wallet(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    if not ctx.store.exists():
        return CommandOutcome.precondition(
            "No existing wallet found. Use 'create' to create a new wallet."
        )
    require_network(ctx)

    mnemonic = ctx.store.load()
    if not validate_mnemonic(mnemonic):
        raise ValueError(f"Mnemonic in {ctx.store.path} has an invalid checksum")
    wallet = ctx.open_wallet(mnemonic)

    return CommandOutcome.ok(
        "Wallet loaded",
        f"Descriptor: {wallet.descriptor}",
        f"Receive address: {wallet.receive_address()}",
    )


@commands.command("scan", summary="Scan the blockchain", action="scanning blockchain")
async def scan(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    wallet, network = require_wallet(ctx)

    applied = await refresh_wallet(network, wallet)
    return CommandOutcome.ok("Update applied" if applied else "No updates")


@commands.command("balance", summary="Show wallet balance", action="getting balance")
async def balance(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    wallet, network = require_wallet(ctx)

    await refresh_wallet(network, wallet)
    return CommandOutcome.ok(*format_balance(wallet.wollet.balance(), network.policy_asset()))


@commands.command("address", summary="Show a receive address", action="getting address")
async def address(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    wallet, _ = require_wallet(ctx)

    return CommandOutcome.ok(f"Receive address: {wallet.receive_address()}")


@commands.command("txs", summary="Show transaction history", action="listing transactions")
async def transactions(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    wallet, network = require_wallet(ctx)

    await refresh_wallet(network, wallet)
    return CommandOutcome.ok(*format_transactions(wallet.wollet.transactions()))

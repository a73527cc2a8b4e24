"""
Transaction commands: send, issue, reissue, burn.

Every command refreshes the wallet view with a chain scan before building,
since a stale view would select spent or missing inputs.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from lqwallet.cli.registry import commands, parse_amount, parse_asset, require_arg
from lqwallet.cli.wallet import refresh_wallet, require_wallet
from lqwallet.constants import ISSUANCE_TOKEN_AMOUNT
from lqwallet.models import CommandOutcome
from lqwallet.network import NetworkContext
from lqwallet.session import SessionContext, WalletSession


async def sign_and_broadcast(network: NetworkContext, wallet: WalletSession, pset: Any) -> str:
    """Sign, finalize and broadcast a PSET. Returns the txid."""
    signed = wallet.signer.sign(pset)
    finalized = wallet.wollet.finalize(signed)
    tx = finalized.finalize()
    txid = await network.broadcast(tx)
    logger.info(f"Broadcast transaction {txid}")
    return txid


@commands.command(
    "send",
    usage="send <receiver> <amount> [asset]",
    summary="Send a transaction",
    action="sending transaction",
)
async def send(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    wallet, network = require_wallet(ctx)

    receiver = require_arg(args, 0, "receiver")
    amount = parse_amount(require_arg(args, 1, "amount"))
    asset = parse_asset(args[2]) if len(args) > 2 else ctx.default_asset()

    await refresh_wallet(network, wallet)

    builder = network.tx_builder()
    builder.add_recipient(network.parse_address(receiver), amount, asset)
    pset = builder.finish(wallet.wollet)

    txid = await sign_and_broadcast(network, wallet, pset)
    return CommandOutcome.ok(f"Transaction broadcast, TXID: {txid}")


@commands.command(
    "issue",
    usage="issue <receiver> <amount>",
    summary="Issue a new asset",
    action="issuing asset",
)
async def issue(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    wallet, network = require_wallet(ctx)

    receiver = require_arg(args, 0, "receiver")
    amount = parse_amount(require_arg(args, 1, "amount"))

    await refresh_wallet(network, wallet)

    # The reissuance token goes back to this wallet
    issuer_address = wallet.wollet.address(None).address()
    builder = network.tx_builder()
    builder.issue_asset(
        amount,
        network.parse_address(receiver),
        ISSUANCE_TOKEN_AMOUNT,
        issuer_address,
        None,
    )
    pset = builder.finish(wallet.wollet)

    asset_id = pset.inputs()[0].issuance_asset()
    logger.info(f"Issued asset ID: {asset_id}")
    # Printed ahead of the broadcast result
    ctx.echo(f"Issued asset ID: {asset_id}")

    txid = await sign_and_broadcast(network, wallet, pset)
    return CommandOutcome.ok(f"Issuance transaction broadcast, TXID: {txid}")


@commands.command(
    "reissue",
    usage="reissue <receiver> <amount> <asset>",
    summary="Reissue an existing asset",
    action="reissuing asset",
)
async def reissue(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    wallet, network = require_wallet(ctx)

    receiver = require_arg(args, 0, "receiver")
    amount = parse_amount(require_arg(args, 1, "amount"))
    asset = parse_asset(require_arg(args, 2, "asset"))

    await refresh_wallet(network, wallet)

    builder = network.tx_builder()
    builder.reissue_asset(asset, amount, network.parse_address(receiver), None)
    pset = builder.finish(wallet.wollet)

    txid = await sign_and_broadcast(network, wallet, pset)
    return CommandOutcome.ok(f"Reissuance transaction broadcast, TXID: {txid}")


@commands.command(
    "burn",
    usage="burn <amount> <asset>",
    summary="Burn an asset",
    action="burning asset",
)
async def burn(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    wallet, network = require_wallet(ctx)

    amount = parse_amount(require_arg(args, 0, "amount"))
    asset = parse_asset(require_arg(args, 1, "asset"))

    await refresh_wallet(network, wallet)

    builder = network.tx_builder()
    builder.add_burn(amount, asset)
    pset = builder.finish(wallet.wollet)

    txid = await sign_and_broadcast(network, wallet, pset)
    return CommandOutcome.ok(f"Burn transaction broadcast, TXID: {txid}")

"""
Console formatting for balances and transaction listings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def format_amount(sats: int) -> str:
    """Format an amount of smallest units as '1,000,000 sats'."""
    return f"{sats:,} sats"


def format_signed_amount(sats: int) -> str:
    return f"{sats:+,}" if sats != 0 else "0"


def format_height(height: int | None) -> str:
    return "unconfirmed" if height is None else str(height)


def format_balance(balance: Mapping[str, int], policy_asset: str | None = None) -> list[str]:
    """
    Format a per-asset balance mapping.

    The policy asset is listed first and labelled; other assets keep the
    order the wallet reported them in.
    """
    if not balance:
        return ["Balance: (empty)"]

    assets = list(balance)
    if policy_asset in balance:
        assets.remove(policy_asset)
        assets.insert(0, policy_asset)

    lines = ["Balance:"]
    for asset in assets:
        label = " (policy asset)" if asset == policy_asset else ""
        lines.append(f"  {asset}: {format_amount(balance[asset])}{label}")
    return lines


def format_transactions(transactions: Iterable[Any]) -> list[str]:
    """
    Format wallet transactions in the order the wallet returns them.

    Each transaction must provide ``txid()``, ``height()``, ``balance()``,
    ``fee()`` and ``type()``.
    """
    txs = list(transactions)
    lines = [f"Transaction history ({len(txs)} transactions):"]
    if not txs:
        lines.append("No transactions")
        return lines

    for index, tx in enumerate(txs, start=1):
        deltas = tx.balance()
        delta_str = (
            ", ".join(f"{asset}: {format_signed_amount(value)}" for asset, value in deltas.items())
            or "none"
        )
        lines.append(f"[{index}] TXID: {tx.txid()}")
        lines.append(f"    Height: {format_height(tx.height())}")
        lines.append(f"    Balance change: {delta_str}")
        lines.append(f"    Fee: {format_amount(tx.fee())}")
        lines.append(f"    Type: {tx.type()}")
        lines.append("-" * 24)
    return lines

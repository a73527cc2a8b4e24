"""
Interactive command registry.

Command modules register their handlers with the ``@commands.command()``
decorator on the shared :data:`commands` registry. The decorator also forms
the error boundary of every handler: a refused precondition becomes a
``PRECONDITION`` outcome, argument errors and anything raised by the wallet
library become a ``FAILED`` outcome, and nothing reaches the command loop.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from functools import wraps

from loguru import logger

from lqwallet.models import CommandOutcome
from lqwallet.session import SessionContext
from lqwallet.settings import check_asset_id

Handler = Callable[[SessionContext, list[str]], Awaitable[CommandOutcome]]


class UsageError(ValueError):
    """Raised by handlers for missing or malformed arguments."""


class PreconditionError(Exception):
    """Raised when a command cannot run in the current session state."""


@dataclass(frozen=True)
class CommandSpec:
    name: str
    handler: Handler
    usage: str
    summary: str
    aliases: tuple[str, ...] = field(default_factory=tuple)


class CommandRegistry:
    """Ordered mapping of command names (and aliases) to handlers."""

    def __init__(self) -> None:
        self._specs: list[CommandSpec] = []
        self._by_name: dict[str, CommandSpec] = {}

    def command(
        self,
        name: str,
        *,
        summary: str,
        usage: str | None = None,
        aliases: tuple[str, ...] = (),
        action: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """
        Register an async handler under ``name`` and ``aliases``.

        Args:
            name: Command name as typed by the user (lowercase)
            summary: One-line description shown by ``help``
            usage: Argument shape, e.g. ``send <receiver> <amount> [asset]``
            aliases: Alternative names
            action: Phrase used in error messages ("sending transaction")
        """
        usage_text = usage or name
        action_text = action or f"running '{name}'"

        def decorator(func: Handler) -> Handler:
            @wraps(func)
            async def guarded(ctx: SessionContext, args: list[str]) -> CommandOutcome:
                try:
                    return await func(ctx, args)
                except PreconditionError as e:
                    return CommandOutcome.precondition(*str(e).splitlines())
                except UsageError as e:
                    return CommandOutcome.failed(str(e), f"Usage: {usage_text}")
                except Exception as e:
                    logger.opt(exception=e).debug(f"'{name}' failed")
                    logger.error(f"Error while {action_text}: {e}")
                    return CommandOutcome.failed(f"Error while {action_text}: {e}")

            spec = CommandSpec(name, guarded, usage_text, summary, aliases)
            for key in (name, *aliases):
                if key in self._by_name:
                    raise ValueError(f"Command already registered: {key}")
                self._by_name[key] = spec
            self._specs.append(spec)
            return guarded

        return decorator

    def get(self, name: str) -> CommandSpec | None:
        return self._by_name.get(name.lower())

    def __iter__(self) -> Iterator[CommandSpec]:
        return iter(self._specs)

    def help_lines(self) -> list[str]:
        width = max((len(spec.usage) for spec in self._specs), default=0)
        lines = ["Available commands:"]
        for spec in self._specs:
            lines.append(f"  {spec.usage:<{width}} - {spec.summary}")
        return lines


commands = CommandRegistry()


# ============================================================================
# Argument helpers
# ============================================================================


def require_arg(args: list[str], index: int, name: str) -> str:
    if index >= len(args) or not args[index]:
        raise UsageError(f"Missing argument: {name}")
    return args[index]


def parse_amount(raw: str) -> int:
    """
    Parse an integer count of smallest units (satoshis).

    Only plain ASCII digits are accepted: no sign, separators or decimals.
    """
    negative = raw.startswith("-")
    digits = raw[1:] if negative else raw
    if not (digits.isascii() and digits.isdigit()):
        raise UsageError(f"Invalid amount {raw!r}: expected an integer number of sats")
    if negative:
        raise UsageError(f"Invalid amount {raw!r}: must not be negative")
    return int(digits)


def parse_asset(raw: str) -> str:
    try:
        return check_asset_id(raw)
    except ValueError as e:
        raise UsageError(str(e)) from e

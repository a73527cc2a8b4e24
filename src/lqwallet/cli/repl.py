"""
Interactive command loop.

Reads one line at a time, routes it to the registered handler and renders the
handler's outcome. Commands run strictly one after another: the next line is
not read until the previous handler, including any chain calls it awaits, has
completed.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Awaitable, Callable

from loguru import logger

# Importing the command modules registers their handlers
from lqwallet.cli import transactions, wallet  # noqa: F401
from lqwallet.cli.registry import CommandRegistry, commands
from lqwallet.models import CommandOutcome
from lqwallet.session import SessionContext

PROMPT = "> "

LineReader = Callable[[], Awaitable[str]]


@commands.command("help", summary="Show this help message")
async def show_help(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    return CommandOutcome.ok(*commands.help_lines())


@commands.command("exit", aliases=("quit", "q"), summary="Exit the program")
async def exit_shell(ctx: SessionContext, args: list[str]) -> CommandOutcome:
    return CommandOutcome.exit("Exiting...")


def parse_command_line(line: str) -> tuple[str, list[str]]:
    """Split a raw line into a lowercase command name and positional arguments."""
    parts = line.split()
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]


class StdinReader:
    """
    Read prompt lines from stdin without blocking the event loop.

    Each read runs on a daemon thread so a pending ``input()`` never keeps
    the process alive after the loop has stopped.
    """

    def __init__(self, prompt: str = PROMPT) -> None:
        self.prompt = prompt

    async def __call__(self) -> str:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def deliver(result: str | None, error: Exception | None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(result or "")

        def read() -> None:
            line: str | None = None
            error: Exception | None = None
            try:
                line = input(self.prompt)
            except Exception as e:
                error = e
            if not loop.is_closed():
                loop.call_soon_threadsafe(deliver, line, error)

        threading.Thread(target=read, name="stdin-reader", daemon=True).start()
        return await future


class CommandDispatcher:
    """Sequential read-dispatch-render loop over a :class:`CommandRegistry`."""

    def __init__(
        self,
        context: SessionContext,
        read_line: LineReader,
        registry: CommandRegistry = commands,
    ) -> None:
        self.context = context
        self.read_line = read_line
        self.registry = registry

    def echo(self, text: str) -> None:
        self.context.echo(text)

    async def dispatch(self, line: str) -> CommandOutcome | None:
        """
        Run the command on ``line``.

        Returns:
            The handler's outcome, or None for an empty line
        """
        name, args = parse_command_line(line)
        if not name:
            return None

        spec = self.registry.get(name)
        if spec is None:
            return CommandOutcome.failed(
                f"Unknown command: {name}", "Type 'help' to see available commands"
            )

        logger.debug(f"Dispatching '{name}' with {len(args)} argument(s)")
        return await spec.handler(self.context, args)

    def render(self, outcome: CommandOutcome) -> None:
        for text in outcome.lines:
            self.echo(text)

    async def run(self) -> None:
        """Process commands until exit or end of input."""
        while True:
            try:
                line = await self.read_line()
            except (EOFError, KeyboardInterrupt):
                self.echo("Exiting...")
                return

            outcome = await self.dispatch(line)
            if outcome is None:
                continue
            self.render(outcome)
            if outcome.should_exit:
                return


async def run_command_loop(context: SessionContext, read_line: LineReader | None = None) -> None:
    """Run the interactive loop on stdin (or the given reader) until exit."""
    dispatcher = CommandDispatcher(context, read_line or StdinReader())
    await dispatcher.run()

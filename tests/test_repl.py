"""
Tests for the interactive command loop.
"""

from __future__ import annotations

import pytest
from _lqwallet_test_helpers import (
    TEST_FAKE_TXID,
    TEST_ISSUED_ASSET,
    TEST_RECEIVER,
    FakeNetworkContext,
    RecordingEcho,
    make_line_reader,
)

from lqwallet.cli.repl import CommandDispatcher, parse_command_line, run_command_loop
from lqwallet.models import OutcomeStatus
from lqwallet.session import NO_WALLET_MESSAGE, SessionContext


def make_dispatcher(
    context: SessionContext, lines: list[str]
) -> tuple[CommandDispatcher, RecordingEcho]:
    echo = RecordingEcho()
    context.echo = echo
    return CommandDispatcher(context, make_line_reader(lines)), echo


class TestParseCommandLine:
    def test_splits_on_whitespace(self) -> None:
        assert parse_command_line("  send   el1qq   100  ") == ("send", ["el1qq", "100"])

    def test_lowercases_command_only(self) -> None:
        assert parse_command_line("BURN 5 ABCD") == ("burn", ["5", "ABCD"])

    def test_empty(self) -> None:
        assert parse_command_line("   ") == ("", [])


class TestDispatch:
    @pytest.mark.asyncio
    async def test_empty_line(self, context: SessionContext) -> None:
        dispatcher, _ = make_dispatcher(context, [])

        assert await dispatcher.dispatch("") is None

    @pytest.mark.asyncio
    async def test_unknown_command(
        self, context: SessionContext, fake_network: FakeNetworkContext
    ) -> None:
        dispatcher, _ = make_dispatcher(context, [])

        outcome = await dispatcher.dispatch("frobnicate now")

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.lines == [
            "Unknown command: frobnicate",
            "Type 'help' to see available commands",
        ]
        assert fake_network.library_calls == 0

    @pytest.mark.asyncio
    async def test_help(self, context: SessionContext) -> None:
        dispatcher, _ = make_dispatcher(context, [])

        outcome = await dispatcher.dispatch("help")

        assert outcome.lines[0] == "Available commands:"
        text = "\n".join(outcome.lines)
        for name in ("create", "load", "scan", "balance", "address", "txs", "send", "burn"):
            assert f"  {name}" in text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("line", ["exit", "quit", "q", "EXIT"])
    async def test_exit_aliases(self, context: SessionContext, line: str) -> None:
        dispatcher, _ = make_dispatcher(context, [])

        outcome = await dispatcher.dispatch(line)

        assert outcome.should_exit
        assert outcome.lines == ["Exiting..."]


class TestRun:
    @pytest.mark.asyncio
    async def test_stops_on_exit(self, context: SessionContext) -> None:
        dispatcher, echo = make_dispatcher(context, ["", "exit", "help"])

        await dispatcher.run()

        assert echo.lines == ["Exiting..."]

    @pytest.mark.asyncio
    async def test_stops_on_eof(self, context: SessionContext) -> None:
        dispatcher, echo = make_dispatcher(context, ["address"])

        await dispatcher.run()

        assert echo.lines == [NO_WALLET_MESSAGE, "Exiting..."]

    @pytest.mark.asyncio
    async def test_errors_do_not_stop_the_loop(
        self, context: SessionContext, fake_network: FakeNetworkContext
    ) -> None:
        fake_network.client.scan_error = ConnectionError("down")
        dispatcher, echo = make_dispatcher(
            context, ["bogus", "create", "scan", "address", "quit"]
        )

        await dispatcher.run()

        assert echo.lines[0] == "Unknown command: bogus"
        assert "New wallet created" in echo.lines
        assert "Error while scanning blockchain: down" in echo.lines
        assert any(line.startswith("Receive address: ") for line in echo.lines)
        assert echo.lines[-1] == "Exiting..."

    @pytest.mark.asyncio
    async def test_create_address_exit_session(self, context: SessionContext) -> None:
        dispatcher, echo = make_dispatcher(context, ["create", "address", "exit"])

        await dispatcher.run()

        assert echo.lines[0] == "New wallet created"
        mnemonic = echo.lines[1].split(": ", 1)[1]
        assert len(mnemonic.split()) == 12
        address_lines = [line for line in echo.lines if line.startswith("Receive address: ")]
        # Once from 'create', once from 'address'; both the same
        assert len(address_lines) == 2
        assert address_lines[0] == address_lines[1]
        assert echo.lines[-1] == "Exiting..."

    @pytest.mark.asyncio
    async def test_run_command_loop_with_reader(self, context: SessionContext) -> None:
        await run_command_loop(context, make_line_reader(["help", "q"]))

        assert context.echo.lines[0] == "Available commands:"
        assert context.echo.lines[-1] == "Exiting..."

    @pytest.mark.asyncio
    async def test_issue_prints_asset_id_before_txid(self, loaded_context: SessionContext) -> None:
        dispatcher, echo = make_dispatcher(loaded_context, [f"issue {TEST_RECEIVER} 100", "q"])

        await dispatcher.run()

        assert echo.lines == [
            f"Issued asset ID: {TEST_ISSUED_ASSET}",
            f"Issuance transaction broadcast, TXID: {TEST_FAKE_TXID}",
            "Exiting...",
        ]

"""
Core data models for the Liquid wallet CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LiquidNetwork(str, Enum):
    LIQUID = "liquid"
    LIQUID_TESTNET = "liquidtestnet"
    REGTEST = "regtest"


class OutcomeStatus(str, Enum):
    OK = "ok"
    PRECONDITION = "precondition"
    FAILED = "failed"
    EXIT = "exit"


@dataclass
class CommandOutcome:
    """Result of running one interactive command.

    Handlers never raise into the command loop; they report what happened
    through this object and the dispatcher renders ``lines`` to the console.
    ``PRECONDITION`` means the command was refused before any wallet or
    network call was made, ``FAILED`` means a call was attempted and failed.
    """

    status: OutcomeStatus
    lines: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, *lines: str) -> CommandOutcome:
        return cls(OutcomeStatus.OK, list(lines))

    @classmethod
    def precondition(cls, *lines: str) -> CommandOutcome:
        return cls(OutcomeStatus.PRECONDITION, list(lines))

    @classmethod
    def failed(cls, *lines: str) -> CommandOutcome:
        return cls(OutcomeStatus.FAILED, list(lines))

    @classmethod
    def exit(cls, *lines: str) -> CommandOutcome:
        return cls(OutcomeStatus.EXIT, list(lines))

    @property
    def should_exit(self) -> bool:
        return self.status == OutcomeStatus.EXIT

# rules/core/status.py
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Union


class StatusTag(StrEnum):
    ONGOING = "Ongoing"
    FINISHED = "Finished"


class Outcome(StrEnum):
    PLAYER1_WON = "Player1Won"
    PLAYER2_WON = "Player2Won"
    DRAW = "Draw"


@dataclass(frozen=True)
class Ongoing:
    is_finished = False
    outcome = None

    def __str__(self) -> str:
        return str(StatusTag.ONGOING)


@dataclass(frozen=True)
class Finished:
    """Terminal status. There is no default outcome."""
    outcome: Outcome
    is_finished = True

    def __post_init__(self):
        # Accept the raw string form read back from storage
        object.__setattr__(self, "outcome", Outcome(self.outcome))

    def __str__(self) -> str:
        return f"Finished({self.outcome})"


GameStatus = Union[Ongoing, Finished]

ONGOING = Ongoing()


def status_from_fields(status: str, outcome: Optional[str]) -> GameStatus:
    """Rebuilds the variant from its persisted (status, outcome) columns."""
    if status == StatusTag.ONGOING:
        if outcome is not None:
            raise ValueError("Ongoing status cannot carry an outcome")
        return ONGOING
    if status == StatusTag.FINISHED:
        if outcome is None:
            raise ValueError("Finished status requires an outcome")
        return Finished(Outcome(outcome))
    raise ValueError(f"Unknown game status: {status!r}")

"""
How a game ends (or that it has not ended yet).

A single tagged value instead of separate winner/draw/stalemate flags: a board can only ever be in one of these states.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.core.exceptions import GameStateError
from src.core.shared_types import TeamType


class OutcomeKind(Enum):
    IN_PROGRESS = auto()
    WIN = auto()  # checkmate
    DRAW = auto()
    STALEMATE = auto()
    TIMEOUT = auto()


# the kinds that carry the winning team
KINDS_WITH_WINNER = (OutcomeKind.WIN, OutcomeKind.TIMEOUT)


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    team: Optional[TeamType] = None

    def __post_init__(self) -> None:
        needs_team = self.kind in KINDS_WITH_WINNER
        if needs_team and self.team is None:
            raise GameStateError(f"Outcome {self.kind.name} requires a winning team.")
        if not needs_team and self.team is not None:
            raise GameStateError(f"Outcome {self.kind.name} does not have a winning team.")

    @classmethod
    def in_progress(cls) -> Self:
        return cls(OutcomeKind.IN_PROGRESS)

    @classmethod
    def win(cls, team: TeamType) -> Self:
        return cls(OutcomeKind.WIN, team)

    @classmethod
    def draw(cls) -> Self:
        return cls(OutcomeKind.DRAW)

    @classmethod
    def stalemate(cls) -> Self:
        return cls(OutcomeKind.STALEMATE)

    @classmethod
    def timeout(cls, winner: TeamType) -> Self:
        return cls(OutcomeKind.TIMEOUT, winner)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS

    @property
    def winning_team(self) -> Optional[TeamType]:
        return self.team

    def message(self) -> Optional[str]:
        """Text shown to the players once the game is over."""
        if self.kind == OutcomeKind.WIN:
            # for the type checker: enforced in __post_init__
            assert self.team is not None
            return f"The winning team is {self.team.display_name}!"
        if self.kind == OutcomeKind.TIMEOUT:
            assert self.team is not None
            return f"Time is up! The winning team is {self.team.display_name}!"
        if self.kind == OutcomeKind.DRAW:
            return "It's a draw!"
        if self.kind == OutcomeKind.STALEMATE:
            return "It's a stalemate!"
        return None

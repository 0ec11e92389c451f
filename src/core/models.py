"""
Boundary layer data model(s).

The rendering layer only ever gets a GameView: a plain read-only summary of the current snapshot.
(Decouples what the screen needs from the Board the Referee owns, so the renderer cannot mutate game state.)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameView easier to read
TeamName = str
TimeUnits = int


@dataclass(frozen=True)
class GameView:
    """What the information panel next to the board shows."""

    current_team: TeamName
    total_turns: int
    captured_count: int
    move_history: tuple[str, ...]
    remaining_time: dict[TeamName, TimeUnits]
    is_check: bool
    promotion_pending: bool
    message: Optional[str]

"""
Type definitions used across layers

Values are the ones the move oracle speaks on the wire, so the same enums are used by the domain and the api models.
"""

from enum import StrEnum


class TeamType(StrEnum):
    OUR = "w"
    OPPONENT = "b"

    @property
    def opponent(self) -> "TeamType":
        return TeamType.OPPONENT if self == TeamType.OUR else TeamType.OUR

    @property
    def direction(self) -> int:
        """Pawns of OUR team walk up the board (increasing y), the OPPONENT walks down."""
        return 1 if self == TeamType.OUR else -1

    @property
    def display_name(self) -> str:
        return "white" if self == TeamType.OUR else "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


# --- the pieces a pawn may turn into, in the order they are offered
PROMOTION_CHOICES: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
)

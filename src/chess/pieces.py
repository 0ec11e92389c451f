"""Defines the chess pieces and the starting layout"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.shared_types import PieceType, TeamType

# a-file to h-file
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# rank of the back row / pawn row for each team
HOME_RANKS: dict[TeamType, tuple[int, int]] = {
    TeamType.OUR: (0, 1),
    TeamType.OPPONENT: (7, 6),
}


@dataclass
class Piece:
    position: Position
    type: PieceType
    team: TeamType
    has_moved: bool = False
    # a pawn that just advanced two squares (may be taken en passant on the next ply)
    en_passant: bool = False
    # squares the oracle reported as reachable when the piece got selected. None: not selected (yet)
    possible_moves: Optional[list[Position]] = None

    @property
    def is_pawn(self) -> bool:
        return self.type == PieceType.PAWN

    def same_position(self, position: Position) -> bool:
        return self.position == position

    def same_piece_position(self, other: "Piece") -> bool:
        return self.position == other.position

    def clone(self) -> Self:
        """Independent copy: nothing mutable is shared with the original."""
        return type(self)(
            position=self.position.clone(),
            type=self.type,
            team=self.team,
            has_moved=self.has_moved,
            en_passant=self.en_passant,
            possible_moves=(
                [move.clone() for move in self.possible_moves]
                if self.possible_moves is not None
                else None
            ),
        )

    def promotion_rank(self) -> int:
        """The last rank, seen from this piece's team."""
        return BOARD_DIMENSIONS[1] - 1 if self.team == TeamType.OUR else 0


def starting_pieces() -> list[Piece]:
    """The 32 pieces of the standard opening position. White (OUR) starts at the bottom (y = 0)."""
    pieces: list[Piece] = []
    for team, (back_rank, pawn_rank) in HOME_RANKS.items():
        for file, piece_type in enumerate(BACK_RANK):
            pieces.append(Piece(Position(file, back_rank), piece_type, team))
        for file in range(BOARD_DIMENSIONS[0]):
            pieces.append(Piece(Position(file, pawn_rank), PieceType.PAWN, team))
    return pieces

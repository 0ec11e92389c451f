"""A completed ply, as recorded in the move history"""

from dataclasses import dataclass

from src.chess.pieces import Piece
from src.chess.position import Position


@dataclass(frozen=True)
class Move:
    """
    History entry. Never mutated after creation.

    NOTE `piece` is a detached copy of the piece right after it moved, so later snapshots cannot change it.
    `ply` is the 0-based ply the move was played on (even: white).
    """

    from_position: Position
    to_position: Position
    piece: Piece
    ply: int = 0

    @property
    def move_number(self) -> int:
        """Full-move number: white's ply and the black reply share one number."""
        return self.ply // 2 + 1

    def to_message(self) -> str:
        """ex) 'Pawn: e2-e4'"""
        piece_name = self.piece.type.value.capitalize()
        return f"{piece_name}: {self.from_position.to_algebraic()}-{self.to_position.to_algebraic()}"

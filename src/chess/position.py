"""
A coordinate on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidPositionError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Position:
    """x is the file (0 = a-file), y the rank (0 = white's back rank)."""

    x: int
    y: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or not sq[0].isalpha() or not sq[1].isdigit():
            raise InvalidPositionError(f"Cannot interpret {sq!r} as a square name.")
        position = cls(ord(sq[0].lower()) - ord("a"), int(sq[1]) - 1)
        if not position.is_within_bounds():
            raise InvalidPositionError(f"Square {sq!r} is not on the board.")
        return position

    def to_algebraic(self) -> str:
        return f"{chr(self.x + ord('a'))}{self.y + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])

    def clone(self) -> Position:
        return Position(self.x, self.y)

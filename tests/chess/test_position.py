"""Unit tests for /src/chess/position.py"""

from string import ascii_lowercase

import pytest

from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.exceptions import InvalidPositionError


@pytest.mark.parametrize(
    "x, y, notation",
    [
        (x, y, f"{ascii_lowercase[x]}{y + 1}")
        for x in range(BOARD_DIMENSIONS[0])
        for y in range(BOARD_DIMENSIONS[1])
    ],
)
def test_creating_from_algebraic(x: int, y: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to (0, 0), etc."""
    position = Position.from_algebraic(notation)
    assert position == Position(x, y)
    assert position.to_algebraic() == notation


@pytest.mark.parametrize("notation", ["", "e", "e22", "44", "ee", "i1", "a9", "a0"])
def test_invalid_algebraic(notation: str) -> None:
    """Anything that is not a square on the board is refused."""
    with pytest.raises(InvalidPositionError):
        Position.from_algebraic(notation)


def test_position_within_bounds() -> None:
    """happy case: every square of the 8x8 grid"""
    for x in range(BOARD_DIMENSIONS[0]):
        for y in range(BOARD_DIMENSIONS[1]):
            assert Position(x, y).is_within_bounds()


@pytest.mark.parametrize("x, y", [(-1, -1), (8, 0), (0, 8), (-1, 3)])
def test_position_out_of_bounds(x: int, y: int) -> None:
    """(-1, -1) is what a drag outside the board produces"""
    assert not Position(x, y).is_within_bounds()


def test_value_equality() -> None:
    assert Position(3, 4) == Position(3, 4)
    assert Position(3, 4) != Position(4, 3)


def test_clone_is_a_new_equal_instance() -> None:
    original = Position(2, 5)
    clone = original.clone()
    assert clone == original
    assert clone is not original


def test_position_is_immutable() -> None:
    position = Position(1, 1)
    with pytest.raises(AttributeError):
        position.x = 5  # type: ignore[misc]

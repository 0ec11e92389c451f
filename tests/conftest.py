"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

import pytest

from src.chess.clock import GameClock
from src.chess.pieces import Piece
from src.chess.referee import Referee
from src.core.shared_types import PieceType, TeamType
from tests.helpers import StubOracle, pos


@pytest.fixture
def stub_oracle() -> StubOracle:
    return StubOracle()


@pytest.fixture
def referee(stub_oracle: StubOracle) -> Referee:
    """Referee on the standard start. No event loop is running here, so the clock only moves on tick()."""
    return Referee(stub_oracle, clock=GameClock(start=600))


@pytest.fixture
def kings_only() -> list[Piece]:
    """Both kings on their canonical starting squares."""
    return [
        Piece(pos("e1"), PieceType.KING, TeamType.OUR),
        Piece(pos("e8"), PieceType.KING, TeamType.OPPONENT),
    ]

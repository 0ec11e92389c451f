"""Test doubles and shorthands shared by the test modules (fixtures live in conftest.py)."""

from typing import Callable, Optional

from src.api.models import AnalyzeMoveRequest, AnalyzeMoveResponse, WirePosition
from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.position import Position

Verdict = Callable[[AnalyzeMoveRequest], AnalyzeMoveResponse]


def accept(**flags: object) -> Verdict:
    """Verdict that accepts any move (extra response fields, e.g. is_checkmate=True, can be passed along)."""

    def _verdict(request: AnalyzeMoveRequest) -> AnalyzeMoveResponse:
        return AnalyzeMoveResponse(
            valid=True,
            possible_moves=[request.to_position],
            from_position=request.from_position,
            to_position=request.to_position,
            **flags,
        )

    return _verdict


def reject(request: AnalyzeMoveRequest) -> AnalyzeMoveResponse:
    return AnalyzeMoveResponse(valid=False, possible_moves=[], error="illegal move")


class StubOracle:
    """Mock the MoveOracle: records every request and answers with a configurable verdict."""

    def __init__(self, verdict: Optional[Verdict] = None) -> None:
        self.verdict: Verdict = verdict or accept()
        self.requests: list[AnalyzeMoveRequest] = []

    async def analyze(self, request: AnalyzeMoveRequest) -> AnalyzeMoveResponse:
        self.requests.append(request)
        return self.verdict(request)


def selected(piece: Piece, *squares: Position) -> Piece:
    """Detached copy of `piece`, as if picked up and the oracle had returned `squares`."""
    copy = piece.clone()
    copy.possible_moves = list(squares)
    return copy


def pos(square: str) -> Position:
    """Shorthand: pos('e2')"""
    return Position.from_algebraic(square)


def wire(square: str) -> WirePosition:
    return WirePosition.from_position(pos(square))


def board_with(*pieces: Piece, total_turns: int = 0) -> Board:
    return Board(pieces=list(pieces), total_turns=total_turns)

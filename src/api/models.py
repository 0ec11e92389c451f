"""Request and Response models exchanged with the move oracle (JSON, camelCase keys)"""

from typing import Annotated, Optional, Self

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.position import Position
from src.core.shared_types import PieceType, TeamType

# What a failed round-trip looks like to the rest of the engine
API_FAILURE_MESSAGE = "API call failed"

# spellings of the white team a verdict may use (compared case-insensitively)
WHITE_TEAM_NAMES = ("w", "white")


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WirePosition(WireModel):
    """Plain coordinate pair. Bounds are only enforced on what we send (see `on_board`)."""

    x: int
    y: int

    @classmethod
    def from_position(cls, position: Position) -> Self:
        return cls(x=position.x, y=position.y)

    def to_position(self) -> Position:
        return Position(self.x, self.y)

    def is_on_board(self) -> bool:
        return self.to_position().is_within_bounds()


def on_board(position: WirePosition) -> WirePosition:
    """Validator for outgoing positions: the oracle is never asked about squares off the board."""
    if not position.is_on_board():
        raise ValueError(f"Position ({position.x}, {position.y}) is not on the board.")
    return position


# outgoing positions: bound to the board
BoardPosition = Annotated[WirePosition, AfterValidator(on_board)]


class WirePiece(WireModel):
    """The piece that is asked about."""

    position: BoardPosition
    type: PieceType
    team: TeamType


class WireBoardPiece(WireModel):
    """One entry of the board state the oracle judges against."""

    position: BoardPosition
    type: PieceType
    team: TeamType
    has_moved: bool

    @classmethod
    def from_piece(cls, piece: Piece) -> Self:
        return cls(
            position=WirePosition.from_position(piece.position),
            type=piece.type,
            team=piece.team,
            has_moved=piece.has_moved,
        )


class VerdictPiece(WireModel):
    """The oracle echoes the piece back as loose strings."""

    type: str
    team: str


# --- REQUEST MODELS ---
class AnalyzeMoveRequest(WireModel):
    from_position: BoardPosition = Field(alias="from")
    to_position: BoardPosition = Field(alias="to")
    piece: WirePiece
    board_state: list[WireBoardPiece]
    total_moves: int

    @classmethod
    def for_move(cls, board: Board, piece: Piece, destination: Position) -> Self:
        """Ask whether `piece` may go to `destination` on `board`."""
        origin = WirePosition.from_position(piece.position)
        return cls(
            from_position=origin,
            to_position=WirePosition.from_position(destination),
            piece=WirePiece(position=origin, type=piece.type, team=piece.team),
            board_state=[WireBoardPiece.from_piece(p) for p in board.pieces],
            total_moves=board.total_turns,
        )

    @classmethod
    def for_selection(cls, board: Board, piece: Piece) -> Self:
        """Selecting a piece: a null move (from == to). Only the possible moves in the answer are of interest."""
        return cls.for_move(board, piece, piece.position)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# --- RESPONSE MODELS ---
class AnalyzeMoveResponse(WireModel):
    valid: bool
    possible_moves: list[WirePosition] = Field(default_factory=list)
    from_position: Optional[WirePosition] = Field(default=None, alias="from")
    to_position: Optional[WirePosition] = Field(default=None, alias="to")
    piece: Optional[VerdictPiece] = None
    is_checkmate: Optional[bool] = None
    is_stalemate: Optional[bool] = None
    is_check: Optional[bool] = None
    winning_team: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, request: AnalyzeMoveRequest) -> Self:
        """Stand-in verdict when the oracle could not be reached or answered garbage: a plain rejection."""
        return cls(
            valid=False,
            possible_moves=[],
            from_position=request.from_position,
            to_position=request.to_position,
            piece=VerdictPiece(type=request.piece.type.value, team=request.piece.team.value),
            error=API_FAILURE_MESSAGE,
        )

    def winner(self) -> Optional[TeamType]:
        """The checkmating side, if the verdict names one."""
        if not (self.is_checkmate and self.winning_team):
            return None
        if self.winning_team.lower() in WHITE_TEAM_NAMES:
            return TeamType.OUR
        return TeamType.OPPONENT

    def reachable_positions(self) -> list[Position]:
        """Reachable squares; entries off the board are dropped."""
        return [move.to_position() for move in self.possible_moves if move.is_on_board()]

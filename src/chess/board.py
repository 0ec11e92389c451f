"""The Game board: one snapshot of the game, and the algorithm that applies an accepted move to it."""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.moves import Move
from src.chess.outcome import Outcome, OutcomeKind
from src.chess.pieces import Piece, starting_pieces
from src.chess.position import Position
from src.core.shared_types import PieceType, TeamType

# a full set: 16 pieces per side
TOTAL_PIECES = 32


@dataclass
class Board:
    """
    Snapshot of the game
    ----

    The Referee never edits a published snapshot: it clones, changes the clone and swaps it in.
    Board itself performs no legality checks. The move oracle already approved anything applied here.
    """

    pieces: list[Piece]
    total_turns: int = 0
    moves: list[Move] = field(default_factory=list)
    outcome: Outcome = field(default_factory=Outcome.in_progress)

    @classmethod
    def initial(cls) -> Self:
        """Standard starting position, nobody has moved yet."""
        return cls(starting_pieces())

    def clone(self) -> Self:
        """
        Independent snapshot:
        * pieces are deep-copied
        * move history is a new list with the same Move objects (those are immutable)
        * the outcome is an immutable value
        """
        return type(self)(
            pieces=[piece.clone() for piece in self.pieces],
            total_turns=self.total_turns,
            moves=list(self.moves),
            outcome=self.outcome,
        )

    # --- TURN / OUTCOME ---
    @property
    def current_team(self) -> TeamType:
        """White (OUR) moves on even plies, black on odd ones."""
        return TeamType.OUR if self.total_turns % 2 == 0 else TeamType.OPPONENT

    @property
    def winning_team(self) -> Optional[TeamType]:
        return self.outcome.winning_team

    @property
    def draw(self) -> bool:
        return self.outcome.kind == OutcomeKind.DRAW

    @property
    def stalemate(self) -> bool:
        return self.outcome.kind == OutcomeKind.STALEMATE

    @property
    def is_terminal(self) -> bool:
        return self.outcome.is_terminal

    @property
    def captured_count(self) -> int:
        return TOTAL_PIECES - len(self.pieces)

    # --- LOOKUPS ---
    def piece_at(self, position: Position) -> Optional[Piece]:
        return next((piece for piece in self.pieces if piece.same_position(position)), None)

    # --- STATE TRANSITIONS ---
    def apply(self, is_en_passant: bool, piece: Piece, destination: Position) -> bool:
        """
        Apply a move the oracle accepted
        -----

        1. find the moving piece by its current position (the caller may hand us a detached copy)
        2. remove whatever stands on the destination square (capture)
        3. relocate the piece and mark it as moved
        4. record the move in the history
        5. en passant: take the pawn that stands behind the destination square

        Returns False (and leaves the board untouched) if no piece stands on the square `piece` claims to be on.
        """
        moving_piece = self.piece_at(piece.position)
        if moving_piece is None:
            return False

        origin = moving_piece.position

        # ordinary capture
        self.pieces = [
            p for p in self.pieces if p is moving_piece or not p.same_position(destination)
        ]

        # Eligibility to be taken en passant only lasts for a single ply
        for p in self.pieces:
            p.en_passant = False

        moving_piece.position = destination.clone()
        moving_piece.has_moved = True
        moving_piece.possible_moves = None
        moving_piece.en_passant = moving_piece.is_pawn and abs(destination.y - origin.y) == 2

        self.moves.append(Move(origin, destination.clone(), moving_piece.clone(), self.total_turns))

        # NOTE en passant: the captured pawn is NOT on the destination square, so step 2 never removes it
        if is_en_passant:
            captured = Position(destination.x, destination.y - moving_piece.team.direction)
            self.pieces = [p for p in self.pieces if not p.same_position(captured)]

        return True

    def promote(self, position: Position, piece_type: PieceType) -> bool:
        """Replace the piece standing on `position` by a new piece of `piece_type` of the same team."""
        pawn = self.piece_at(position)
        if pawn is None:
            return False
        promoted = Piece(position.clone(), piece_type, pawn.team, has_moved=True)
        self.pieces = [promoted if p is pawn else p for p in self.pieces]
        return True

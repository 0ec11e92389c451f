"""
The Referee is the entrypoint into the domain layer for the input surface (drag / drop of pieces).
It is responsible for orchestrating a ply: turn order, the round-trip to the move oracle, applying the verdict to a
new Board snapshot, promotion, the end-of-game check and the two clocks.

Every failure of a move resolves to False at the play_move boundary; nothing is raised past it.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional, Self

from src.api.models import AnalyzeMoveRequest, AnalyzeMoveResponse
from src.chess.board import Board
from src.chess.clock import GameClock
from src.chess.outcome import Outcome
from src.chess.pieces import Piece
from src.chess.position import Position
from src.core.config import Settings
from src.core.exceptions import PromotionError
from src.core.models import GameView
from src.core.shared_types import PROMOTION_CHOICES, PieceType, TeamType
from src.oracle.http_oracle import HttpMoveOracle
from src.oracle.oracle import MoveOracle

logger = logging.getLogger(__name__)

BoardCallback = Callable[[Board], None]
PromotionCallback = Callable[[Piece], None]  # the pawn, already on its promotion square
GameOverCallback = Callable[[str], None]  # message to show


class RefereeState(Enum):
    AWAITING_MOVE = auto()
    AWAITING_ORACLE = auto()
    PENDING_PROMOTION = auto()
    TERMINAL = auto()


@dataclass
class RefereeEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_board_changed: list[BoardCallback] = field(default_factory=list)
    on_promotion: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


class Referee:
    """Owns the current Board snapshot. Snapshots are replaced as a whole, never edited once published."""

    def __init__(
        self,
        oracle: MoveOracle,
        clock: Optional[GameClock] = None,
        settings: Optional[Settings] = None,
        starting_board: Optional[Board] = None,
    ) -> None:
        """`starting_board`: resume from a given position instead of the standard start."""
        settings = settings or Settings()
        self.oracle = oracle
        self.clock = clock or GameClock(settings.clock_start, settings.clock_interval)
        self.clock.on_timeout = self.handle_timeout
        self.events = RefereeEvents()

        self._board = starting_board or Board.initial()
        self._state = RefereeState.AWAITING_MOVE
        self._promotion_pawn: Optional[Piece] = None
        self._message: Optional[str] = None
        self._is_check = False
        # bumped for every dispatched move: only the latest request may commit a snapshot
        self._request_token = 0

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> Self:
        """Referee talking to the HTTP oracle configured in `settings` (default: environment)."""
        settings = settings or Settings.from_env()
        return cls(HttpMoveOracle.from_settings(settings), settings=settings)

    # --- READ-ONLY STATE ---
    @property
    def board(self) -> Board:
        """The current snapshot. Treat as read-only."""
        return self._board

    @property
    def state(self) -> RefereeState:
        return self._state

    @property
    def promotion_pawn(self) -> Optional[Piece]:
        return self._promotion_pawn

    @property
    def message(self) -> Optional[str]:
        return self._message

    @property
    def is_check(self) -> bool:
        return self._is_check

    def view(self) -> GameView:
        """Summary for the information panel."""
        board = self._board
        return GameView(
            current_team=board.current_team.display_name,
            total_turns=board.total_turns,
            captured_count=board.captured_count,
            move_history=tuple(f"{move.move_number}. {move.to_message()}" for move in board.moves),
            remaining_time={team.display_name: self.clock.remaining(team) for team in TeamType},
            is_check=self._is_check,
            promotion_pending=self._state == RefereeState.PENDING_PROMOTION,
            message=self._message,
        )

    # --- GAME FLOW ---
    def start(self) -> None:
        """Start the clock of the side to move."""
        self._sync_clock()

    def restart_game(self) -> None:
        """Fresh board, fresh clocks. Any move still waiting on the oracle is abandoned."""
        self._request_token += 1
        self._state = RefereeState.AWAITING_MOVE
        self._promotion_pawn = None
        self._message = None
        self._is_check = False
        self.clock.reset()
        self._commit(Board.initial())
        self._sync_clock()
        logger.info("New game started")

    async def select_piece(self, position: Position) -> Optional[Piece]:
        """
        A piece got picked up
        ----

        Returns a detached copy of the piece with the squares it can reach (as reported by the oracle), or None if the
        square is empty. The snapshot itself is not touched.
        """
        piece = self._board.piece_at(position)
        if piece is None:
            return None

        verdict = await self._consult_oracle(AnalyzeMoveRequest.for_selection(self._board, piece))
        selected = piece.clone()
        selected.possible_moves = verdict.reachable_positions()
        return selected

    async def play_move(self, piece: Piece, destination: Position) -> bool:
        """
        Attempt to play `piece` to `destination`
        -----

        1. reject without asking the oracle: piece never selected, game over / promotion pending, wrong side, off board
        2. ask the oracle. A rejection (or failed call) leaves the snapshot as it is.
        3. apply the move on a clone, advance the ply counter, take the outcome flags from the verdict
        4. promotion if a pawn reached its last rank (the end-of-game check then waits for the choice), otherwise
           the end-of-game check; switch clocks

        Returns the result of applying the move locally, so the caller can put the piece back when it is False.
        """
        if piece.possible_moves is None:
            return False

        if self._state in (RefereeState.TERMINAL, RefereeState.PENDING_PROMOTION):
            logger.debug("Move rejected: game is in state %s", self._state.name)
            return False

        if piece.team != self._board.current_team:
            logger.debug("Move rejected: it is not %s's turn", piece.team.display_name)
            return False

        if not destination.is_within_bounds():
            return False

        self._request_token += 1
        token = self._request_token
        request = AnalyzeMoveRequest.for_move(self._board, piece, destination)
        self._state = RefereeState.AWAITING_ORACLE

        verdict = await self._consult_oracle(request)

        # another move was dispatched (or the game restarted) in the meantime
        if token != self._request_token:
            logger.debug("Discarding stale oracle response for request %d", token)
            return False

        # the clock may have ended the game while we were waiting
        if self._state == RefereeState.TERMINAL:
            return False

        self._state = RefereeState.AWAITING_MOVE
        if not verdict.valid:
            logger.debug("Oracle rejected the move: %s", verdict.error or "illegal move")
            return False

        return self._apply_verdict(verdict, piece, destination)

    def is_en_passant_move(
        self, origin: Position, destination: Position, piece_type: PieceType, team: TeamType
    ) -> bool:
        """
        A pawn moving one square diagonally forward, with an en passant eligible pawn right behind the destination.
        (No oracle involved.)
        """
        if piece_type != PieceType.PAWN:
            return False

        files_moved = destination.x - origin.x
        ranks_moved = destination.y - origin.y
        if abs(files_moved) != 1 or ranks_moved != team.direction:
            return False

        behind = Position(destination.x, destination.y - team.direction)
        captured = self._board.piece_at(behind)
        return captured is not None and captured.is_pawn and captured.en_passant

    def promote_pawn(self, piece_type: PieceType) -> None:
        """Turn the pawn that reached the last rank into `piece_type`. A purely local edit: no oracle round-trip."""
        if self._state != RefereeState.PENDING_PROMOTION or self._promotion_pawn is None:
            raise PromotionError("There is no pawn waiting for promotion.")

        if piece_type not in PROMOTION_CHOICES:
            raise PromotionError(
                f"Cannot promote to {piece_type}. Pick one from {','.join(PROMOTION_CHOICES)}"
            )

        board = self._board.clone()
        board.promote(self._promotion_pawn.position, piece_type)
        logger.info("Pawn on %s promoted to %s", self._promotion_pawn.position.to_algebraic(), piece_type)

        self._promotion_pawn = None
        self._state = RefereeState.AWAITING_MOVE
        self._commit(board)
        self.check_for_end_game(board)
        self._sync_clock()

    def declare_draw(self) -> None:
        """Both players agreed to a draw."""
        if self._board.is_terminal:
            return
        self._end_game(Outcome.draw())

    def handle_timeout(self, team: TeamType) -> None:
        """Clock callback: `team` ran out of time, the other team wins."""
        if self._board.is_terminal:
            return
        self._end_game(Outcome.timeout(team.opponent))

    def check_for_end_game(self, board: Board) -> Optional[str]:
        """If the snapshot's outcome ends the game: stop the clock, go to TERMINAL and surface the message."""
        message = board.outcome.message()
        if message is None:
            return None

        self._state = RefereeState.TERMINAL
        self._promotion_pawn = None
        self._message = message
        self.clock.stop()
        logger.info("Game over: %s", message)
        for callback in self.events.on_game_over:
            callback(message)
        return message

    # -- PRIVATE HELPERS ---
    def _apply_verdict(self, verdict: AnalyzeMoveResponse, piece: Piece, destination: Position) -> bool:
        """The oracle accepted the move: commit a new snapshot with the move played."""
        is_en_passant = self.is_en_passant_move(piece.position, destination, piece.type, piece.team)

        board = self._board.clone()
        played_move_is_valid = board.apply(is_en_passant, piece, destination)
        # NOTE the ply counts even if the piece could not be found locally
        board.total_turns += 1
        board.outcome = self._outcome_from_verdict(verdict)
        self._is_check = bool(verdict.is_check)

        if played_move_is_valid:
            logger.info("Ply %d: %s", board.total_turns, board.moves[-1].to_message())
        else:
            logger.warning(
                "Oracle accepted a move, but no piece stands on %s", piece.position.to_algebraic()
            )

        self._commit(board)

        # a promoting (possibly mating) move is only complete once the piece is chosen: the end-of-game check waits
        if played_move_is_valid and piece.is_pawn and destination.y == piece.promotion_rank():
            self._begin_promotion(board, destination)
        else:
            self.check_for_end_game(board)

        self._sync_clock()
        return played_move_is_valid

    def _begin_promotion(self, board: Board, destination: Position) -> None:
        pawn = board.piece_at(destination)
        # for the type checker: the move was just applied onto this square
        assert pawn is not None
        self._promotion_pawn = pawn.clone()
        self._state = RefereeState.PENDING_PROMOTION
        for callback in self.events.on_promotion:
            callback(self._promotion_pawn)

    @staticmethod
    def _outcome_from_verdict(verdict: AnalyzeMoveResponse) -> Outcome:
        """The verdict is the only source of truth for checkmate / stalemate."""
        winner = verdict.winner()
        if winner is not None:
            return Outcome.win(winner)
        if verdict.is_stalemate:
            return Outcome.stalemate()
        return Outcome.in_progress()

    def _end_game(self, outcome: Outcome) -> None:
        """End the game without a move (timeout, agreed draw)."""
        board = self._board.clone()
        board.outcome = outcome
        self._commit(board)
        self.check_for_end_game(board)

    def _commit(self, board: Board) -> None:
        self._board = board
        for callback in self.events.on_board_changed:
            callback(board)

    def _sync_clock(self) -> None:
        """
        Exactly one side is ticking, and nobody once the game is over:
        the side to move, or the side still picking its promotion piece.
        """
        if self._board.is_terminal:
            self.clock.stop()
            return
        if self._state == RefereeState.PENDING_PROMOTION and self._promotion_pawn is not None:
            team = self._promotion_pawn.team
        else:
            team = self._board.current_team
        if self.clock.active_team != team:
            self.clock.start(team)

    async def _consult_oracle(self, request: AnalyzeMoveRequest) -> AnalyzeMoveResponse:
        """Whatever goes wrong inside the oracle, the caller gets a plain rejection."""
        try:
            return await self.oracle.analyze(request)
        except Exception:
            logger.warning("Oracle raised, treating the move as rejected", exc_info=True)
            return AnalyzeMoveResponse.failed(request)

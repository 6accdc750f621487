from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board, IllegalMoveError, MoveOutcome
from .move import Move
from .piece import Color


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: track board state and turn order, expose legal moves,
    apply and undo moves, and keep a log of captures and promotions.
    """

    board: Board
    move_stack: List[Tuple[Move, MoveOutcome]] = field(default_factory=list)
    events: List[str] = field(default_factory=list)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(board=Board.from_fen(fen))

    def to_fen(self) -> str:
        return self.board.to_fen()

    @property
    def current_player(self) -> Color:
        return self.board.current_player

    def legal_moves(self) -> List[Move]:
        return self.board.all_legal_moves()

    def apply_move(self, move: Move) -> MoveOutcome:
        """Play ``move`` for the side to move and pass the turn.

        Raises:
            IllegalMoveError: If ``move`` is not among the legal moves.
        """
        if move not in self.legal_moves():
            raise IllegalMoveError(f"illegal move: {move}")
        mover = self.board.current_player
        outcome = self.board.make_move(move)
        self.move_stack.append((move, outcome))
        self._record_events(len(self.move_stack), mover, move, outcome)
        self.board.switch_player()
        return outcome

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        move, outcome = self.move_stack.pop()
        self.board.switch_player()
        self.board.unmake_move(move, outcome)
        # Drop the log lines written for the undone move
        prefix = f"Move {len(self.move_stack) + 1}:"
        while self.events and self.events[-1].startswith(prefix):
            self.events.pop()

    def is_over(self) -> bool:
        return self.board.is_game_over()

    def winner(self) -> Optional[Color]:
        return self.board.winner()

    def move_history(self) -> List[str]:
        return [m.to_notation() for m, _ in self.move_stack]

    def last_move(self) -> Optional[str]:
        return self.move_stack[-1][0].to_notation() if self.move_stack else None

    def _record_events(self, ply: int, mover: Color, move: Move, outcome: MoveOutcome) -> None:
        if outcome.captured is not None:
            self.events.append(
                f"Move {ply}: {mover.label} captured a {outcome.captured} at {move.midpoint}"
            )
        if outcome.promoted:
            self.events.append(f"Move {ply}: {mover.label} promoted a piece to king at {move.to_pos}")

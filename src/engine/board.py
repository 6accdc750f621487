from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, cast

from .move import FILES, Move, Position
from .piece import Color, Piece
from ..eval import evaluate


BOARD_SIZE = 8
START_FEN = "b1b1b1b1/1b1b1b1b/b1b1b1b1/8/8/1w1w1w1w/w1w1w1w1/1w1w1w1w w"

# Direction order matters: generation walks directions in this order.
MAN_DIRECTIONS = {
    Color.LIGHT: ((1, -1), (1, 1)),
    Color.DARK: ((-1, -1), (-1, 1)),
}
KING_DIRECTIONS = ((1, -1), (1, 1), (-1, -1), (-1, 1))

Grid = List[List[Optional[Piece]]]


class IllegalMoveError(ValueError):
    """Raised when a move that must be legal is not."""


class FenError(ValueError):
    """Raised when a position string cannot be parsed."""


def _empty_grid() -> Grid:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True)
class MoveOutcome:
    """Result of :meth:`Board.make_move`.

    ``applied`` is False for a rejected (illegal) move, in which case the board
    was left untouched and the other fields are empty.
    """

    applied: bool
    captured: Optional[Piece] = None
    promoted: bool = False

    @classmethod
    def rejected(cls) -> "MoveOutcome":
        return cls(applied=False)


@dataclass
class Board:
    """Draughts board state with move generation and position-string I/O.

    Notes:
    - ``cells[row][col]``; row 0 is rank 1 (light's home row), col 0 is file a.
    - Playable cells are the dark ones, ``(row + col) % 2 == 1``.
    - ``current_player`` only changes through :meth:`switch_player`.
    """

    cells: Grid = field(default_factory=_empty_grid)
    current_player: Color = Color.LIGHT

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board set up in the standard starting position."""
        board = cls()
        board.reset_to_start_position()
        return board

    @classmethod
    def empty(cls, current_player: Color = Color.LIGHT) -> "Board":
        return cls(cells=_empty_grid(), current_player=current_player)

    def reset_to_start_position(self) -> None:
        """Place 12 men per side on the dark cells of the outer three rows."""
        self.cells = _empty_grid()
        self.current_player = Color.LIGHT
        for row in range(BOARD_SIZE):
            if 3 <= row <= 4:
                continue
            color = Color.LIGHT if row < 3 else Color.DARK
            for col in range(1 - row % 2, BOARD_SIZE, 2):
                self.cells[row][col] = Piece(color)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Create a board from a position string.

        Args:
            fen (str): ``<placement> <side>``. Placement lists ranks 8..1
                separated by ``/`` using ``w W b B`` for pieces and digits for
                runs of empty cells; side is ``w`` or ``b``.

        Returns:
            Board: Board holding the encoded position.

        Raises:
            FenError: If the string is empty, has the wrong number of fields,
                ranks or squares, an unknown piece symbol, or a bad side.
        """
        if not fen or not isinstance(fen, str):
            raise FenError("position string must be non-empty")
        parts = fen.strip().split()
        if len(parts) != 2:
            raise FenError("position string must have 2 fields")
        placement, side = parts

        ranks = placement.split("/")
        if len(ranks) != BOARD_SIZE:
            raise FenError("position string must have 8 ranks")
        cells = _empty_grid()
        for row, rank in zip(range(BOARD_SIZE - 1, -1, -1), ranks):
            col = 0
            for ch in rank:
                # ASCII only: int() would reject other Unicode digits
                if ch.isascii() and ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > BOARD_SIZE:
                        raise FenError("invalid empty count in rank")
                    col += n
                    continue
                if col >= BOARD_SIZE:
                    raise FenError("too many squares in rank")
                try:
                    cells[row][col] = Piece.from_symbol(ch)
                except ValueError as e:
                    raise FenError(str(e)) from e
                col += 1
            if col != BOARD_SIZE:
                raise FenError("rank does not sum to 8 squares")

        if side not in (Color.LIGHT.value, Color.DARK.value):
            raise FenError("side to move must be 'w' or 'b'")
        return cls(cells=cells, current_player=Color(side))

    def to_fen(self) -> str:
        ranks: List[str] = []
        for row in range(BOARD_SIZE - 1, -1, -1):
            run = 0
            out: List[str] = []
            for piece in self.cells[row]:
                if piece is None:
                    run += 1
                    continue
                if run:
                    out.append(str(run))
                    run = 0
                out.append(piece.symbol)
            if run:
                out.append(str(run))
            ranks.append("".join(out))
        return "/".join(ranks) + " " + self.current_player.value

    def copy(self) -> "Board":
        # Pieces are immutable, so copying the rows is enough.
        return Board(cells=[list(r) for r in self.cells], current_player=self.current_player)

    # --- Cell access ---
    def piece_at(self, pos: Position) -> Optional[Piece]:
        if not pos.in_bounds():
            return None
        return self.cells[pos.row][pos.col]

    def set_piece(self, pos: Position, piece: Optional[Piece]) -> None:
        if not pos.in_bounds():
            raise ValueError(f"position off the board: ({pos.row}, {pos.col})")
        self.cells[pos.row][pos.col] = piece

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Position, Piece]]:
        """Yield ``(position, piece)`` pairs in row-major order."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.cells[row][col]
                if piece is not None and (color is None or piece.color is color):
                    yield Position(row, col), piece

    def piece_count(self, color: Optional[Color] = None) -> int:
        return sum(1 for _ in self.pieces(color))

    # --- Rules ---
    def is_valid_move(self, move: Move) -> bool:
        """Check ``move`` against the rules for the side to move.

        A move is valid when both ends are on the board, the origin holds a
        piece of ``current_player``, the destination is empty, the move is
        diagonal and in a permitted direction, and it is either a single step
        or a jump over an opposing piece.
        """
        src, dst = move.from_pos, move.to_pos
        if not (src.in_bounds() and dst.in_bounds()):
            return False
        piece = self.cells[src.row][src.col]
        if piece is None or piece.color is not self.current_player:
            return False
        if self.cells[dst.row][dst.col] is not None:
            return False

        drow = dst.row - src.row
        dcol = dst.col - src.col
        if abs(drow) != abs(dcol):
            return False
        # Men only move forward
        if not piece.is_king and drow * piece.color.forward <= 0:
            return False

        if abs(drow) == 1:
            return True
        if abs(drow) == 2:
            mid = move.midpoint
            jumped = self.cells[mid.row][mid.col]
            return jumped is not None and jumped.color is not piece.color
        return False

    def make_move(self, move: Move) -> MoveOutcome:
        """Apply ``move`` in place without switching the side to move.

        Returns:
            MoveOutcome: ``applied=False`` and no mutation when the move is
            invalid; otherwise the captured piece (if any) and whether the
            moved man was promoted.
        """
        if not self.is_valid_move(move):
            return MoveOutcome.rejected()

        src, dst = move.from_pos, move.to_pos
        piece = cast(Piece, self.cells[src.row][src.col])
        self.cells[src.row][src.col] = None

        captured: Optional[Piece] = None
        if move.is_jump:
            mid = move.midpoint
            captured = self.cells[mid.row][mid.col]
            self.cells[mid.row][mid.col] = None

        promoted = not piece.is_king and dst.row == piece.color.back_rank
        self.cells[dst.row][dst.col] = piece.promoted() if promoted else piece
        return MoveOutcome(applied=True, captured=captured, promoted=promoted)

    def unmake_move(self, move: Move, outcome: MoveOutcome) -> None:
        """Undo a move previously applied with :meth:`make_move`.

        Raises:
            ValueError: If ``outcome`` is a rejected move or the destination is
                empty.
        """
        if not outcome.applied:
            raise ValueError("cannot unmake a rejected move")
        src, dst = move.from_pos, move.to_pos
        piece = self.cells[dst.row][dst.col]
        if piece is None:
            raise ValueError("no piece on destination to unmake")
        self.cells[dst.row][dst.col] = None
        self.cells[src.row][src.col] = piece.demoted() if outcome.promoted else piece
        if outcome.captured is not None:
            mid = move.midpoint
            self.cells[mid.row][mid.col] = outcome.captured

    def apply(self, move: Move) -> "Board":
        """Return a new Board with ``move`` made and the turn passed.

        The original board is left unchanged.

        Raises:
            IllegalMoveError: If ``move`` is not valid for the side to move.
        """
        new_board = self.copy()
        if not new_board.make_move(move).applied:
            raise IllegalMoveError(f"illegal move: {move}")
        new_board.switch_player()
        return new_board

    def generate_moves(self, color: Color) -> Iterator[Move]:
        """Yield every move available to ``color``.

        Origins are visited row-major; per origin each direction offers the
        plain step first and then the jump. Captures are not mandatory.
        """
        for pos, piece in self.pieces(color):
            directions = KING_DIRECTIONS if piece.is_king else MAN_DIRECTIONS[color]
            for drow, dcol in directions:
                step = pos.offset(drow, dcol)
                if not step.in_bounds():
                    continue
                over = self.cells[step.row][step.col]
                if over is None:
                    yield Move(pos, step)
                    continue
                jump = pos.offset(2 * drow, 2 * dcol)
                if (
                    over.color is not color
                    and jump.in_bounds()
                    and self.cells[jump.row][jump.col] is None
                ):
                    yield Move(pos, jump)

    def all_legal_moves(self) -> List[Move]:
        return list(self.generate_moves(self.current_player))

    def has_legal_moves(self) -> bool:
        return next(self.generate_moves(self.current_player), None) is not None

    def is_game_over(self) -> bool:
        return not self.has_legal_moves()

    def winner(self) -> Optional[Color]:
        if self.is_game_over():
            return self.current_player.opposite()
        return None

    def switch_player(self) -> None:
        self.current_player = self.current_player.opposite()

    def evaluate(self) -> int:
        return evaluate(self)

    # --- Rendering ---
    def render(self) -> str:
        """Render the board as a labelled text grid, rank 8 at the top."""
        files = "   " + " ".join(FILES)
        rule = "  +" + "-+" * BOARD_SIZE
        lines = [files, rule]
        for row in range(BOARD_SIZE - 1, -1, -1):
            cells = []
            for col in range(BOARD_SIZE):
                piece = self.cells[row][col]
                if piece is not None:
                    cells.append(piece.symbol)
                else:
                    cells.append("·" if (row + col) % 2 == 1 else " ")
            lines.append(f"{row + 1} |" + "|".join(cells) + "|")
            lines.append(rule)
        lines.append(files)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

from __future__ import annotations

from dataclasses import dataclass


FILES = "abcdefgh"
RANKS = "12345678"


class MoveParseError(ValueError):
    """Raised when a move or square string is malformed."""


@dataclass(frozen=True)
class Position:
    """Board coordinate. Not range-checked; the board validates before indexing."""

    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    def offset(self, drow: int, dcol: int) -> "Position":
        return Position(self.row + drow, self.col + dcol)

    def __str__(self) -> str:
        return position_to_str(self)


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_pos (Position): Origin cell.
        to_pos (Position): Destination cell.

    Captures and promotions are not stored; the board derives them when the
    move is applied.
    """

    from_pos: Position
    to_pos: Position

    @property
    def distance(self) -> int:
        return abs(self.to_pos.row - self.from_pos.row)

    @property
    def is_jump(self) -> bool:
        return self.distance == 2

    @property
    def midpoint(self) -> Position:
        return Position(
            (self.from_pos.row + self.to_pos.row) // 2,
            (self.from_pos.col + self.to_pos.col) // 2,
        )

    def to_notation(self) -> str:
        """Serialize the move into 4-character algebraic form.

        Returns:
            str: Move encoded like ``"b3d5"``.
        """
        return position_to_str(self.from_pos) + position_to_str(self.to_pos)

    def __str__(self) -> str:
        return self.to_notation()


def parse_move(text: str) -> Move:
    """Parse a 4-character move string.

    Args:
        text (str): Move such as ``"c3d4"``. Surrounding whitespace is ignored
            and files may be upper case.

    Returns:
        Move: Parsed move.

    Raises:
        MoveParseError: If the string has the wrong length or names a square
            off the board.
    """
    s = text.strip()
    if len(s) != 4:
        raise MoveParseError(f"invalid move length: {text!r}")
    return Move(str_to_position(s[0:2]), str_to_position(s[2:4]))


def str_to_position(s: str) -> Position:
    """Convert a square name such as ``"b3"`` into a Position.

    Raises:
        MoveParseError: If ``s`` is not a valid square.
    """
    if len(s) != 2:
        raise MoveParseError(f"invalid square: {s!r}")
    file_ch = s[0].lower()
    if file_ch not in FILES or s[1] not in RANKS:
        raise MoveParseError(f"invalid square: {s!r}")
    return Position(RANKS.index(s[1]), FILES.index(file_ch))


def position_to_str(pos: Position) -> str:
    """Convert a Position into its square name.

    Raises:
        ValueError: If ``pos`` lies outside the board.
    """
    if not pos.in_bounds():
        raise ValueError(f"position off the board: ({pos.row}, {pos.col})")
    return FILES[pos.col] + RANKS[pos.row]

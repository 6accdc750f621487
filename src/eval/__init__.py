"""Evaluation heuristics.

Pure, deterministic, and side-effect free. Scores are from light's point of
view: positive favours light, negative favours dark.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from src.engine.piece import Color, Piece, PieceType

if TYPE_CHECKING:
    from src.engine.board import Board


MAN_VAL: Final = 1
KING_VAL: Final = 3
CENTER_BONUS: Final = 1
CENTER_MIN: Final = 2
CENTER_MAX: Final = 5


def piece_value(piece: Piece) -> int:
    """Signed material value of ``piece``."""
    value = KING_VAL if piece.type is PieceType.KING else MAN_VAL
    return value if piece.color is Color.LIGHT else -value


def advancement_bonus(piece: Piece, row: int) -> int:
    """Signed bonus for a man's progress toward its promotion row."""
    if piece.is_king:
        return 0
    if piece.color is Color.LIGHT:
        return row // 2
    return -((7 - row) // 2)


def _in_center(row: int, col: int) -> bool:
    return CENTER_MIN <= row <= CENTER_MAX and CENTER_MIN <= col <= CENTER_MAX


def evaluate(board: "Board") -> int:
    """Static evaluation: material, advancement of men, and central control.

    Args:
        board (Board): Position to score.

    Returns:
        int: Score from light's perspective.
    """
    score = 0
    for pos, piece in board.pieces():
        score += piece_value(piece)
        score += advancement_bonus(piece, pos.row)
        if _in_center(pos.row, pos.col):
            score += CENTER_BONUS if piece.color is Color.LIGHT else -CENTER_BONUS
    return score

from __future__ import annotations

import pytest

from src.engine.board import Board
from src.engine.move import Position
from src.engine.piece import DARK_KING, DARK_MAN, LIGHT_KING, LIGHT_MAN, Piece
from src.eval import evaluate, piece_value


def _single(row: int, col: int, piece: Piece) -> Board:
    b = Board.empty()
    b.set_piece(Position(row, col), piece)
    return b


def _mirror_swap(b: Board) -> Board:
    out = Board.empty(b.current_player.opposite())
    for pos, piece in b.pieces():
        out.set_piece(Position(7 - pos.row, pos.col), Piece(piece.color.opposite(), piece.type))
    return out


def test_piece_values() -> None:
    assert piece_value(LIGHT_MAN) == 1
    assert piece_value(LIGHT_KING) == 3
    assert piece_value(DARK_MAN) == -1
    assert piece_value(DARK_KING) == -3


def test_startpos_is_balanced() -> None:
    assert Board.startpos().evaluate() == 0


@pytest.mark.parametrize(
    "row,col,piece,expected",
    [
        (0, 1, LIGHT_MAN, 1),
        (6, 3, LIGHT_MAN, 4),  # advancement 6 // 2
        (3, 3, LIGHT_MAN, 3),  # advancement 1 plus centre
        (3, 3, LIGHT_KING, 4),  # kings get no advancement bonus
        (1, 2, DARK_MAN, -4),  # advancement (7 - 1) // 2
        (4, 4, DARK_KING, -4),
        (7, 0, DARK_MAN, -1),
    ],
)
def test_single_piece_scores(row: int, col: int, piece: Piece, expected: int) -> None:
    b = _single(row, col, piece)
    assert evaluate(b) == expected
    assert b.evaluate() == expected


@pytest.mark.parametrize(
    "fen",
    [
        "b1b1b1b1/1b1b1b1b/b1b1b1b1/8/8/1w1w1w1w/w1w1w1w1/1w1w1w1w w",
        "8/2B5/8/3b4/2w5/8/W7/8 w",
        "1b1b4/w1w5/8/3b1b2/4W3/3b1b2/8/8 b",
        "8/8/3w4/8/8/2B1b3/8/8 w",
    ],
)
def test_evaluate_is_antisymmetric_under_colour_swap_and_mirror(fen: str) -> None:
    b = Board.from_fen(fen)
    assert evaluate(_mirror_swap(b)) == -evaluate(b)


def test_evaluate_is_deterministic() -> None:
    b = Board.from_fen("1b1b4/w1w5/8/3b1b2/4W3/3b1b2/8/8 b")
    assert evaluate(b) == evaluate(b.copy())

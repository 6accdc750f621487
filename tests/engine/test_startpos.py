from __future__ import annotations

import pytest

from src.engine.board import Board, FenError, START_FEN
from src.engine.piece import Color, PieceType


def test_startpos_has_twelve_men_per_side_on_dark_cells() -> None:
    b = Board.startpos()
    for color, rows in ((Color.LIGHT, range(0, 3)), (Color.DARK, range(5, 8))):
        placed = list(b.pieces(color))
        assert len(placed) == 12
        for pos, piece in placed:
            assert piece.type is PieceType.MAN
            assert pos.row in rows
            assert (pos.row + pos.col) % 2 == 1
    assert b.current_player is Color.LIGHT


def test_reset_restores_start_after_moves() -> None:
    b = Board.startpos()
    b.make_move(b.all_legal_moves()[0])
    b.switch_player()
    b.reset_to_start_position()
    assert b.to_fen() == START_FEN
    assert b.current_player is Color.LIGHT


def test_startpos_round_trip() -> None:
    b = Board.from_fen(START_FEN)
    assert b.to_fen() == START_FEN
    assert Board.startpos().to_fen() == START_FEN


@pytest.mark.parametrize(
    "fen",
    [
        "8/8/8/8/8/8/8/1w6 w",
        "8/2B5/8/3b4/8/8/W7/8 b",
        "1b1b1b1b/8/8/8/8/8/8/w1w1w1w1 w",
    ],
)
def test_round_trip_various_positions(fen: str) -> None:
    b = Board.from_fen(fen)
    assert b.to_fen() == fen


def test_fen_places_pieces_by_rank() -> None:
    b = Board.from_fen("8/8/8/8/8/8/8/1w6 b")
    assert [(pos.row, pos.col) for pos, _ in b.pieces()] == [(0, 1)]
    assert b.current_player is Color.DARK


@pytest.mark.parametrize(
    "fen",
    [
        "",  # empty
        "8/8/8/8/8/8/8 w",  # not enough ranks
        "8/8/8/8/8/8/8/8",  # missing side
        "8/8/8/8/8/8/8/8 x",  # bad side to move
        "9/8/8/8/8/8/8/8 w",  # bad empty count
        "w8/8/8/8/8/8/8/8 w",  # too many squares
        "7/8/8/8/8/8/8/8 w",  # too few squares
        "k7/8/8/8/8/8/8/8 w",  # bad piece
        "²222/8/8/8/8/8/8/8 w",  # non-ASCII digit
    ],
)
def test_invalid_fen_raises(fen: str) -> None:
    with pytest.raises(FenError):
        Board.from_fen(fen)


def test_render_labels_and_symbols() -> None:
    b = Board.from_fen("8/2B5/8/8/8/8/W7/1b6 w")
    lines = b.render().splitlines()
    assert lines[0] == "   a b c d e f g h"
    assert lines[1] == "  +-+-+-+-+-+-+-+-+"
    assert lines[2].startswith("8 |")
    assert lines[4] == "7 | |·|B|·| |·| |·|"
    assert lines[-3] == "1 | |b| |·| |·| |·|"
    assert "W" in lines[-5]
    assert str(b) == b.render()

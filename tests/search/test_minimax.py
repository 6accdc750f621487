from __future__ import annotations

import pytest

from src.engine.board import Board, START_FEN
from src.engine.move import Move, Position, parse_move
from src.engine.piece import LIGHT_MAN, Color
from src.search.service import SEARCH_DEPTH, SearchService


def _brute_force(board: Board, depth: int) -> int:
    if depth == 0 or not board.all_legal_moves():
        return board.evaluate()
    values = [_brute_force(board.apply(m), depth - 1) for m in board.all_legal_moves()]
    return max(values) if board.current_player is Color.LIGHT else min(values)


def test_default_depth_is_four() -> None:
    assert SEARCH_DEPTH == 4
    assert SearchService().depth == 4


def test_depth_zero_returns_static_evaluation() -> None:
    b = Board.startpos()
    res = SearchService(depth=0).search(b)
    assert res.best_move is None
    assert res.score == b.evaluate()
    assert res.nodes == 1


def test_depth_one_takes_the_capture() -> None:
    b = Board.from_fen("8/8/8/8/2b5/1w6/8/7w w")
    res = SearchService(depth=1).search(b)
    assert res.best_move == parse_move("b3d5")
    assert res.score == 5


def test_depth_one_matches_one_ply_enumeration() -> None:
    b = Board.startpos()
    expected = [b.apply(m).evaluate() for m in b.all_legal_moves()]
    res = SearchService(depth=1).search(b)
    assert res.score == max(expected)
    assert res.best_move == b.all_legal_moves()[expected.index(max(expected))]


def test_dark_minimises() -> None:
    b = Board.from_fen("8/8/8/4b3/3w4/8/8/8 b")
    res = SearchService(depth=1).search(b)
    assert res.best_move == parse_move("e5c3")
    assert res.score == -4


def test_ties_keep_first_generated_move() -> None:
    b = Board.empty()
    b.set_piece(Position(0, 1), LIGHT_MAN)
    res = SearchService(depth=1).search(b)
    # b1a2 and b1c2 both score 1; a2 is generated first
    assert res.best_move == Move(Position(0, 1), Position(1, 0))
    assert res.score == 1


@pytest.mark.parametrize(
    "fen,depth",
    [
        (START_FEN, 2),
        (START_FEN, 3),
        ("1b1b4/w1w5/8/3b1b2/4W3/3b1b2/8/8 w", 2),
        ("1b1b4/w1w5/8/3b1b2/4W3/3b1b2/8/8 b", 3),
    ],
)
def test_score_matches_brute_force_minimax(fen: str, depth: int) -> None:
    b = Board.from_fen(fen)
    assert SearchService(depth=depth).search(b).score == _brute_force(b, depth)


def test_search_does_not_mutate_board() -> None:
    b = Board.startpos()
    SearchService().search(b)
    assert b.to_fen() == START_FEN


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValueError):
        SearchService(depth=-1)

from __future__ import annotations

from .board import Board


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for `board` at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Children are independent copies with the turn passed, so `board` itself
    is never modified.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1
    return sum(perft(board.apply(m), depth - 1) for m in board.all_legal_moves())


def divide(board: Board, depth: int) -> dict[str, int]:
    """Per-root-move perft counts, keyed by move notation."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    return {m.to_notation(): perft(board.apply(m), depth - 1) for m in board.all_legal_moves()}

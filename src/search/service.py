from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Final, Optional, Tuple

from src.engine.board import Board
from src.engine.move import Move
from src.engine.piece import Color


logger = logging.getLogger(__name__)

SEARCH_DEPTH: Final = 4


@dataclass
class SearchResult:
    """Outcome of a search.

    ``best_move`` is None when the side to move has no legal move; ``score``
    is then the static evaluation of the root.
    """

    best_move: Optional[Move]
    score: int
    nodes: int
    depth: int
    time_ms: int


class SearchService:
    """Fixed-depth minimax search.

    The depth is chosen when the service is built and cannot be changed per
    call. Every explored position is an independent copy made with
    ``Board.apply``, so the caller's board is never touched.
    """

    def __init__(self, depth: int = SEARCH_DEPTH) -> None:
        if depth < 0:
            raise ValueError("depth must be >= 0")
        self.depth = depth

    def find_best_move(self, board: Board) -> Optional[Move]:
        return self.search(board).best_move

    def search(self, board: Board) -> SearchResult:
        nodes = 0

        def minimax(node: Board, d: int) -> Tuple[int, Optional[Move]]:
            nonlocal nodes
            nodes += 1
            if d == 0:
                return node.evaluate(), None
            moves = node.all_legal_moves()
            if not moves:
                return node.evaluate(), None

            maximizing = node.current_player is Color.LIGHT
            best_move: Optional[Move] = None
            best_value = 0
            for mv in moves:
                value, _ = minimax(node.apply(mv), d - 1)
                # Strict comparison keeps the first of equally good moves
                if (
                    best_move is None
                    or (maximizing and value > best_value)
                    or (not maximizing and value < best_value)
                ):
                    best_value = value
                    best_move = mv
            return best_value, best_move

        start = time.perf_counter()
        score, best = minimax(board, self.depth)
        time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search done depth=%d nodes=%d score=%d best=%s time_ms=%d",
            self.depth,
            nodes,
            score,
            best.to_notation() if best else None,
            time_ms,
        )
        return SearchResult(
            best_move=best, score=score, nodes=nodes, depth=self.depth, time_ms=time_ms
        )

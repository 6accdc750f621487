from __future__ import annotations

import logging
import sys
from typing import Callable, Final, List

from ...engine.board import FenError, IllegalMoveError
from ...engine.game import Game
from ...engine.move import MoveParseError, parse_move
from ...search.service import SEARCH_DEPTH, SearchService


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]

BATTLE_MOVES: Final = 50
MIN_DEPTH: Final = 1
MAX_DEPTH: Final = 8


class DraughtsEngine:
    """Line-oriented protocol adapter around the core engine.

    Notes:
    - Core remains pure; I/O is isolated here.
    - Commands: uci, isready, ucinewgame, position, go, board, battle,
      setoption, quit. Everything runs synchronously.
    """

    def __init__(self) -> None:
        self.game: Game = Game.new()
        self.search = SearchService()

    # ---- Command handlers ----
    def cmd_uci(self, write: Writer) -> None:
        write("id name draughts_engine")
        write("id author draughts_engine developers")
        write(
            f"option name Depth type spin default {SEARCH_DEPTH} min {MIN_DEPTH} max {MAX_DEPTH}"
        )
        write("uciok")

    def cmd_isready(self, write: Writer) -> None:
        write("readyok")

    def cmd_ucinewgame(self) -> None:
        self.game = Game.new()

    def cmd_position(self, args: List[str]) -> None:
        # position [startpos | fen <placement> <side>] [moves m1 m2 ...]
        if not args:
            return
        idx = 0
        if args[idx] == "startpos":
            self.game = Game.new()
            idx += 1
        elif args[idx] == "fen":
            idx += 1
            fen_tokens: List[str] = []
            while idx < len(args) and args[idx] != "moves":
                fen_tokens.append(args[idx])
                idx += 1
            try:
                self.game = Game.from_fen(" ".join(fen_tokens))
            except FenError as e:
                logger.warning("ignoring invalid position string: %s", e)
                return
        if idx < len(args) and args[idx] == "moves":
            for token in args[idx + 1 :]:
                try:
                    self.game.apply_move(parse_move(token))
                except (MoveParseError, IllegalMoveError) as e:
                    logger.warning("stopping move list at %r: %s", token, e)
                    break

    def cmd_setoption(self, args: List[str]) -> None:
        # setoption name <name> [value <value>]
        if not args:
            return
        i = 1 if args[0] == "name" else 0
        name_tokens: List[str] = []
        while i < len(args) and args[i] != "value":
            name_tokens.append(args[i])
            i += 1
        value = " ".join(args[i + 1 :]).strip()
        name = " ".join(name_tokens).strip().lower()
        if name == "depth":
            try:
                depth = int(value)
            except ValueError:
                logger.warning("invalid Depth value: %r", value)
                return
            self.search = SearchService(depth=max(MIN_DEPTH, min(MAX_DEPTH, depth)))

    def cmd_go(self, write: Writer) -> None:
        res = self.search.search(self.game.board)
        write(f"info depth {res.depth} nodes {res.nodes} time {res.time_ms} score {res.score}")
        best = res.best_move.to_notation() if res.best_move else "(none)"
        write(f"bestmove {best}")

    def cmd_board(self, write: Writer) -> None:
        write(self.game.board.render())

    def cmd_battle(self, args: List[str], write: Writer) -> None:
        """Self-play from the start position for up to ``args[0]`` moves."""
        moves = BATTLE_MOVES
        if args:
            try:
                moves = max(1, int(args[0]))
            except ValueError:
                logger.warning("invalid battle length: %r", args[0])
        write(f"Starting a self-play battle for {moves} moves")
        self.game = Game.new()

        for i in range(1, moves + 1):
            move = self.search.find_best_move(self.game.board)
            if move is None:
                break
            write(f"Move {i}: {self.game.current_player.label} plays {move}")
            self.game.apply_move(move)
            write(self.game.board.render())

        winner = self.game.winner()
        if winner is not None:
            logger.info("battle over after %d moves, winner %s", len(self.game.move_stack), winner.label)
            write(f"Game over! {winner.label} wins!")
        else:
            write(f"Battle ended after {moves} moves without a conclusion")

        write("")
        write("Game Events:")
        for event in self.game.events:
            write(event)


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def handle_line(eng: DraughtsEngine, line: str, write: Writer = _default_writer) -> bool:
    """Dispatch one input line. Returns False when the loop should stop."""
    parts = line.split()
    if not parts:
        return True
    cmd, args = parts[0], parts[1:]

    if cmd == "uci":
        eng.cmd_uci(write)
    elif cmd == "isready":
        eng.cmd_isready(write)
    elif cmd == "setoption":
        eng.cmd_setoption(args)
    elif cmd == "ucinewgame":
        eng.cmd_ucinewgame()
    elif cmd == "position":
        eng.cmd_position(args)
    elif cmd == "go":
        eng.cmd_go(write)
    elif cmd == "board":
        eng.cmd_board(write)
    elif cmd == "battle":
        eng.cmd_battle(args, write)
    elif cmd == "quit":
        return False
    else:
        write(f"Unknown command: {line.strip()}")
    return True


def run_uci() -> None:
    eng = DraughtsEngine()
    for raw in sys.stdin:
        if not handle_line(eng, raw.strip()):
            break

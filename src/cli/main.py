from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from src.engine.board import Board, START_FEN
from src.engine.perft import divide
from src.protocol.uci.loop import BATTLE_MOVES, DraughtsEngine, run_uci


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="draughts-engine", description="Draughts engine")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("uci", help="Run the line-oriented command loop on stdin/stdout")

    serve = sub.add_parser("serve", help="Serve the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    battle = sub.add_parser("battle", help="Play the engine against itself")
    battle.add_argument("--moves", type=int, default=BATTLE_MOVES)

    perft = sub.add_parser("perft", help="Per-move perft counts for a position")
    perft.add_argument("--fen", default=START_FEN)
    perft.add_argument("--depth", type=int, default=3)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, stream=sys.stderr)

    if args.command == "serve":
        uvicorn.run(
            "src.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level.lower(),
        )
    elif args.command == "battle":
        DraughtsEngine().cmd_battle([str(args.moves)], print)
    elif args.command == "perft":
        counts = divide(Board.from_fen(args.fen), args.depth)
        for move, nodes in counts.items():
            print(f"{move}: {nodes}")
        print(f"nodes={sum(counts.values())} depth={args.depth}")
    else:
        run_uci()


if __name__ == "__main__":
    main()

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, Field

from .error import install_error_handlers
from .logging_middleware import RequestIDLoggingMiddleware
from .session import GameNotFoundError, InMemorySessionStore
from ...engine.board import Board
from ...engine.game import Game
from ...engine.move import parse_move
from ...engine.perft import perft as perft_nodes
from ...search.service import SEARCH_DEPTH, SearchService


logger = logging.getLogger(__name__)


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="Position string, e.g. '8/8/8/8/8/8/8/1w6 w'")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move in 4-character notation, e.g. c3d4")


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=6)


class SearchResponse(BaseModel):
    best_move: Optional[str]
    score: int
    nodes: int
    depth: int
    time_ms: int


class PerftRequest(BaseModel):
    fen: Optional[str] = None
    depth: int = Field(default=1, ge=0, le=6)


class GameState(BaseModel):
    game_id: str
    fen: str
    board: str
    current_player: str
    legal_moves: List[str]
    game_over: bool
    winner: Optional[str]
    evaluation: int
    last_move: Optional[str]
    move_history: List[str]
    events: List[str]


def game_state(game_id: str, game: Game) -> GameState:
    winner = game.winner()
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        board=game.board.render(),
        current_player=game.current_player.value,
        legal_moves=[m.to_notation() for m in game.legal_moves()],
        game_over=winner is not None,
        winner=winner.value if winner else None,
        evaluation=game.board.evaluate(),
        last_move=game.last_move(),
        move_history=game.move_history(),
        events=list(game.events),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="Draughts Engine API", version="0.1.0")

    logging.basicConfig(level=logging.INFO)

    app.add_middleware(RequestIDLoggingMiddleware)
    install_error_handlers(app)

    store = InMemorySessionStore()

    def require_game(game_id: str) -> Game:
        game = store.get(game_id)
        if game is None:
            raise HTTPException(status_code=404, detail="game not found")
        return game

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/games")
    async def list_games() -> Dict[str, List[str]]:
        return {"game_ids": store.ids()}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game = Game.new()
        game_id = store.create(game)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return game_state(game_id, require_game(game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        require_game(game_id)
        # FenError propagates to the domain handler as a 400
        game = Game.from_fen(req.fen)
        try:
            store.replace(game_id, game)
        except GameNotFoundError:
            raise HTTPException(status_code=404, detail="game not found")
        return game_state(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = require_game(game_id)
        game.apply_move(parse_move(req.move))
        return game_state(game_id, game)

    @app.post("/api/games/{game_id}/search", response_model=SearchResponse)
    async def search(game_id: str, req: SearchRequest) -> SearchResponse:
        game = require_game(game_id)
        res = SearchService(depth=req.depth or SEARCH_DEPTH).search(game.board)
        return SearchResponse(
            best_move=res.best_move.to_notation() if res.best_move else None,
            score=res.score,
            nodes=res.nodes,
            depth=res.depth,
            time_ms=res.time_ms,
        )

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = require_game(game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return game_state(game_id, game)

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        board = Board.from_fen(req.fen) if req.fen else Board.startpos()
        return {"nodes": perft_nodes(board, req.depth), "depth": req.depth}

    return app


# Default app for non-factory servers
app = create_app()

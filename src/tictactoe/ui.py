"""FastAPI backend exposing the Tic-Tac-Toe engine to a browser front end."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field, StrictInt

from .game import GameEngine, GameError

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """The engine served by one application plus the lock guarding it."""

    engine: GameEngine = field(default_factory=GameEngine)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class MoveRequest(BaseModel):
    """Request payload for submitting a move."""

    # Strict so booleans and floats are not coerced; range is checked by the
    # engine so it can report InvalidIndexError.
    index: StrictInt = Field(description="Cell index, 0-8 in row-major order")


def _get_session(request: Request) -> GameSession:
    return request.app.state.session


async def _game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    logger.info("Rejected move: %s", exc)
    return JSONResponse(status_code=400, content={"detail": str(exc), "code": exc.code})


def create_app(engine: Optional[GameEngine] = None) -> FastAPI:
    """Build an application bound to ``engine`` (a fresh one by default)."""

    application = FastAPI(title="Tic-Tac-Toe", description="Classic 3x3 tic-tac-toe")
    application.state.session = GameSession(engine=engine or GameEngine())
    application.add_exception_handler(GameError, _game_error_handler)

    @application.get("/api/state")
    def get_initial_state(request: Request) -> Dict[str, object]:
        session = _get_session(request)
        with session.lock:
            return session.engine.get_initial_state().to_dict()

    @application.post("/api/game")
    def new_game(request: Request) -> Dict[str, object]:
        session = _get_session(request)
        with session.lock:
            return session.engine.new_game().to_dict()

    @application.post("/api/game/move")
    def make_move(request: Request, move: MoveRequest) -> Dict[str, object]:
        session = _get_session(request)
        with session.lock:
            return session.engine.make_move(move.index).to_dict()

    @application.post("/api/game/reset")
    def reset_game(request: Request) -> Dict[str, object]:
        session = _get_session(request)
        with session.lock:
            return session.engine.reset_game().to_dict()

    @application.get("/", response_class=HTMLResponse)
    def index() -> str:
        return HTML_PAGE

    return application


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        flex-direction: column;
        align-items: center;
        justify-content: center;
        background: #f2f5ff;
        color: #13203a;
      }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 96px);
        gap: 6px;
        margin: 1.5rem 0;
      }
      .cell {
        width: 96px;
        height: 96px;
        font-size: 2.5rem;
        font-weight: 600;
        border: none;
        border-radius: 12px;
        background: #ffffff;
        cursor: pointer;
      }
      .cell:disabled {
        cursor: default;
      }
      #status {
        font-size: 1.25rem;
        min-height: 1.5em;
      }
      .btn {
        padding: 0.5rem 1.5rem;
        margin: 0 0.25rem;
        border-radius: 999px;
        border: none;
        background: #4453d6;
        color: #ffffff;
        cursor: pointer;
      }
      body.dark-theme {
        background: #151a2e;
        color: #e6e9f5;
      }
      body.dark-theme .cell {
        background: #262d4a;
        color: #e6e9f5;
      }
      body.dark-theme .btn {
        background: #6b78f0;
      }
    </style>
  </head>
  <body>
    <h1>Tic-Tac-Toe</h1>
    <div id=\"status\"></div>
    <div class=\"board\" id=\"board\"></div>
    <div class=\"controls\">
      <button class=\"btn\" id=\"reset\">Reset Game</button>
      <button class=\"btn\" id=\"theme-toggle\">Switch to Dark Theme</button>
    </div>
    <script>
      const AUTO_RESET_DELAY_MS = 2000;
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const themeButton = document.getElementById('theme-toggle');
      let autoResetTimer = null;

      function statusFor(state) {
        if (state.winner === 'draw') {
          return "It's a draw!";
        }
        if (state.winner) {
          return `Player ${state.winner} wins!`;
        }
        return `Player ${state.currentPlayer}'s turn`;
      }

      function render(state) {
        boardEl.innerHTML = '';
        state.board.forEach((cell, index) => {
          const button = document.createElement('button');
          button.className = 'cell';
          button.textContent = cell;
          button.disabled = state.gameOver || cell !== '';
          button.addEventListener('click', () => play(index));
          boardEl.appendChild(button);
        });
        statusEl.textContent = statusFor(state);
      }

      async function call(method, path, body) {
        const response = await fetch(path, {
          method,
          headers: {'Content-Type': 'application/json'},
          body: body ? JSON.stringify(body) : undefined,
        });
        const payload = await response.json();
        if (!response.ok) {
          throw new Error(payload.detail || 'Request failed');
        }
        return payload;
      }

      async function resetGame() {
        clearTimeout(autoResetTimer);
        autoResetTimer = null;
        try {
          render(await call('POST', '/api/game/reset'));
        } catch (err) {
          console.error('Error resetting game:', err);
          statusEl.textContent = 'Error resetting game. Please try again.';
        }
      }

      async function play(index) {
        try {
          const state = await call('POST', '/api/game/move', {index});
          render(state);
          if (state.gameOver) {
            autoResetTimer = setTimeout(resetGame, AUTO_RESET_DELAY_MS);
          }
        } catch (err) {
          statusEl.textContent = err.message;
        }
      }

      function toggleTheme() {
        const dark = document.body.classList.toggle('dark-theme');
        themeButton.textContent = `Switch to ${dark ? 'Light' : 'Dark'} Theme`;
      }

      document.getElementById('reset').addEventListener('click', resetGame);
      themeButton.addEventListener('click', toggleTheme);

      call('POST', '/api/game').then(render).catch((err) => {
        statusEl.textContent = 'Error loading game. Please try refreshing.';
        console.error(err);
      });
    </script>
  </body>
</html>
"""


app = create_app()

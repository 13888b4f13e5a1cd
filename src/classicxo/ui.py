"""FastAPI-powered web UI for playing ClassicXO in the browser."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .game import TIE
from .session import GameController, Player

logger = logging.getLogger(__name__)

Mode = Literal["player", "bot"]


@dataclass
class GameSession:
    """Container for an active ClassicXO game and its result message."""

    controller: GameController
    mode: Mode
    result: Optional[str] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def handle_result(self, outcome: str, winner: Optional[Player]) -> None:
        self.result = result_message(outcome, winner)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="ClassicXO", description="Tic-tac-toe played in the browser")


MAX_NAME_LENGTH = 24


def result_message(outcome: str, winner: Optional[Player]) -> str:
    if outcome == TIE or winner is None:
        return "It's a tie!"
    return f"{winner.name} wins!"


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    mode: Mode = Field(
        default="bot",
        description="'bot' to face the minimax AI, 'player' for two humans",
    )
    player1_name: Optional[str] = Field(
        default=None, alias="player1Name", max_length=MAX_NAME_LENGTH
    )
    player2_name: Optional[str] = Field(
        default=None, alias="player2Name", max_length=MAX_NAME_LENGTH
    )

    @field_validator("player1_name", "player2_name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    index: int = Field(ge=0, le=8)


class RestartRequest(BaseModel):
    """Optional payload for restarting; switching mode is allowed."""

    mode: Optional[Mode] = None


def _create_session(request: NewGameRequest) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    controller = GameController(
        player1=Player("X", request.player1_name or ""),
        player2=Player("O", request.player2_name or ""),
    )
    session = GameSession(controller=controller, mode=request.mode)
    controller.on_result = session.handle_result
    controller.use_bot_for_player2(request.mode == "bot")
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created %s game %s", request.mode, session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        controller = session.controller
        outcome = controller.outcome
        state: Dict[str, object] = {
            "id": game_id,
            "mode": session.mode,
            "cells": list(controller.board.cells),
            "currentPlayer": controller.current_player.marker,
            "availableIndices": (
                [] if controller.finished else controller.board.available_indices()
            ),
            "winner": outcome if outcome not in (None, TIE) else None,
            "drawn": outcome == TIE,
            "result": session.result,
            "players": [
                {"marker": p.marker, "name": p.name}
                for p in (controller.player1, controller.player2)
            ],
            "moveLog": list(controller.move_log),
        }
        if controller.move_log:
            state["lastMove"] = controller.move_log[-1]
        return state


def _apply_player_move(session: GameSession, index: int) -> None:
    with session.lock:
        controller = session.controller
        if controller.finished:
            raise HTTPException(status_code=400, detail="Game already finished")
        try:
            controller.make_move(index)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(session, request.index)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/restart")
def restart_game(
    game_id: str, request: Optional[RestartRequest] = None
) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.controller.reset()
        session.result = None
        if request is not None and request.mode is not None:
            session.mode = request.mode
            session.controller.use_bot_for_player2(request.mode == "bot")
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>ClassicXO</title>
    <style>
      html {
        font-family: Helvetica, Arial, sans-serif;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: grid;
        place-items: center;
        background: #20232a;
        color: #f4f1ea;
      }
      main {
        width: 300px;
        text-align: center;
      }
      h1 {
        margin: 0 0 1rem;
        font-size: 2rem;
        text-transform: uppercase;
      }
      button {
        font: inherit;
        border: 2px solid #f4f1ea;
        border-radius: 4px;
        padding: 0.4rem 0.9rem;
        background: transparent;
        color: inherit;
        cursor: pointer;
      }
      button:hover:enabled {
        background: #f4f1ea;
        color: #20232a;
      }
      .start-buttons {
        display: flex;
        justify-content: space-between;
      }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 6px;
        background: #f4f1ea;
      }
      .board .cell {
        aspect-ratio: 1;
        border: none;
        border-radius: 0;
        background: #20232a;
        font-size: 3rem;
      }
      .board .cell.x {
        color: #f7b32b;
      }
      .board .cell.o {
        color: #5fc2d9;
      }
      .board .cell:disabled {
        cursor: default;
      }
      .result {
        min-height: 1.5rem;
        margin: 1rem 0;
      }
      .nope {
        display: none !important;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>ClassicXO</h1>
      <div class=\"start-buttons\">
        <button class=\"player\" type=\"button\">Two players</button>
        <button class=\"bot\" type=\"button\">Play vs bot</button>
      </div>
      <div class=\"board nope\"></div>
      <div class=\"result\" role=\"status\"></div>
      <button class=\"restart-button nope\" type=\"button\">Restart</button>
    </main>
    <script>
      const startButtons = document.querySelector('.start-buttons');
      const playerButton = startButtons.querySelector('.player');
      const botButton = startButtons.querySelector('.bot');
      const restartButton = document.querySelector('.restart-button');
      const boardDiv = document.querySelector('.board');
      const resultDiv = document.querySelector('.result');

      let gameId = null;
      let gameState = null;
      let isRequestPending = false;

      playerButton.addEventListener('click', () => startGame('player'));
      botButton.addEventListener('click', () => startGame('bot'));
      restartButton.addEventListener('click', resetDisplay);

      async function request(url, body) {
        const response = await fetch(url, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body || {}),
        });
        const data = await response.json();
        if (!response.ok) {
          throw new Error(typeof data.detail === 'string' ? data.detail : 'Request failed');
        }
        return data;
      }

      async function startGame(mode) {
        try {
          const data = gameId
            ? await request(`/api/game/${gameId}/restart`, { mode })
            : await request('/api/game', { mode });
          setState(data);
          startButtons.classList.add('nope');
          boardDiv.classList.remove('nope');
        } catch (error) {
          resultDiv.textContent = error.message;
        }
      }

      async function sendMove(index) {
        if (isRequestPending || !gameId) return;
        isRequestPending = true;
        try {
          setState(await request(`/api/game/${gameId}/move`, { index }));
        } catch (error) {
          resultDiv.textContent = error.message;
        } finally {
          isRequestPending = false;
        }
      }

      function setState(data) {
        gameId = data.id;
        gameState = data;
        renderBoard();
        if (gameState.result) {
          resultDiv.textContent = gameState.result;
          restartButton.classList.remove('nope');
        } else {
          resultDiv.textContent = '';
        }
      }

      function renderBoard() {
        boardDiv.innerHTML = '';
        const available = new Set(gameState.availableIndices);
        gameState.cells.forEach((value, index) => {
          const cell = document.createElement('button');
          cell.type = 'button';
          cell.classList.add('cell');
          cell.dataset.index = String(index);
          cell.textContent = value;
          if (value) {
            cell.classList.add(value === 'X' ? 'x' : 'o');
            cell.setAttribute('aria-label', `${value} placed`);
          } else {
            cell.setAttribute('aria-label', 'Empty cell');
          }
          if (available.has(index)) {
            cell.addEventListener('click', () => sendMove(index));
          } else {
            cell.disabled = true;
          }
          boardDiv.appendChild(cell);
        });
      }

      function resetDisplay() {
        startButtons.classList.remove('nope');
        restartButton.classList.add('nope');
        boardDiv.classList.add('nope');
        resultDiv.textContent = '';
      }
    </script>
  </body>
</html>
"""

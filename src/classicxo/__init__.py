"""ClassicXO package exposing game logic, the minimax AI, and the web application."""

from .ai import MinimaxAI, NoLegalMoveError
from .game import Board, apply_move, evaluate
from .session import GameController, Player
from .ui import app

__all__ = [
    "Board",
    "GameController",
    "MinimaxAI",
    "NoLegalMoveError",
    "Player",
    "app",
    "apply_move",
    "evaluate",
]

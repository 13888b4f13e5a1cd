"""Minimax AI with alpha-beta pruning for ClassicXO.

Values are scored from the AI's point of view: +1 for an AI win, -1 for an
opponent win and 0 for a tie. The AI picks the move with the highest value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence, Tuple
import logging
import math

from .game import (
    TIE,
    Player,
    apply_move,
    available_indices,
    evaluate,
    marker_to_move,
    other_marker,
)

logger = logging.getLogger(__name__)


class NoLegalMoveError(RuntimeError):
    """Raised when the AI is asked to move on a full or already decided board."""


@dataclass
class MinimaxAI:
    """AI player that searches the full game tree with alpha-beta pruning.

    - MinimaxAI(player="O")
    - choose(cells) -> cell index
    """

    player: Player = "O"
    opponent: Player = ""
    nodes_searched: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.opponent:
            self.opponent = other_marker(self.player)
        if self.player == self.opponent:
            raise ValueError("AI and opponent markers must differ")

    # ---- public API ----

    def choose(self, cells: Sequence[str]) -> int:
        values = self.evaluate_moves(cells)
        # Dicts keep ascending index order, so max() settles ties on the lowest index.
        best_move = max(values, key=lambda move: values[move])
        logger.debug(
            "AI %s picked cell %d (value %d) after %d nodes",
            self.player,
            best_move,
            values[best_move],
            self.nodes_searched,
        )
        return best_move

    def evaluate_moves(self, cells: Sequence[str]) -> Dict[int, int]:
        """Minimax value of every legal move for the AI, keyed by cell index."""
        state = tuple(cells)
        if evaluate(state) is not None:
            raise NoLegalMoveError("Game already finished")
        available = tuple(available_indices(state))
        if not available:
            raise NoLegalMoveError("No legal move available")
        if marker_to_move(state) != self.player:
            raise ValueError("It is not this AI player's turn")

        self.nodes_searched = 0
        values: Dict[int, int] = {}
        for move in available:
            child = apply_move(state, move, self.player)
            remaining = tuple(i for i in available if i != move)
            values[move] = self.minimax(child, remaining, False, -math.inf, math.inf)
        logger.debug("AI %s move values: %s", self.player, values)
        return values

    # ---- core search ----

    def minimax(
        self,
        board_after_move: Tuple[str, ...],
        still_available: Tuple[int, ...],
        maximizing: bool,
        alpha: float,
        beta: float,
    ) -> int:
        self.nodes_searched += 1

        result = evaluate(board_after_move)
        if result is not None:
            return self._leaf_value(result)
        if not still_available:
            raise ValueError("Undecided board passed with no available moves")

        marker = self.player if maximizing else self.opponent

        if maximizing:
            value = -math.inf
            for move in still_available:
                child = apply_move(board_after_move, move, marker)
                remaining = tuple(i for i in still_available if i != move)
                score = self.minimax(child, remaining, False, alpha, beta)
                value = max(value, score)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
        else:
            value = math.inf
            for move in still_available:
                child = apply_move(board_after_move, move, marker)
                remaining = tuple(i for i in still_available if i != move)
                score = self.minimax(child, remaining, True, alpha, beta)
                value = min(value, score)
                beta = min(beta, value)
                if beta <= alpha:
                    break
        return int(value)

    def _leaf_value(self, result: str) -> int:
        if result == self.player:
            return 1
        if result == self.opponent:
            return -1
        if result == TIE:
            return 0
        raise ValueError(f"Unknown game result {result!r}")

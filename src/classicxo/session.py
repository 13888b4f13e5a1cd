"""Game controller tying the live board, the two players and the optional AI together."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import logging

from .ai import MinimaxAI
from .game import MARKERS, TIE, Board, Outcome

logger = logging.getLogger(__name__)


@dataclass
class Player:
    marker: str
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"Player {self.marker}"


ResultHandler = Callable[[str, Optional[Player]], None]


@dataclass
class GameController:
    """Turn order, move application and result reporting for one game session.

    Player 1 always moves first. When a bot controls player 2, its reply is
    computed and applied synchronously inside ``make_move``. ``on_result`` is
    called exactly once per finished game with the outcome and the winning
    player (``None`` for a tie).
    """

    board: Board = field(default_factory=Board)
    player1: Player = field(default_factory=lambda: Player("X"))
    player2: Player = field(default_factory=lambda: Player("O"))
    bot: Optional[MinimaxAI] = None
    on_result: Optional[ResultHandler] = field(default=None, repr=False)
    player1_turn: bool = True
    outcome: Outcome = None
    move_log: List[Dict[str, int | str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if (self.player1.marker, self.player2.marker) != MARKERS:
            raise ValueError(
                f"Player 1 must play {MARKERS[0]} and player 2 must play {MARKERS[1]}"
            )

    # ---- state ----

    @property
    def current_player(self) -> Player:
        return self.player1 if self.player1_turn else self.player2

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    @property
    def winner(self) -> Optional[Player]:
        if self.outcome == self.player1.marker:
            return self.player1
        if self.outcome == self.player2.marker:
            return self.player2
        return None

    # ---- commands ----

    def use_bot_for_player2(self, enabled: bool) -> None:
        self.bot = (
            MinimaxAI(player=self.player2.marker, opponent=self.player1.marker)
            if enabled
            else None
        )
        if self.bot is not None and not self.player1_turn and not self.finished:
            self.make_move(self.bot.choose(self.board.snapshot()))

    def make_move(self, index: int) -> None:
        if self.finished:
            raise ValueError("Game already finished")

        player = self.current_player
        self.board.fill_cell(index, player.marker)
        self.move_log.append({"player": player.marker, "index": index})

        result = self.board.result()
        if result is not None:
            self._finish(result)
            return

        self.player1_turn = not self.player1_turn
        if self.bot is not None and not self.player1_turn:
            self.make_move(self.bot.choose(self.board.snapshot()))

    def reset(self) -> None:
        self.board.reset()
        self.player1_turn = True
        self.outcome = None
        self.move_log.clear()

    # ---- helpers ----

    def _finish(self, result: str) -> None:
        self.outcome = result
        if result == TIE:
            logger.info("Game finished in a tie after %d moves", len(self.move_log))
        else:
            logger.info("Game won by %s after %d moves", result, len(self.move_log))
        if self.on_result is not None:
            self.on_result(result, self.winner)

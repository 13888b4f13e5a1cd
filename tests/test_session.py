"""Tests for the ClassicXO game controller."""

import pytest

from classicxo.game import EMPTY, TIE
from classicxo.session import GameController, Player


def _recorder():
    calls = []

    def on_result(outcome, winner):
        calls.append((outcome, winner))

    return calls, on_result


def test_default_player_names():
    controller = GameController()
    assert controller.player1.name == "Player X"
    assert controller.player2.name == "Player O"
    assert Player("X", "Ada").name == "Ada"


def test_players_alternate_without_bot():
    controller = GameController()
    controller.make_move(0)
    assert controller.board.cells[0] == "X"
    assert controller.current_player is controller.player2
    controller.make_move(4)
    assert controller.board.cells[4] == "O"
    assert controller.current_player is controller.player1


def test_win_reports_result_once():
    calls, on_result = _recorder()
    controller = GameController(on_result=on_result)
    for index in (0, 3, 1, 4, 2):
        controller.make_move(index)

    assert controller.outcome == "X"
    assert controller.winner is controller.player1
    assert calls == [("X", controller.player1)]

    with pytest.raises(ValueError, match="finished"):
        controller.make_move(8)
    assert len(calls) == 1


def test_tie_reports_no_winner():
    calls, on_result = _recorder()
    controller = GameController(on_result=on_result)
    for index in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        controller.make_move(index)
    assert controller.outcome == TIE
    assert controller.winner is None
    assert calls == [(TIE, None)]


def test_occupied_cell_keeps_turn():
    controller = GameController()
    controller.make_move(0)
    with pytest.raises(ValueError, match="occupied"):
        controller.make_move(0)
    assert controller.current_player is controller.player2
    assert len(controller.move_log) == 1


def test_bot_replies_immediately():
    controller = GameController()
    controller.use_bot_for_player2(True)
    controller.make_move(0)

    assert controller.board.cells[4] == "O"
    assert controller.current_player is controller.player1
    assert controller.move_log == [
        {"player": "X", "index": 0},
        {"player": "O", "index": 4},
    ]


def test_bot_game_never_lost_by_bot():
    calls, on_result = _recorder()
    controller = GameController(on_result=on_result)
    controller.use_bot_for_player2(True)
    while not controller.finished:
        controller.make_move(controller.board.available_indices()[0])

    assert controller.outcome in ("O", TIE)
    assert len(calls) == 1


def test_disabling_bot_returns_to_two_players():
    controller = GameController()
    controller.use_bot_for_player2(True)
    controller.use_bot_for_player2(False)
    controller.make_move(0)
    assert controller.board.cells.count(EMPTY) == 8


def test_reset_starts_over_with_player1():
    controller = GameController()
    controller.use_bot_for_player2(True)
    controller.make_move(0)
    controller.reset()
    assert controller.board.cells == [EMPTY] * 9
    assert controller.current_player is controller.player1
    assert controller.outcome is None
    assert controller.move_log == []


def test_players_need_distinct_markers():
    with pytest.raises(ValueError):
        GameController(player1=Player("X"), player2=Player("X"))


def test_player1_must_play_x():
    with pytest.raises(ValueError, match="Player 1 must play X"):
        GameController(player1=Player("O"), player2=Player("X"))


def test_enabling_bot_on_its_turn_replies_at_once():
    controller = GameController()
    controller.make_move(0)
    controller.use_bot_for_player2(True)

    assert controller.board.cells[4] == "O"
    assert controller.current_player is controller.player1
    controller.make_move(8)
    assert controller.board.cells[8] == "X"


def test_enabling_bot_on_player1_turn_waits():
    controller = GameController()
    controller.use_bot_for_player2(True)
    assert controller.move_log == []

from __future__ import annotations

import threading

from tictactoe import (
    ComputerPlayer,
    Difficulty,
    EngineIntegration,
    GameEngine,
    GameState,
    HumanPlayer,
)
from tictactoe.types import CellState, Move

X, O = CellState.X, CellState.O


def test_end_to_end_scenario():
    engine = GameEngine(HumanPlayer(X, "A"), HumanPlayer(O, "B"))
    for move in [Move(0, 0), Move(1, 0), Move(0, 1), Move(1, 1)]:
        assert engine.submit_move(move)
    assert engine.state is GameState.PLAYING
    assert engine.submit_move(Move(0, 2))
    assert engine.state is GameState.X_WINS
    for r in range(3):
        for c in range(3):
            assert not engine.submit_move(Move(r, c))


def test_human_vs_computer_flow():
    engine = GameEngine(HumanPlayer(X, "Human"), ComputerPlayer(O, "CPU", Difficulty.HARD))
    human_moves = iter([Move(0, 0), Move(2, 2), Move(0, 2), Move(1, 0), Move(2, 1),
                        Move(0, 1), Move(1, 2), Move(2, 0), Move(1, 1)])
    while engine.state is GameState.PLAYING:
        if engine.is_current_player_computer():
            assert engine.submit_move(engine.computer_move())
        else:
            # skip squares the computer already took
            while not engine.submit_move(next(human_moves)):
                pass
    assert engine.state in (GameState.O_WINS, GameState.DRAW)


def test_background_computer_move_is_delivered():
    engine = GameEngine(ComputerPlayer(X, "CPU", Difficulty.HARD), HumanPlayer(O, "Human"))
    integration = EngineIntegration(engine)
    results = []
    done = threading.Event()

    def on_complete(move, elapsed):
        results.append((move, elapsed))
        done.set()

    assert integration.request_computer_move(on_complete)
    assert done.wait(30)
    integration.wait(30)
    assert results[0][0] == Move(0, 0)
    assert results[0][1] >= 0
    assert not integration.is_thinking
    assert engine.submit_move(results[0][0])


class GatedPlayer(ComputerPlayer):
    """Computer player that waits for a gate before searching."""

    def __init__(self, mark, name, gate):
        super().__init__(mark, name, Difficulty.HARD)
        self.gate = gate

    def select_move(self, board):
        self.gate.wait(30)
        return super().select_move(board)


def test_cancelled_request_is_discarded():
    gate = threading.Event()
    engine = GameEngine(GatedPlayer(X, "CPU", gate), HumanPlayer(O, "Human"))
    integration = EngineIntegration(engine)
    results = []

    assert integration.request_computer_move(lambda move, elapsed: results.append(move))
    assert integration.is_thinking
    assert not integration.request_computer_move(lambda move, elapsed: results.append(move))
    integration.cancel()
    gate.set()
    integration.wait(30)
    assert results == []
    assert not integration.is_thinking


def test_request_refused_on_human_turn():
    engine = GameEngine(HumanPlayer(X, "Human"), ComputerPlayer(O, "CPU"))
    integration = EngineIntegration(engine)
    assert not integration.request_computer_move(lambda move, elapsed: None)


def test_integration_reset():
    gate = threading.Event()
    engine = GameEngine(GatedPlayer(X, "CPU", gate), HumanPlayer(O, "Human"))
    integration = EngineIntegration(engine)
    engine.submit_move(Move(1, 1))
    engine.submit_move(Move(0, 0))
    results = []
    assert integration.request_computer_move(lambda move, elapsed: results.append(move))
    timer = threading.Timer(0.05, gate.set)
    timer.start()
    integration.reset()
    timer.join()
    assert results == []
    assert engine.state is GameState.PLAYING
    assert engine.board.cell(1, 1) is CellState.EMPTY
    assert engine.current_player.mark is X


def test_reset_from_inside_callback():
    engine = GameEngine(ComputerPlayer(X, "CPU", Difficulty.HARD), HumanPlayer(O, "Human"))
    integration = EngineIntegration(engine)
    results = []
    errors = []
    done = threading.Event()

    def on_complete(move, elapsed):
        results.append(move)
        try:
            assert engine.submit_move(move)
            integration.reset()
        except Exception as exc:  # surfaced on the test thread below
            errors.append(exc)
        finally:
            done.set()

    assert integration.request_computer_move(on_complete)
    assert done.wait(30)
    integration.wait(30)
    assert errors == []
    assert results == [Move(0, 0)]
    assert engine.board.cell(0, 0) is CellState.EMPTY
    assert engine.current_player.mark is X


def test_cancel_waits_for_delivery_in_progress():
    engine = GameEngine(ComputerPlayer(X, "CPU", Difficulty.HARD), HumanPlayer(O, "Human"))
    integration = EngineIntegration(engine)
    entered = threading.Event()
    release = threading.Event()
    results = []

    def on_complete(move, elapsed):
        entered.set()
        release.wait(30)
        results.append(move)

    assert integration.request_computer_move(on_complete)
    assert entered.wait(30)
    canceller = threading.Thread(target=integration.cancel)
    canceller.start()
    canceller.join(0.1)
    assert canceller.is_alive()
    release.set()
    canceller.join(30)
    assert not canceller.is_alive()
    assert results == [Move(0, 0)]
    integration.wait(30)

import pytest

from tictactoe.board import Board, BoardView
from tictactoe.cli import (
    TicTacToeCLI,
    build_players,
    describe_result,
    main,
    parse_args,
    parse_move,
    render_board,
)
from tictactoe.engine import GameEngine
from tictactoe.players import ComputerPlayer, HumanPlayer
from tictactoe.types import CellState, Difficulty, GameState, Move


def scripted(lines):
    it = iter(lines)

    def fake_input(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return fake_input


def test_parse_move():
    assert parse_move("1 2") == Move(1, 2)
    assert parse_move(" 0,0 ") == Move(0, 0)
    assert parse_move("9 9") == Move(9, 9)
    assert parse_move("a b") is None
    assert parse_move("1") is None
    assert parse_move("") is None


def test_render_board():
    board = Board.from_rows(["X..", ".O.", "..."])
    text = render_board(BoardView(board), use_color=False, show_indices=False)
    lines = text.splitlines()
    assert lines[0] == " X |   |   "
    assert lines[2] == "   | O |   "
    assert len(lines) == 5

    indexed = render_board(BoardView(board), use_color=False, show_indices=True)
    assert indexed.splitlines()[0].split() == ["0", "1", "2"]

    colored = render_board(BoardView(board), use_color=True, show_indices=False)
    assert "\033[" in colored


def test_build_players():
    x, o = build_players("pvc", Difficulty.EASY, "o")
    assert isinstance(x, ComputerPlayer) and x.mark is CellState.X
    assert isinstance(o, HumanPlayer) and o.mark is CellState.O
    assert all(isinstance(p, HumanPlayer) for p in build_players("pvp", Difficulty.HARD, "x"))
    assert all(p.is_computer for p in build_players("cvc", Difficulty.HARD, "x", seed=1))


def test_scripted_human_game_reprompts_on_bad_input():
    engine = GameEngine(HumanPlayer(CellState.X, "A"), HumanPlayer(CellState.O, "B"))
    out = []
    cli = TicTacToeCLI(engine, scripted(["0 0", "0 0", "zz", "1 0", "0 1", "1 1", "0 2"]),
                       out.append, use_color=False)
    assert cli.run() is GameState.X_WINS
    assert any("already taken" in line for line in out)
    assert any("Invalid input" in line for line in out)
    assert out[-1] == "A (X) wins!"


def test_quit_ends_loop():
    engine = GameEngine(HumanPlayer(CellState.X, "A"), HumanPlayer(CellState.O, "B"))
    out = []
    cli = TicTacToeCLI(engine, scripted(["1 1", "q"]), out.append, use_color=False)
    assert cli.run() is GameState.PLAYING
    assert out[-1] == "Game in progress."


def test_computer_vs_computer_hard_draws():
    engine = GameEngine(*build_players("cvc", Difficulty.HARD, "x"))
    out = []
    cli = TicTacToeCLI(engine, scripted([]), out.append, use_color=False)
    assert cli.run() is GameState.DRAW
    assert describe_result(engine) == "It's a draw!"


def test_parse_args_defaults():
    args = parse_args([])
    assert args.mode == "pvc"
    assert args.difficulty is None
    with pytest.raises(SystemExit):
        parse_args(["--difficulty", "impossible"])


def test_main_runs_computer_game(capsys):
    assert main(["--mode", "cvc", "--difficulty", "easy", "--seed", "3"]) == 0
    captured = capsys.readouterr()
    assert "Welcome to Tic-Tac-Toe!" in captured.out

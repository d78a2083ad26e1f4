"""
Text front end. Everything here goes through the GameEngine contract.
"""
from __future__ import annotations

import argparse
import logging
from typing import Callable, List, Optional, Sequence

from config import (
    get_config,
    get_engine_settings,
    get_ui_settings,
    load_config_from_file,
    setup_logging,
)

from .board import BoardView
from .engine import GameEngine
from .players import ComputerPlayer, HumanPlayer, Player
from .types import CellState, Difficulty, GameState, Move

logger = logging.getLogger(__name__)

_COLORS = {CellState.X: "\033[1;31m", CellState.O: "\033[1;34m"}
_RESET = "\033[0m"


def render_board(board: BoardView, use_color: bool = False, show_indices: bool = True) -> str:
    """Render the board as text, one row per line."""
    lines: List[str] = []
    if show_indices:
        lines.append("    " + "   ".join(str(c) for c in range(board.size)))
    for r in range(board.size):
        cells = []
        for c in range(board.size):
            cell = board.cell(r, c)
            text = cell.symbol
            if use_color and cell in _COLORS:
                text = f"{_COLORS[cell]}{text}{_RESET}"
            cells.append(f" {text} ")
        prefix = f"{r} " if show_indices else ""
        lines.append(prefix + "|".join(cells))
        if r < board.size - 1:
            lines.append(("  " if show_indices else "") + "+".join(["---"] * board.size))
    return "\n".join(lines)


def parse_move(text: str) -> Optional[Move]:
    """Parse 'row col' (or 'row,col'). Returns None for unreadable input."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return Move(row, col)


def describe_result(engine: GameEngine) -> str:
    if engine.state is GameState.DRAW:
        return "It's a draw!"
    winner = engine.winner
    if winner is not None:
        return f"{winner.name} ({winner.mark.symbol}) wins!"
    return "Game in progress."


def build_players(mode: str, difficulty: Difficulty, play_as: str,
                  seed: Optional[int] = None) -> List[Player]:
    """Create the two players for a game mode: pvp, pvc or cvc."""
    if mode == "pvp":
        return [HumanPlayer(CellState.X, "Player 1"), HumanPlayer(CellState.O, "Player 2")]
    if mode == "cvc":
        second_seed = None if seed is None else seed + 1
        return [ComputerPlayer(CellState.X, "Computer X", difficulty, seed=seed),
                ComputerPlayer(CellState.O, "Computer O", difficulty, seed=second_seed)]
    human_mark = CellState.X if play_as.lower() == "x" else CellState.O
    return [HumanPlayer(human_mark, "Player 1"),
            ComputerPlayer(human_mark.opponent(), "Computer", difficulty, seed=seed)]


class TicTacToeCLI:
    """Interactive console loop over a GameEngine."""

    def __init__(self, engine: GameEngine,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print,
                 use_color: Optional[bool] = None,
                 show_indices: Optional[bool] = None) -> None:
        ui = get_ui_settings()
        self.engine = engine
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.use_color = ui.use_color if use_color is None else use_color
        self.show_indices = ui.show_indices if show_indices is None else show_indices

    def show_board(self) -> None:
        self.output_fn(render_board(self.engine.board, self.use_color, self.show_indices))

    def play_turn(self) -> bool:
        """Play one turn. Returns False if input ran out."""
        player = self.engine.current_player
        if self.engine.is_current_player_computer():
            self.output_fn(f"{player.name} is thinking...")
            move = self.engine.computer_move()
            if move is None or not self.engine.submit_move(move):
                logger.error("Computer produced no playable move")
                return False
            self.output_fn(f"{player.name} plays {move.row} {move.col}")
            return True

        while True:
            try:
                text = self.input_fn(f"{player.name} ({player.mark.symbol}), enter row col: ")
            except EOFError:
                return False
            if text.strip().lower() in ("q", "quit", "exit"):
                return False
            move = parse_move(text)
            if move is None:
                self.output_fn("Invalid input. Please enter two numbers (row and column, 0-2).")
                continue
            if not self.engine.submit_move(move):
                self.output_fn("Invalid move. That position is already taken or out of bounds.")
                continue
            return True

    def run(self) -> GameState:
        self.output_fn("Welcome to Tic-Tac-Toe!")
        self.output_fn("Enter moves as 'row col' (e.g. '1 1' for the center), 'q' to quit.")
        while self.engine.state is GameState.PLAYING:
            self.show_board()
            if not self.play_turn():
                break
        self.show_board()
        self.output_fn(describe_result(self.engine))
        return self.engine.state


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play tic-tac-toe in the terminal")
    ap.add_argument("--mode", choices=["pvp", "pvc", "cvc"], default="pvc",
                    help="Player vs player, player vs computer or computer vs computer")
    ap.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=None,
                    help="Computer difficulty (default from configuration)")
    ap.add_argument("--play-as", choices=["x", "o"], default="x", help="Human mark in pvc mode")
    ap.add_argument("--seed", type=int, default=None, help="Random seed for computer players")
    ap.add_argument("--config", default=None, help="JSON configuration file")
    ap.add_argument("--log-level", default=None, help="Override logging level")
    return ap.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    if args.config:
        load_config_from_file(args.config)
    setup_logging(args.log_level or get_config().logging.log_level)

    difficulty = Difficulty.parse(args.difficulty or get_engine_settings().default_difficulty)
    engine = GameEngine(*build_players(args.mode, difficulty, args.play_as, args.seed))
    TicTacToeCLI(engine).run()
    return 0

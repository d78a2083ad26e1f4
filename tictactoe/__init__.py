"""Tic-tac-toe package: board rules, game engine and difficulty-tiered AI.

Usage examples:
    from tictactoe import GameEngine, HumanPlayer, ComputerPlayer
    from tictactoe import SearchEngine, Difficulty
"""
from __future__ import annotations

from .types import (
    BOARD_SIZE,
    FIRST_MARK,
    CellState,
    ConfigurationError,
    Difficulty,
    GameState,
    Move,
    SearchStats,
)
from .board import Board, BoardView, WIN_LINES, legal_moves
from .eval import Evaluator, LineHeuristicEvaluator, get_evaluator
from .search import (
    AlphaBetaStrategy,
    DepthLimitedMinimaxStrategy,
    RandomStrategy,
    SearchEngine,
    SearchStrategy,
    find_immediate_move,
    get_search_strategy,
)
from .players import ComputerPlayer, HumanPlayer, Player
from .engine import GameEngine, play_computer_game
from .integration import EngineIntegration

__all__ = [
    "BOARD_SIZE",
    "FIRST_MARK",
    "CellState",
    "ConfigurationError",
    "Difficulty",
    "GameState",
    "Move",
    "SearchStats",
    "Board",
    "BoardView",
    "WIN_LINES",
    "legal_moves",
    "Evaluator",
    "LineHeuristicEvaluator",
    "get_evaluator",
    "SearchStrategy",
    "RandomStrategy",
    "DepthLimitedMinimaxStrategy",
    "AlphaBetaStrategy",
    "SearchEngine",
    "find_immediate_move",
    "get_search_strategy",
    "Player",
    "HumanPlayer",
    "ComputerPlayer",
    "GameEngine",
    "play_computer_game",
    "EngineIntegration",
]

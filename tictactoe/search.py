"""
Search strategies and the difficulty-tiered search engine.

Every strategy explores hypothetical positions on board copies and never
mutates the board it is given. Move enumeration is row-major, and the first
move reaching the best score wins ties.
"""
from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from config import EngineSettings, get_engine_settings

from .board import Board, legal_moves
from .eval import Evaluator, LineHeuristicEvaluator
from .types import CellState, Difficulty, Move, RandomSource, SearchStats

logger = logging.getLogger(__name__)

INF = float("inf")


def find_immediate_move(board: Board, mark: CellState) -> Tuple[Optional[Move], Optional[str]]:
    """Scan for a move that wins now, else one that blocks the opponent's win.

    Returns (move, "win"), (move, "block") or (None, None).
    """
    moves = legal_moves(board)
    for move in moves:
        trial = board.copy()
        trial.place(move, mark)
        if trial.has_won(mark):
            return move, "win"
    opponent = mark.opponent()
    for move in moves:
        trial = board.copy()
        trial.place(move, opponent)
        if trial.has_won(opponent):
            return move, "block"
    return None, None


class SearchStrategy(ABC):
    """Abstract interface for move selection strategies."""

    name: str = "strategy"

    def __init__(self) -> None:
        self.nodes = 0
        self.last_score: Optional[int] = None

    @abstractmethod
    def choose(self, board: Board, mark: CellState) -> Optional[Move]:  # pragma: no cover
        raise NotImplementedError


class RandomStrategy(SearchStrategy):
    """Uniformly random legal move."""

    name = "random"

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        super().__init__()
        self.rng: RandomSource = rng if rng is not None else random.Random()

    def choose(self, board: Board, mark: CellState) -> Optional[Move]:
        self.nodes = 0
        self.last_score = None
        moves = legal_moves(board)
        if not moves:
            return None
        return self.rng.choice(moves)


class MinimaxStrategy(SearchStrategy):
    """Minimax over board copies, optionally depth-limited and/or pruned.

    Scores are from the searching mark's point of view: a win scores
    win_base - depth, a loss depth - win_base and a draw 0. depth is 0 for
    the position right after the candidate root move, so depth + 1 plies
    have been played from the root. Once max_depth plies are reached on a
    non-terminal position the evaluator supplies the score.
    """

    name = "minimax"

    def __init__(
        self,
        win_base: int = 100,
        max_depth: Optional[int] = None,
        evaluator: Optional[Evaluator] = None,
        prune: bool = False,
    ) -> None:
        super().__init__()
        if max_depth is not None and evaluator is None:
            raise ValueError("A depth-limited search needs an evaluator")
        self.win_base = win_base
        self.max_depth = max_depth
        self.evaluator = evaluator
        self.prune = prune

    def choose(self, board: Board, mark: CellState) -> Optional[Move]:
        self.nodes = 0
        self.last_score = None
        moves = legal_moves(board)
        if not moves:
            return None

        opponent = mark.opponent()
        best_score = -INF
        best_move: Optional[Move] = None
        alpha = -INF
        for move in moves:
            child = board.copy()
            child.place(move, mark)
            score = self._minimax(child, 0, False, mark, opponent, alpha, INF)
            if score > best_score:
                best_score = score
                best_move = move
            if self.prune and best_score > alpha:
                alpha = best_score
        self.last_score = int(best_score)
        return best_move

    def _minimax(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        mark: CellState,
        opponent: CellState,
        alpha: float,
        beta: float,
    ) -> float:
        self.nodes += 1

        if board.has_won(mark):
            return self.win_base - depth
        if board.has_won(opponent):
            return depth - self.win_base
        if board.is_full():
            return 0
        if self.max_depth is not None and depth + 1 >= self.max_depth:
            return self.evaluator.evaluate_position(board, mark)  # type: ignore[union-attr]

        if maximizing:
            best = -INF
            for move in legal_moves(board):
                child = board.copy()
                child.place(move, mark)
                score = self._minimax(child, depth + 1, False, mark, opponent, alpha, beta)
                if score > best:
                    best = score
                if self.prune:
                    if best > alpha:
                        alpha = best
                    if beta <= alpha:
                        break
            return best

        best = INF
        for move in legal_moves(board):
            child = board.copy()
            child.place(move, opponent)
            score = self._minimax(child, depth + 1, True, mark, opponent, alpha, beta)
            if score < best:
                best = score
            if self.prune:
                if best < beta:
                    beta = best
                if beta <= alpha:
                    break
        return best


class DepthLimitedMinimaxStrategy(MinimaxStrategy):
    """Plain minimax cut off at max_depth with a heuristic at the frontier."""

    name = "depth_limited_minimax"

    def __init__(
        self,
        max_depth: int = 5,
        win_base: int = 100,
        evaluator: Optional[Evaluator] = None,
    ) -> None:
        super().__init__(
            win_base=win_base,
            max_depth=max_depth,
            evaluator=evaluator if evaluator is not None else LineHeuristicEvaluator(),
            prune=False,
        )


class AlphaBetaStrategy(MinimaxStrategy):
    """Full-depth minimax with alpha-beta pruning. Never loses at 3x3."""

    name = "alpha_beta"

    def __init__(self, win_base: int = 100) -> None:
        super().__init__(win_base=win_base, max_depth=None, evaluator=None, prune=True)


class SearchEngine:
    """Chooses a move for a mark according to a difficulty tier.

    Easy plays a uniformly random legal move. Medium searches with
    probability medium_search_probability (win/block scan, then
    depth-limited minimax) and otherwise plays like Easy. Hard runs the
    win/block scan, then full alpha-beta search.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.HARD,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        settings: Optional[EngineSettings] = None,
        evaluator: Optional[Evaluator] = None,
    ) -> None:
        self.difficulty = Difficulty.parse(difficulty)
        self.settings = settings if settings is not None else get_engine_settings()
        self.rng: RandomSource = rng if rng is not None else random.Random(seed)
        self.last_stats = SearchStats()

        self._random = RandomStrategy(self.rng)
        self._depth_limited = DepthLimitedMinimaxStrategy(
            max_depth=self.settings.medium_max_depth,
            win_base=self.settings.win_base,
            evaluator=evaluator if evaluator is not None
            else LineHeuristicEvaluator(self.settings.heuristic_line_weight),
        )
        self._alpha_beta = AlphaBetaStrategy(win_base=self.settings.win_base)

    def choose_move(self, board: Board, mark: CellState) -> Optional[Move]:
        """Return a legal move for mark, or None when the board is full."""
        if mark is CellState.EMPTY:
            raise ValueError("Cannot search for the EMPTY mark")

        if self.difficulty is Difficulty.EASY:
            move = self._run(self._random, board, mark)
        elif self.difficulty is Difficulty.MEDIUM:
            if self.rng.random() < self.settings.medium_search_probability:
                move = self._search_with_shortcut(self._depth_limited, board, mark)
            else:
                move = self._run(self._random, board, mark)
        else:
            move = self._search_with_shortcut(self._alpha_beta, board, mark)

        logger.debug(
            "%s move for %s: %s (%s, %d nodes%s)",
            self.difficulty.value, mark.name, move, self.last_stats.strategy,
            self.last_stats.nodes,
            f", {self.last_stats.shortcut}" if self.last_stats.shortcut else "",
        )
        return move

    def _search_with_shortcut(
        self, strategy: SearchStrategy, board: Board, mark: CellState
    ) -> Optional[Move]:
        move, reason = find_immediate_move(board, mark)
        if move is not None:
            self.last_stats = SearchStats(strategy=strategy.name, shortcut=reason)
            return move
        return self._run(strategy, board, mark)

    def _run(self, strategy: SearchStrategy, board: Board, mark: CellState) -> Optional[Move]:
        move = strategy.choose(board, mark)
        self.last_stats = SearchStats(
            strategy=strategy.name, nodes=strategy.nodes, score=strategy.last_score
        )
        return move


def get_search_strategy(
    difficulty: Difficulty, rng: Optional[RandomSource] = None
) -> SearchStrategy:
    """Factory for the raw strategy behind a difficulty (no win/block scan)."""
    settings = get_engine_settings()
    difficulty = Difficulty.parse(difficulty)
    if difficulty is Difficulty.EASY:
        return RandomStrategy(rng)
    if difficulty is Difficulty.MEDIUM:
        return DepthLimitedMinimaxStrategy(
            max_depth=settings.medium_max_depth,
            win_base=settings.win_base,
            evaluator=LineHeuristicEvaluator(settings.heuristic_line_weight),
        )
    return AlphaBetaStrategy(win_base=settings.win_base)


__all__: List[str] = [
    "SearchStrategy",
    "RandomStrategy",
    "MinimaxStrategy",
    "DepthLimitedMinimaxStrategy",
    "AlphaBetaStrategy",
    "SearchEngine",
    "find_immediate_move",
    "get_search_strategy",
]

"""
Evaluation interfaces and the two-in-a-row line heuristic used at the
depth cutoff of the depth-limited search.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from config import get_engine_settings

from .board import WIN_LINE_INDICES, Board
from .types import CellState


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, board: Board, mark: CellState) -> int:  # pragma: no cover
        """Evaluate a single board position for the given mark."""
        raise NotImplementedError


def _count_open(lines: np.ndarray, value: int) -> int:
    """Lines (rows of an (8, 3) array) with two cells equal to value and one empty."""
    own = np.count_nonzero(lines == value, axis=1)
    empty = np.count_nonzero(lines == 0, axis=1)
    return int(np.count_nonzero((own == 2) & (empty == 1)))


class LineHeuristicEvaluator(Evaluator):
    """Counts open two-in-a-row lines.

    A line is open for a mark when it holds exactly two of that mark and one
    empty cell. The score is weight * (own open lines - opponent open lines).
    """

    def __init__(self, line_weight: Optional[int] = None) -> None:
        if line_weight is None:
            line_weight = get_engine_settings().heuristic_line_weight
        self.line_weight = int(line_weight)

    def open_lines(self, board: Board, mark: CellState) -> int:
        return _count_open(board.as_array().reshape(-1)[WIN_LINE_INDICES], mark.value)

    def evaluate_position(self, board: Board, mark: CellState) -> int:
        lines = board.as_array().reshape(-1)[WIN_LINE_INDICES]
        mine = _count_open(lines, mark.value)
        theirs = _count_open(lines, -mark.value)
        return self.line_weight * mine - self.line_weight * theirs


def get_evaluator() -> Evaluator:
    """Factory for the default evaluator."""
    return LineHeuristicEvaluator()


__all__ = [
    "Evaluator",
    "LineHeuristicEvaluator",
    "get_evaluator",
]

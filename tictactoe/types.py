"""
Type definitions and protocols for the tic-tac-toe engine.

This module provides:
- Enumerations for cell contents, game outcome and AI difficulty
- The immutable Move value type
- Error classes for API misuse
- The RandomSource protocol for injectable randomness
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence, TypeVar

T = TypeVar('T')

BOARD_SIZE = 3


class CellState(Enum):
    """Contents of a single board cell."""
    EMPTY = 0
    X = 1
    O = -1

    @property
    def symbol(self) -> str:
        return {CellState.EMPTY: " ", CellState.X: "X", CellState.O: "O"}[self]

    def opponent(self) -> "CellState":
        """Get the opposing mark. EMPTY has no opponent."""
        if self is CellState.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return CellState.O if self is CellState.X else CellState.X


# Mark that always moves first
FIRST_MARK = CellState.X


class GameState(Enum):
    """Overall game outcome. PLAYING is the only non-terminal state."""
    PLAYING = "playing"
    X_WINS = "x_wins"
    O_WINS = "o_wins"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not GameState.PLAYING


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Any) -> "Difficulty":
        """Accept a Difficulty or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown difficulty {value!r}; expected one of {[d.value for d in cls]}"
            ) from None


@dataclass(frozen=True)
class Move:
    """Immutable (row, col) coordinate. Not tied to any board instance."""
    row: int
    col: int

    def __str__(self) -> str:
        return f"Move({self.row}, {self.col})"


@dataclass
class SearchStats:
    """Statistics from the most recent move selection."""
    strategy: str = ""
    nodes: int = 0
    shortcut: Optional[str] = None  # "win" or "block" when the scan decided the move
    score: Optional[int] = None


class ConfigurationError(ValueError):
    """Raised when a game engine is constructed with an invalid player setup."""


class RandomSource(Protocol):
    """Subset of random.Random used by the search engine."""

    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


def all_coordinates(size: int = BOARD_SIZE) -> List[Move]:
    """Every coordinate in row-major order (rows 0..2, then columns 0..2)."""
    return [Move(r, c) for r in range(size) for c in range(size)]

"""
Player variants: humans submit moves from outside the engine, computers
select them through the search engine.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .board import Board
from .search import SearchEngine
from .types import CellState, Difficulty, Move, RandomSource


class Player(ABC):
    """A participant with a fixed mark and display name."""

    def __init__(self, mark: CellState, name: str) -> None:
        if not isinstance(mark, CellState):
            raise TypeError(f"mark must be a CellState, got {type(mark).__name__}")
        self._mark = mark
        self._name = str(name)

    @property
    def mark(self) -> CellState:
        return self._mark

    @property
    def name(self) -> str:
        return self._name

    @property
    @abstractmethod
    def is_computer(self) -> bool:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def select_move(self, board: Board) -> Optional[Move]:  # pragma: no cover
        """Produce a move for this player's mark on board."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._mark.name}, {self._name!r})"


class HumanPlayer(Player):
    """Holds player data only; moves arrive through GameEngine.submit_move()."""

    @property
    def is_computer(self) -> bool:
        return False

    def select_move(self, board: Board) -> Optional[Move]:
        raise NotImplementedError(
            "HumanPlayer moves must be submitted through GameEngine.submit_move()"
        )


class ComputerPlayer(Player):
    """AI player backed by a SearchEngine at a fixed difficulty."""

    def __init__(
        self,
        mark: CellState,
        name: str,
        difficulty: Difficulty = Difficulty.HARD,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        engine: Optional[SearchEngine] = None,
    ) -> None:
        super().__init__(mark, name)
        if engine is None:
            engine = SearchEngine(difficulty, rng=rng, seed=seed)
        self.search_engine = engine

    @property
    def difficulty(self) -> Difficulty:
        return self.search_engine.difficulty

    @property
    def is_computer(self) -> bool:
        return True

    def select_move(self, board: Board) -> Optional[Move]:
        return self.search_engine.choose_move(board, self._mark)

    def __repr__(self) -> str:
        return f"ComputerPlayer({self._mark.name}, {self._name!r}, {self.difficulty.value})"

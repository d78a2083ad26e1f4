"""
Game flow: turn management, move application and outcome detection.

The engine is UI-agnostic and never calls back into a presentation layer.
It is single-threaded; callers must not submit a move while a
computer_move() call is still running on the same instance.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from .board import Board, BoardView
from .players import Player
from .types import FIRST_MARK, CellState, ConfigurationError, GameState, Move

logger = logging.getLogger(__name__)


class GameEngine:
    """Owns the board, both players, the turn and the game state."""

    def __init__(self, player_one: Optional[Player], player_two: Optional[Player]) -> None:
        if player_one is None or player_two is None:
            raise ConfigurationError("Two players are required")
        if player_one is player_two:
            raise ConfigurationError("Players must be distinct")

        by_mark: Dict[CellState, Player] = {}
        for player in (player_one, player_two):
            if player.mark is CellState.EMPTY:
                raise ConfigurationError(f"{player.name} has no mark")
            if player.mark in by_mark:
                raise ConfigurationError(f"Both players use mark {player.mark.name}")
            by_mark[player.mark] = player

        self._players: Dict[CellState, Player] = by_mark
        self._board = Board()
        self._view = BoardView(self._board)
        self._current: Player = by_mark[FIRST_MARK]
        self._state = GameState.PLAYING

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> BoardView:
        """Read-only view of the live board."""
        return self._view

    @property
    def current_player(self) -> Player:
        return self._current

    @property
    def players(self) -> Tuple[Player, Player]:
        """(first mover, second mover)."""
        first = self._players[FIRST_MARK]
        return first, self._players[FIRST_MARK.opponent()]

    @property
    def winner(self) -> Optional[Player]:
        if self._state is GameState.X_WINS:
            return self._players[CellState.X]
        if self._state is GameState.O_WINS:
            return self._players[CellState.O]
        return None

    def player_for(self, mark: CellState) -> Player:
        return self._players[mark]

    def is_current_player_computer(self) -> bool:
        return self._current.is_computer

    def submit_move(self, move: Optional[Move]) -> bool:
        """Apply move for the current player.

        Returns False, leaving everything unchanged, when the game is over or
        the move is illegal on the current board.
        """
        if self._state is not GameState.PLAYING:
            return False
        if not self._board.place(move, self._current.mark):
            return False

        self._update_state()
        logger.debug("%s played %s -> %s", self._current.name, move, self._state.value)
        if self._state is GameState.PLAYING:
            self._switch_player()
        else:
            logger.info("Game over: %s", self._state.value)
        return True

    def submit(self, row: int, col: int) -> bool:
        return self.submit_move(Move(row, col))

    def computer_move(self) -> Optional[Move]:
        """Ask the current computer player for a move without applying it.

        Returns None when the game is over or a human has the turn.
        """
        if self._state is not GameState.PLAYING or not self._current.is_computer:
            return None
        return self._current.select_move(self._view)  # type: ignore[arg-type]

    def reset(self) -> None:
        """Clear the board and give the first mover the turn again."""
        self._board.clear()
        self._current = self._players[FIRST_MARK]
        self._state = GameState.PLAYING
        logger.debug("Game reset")

    def _update_state(self) -> None:
        if self._board.has_won(CellState.X):
            self._state = GameState.X_WINS
        elif self._board.has_won(CellState.O):
            self._state = GameState.O_WINS
        elif self._board.is_full():
            self._state = GameState.DRAW
        else:
            self._state = GameState.PLAYING

    def _switch_player(self) -> None:
        self._current = self._players[self._current.mark.opponent()]


def play_computer_game(engine: GameEngine, max_turns: int = 9) -> GameState:
    """Let computer players move until the game ends or a human has the turn."""
    for _ in range(max_turns):
        if engine.state is not GameState.PLAYING:
            break
        move = engine.computer_move()
        if move is None or not engine.submit_move(move):
            break
    return engine.state

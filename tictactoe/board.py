from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .types import BOARD_SIZE, CellState, Move, all_coordinates

Position = Tuple[int, int]

# All eight winning lines as (row, col) triples: rows, columns, diagonals
WIN_LINES: List[Tuple[Position, Position, Position]] = (
    [tuple((r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE)]
    + [tuple((r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)]
    + [tuple((i, i) for i in range(BOARD_SIZE)),
       tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE))]
)  # type: ignore[assignment]

# Same lines as flat indices into a row-major board array
WIN_LINE_INDICES: np.ndarray = np.array(
    [[r * BOARD_SIZE + c for r, c in line] for line in WIN_LINES], dtype=np.intp
)

_COORDINATES: List[Move] = all_coordinates()


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


class Board:
    """Fixed 3x3 grid of cell states.

    The board is mutated only through place() and clear(). Use copy() to get
    an independent board for exploring hypothetical moves.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: List[List[CellState]] = [
            [CellState.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    @classmethod
    def from_rows(cls, rows: List[str]) -> "Board":
        """Build a board from strings such as ["XO ", " X ", "  O"].

        '.', '-', '_' and ' ' all mean an empty cell.
        """
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"Expected {BOARD_SIZE} rows of {BOARD_SIZE} characters")
        board = cls()
        for r, line in enumerate(rows):
            for c, ch in enumerate(line.upper()):
                if ch == "X":
                    board._grid[r][c] = CellState.X
                elif ch == "O":
                    board._grid[r][c] = CellState.O
                elif ch not in " .-_":
                    raise ValueError(f"Invalid cell character {ch!r}")
        return board

    @property
    def size(self) -> int:
        return BOARD_SIZE

    def cell(self, row: int, col: int) -> CellState:
        if not in_bounds(row, col):
            raise IndexError(f"Position out of bounds: ({row}, {col})")
        return self._grid[row][col]

    def is_legal(self, move: Optional[Move]) -> bool:
        """True iff the move is in range and targets an empty cell."""
        if move is None:
            return False
        if not in_bounds(move.row, move.col):
            return False
        return self._grid[move.row][move.col] is CellState.EMPTY

    def place(self, move: Optional[Move], mark: CellState) -> bool:
        """Place mark if the move is legal; returns whether it was placed."""
        if not self.is_legal(move):
            return False
        self._grid[move.row][move.col] = mark  # type: ignore[union-attr]
        return True

    def is_full(self) -> bool:
        return all(cell is not CellState.EMPTY for row in self._grid for cell in row)

    def has_won(self, mark: CellState) -> bool:
        if mark is CellState.EMPTY:
            return False
        grid = self._grid
        for line in WIN_LINES:
            if all(grid[r][c] is mark for r, c in line):
                return True
        return False

    def winner(self) -> Optional[CellState]:
        """The mark holding a complete line, or None."""
        for mark in (CellState.X, CellState.O):
            if self.has_won(mark):
                return mark
        return None

    def empty_cells(self) -> List[Move]:
        """Legal moves in row-major order."""
        return [m for m in _COORDINATES if self._grid[m.row][m.col] is CellState.EMPTY]

    def copy(self) -> "Board":
        """Deep copy owning a separate grid."""
        other = Board.__new__(Board)
        other._grid = [list(row) for row in self._grid]
        return other

    def clear(self) -> None:
        for row in self._grid:
            for c in range(BOARD_SIZE):
                row[c] = CellState.EMPTY

    def as_array(self) -> np.ndarray:
        """Row-major int8 array: +1 for X, -1 for O, 0 for empty."""
        return np.array(
            [[cell.value for cell in row] for row in self._grid], dtype=np.int8
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Board, BoardView)):
            return NotImplemented
        return all(
            self.cell(m.row, m.col) is other.cell(m.row, m.col) for m in _COORDINATES
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "\n".join("".join(cell.symbol if cell is not CellState.EMPTY else "."
                                 for cell in row) for row in self._grid)

    def __repr__(self) -> str:
        return f"Board({[''.join(c.symbol for c in row) for row in self._grid]!r})"


class BoardView:
    """Read-only view of a Board owned by someone else (the game engine)."""

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def size(self) -> int:
        return self._board.size

    def cell(self, row: int, col: int) -> CellState:
        return self._board.cell(row, col)

    def is_legal(self, move: Optional[Move]) -> bool:
        return self._board.is_legal(move)

    def is_full(self) -> bool:
        return self._board.is_full()

    def has_won(self, mark: CellState) -> bool:
        return self._board.has_won(mark)

    def winner(self) -> Optional[CellState]:
        return self._board.winner()

    def empty_cells(self) -> List[Move]:
        return self._board.empty_cells()

    def copy(self) -> Board:
        """Independent, mutable snapshot of the viewed board."""
        return self._board.copy()

    def as_array(self) -> np.ndarray:
        return self._board.as_array()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Board, BoardView)):
            return self._board == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return str(self._board)


def legal_moves(board: Board) -> List[Move]:
    """All legal moves on board, scanning rows 0..2 then columns 0..2."""
    return board.empty_cells()

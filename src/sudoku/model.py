"""Board, cell and region data structures.

A Board is immutable: `set` and `clear` return new Boards and the values of an
existing Board never change. Cells and regions are lightweight views over a
Board, created on demand.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from math import isqrt
from numbers import Integral
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from . import diagnostics, propagation
from .exceptions import InvalidValue, OutOfRange
from src.utils.trace import get_tracer

Candidates = propagation.Candidates


def _is_integer(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


@dataclass(frozen=True, eq=False)
class Board:
    """
    An s²×s² grid of optional values. `size` is the box dimension s.
    Boards compare by identity so that memoized results of two Boards with the
    same content never mix.
    """

    size: int
    values: Tuple[Optional[int], ...] = field(repr=False)
    memo: propagation.CandidateMemo = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Board size must be >= 1, got {self.size}")
        expected = self.region_size * self.region_size
        if len(self.values) != expected:
            raise ValueError(f"Expected {expected} values for size {self.size}, got {len(self.values)}")
        object.__setattr__(self, "memo", propagation.CandidateMemo())

    @classmethod
    def create(cls, size: int) -> "Board":
        region_size = size * size
        return cls(size=size, values=(None,) * (region_size * region_size))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[int]]]) -> "Board":
        """Build a Board from a square list of rows; 0 or None marks an empty cell."""
        region_size = len(rows)
        if region_size == 0 or any(len(row) != region_size for row in rows):
            raise ValueError("Board must be square (N x N).")
        size = isqrt(region_size)
        if size * size != region_size:
            raise ValueError(f"Invalid size: {region_size}. Only perfect squares are supported (4, 9, 16, ...).")

        values: List[Optional[int]] = []
        for r, row in enumerate(rows, start=1):
            for c, raw in enumerate(row, start=1):
                if raw is None or (_is_integer(raw) and raw == 0):
                    values.append(None)
                    continue
                if not _is_integer(raw) or not 1 <= raw <= region_size:
                    raise InvalidValue(f"Invalid value at ({r},{c}): {raw} (allowed: 1..{region_size}).")
                values.append(int(raw))
        return cls(size=size, values=tuple(values))

    @property
    def region_size(self) -> int:
        return self.size * self.size

    @property
    def max_value(self) -> int:
        return self.region_size

    def all_values(self) -> Candidates:
        return tuple(range(1, self.max_value + 1))

    def cell(self, row: int, column: int) -> "Cell":
        self._check_indexes(row, column)
        return Cell(self, row, column)

    def cells(self) -> Tuple["Cell", ...]:
        n = self.region_size
        return tuple(Cell(self, r, c) for r in range(1, n + 1) for c in range(1, n + 1))

    def empty_cells(self) -> Tuple["Cell", ...]:
        return tuple(cell for cell in self.cells() if cell.value is None)

    def row(self, row: int) -> "Row":
        if not 1 <= row <= self.region_size:
            raise OutOfRange(f"Row out of bound: ({row}) - region_size = {self.region_size}")
        return Row(self, row)

    def column(self, column: int) -> "Column":
        if not 1 <= column <= self.region_size:
            raise OutOfRange(f"Column out of bound: ({column}) - region_size = {self.region_size}")
        return Column(self, column)

    def box(self, box_row: int, box_column: int) -> "Box":
        if not (1 <= box_row <= self.size and 1 <= box_column <= self.size):
            raise OutOfRange(
                f"Box row, column out of bound: ({box_row}, {box_column}) - size = {self.size}"
            )
        return Box(self, box_row, box_column)

    def rows(self) -> Tuple["Row", ...]:
        return tuple(Row(self, i) for i in range(1, self.region_size + 1))

    def columns(self) -> Tuple["Column", ...]:
        return tuple(Column(self, i) for i in range(1, self.region_size + 1))

    def boxes(self) -> Tuple["Box", ...]:
        return tuple(
            Box(self, br, bc) for br in range(1, self.size + 1) for bc in range(1, self.size + 1)
        )

    def set(self, value: int, row: int, column: int) -> "Board":
        """Return a new Board with `value` placed; rule violations are allowed."""
        self._check_indexes(row, column)
        self._check_value(value)
        board = self._with_slot(row, column, int(value))
        get_tracer().log_place(f"r{row}c{column}", value)
        return board

    def clear(self, row: int, column: int) -> "Board":
        self._check_indexes(row, column)
        board = self._with_slot(row, column, None)
        get_tracer().log_clear(f"r{row}c{column}")
        return board

    def is_complete(self) -> bool:
        return all(v is not None for v in self.values)

    def to_rows(self) -> List[List[int]]:
        n = self.region_size
        return [[self.values[r * n + c] or 0 for c in range(n)] for r in range(n)]

    def unfillable_erroneous_cells(self) -> FrozenSet["Cell"]:
        return diagnostics.unfillable_erroneous_cells(self)

    def _with_slot(self, row: int, column: int, value: Optional[int]) -> "Board":
        values = list(self.values)
        values[self._index(row, column)] = value
        return Board(size=self.size, values=tuple(values))

    def _check_value(self, value: int) -> None:
        if not _is_integer(value) or not 1 <= value <= self.max_value:
            raise InvalidValue(f"Value = {value} shall be in [1 {self.max_value}]")

    def _check_indexes(self, row: int, column: int) -> None:
        n = self.region_size
        if not (1 <= row <= n and 1 <= column <= n):
            raise OutOfRange(f"Row, column out of bound: ({row}, {column}) - region_size = {n}")

    def _index(self, row: int, column: int) -> int:
        return (row - 1) * self.region_size + (column - 1)


@dataclass(frozen=True)
class Cell:
    """A position on a specific Board. Equality includes the Board identity."""

    board: Board = field(repr=False)
    row: int
    column: int

    @property
    def key(self) -> Tuple[int, int]:
        return (self.row, self.column)

    @property
    def value(self) -> Optional[int]:
        return self.board.values[self.board._index(self.row, self.column)]

    @property
    def box_row(self) -> int:
        return (self.row - 1) // self.board.size + 1

    @property
    def box_column(self) -> int:
        return (self.column - 1) // self.board.size + 1

    @property
    def row_in_box(self) -> int:
        return (self.row - 1) % self.board.size + 1

    @property
    def column_in_box(self) -> int:
        return (self.column - 1) % self.board.size + 1

    def box(self) -> "Box":
        return Box(self.board, self.box_row, self.box_column)

    def neighborhood(self) -> Tuple["Row", "Column", "Box"]:
        """The three regions of the cell, in the order Row, Column, Box."""
        return (Row(self.board, self.row), Column(self.board, self.column), self.box())

    def candidates(self, level: int = 0) -> Candidates:
        return propagation.candidates(self, level)

    def tightened(self, level: int = 0) -> Candidates:
        return propagation.tightened(self, level)

    def possible_values(self) -> Candidates:
        """Values that would not duplicate a value already placed in the neighborhood."""
        return propagation.candidates(self, 0)


class Region(ABC):
    """Row, Column or Box: a group of cells that may not repeat a value."""

    board: Board
    kind: str = ""

    @abstractmethod
    def cells(self) -> Tuple[Cell, ...]:
        ...

    def empty_cells(self) -> Tuple[Cell, ...]:
        return tuple(cell for cell in self.cells() if cell.value is None)

    def used_values(self) -> Candidates:
        return tuple(sorted({cell.value for cell in self.cells() if cell.value is not None}))

    def missing_values(self) -> Candidates:
        used = set(self.used_values())
        return tuple(v for v in self.board.all_values() if v not in used)

    def duplicate_value_errors(self) -> FrozenSet[Cell]:
        """Cells whose placed value also appears on another member of the region."""
        by_value: Dict[int, List[Cell]] = {}
        for cell in self.cells():
            if cell.value is not None:
                by_value.setdefault(cell.value, []).append(cell)
        return frozenset(
            cell for cells in by_value.values() if len(cells) > 1 for cell in cells
        )

    def impossible_to_fill_value_errors(self) -> Candidates:
        """Missing values that no empty member can hold at the used constraint level."""
        empties = self.empty_cells()
        impossible = []
        for value in self.missing_values():
            if not any(
                value in cell.candidates(propagation.USED_CONSTRAINT_LEVEL) for cell in empties
            ):
                impossible.append(value)
        return tuple(impossible)


@dataclass(frozen=True)
class Row(Region):
    board: Board = field(repr=False)
    index: int
    kind = "row"

    def cells(self) -> Tuple[Cell, ...]:
        return tuple(Cell(self.board, self.index, c) for c in range(1, self.board.region_size + 1))


@dataclass(frozen=True)
class Column(Region):
    board: Board = field(repr=False)
    index: int
    kind = "column"

    def cells(self) -> Tuple[Cell, ...]:
        return tuple(Cell(self.board, r, self.index) for r in range(1, self.board.region_size + 1))


@dataclass(frozen=True)
class Box(Region):
    board: Board = field(repr=False)
    box_row: int
    box_column: int
    kind = "box"

    def cells(self) -> Tuple[Cell, ...]:
        s = self.board.size
        r0 = (self.box_row - 1) * s
        c0 = (self.box_column - 1) * s
        return tuple(
            Cell(self.board, r0 + i, c0 + j) for i in range(1, s + 1) for j in range(1, s + 1)
        )

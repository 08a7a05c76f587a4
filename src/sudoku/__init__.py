"""Grid puzzle boards, regions, and the candidate elimination engine."""

from .exceptions import InvalidValue, OutOfRange
from .model import Board, Box, Cell, Column, Region, Row
from .propagation import NUM_CONSTRAINT_LEVELS, USED_CONSTRAINT_LEVEL, candidates, tightened
from .diagnostics import BoardErrors, board_errors, unfillable_erroneous_cells
from .loader import load_boards, parse_board

__all__ = [
    "Board",
    "Cell",
    "Region",
    "Row",
    "Column",
    "Box",
    "OutOfRange",
    "InvalidValue",
    "candidates",
    "tightened",
    "NUM_CONSTRAINT_LEVELS",
    "USED_CONSTRAINT_LEVEL",
    "BoardErrors",
    "board_errors",
    "unfillable_erroneous_cells",
    "parse_board",
    "load_boards",
]

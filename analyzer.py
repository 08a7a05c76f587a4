"""Top-level board analysis interface.

Expose `analyze_puzzle(puzzle)` that accepts a Board, a grid string compatible
with `src.sudoku.loader.parse_board`, or a list of rows, and reports candidates
and rule violations as plain data.
"""

from typing import Any, Dict

from src.sudoku.diagnostics import board_errors
from src.sudoku.loader import parse_board
from src.sudoku.model import Board
from src.sudoku.propagation import USED_CONSTRAINT_LEVEL


def analyze_puzzle(puzzle: Any, level: int = USED_CONSTRAINT_LEVEL) -> Dict[str, Any]:
    """
    Analyze a puzzle and return its candidates and errors.
    Accepts:
      - Board instances (used directly)
      - Grid strings (parsed via `parse_board`)
      - Lists of rows (built via `Board.from_rows`)
    """
    if isinstance(puzzle, Board):
        board = puzzle
    elif isinstance(puzzle, str):
        board = parse_board(puzzle)
    elif isinstance(puzzle, list):
        board = Board.from_rows(puzzle)
    else:
        raise TypeError("analyze_puzzle expects a Board, a grid string or a list of rows")

    errors = board_errors(board)
    if errors.has_errors:
        status = "invalid"
    elif board.is_complete():
        status = "solved"
    else:
        status = "open"

    return {
        "size": board.size,
        "status": status,
        "grid": board.to_rows(),
        "candidates": {
            f"r{cell.row}c{cell.column}": list(cell.candidates(level))
            for cell in board.empty_cells()
        },
        "duplicates": sorted(f"r{c.row}c{c.column}" for c in errors.duplicates),
        "impossible_values": {name: list(values) for name, values in errors.impossible_values.items()},
        "unfillable": sorted(f"r{c.row}c{c.column}" for c in errors.unfillable),
    }


__all__ = ["analyze_puzzle"]

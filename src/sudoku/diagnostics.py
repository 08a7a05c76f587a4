"""Board-wide error aggregation over cells and regions.

Rule violations are reported here as data; placements that create them are
never rejected by the Board.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, Tuple

from .propagation import USED_CONSTRAINT_LEVEL, candidates
from src.utils.trace import get_tracer

if TYPE_CHECKING:
    from .model import Board, Cell, Region


@dataclass
class BoardErrors:
    """Every rule violation currently detectable on a board."""

    duplicates: FrozenSet["Cell"] = frozenset()
    impossible_values: Dict[str, Tuple[int, ...]] = field(default_factory=dict)
    unfillable: FrozenSet["Cell"] = frozenset()

    @property
    def has_errors(self) -> bool:
        return bool(self.duplicates or self.impossible_values or self.unfillable)


def unfillable_erroneous_cells(board: "Board") -> FrozenSet["Cell"]:
    """Empty cells left without any candidate at the used constraint level."""
    tracer = get_tracer()
    unfillable = set()
    for cell in board.cells():
        if cell.value is not None:
            continue
        if not candidates(cell, USED_CONSTRAINT_LEVEL, tracer):
            unfillable.add(cell)
            tracer.log_unfillable(f"r{cell.row}c{cell.column}", USED_CONSTRAINT_LEVEL)
    return frozenset(unfillable)


def iter_regions(board: "Board") -> Iterable["Region"]:
    """All regions of the board: rows, then columns, then boxes."""
    yield from board.rows()
    yield from board.columns()
    yield from board.boxes()


def region_name(region: "Region") -> str:
    if region.kind == "box":
        return f"b{region.box_row},{region.box_column}"
    return f"{region.kind[0]}{region.index}"


def board_errors(board: "Board") -> BoardErrors:
    """Collect duplicates, impossible-to-fill values and unfillable cells of a board."""
    duplicates = set()
    impossible_values: Dict[str, Tuple[int, ...]] = {}
    for region in iter_regions(board):
        duplicates.update(region.duplicate_value_errors())
        missing = region.impossible_to_fill_value_errors()
        if missing:
            impossible_values[region_name(region)] = missing

    return BoardErrors(
        duplicates=frozenset(duplicates),
        impossible_values=impossible_values,
        unfillable=unfillable_erroneous_cells(board),
    )

"""Candidate elimination engine: placement pruning, naked tuples and hidden singles.

Two mutually recursive quantities are computed per cell and constraint level:

  candidates(cell, L)  values left after eliminations at level L
  tightened(cell, L)   candidates(cell, L) reduced to a single value when that
                       value has no other place in one of the cell's regions

candidates(cell, 0) removes values already placed in the cell's row, column and
box. For L >= 1, candidates(cell, L) starts from tightened(cell, L-1) and
removes the values of every naked L-tuple found among the cell's peers.
candidates(., L) only reaches tightened(., L-1), and tightened(., L) only reaches
candidates(., L), so evaluation bottoms out at level -1 after at most
NUM_CONSTRAINT_LEVELS levels.
"""

from collections import Counter
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

from src.utils.trace import Tracer, get_tracer

if TYPE_CHECKING:
    from .model import Cell, Region

Candidates = Tuple[int, ...]
MemoTable = Dict[Tuple[int, int], Candidates]

NUM_CONSTRAINT_LEVELS = 5
USED_CONSTRAINT_LEVEL = 4


class CandidateMemo:
    """Per-Board memo of computed candidate sets, one table per level and quantity."""

    def __init__(self) -> None:
        self.candidates: List[MemoTable] = [{} for _ in range(NUM_CONSTRAINT_LEVELS)]
        self.tightened: List[MemoTable] = [{} for _ in range(NUM_CONSTRAINT_LEVELS)]

    def __len__(self) -> int:
        return sum(len(t) for t in self.candidates) + sum(len(t) for t in self.tightened)


def candidates(cell: "Cell", level: int, tracer: Optional[Tracer] = None) -> Candidates:
    """
    Values the cell may still hold at `level` (0..4), in ascending order.
    A cell holding a value has no candidates at any level.
    """
    _check_level(level, lowest=0)
    if cell.value is not None:
        return ()

    table = cell.board.memo.candidates[level]
    cached = table.get(cell.key)
    if cached is not None:
        return cached

    tracer = tracer or get_tracer()
    previous = tightened(cell, level - 1, tracer)
    if level == 0:
        eliminated = _used_values_in_neighborhood(cell)
    else:
        eliminated = _naked_tuple_eliminations(cell, level, tracer)

    result = tuple(v for v in previous if v not in eliminated)
    table[cell.key] = result
    tracer.log_candidates(_cell_name(cell), level, len(result))
    return result


def tightened(cell: "Cell", level: int, tracer: Optional[Tracer] = None) -> Candidates:
    """
    candidates(cell, level), reduced to the first value (ascending) that no other
    empty cell of the row, column or box can take. Level -1 is every value.
    """
    _check_level(level, lowest=-1)
    if level == -1:
        return cell.board.all_values()

    if cell.value is not None:
        return ()

    table = cell.board.memo.tightened[level]
    cached = table.get(cell.key)
    if cached is not None:
        return cached

    tracer = tracer or get_tracer()
    remaining = candidates(cell, level, tracer)
    if len(remaining) <= 1:
        result = remaining
    else:
        forced = _hidden_single(cell, remaining, level, tracer)
        result = (forced,) if forced is not None else remaining

    table[cell.key] = result
    return result


def _used_values_in_neighborhood(cell: "Cell") -> Set[int]:
    used: Set[int] = set()
    for region in cell.neighborhood():
        used.update(region.used_values())
    return used


def _naked_tuple_eliminations(cell: "Cell", level: int, tracer: Tracer) -> Set[int]:
    """
    Values held by a naked tuple of size `level` among the cell's peers: a set of
    exactly `level` values that is the whole tightened(peer, level-1) of exactly
    `level` peers of one region.
    """
    tuple_size = level
    eliminated: Set[int] = set()
    for region in cell.neighborhood():
        tuples: Counter = Counter()
        for peer in _other_empty_cells(region, cell):
            peer_values = tightened(peer, level - 1, tracer)
            if len(peer_values) == tuple_size:
                tuples[peer_values] += 1
        for values, count in tuples.items():
            if count == tuple_size:
                eliminated.update(values)
                tracer.log_naked_tuple(_cell_name(cell), level, values, region.kind)
    return eliminated


def _hidden_single(
    cell: "Cell", remaining: Candidates, level: int, tracer: Tracer
) -> Optional[int]:
    """First value of `remaining` with no other possible place in a region, if any."""
    regions = cell.neighborhood()
    for value in remaining:
        for region in regions:
            if value not in region.missing_values():
                continue
            if not any(
                value in candidates(peer, level, tracer)
                for peer in _other_empty_cells(region, cell)
            ):
                tracer.log_hidden_single(_cell_name(cell), level, value, region.kind)
                return value
    return None


def _other_empty_cells(region: "Region", cell: "Cell") -> List["Cell"]:
    return [peer for peer in region.cells() if peer != cell and peer.value is None]


def _check_level(level: int, lowest: int) -> None:
    if not lowest <= level < NUM_CONSTRAINT_LEVELS:
        raise ValueError(
            f"Constraint level {level} shall be in [{lowest} {NUM_CONSTRAINT_LEVELS - 1}]"
        )


def _cell_name(cell: "Cell") -> str:
    return f"r{cell.row}c{cell.column}"

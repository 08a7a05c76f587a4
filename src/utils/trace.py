"""Tracing module: logs candidate-engine steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence


@dataclass
class TraceStep:
    """A single step of board editing or candidate propagation."""

    timestamp: float
    step_number: int
    action_type: str  # 'place', 'clear', 'candidates', 'naked_tuple', 'hidden_single', 'unfillable'
    cell: Optional[str] = None  # "r{row}c{column}"
    level: Optional[int] = None
    value: Optional[Any] = None
    candidates_size: Optional[int] = None
    region: Optional[str] = None  # 'row', 'column' or 'box'
    reason: Optional[str] = None


class Tracer:
    """Records engine steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_place(self, cell: str, value: int):
        """Log a value placed on a new board."""
        if not self.enabled:
            return
        self._record('place', cell=cell, value=value)

    def log_clear(self, cell: str):
        """Log a cell emptied on a new board."""
        if not self.enabled:
            return
        self._record('clear', cell=cell)

    def log_candidates(self, cell: str, level: int, candidates_size: int):
        """Log a freshly computed (not memoized) candidate set."""
        if not self.enabled:
            return
        self._record('candidates', cell=cell, level=level, candidates_size=candidates_size)

    def log_naked_tuple(self, cell: str, level: int, values: Sequence[int], region: str):
        """Log values eliminated from a cell by a naked tuple of its region."""
        if not self.enabled:
            return
        self._record(
            'naked_tuple',
            cell=cell,
            level=level,
            value=" ".join(str(v) for v in values),
            region=region,
            reason=f"{len(values)} peers share exactly these {len(values)} values",
        )

    def log_hidden_single(self, cell: str, level: int, value: int, region: str):
        """Log a value forced into a cell because no other cell of the region can take it."""
        if not self.enabled:
            return
        self._record(
            'hidden_single',
            cell=cell,
            level=level,
            value=value,
            candidates_size=1,
            region=region,
            reason=f"Only place left for {value} in its {region}",
        )

    def log_unfillable(self, cell: str, level: int):
        """Log an empty cell with no candidate left."""
        if not self.enabled:
            return
        self._record('unfillable', cell=cell, level=level, candidates_size=0, reason="No candidate left")

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'cell', 'level', 'value',
            'candidates_size', 'region', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_hidden_singles': sum(1 for s in self.steps if s.action_type == 'hidden_single'),
            'num_naked_tuples': sum(1 for s in self.steps if s.action_type == 'naked_tuple'),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer (created disabled; see enable_tracing)."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=False)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled

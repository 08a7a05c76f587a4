import json
import os
import re
from math import isqrt
from typing import Any, Dict, List, Optional

import pandas as pd

from .model import Board

PUZZLE_COLUMNS = ("puzzle", "quizzes", "grid")
EMPTY_MARKS = {".", "0", "_", "-"}


def parse_board(text: str) -> Board:
    """
    Parse a grid string into a Board.

    Accepts either one character per cell (digits 1-9, and '.', '0', '_' or '-'
    for an empty cell; boards up to 9x9) or tokens separated by whitespace or
    commas (any board size). The cell count must be a fourth power (16, 81, 256, ...).
    """
    stripped = text.strip()
    if re.search(r"[\s,]", stripped):
        tokens = [t for t in re.split(r"[\s,|]+", stripped) if t]
        if len(tokens) > 1 and all(len(t) == len(tokens) for t in tokens):
            # One line of characters per row
            tokens = [ch for t in tokens for ch in t]
    else:
        tokens = list(stripped)

    cell_count = len(tokens)
    region_size = isqrt(cell_count)
    size = isqrt(region_size)
    if cell_count == 0 or region_size * region_size != cell_count or size * size != region_size:
        raise ValueError(f"Grid has {cell_count} cells; expected 16, 81, 256, ...")

    rows: List[List[int]] = []
    for r in range(region_size):
        row = []
        for c in range(region_size):
            token = tokens[r * region_size + c]
            if token in EMPTY_MARKS:
                row.append(0)
            elif token.isdigit():
                row.append(int(token))
            else:
                raise ValueError(f"Invalid token at ({r + 1},{c + 1}): {token!r}")
        rows.append(row)
    return Board.from_rows(rows)


def load_boards(file_path: str) -> List[Board]:
    """
    Reads puzzles from a file. Handles .csv, .parquet, .json and .jsonl formats.
    Returns one Board per record; records without a parsable grid are skipped.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _is_nonempty_str(value: Any) -> bool:
        return isinstance(value, str) and value.strip() != ""

    def _is_sequence(value: Any) -> bool:
        # pandas hands back list columns as numpy arrays
        return hasattr(value, "__iter__") and not isinstance(value, (str, bytes, dict))

    def _extract_grid(record: Dict[str, Any]) -> Optional[str]:
        for key in PUZZLE_COLUMNS:
            value = record.get(key)
            if _is_nonempty_str(value):
                return value
            if _is_sequence(value):
                flat = [v for row in value for v in (row if _is_sequence(row) else [row])]
                return " ".join(str(v) for v in flat)
        return None

    def _to_boards(records: List[Dict[str, Any]]) -> List[Board]:
        boards = []
        for i, record in enumerate(records):
            grid = _extract_grid(record)
            if grid is None:
                print(f"Skipping record {i}: no puzzle column")
                continue
            try:
                boards.append(parse_board(grid))
            except ValueError as e:
                print(f"Skipping record {i}: {e}")
        return boards

    def _read_json_lines() -> List[Dict[str, Any]]:
        records = []
        with open(file_path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    obj = json.loads(line)
                except json.JSONDecodeError:
                    print(f"Skipping line {line_number}: not valid JSON")
                    continue
                if isinstance(obj, dict):
                    records.append(obj)
        return records

    # Case 1: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        return _to_boards(df.to_dict(orient="records"))

    # Case 2: CSV File; keep grids as text so leading zeros survive
    if file_path.endswith(".csv"):
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        return _to_boards(df.to_dict(orient="records"))

    # Case 3: JSON File (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return _to_boards([p for p in payload if isinstance(p, dict)])
            if isinstance(payload, dict):
                return _to_boards([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            return _to_boards(_read_json_lines())

    # Case 4: JSONL File
    return _to_boards(_read_json_lines())

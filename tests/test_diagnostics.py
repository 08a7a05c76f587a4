"""Tests for board-wide error aggregation."""

from src.sudoku.diagnostics import board_errors, region_name, unfillable_erroneous_cells
from src.sudoku.model import Board


def _unfillable_board() -> Board:
    return (
        Board.create(3)
        .set(7, 1, 7)
        .set(8, 1, 8)
        .set(9, 1, 9)
        .set(1, 3, 4)
        .set(2, 3, 5)
        .set(3, 3, 6)
        .set(4, 4, 7)
        .set(5, 5, 7)
        .set(6, 6, 7)
    )


def test_unfillable_erroneous_cells():
    board = _unfillable_board()
    unfillable = board.unfillable_erroneous_cells()

    assert unfillable == {board.cell(3, 7)}
    assert unfillable_erroneous_cells(board) == unfillable


def test_empty_board_has_no_errors():
    errors = board_errors(Board.create(2))
    assert not errors.has_errors
    assert errors.duplicates == frozenset()
    assert errors.impossible_values == {}
    assert errors.unfillable == frozenset()


def test_board_errors_collects_duplicates_once():
    board = Board.create(3).set(5, 1, 1).set(5, 1, 2)
    errors = board_errors(board)

    # Both cells repeat 5 in row 1 and in box (1, 1).
    assert errors.duplicates == {board.cell(1, 1), board.cell(1, 2)}
    assert errors.has_errors
    assert board.cell(1, 1).value == 5
    assert board.cell(1, 2).value == 5


def test_board_errors_reports_unfillable_cell():
    board = _unfillable_board()
    errors = board_errors(board)

    assert errors.unfillable == {board.cell(3, 7)}
    assert errors.duplicates == frozenset()
    assert errors.has_errors


def test_board_errors_reports_impossible_values_by_region():
    board = (
        Board.create(3)
        .set(2, 1, 1)
        .set(3, 1, 4)
        .set(1, 2, 1)
        .set(1, 3, 9)
        .set(1, 4, 5)
        .set(1, 7, 6)
    )
    errors = board_errors(board)
    assert errors.impossible_values["r1"] == (1,)


def test_region_names():
    board = Board.create(3)
    assert region_name(board.row(4)) == "r4"
    assert region_name(board.column(9)) == "c9"
    assert region_name(board.box(2, 3)) == "b2,3"

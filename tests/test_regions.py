"""Tests for Row/Column/Box membership, value queries and error detection."""

from src.sudoku.model import Board, Box, Column, Row


def test_region_partition():
    board = Board.create(3)
    rows, columns, boxes = board.rows(), board.columns(), board.boxes()

    assert all(len(r.cells()) == 9 for r in rows)
    assert all(len(c.cells()) == 9 for c in columns)
    assert all(len(b.cells()) == 9 for b in boxes)

    for cell in board.cells():
        assert sum(cell in r.cells() for r in rows) == 1
        assert sum(cell in c.cells() for c in columns) == 1
        assert sum(cell in b.cells() for b in boxes) == 1


def test_neighborhood_order_and_intersection():
    board = Board.create(3)
    cell = board.cell(5, 2)
    row, column, box = cell.neighborhood()

    assert isinstance(row, Row) and row.index == 5
    assert isinstance(column, Column) and column.index == 2
    assert isinstance(box, Box) and (box.box_row, box.box_column) == (2, 1)
    assert set(row.cells()) & set(column.cells()) == {cell}
    assert set(row.cells()) & set(column.cells()) & set(box.cells()) == {cell}


def test_box_cells_are_ordered_row_major():
    box = Board.create(2).box(2, 1)
    assert [(c.row, c.column) for c in box.cells()] == [(3, 1), (3, 2), (4, 1), (4, 2)]


def test_row_used_and_missing_values():
    board = Board.create(3).set(8, 2, 1).set(3, 2, 9)
    row = board.row(2)

    assert row.used_values() == (3, 8)
    assert row.missing_values() == (1, 2, 4, 5, 6, 7, 9)


def test_column_missing_values():
    board = Board.create(3).set(4, 1, 6).set(2, 7, 6)
    assert board.column(6).missing_values() == (1, 3, 5, 6, 7, 8, 9)


def test_box_missing_values():
    board = Board.create(3).set(9, 4, 4).set(1, 6, 5)
    assert board.box(2, 2).used_values() == (1, 9)
    assert board.box(2, 2).missing_values() == (2, 3, 4, 5, 6, 7, 8)


def test_no_duplicate_errors():
    board = Board.create(3).set(1, 1, 1).set(2, 2, 2).set(3, 1, 2)
    assert board.row(1).duplicate_value_errors() == frozenset()
    assert board.column(2).duplicate_value_errors() == frozenset()
    assert board.box(1, 1).duplicate_value_errors() == frozenset()


def test_duplicate_values_in_row():
    board = Board.create(3).set(6, 4, 2).set(6, 4, 8)
    erroneous = board.row(4).duplicate_value_errors()

    assert erroneous == {board.cell(4, 2), board.cell(4, 8)}
    assert board.cell(4, 2).value == 6
    assert board.cell(4, 8).value == 6


def test_duplicate_values_in_column():
    board = Board.create(3).set(2, 1, 5).set(2, 9, 5).set(3, 5, 5)
    assert board.column(5).duplicate_value_errors() == {board.cell(1, 5), board.cell(9, 5)}


def test_duplicate_values_in_box():
    board = Board.create(3).set(4, 7, 7).set(4, 9, 8)
    assert board.box(3, 3).duplicate_value_errors() == {board.cell(7, 7), board.cell(9, 8)}
    assert board.row(7).duplicate_value_errors() == frozenset()


def test_impossible_to_fill_value_in_row():
    board = (
        Board.create(3)
        .set(2, 1, 1)
        .set(3, 1, 4)
        .set(1, 2, 1)
        .set(1, 3, 9)
        .set(1, 4, 5)
        .set(1, 7, 6)
    )
    assert board.row(1).impossible_to_fill_value_errors() == (1,)


def _column_blocked_board() -> Board:
    return (
        Board.create(3)
        .set(2, 1, 1)
        .set(3, 5, 1)
        .set(1, 1, 2)
        .set(1, 9, 3)
        .set(1, 4, 4)
        .set(1, 6, 7)
    )


def test_impossible_to_fill_value_in_column():
    board = _column_blocked_board()
    assert board.column(1).impossible_to_fill_value_errors() == (1,)


def test_impossible_to_fill_value_in_box():
    board = _column_blocked_board()
    assert board.box(2, 1).impossible_to_fill_value_errors() == (1,)


def test_empty_board_has_no_impossible_values():
    board = Board.create(2)
    assert all(not r.impossible_to_fill_value_errors() for r in board.rows())

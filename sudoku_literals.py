# Literal mapping: x_{row,col,value} -> 1..N^3
# row, col are 0-based (0..N-1), value is 1..N.

from typing import Tuple


def literal_of(row: int, col: int, value: int, size: int) -> int:
    """Proposition id for "cell (row, col) holds value"."""
    return (row * size + col) * size + value


def cell_of(literal: int, size: int) -> Tuple[int, int, int]:
    """Inverse of literal_of: literal -> (row, col, value)."""
    v = literal - 1
    value = v % size + 1
    cell = v // size
    return cell // size, cell % size, value


def literal_count(size: int) -> int:
    return size * size * size


def box_cell_of(row: int, col: int, value: int, box_size: int) -> Tuple[int, int]:
    """
    Slot ``value`` of the box holding (row, col), as board coordinates.

    For a fixed cell, value 1..N walks the N cells of its box in row-major
    order, so two different values never land on the same slot.
    """
    box_row = box_size * (row // box_size) + (value - 1) // box_size
    box_col = box_size * (col // box_size) + (value - 1) % box_size
    return box_row, box_col

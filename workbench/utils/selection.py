from typing import NamedTuple

from PySide6 import QtCore

from .grid_store import GridStore, GridChange, Axis, OutOfBounds


class Cell(NamedTuple):
    row: int
    col: int


class Bounds(NamedTuple):
    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def row_count(self) -> int:
        return self.max_row - self.min_row + 1

    @property
    def column_count(self) -> int:
        return self.max_col - self.min_col + 1

    def cells(self):
        for row in range(self.min_row, self.max_row + 1):
            for col in range(self.min_col, self.max_col + 1):
                yield Cell(row, col)


class SelectionModel(QtCore.QObject):
    """
    Anchor/focus pair over a GridStore

    The anchor is where the selection started, the focus is where it currently ends.
    The selected rectangle is the bounding box of both.
    """
    selection_changed: QtCore.Signal = QtCore.Signal()

    def __init__(self, grid: GridStore):
        super().__init__()

        self.grid = grid

        self._anchor: Cell | None = None
        self._focus: Cell | None = None

        self.grid.structure_changed.connect(self._on_structure_changed)

    @property
    def anchor(self) -> Cell | None:
        return self._anchor

    @property
    def focus(self) -> Cell | None:
        return self._focus

    @property
    def has_selection(self) -> bool:
        return self._anchor is not None

    def _check_cell(self, row: int, col: int) -> Cell:
        if not self.grid.in_bounds(row, col):
            raise OutOfBounds(f"Cannot select ({row}, {col}), outside of the grid")

        return Cell(row, col)

    def _set(self, anchor: Cell | None, focus: Cell | None) -> None:
        self._anchor, self._focus = anchor, focus
        self.selection_changed.emit()

    def start_selection(self, row: int, col: int) -> None:
        cell = self._check_cell(row, col)

        self._set(cell, cell)

    def extend_selection(self, row: int, col: int) -> None:
        cell = self._check_cell(row, col)

        if self._anchor is None:
            self._set(cell, cell)
            return

        self._set(self._anchor, cell)

    def select_row(self, index: int) -> None:
        self._set(
            self._check_cell(index, 0),
            self._check_cell(index, self.grid.column_count - 1),
        )

    def select_column(self, index: int) -> None:
        self._set(
            self._check_cell(0, index),
            self._check_cell(self.grid.row_count - 1, index),
        )

    def select_all(self) -> None:
        self._set(
            Cell(0, 0),
            Cell(self.grid.row_count - 1, self.grid.column_count - 1),
        )

    def clear(self) -> None:
        if self._anchor is None:
            return

        self._set(None, None)

    def normalized_bounds(self) -> Bounds | None:
        if self._anchor is None:
            return None

        return Bounds(
            min_row=min(self._anchor.row, self._focus.row),
            max_row=max(self._anchor.row, self._focus.row),
            min_col=min(self._anchor.col, self._focus.col),
            max_col=max(self._anchor.col, self._focus.col),
        )

    def contains(self, row: int, col: int) -> bool:
        bounds = self.normalized_bounds()

        if bounds is None:
            return False

        return bounds.min_row <= row <= bounds.max_row and bounds.min_col <= col <= bounds.max_col

    def is_single_cell(self) -> bool:
        # NOTE: the renderer only draws the active-cell outline in this case
        bounds = self.normalized_bounds()

        if bounds is None:
            return False

        return bounds.min_row == bounds.max_row and bounds.min_col == bounds.max_col

    def _remap_cell(self, cell: Cell, change: GridChange) -> Cell:
        if change.axis == Axis.ROW:
            return Cell(change.clamp_index(cell.row), cell.col)

        return Cell(cell.row, change.clamp_index(cell.col))

    def _on_structure_changed(self, change: GridChange) -> None:
        if self._anchor is None:
            return

        self._set(
            self._remap_cell(self._anchor, change),
            self._remap_cell(self._focus, change),
        )

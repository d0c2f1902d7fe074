import copy
import enum
import logging
from dataclasses import dataclass

from PySide6 import QtCore


logger = logging.getLogger(__name__)


class OutOfBounds(IndexError):
    pass


class StructuralUnderflow(Exception):
    pass


class ChangeKind(enum.Enum):
    INSERT = "insert"
    DELETE = "delete"


class Axis(enum.Enum):
    ROW = "row"
    COLUMN = "column"


@dataclass(frozen=True)
class GridChange:
    kind: ChangeKind
    axis: Axis
    index: int

    # (rows, columns) before and after the mutation
    old_shape: tuple[int, int]
    new_shape: tuple[int, int]

    def remap_index(self, index: int) -> int | None:
        """
            Returns where an index on this change's axis ended up,
            None if it was the deleted one
        """
        if self.kind == ChangeKind.INSERT:
            return index + 1 if index >= self.index else index

        if index == self.index:
            return None

        return index - 1 if index > self.index else index

    def clamp_index(self, index: int) -> int:
        # NOTE: same as remap_index, but a deleted index falls onto its neighbour
        new_index = self.remap_index(index)

        if new_index is not None:
            return new_index

        size = self.new_shape[0] if self.axis == Axis.ROW else self.new_shape[1]

        return min(index, size - 1)


class GridStore(QtCore.QObject):
    cell_changed: QtCore.Signal = QtCore.Signal(
        *(int, int), arguments=["row", "col"]
    )
    structure_changed: QtCore.Signal = QtCore.Signal(
        *(object,), arguments=["change"]
    )

    def __init__(self, rows: list[list[str]]):
        super().__init__()

        if len(rows) == 0 or len(rows[0]) == 0:
            raise ValueError("A grid needs at least one row and one column")

        width = len(rows[0])

        if any(len(row) != width for row in rows):
            raise ValueError("Grid rows need to be of equal length, pad them before loading")

        self._data: list[list[str]] = [[str(v) for v in row] for row in rows]

    @staticmethod
    def blank(rows: int, columns: int) -> "GridStore":
        return GridStore([[""] * columns for _ in range(rows)])

    @property
    def row_count(self) -> int:
        return len(self._data)

    @property
    def column_count(self) -> int:
        return len(self._data[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.row_count, self.column_count

    def rows(self) -> list[list[str]]:
        return copy.deepcopy(self._data)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.row_count and 0 <= col < self.column_count

    def _check_cell(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"Cell ({row}, {col}) is outside a {self.row_count}x{self.column_count} grid")

    def get_cell(self, row: int, col: int) -> str:
        self._check_cell(row, col)

        return self._data[row][col]

    def set_cell(self, row: int, col: int, value: str) -> None:
        self._check_cell(row, col)

        self._data[row][col] = str(value)
        self.cell_changed.emit(row, col)

    # Structural changes
    def insert_row(self, index: int) -> None:
        if not 0 <= index <= self.row_count:
            raise OutOfBounds(f"Cannot insert row at {index}, grid has {self.row_count} rows")

        old_shape = self.shape
        self._data.insert(index, [""] * self.column_count)

        self._emit_change(ChangeKind.INSERT, Axis.ROW, index, old_shape)

    def delete_row(self, index: int) -> None:
        if not 0 <= index < self.row_count:
            raise OutOfBounds(f"Cannot delete row {index}, grid has {self.row_count} rows")

        if self.row_count == 1:
            raise StructuralUnderflow("Cannot delete the last remaining row")

        old_shape = self.shape
        del self._data[index]

        self._emit_change(ChangeKind.DELETE, Axis.ROW, index, old_shape)

    def insert_column(self, index: int) -> None:
        if not 0 <= index <= self.column_count:
            raise OutOfBounds(f"Cannot insert column at {index}, grid has {self.column_count} columns")

        old_shape = self.shape
        for row in self._data:
            row.insert(index, "")

        self._emit_change(ChangeKind.INSERT, Axis.COLUMN, index, old_shape)

    def delete_column(self, index: int) -> None:
        if not 0 <= index < self.column_count:
            raise OutOfBounds(f"Cannot delete column {index}, grid has {self.column_count} columns")

        if self.column_count == 1:
            raise StructuralUnderflow("Cannot delete the last remaining column")

        old_shape = self.shape
        for row in self._data:
            del row[index]

        self._emit_change(ChangeKind.DELETE, Axis.COLUMN, index, old_shape)

    def _emit_change(self, kind: ChangeKind, axis: Axis, index: int, old_shape: tuple[int, int]) -> None:
        change = GridChange(
            kind=kind,
            axis=axis,
            index=index,
            old_shape=old_shape,
            new_shape=self.shape,
        )

        logger.debug("Grid %s %s at %d, %s -> %s", kind.value, axis.value, index, old_shape, change.new_shape)

        # NOTE: handlers run synchronously, so selection and edit state are
        # remapped before this call returns
        self.structure_changed.emit(change)

from enum import Enum

from PySide6 import QtCore, QtGui

from .edit_session import EditSession
from .grid_store import GridStore, GridChange
from .headers import column_label, row_label
from .selection import SelectionModel


class CellColor(Enum):
    SELECTED = QtGui.QBrush(QtGui.QColor(229, 231, 235))
    ACTIVE = QtGui.QBrush(QtGui.QColor(76, 175, 80))


class GridTableModel(QtCore.QAbstractTableModel):
    """
    Read-only Qt view on the grid, the selection and the edit session

    Writes never go through setData, they go through the InputController.
    """

    def __init__(self, grid: GridStore, selection: SelectionModel, session: EditSession):
        super().__init__()

        self.grid = grid
        self.selection = selection
        self.session = session

        # NOTE: remember what was highlighted so only those rows need a repaint
        self._painted_rows: tuple[int, int] | None = None

        self.grid.cell_changed.connect(self._cell_changed)
        self.grid.structure_changed.connect(self._structure_changed)
        self.selection.selection_changed.connect(self._selection_changed)

    # Table methods
    def rowCount(self, *index):
        return self.grid.row_count

    def columnCount(self, *index):
        return self.grid.column_count

    def data(self, index: QtCore.QModelIndex, role=QtCore.Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return

        row, col = index.row(), index.column()

        if role == QtCore.Qt.ItemDataRole.DisplayRole:
            return self.grid.get_cell(row, col)

        elif role == QtCore.Qt.ItemDataRole.EditRole:
            # The editor shows the draft, never the committed value
            if self.session.cell == (row, col):
                return self.session.draft

            return self.grid.get_cell(row, col)

        elif role == QtCore.Qt.ItemDataRole.BackgroundRole:
            if self.selection.contains(row, col) and not self.selection.is_single_cell():
                return CellColor.SELECTED.value

    def headerData(self, section, orientation, role=QtCore.Qt.ItemDataRole.DisplayRole):
        if role == QtCore.Qt.ItemDataRole.DisplayRole:
            if orientation == QtCore.Qt.Orientation.Horizontal:
                return column_label(section)

            if orientation == QtCore.Qt.Orientation.Vertical:
                return row_label(section)

    def flags(self, index):
        return (
            QtCore.Qt.ItemFlag.ItemIsSelectable
            | QtCore.Qt.ItemFlag.ItemIsEnabled
            | QtCore.Qt.ItemFlag.ItemIsEditable
        )

    # Grid signals
    def _cell_changed(self, row: int, col: int) -> None:
        index = self.index(row, col)
        self.dataChanged.emit(index, index)

    def _structure_changed(self, change: GridChange) -> None:
        # NOTE: the store already changed, a full reset is the only honest signal left
        self.beginResetModel()
        self._painted_rows = None
        self.endResetModel()

    def _selection_changed(self) -> None:
        bounds = self.selection.normalized_bounds()
        rows = (bounds.min_row, bounds.max_row) if bounds is not None else None

        # Repaint what was highlighted before and what is highlighted now
        for painted in (self._painted_rows, rows):
            if painted is None or painted[1] >= self.rowCount():
                continue

            top = self.index(painted[0], 0)
            bottom = self.index(painted[1], self.columnCount() - 1)
            self.dataChanged.emit(top, bottom, [QtCore.Qt.ItemDataRole.BackgroundRole])

        self._painted_rows = rows

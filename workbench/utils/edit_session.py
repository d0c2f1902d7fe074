import enum
import logging

from PySide6 import QtCore

from .grid_store import GridStore, GridChange, Axis
from .selection import SelectionModel, Cell


logger = logging.getLogger(__name__)


class EditState(enum.Enum):
    IDLE = "idle"
    EDITING = "editing"


class EditSession(QtCore.QObject):
    """
    State machine for the single cell being edited

    IDLE --begin_edit--> EDITING(cell, draft)
    EDITING --type_text--> EDITING(draft=text)
    EDITING --commit/blur/enter_commit--> IDLE, draft written to the grid
    EDITING --tab_advance--> EDITING on the next cell, draft written to the grid
    EDITING --tab_retreat--> EDITING on the previous cell, draft written to the grid
    EDITING --cancel--> IDLE, draft dropped
    """
    edit_started: QtCore.Signal = QtCore.Signal(
        *(int, int), arguments=["row", "col"]
    )
    draft_changed: QtCore.Signal = QtCore.Signal(
        *(str,), arguments=["draft"]
    )
    edit_finished: QtCore.Signal = QtCore.Signal(
        *(int, int, bool), arguments=["row", "col", "committed"]
    )

    def __init__(self, grid: GridStore, selection: SelectionModel):
        super().__init__()

        self.grid = grid
        self.selection = selection

        self._cell: Cell | None = None
        self._draft: str | None = None

        self.grid.structure_changed.connect(self._on_structure_changed)

    @property
    def state(self) -> EditState:
        return EditState.IDLE if self._cell is None else EditState.EDITING

    @property
    def is_editing(self) -> bool:
        return self._cell is not None

    @property
    def cell(self) -> Cell | None:
        return self._cell

    @property
    def draft(self) -> str | None:
        return self._draft

    def begin_edit(self, row: int, col: int) -> None:
        # NOTE: raises OutOfBounds before any state changes
        value = self.grid.get_cell(row, col)

        if self._cell == (row, col):
            self.selection.start_selection(row, col)
            return

        if self.is_editing:
            self.commit()

        self._cell, self._draft = Cell(row, col), value
        self.selection.start_selection(row, col)

        self.edit_started.emit(row, col)

    def type_text(self, text: str) -> None:
        if not self.is_editing:
            logger.debug("Ignoring typed text, no cell is being edited")
            return

        self._draft = text
        self.draft_changed.emit(text)

    def commit(self) -> Cell | None:
        if not self.is_editing:
            return None

        cell, draft = self._cell, self._draft

        # Go idle first, cell_changed handlers should see a finished edit
        self._cell, self._draft = None, None
        self.grid.set_cell(cell.row, cell.col, draft)

        logger.debug("Committed %r to (%d, %d)", draft, cell.row, cell.col)
        self.edit_finished.emit(cell.row, cell.col, True)

        return cell

    def blur(self) -> Cell | None:
        # Losing focus never discards the draft
        return self.commit()

    def enter_commit(self) -> Cell | None:
        cell = self.commit()

        if cell is not None:
            self.selection.start_selection(cell.row, cell.col)

        return cell

    def tab_advance(self) -> Cell | None:
        cell = self.commit()

        if cell is None:
            return None

        next_col = (cell.col + 1) % self.grid.column_count
        next_row = (cell.row + (1 if next_col == 0 else 0)) % self.grid.row_count

        self.begin_edit(next_row, next_col)

        return self._cell

    def tab_retreat(self) -> Cell | None:
        cell = self.commit()

        if cell is None:
            return None

        previous_col = (cell.col - 1) % self.grid.column_count
        previous_row = (cell.row - (1 if cell.col == 0 else 0)) % self.grid.row_count

        self.begin_edit(previous_row, previous_col)

        return self._cell

    def cancel(self) -> Cell | None:
        if not self.is_editing:
            return None

        cell = self._cell
        self._cell, self._draft = None, None

        logger.debug("Discarded draft for (%d, %d)", cell.row, cell.col)
        self.edit_finished.emit(cell.row, cell.col, False)

        return cell

    def _on_structure_changed(self, change: GridChange) -> None:
        if not self.is_editing:
            return

        if change.axis == Axis.ROW:
            row, col = change.remap_index(self._cell.row), self._cell.col
        else:
            row, col = self._cell.row, change.remap_index(self._cell.col)

        if row is None or col is None:
            # The edited cell no longer exists, there is nothing left to write to
            logger.warning(
                "Cell (%d, %d) was removed while being edited, draft %r dropped",
                self._cell.row, self._cell.col, self._draft,
            )
            self.cancel()
            return

        self._cell = Cell(row, col)

import enum
import logging

from PySide6 import QtCore

from .clipboard_controller import ClipboardController, ClipboardUnavailable
from ..utils.clipboard_codec import ClipboardCodec
from ..utils.edit_session import EditSession
from ..utils.grid_store import GridStore, StructuralUnderflow
from ..utils.selection import SelectionModel, Cell


logger = logging.getLogger(__name__)


class InputMode(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class InputController(QtCore.QObject):
    """
    Turns resolved pointer, keyboard and clipboard events into calls on the grid,
    the selection and the edit session

    The renderer does the hit-testing, this only ever receives (row, col) pairs.
    """
    notification: QtCore.Signal = QtCore.Signal(
        *(str, str), arguments=["title", "text"]
    )
    error_occurred: QtCore.Signal = QtCore.Signal(
        *(str, str), arguments=["title", "text"]
    )

    def __init__(
        self,
        grid: GridStore,
        selection: SelectionModel = None,
        session: EditSession = None,
        clipboard: ClipboardController = None,
    ):
        super().__init__()

        self.grid = grid
        self.selection = selection if selection is not None else SelectionModel(grid)
        self.session = session if session is not None else EditSession(grid, self.selection)
        self.clipboard = clipboard if clipboard is not None else ClipboardController()

        self.mode = InputMode.IDLE

        # Cell the current drag started on, a release on the same cell is a click
        self._press_cell: Cell | None = None

    # Pointer
    def pointer_down(self, row: int, col: int) -> None:
        # NOTE: pressing on the grid takes the focus away from the editor
        self.session.blur()

        self.selection.start_selection(row, col)

        self.mode = InputMode.DRAGGING
        self._press_cell = Cell(row, col)

    def pointer_enter(self, row: int, col: int) -> None:
        if self.mode != InputMode.DRAGGING:
            return

        if self.selection.focus == (row, col):
            return

        self.selection.extend_selection(row, col)

    def pointer_up(self, row: int = None, col: int = None) -> None:
        """Ends a drag, the release can happen anywhere, also outside of the grid"""
        was_dragging = self.mode == InputMode.DRAGGING
        press_cell = self._press_cell

        self.mode = InputMode.IDLE
        self._press_cell = None

        if not was_dragging or row is None or col is None:
            return

        # Pressed and released on the same cell, start editing it
        if press_cell == (row, col):
            self.session.begin_edit(row, col)

    def header_double_click(self, index: int, is_column: bool) -> None:
        self.session.blur()

        if is_column:
            self.selection.select_column(index)
        else:
            self.selection.select_row(index)

    def select_all(self) -> None:
        self.session.blur()
        self.selection.select_all()

    # Keyboard
    def edit_anchor(self) -> bool:
        """Starts editing the cell the selection started on (Enter/F2 on the grid)"""
        anchor = self.selection.anchor

        if anchor is None:
            return False

        self.session.begin_edit(anchor.row, anchor.col)
        return True

    def type_text(self, text: str) -> None:
        self.session.type_text(text)

    def enter(self) -> None:
        self.session.enter_commit()

    def tab(self) -> None:
        self.session.tab_advance()

    def back_tab(self) -> None:
        self.session.tab_retreat()

    def escape(self) -> None:
        self.session.cancel()

    def blur(self) -> None:
        self.session.blur()

    def clear_selection_values(self) -> int:
        bounds = self.selection.normalized_bounds()

        if bounds is None or self.session.is_editing:
            return 0

        cleared = 0
        for cell in bounds.cells():
            self.grid.set_cell(cell.row, cell.col, "")
            cleared += 1

        return cleared

    # Clipboard
    def copy(self) -> bool:
        bounds = self.selection.normalized_bounds()

        if bounds is None:
            return False

        text = ClipboardCodec.serialize(self.grid, bounds)

        try:
            self.clipboard.set_text(text)
        except ClipboardUnavailable as e:
            logger.warning("Copy failed: %s", e)
            self.error_occurred.emit(
                "Copy failed",
                "An error occurred while trying to copy the selected cells.",
            )
            return False

        logger.info("Copied %dx%d cells", bounds.row_count, bounds.column_count)
        self.notification.emit(
            "Copied to clipboard",
            "The selected cells have been copied in a format compatible with Excel.",
        )
        return True

    def cut(self) -> bool:
        if self.session.is_editing:
            self.session.commit()

        if not self.copy():
            return False

        self.clear_selection_values()
        return True

    def paste(self) -> bool:
        # Pasting starts where the selection started, not at its top-left corner
        origin = self.selection.anchor

        if origin is None:
            return False

        # NOTE: read the clipboard before touching anything, a failure leaves all state as is
        try:
            text = self.clipboard.text()
        except ClipboardUnavailable as e:
            logger.warning("Paste failed: %s", e)
            self.error_occurred.emit(
                "Paste failed",
                "An error occurred while trying to read the clipboard.",
            )
            return False

        if text == "":
            return False

        if self.session.is_editing:
            self.session.commit()

        pasted_rows = ClipboardCodec.deserialize(
            ClipboardCodec.normalize_clipboard_text(text)
        )
        written = ClipboardCodec.apply_paste(self.grid, origin, pasted_rows)

        if written is None:
            return False

        logger.info("Pasted %dx%d cells at (%d, %d)", written.row_count, written.column_count, written.min_row, written.min_col)

        # Select what was actually pasted
        self.selection.start_selection(written.min_row, written.min_col)
        self.selection.extend_selection(written.max_row, written.max_col)
        return True

    # Structure
    def insert_row(self, index: int) -> bool:
        return self._structural(self.grid.insert_row, index)

    def delete_row(self, index: int) -> bool:
        return self._structural(self.grid.delete_row, index)

    def insert_column(self, index: int) -> bool:
        return self._structural(self.grid.insert_column, index)

    def delete_column(self, index: int) -> bool:
        return self._structural(self.grid.delete_column, index)

    def _structural(self, mutation, index: int) -> bool:
        # NOTE: opening a context menu takes the focus away from the editor
        self.session.blur()

        try:
            mutation(index)
        except StructuralUnderflow as e:
            logger.info("Structural change refused: %s", e)
            self.error_occurred.emit("Not possible", str(e))
            return False

        return True

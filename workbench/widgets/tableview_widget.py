from PySide6 import QtWidgets, QtCore, QtGui

from ..controllers.input_controller import InputController, InputMode
from ..utils.grid_table_model import GridTableModel
from .cell_delegate import CellDelegate


class PointerReleaseFilter(QtCore.QObject):
    """Ends a drag selection when the pointer is released anywhere in the application"""

    def __init__(self, controller: InputController, viewport: QtWidgets.QWidget):
        super().__init__()

        self.controller = controller
        self.viewport = viewport

    def eventFilter(self, watched, event):
        if (
            event.type() == QtCore.QEvent.Type.MouseButtonRelease
            and self.controller.mode == InputMode.DRAGGING
            and watched is not self.viewport
        ):
            self.controller.pointer_up()

        return False


class TableView(QtWidgets.QTableView):
    def __init__(self, controller: InputController, model: GridTableModel):
        super().__init__()

        self.controller = controller

        self.setModel(model)
        self.setItemDelegate(CellDelegate(controller, self))

        # NOTE: selection and editing are handled by the controller, not by Qt
        self.setEditTriggers(QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.NoSelection)
        self.setMouseTracking(False)

        # NOTE: seems to be the only way to access the select-all corner button
        self.corner: QtWidgets.QAbstractButton = self.findChild(QtWidgets.QAbstractButton)
        if self.corner is not None:
            self.corner.clicked.connect(self.controller.select_all)

        for header, is_column in ((self.horizontalHeader(), True), (self.verticalHeader(), False)):
            header.setContextMenuPolicy(QtCore.Qt.ContextMenuPolicy.CustomContextMenu)
            header.customContextMenuRequested.connect(
                lambda pos, header=header, is_column=is_column: self._header_menu(header, pos, is_column)
            )
            header.sectionDoubleClicked.connect(
                lambda index, is_column=is_column: self.controller.header_double_click(index, is_column)
            )

        self.release_filter = PointerReleaseFilter(controller, self.viewport())
        QtWidgets.QApplication.instance().installEventFilter(self.release_filter)

        self.controller.session.edit_started.connect(self._open_editor)
        self.controller.session.edit_finished.connect(self._close_editor)
        model.modelReset.connect(self._reopen_editor)

    # Editor
    def _open_editor(self, row: int, col: int) -> None:
        index = self.model().index(row, col)

        self.openPersistentEditor(index)
        self.scrollTo(index)

        editor = self.indexWidget(index)
        if editor is not None:
            editor.setFocus()

    def _reopen_editor(self) -> None:
        # NOTE: a model reset closes all editors, the session may still be editing a moved cell
        cell = self.controller.session.cell

        if cell is not None:
            self._open_editor(cell.row, cell.col)

    def _close_editor(self, row: int, col: int, committed: bool) -> None:
        index = self.model().index(row, col)

        if index.isValid() and self.isPersistentEditorOpen(index):
            self.closePersistentEditor(index)

        self.setFocus()

    # Pointer
    def mousePressEvent(self, event):
        if event.button() != QtCore.Qt.MouseButton.LeftButton:
            return

        index = self.indexAt(event.position().toPoint())

        if not index.isValid():
            return

        self.setFocus()
        self.controller.pointer_down(index.row(), index.column())

    def mouseMoveEvent(self, event):
        index = self.indexAt(event.position().toPoint())

        if index.isValid():
            self.controller.pointer_enter(index.row(), index.column())

    def mouseReleaseEvent(self, event):
        index = self.indexAt(event.position().toPoint())

        if index.isValid():
            self.controller.pointer_up(index.row(), index.column())
        else:
            self.controller.pointer_up()

    def mouseDoubleClickEvent(self, event):
        # NOTE: a single click already starts editing
        pass

    # Context menus
    def _add_column_actions(self, menu: QtWidgets.QMenu, col: int) -> None:
        menu.addAction("Insert column before", lambda: self.controller.insert_column(col))
        menu.addAction("Insert column after", lambda: self.controller.insert_column(col + 1))
        menu.addAction("Delete column", lambda: self.controller.delete_column(col))

    def _add_row_actions(self, menu: QtWidgets.QMenu, row: int) -> None:
        menu.addAction("Insert row above", lambda: self.controller.insert_row(row))
        menu.addAction("Insert row below", lambda: self.controller.insert_row(row + 1))
        menu.addAction("Delete row", lambda: self.controller.delete_row(row))

    def _header_menu(self, header: QtWidgets.QHeaderView, pos: QtCore.QPoint, is_column: bool) -> None:
        index = header.logicalIndexAt(pos)

        if index < 0:
            return

        menu = QtWidgets.QMenu(self)

        if is_column:
            self._add_column_actions(menu, index)
        else:
            self._add_row_actions(menu, index)

        menu.exec(header.mapToGlobal(pos))

    def contextMenuEvent(self, event):
        index = self.indexAt(event.pos())

        if not index.isValid():
            return

        menu = QtWidgets.QMenu(self)
        self._add_column_actions(menu, index.column())
        self._add_row_actions(menu, index.row())
        menu.exec(event.globalPos())

    # Keyboard
    def keyPressEvent(self, event):
        # COPY
        if event.matches(QtGui.QKeySequence.StandardKey.Copy):
            self.controller.copy()

        # CUT
        elif event.matches(QtGui.QKeySequence.StandardKey.Cut):
            self.controller.cut()

        # PASTE
        elif event.matches(QtGui.QKeySequence.StandardKey.Paste):
            self.controller.paste()

        # SELECT ALL
        elif event.matches(QtGui.QKeySequence.StandardKey.SelectAll):
            self.controller.select_all()

        # DELETE
        elif event.key() in (QtCore.Qt.Key.Key_Delete, QtCore.Qt.Key.Key_Backspace):
            self.controller.clear_selection_values()

        # EDIT
        elif event.key() in (QtCore.Qt.Key.Key_Return, QtCore.Qt.Key.Key_Enter, QtCore.Qt.Key.Key_F2):
            self.controller.edit_anchor()

        # OVERFLOW
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        QtWidgets.QApplication.instance().removeEventFilter(self.release_filter)
        super().closeEvent(event)

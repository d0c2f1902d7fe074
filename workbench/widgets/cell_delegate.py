from PySide6 import QtWidgets, QtCore, QtGui

from ..controllers.input_controller import InputController
from ..utils.grid_table_model import CellColor


class CellDelegate(QtWidgets.QStyledItemDelegate):
    """In-cell editor, every keystroke goes to the edit session as the new draft"""

    def __init__(self, controller: InputController, parent=None):
        super().__init__(parent)

        self.controller = controller

    def paint(self, painter, option, index):
        super().paint(painter, option, index)

        selection = self.controller.selection

        # NOTE: the outline marks the active cell, multi-cell selections are shaded by the model instead
        if selection.is_single_cell() and selection.anchor == (index.row(), index.column()):
            painter.save()
            painter.setPen(QtGui.QPen(CellColor.ACTIVE.value, 2))
            painter.drawRect(option.rect.adjusted(1, 1, -1, -1))
            painter.restore()

    def createEditor(self, parent, option, index):
        editor = QtWidgets.QLineEdit(parent)
        editor.setFrame(False)
        editor.setStyleSheet("border: 2px solid #4caf50")

        # NOTE: used on focus-out, to only blur the session this editor belongs to
        editor.cell = (index.row(), index.column())

        editor.textEdited.connect(self.controller.type_text)

        return editor

    def setEditorData(self, editor, index):
        value = index.data(QtCore.Qt.ItemDataRole.EditRole) or ""

        # Do not reset the cursor while the user is typing
        if editor.text() != value:
            editor.setText(value)

    def setModelData(self, editor, model, index):
        # Commits go through the edit session, not through the model
        pass

    def eventFilter(self, editor, event):
        if event.type() == QtCore.QEvent.Type.KeyPress:
            key = event.key()

            if key in (QtCore.Qt.Key.Key_Return, QtCore.Qt.Key.Key_Enter):
                self.controller.enter()
                return True

            if key == QtCore.Qt.Key.Key_Backtab:
                self.controller.back_tab()
                return True

            if key == QtCore.Qt.Key.Key_Tab:
                self.controller.tab()
                return True

            if key == QtCore.Qt.Key.Key_Escape:
                self.controller.escape()
                return True

        elif event.type() == QtCore.QEvent.Type.FocusOut:
            # Losing focus commits, but only if this editor is still the active one
            if self.controller.session.cell == getattr(editor, "cell", None):
                self.controller.blur()

            return False

        return super().eventFilter(editor, event)

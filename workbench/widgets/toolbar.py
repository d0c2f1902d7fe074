from PySide6 import QtWidgets, QtGui, QtCore


class Toolbar(QtWidgets.QToolBar):
    open_clicked: QtCore.Signal = QtCore.Signal()
    toggle_data_view_clicked: QtCore.Signal = QtCore.Signal()

    def __init__(self):
        super().__init__()

        self.setMovable(False)

        open_action = QtGui.QAction("Open", self)
        open_action.triggered.connect(self.open_clicked.emit)
        open_action.setShortcut(QtGui.QKeySequence.StandardKey.Open)
        self.addAction(open_action)

        self.toggle_action = QtGui.QAction("Close Data Workbench", self)
        self.toggle_action.triggered.connect(self.toggle_data_view_clicked.emit)
        self.addAction(self.toggle_action)

        for action in (open_action, self.toggle_action):
            button = self.widgetForAction(action)
            button.setStyleSheet("border: 1px solid black")

    def set_data_view_visible(self, visible: bool) -> None:
        self.toggle_action.setText("Close Data Workbench" if visible else "Open Data Workbench")

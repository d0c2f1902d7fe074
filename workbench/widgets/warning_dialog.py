from PySide6 import QtWidgets


class WarningDialog(QtWidgets.QDialog):
    """Modal message for failures the user has to acknowledge, details are folded away"""

    def __init__(self, title: str, text: str, details: str = None):
        super().__init__()

        self.setWindowTitle(title)
        self.setMinimumWidth(400)

        layout = QtWidgets.QVBoxLayout()
        self.setLayout(layout)

        text_label = QtWidgets.QLabel(text=text)
        text_label.setWordWrap(True)
        layout.addWidget(text_label)

        buttons = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.StandardButton.Ok)
        buttons.accepted.connect(self.accept)

        self.details_view: QtWidgets.QPlainTextEdit = None

        if details:
            self.details_view = QtWidgets.QPlainTextEdit(details)
            self.details_view.setReadOnly(True)
            self.details_view.setVisible(False)
            layout.addWidget(self.details_view)

            details_button = buttons.addButton("Show details", QtWidgets.QDialogButtonBox.ButtonRole.ActionRole)
            details_button.clicked.connect(
                lambda: self.details_view.setVisible(not self.details_view.isVisible())
            )

        layout.addWidget(buttons)

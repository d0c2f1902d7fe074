import logging

from PySide6 import QtWidgets, QtGui


logger = logging.getLogger(__name__)


class ClipboardUnavailable(Exception):
    pass


class ClipboardController:
    """Plain-text access to the platform clipboard"""

    def _clipboard(self) -> QtGui.QClipboard:
        application = QtWidgets.QApplication.instance()

        if application is None:
            raise ClipboardUnavailable("No running application to access the clipboard with")

        clipboard = QtWidgets.QApplication.clipboard()

        if clipboard is None:
            raise ClipboardUnavailable("The platform clipboard is not available")

        return clipboard

    def text(self) -> str:
        try:
            return self._clipboard().text()
        except ClipboardUnavailable:
            raise
        except RuntimeError as e:
            logger.warning("Reading the clipboard failed: %s", e)
            raise ClipboardUnavailable(str(e)) from e

    def set_text(self, text: str) -> None:
        try:
            self._clipboard().setText(text)
        except ClipboardUnavailable:
            raise
        except RuntimeError as e:
            logger.warning("Writing the clipboard failed: %s", e)
            raise ClipboardUnavailable(str(e)) from e

import sys
import logging
import traceback as tb

from workbench.application import Application

from workbench.windows.mainwindow import MainWindow

from workbench.widgets.warning_dialog import WarningDialog

def excepthook(cls, exception, traceback):
    logging.getLogger("workbench").error("Unhandled exception", exc_info=(cls, exception, traceback))

    WarningDialog(
        title="An error occurred",
        text=f"{exception}",
        details="".join(tb.format_exception(cls, exception, traceback)),
    ).exec()


sys.excepthook = excepthook
app = Application(MainWindow, sys.argv)

if len(sys.argv) > 1:
    app.open_initial_file(sys.argv[1])

app.start()
sys.exit(app.exec())

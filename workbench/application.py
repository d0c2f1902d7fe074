import logging
from typing import Type

from PySide6 import QtWidgets

from workbench.controllers.config_controller import ConfigController
from workbench.controllers.import_controller import ImportException
from workbench.utils.logging_config import setup_logging
from workbench.utils.state import State
from workbench.widgets.warning_dialog import WarningDialog


logger = logging.getLogger(__name__)


class Application(QtWidgets.QApplication):
    def __init__(self, mainwindow: Type[QtWidgets.QMainWindow], argv: list[str], configuration_path: str = "configuration.json"):
        super().__init__(argv)

        self.config_controller = ConfigController(configuration_path)
        self.configuration = self.config_controller.get_configuration()

        setup_logging(
            level=self.configuration.logging.level_value,
            log_file=self.configuration.logging.log_file,
        )

        self.state = State(configuration=self.configuration)

        self.ui = mainwindow(self.state)

    def open_initial_file(self, path: str) -> None:
        try:
            self.state.load_file(path)
        except ImportException as e:
            logger.warning("Could not open '%s': %s", path, e)
            WarningDialog(
                title="Import failed",
                text=str(e),
            ).exec()

    def start(self) -> None:
        self.ui.show()

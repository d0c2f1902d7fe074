import logging

from PySide6 import QtCore

from ..controllers.clipboard_controller import ClipboardController
from ..controllers.import_controller import ImportController
from ..controllers.input_controller import InputController
from .configuration import Configuration
from .edit_session import EditSession
from .grid_store import GridStore
from .selection import SelectionModel


logger = logging.getLogger(__name__)


class State(QtCore.QObject):
    """Holds the grid under edit together with its selection and edit session"""
    grid_loaded: QtCore.Signal = QtCore.Signal()

    def __init__(self, configuration: Configuration, clipboard: ClipboardController = None):
        super().__init__()

        self.configuration = configuration
        self.clipboard = clipboard if clipboard is not None else ClipboardController()

        self.grid: GridStore = None
        self.selection: SelectionModel = None
        self.session: EditSession = None
        self.controller: InputController = None

        self._set_grid(
            GridStore.blank(
                configuration.grid.default_rows,
                configuration.grid.default_columns,
            )
        )

    def _set_grid(self, grid: GridStore) -> None:
        # NOTE: a new grid means new selection and edit state, nothing carries over
        self.grid = grid
        self.selection = SelectionModel(grid)
        self.session = EditSession(grid, self.selection)
        self.controller = InputController(
            grid,
            selection=self.selection,
            session=self.session,
            clipboard=self.clipboard,
        )

        self.grid_loaded.emit()

    def load_file(self, path: str) -> None:
        # Raises ImportException, the current grid stays when the import fails
        grid = ImportController.load_grid(path)

        if self.session is not None:
            self.session.blur()

        self._set_grid(grid)

        logger.info("Loaded '%s'", path)

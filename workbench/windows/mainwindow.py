from PySide6 import QtWidgets, QtCore

from ..controllers.import_controller import ImportController, ImportException
from ..controllers.query_controller import QueryController
from ..utils.grid_table_model import GridTableModel
from ..utils.state import State
from ..widgets.query_panel import QueryPanel
from ..widgets.tableview_widget import TableView
from ..widgets.toolbar import Toolbar
from ..widgets.warning_dialog import WarningDialog


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, state: State):
        super().__init__()

        self.state = state

        self.table_view: TableView = None
        self.data_view_visible = True

        self.setWindowTitle("AI Data Scientist")
        self.resize(1200, 700)

        self.toolbar = Toolbar()
        self.toolbar.open_clicked.connect(self.open_file_clicked)
        self.toolbar.toggle_data_view_clicked.connect(self.toggle_data_view)
        self.addToolBar(self.toolbar)

        self.setup_ui()

        self.state.grid_loaded.connect(self.load_table)
        self.load_table()

    def setup_ui(self) -> None:
        self.splitter = QtWidgets.QSplitter(QtCore.Qt.Orientation.Horizontal)
        self.setCentralWidget(self.splitter)

        self.query_panel = QueryPanel(
            QueryController(self.state.configuration.query),
            self.state.grid,
        )
        self.splitter.addWidget(self.query_panel)

        self.data_view = QtWidgets.QWidget()
        data_layout = QtWidgets.QVBoxLayout()
        self.data_view.setLayout(data_layout)

        title = QtWidgets.QLabel(text="Data Workbench")
        font = title.font()
        font.setBold(True)
        font.setPointSize(14)
        title.setFont(font)
        data_layout.addWidget(title)

        self.splitter.addWidget(self.data_view)
        self.splitter.setSizes([600, 400])

    def load_table(self) -> None:
        layout = self.data_view.layout()

        if self.table_view is not None:
            layout.removeWidget(self.table_view)
            self.table_view.close()
            self.table_view.deleteLater()

        controller = self.state.controller
        model = GridTableModel(self.state.grid, self.state.selection, self.state.session)

        self.table_view = TableView(controller, model)
        layout.addWidget(self.table_view)

        controller.error_occurred.connect(lambda title, text: WarningDialog(title=title, text=text).exec())
        controller.notification.connect(lambda title, text: self.statusBar().showMessage(f"{title}: {text}", 3000))

        self.query_panel.set_grid(self.state.grid)

    # Actions
    def open_file_clicked(self) -> None:
        suffixes = " ".join(f"*{s}" for s in ImportController.CSV_SUFFIXES + ImportController.EXCEL_SUFFIXES)

        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self,
            "Open data",
            "",
            f"Data files ({suffixes})",
        )

        if path == "":
            return

        try:
            self.state.load_file(path)
        except ImportException as e:
            WarningDialog(
                title="Import failed",
                text=str(e),
            ).exec()
            return

        self.statusBar().showMessage(f"Loaded {path}", 3000)

    def toggle_data_view(self) -> None:
        self.data_view_visible = not self.data_view_visible

        self.data_view.setVisible(self.data_view_visible)
        self.toolbar.set_data_view_visible(self.data_view_visible)

import html

from PySide6 import QtWidgets

from ..controllers.query_controller import QueryController, QueryThread, QueryResponse
from ..utils.grid_store import GridStore


class QueryPanel(QtWidgets.QWidget):
    STARTER_QUESTIONS = (
        "Summarize the data",
        "Find correlations",
        "Identify outliers",
        "Generate visualizations",
        "Predict trends",
    )

    THINKING = "Thinking..."

    def __init__(self, controller: QueryController, grid: GridStore):
        super().__init__()

        self.controller = controller
        self.grid = grid

        self.messages: list[tuple[str, str]] = [
            ("assistant", "Hello! I've loaded your data. How can I help you analyze it today?"),
        ]

        # NOTE: keep a reference, the thread would be garbage collected otherwise
        self.query_thread: QueryThread = None

        self.setup_ui()

    def setup_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout()
        self.setLayout(layout)

        self.chat_view = QtWidgets.QTextBrowser()
        layout.addWidget(self.chat_view)

        self.starter_widget = QtWidgets.QWidget()
        starter_layout = QtWidgets.QHBoxLayout()
        starter_layout.setContentsMargins(0, 0, 0, 0)
        self.starter_widget.setLayout(starter_layout)

        for question in QueryPanel.STARTER_QUESTIONS:
            button = QtWidgets.QPushButton(text=question)
            button.clicked.connect(lambda _=False, q=question: self.send(q))
            starter_layout.addWidget(button)

        layout.addWidget(self.starter_widget)

        input_layout = QtWidgets.QHBoxLayout()
        self.prompt_input = QtWidgets.QLineEdit()
        self.prompt_input.setPlaceholderText("Ask about your data...")
        self.prompt_input.returnPressed.connect(lambda: self.send(self.prompt_input.text()))

        self.send_button = QtWidgets.QPushButton(text="Send")
        self.send_button.clicked.connect(lambda: self.send(self.prompt_input.text()))

        input_layout.addWidget(self.prompt_input)
        input_layout.addWidget(self.send_button)
        layout.addLayout(input_layout)

        self._render()

    def set_grid(self, grid: GridStore) -> None:
        self.grid = grid

    def _render(self) -> None:
        lines = []

        for role, content in self.messages:
            name = "You" if role == "user" else "Assistant"
            text = html.escape(content).replace("\n", "<br>")
            lines.append(f"<p><b>{name}:</b> {text}</p>")

        self.chat_view.setHtml("".join(lines))
        self.starter_widget.setVisible(len(self.messages) == 1)

    def _set_busy(self, busy: bool) -> None:
        self.send_button.setEnabled(not busy)
        self.prompt_input.setEnabled(not busy)

    def send(self, prompt: str) -> None:
        if prompt.strip() == "" or self.query_thread is not None:
            return

        self.prompt_input.clear()
        self.messages.append(("user", prompt))
        self.messages.append(("assistant", QueryPanel.THINKING))
        self._render()
        self._set_busy(True)

        self.query_thread = QueryThread(self.controller, prompt, self.grid)
        self.query_thread.signals.finished.connect(self._answered)
        self.query_thread.signals.failed.connect(self._failed)
        self.query_thread.start()

    def _replace_thinking(self, content: str) -> None:
        # Replace "Thinking..." with the actual outcome
        self.messages[-1] = ("assistant", content)
        self.query_thread = None

        self._render()
        self._set_busy(False)

    def _answered(self, response: QueryResponse) -> None:
        content = response.text

        if response.chart_data is not None:
            title = response.chart_data.get("title", "chart")
            content = f"{content}\n\n[{response.chart_data.get('type', 'chart')}: {title}]"

        self._replace_thinking(content)

    def _failed(self, reason: str) -> None:
        self._replace_thinking("Error: Unable to reach the backend.")

import logging
import threading
from dataclasses import dataclass

import requests
from PySide6 import QtCore

from ..utils.configuration import QuerySettings
from ..utils.grid_store import GridStore


logger = logging.getLogger(__name__)


class QueryException(Exception):
    pass


@dataclass
class QueryResponse:
    text: str

    # Chart description from the backend, e.g. {"data": [[...], [...]], "title": ..., "type": ...}
    chart_data: dict = None


class QueryController:
    """Asks the analysis backend questions about the committed grid"""

    def __init__(self, settings: QuerySettings):
        self.settings = settings

    def _perform_request(self, payload: dict) -> requests.Response:
        try:
            response = requests.post(
                self.settings.url,
                headers={"Content-Type": "application/json"},
                json=payload,
                timeout=self.settings.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise QueryException("Timeout") from e
        except requests.exceptions.HTTPError as e:
            raise QueryException("HTTPError") from e
        except requests.exceptions.RequestException as e:
            raise QueryException("Request error") from e

        return response

    def ask(self, prompt: str, grid: GridStore) -> QueryResponse:
        if prompt.strip() == "":
            raise ValueError("Cannot send an empty prompt")

        # NOTE: only committed values are sent, drafts of the edit session never leave the grid view
        payload = {
            "prompt": prompt,
            "data": grid.rows(),
        }

        logger.info("Sending prompt to %s", self.settings.url)
        response = self._perform_request(payload)

        try:
            body = response.json()
            text = body["response"]["output"]
        except (ValueError, KeyError, TypeError) as e:
            raise QueryException("Unexpected response from the backend") from e

        chart_data = body.get("chart_data")

        return QueryResponse(
            text=str(text),
            chart_data=chart_data if isinstance(chart_data, dict) else None,
        )


class QuerySignals(QtCore.QObject):
    finished: QtCore.Signal = QtCore.Signal(
        *(object,), arguments=["response"]
    )
    failed: QtCore.Signal = QtCore.Signal(
        *(str,), arguments=["reason"]
    )


class QueryThread(threading.Thread):
    def __init__(self, controller: QueryController, prompt: str, grid: GridStore):
        super().__init__()

        # NOTE: created on the GUI thread, so emitting from run() is queued to it
        self.signals = QuerySignals()

        self.controller = controller
        self.prompt = prompt

        # NOTE: snapshot on the GUI thread, the grid is not touched from the worker
        self.snapshot = GridStore(grid.rows())

        self.daemon = True

    def run(self):
        try:
            response = self.controller.ask(self.prompt, self.snapshot)
        except QueryException as e:
            logger.warning("Query failed: %s", e)
            self.signals.failed.emit(str(e))
            return

        self.signals.finished.emit(response)

"""Unit tests for QueryController and QueryThread."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from workbench.controllers.query_controller import (
    QueryController,
    QueryException,
    QueryResponse,
    QueryThread,
)
from workbench.utils.configuration import QuerySettings
from workbench.utils.grid_store import GridStore


@pytest.fixture
def controller() -> QueryController:
    return QueryController(QuerySettings(url="http://backend/ask", timeout=5))


@pytest.fixture
def grid() -> GridStore:
    return GridStore([["name", "score"], ["Ada", "12"]])


def _response(body) -> MagicMock:
    response = MagicMock()
    response.json.return_value = body
    return response


class TestAsk:
    """Tests for sending a prompt to the backend."""

    def test_sends_committed_grid(self, controller: QueryController, grid: GridStore) -> None:
        with patch("workbench.controllers.query_controller.requests.post") as post:
            post.return_value = _response({"response": {"output": "Ada scored 12."}})

            result = controller.ask("Who scored?", grid)

        post.assert_called_once_with(
            "http://backend/ask",
            headers={"Content-Type": "application/json"},
            json={"prompt": "Who scored?", "data": [["name", "score"], ["Ada", "12"]]},
            timeout=5,
        )
        assert result == QueryResponse(text="Ada scored 12.", chart_data=None)

    def test_chart_data_is_kept(self, controller: QueryController, grid: GridStore) -> None:
        chart = {"type": "bar", "title": "Scores", "data": [["Ada", 12]]}

        with patch("workbench.controllers.query_controller.requests.post") as post:
            post.return_value = _response({"response": {"output": "Here you go"}, "chart_data": chart})

            result = controller.ask("Plot it", grid)

        assert result.chart_data == chart

    def test_invalid_chart_data_is_dropped(self, controller: QueryController, grid: GridStore) -> None:
        with patch("workbench.controllers.query_controller.requests.post") as post:
            post.return_value = _response({"response": {"output": "ok"}, "chart_data": "nope"})

            assert controller.ask("Plot it", grid).chart_data is None

    @pytest.mark.parametrize("prompt", ["", "   "])
    def test_empty_prompt_is_rejected(self, controller: QueryController, grid: GridStore, prompt: str) -> None:
        with patch("workbench.controllers.query_controller.requests.post") as post:
            with pytest.raises(ValueError):
                controller.ask(prompt, grid)

        post.assert_not_called()

    def test_timeout(self, controller: QueryController, grid: GridStore) -> None:
        with patch("workbench.controllers.query_controller.requests.post") as post:
            post.side_effect = requests.exceptions.Timeout()

            with pytest.raises(QueryException, match="Timeout"):
                controller.ask("question", grid)

    def test_http_error(self, controller: QueryController, grid: GridStore) -> None:
        response = _response({})
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("500")

        with patch("workbench.controllers.query_controller.requests.post") as post:
            post.return_value = response

            with pytest.raises(QueryException, match="HTTPError"):
                controller.ask("question", grid)

    def test_connection_error(self, controller: QueryController, grid: GridStore) -> None:
        with patch("workbench.controllers.query_controller.requests.post") as post:
            post.side_effect = requests.exceptions.ConnectionError()

            with pytest.raises(QueryException, match="Request error"):
                controller.ask("question", grid)

    @pytest.mark.parametrize("body", [{}, {"response": "flat"}, ["list"]])
    def test_unexpected_body(self, controller: QueryController, grid: GridStore, body) -> None:
        with patch("workbench.controllers.query_controller.requests.post") as post:
            post.return_value = _response(body)

            with pytest.raises(QueryException, match="Unexpected response"):
                controller.ask("question", grid)

    def test_body_that_is_not_json(self, controller: QueryController, grid: GridStore) -> None:
        response = MagicMock()
        response.json.side_effect = ValueError("no json")

        with patch("workbench.controllers.query_controller.requests.post") as post:
            post.return_value = response

            with pytest.raises(QueryException):
                controller.ask("question", grid)


class TestQueryThread:
    """Tests for running a query off the GUI thread."""

    def test_snapshot_is_taken_at_creation(self, grid: GridStore) -> None:
        controller = MagicMock()

        thread = QueryThread(controller, "question", grid)
        grid.set_cell(1, 1, "99")
        thread.run()

        sent_grid = controller.ask.call_args.args[1]
        assert sent_grid.rows() == [["name", "score"], ["Ada", "12"]]

    def test_finished_signal(self, grid: GridStore) -> None:
        controller = MagicMock()
        controller.ask.return_value = QueryResponse(text="answer")
        finished = []

        thread = QueryThread(controller, "question", grid)
        thread.signals.finished.connect(finished.append)
        thread.run()

        assert finished == [QueryResponse(text="answer")]

    def test_failed_signal(self, grid: GridStore) -> None:
        controller = MagicMock()
        controller.ask.side_effect = QueryException("Timeout")
        failed = []

        thread = QueryThread(controller, "question", grid)
        thread.signals.failed.connect(failed.append)
        thread.run()

        assert failed == ["Timeout"]

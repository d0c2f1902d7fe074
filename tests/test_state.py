"""Unit tests for State."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from workbench.controllers.clipboard_controller import ClipboardController
from workbench.controllers.import_controller import ImportException
from workbench.utils.configuration import Configuration, GridSettings
from workbench.utils.state import State


@pytest.fixture
def state() -> State:
    configuration = Configuration.get_default()
    configuration.grid = GridSettings(default_rows=3, default_columns=2)

    return State(configuration, clipboard=MagicMock(spec=ClipboardController))


class TestState:
    """Tests for the application state."""

    def test_starts_with_blank_grid(self, state: State) -> None:
        assert state.grid.shape == (3, 2)
        assert state.controller.grid is state.grid
        assert state.controller.selection is state.selection
        assert state.controller.session is state.session

    def test_load_file_replaces_grid(self, state: State, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        path.write_text("a,b,c\n", encoding="utf-8")
        loaded = []
        state.grid_loaded.connect(lambda: loaded.append(True))

        state.load_file(str(path))

        assert state.grid.rows() == [["a", "b", "c"]]
        assert not state.selection.has_selection
        assert not state.session.is_editing
        assert loaded == [True]

    def test_load_file_commits_running_edit_on_old_grid(self, state: State, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        path.write_text("x\n", encoding="utf-8")
        old_grid = state.grid
        state.session.begin_edit(0, 0)
        state.session.type_text("kept")

        state.load_file(str(path))

        assert old_grid.get_cell(0, 0) == "kept"

    def test_failed_load_keeps_grid(self, state: State, tmp_path: Path) -> None:
        grid = state.grid

        with pytest.raises(ImportException):
            state.load_file(str(tmp_path / "missing.csv"))

        assert state.grid is grid

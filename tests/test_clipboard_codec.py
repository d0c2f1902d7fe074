"""Unit tests for ClipboardCodec."""

from __future__ import annotations

import pytest

from workbench.utils.clipboard_codec import ClipboardCodec
from workbench.utils.grid_store import GridStore
from workbench.utils.selection import Bounds, Cell


class TestSerialize:
    """Tests for turning a region into clipboard text."""

    def test_serialize_region(self) -> None:
        grid = GridStore([
            ["a", "b", "c"],
            ["d", "e", "f"],
            ["g", "h", "i"],
        ])

        text = ClipboardCodec.serialize(grid, Bounds(0, 1, 1, 2))

        assert text == "b\tc\ne\tf"

    def test_serialize_single_cell(self) -> None:
        grid = GridStore([["only"]])

        assert ClipboardCodec.serialize(grid, Bounds(0, 0, 0, 0)) == "only"

    def test_serialize_keeps_empty_cells(self) -> None:
        grid = GridStore([["", "x"], ["", ""]])

        assert ClipboardCodec.serialize(grid, Bounds(0, 1, 0, 1)) == "\tx\n\t"


class TestDeserialize:
    """Tests for parsing clipboard text."""

    def test_deserialize(self) -> None:
        assert ClipboardCodec.deserialize("a\tb\nc\td") == [["a", "b"], ["c", "d"]]

    def test_deserialize_keeps_ragged_rows(self) -> None:
        assert ClipboardCodec.deserialize("a\tb\tc\nd") == [["a", "b", "c"], ["d"]]

    def test_deserialize_empty_text(self) -> None:
        assert ClipboardCodec.deserialize("") == [[""]]

    @pytest.mark.parametrize("rows", [
        [["a"]],
        [["a", "b"], ["c", "d"]],
        [["", "x", ""], ["y", "", "z"]],
    ])
    def test_round_trip(self, rows: list[list[str]]) -> None:
        grid = GridStore(rows)
        bounds = Bounds(0, grid.row_count - 1, 0, grid.column_count - 1)

        assert ClipboardCodec.deserialize(ClipboardCodec.serialize(grid, bounds)) == rows


class TestNormalize:
    """Tests for cleaning up text coming from other applications."""

    @pytest.mark.parametrize("text, expected", [
        ("a\tb\r\nc\td\r\n", "a\tb\nc\td"),
        ("a\rb", "a\nb"),
        ("a\n", "a"),
        ("a\n\n", "a\n"),
        ("a", "a"),
    ])
    def test_normalize(self, text: str, expected: str) -> None:
        assert ClipboardCodec.normalize_clipboard_text(text) == expected


class TestApplyPaste:
    """Tests for writing pasted rows into a grid."""

    def test_paste_at_origin(self) -> None:
        grid = GridStore.blank(3, 3)

        written = ClipboardCodec.apply_paste(grid, Cell(1, 1), [["a", "b"], ["c", "d"]])

        assert written == Bounds(1, 2, 1, 2)
        assert grid.rows() == [
            ["", "", ""],
            ["", "a", "b"],
            ["", "c", "d"],
        ]

    def test_paste_is_clipped_to_grid(self) -> None:
        grid = GridStore.blank(2, 2)

        written = ClipboardCodec.apply_paste(grid, Cell(1, 1), [["a", "b"], ["c", "d"]])

        assert written == Bounds(1, 1, 1, 1)
        assert grid.shape == (2, 2)
        assert grid.rows() == [["", ""], ["", "a"]]

    def test_ragged_paste_writes_only_given_cells(self) -> None:
        grid = GridStore([["1", "2", "3"], ["4", "5", "6"]])

        written = ClipboardCodec.apply_paste(grid, Cell(0, 0), [["a", "b", "c"], ["d"]])

        assert written == Bounds(0, 1, 0, 2)
        assert grid.rows() == [["a", "b", "c"], ["d", "5", "6"]]

    def test_paste_of_empty_string_clears_cell(self) -> None:
        grid = GridStore([["x"]])

        ClipboardCodec.apply_paste(grid, Cell(0, 0), ClipboardCodec.deserialize(""))

        assert grid.get_cell(0, 0) == ""

    def test_paste_outside_grid_writes_nothing(self) -> None:
        grid = GridStore.blank(2, 2)

        assert ClipboardCodec.apply_paste(grid, Cell(2, 0), [["a"]]) is None
        assert grid.rows() == [["", ""], ["", ""]]

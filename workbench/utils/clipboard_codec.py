from .grid_store import GridStore
from .selection import Bounds, Cell


class ClipboardCodec:
    """
    Converts grid regions to and from spreadsheet clipboard text

    Columns are separated by a single tab, rows by a single newline.
    Tabs and newlines inside a cell are not escaped, same as spreadsheet applications.
    """
    COLUMN_DELIMITER = "\t"
    ROW_DELIMITER = "\n"

    @staticmethod
    def serialize(grid: GridStore, bounds: Bounds) -> str:
        return ClipboardCodec.ROW_DELIMITER.join(
            ClipboardCodec.COLUMN_DELIMITER.join(
                grid.get_cell(row, col)
                for col in range(bounds.min_col, bounds.max_col + 1)
            )
            for row in range(bounds.min_row, bounds.max_row + 1)
        )

    @staticmethod
    def deserialize(text: str) -> list[list[str]]:
        # NOTE: ragged rows are kept, apply_paste deals with them
        return [
            row.split(ClipboardCodec.COLUMN_DELIMITER)
            for row in text.split(ClipboardCodec.ROW_DELIMITER)
        ]

    @staticmethod
    def normalize_clipboard_text(text: str) -> str:
        text = text.replace("\r\n", "\n").replace("\r", "\n")

        # NOTE: excel complicates matters, they add a trailing '\n' character
        # We need to make sure we catch it here, or we paste an extra empty row
        if text.endswith("\n"):
            text = text[:-1]

        return text

    @staticmethod
    def apply_paste(grid: GridStore, origin: Cell, pasted_rows: list[list[str]]) -> Bounds | None:
        """Writes pasted_rows with their top-left at origin, skipping anything outside the grid"""
        written: list[Cell] = []

        for relative_row, row_content in enumerate(pasted_rows):
            for relative_col, value in enumerate(row_content):
                row, col = origin.row + relative_row, origin.col + relative_col

                # The grid never grows on paste
                if not grid.in_bounds(row, col):
                    continue

                grid.set_cell(row, col, value)
                written.append(Cell(row, col))

        if not written:
            return None

        return Bounds(
            min_row=min(c.row for c in written),
            max_row=max(c.row for c in written),
            min_col=min(c.col for c in written),
            max_col=max(c.col for c in written),
        )

import os
import csv
import zipfile
import logging
from datetime import datetime, date

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..utils.grid_store import GridStore


logger = logging.getLogger(__name__)


class ImportException(Exception):
    pass


class ImportController:
    CSV_SUFFIXES = (".csv", ".txt")
    EXCEL_SUFFIXES = (".xlsx", ".xlsm")

    @staticmethod
    def _pad(rows: list[list]) -> list[list[str]]:
        # NOTE: the grid only accepts rectangular data,
        # pandas fills the short rows up to the longest one
        df = pd.DataFrame(rows).fillna("").astype(str)

        data = df.values.tolist()

        # Drop the completely empty rows at the bottom (trailing newlines, formatted excel rows)
        while data and all(v == "" for v in data[-1]):
            data.pop()

        if len(data) == 0 or len(data[0]) == 0:
            return [[""]]

        return data

    @staticmethod
    def read_csv(path: str) -> list[list[str]]:
        try:
            with open(path, "r", encoding="utf-8-sig", newline="") as f:
                rows = list(csv.reader(f))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise ImportException(f"The file '{path}' could not be read: {e}") from e

        return ImportController._pad(rows)

    @staticmethod
    def read_excel(path: str) -> list[list[str]]:
        def _format(value) -> str:
            if value is None:
                return ""

            if isinstance(value, (datetime, date)):
                return value.strftime("%Y-%m-%d")

            return str(value)

        try:
            wb = load_workbook(
                path,
                read_only=True,
                data_only=True,
                keep_links=False,
                rich_text=False,
            )
        except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ValueError) as e:
            raise ImportException(f"The file '{path}' could not be read: {e}") from e

        try:
            ws = wb.worksheets[0]
            rows = [[_format(v) for v in r] for r in ws.values]
        finally:
            wb.close()

        return ImportController._pad(rows)

    @staticmethod
    def read_file(path: str) -> list[list[str]]:
        if not os.path.isfile(path):
            raise ImportException(f"File '{path}' not found.")

        suffix = os.path.splitext(path)[1].lower()

        if suffix in ImportController.CSV_SUFFIXES:
            rows = ImportController.read_csv(path)
        elif suffix in ImportController.EXCEL_SUFFIXES:
            rows = ImportController.read_excel(path)
        else:
            raise ImportException(f"File type '{suffix}' is not supported.")

        logger.info("Imported %dx%d grid from '%s'", len(rows), len(rows[0]), path)
        return rows

    @staticmethod
    def load_grid(path: str) -> GridStore:
        return GridStore(ImportController.read_file(path))

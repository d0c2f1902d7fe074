import logging
from dataclasses import dataclass, asdict


@dataclass
class GridSettings:
    default_rows: int
    default_columns: int

    @staticmethod
    def get_default() -> "GridSettings":
        return GridSettings(
            default_rows=20,
            default_columns=10,
        )


@dataclass
class QuerySettings:
    url: str
    timeout: int

    @staticmethod
    def get_default() -> "QuerySettings":
        return QuerySettings(
            url="http://127.0.0.1:5000/ask",
            timeout=30,
        )


@dataclass
class LoggingSettings:
    level: str
    file: str

    @staticmethod
    def get_default() -> "LoggingSettings":
        return LoggingSettings(
            level="INFO",
            file="",
        )

    @property
    def level_value(self) -> int:
        return logging.getLevelName(self.level.upper())

    @property
    def log_file(self) -> str | None:
        return self.file if self.file != "" else None


@dataclass
class Configuration:
    grid: GridSettings
    query: QuerySettings
    logging: LoggingSettings

    @staticmethod
    def get_default() -> "Configuration":
        return Configuration(
            grid=GridSettings.get_default(),
            query=QuerySettings.get_default(),
            logging=LoggingSettings.get_default(),
        )

    @staticmethod
    def from_json(json: dict) -> "Configuration":
        return Configuration(
            grid=GridSettings(
                default_rows=json["grid"]["default_rows"],
                default_columns=json["grid"]["default_columns"],
            ),
            query=QuerySettings(
                url=json["query"]["url"],
                timeout=json["query"]["timeout"],
            ),
            logging=LoggingSettings(
                level=json["logging"]["level"],
                file=json["logging"]["file"],
            ),
        )

    def to_json(self) -> dict:
        return asdict(self)

import os
import json
import logging

from ..utils.configuration import Configuration


logger = logging.getLogger(__name__)


class ConfigController:
    def __init__(self, path: str):
        self.configuration_path = path

    def _verify_configuration(self, configuration: dict) -> bool:
        """Verifies the integrity of the configuration"""
        if not isinstance(configuration, dict):
            return False

        required = {
            "grid": {"default_rows": int, "default_columns": int},
            "query": {"url": str, "timeout": int},
            "logging": {"level": str, "file": str},
        }

        for section, fields in required.items():
            values = configuration.get(section)

            if not isinstance(values, dict):
                return False

            for field, _type in fields.items():
                if field not in values:
                    return False

                # NOTE: bool is an int subclass, but not a valid size
                if not isinstance(values[field], _type) or isinstance(values[field], bool):
                    return False

        grid = configuration["grid"]

        # NOTE: the grid can never be smaller than 1x1
        if grid["default_rows"] < 1 or grid["default_columns"] < 1:
            return False

        if configuration["query"]["timeout"] <= 0:
            return False

        if configuration["logging"]["level"].upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return False

        return True

    def get_configuration(self) -> Configuration:
        if not os.path.exists(self.configuration_path):
            configuration = Configuration.get_default()

            # First run, write the defaults so they can be edited
            try:
                self.save_configuration(configuration)
                logger.info("Wrote default configuration to '%s'", self.configuration_path)
            except OSError as e:
                logger.warning("Could not write default configuration to '%s': %s", self.configuration_path, e)

            return configuration

        with open(self.configuration_path, "r", encoding="utf-8") as f:
            try:
                configuration = json.load(f)
            except ValueError:
                logger.warning("Configuration at '%s' is not valid json, using defaults", self.configuration_path)
                return Configuration.get_default()

        if not self._verify_configuration(configuration):
            logger.warning("Configuration at '%s' is incomplete, using defaults", self.configuration_path)
            return Configuration.get_default()

        return Configuration.from_json(configuration)

    def save_configuration(self, configuration: Configuration) -> None:
        with open(self.configuration_path, "w", encoding="utf-8") as f:
            json.dump(configuration.to_json(), f, indent=4)

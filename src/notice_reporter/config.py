"""
Project configuration for notice generation.

A single YAML file names the license texts, license configuration,
copyright garbage, templates and pre-processing script to use. Relative
paths are resolved against the directory of the configuration file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

CONFIG_FILE = "notice_config.yaml"

_PATH_KEYS = [
    "license_texts",
    "license_texts_dir",
    "license_config",
    "copyright_garbage",
    "template_config",
    "preprocessing_script",
]


@dataclass
class ReporterConfig:
    """
    Settings of a notice reporter.

    Attributes:
        license_texts: YAML file mapping license ids to license texts
        license_texts_dir: Directory with one license text file per license id
        license_config: YAML file with the license sets
        copyright_garbage: YAML file with the copyright statements to suppress
        template_config: YAML file overriding headers and adding footers
        preprocessing_script: Python script run as pre-processing hook
        omit_excluded: Whether excluded findings are left out of the notice
        output_file: Default name of the generated notice file
    """

    license_texts: Optional[str] = None
    license_texts_dir: Optional[str] = None
    license_config: Optional[str] = None
    copyright_garbage: Optional[str] = None
    template_config: Optional[str] = None
    preprocessing_script: Optional[str] = None
    omit_excluded: bool = True
    output_file: str = "NOTICE"

    @classmethod
    def load(cls, config_path: str = CONFIG_FILE) -> "ReporterConfig":
        """
        Load the configuration from a YAML file.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist
            ValueError: If the file is not a mapping
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file '{config_path}' not found.")
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error loading config file '{config_path}': {e}") from e
        if not isinstance(config, dict):
            raise ValueError(f"Config file '{config_path}' is not a valid dictionary.")

        values = {}
        for key in _PATH_KEYS:
            value = config.get(key)
            if value:
                value_path = Path(value)
                values[key] = str(value_path if value_path.is_absolute() else path.parent / value_path)
        values["omit_excluded"] = bool(config.get("omit_excluded", True))
        values["output_file"] = str(config.get("output_file", "NOTICE"))
        return cls(**values)

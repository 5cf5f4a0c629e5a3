"""
License manager module for handling license texts and license configuration.

This module provides:
1. LicenseManager, which looks up license texts from a YAML file and/or a
   directory with one file per license
2. LicenseConfiguration, which describes the sets (categories) licenses
   belong to
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

import yaml


class LicenseTextProvider(Protocol):
    """Lookup of license texts by license id, None for unknown licenses."""

    def get_license_text(self, license_id: str) -> Optional[str]:
        ...


class LicenseManager:
    """
    Manages license text storage and retrieval.

    License texts are looked up case-insensitively in the YAML configuration
    first, then in the license texts directory.
    """

    def __init__(self, license_config_path: Optional[str] = None, license_texts_dir: Optional[str] = None):
        """
        Initialize the license manager.

        Args:
            license_config_path: Path to a YAML file mapping license ids to texts
            license_texts_dir: Directory with files named after license ids
        """
        self.license_config_path = Path(license_config_path) if license_config_path else None
        self.license_texts_dir = Path(license_texts_dir) if license_texts_dir else None
        self.licenses = self._load_licenses()

    def _load_licenses(self) -> Dict[str, str]:
        """
        Load license texts from configuration file.

        Returns:
            Dictionary mapping lower-cased license IDs to their texts

        Note:
            Returns empty dict if no file is configured or the file is not found

        Raises:
            ValueError: If the file is not a valid mapping of strings
        """
        if self.license_config_path is None:
            return {}
        if not self.license_config_path.exists():
            print(f"⚠️ Warning: License configuration file '{self.license_config_path}' not found. License texts may be missing.")
            return {}
        try:
            with open(self.license_config_path, 'r', encoding='utf-8') as f:
                loaded_licenses = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error loading license configuration file '{self.license_config_path}': {e}") from e
        if not isinstance(loaded_licenses, dict):
            raise ValueError(f"License configuration file '{self.license_config_path}' is not a valid dictionary.")
        return {str(k).lower(): str(v) for k, v in loaded_licenses.items() if v is not None}

    def _read_license_file(self, license_id: str) -> Optional[str]:
        if self.license_texts_dir is None:
            return None
        for candidate in (license_id, f"{license_id}.txt"):
            path = self.license_texts_dir / candidate
            # License ids never contain path separators.
            if path.parent == self.license_texts_dir and path.is_file():
                return path.read_text(encoding='utf-8')
        return None

    def get_license_text(self, license_id: str) -> Optional[str]:
        """
        Get the text of a single license.

        Args:
            license_id: License identifier

        Returns:
            The license text, None if it is not known
        """
        if not license_id or not license_id.strip():
            return None
        text = self.licenses.get(license_id.strip().lower())
        if text is not None:
            return text
        return self._read_license_file(license_id.strip())


@dataclass(frozen=True)
class LicenseEntry:
    id: str
    sets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LicenseConfiguration:
    """
    Categorization of licenses into named sets, e.g. "permissive" or "copyleft".

    Attributes:
        licenses: The configured licenses
    """

    licenses: Tuple[LicenseEntry, ...] = field(default_factory=tuple)

    @classmethod
    def load(cls, config_path: Optional[str]) -> "LicenseConfiguration":
        """
        Load the license configuration from a YAML file.

        The file contains a "licenses" list whose entries have an "id" and an
        optional list of "sets". An empty configuration is returned if no path
        is given or the file does not exist.

        Raises:
            ValueError: If the file content is not valid
        """
        if config_path is None:
            return cls()
        path = Path(config_path)
        if not path.exists():
            print(f"⚠️ Warning: License configuration file '{path}' not found. No license sets will be available.")
            return cls()
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error loading license configuration file '{path}': {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"License configuration file '{path}' is not a valid dictionary.")
        entries = []
        for item in loaded.get('licenses') or []:
            if not isinstance(item, dict) or 'id' not in item:
                raise ValueError(f"Invalid license entry in '{path}': {item}")
            entries.append(LicenseEntry(id=str(item['id']), sets=tuple(str(s) for s in item.get('sets') or [])))
        return cls(licenses=tuple(entries))

    def get_license(self, license_id: str) -> Optional[LicenseEntry]:
        for entry in self.licenses:
            if entry.id.lower() == license_id.lower():
                return entry
        return None

    def get_ids_for_set(self, set_name: str) -> List[str]:
        """Return the ids of all licenses in the given set, sorted."""
        return sorted(entry.id for entry in self.licenses if set_name in entry.sets)

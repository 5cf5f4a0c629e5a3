"""
Template manager module for the fixed texts of a notice file.

This module provides the TemplateManager class that handles:
1. Loading header and footer texts from configuration
2. Falling back to the default headers
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_TEMPLATES = {
    "header_with_findings":
        "This project contains or depends on third-party software components pursuant to the following licenses:\n",
    "header_without_findings":
        "This project neither contains or depends on any third-party software components.\n",
}


class TemplateManager:
    """
    Manages the header and footer texts of notice files.

    Templates not present in the configuration file fall back to the
    defaults. Footers are optional and given as a list under "footers".
    """

    def __init__(self, template_config_path: Optional[str] = None):
        """
        Initialize the template manager.

        Args:
            template_config_path: Path to template configuration file
        """
        self.template_config_path = Path(template_config_path) if template_config_path else None
        self.templates = self._load_templates()

    def _load_templates(self) -> Dict[str, Any]:
        """
        Load templates from configuration file.

        Returns:
            Dictionary mapping template section names to their content

        Note:
            Returns empty dict if no file is configured or the file is not found
        """
        if self.template_config_path is None:
            return {}
        if not self.template_config_path.exists():
            print(f"⚠️ Warning: Template configuration file '{self.template_config_path}' not found. Using default templates.")
            return {}
        try:
            with open(self.template_config_path, 'r', encoding='utf-8') as f:
                loaded_templates = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error loading template configuration file '{self.template_config_path}': {e}") from e
        if not isinstance(loaded_templates, dict):
            raise ValueError(f"Template configuration file '{self.template_config_path}' is not a valid dictionary.")
        return loaded_templates

    def get_template(self, template_name: str) -> str:
        """
        Get template content for a specific section.

        Args:
            template_name: Name of the template section

        Returns:
            Template content as string

        Raises:
            KeyError: If neither the configuration nor the defaults know the template
        """
        template = self.templates.get(template_name)
        if template is None:
            return DEFAULT_TEMPLATES[template_name]
        return str(template)

    def get_header(self, has_findings: bool) -> str:
        return self.get_template("header_with_findings" if has_findings else "header_without_findings")

    def get_footers(self) -> List[str]:
        footers = self.templates.get("footers") or []
        if isinstance(footers, str):
            return [footers]
        return [str(footer) for footer in footers]

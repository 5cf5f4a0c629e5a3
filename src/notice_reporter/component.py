"""
Component module for representing the findings of an analysis result.

This module provides the data classes describing a scanned software
component, including:
1. Its identifier (type, namespace, name and version)
2. The licenses detected in it
3. The copyright statements found under each license
4. Exclusion flags and unresolved detection issues
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, order=True)
class Identifier:
    """
    Identifier of a software component.

    Identifiers compare and sort by their four coordinates, so they can be
    used as stable keys for findings.

    Attributes:
        type: Package manager or origin, e.g. "Maven" or "NPM"
        namespace: Group or scope of the component (may be empty)
        name: Component name
        version: Component version (may be empty)
    """

    type: str = ""
    namespace: str = ""
    name: str = ""
    version: str = ""

    @classmethod
    def from_string(cls, value: str) -> "Identifier":
        """
        Parse an identifier in "type:namespace:name:version" notation.

        Missing trailing coordinates are left empty, so "NPM::lodash" is a
        valid identifier without a version.

        Raises:
            ValueError: If the value has more than four coordinates
        """
        parts = str(value).strip().split(":")
        if len(parts) > 4:
            raise ValueError(f"Invalid identifier '{value}'. Expected 'type:namespace:name:version'.")
        parts += [""] * (4 - len(parts))
        return cls(*[p.strip() for p in parts])

    def __str__(self) -> str:
        return f"{self.type}:{self.namespace}:{self.name}:{self.version}"


@dataclass
class CopyrightFinding:
    statement: str
    excluded: bool = False


@dataclass
class LicenseFinding:
    """
    A license detected in a component together with its copyrights.

    Attributes:
        license: License identifier (e.g., "MIT", "Apache-2.0")
        copyrights: Copyright findings associated with the license
        issues: Unresolved detection issues; findings with issues are not reported
        excluded: Whether the finding lies in an excluded path or scope
    """

    license: str
    copyrights: List[CopyrightFinding] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)
    excluded: bool = False


@dataclass
class Component:
    """
    A scanned software component.

    Attributes:
        id: Identifier of the component
        licenses: License findings of the component
        excluded: Whether the whole component is excluded from reports
    """

    id: Identifier
    licenses: List[LicenseFinding] = field(default_factory=list)
    excluded: bool = False

"""
Analysis result module.

This module provides the AnalysisResult class and the loader that reads it
from the supported input formats:
1. JSON and YAML documents with nested components and license findings
2. Excel (.xlsx, .xls) and CSV tables with one row per copyright finding
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml

from notice_reporter.component import Component, CopyrightFinding, Identifier, LicenseFinding


@dataclass
class ScannerRun:
    """Summary of the scan stage that produced the license findings."""

    tool: str = ""
    version: str = ""


@dataclass
class AnalysisResult:
    """
    The output of the analysis pipeline a notice is generated from.

    Attributes:
        scanner: The scan stage output, None if the result was never scanned
        components: All components found by the analysis
    """

    scanner: Optional[ScannerRun] = None
    components: List[Component] = field(default_factory=list)

    def collect_license_findings(self, omit_excluded: bool = True) -> Dict[Identifier, List[LicenseFinding]]:
        """
        Collect the license findings of all components.

        Args:
            omit_excluded: Drop excluded components, license findings and copyrights

        Returns:
            Dictionary mapping component identifiers to their license findings.
            The returned findings are copies, the result itself is not modified.
        """
        collected: Dict[Identifier, List[LicenseFinding]] = {}
        for component in self.components:
            if omit_excluded and component.excluded:
                continue
            findings = collected.setdefault(component.id, [])
            for finding in component.licenses:
                if omit_excluded and finding.excluded:
                    continue
                copyrights = [c for c in finding.copyrights if not (omit_excluded and c.excluded)]
                findings.append(replace(finding, copyrights=copyrights, issues=list(finding.issues)))
        return collected


# Column aliases for tabular inputs, mapped to the canonical column names
COLUMN_ALIASES = {
    "component": ["component", "id", "identifier", "package"],
    "license": ["license", "license_id", "spdx"],
    "copyright": ["copyright", "copyrights", "copyright_statement", "statement"],
    "excluded": ["excluded", "license_excluded"],
    "component_excluded": ["component_excluded"],
    "copyright_excluded": ["copyright_excluded"],
    "issues": ["issues", "issue", "errors"],
}


def _clean_excel_string(text: Any) -> str:
    """Remove Excel line break artifacts and surrounding whitespace."""
    if not isinstance(text, str): text = str(text)
    return text.replace('_x000d_', '').replace('_x000D_', '').strip()


def _str_to_bool(s: Any) -> bool:
    if isinstance(s, bool): return s
    s_str = str(s).lower().strip()
    return s_str in ['true', '1', 't', 'y', 'yes']


def _build_column_mapping(columns) -> Dict[str, str]:
    """Map canonical column names to the column names used in the table."""
    mapping = {}
    for col_name_obj in columns:
        col_name_str = str(col_name_obj)
        col_lower = col_name_str.lower().strip().replace(' ', '_')
        for canonical, aliases in COLUMN_ALIASES.items():
            if col_lower in aliases and canonical not in mapping:
                mapping[canonical] = col_name_str
    return mapping


def _split_issues(value: str) -> List[str]:
    return [issue.strip() for issue in value.split(';') if issue.strip()]


def _components_from_rows(rows: List[Dict[str, str]]) -> List[Component]:
    """
    Group table rows into components.

    Rows sharing a component and a license contribute to the same license
    finding. A license finding counts as excluded if any of its rows says so.
    """
    components: Dict[Identifier, Component] = {}
    findings: Dict[Identifier, Dict[str, LicenseFinding]] = {}
    for row in rows:
        if not row['component']:
            continue
        identifier = Identifier.from_string(row['component'])
        component = components.setdefault(identifier, Component(id=identifier))
        component.excluded = component.excluded or _str_to_bool(row.get('component_excluded', ''))

        license_id = row['license']
        if not license_id:
            continue
        by_license = findings.setdefault(identifier, {})
        finding = by_license.get(license_id)
        if finding is None:
            finding = by_license[license_id] = LicenseFinding(license=license_id)
            component.licenses.append(finding)
        finding.excluded = finding.excluded or _str_to_bool(row.get('excluded', ''))
        for issue in _split_issues(row.get('issues', '')):
            if issue not in finding.issues:
                finding.issues.append(issue)
        statement = row.get('copyright', '')
        if statement:
            finding.copyrights.append(
                CopyrightFinding(statement=statement, excluded=_str_to_bool(row.get('copyright_excluded', '')))
            )
    return list(components.values())


def _load_table(input_path: Path) -> AnalysisResult:
    if input_path.suffix.lower() == '.csv':
        df = pd.read_csv(input_path, dtype=str)
    else:
        df = pd.read_excel(input_path, dtype=str)
    df.fillna('', inplace=True)
    column_mapping = _build_column_mapping(df.columns)
    required_fields = ['component', 'license']
    missing_fields = [f for f in required_fields if f not in column_mapping]
    if missing_fields:
        raise ValueError(f"Missing required columns: {missing_fields}. Available: {list(df.columns)}")
    rows = []
    for _, row in df.iterrows():
        rows.append({
            canonical: _clean_excel_string(row.get(column, ''))
            for canonical, column in column_mapping.items()
        })
    # A table of findings is scanner output by construction.
    return AnalysisResult(scanner=ScannerRun(tool=input_path.name), components=_components_from_rows(rows))


def _parse_copyright(item: Any) -> CopyrightFinding:
    if isinstance(item, dict):
        return CopyrightFinding(
            statement=str(item.get('statement', '')).strip(),
            excluded=_str_to_bool(item.get('excluded', False)),
        )
    return CopyrightFinding(statement=str(item).strip())


def _parse_license_finding(item: Dict[str, Any]) -> LicenseFinding:
    if 'license' not in item:
        raise ValueError(f"License finding without 'license' key: {item}")
    issues = item.get('issues') or []
    if isinstance(issues, str):
        issues = _split_issues(issues)
    return LicenseFinding(
        license=str(item['license']).strip(),
        copyrights=[_parse_copyright(c) for c in item.get('copyrights') or []],
        issues=[str(issue) for issue in issues],
        excluded=_str_to_bool(item.get('excluded', False)),
    )


def _parse_document(data_source: Any, source_name: str) -> AnalysisResult:
    if not isinstance(data_source, dict):
        raise ValueError(f"Invalid format in {source_name}. Expected a mapping with 'components' key.")
    scanner = None
    scanner_data = data_source.get('scanner')
    if scanner_data is not None:
        if isinstance(scanner_data, dict):
            scanner = ScannerRun(tool=str(scanner_data.get('tool', '')), version=str(scanner_data.get('version', '')))
        else:
            scanner = ScannerRun(tool=str(scanner_data))
    components = []
    for item in data_source.get('components') or []:
        if not isinstance(item, dict):
            print(f"⚠️ Skipping non-dict component in {source_name}: {item}")
            continue
        if 'id' not in item:
            raise ValueError(f"Component without 'id' key in {source_name}: {item}")
        components.append(Component(
            id=Identifier.from_string(item['id']),
            licenses=[_parse_license_finding(f) for f in item.get('licenses') or []],
            excluded=_str_to_bool(item.get('excluded', False)),
        ))
    return AnalysisResult(scanner=scanner, components=components)


def load_analysis_result(input_file: str) -> AnalysisResult:
    """
    Load an analysis result from a file.

    Supports JSON, YAML, Excel (.xlsx, .xls) and CSV formats.

    Args:
        input_file: Path to input file

    Returns:
        The loaded AnalysisResult

    Raises:
        FileNotFoundError: If input file doesn't exist
        ValueError: If file format is invalid or required fields are missing
    """
    input_path = Path(input_file)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file {input_file} not found.")
    suffix = input_path.suffix.lower()

    if suffix in ['.xlsx', '.xls', '.csv']:
        try:
            return _load_table(input_path)
        except Exception as e:
            raise ValueError(f"Error reading table '{input_file}': {e}") from e

    if suffix in ['.json', '.yaml', '.yml']:
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                data_source = json.load(f) if suffix == '.json' else yaml.safe_load(f)
            return _parse_document(data_source, input_path.name)
        except Exception as e:
            raise ValueError(f"Error reading {input_path.name}: {e}") from e

    raise ValueError(f"Unsupported input file: {input_path.suffix}.")

"""
Merging of per-component license findings into one mapping for the notice.
"""

from typing import AbstractSet, Dict, FrozenSet, Mapping, Set

from notice_reporter.component import Identifier


def merge_findings(findings: Mapping[Identifier, Mapping[str, AbstractSet[str]]]) -> Dict[str, FrozenSet[str]]:
    """
    Merge the license findings of all components.

    The copyrights of a license are the union over all components, so the
    order in which components are visited does not change the result. The
    input mappings are left untouched.

    Args:
        findings: Dictionary mapping components to their license findings

    Returns:
        Dictionary mapping license ids to copyright statements, sorted by license id
    """
    merged: Dict[str, Set[str]] = {}
    for license_findings in findings.values():
        for license_id, copyrights in license_findings.items():
            merged.setdefault(license_id, set()).update(copyrights)
    return {license_id: frozenset(merged[license_id]) for license_id in sorted(merged)}

"""
Copyright statement handling.

This module provides:
1. CopyrightGarbage, the list of statements known to be noise
2. Removal of garbage statements from merged findings
3. Normalization of statements, merging the years of statements that only
   differ in them
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

import yaml


@dataclass(frozen=True)
class CopyrightGarbage:
    """
    Copyright statements to suppress.

    Attributes:
        items: Statements matched exactly
        patterns: Regular expressions a statement has to match completely
    """

    items: FrozenSet[str] = frozenset()
    patterns: Tuple[re.Pattern, ...] = field(default_factory=tuple)

    @classmethod
    def from_lists(cls, items: Iterable[str] = (), patterns: Iterable[str] = ()) -> "CopyrightGarbage":
        try:
            compiled = tuple(re.compile(p) for p in patterns)
        except re.error as e:
            raise ValueError(f"Invalid copyright garbage pattern: {e}") from e
        return cls(items=frozenset(str(i) for i in items), patterns=compiled)

    @classmethod
    def load(cls, garbage_path: Optional[str]) -> "CopyrightGarbage":
        """
        Load copyright garbage from a YAML file with "items" and "patterns" lists.

        Returns an empty garbage list if no path is given or the file does not
        exist.

        Raises:
            ValueError: If the file is not a valid mapping
        """
        if garbage_path is None:
            return cls()
        path = Path(garbage_path)
        if not path.exists():
            print(f"⚠️ Warning: Copyright garbage file '{path}' not found. No copyrights will be filtered.")
            return cls()
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error loading copyright garbage file '{path}': {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"Copyright garbage file '{path}' is not a valid dictionary.")
        return cls.from_lists(loaded.get('items') or [], loaded.get('patterns') or [])

    def __contains__(self, statement: str) -> bool:
        if statement in self.items:
            return True
        return any(p.fullmatch(statement) for p in self.patterns)


def remove_garbage(findings: Mapping[str, AbstractSet[str]],
                   garbage: CopyrightGarbage) -> Dict[str, FrozenSet[str]]:
    """
    Remove garbage statements from every license of the findings.

    Licenses are kept even if no statement is left for them.
    """
    return {
        license_id: frozenset(s for s in statements if s not in garbage)
        for license_id, statements in findings.items()
    }


_WHITESPACE = re.compile(r"\s+")
_COPYRIGHT_SIGN = re.compile(r"\(c\)|©", re.IGNORECASE)
_LEADING_COPYRIGHT = re.compile(r"^copyright\b", re.IGNORECASE)
_YEAR_LIST = r"\d{4}(?:(?:, ?| ?- ?)\d{4})*"
_STATEMENT = re.compile(
    r"^(?P<prefix>Copyright(?: \(c\))?|\(c\)) (?P<years>" + _YEAR_LIST + r"),? "
    # The owner is never just another year list.
    r"(?P<owner>(?!(?:" + _YEAR_LIST + r")$)\S.*)$"
)


def normalize_statement(statement: str) -> str:
    """Canonicalize whitespace, the copyright sign and trailing punctuation."""
    text = _WHITESPACE.sub(" ", statement).strip()
    text = _COPYRIGHT_SIGN.sub("(c)", text)
    text = _LEADING_COPYRIGHT.sub("Copyright", text)
    return text.rstrip(",;: ")


def _parse_years(years: str) -> Set[int]:
    parsed = set()
    for part in years.split(","):
        bounds = [int(b) for b in part.split("-")]
        if len(bounds) == 2 and bounds[0] <= bounds[1]:
            parsed.update(range(bounds[0], bounds[1] + 1))
        else:
            parsed.update(bounds)
    return parsed


def _format_years(years: Iterable[int]) -> str:
    ranges: List[List[int]] = []
    for year in sorted(years):
        if ranges and year == ranges[-1][1] + 1:
            ranges[-1][1] = year
        else:
            ranges.append([year, year])
    return ", ".join(f"{start:04d}" if start == end else f"{start:04d}-{end:04d}" for start, end in ranges)


def process_copyright_statements(statements: Iterable[str]) -> FrozenSet[str]:
    """
    Normalize statements and merge those that only differ in their years.

    "Copyright (C) 2009 Foo" and "Copyright (c) 2010, 2012 Foo" become
    "Copyright (c) 2009-2010, 2012 Foo". Statements without a recognizable
    year list are only normalized. Applying this twice gives the same result
    as applying it once.
    """
    processed: Set[str] = set()
    years_by_holder: Dict[Tuple[str, str], Set[int]] = {}
    for statement in statements:
        text = normalize_statement(statement)
        if not text:
            continue
        match = _STATEMENT.match(text)
        if match is None:
            processed.add(text)
            continue
        key = (match.group("prefix"), match.group("owner"))
        years_by_holder.setdefault(key, set()).update(_parse_years(match.group("years").replace(" ", "")))

    for (prefix, owner), years in years_by_holder.items():
        processed.add(f"{prefix} {_format_years(years)} {owner}")
    return frozenset(processed)


def process_statements(findings: Mapping[str, AbstractSet[str]]) -> Dict[str, FrozenSet[str]]:
    """Process the statements of every license, keeping the license order."""
    return {license_id: process_copyright_statements(statements) for license_id, statements in findings.items()}

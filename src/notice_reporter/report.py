"""
Notice report document and the pre-processing hook.

The NoticeReport holds the headers, the per-component findings and the
footers of a notice before it is rendered. A PreProcessor may rewrite it,
either in code or through a Python script supplied by the user.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from notice_reporter.component import Identifier
from notice_reporter.exceptions import PreprocessingFailed


@dataclass(frozen=True)
class NoticeReport:
    """
    The notice document threaded through report generation.

    Attributes:
        headers: Text blocks rendered before the license sections
        findings: License findings per component, merged only when rendering
        footers: Text blocks rendered after the license sections
    """

    headers: Tuple[str, ...] = ()
    findings: Mapping[Identifier, Mapping[str, FrozenSet[str]]] = field(default_factory=dict)
    footers: Tuple[str, ...] = ()

    @classmethod
    def create(cls, headers, findings, footers) -> "NoticeReport":
        """
        Build a report from arbitrary sequences and mappings.

        Raises:
            ValueError: If any part does not have the expected shape
        """
        if isinstance(headers, str) or isinstance(footers, str):
            raise ValueError("Headers and footers must be sequences of strings, not a single string.")
        headers = tuple(headers)
        footers = tuple(footers)
        for block in headers + footers:
            if not isinstance(block, str):
                raise ValueError(f"Header and footer blocks must be strings, got {type(block).__name__}.")
        if not isinstance(findings, Mapping):
            raise ValueError(f"Findings must be a mapping, got {type(findings).__name__}.")

        checked: Dict[Identifier, Dict[str, FrozenSet[str]]] = {}
        for identifier, license_findings in findings.items():
            if not isinstance(identifier, Identifier):
                raise ValueError(f"Findings must be keyed by Identifier, got {identifier!r}.")
            if not isinstance(license_findings, Mapping):
                raise ValueError(f"Findings of '{identifier}' must be a mapping of licenses to copyrights.")
            checked[identifier] = {}
            for license_id, copyrights in license_findings.items():
                if not isinstance(license_id, str) or isinstance(copyrights, str):
                    raise ValueError(f"Invalid findings for license {license_id!r} of '{identifier}'.")
                statements = frozenset(copyrights)
                if not all(isinstance(s, str) for s in statements):
                    raise ValueError(f"Copyrights of license '{license_id}' of '{identifier}' must be strings.")
                checked[identifier][license_id] = statements
        return cls(headers=headers, findings=checked, footers=footers)


@dataclass(frozen=True)
class PreProcessingContext:
    """Read-only inputs available to a pre-processor besides the report itself."""

    analysis_result: Any = None
    copyright_garbage: Any = None
    license_configuration: Any = None


class PreProcessor:
    """
    Rewrites a notice report before it is rendered.

    Subclasses implement transform() and return a new report; they must not
    modify the context or any global state.
    """

    def transform(self, report: NoticeReport, context: PreProcessingContext) -> NoticeReport:
        raise NotImplementedError

    def run(self, report: NoticeReport, context: PreProcessingContext) -> NoticeReport:
        return run_pre_processor(self, report, context)


def run_pre_processor(pre_processor, report: NoticeReport, context: PreProcessingContext) -> NoticeReport:
    """
    Apply a pre-processor's transform() to private copies of the report and context.

    Any object with a transform(report, context) method is accepted. The
    result is validated before it is handed on.

    Raises:
        PreprocessingFailed: If the transformation raises, exits or returns an invalid report
    """
    try:
        result = pre_processor.transform(copy.deepcopy(report), copy.deepcopy(context))
        if not isinstance(result, NoticeReport):
            raise ValueError(f"Pre-processor returned {type(result).__name__} instead of a NoticeReport.")
        return NoticeReport.create(result.headers, result.findings, result.footers)
    except (Exception, SystemExit) as e:
        raise PreprocessingFailed(f"Pre-processing of the notice report failed: {e!r}") from e


class ScriptPreProcessor(PreProcessor):
    """
    Pre-processor running a user-supplied Python script.

    The script runs in a fresh namespace with these names bound:
        headers, findings, footers: Editable copies of the report parts
        notice_report: The incoming report
        analysis_result, copyright_garbage, license_configuration: Read-only inputs
        NoticeReport, Identifier: Classes for building new values

    After the script has finished, the report is rebuilt from the headers,
    findings and footers names, so a script may either edit them in place or
    rebind them.

    Example script:
        headers.append("Built by ACME Corp.\\n")
        findings = {i: f for i, f in findings.items() if i.type != "Test"}
    """

    def __init__(self, script: str, filename: str = "<notice-pre-processor>"):
        self.script = script
        self.filename = filename

    def transform(self, report: NoticeReport, context: PreProcessingContext) -> NoticeReport:
        code = compile(self.script, self.filename, "exec")
        namespace: Dict[str, Any] = {
            "__name__": "__notice_pre_processor__",
            "headers": list(report.headers),
            "findings": {i: {lic: set(c) for lic, c in f.items()} for i, f in report.findings.items()},
            "footers": list(report.footers),
            "notice_report": report,
            "analysis_result": context.analysis_result,
            "copyright_garbage": context.copyright_garbage,
            "license_configuration": context.license_configuration,
            "NoticeReport": NoticeReport,
            "Identifier": Identifier,
        }
        exec(code, namespace)
        for name in ("headers", "findings", "footers"):
            if name not in namespace:
                raise ValueError(f"Pre-processing script removed the '{name}' variable.")
        return NoticeReport.create(namespace["headers"], namespace["findings"], namespace["footers"])


def load_pre_processor(script_path: Optional[str]) -> Optional[ScriptPreProcessor]:
    """
    Load a pre-processing script from a file.

    Raises:
        FileNotFoundError: If the script file does not exist
    """
    if script_path is None:
        return None
    with open(script_path, 'r', encoding='utf-8') as f:
        return ScriptPreProcessor(f.read(), filename=str(script_path))

"""
Core generator module for creating notice files.

This module provides the main NoticeReporter class that handles:
1. Collecting license findings from an analysis result
2. Building the notice report and running the pre-processing hook
3. Merging findings, removing garbage and processing copyright statements
4. Rendering the notice text and writing it out
"""

import io
from pathlib import Path
from typing import BinaryIO, Dict, FrozenSet, List, Optional, Tuple, Union

from notice_reporter.analysis import AnalysisResult, load_analysis_result
from notice_reporter.component import Identifier
from notice_reporter.config import ReporterConfig
from notice_reporter.copyrights import CopyrightGarbage, process_statements, remove_garbage
from notice_reporter.exceptions import LicenseTextMissing, MissingScanData
from notice_reporter.license_manager import LicenseConfiguration, LicenseManager, LicenseTextProvider
from notice_reporter.merger import merge_findings
from notice_reporter.report import (
    NoticeReport,
    PreProcessingContext,
    PreProcessor,
    ScriptPreProcessor,
    load_pre_processor,
    run_pre_processor,
)
from notice_reporter.template_manager import TemplateManager

NOTICE_SEPARATOR = "\n----\n\n"


def _normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


class NoticeReporter:
    """
    Notice file generator.

    A reporter holds no state that changes during generation, so the same
    instance may generate several reports at once as long as the inputs are
    not modified meanwhile.
    """

    reporter_name = "Notice"
    default_filename = "NOTICE"

    def __init__(self, template_manager: Optional[TemplateManager] = None, omit_excluded: bool = True,
                 license_text_provider: Optional[LicenseTextProvider] = None,
                 copyright_garbage: Optional[CopyrightGarbage] = None,
                 license_configuration: Optional[LicenseConfiguration] = None,
                 pre_processor: Optional[PreProcessor] = None, output_file: Optional[str] = None):
        """
        Initialize the notice reporter.

        Args:
            template_manager: Source of the default headers and footers
            omit_excluded: Whether excluded findings are left out of the notice
            license_text_provider: License text lookup used by generate_from_file
            copyright_garbage: Copyright garbage used by generate_from_file
            license_configuration: License configuration used by generate_from_file
            pre_processor: Pre-processing hook used by generate_from_file
            output_file: Notice file written by generate_from_file, defaults to "NOTICE"
        """
        self.template_manager = template_manager or TemplateManager()
        self.omit_excluded = omit_excluded
        self.license_text_provider = license_text_provider
        self.copyright_garbage = copyright_garbage or CopyrightGarbage()
        self.license_configuration = license_configuration or LicenseConfiguration()
        self.pre_processor = pre_processor
        self.output_file = output_file or self.default_filename

    @classmethod
    def from_config(cls, config: ReporterConfig) -> "NoticeReporter":
        """Create a reporter with all collaborators loaded from the configuration."""
        return cls(
            template_manager=TemplateManager(config.template_config),
            omit_excluded=config.omit_excluded,
            license_text_provider=LicenseManager(config.license_texts, config.license_texts_dir),
            copyright_garbage=CopyrightGarbage.load(config.copyright_garbage),
            license_configuration=LicenseConfiguration.load(config.license_config),
            pre_processor=load_pre_processor(config.preprocessing_script),
            output_file=config.output_file,
        )

    def get_license_findings(self, analysis_result: AnalysisResult) -> Dict[Identifier, Dict[str, FrozenSet[str]]]:
        """
        Collect the reportable license findings per component.

        Findings with unresolved issues are dropped, as are excluded ones if
        omit_excluded is set.

        Raises:
            MissingScanData: If the analysis result has no scanner output
        """
        if analysis_result.scanner is None:
            raise MissingScanData("The provided analysis result does not contain a scan result.")

        license_findings = {}
        for identifier, findings in analysis_result.collect_license_findings(self.omit_excluded).items():
            by_license: Dict[str, set] = {}
            for finding in findings:
                if finding.issues:
                    continue
                by_license.setdefault(finding.license, set()).update(c.statement for c in finding.copyrights)
            license_findings[identifier] = {lic: frozenset(by_license[lic]) for lic in sorted(by_license)}
        return license_findings

    def create_report(self, license_findings: Dict[Identifier, Dict[str, FrozenSet[str]]]) -> NoticeReport:
        header = self.template_manager.get_header(has_findings=bool(license_findings))
        return NoticeReport.create([header], license_findings, self.template_manager.get_footers())

    def generate_notices(self, notice_report: NoticeReport, license_text_provider: LicenseTextProvider,
                         copyright_garbage: CopyrightGarbage) -> Tuple[str, List[LicenseTextMissing]]:
        """
        Render the notice text of a report.

        Licenses without a license text are left out completely and reported
        as warnings.

        Args:
            notice_report: The final report
            license_text_provider: Object with a get_license_text(license_id) method
            copyright_garbage: Copyright statements to suppress

        Returns:
            Tuple of the notice text and the warnings for missing license texts
        """
        merged_findings = process_statements(remove_garbage(merge_findings(notice_report.findings), copyright_garbage))

        warnings = []
        output_parts = [NOTICE_SEPARATOR.join(notice_report.headers)]
        for license_id, copyrights in merged_findings.items():
            license_text = license_text_provider.get_license_text(license_id)
            if license_text is None:
                warning = LicenseTextMissing(license_id)
                print(f"⚠️ Warning: {warning}")
                warnings.append(warning)
                continue

            output_parts.append(NOTICE_SEPARATOR)
            for copyright in sorted(copyrights):
                output_parts.append(f"{copyright}\n")
            if copyrights:
                output_parts.append("\n")
            output_parts.append(license_text)

        for footer in notice_report.footers:
            output_parts.append(NOTICE_SEPARATOR)
            output_parts.append(footer)

        return _normalize_line_endings("".join(output_parts)), warnings

    def generate_report(self, output_stream: BinaryIO, analysis_result: AnalysisResult,
                        copyright_garbage: CopyrightGarbage, license_configuration: LicenseConfiguration,
                        license_text_provider: LicenseTextProvider,
                        pre_processing_script: Union[str, PreProcessor, None] = None) -> List[LicenseTextMissing]:
        """
        Generate the notice for an analysis result and write it to a stream.

        Nothing is written unless the whole notice was generated successfully.

        Args:
            output_stream: Binary stream receiving the UTF-8 encoded notice
            analysis_result: The analysis result to report on
            copyright_garbage: Copyright statements to suppress
            license_configuration: License sets, passed on to the pre-processor
            license_text_provider: Object with a get_license_text(license_id) method
            pre_processing_script: Script source or PreProcessor to rewrite the report with

        Returns:
            The warnings for licenses left out for lack of a license text

        Raises:
            MissingScanData: If the analysis result has no scanner output
            PreprocessingFailed: If the pre-processing hook fails
        """
        license_findings = self.get_license_findings(analysis_result)
        notice_report = self.create_report(license_findings)

        if pre_processing_script is not None:
            pre_processor = pre_processing_script
            if isinstance(pre_processor, str):
                pre_processor = ScriptPreProcessor(pre_processor)
            context = PreProcessingContext(analysis_result, copyright_garbage, license_configuration)
            notice_report = run_pre_processor(pre_processor, notice_report, context)

        notice_text, warnings = self.generate_notices(notice_report, license_text_provider, copyright_garbage)
        output_stream.write(notice_text.encode("utf-8"))
        return warnings

    def generate_from_file(self, input_file: str, output_file: Optional[str] = None) -> List[LicenseTextMissing]:
        """
        Generate a notice file from an analysis result file.

        The output file is only created once the notice has been generated.

        Args:
            input_file: Path to the analysis result
            output_file: Path to the notice file, defaults to the configured output file

        Raises:
            ValueError: If no license text provider is configured
            IOError: If output file cannot be written
        """
        if self.license_text_provider is None:
            raise ValueError("No license text provider configured.")
        analysis_result = load_analysis_result(input_file)

        buffer = io.BytesIO()
        warnings = self.generate_report(
            buffer, analysis_result, self.copyright_garbage, self.license_configuration,
            self.license_text_provider, self.pre_processor
        )
        output_path = Path(output_file or self.output_file)
        try:
            with open(output_path, 'wb') as f: f.write(buffer.getvalue())
        except IOError as e:
            print(f"❌ Error writing to output file '{output_path}': {e}")
            raise
        return warnings

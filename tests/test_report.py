# -*- coding: utf-8 -*-
"""Tests for the notice report and the pre-processing hook."""

# Third-Party
import pytest

# First-Party
from notice_reporter.component import Identifier
from notice_reporter.exceptions import PreprocessingFailed
from notice_reporter.license_manager import LicenseConfiguration, LicenseEntry
from notice_reporter.report import (
    NoticeReport,
    PreProcessingContext,
    PreProcessor,
    ScriptPreProcessor,
    load_pre_processor,
    run_pre_processor,
)

A = Identifier("Maven", "com.example", "a", "1.0")
B = Identifier("Maven", "com.example", "b", "2.0")


@pytest.fixture
def report():
    return NoticeReport.create(
        ["Header\n"],
        {A: {"Apache-2.0": {"Co X"}}, B: {"Apache-2.0": {"Co Y"}, "GPL-2.0-only": {"Co Z"}}},
        [],
    )


@pytest.fixture
def context():
    configuration = LicenseConfiguration(licenses=(
        LicenseEntry("Apache-2.0", ("permissive",)),
        LicenseEntry("GPL-2.0-only", ("copyleft",)),
    ))
    return PreProcessingContext(analysis_result=None, copyright_garbage=None, license_configuration=configuration)


class TestNoticeReport:
    """Test NoticeReport.create()."""

    def test_create_normalizes_types(self, report):
        """Test that sequences become tuples and copyrights frozensets."""
        assert report.headers == ("Header\n",)
        assert report.footers == ()
        assert report.findings[A] == {"Apache-2.0": frozenset({"Co X"})}

    @pytest.mark.parametrize(
        "headers, findings, footers",
        [
            ("Header", {}, []),
            ([1], {}, []),
            ([], [], []),
            ([], {"NPM::a:1": {}}, []),
            ([], {A: {"MIT": "Co X"}}, []),
            ([], {A: {"MIT": {1}}}, []),
            ([], {A: ["MIT"]}, []),
        ],
    )
    def test_create_rejects_invalid_parts(self, headers, findings, footers):
        """Test that malformed parts are rejected."""
        with pytest.raises(ValueError):
            NoticeReport.create(headers, findings, footers)


class TestScriptPreProcessor:
    """Test running pre-processing scripts."""

    def test_edit_in_place(self, report, context):
        """Test that a script can append headers and footers."""
        script = 'headers.append("Built by ACME\\n")\nfooters.append("The end\\n")\n'
        result = ScriptPreProcessor(script).run(report, context)
        assert result.headers == ("Header\n", "Built by ACME\n")
        assert result.footers == ("The end\n",)
        assert result.findings == report.findings

    def test_rebind_findings_with_license_sets(self, report, context):
        """Test that a script can drop licenses of a license set."""
        script = (
            'copyleft = set(license_configuration.get_ids_for_set("copyleft"))\n'
            'findings = {i: {lic: c for lic, c in f.items() if lic not in copyleft} for i, f in findings.items()}\n'
        )
        result = ScriptPreProcessor(script).run(report, context)
        assert result.findings[B] == {"Apache-2.0": frozenset({"Co Y"})}

    def test_add_component(self, report, context):
        """Test that a script can add findings for new components."""
        script = 'findings[Identifier.from_string("NPM::extra:1")] = {"MIT": {"Co W"}}\n'
        result = ScriptPreProcessor(script).run(report, context)
        assert result.findings[Identifier("NPM", "", "extra", "1")] == {"MIT": frozenset({"Co W"})}

    def test_input_report_unchanged(self, report, context):
        """Test that the incoming report is never modified."""
        script = 'findings[list(findings)[0]]["Apache-2.0"].add("Co Q")\nheaders.clear()\n'
        result = ScriptPreProcessor(script).run(report, context)
        assert report.headers == ("Header\n",)
        assert report.findings[A] == {"Apache-2.0": frozenset({"Co X"})}
        assert result.findings[A] == {"Apache-2.0": frozenset({"Co X", "Co Q"})}
        assert result.headers == ()

    def test_script_error(self, report, context):
        """Test that errors raised by a script are wrapped."""
        with pytest.raises(PreprocessingFailed) as excinfo:
            ScriptPreProcessor('raise RuntimeError("boom")').run(report, context)
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_system_exit(self, report, context):
        """Test that a script raising SystemExit fails pre-processing instead of exiting."""
        with pytest.raises(PreprocessingFailed) as excinfo:
            ScriptPreProcessor("raise SystemExit(1)").run(report, context)
        assert isinstance(excinfo.value.__cause__, SystemExit)

    def test_syntax_error(self, report, context):
        """Test that scripts that do not compile are reported."""
        with pytest.raises(PreprocessingFailed):
            ScriptPreProcessor("headers = [").run(report, context)

    def test_invalid_result(self, report, context):
        """Test that an invalid document is reported."""
        with pytest.raises(PreprocessingFailed):
            ScriptPreProcessor('footers = "not a list"').run(report, context)

    def test_deleted_variable(self, report, context):
        """Test that the report variables must survive the script."""
        with pytest.raises(PreprocessingFailed):
            ScriptPreProcessor("del headers").run(report, context)

    def test_load_pre_processor(self, tmp_path):
        """Test loading a script from a file."""
        path = tmp_path / "notice-pre-processor.py"
        path.write_text("footers.append('x')\n", encoding="utf-8")
        pre_processor = load_pre_processor(str(path))
        assert pre_processor.script == "footers.append('x')\n"
        assert pre_processor.filename == str(path)
        assert load_pre_processor(None) is None


class TestPreProcessor:
    """Test custom PreProcessor subclasses."""

    def test_subclass(self, report, context):
        """Test a pre-processor implemented in code."""

        class DropComponent(PreProcessor):
            def transform(self, report, context):
                findings = {i: f for i, f in report.findings.items() if i != A}
                return NoticeReport.create(report.headers, findings, ["Footer"])

        result = DropComponent().run(report, context)
        assert list(result.findings) == [B]
        assert result.footers == ("Footer",)

    def test_wrong_return_type(self, report, context):
        """Test that returning something other than a report fails."""

        class ReturnsNone(PreProcessor):
            def transform(self, report, context):
                return None

        with pytest.raises(PreprocessingFailed):
            ReturnsNone().run(report, context)

    def test_not_implemented(self, report, context):
        """Test that the base class has no transformation."""
        with pytest.raises(PreprocessingFailed):
            PreProcessor().run(report, context)


class TestRunPreProcessor:
    """Test run_pre_processor() with objects that only implement transform()."""

    def test_duck_typed_transform(self, report, context):
        """Test that any object with a transform method is run on a copy."""

        class AddFooter:
            def transform(self, report, context):
                return NoticeReport.create(report.headers, report.findings, ["Footer"])

        result = run_pre_processor(AddFooter(), report, context)
        assert result.footers == ("Footer",)
        assert report.footers == ()

    def test_invalid_result(self, report, context):
        """Test that a transform returning None fails."""

        class ReturnsNone:
            def transform(self, report, context):
                return None

        with pytest.raises(PreprocessingFailed):
            run_pre_processor(ReturnsNone(), report, context)

    def test_missing_transform(self, report, context):
        """Test that objects without transform method fail."""
        with pytest.raises(PreprocessingFailed) as excinfo:
            run_pre_processor(object(), report, context)
        assert isinstance(excinfo.value.__cause__, AttributeError)

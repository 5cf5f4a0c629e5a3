"""
Notice reporter package.

Turns the per-component license and copyright findings of an analysis
result into a single attribution (NOTICE) document.
"""

from notice_reporter.exceptions import LicenseTextMissing, MissingScanData, PreprocessingFailed
from notice_reporter.generator import NOTICE_SEPARATOR, NoticeReporter
from notice_reporter.report import NoticeReport, PreProcessingContext, PreProcessor, ScriptPreProcessor, run_pre_processor

__all__ = [
    "LicenseTextMissing",
    "MissingScanData",
    "NOTICE_SEPARATOR",
    "NoticeReport",
    "NoticeReporter",
    "PreProcessingContext",
    "PreProcessor",
    "PreprocessingFailed",
    "ScriptPreProcessor",
    "run_pre_processor",
]

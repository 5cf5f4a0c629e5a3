# -*- coding: utf-8 -*-
"""Shared fixtures for the notice reporter tests."""

# Third-Party
import pytest

# First-Party
from notice_reporter.analysis import AnalysisResult, ScannerRun
from notice_reporter.component import Component, CopyrightFinding, Identifier, LicenseFinding


class StaticLicenseTexts:
    """License text lookup backed by a dictionary."""

    def __init__(self, texts):
        self.texts = dict(texts)
        self.requested = []

    def get_license_text(self, license_id):
        self.requested.append(license_id)
        return self.texts.get(license_id)


def make_component(identifier, licenses, excluded=False):
    """Build a component from a mapping of license ids to copyright statements."""
    return Component(
        id=Identifier.from_string(identifier),
        licenses=[
            LicenseFinding(license=lic, copyrights=[CopyrightFinding(s) for s in statements])
            for lic, statements in licenses.items()
        ],
        excluded=excluded,
    )


@pytest.fixture
def license_texts():
    return StaticLicenseTexts({
        "Apache-2.0": "Apache License\nVersion 2.0, January 2004\n",
        "MIT": "MIT License\n\nPermission is hereby granted, free of charge.\n",
    })


@pytest.fixture
def analysis_result():
    """Two components sharing Apache-2.0, one of them also under MIT."""
    return AnalysisResult(
        scanner=ScannerRun(tool="ScanCode", version="3.2.0"),
        components=[
            make_component("Maven:com.example:a:1.0", {"Apache-2.0": ["Co X"]}),
            make_component("Maven:com.example:b:2.0", {"Apache-2.0": ["Co Y"], "MIT": ["Co X"]}),
        ],
    )

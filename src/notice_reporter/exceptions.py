"""
Error conditions raised or recorded while generating a notice report.
"""


class MissingScanData(ValueError):
    """The analysis result does not contain any scanner output."""


class PreprocessingFailed(RuntimeError):
    """The pre-processing hook raised an error or returned an invalid report."""


class LicenseTextMissing(UserWarning):
    """
    No license text is available for a license found in the report.

    This is not fatal: the license section is left out of the notice and
    the warning is handed back to the caller.
    """

    def __init__(self, license_id: str):
        super().__init__(f"No license text found for license '{license_id}', it will be omitted from the report.")
        self.license_id = license_id

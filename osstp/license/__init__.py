"""License detection — identify vendored licenses, with a manual override table."""

from osstp.license.detector import DetectionOutcome, LicenseDetector
from osstp.license.identify import License, identify_license
from osstp.license.overrides import OVERRIDES

__all__ = ["DetectionOutcome", "License", "LicenseDetector", "OVERRIDES", "identify_license"]

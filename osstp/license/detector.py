"""LicenseDetector — resolve each dependency's license from its vendor directory."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from pathlib import Path

import structlog

from osstp.exceptions import LicenseDetectionError
from osstp.license.identify import License, identify_license
from osstp.license.overrides import OVERRIDES
from osstp.lockfile.models import DependencyRecord

log = structlog.get_logger("osstp.license")


class DetectionOutcome(str, enum.Enum):
    DETECTED = "detected"
    OVERRIDDEN = "overridden"
    MISSING = "missing"
    SKIPPED = "skipped"


class LicenseDetector:
    """Assign ``resolved_license`` on dependency records.

    A dependency without a vendor directory is skipped and never reported:
    "not vendored" is a different situation from "vendored, license unknown".
    """

    def __init__(
        self,
        overrides: Mapping[str, str] = OVERRIDES,
        identify: Callable[[Path], License] = identify_license,
    ) -> None:
        self._overrides = overrides
        self._identify = identify

    def detect(self, root: Path, dep: DependencyRecord) -> DetectionOutcome:
        """Resolve the license of one dependency, mutating *dep* in place."""
        vendor_dir = root / "vendor" / dep.import_path
        if not vendor_dir.is_dir():
            log.debug("license.skipped", name=dep.import_path, path=str(vendor_dir))
            return DetectionOutcome.SKIPPED

        try:
            found = self._identify(vendor_dir)
        except LicenseDetectionError as exc:
            override = self._overrides.get(dep.import_path)
            if override is not None:
                dep.resolved_license = override
                log.debug("license.overridden", name=dep.import_path, license=override)
                return DetectionOutcome.OVERRIDDEN
            log.warning("license.missing", name=dep.import_path, reason=str(exc))
            return DetectionOutcome.MISSING

        dep.resolved_license = found.type
        log.debug("license.detected", name=dep.import_path, license=found.type, file=found.file.name)
        return DetectionOutcome.DETECTED

    def detect_all(self, root: Path, deps: list[DependencyRecord]) -> list[str]:
        """Run :meth:`detect` over *deps* in order; return import paths missing a license."""
        missing: list[str] = []
        for dep in deps:
            if self.detect(root, dep) is DetectionOutcome.MISSING:
                missing.append(dep.import_path)
        return missing

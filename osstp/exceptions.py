"""Custom exceptions for osstp-manifest."""


class OsstpError(Exception):
    """Base exception for all osstp errors."""


class LockfileError(OsstpError):
    """Raised when the lock file cannot be located or read. Always fatal."""


class LockfileNotFoundError(LockfileError):
    """Raised when no supported lock file exists in the project root."""


class LockfileParseError(LockfileError):
    """Raised when a lock file is malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot parse {path}: {reason}")


class LicenseDetectionError(OsstpError):
    """Base exception for license identification failures."""


class LicenseFileNotFoundError(LicenseDetectionError):
    """Raised when a directory holds no recognizable license file."""


class MultipleLicenseFilesError(LicenseDetectionError):
    """Raised when a directory holds more than one candidate license file."""

    def __init__(self, directory: str, files: list[str]):
        self.directory = directory
        self.files = files
        super().__init__(f"multiple license files found in {directory}: {files}")


class UnrecognizedLicenseError(LicenseDetectionError):
    """Raised when a license file's text matches no known license."""


class DownloadError(OsstpError):
    """Raised when a source archive cannot be fetched or written."""

"""osstp-manifest: license audit and OSSTP manifest generation for vendored Go dependencies."""

__version__ = "0.1.0"

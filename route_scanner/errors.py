"""
Error taxonomy for the route scanner.

Everything raised while reading project content is recoverable: the scanner
catches these at the manifest or file boundary and degrades to defaults.
Only ConfigError escapes, since it reports a bad caller-supplied config.
"""

from typing import Optional


class ScanError(Exception):
    """Base class for scanner errors."""


class ManifestMissing(ScanError):
    """package.json is absent or could not be parsed."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"No usable manifest at {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class FileReadError(ScanError):
    """A single source file could not be read as text."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class ConfigError(ScanError):
    """Scanner configuration file is invalid."""

"""Exception hierarchy for the scanner."""

from __future__ import annotations


class ConfluenceScannerError(Exception):
    """Base class for all scanner errors."""


class ConfigError(ConfluenceScannerError):
    pass


class AnalysisError(ConfluenceScannerError):
    """A single pair could not be analysed by the provider."""

    def __init__(self, pair: str, message: str) -> None:
        super().__init__(f"{pair}: {message}")
        self.pair = pair


class ScanError(ConfluenceScannerError):
    """A whole scan failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

"""Exception hierarchy for yt-pulse.

Every user-visible failure maps to a subclass of :class:`YtPulseError` so the
CLI can print a clean message. Missing or malformed counters and missing
channel audiences are *not* errors; they are coerced to 0.

YtPulseError
├── ConfigError
├── FetchError
└── AnalysisError
    ├── AnalysisGenerationError
    └── AnalysisParseError
"""

from __future__ import annotations


class YtPulseError(Exception):
    """Base exception for all yt-pulse errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint


class ConfigError(YtPulseError):
    """Raised when a required credential or setting is missing."""


class FetchError(YtPulseError):
    """Raised when a YouTube Data API call fails (network, auth, quota)."""


class AnalysisError(YtPulseError):
    """Base class for AI trend-summary failures."""


class AnalysisGenerationError(AnalysisError):
    """Raised when the model call fails or returns no text."""


class AnalysisParseError(AnalysisError):
    """Raised when the model returns text that is not the expected JSON object."""

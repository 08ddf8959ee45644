"""Relay exception hierarchy.

Every failure is terminal for a run. Callers can catch ``RelayError`` for
any relay failure or a specific subclass for targeted diagnostics.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base exception for all relay errors."""


class InvalidInput(RelayError):
    """The page URL argument is missing or not an absolute URL."""


class FetchFailure(RelayError):
    """The source page could not be retrieved."""


class ExtractionFailure(RelayError):
    """The embedded page data could not be located or parsed."""


class NoScriptBlockFound(ExtractionFailure):
    """The HTML contains no script block at all."""


class MalformedPayload(ExtractionFailure):
    """The last script block is not usable page data."""


class NormalizationFailure(RelayError):
    """The converted Markdown cannot be anchored for segmentation."""


class NoHeadingFound(NormalizationFailure):
    """The converted Markdown contains no heading marker."""


class ConfigurationFailure(RelayError):
    """Required runtime configuration is missing."""


class PublishFailure(RelayError):
    """A webhook delivery was rejected or could not be sent."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 0,
        response_text: str = "",
        encoded_payload: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
        self.encoded_payload = encoded_payload

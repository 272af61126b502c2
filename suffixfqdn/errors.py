"""Exception hierarchy for domain and public suffix list handling."""

from __future__ import annotations


class TLDError(Exception):
    """Base class for every error raised by this package.

    An optional context string is placed in front of the class message,
    separated by a colon, so callers can add detail while still matching
    on the exception type.
    """

    message = "domain error"

    def __init__(self, context: str | None = None) -> None:
        self.context = context
        text = self.message if not context else f"{context}: {self.message}"
        super().__init__(text)


class InvalidURLError(TLDError, ValueError):
    """The URL or domain cannot be split into a registrable name."""

    message = "invalid URL"


class InvalidTLDError(TLDError, ValueError):
    """No known public suffix matches the domain."""

    message = "invalid TLD"


class PublicSuffixDownloadError(TLDError):
    """The public suffix list could not be fetched."""

    message = "failed to download public suffix file"


class PublicSuffixParseError(TLDError, ValueError):
    """The public suffix list could not be read or parsed."""

    message = "failed to parse public suffix file"


class PublicSuffixFormatError(TLDError, ValueError):
    """The fetched data is not the public suffix list."""

    message = "file is not the public suffix file"
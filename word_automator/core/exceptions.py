"""
Exceptions raised by the Word automator.
"""

from typing import Optional


class WordAutomatorError(Exception):
    """Base class for all Word automator errors."""


class InactiveSessionError(WordAutomatorError):
    """Raised when Word is used before activation or after shutdown."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "The Word application is no longer active! Hint: have you called close_and_quit before?"
        )


class NoDocumentError(WordAutomatorError):
    """Raised when a document operation runs before a document was attached."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "There is no known active document! Hint: have you called create_document first?"
        )


class UnsupportedExportError(WordAutomatorError):
    """Raised when PDF export is requested from a Word version that cannot do it."""

    def __init__(self, version: str, required_version: int):
        self.version = version
        self.required_version = required_version
        super().__init__(
            f"Saving as PDF requires Word version {required_version} or later "
            f"(running version {version})"
        )


class SaveFailure(WordAutomatorError):
    """Raised when Word fails to save the document.

    The error reported by Word is chained as ``__cause__``.
    """

    def __init__(self, filename: str, reason: str = ""):
        self.filename = filename
        self.reason = reason
        message = f"Saving document in <{filename}> failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

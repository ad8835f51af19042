"""
Configuration constants for Word automation.
"""

import os
import tempfile


class Config:
    """Central configuration for the Word automator."""

    __version__ = "1.0.0"

    # Word application
    WORD_PROG_ID = "Word.Application"
    WORD_VISIBLE = False
    WORD_DISPLAY_ALERTS = 0  # wdAlertsNone
    WORD_REUSE_INSTANCE = False  # attach to a running Word instead of launching one

    # WdSaveFormat codes, see http://msdn.microsoft.com/en-us/library/bb238158.aspx
    WD_FORMAT_DEFAULT = 0  # format chosen from within Word
    WD_FORMAT_DOCUMENT = 16  # wdFormatDocumentDefault (doc/Word 2003)
    WD_FORMAT_PDF = 17  # wdFormatPDF

    # WdSaveOptions
    WD_DO_NOT_SAVE_CHANGES = 0

    # Version floors (major version, 9 = Word 2000, 10 = Word XP/2003, 12 = Word 2007)
    FORMAT_CODE_MIN_VERSION = 10
    PDF_EXPORT_MIN_VERSION = 12

    # Save retry policy
    SAVE_RETRY_ATTEMPTS = 3
    SAVE_RETRY_DELAY = 0.0  # seconds before the second attempt
    SAVE_RETRY_BACKOFF = 1.0  # delay multiplier per further attempt
    DISCARD_FAILED_SAVES = False

    # Temporary output files
    TEMP_ROOT = os.environ.get(
        'WORD_AUTOMATOR_TEMP_DIR',
        os.path.join(tempfile.gettempdir(), 'word_automator')
    )
    TEMP_LABEL = "letter"
    NATIVE_EXTENSION = "doc"
    PDF_EXTENSION = "pdf"

    # File extensions
    SUPPORTED_TEMPLATE_EXTENSIONS = ['.dot', '.dotx', '.dotm', '.doc', '.docx', '.docm']
    SUPPORTED_PDF_EXTENSIONS = ['.pdf']

    @classmethod
    def extension_for(cls, as_pdf: bool) -> str:
        """Return the temp file extension for the requested output format."""
        return cls.PDF_EXTENSION if as_pdf else cls.NATIVE_EXTENSION

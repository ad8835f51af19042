"""
Word Automator - fill bookmarks in Microsoft Word documents and save them.

This package drives Microsoft Word through COM automation to generate one
document per session: create it from a template, replace bookmark texts,
update fields and save it as a Word document or PDF.
"""

__version__ = "1.0.0"
__author__ = "Word Automator Team"

from .core.config import Config
from .core.exceptions import (
    InactiveSessionError,
    NoDocumentError,
    SaveFailure,
    UnsupportedExportError,
    WordAutomatorError,
)
from .core.models import ArtifactFormat, PersistedArtifact
from .document.automator import WordAutomator
from .document.session import WordSession

__all__ = [
    'Config',
    'WordAutomator',
    'WordSession',
    'ArtifactFormat',
    'PersistedArtifact',
    'WordAutomatorError',
    'InactiveSessionError',
    'NoDocumentError',
    'UnsupportedExportError',
    'SaveFailure',
]

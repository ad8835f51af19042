"""
Data records produced by the Word automator.
"""

from dataclasses import dataclass
from enum import Enum


class ArtifactFormat(Enum):
    """Output format of a saved document."""

    NATIVE = "native"
    PDF = "pdf"


@dataclass(frozen=True)
class PersistedArtifact:
    """A document file that Word saved successfully."""

    path: str
    format: ArtifactFormat
    version_constraint: int  # minimum Word major version needed for this format

    @property
    def is_pdf(self) -> bool:
        return self.format is ArtifactFormat.PDF

"""
Version-gated save behaviour.

Word changed its ``SaveAs`` signature and gained PDF export across releases.
Rather than comparing version numbers all over the controller, the allowed
behaviour is looked up once in a small table keyed by the major version.
"""

import re
from dataclasses import dataclass
from typing import Tuple

from .config import Config

_MAJOR_RE = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class SaveProfile:
    """What a given Word release can do when saving."""

    min_major: int
    legacy_save: bool
    pdf_export: bool


def build_save_profiles() -> Tuple[SaveProfile, ...]:
    """Build the decision table from the current Config floors, highest first."""
    return (
        SaveProfile(min_major=Config.PDF_EXPORT_MIN_VERSION, legacy_save=False, pdf_export=True),
        SaveProfile(min_major=Config.FORMAT_CODE_MIN_VERSION, legacy_save=False, pdf_export=False),
        SaveProfile(min_major=0, legacy_save=True, pdf_export=False),
    )


def parse_major_version(version) -> int:
    """
    Return the integer major version of a Word version string.

    ``"12.0"`` gives 12. Anything without leading digits gives 0.
    """
    if version is None:
        return 0
    match = _MAJOR_RE.match(str(version))
    return int(match.group(1)) if match else 0


def save_profile_for(version) -> SaveProfile:
    """Look up the save profile that applies to ``version``."""
    major = parse_major_version(version)
    profiles = build_save_profiles()
    for profile in profiles[:-1]:
        if major >= profile.min_major:
            return profile
    return profiles[-1]

"""
Unique output filenames and temporary file bookkeeping.
"""

import os
import re
import time
import uuid
from typing import List, Optional

from ..core.config import Config
from .logging_config import get_module_logger

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def derive_pdf_path(filename: str) -> str:
    """
    Return ``filename`` with its extension replaced by ``.pdf``.

    The directory and base name are kept: ``out/letter.doc`` gives
    ``out/letter.pdf``. A name already ending in ``.pdf`` is returned as is.
    """
    root, ext = os.path.splitext(filename)
    if ext == ".pdf":
        return filename
    return os.path.join(os.path.dirname(filename), os.path.basename(root) + ".pdf")


class UniqueTempFile:
    """Hands out unique, writable paths below a temp root."""

    def __init__(self, root: Optional[str] = None):
        self.root = root or Config.TEMP_ROOT
        self.logger = get_module_logger(__name__)

    @staticmethod
    def _safe_name(value: str, fallback: str) -> str:
        cleaned = _UNSAFE_CHARS.sub("_", str(value or "")).strip("._")
        return cleaned or fallback

    def get_filename(self, extension: str, label: str, namespace_hint: str) -> str:
        """
        Generate a new unique path.

        Args:
            extension: File extension without the dot (``"pdf"``, ``"doc"``)
            label: Prefix of the file name
            namespace_hint: Name of the sub folder, e.g. the model the document is for

        Returns:
            str: Absolute path of a file that does not exist yet
        """
        directory = os.path.join(self.root, self._safe_name(namespace_hint, "default"))
        os.makedirs(directory, exist_ok=True)

        timestamp = int(time.time() * 1000)
        name = f"{self._safe_name(label, 'file')}_{timestamp}_{uuid.uuid4().hex[:8]}"
        extension = extension.lstrip(".")
        if extension:
            name = f"{name}.{extension}"

        path = os.path.abspath(os.path.join(directory, name))
        self.logger.debug("Generated unique filename <%s>", path)
        return path


class FileManager:
    """Keeps track of temporary files and removes them on cleanup."""

    def __init__(self, keep_temp: bool = False):
        self.keep_temp = keep_temp
        self.temp_files: List[str] = []
        self.logger = get_module_logger(__name__)

    def register_temp_file(self, path: str) -> None:
        """Register a file for removal on cleanup."""
        if path not in self.temp_files:
            self.temp_files.append(path)

    def cleanup(self) -> None:
        """Remove the registered files unless ``keep_temp`` is set."""
        if self.keep_temp:
            if self.temp_files:
                self.logger.info("Keeping %d temporary file(s)", len(self.temp_files))
        else:
            for path in self.temp_files:
                try:
                    if os.path.exists(path):
                        os.remove(path)
                        self.logger.debug("Removed temporary file <%s>", path)
                except OSError as e:
                    self.logger.warning("⚠️ Could not remove temporary file <%s>: %s", path, e)
        self.temp_files = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()

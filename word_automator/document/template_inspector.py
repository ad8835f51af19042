"""
Bookmark discovery in DOCX templates without launching Word.
"""

from typing import Iterable, List

from docx import Document
from docx.oxml.ns import qn

from ..utils.logging_config import get_module_logger


class TemplateInspector:
    """Reads bookmark names from a DOCX file with python-docx."""

    INSPECTABLE_EXTENSIONS = ('.docx',)

    def __init__(self):
        self.logger = get_module_logger(__name__)

        # Cache for document parsing
        self._doc = None
        self._doc_path = None

    @classmethod
    def can_inspect(cls, path: str) -> bool:
        """python-docx only reads plain documents, not .dot/.dotx/.docm or binary .doc."""
        return path.lower().endswith(cls.INSPECTABLE_EXTENSIONS)

    def _load_document(self, docx_path: str) -> None:
        """Load document if not already loaded or path changed."""
        if self._doc is None or self._doc_path != docx_path:
            self._doc = Document(docx_path)
            self._doc_path = docx_path

    def list_bookmarks(self, docx_path: str, include_hidden: bool = False) -> List[str]:
        """
        List the bookmark names in the document body, in document order.

        Args:
            docx_path: Path to the DOCX file
            include_hidden: Also list Word's hidden bookmarks (``_GoBack``, ``_Toc...``)

        Returns:
            List of bookmark names
        """
        self._load_document(docx_path)

        names = []
        for element in self._doc.element.body.iter(qn('w:bookmarkStart')):
            name = element.get(qn('w:name'))
            if not name or name in names:
                continue
            if name.startswith('_') and not include_hidden:
                continue
            names.append(name)

        self.logger.debug("Found %d bookmark(s) in <%s>", len(names), docx_path)
        return names

    def missing_bookmarks(self, docx_path: str, bm_names: Iterable[str]) -> List[str]:
        """Return the names from ``bm_names`` that the document does not define."""
        present = set(self.list_bookmarks(docx_path, include_hidden=True))
        return [name for name in bm_names if name not in present]

"""
Unit tests for the TemplateInspector class.
"""

import os
import shutil
import tempfile
import unittest

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from word_automator.document.template_inspector import TemplateInspector


def create_docx_with_bookmarks(path, names):
    """Create a DOCX with one paragraph per bookmark, the bookmark spanning ``[name]``."""
    doc = Document()
    for index, name in enumerate(names):
        paragraph = doc.add_paragraph()
        start = OxmlElement('w:bookmarkStart')
        start.set(qn('w:id'), str(index))
        start.set(qn('w:name'), name)
        paragraph._p.append(start)
        paragraph.add_run(f"[{name}]")
        end = OxmlElement('w:bookmarkEnd')
        end.set(qn('w:id'), str(index))
        paragraph._p.append(end)
    doc.save(path)
    return path


class TestTemplateInspector(unittest.TestCase):
    """Test cases for TemplateInspector class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.docx_path = create_docx_with_bookmarks(
            os.path.join(self.temp_dir, "letter.docx"),
            ["Name", "_GoBack", "Street", "City"],
        )
        self.inspector = TemplateInspector()

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_list_bookmarks(self):
        """Test that visible bookmarks are listed in document order."""
        self.assertEqual(self.inspector.list_bookmarks(self.docx_path), ["Name", "Street", "City"])

    def test_list_hidden_bookmarks(self):
        """Test listing Word's hidden bookmarks too."""
        names = self.inspector.list_bookmarks(self.docx_path, include_hidden=True)
        self.assertIn("_GoBack", names)
        self.assertEqual(len(names), 4)

    def test_missing_bookmarks(self):
        """Test finding names the template does not define."""
        missing = self.inspector.missing_bookmarks(self.docx_path, ["Name", "Country", "City", "Zip"])
        self.assertEqual(missing, ["Country", "Zip"])

    def test_document_without_bookmarks(self):
        """Test a document with no bookmarks."""
        path = create_docx_with_bookmarks(os.path.join(self.temp_dir, "empty.docx"), [])
        self.assertEqual(self.inspector.list_bookmarks(path), [])

    def test_can_inspect(self):
        """Test which files python-docx can read."""
        self.assertTrue(TemplateInspector.can_inspect("letter.docx"))
        self.assertTrue(TemplateInspector.can_inspect("LETTER.DOCX"))
        self.assertFalse(TemplateInspector.can_inspect("letter.dotx"))
        self.assertFalse(TemplateInspector.can_inspect("letter.doc"))


if __name__ == '__main__':
    unittest.main()

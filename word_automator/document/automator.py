"""
Word document automation: fill bookmarks, update fields and save.

A ``WordAutomator`` handles one document in one Word session. To produce
another document at the same time, create another ``WordAutomator`` with its
own session (and therefore its own Word application).
"""

import logging
import os
from typing import Any, Optional

from ..core.config import Config
from ..core.exceptions import (
    InactiveSessionError,
    NoDocumentError,
    SaveFailure,
    UnsupportedExportError,
)
from ..core.models import ArtifactFormat, PersistedArtifact
from ..core.retry import RetryPolicy
from ..core.versions import SaveProfile, save_profile_for
from ..utils.events import EventSink, emit_safely
from ..utils.file_manager import FileManager, UniqueTempFile, derive_pdf_path
from .session import WordSession


class WordAutomator:
    """Controls the single document attached to a Word session."""

    def __init__(self, session: Optional[WordSession] = None, filename_generator: Any = None,
                 retry_policy: Optional[RetryPolicy] = None, events: Optional[EventSink] = None,
                 discard_failed_saves: Optional[bool] = None):
        """
        Initialize the automator.

        Args:
            session: Word session to use; a new one (launching Word) when omitted
            filename_generator: Object with ``get_filename(extension, label, namespace_hint)``
            retry_policy: Retry policy for :meth:`save_temp`
            events: Event sink; defaults to the session's sink
            discard_failed_saves: Remove files left behind by failed save attempts
        """
        self.session = session if session is not None else WordSession(events=events)
        self.events = events or self.session.events
        self.filename_generator = filename_generator or UniqueTempFile()
        self.retry_policy = retry_policy or RetryPolicy(retry_on=(SaveFailure,))
        self.discard_failed_saves = (
            Config.DISCARD_FAILED_SAVES if discard_failed_saves is None else discard_failed_saves
        )
        self.last_artifact: Optional[PersistedArtifact] = None
        self._document = None

    @property
    def version(self) -> Optional[str]:
        return self.session.version

    @property
    def document(self) -> Any:
        """The attached Word document, or None."""
        return self._document

    def has_document(self) -> bool:
        return self._document is not None

    # -- documents -------------------------------------------------------

    def create_document(self, template_filename: Optional[str] = None) -> Any:
        """
        Create a new document, based on the template at the given path if given.

        A document attached earlier is no longer tracked afterwards; it is not
        closed here, Word keeps it open until :meth:`close_and_quit`.
        """
        self._require_active()
        documents = self.session.application.Documents
        if self._document is not None:
            emit_safely(self.events, "word.document.superseded", level=logging.WARNING)

        if template_filename is None:
            document = documents.Add()
        else:
            document = documents.Add(template_filename)

        self._document = document
        emit_safely(self.events, "word.document.created", template=template_filename)
        return document

    attach = create_document

    def open_document(self, path: str) -> Any:
        """Open an existing document and attach it."""
        self._require_active()
        resolved_path = os.path.abspath(path)
        if self._document is not None:
            emit_safely(self.events, "word.document.superseded", level=logging.WARNING)

        document = self.session.application.Documents.Open(resolved_path)
        self._document = document
        emit_safely(self.events, "word.document.opened", path=resolved_path)
        return document

    # -- bookmarks and fields --------------------------------------------

    def bookmark_exists(self, bm_name: str) -> bool:
        self._require_document()
        return bool(self._document.Bookmarks.Exists(bm_name))

    def get_bookmark(self, bm_name: str) -> str:
        """Return the text currently inside the bookmark."""
        self._require_document()
        return self._document.Bookmarks.Item(bm_name).Range.Text

    def set_at_bookmark(self, bm_name: str, value: str) -> Any:
        """
        Replace the text of a bookmark.

        Word deletes the bookmark when its whole range is overwritten, so the
        name can no longer be found afterwards. Use :meth:`set_bookmark` to keep it.

        Returns:
            The range holding the new text
        """
        self._require_document()
        bm_range = self._document.Bookmarks.Item(bm_name).Range
        bm_range.Text = value
        emit_safely(self.events, "word.bookmark.written", name=bm_name, length=len(value))
        return bm_range

    def set_bookmark(self, bm_name: str, value: str) -> Any:
        """
        Replace the text of a bookmark and keep the bookmark.

        The bookmark is added again over the new text, so REF fields and other
        references by name keep resolving.
        """
        self._require_document()
        bm_range = self.set_at_bookmark(bm_name, value)
        self._document.Bookmarks.Add(bm_name, bm_range)
        return bm_range

    def update_fields(self) -> None:
        """Update all fields (needed so that REF fields show the new bookmark texts)."""
        self._require_document()
        self._document.Fields.Update()
        emit_safely(self.events, "word.fields.updated")

    # -- saving ----------------------------------------------------------

    def save(self, filename: str, as_pdf: bool = False) -> PersistedArtifact:
        """
        Save the document under the given filename.

        When saving as PDF the extension is replaced by ``.pdf``. Word releases
        before 10 only know the plain ``SaveAs(filename)`` and save in the
        document's default format.

        Raises:
            UnsupportedExportError: PDF requested from a Word release before 12
            SaveFailure: Word could not save the file
        """
        self._require_document()
        profile = self._save_profile(as_pdf)

        if profile.legacy_save:
            file_format = None
        else:
            file_format = Config.WD_FORMAT_PDF if as_pdf else Config.WD_FORMAT_DEFAULT
            if as_pdf:
                filename = derive_pdf_path(filename)

        emit_safely(self.events, "word.document.saving", filename=filename, file_format=file_format)
        try:
            if file_format is None:
                self._document.SaveAs(filename)
            else:
                self._document.SaveAs(filename, file_format)
        except Exception as e:
            raise SaveFailure(filename, str(e)) from e

        artifact = PersistedArtifact(
            path=filename,
            format=ArtifactFormat.PDF if as_pdf else ArtifactFormat.NATIVE,
            version_constraint=Config.PDF_EXPORT_MIN_VERSION if as_pdf else 0,
        )
        self.last_artifact = artifact
        emit_safely(self.events, "word.document.saved", level=logging.INFO, filename=filename)
        return artifact

    def save_temp(self, model_name: str, as_pdf: bool = False) -> str:
        """
        Save the document under a new unique filename.

        The file goes to a folder named after ``model_name``. A failed save is
        retried with a fresh filename each time; files a failed attempt left
        behind are kept unless ``discard_failed_saves`` is set.

        Returns:
            str: The filename the document was saved under
        """
        self._require_document()
        self._save_profile(as_pdf)
        extension = Config.extension_for(as_pdf)
        max_attempts = self.retry_policy.max_attempts

        with FileManager(keep_temp=not self.discard_failed_saves) as stale_files:

            def new_filename() -> str:
                return self.filename_generator.get_filename(extension, Config.TEMP_LABEL, model_name)

            def attempt_failed(attempt: int, filename: str, error: BaseException) -> None:
                emit_safely(self.events, "word.document.save_failed", level=logging.WARNING,
                            filename=filename, attempt=attempt, max_attempts=max_attempts,
                            error=str(error))
                stale_files.register_temp_file(filename)
                if as_pdf:
                    stale_files.register_temp_file(derive_pdf_path(filename))

            _, artifact = self.retry_policy.run(
                lambda filename: self.save(filename, as_pdf),
                new_filename,
                on_failure=attempt_failed,
            )
        return artifact.path

    # -- teardown --------------------------------------------------------

    def close_and_quit(self) -> None:
        """
        Close the current document and all other open documents without
        saving, then quit Word.

        Safe to call more than once; later calls do nothing.
        """
        session = self.session
        if session is None or not session.is_active():
            self._document = None
            return

        document = self._document
        emit_safely(self.events, "word.automator.close_and_quit")
        try:
            if document is not None:
                document.Close(Config.WD_DO_NOT_SAVE_CHANGES)
        except Exception as e:
            # shutdown below may raise too and hide this error
            emit_safely(self.events, "word.document.close_failed", level=logging.WARNING, error=str(e))
            raise
        finally:
            # protect against use after close, even when Word failed to close
            self._document = None
            session.shutdown()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_and_quit()

    # -- guards ----------------------------------------------------------

    def _require_active(self) -> None:
        if self.session is None:
            raise InactiveSessionError()
        self.session.require_active()

    def _require_document(self) -> None:
        self._require_active()
        if self._document is None:
            raise NoDocumentError()

    def _save_profile(self, as_pdf: bool) -> SaveProfile:
        profile = save_profile_for(self.session.version)
        if as_pdf and not profile.pdf_export:
            raise UnsupportedExportError(self.session.version, Config.PDF_EXPORT_MIN_VERSION)
        return profile

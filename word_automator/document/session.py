"""
Connection to a Microsoft Word application through COM automation.
"""

import logging
from typing import Any, Callable, Optional

from ..core.config import Config
from ..core.exceptions import InactiveSessionError, WordAutomatorError
from ..utils.events import EventSink, LoggingEventSink, emit_safely


def dispatch_word(visible: Optional[bool] = None) -> Any:
    """
    Launch Microsoft Word, or attach to a running instance when
    ``Config.WORD_REUSE_INSTANCE`` is set.

    Args:
        visible: Show the Word window; ``Config.WORD_VISIBLE`` when None

    Returns:
        The ``Word.Application`` COM object
    """
    # pywin32 is only available on Windows
    import pywintypes
    import win32com.client

    if Config.WORD_REUSE_INSTANCE:
        try:
            return win32com.client.GetActiveObject(Config.WORD_PROG_ID)
        except pywintypes.com_error:
            pass  # no running instance, launch one below

    word_app = win32com.client.DispatchEx(Config.WORD_PROG_ID)
    word_app.Visible = Config.WORD_VISIBLE if visible is None else visible
    word_app.DisplayAlerts = Config.WORD_DISPLAY_ALERTS
    return word_app


class WordSession:
    """
    One live connection to a Word application.

    Word is launched when the session is constructed; if that fails the
    constructor raises and no session exists. After :meth:`shutdown` the
    session stays inactive for good, a new ``WordSession`` has to be created
    to talk to Word again.
    """

    def __init__(self, application_factory: Optional[Callable[[], Any]] = None,
                 events: Optional[EventSink] = None, visible: Optional[bool] = None):
        self.events = events or LoggingEventSink()
        self._application_factory = application_factory or (lambda: dispatch_word(visible=visible))
        self._application = None
        self._version: Optional[str] = None
        self._activated = False
        self.activate()

    @property
    def version(self) -> Optional[str]:
        """Word version string captured at activation, e.g. ``"12.0"``."""
        return self._version

    @property
    def application(self) -> Any:
        """The Word application object; raises if the session is inactive."""
        self.require_active()
        return self._application

    def activate(self) -> None:
        """Launch Word and record its version. Runs once, from the constructor."""
        if self._activated:
            raise WordAutomatorError("A Word session cannot be re-activated; create a new WordSession")
        self._activated = True

        emit_safely(self.events, "word.session.activating", prog_id=Config.WORD_PROG_ID)
        application = self._application_factory()
        try:
            version = str(application.Version)
        except Exception as e:
            emit_safely(self.events, "word.session.activation_failed", level=logging.ERROR, error=str(e))
            # Word is already running, do not leave it behind
            try:
                application.Quit()
            except Exception as quit_error:
                emit_safely(self.events, "word.session.quit_failed", level=logging.WARNING,
                            error=str(quit_error))
            raise

        self._application = application
        self._version = version
        emit_safely(self.events, "word.session.activated", level=logging.INFO, version=version)

    def is_active(self) -> bool:
        return self._application is not None

    def require_active(self) -> None:
        if not self.is_active():
            raise InactiveSessionError()

    def close_all_documents(self) -> int:
        """
        Close every document open in Word without saving.

        This includes documents that were opened outside this session.

        Returns:
            int: Number of documents closed
        """
        documents = self.application.Documents
        count = documents.Count
        for _ in range(count):
            # Closing shifts the collection, the first item is always the next one
            documents.Item(1).Close(Config.WD_DO_NOT_SAVE_CHANGES)
        if count:
            emit_safely(self.events, "word.session.documents_closed", count=count)
        return count

    def shutdown(self) -> None:
        """
        Close all documents and quit Word.

        Does nothing when the session is already inactive. The session is
        inactive afterwards even when closing or quitting raised.
        """
        if not self.is_active():
            return

        application = self._application
        emit_safely(self.events, "word.session.shutdown", version=self._version)
        try:
            self.close_all_documents()
        finally:
            try:
                application.Quit()
            finally:
                self._application = None
                emit_safely(self.events, "word.session.closed", level=logging.INFO)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

"""
Unit tests for the WordSession class.
"""

import sys
import unittest
from unittest.mock import MagicMock, patch

from word_automator.core.config import Config
from word_automator.core.exceptions import InactiveSessionError, WordAutomatorError
from word_automator.document.session import WordSession, dispatch_word
from tests.test_config import FakeComError, FakeWordApplication, RecordingEventSink


class NoVersionWordApplication(FakeWordApplication):
    """A Word whose version can no longer be read, as after a crash during start-up."""

    @property
    def Version(self):
        raise FakeComError("The RPC server is unavailable")

    @Version.setter
    def Version(self, value):
        pass


class TestWordSession(unittest.TestCase):
    """Test cases for WordSession class."""

    def setUp(self):
        """Set up test fixtures."""
        self.app = FakeWordApplication(version="12.0")
        self.events = RecordingEventSink()
        self.session = WordSession(application_factory=lambda: self.app, events=self.events)

    def test_activation_captures_version(self):
        """Test that constructing a session activates Word and reads its version."""
        self.assertTrue(self.session.is_active())
        self.assertEqual(self.session.version, "12.0")
        self.assertIs(self.session.application, self.app)
        self.assertIn("word.session.activated", self.events.names())

    def test_activation_failure_propagates(self):
        """Test that a failing launch makes construction fail."""
        def broken_factory():
            raise FakeComError("Invalid class string")

        with self.assertRaises(FakeComError):
            WordSession(application_factory=broken_factory, events=self.events)

    def test_failed_version_read_quits_word(self):
        """Test that Word is quit when its version cannot be read after launch."""
        app = NoVersionWordApplication()

        with self.assertRaises(FakeComError):
            WordSession(application_factory=lambda: app, events=self.events)

        self.assertEqual(app.quit_count, 1)
        self.assertIn("word.session.activation_failed", self.events.names())

    def test_failed_version_read_and_quit(self):
        """Test that the original error is raised when quitting fails as well."""
        app = NoVersionWordApplication()
        app.fail_on_quit = True

        with self.assertRaises(FakeComError) as context:
            WordSession(application_factory=lambda: app, events=self.events)

        self.assertIn("RPC server", str(context.exception))
        self.assertIn("word.session.quit_failed", self.events.names())

    def test_version_is_read_only(self):
        """Test that the version cannot be replaced."""
        with self.assertRaises(AttributeError):
            self.session.version = "16.0"

    def test_cannot_activate_twice(self):
        """Test that a session is never re-activated in place."""
        with self.assertRaises(WordAutomatorError):
            self.session.activate()

        self.session.shutdown()
        with self.assertRaises(WordAutomatorError):
            self.session.activate()
        self.assertFalse(self.session.is_active())

    def test_require_active(self):
        """Test the guard before and after shutdown."""
        self.session.require_active()  # should not raise

        self.session.shutdown()
        with self.assertRaises(InactiveSessionError):
            self.session.require_active()
        with self.assertRaises(InactiveSessionError):
            self.session.application

    def test_shutdown_closes_all_documents_and_quits(self):
        """Test that shutdown closes every open document without saving."""
        first = self.app.Documents.Add()
        second = self.app.Documents.Add()

        self.session.shutdown()

        self.assertEqual(self.app.Documents.Count, 0)
        self.assertEqual(first.closed_with, Config.WD_DO_NOT_SAVE_CHANGES)
        self.assertEqual(second.closed_with, Config.WD_DO_NOT_SAVE_CHANGES)
        self.assertEqual(self.app.quit_count, 1)
        self.assertFalse(self.session.is_active())

    def test_shutdown_is_idempotent(self):
        """Test that a second shutdown does nothing."""
        self.session.shutdown()
        self.session.shutdown()

        self.assertEqual(self.app.quit_count, 1)

    def test_shutdown_clears_handle_when_quit_fails(self):
        """Test that a failing Quit still leaves the session inactive."""
        self.app.fail_on_quit = True

        with self.assertRaises(FakeComError):
            self.session.shutdown()

        self.assertFalse(self.session.is_active())
        self.session.shutdown()  # no second attempt
        self.assertEqual(self.app.quit_count, 1)

    def test_shutdown_quits_when_closing_documents_fails(self):
        """Test that Quit is still called when a document refuses to close."""
        self.app.Documents.Add()
        self.app.fail_on_close = True

        with self.assertRaises(FakeComError):
            self.session.shutdown()

        self.assertEqual(self.app.quit_count, 1)
        self.assertFalse(self.session.is_active())

    def test_close_all_documents_count(self):
        """Test that close_all_documents reports how many documents it closed."""
        self.app.Documents.Add()
        self.app.Documents.Add()
        self.app.Documents.Add()

        self.assertEqual(self.session.close_all_documents(), 3)
        self.assertEqual(self.session.close_all_documents(), 0)
        self.assertTrue(self.session.is_active())

    def test_context_manager(self):
        """Test WordSession as context manager."""
        with WordSession(application_factory=lambda: self.app, events=self.events) as session:
            self.assertTrue(session.is_active())
        self.assertFalse(session.is_active())
        self.assertEqual(self.app.quit_count, 1)


class TestDispatchWord(unittest.TestCase):
    """Test cases for launching Word through pywin32."""

    def setUp(self):
        self.word_app = MagicMock()
        self.client = MagicMock()
        self.client.DispatchEx.return_value = self.word_app
        self.win32com = MagicMock()
        self.win32com.client = self.client
        self.pywintypes = MagicMock()
        self.pywintypes.com_error = FakeComError
        self.modules = {
            'win32com': self.win32com,
            'win32com.client': self.client,
            'pywintypes': self.pywintypes,
        }

    def test_launches_new_instance(self):
        """Test that a new hidden Word instance is launched by default."""
        with patch.dict(sys.modules, self.modules):
            result = dispatch_word()

        self.assertIs(result, self.word_app)
        self.client.DispatchEx.assert_called_once_with(Config.WORD_PROG_ID)
        self.client.GetActiveObject.assert_not_called()
        self.assertEqual(self.word_app.Visible, Config.WORD_VISIBLE)
        self.assertEqual(self.word_app.DisplayAlerts, Config.WORD_DISPLAY_ALERTS)

    def test_visible_argument_overrides_config(self):
        """Test that visibility can be chosen per launch without touching Config."""
        with patch.dict(sys.modules, self.modules):
            dispatch_word(visible=True)

        self.assertTrue(self.word_app.Visible)
        self.assertFalse(Config.WORD_VISIBLE)

    def test_session_passes_visibility_to_launch(self):
        """Test that WordSession(visible=...) reaches dispatch_word."""
        app = FakeWordApplication()
        with patch("word_automator.document.session.dispatch_word", return_value=app) as dispatch:
            session = WordSession(events=RecordingEventSink(), visible=True)

        dispatch.assert_called_once_with(visible=True)
        self.assertIs(session.application, app)

    def test_reuses_running_instance(self):
        """Test attaching to a running Word when reuse is enabled."""
        running = MagicMock()
        self.client.GetActiveObject.return_value = running

        with patch.dict(sys.modules, self.modules), patch.object(Config, 'WORD_REUSE_INSTANCE', True):
            result = dispatch_word()

        self.assertIs(result, running)
        self.client.DispatchEx.assert_not_called()

    def test_reuse_falls_back_to_launch(self):
        """Test launching Word when no running instance is found."""
        self.client.GetActiveObject.side_effect = FakeComError("Operation unavailable")

        with patch.dict(sys.modules, self.modules), patch.object(Config, 'WORD_REUSE_INSTANCE', True):
            result = dispatch_word()

        self.assertIs(result, self.word_app)
        self.client.DispatchEx.assert_called_once_with(Config.WORD_PROG_ID)


if __name__ == '__main__':
    unittest.main()

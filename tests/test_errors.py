"""
Tests for error reports and the ErrorHandler.
"""

import logging

from pinyin_match.errors import (
    ErrorCategory,
    ErrorHandler,
    ErrorSeverity,
    IndexOutOfRangeError,
    index_out_of_range,
    insufficient_words,
    invalid_bulk_lines,
    no_chinese_voice,
    remote_speech_failure,
)


class TestErrorReports:
    """Test the report factory functions."""

    def test_insufficient_words(self):
        report = insufficient_words(1)
        assert report.category == ErrorCategory.GAME
        assert report.severity == ErrorSeverity.ERROR
        assert report.message == "Add at least 2 word pairs to start"

    def test_no_chinese_voice_is_transient(self):
        report = no_chinese_voice()
        assert report.transient is True
        assert report.message == "No Chinese voice available"

    def test_index_error_is_an_index_error(self):
        error = IndexOutOfRangeError(index_out_of_range(5, 2))
        assert isinstance(error, IndexError)
        assert error.report.error_code == "STORE_002"


class TestErrorHandler:
    """Test recording, logging and notification."""

    def test_sorts_by_severity(self):
        handler = ErrorHandler()
        handler.add_error(insufficient_words(0))
        handler.add_error(invalid_bulk_lines(3))
        handler.add_error(remote_speech_failure("timeout"))

        assert handler.has_errors()
        assert handler.has_warnings()
        summary = handler.get_error_summary()
        assert summary['error_count'] == 1
        assert summary['warning_count'] == 1
        assert summary['errors'][0]['category'] == 'game'

    def test_listeners_receive_every_report(self):
        handler = ErrorHandler()
        received = []
        handler.subscribe(received.append)

        handler.add_error(remote_speech_failure("timeout"))
        handler.add_error(no_chinese_voice())

        assert [r.error_code for r in received] == ["SPEECH_001", "SPEECH_002"]
        assert [w.error_code for w in handler.warnings] == ["SPEECH_002"]

    def test_logs_at_report_severity(self, caplog):
        handler = ErrorHandler()
        with caplog.at_level(logging.INFO, logger='pinyin_match.errors'):
            handler.add_error(no_chinese_voice())

        assert any(r.levelno == logging.WARNING and "SPEECH_002" in r.getMessage()
                   for r in caplog.records)

    def test_clear(self):
        handler = ErrorHandler()
        handler.add_error(no_chinese_voice())
        handler.clear_errors()
        assert not handler.has_warnings()

    def test_dismiss_removes_shown_warning(self):
        handler = ErrorHandler()
        bulk = invalid_bulk_lines(2)
        voice = no_chinese_voice()
        handler.add_error(bulk)
        handler.add_error(voice)

        handler.dismiss(voice)
        handler.dismiss(voice)

        assert handler.warnings == [bulk]

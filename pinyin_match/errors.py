"""
Error handling system for Pinyin Match.

This module provides centralized error definitions, the exception hierarchy
used by the game core and the TTS proxy, and actionable error reports that
the interaction layer can surface to the user.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors that can occur."""
    PERSISTENCE = "persistence"
    INPUT_VALIDATION = "input_validation"
    GAME = "game"
    SPEECH = "speech"
    NETWORK = "network"
    CONFIGURATION = "configuration"


@dataclass
class ErrorReport:
    """An error or warning with context and guidance."""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    details: str
    error_code: str
    suggested_actions: List[str] = field(default_factory=list)
    transient: bool = False  # auto-dismissing in the UI
    context: Dict[str, Any] = field(default_factory=dict)


class PinyinMatchError(Exception):
    """Base exception for Pinyin Match errors."""

    def __init__(self, report: ErrorReport):
        self.report = report
        super().__init__(report.message)


class MalformedPersistedDataError(PinyinMatchError):
    """Raised when stored word data cannot be decoded."""
    pass


class InsufficientWordsError(PinyinMatchError):
    """Raised when a round is started with fewer than two word pairs."""
    pass


class IndexOutOfRangeError(PinyinMatchError, IndexError):
    """Raised when removing a word pair at an invalid position."""
    pass


class RemoteSpeechError(PinyinMatchError):
    """Raised when the remote speech path fails."""
    pass


class UnknownInteractionError(PinyinMatchError):
    """Raised when the controller receives an interaction it has no handler for."""
    pass


class SpeechServiceError(PinyinMatchError):
    """Base exception for server-side synthesis errors."""
    pass


class MissingCredentialsError(SpeechServiceError):
    """Raised when no Google TTS API key is configured."""
    pass


class SpeechSynthesisError(SpeechServiceError):
    """Raised when the Google TTS call fails or returns no audio."""
    pass


def malformed_persisted_data(details: str) -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.PERSISTENCE,
        severity=ErrorSeverity.WARNING,
        message="Stored word list could not be read",
        details=details,
        error_code="STORE_001",
        suggested_actions=["The word list has been reset to empty"]
    )


def insufficient_words(count: int, minimum: int = 2) -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.GAME,
        severity=ErrorSeverity.ERROR,
        message=f"Add at least {minimum} word pairs to start",
        details=f"Round needs {minimum} pairs, word list has {count}",
        error_code="GAME_001",
        suggested_actions=["Add word pairs manually or with bulk add"]
    )


def index_out_of_range(index: int, size: int) -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.INPUT_VALIDATION,
        severity=ErrorSeverity.ERROR,
        message="No word pair at that position",
        details=f"Index {index} is outside a list of {size} pairs",
        error_code="STORE_002"
    )


def invalid_bulk_lines(skipped: int) -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.INPUT_VALIDATION,
        severity=ErrorSeverity.WARNING,
        message=f"{skipped} line(s) skipped",
        details="Lines without a recognised separator were skipped",
        error_code="INPUT_001",
        suggested_actions=['Use tab, " - ", or ", " between pinyin and English']
    )


def remote_speech_failure(details: str) -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.NETWORK,
        severity=ErrorSeverity.INFO,
        message="Remote speech unavailable",
        details=details,
        error_code="SPEECH_001",
        suggested_actions=["Falling back to local speech synthesis"]
    )


def no_chinese_voice() -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.SPEECH,
        severity=ErrorSeverity.WARNING,
        message="No Chinese voice available",
        details="Speaking an approximate reading with a non-Chinese voice",
        error_code="SPEECH_002",
        suggested_actions=[
            "Install a Chinese (zh-CN) voice for your system",
            "Or set GOOGLE_TTS_API_KEY on the server for remote speech"
        ],
        transient=True
    )


def unknown_interaction(kind: Any) -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.GAME,
        severity=ErrorSeverity.ERROR,
        message=f"Unknown interaction: {kind}",
        details="No handler is registered for this interaction",
        error_code="GAME_002"
    )


def missing_credentials() -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.ERROR,
        message="GOOGLE_TTS_API_KEY not set",
        details="Remote speech synthesis is disabled on this server",
        error_code="TTS_001",
        suggested_actions=["Set GOOGLE_TTS_API_KEY and restart the server"]
    )


def speech_synthesis_failed(details: str) -> ErrorReport:
    return ErrorReport(
        category=ErrorCategory.NETWORK,
        severity=ErrorSeverity.ERROR,
        message=f"Google TTS: {details}",
        details=details,
        error_code="TTS_002",
        suggested_actions=["Check the API key and quota in Google Cloud Console"]
    )


class ErrorHandler:
    """
    Collects error reports, logs them at their severity and notifies listeners.

    Listeners receive every report; the UI layer uses them to show inline
    messages and transient warnings.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.errors: List[ErrorReport] = []
        self.warnings: List[ErrorReport] = []
        self._listeners: List[Callable[[ErrorReport], None]] = []

    def subscribe(self, listener: Callable[[ErrorReport], None]) -> None:
        self._listeners.append(listener)

    def add_error(self, report: ErrorReport) -> None:
        """Record a report and notify listeners."""
        if report.severity in [ErrorSeverity.ERROR, ErrorSeverity.CRITICAL]:
            self.errors.append(report)
        elif report.severity == ErrorSeverity.WARNING:
            self.warnings.append(report)

        log_level = {
            ErrorSeverity.INFO: logging.INFO,
            ErrorSeverity.WARNING: logging.WARNING,
            ErrorSeverity.ERROR: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL
        }[report.severity]

        self.logger.log(log_level, f"[{report.error_code}] {report.message}")
        if report.details:
            self.logger.log(log_level, f"Details: {report.details}")

        for listener in self._listeners:
            listener(report)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def get_error_summary(self) -> Dict[str, Any]:
        """Get a summary of all errors and warnings."""
        return {
            'error_count': len(self.errors),
            'warning_count': len(self.warnings),
            'errors': [self._format_for_summary(e) for e in self.errors],
            'warnings': [self._format_for_summary(e) for e in self.warnings]
        }

    def _format_for_summary(self, report: ErrorReport) -> Dict[str, Any]:
        return {
            'code': report.error_code,
            'category': report.category.value,
            'severity': report.severity.value,
            'message': report.message,
            'suggested_actions': report.suggested_actions
        }

    def clear_errors(self) -> None:
        """Clear all recorded errors and warnings."""
        self.errors.clear()
        self.warnings.clear()

    def dismiss(self, report: ErrorReport) -> None:
        """Forget a warning once it has been shown to the user."""
        if report in self.warnings:
            self.warnings.remove(report)

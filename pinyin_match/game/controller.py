"""
Interaction handling for the matching game.

All mutable state lives in a GameContext owned by the controller. User
interactions are routed through a dispatch table keyed by Interaction,
and every handler returns a Feedback describing what to show the user.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pinyin_match.config import Config
from pinyin_match.errors import (
    ErrorHandler,
    ErrorReport,
    InsufficientWordsError,
    UnknownInteractionError,
    invalid_bulk_lines,
    unknown_interaction,
)
from pinyin_match.game.bulk_parser import parse_bulk
from pinyin_match.game.match_engine import MatchEngine
from pinyin_match.models import CardSide, RoundPhase, VoicePreference
from pinyin_match.speech.backends import HttpSpeechClient
from pinyin_match.speech.dispatcher import SpeechDispatcher
from pinyin_match.speech.local_audio import PygameAudioPlayer, Pyttsx3Synthesizer
from pinyin_match.storage.key_value import JsonFileStore
from pinyin_match.storage.preferences import PreferenceStore
from pinyin_match.storage.word_store import WordStore

logger = logging.getLogger(__name__)

ROUND_COMPLETE_MESSAGE = "All matched! Well done."
BULK_HELP_MESSAGE = 'No pairs added. Use tab, " - ", or ", " between pinyin and English.'


class Interaction(Enum):
    """Kinds of user interaction the controller understands."""
    ADD_WORD = "add_word"
    REMOVE_WORD = "remove_word"
    BULK_ADD = "bulk_add"
    CLEAR_WORDS = "clear_words"
    START_ROUND = "start_round"
    DRAG_START = "drag_start"
    DROP = "drop"
    SPEAK = "speak"
    SET_VOICE = "set_voice"
    TOGGLE_VOICE = "toggle_voice"


class FeedbackLevel(Enum):
    NONE = "none"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Feedback:
    """Result of handling one interaction."""
    message: str = ''
    level: FeedbackLevel = FeedbackLevel.NONE
    accepted: bool = True
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GameContext:
    """Everything the game mutates, owned in one place."""
    words: WordStore
    preferences: PreferenceStore
    preference: VoicePreference
    engine: MatchEngine
    speech: SpeechDispatcher
    errors: ErrorHandler


class GameController:
    """Routes interactions to handlers over a GameContext."""

    def __init__(self, context: GameContext):
        self.context = context
        self.transient_warnings: List[ErrorReport] = []
        self._handlers: Dict[Interaction, Callable[..., Feedback]] = {
            Interaction.ADD_WORD: self._add_word,
            Interaction.REMOVE_WORD: self._remove_word,
            Interaction.BULK_ADD: self._bulk_add,
            Interaction.CLEAR_WORDS: self._clear_words,
            Interaction.START_ROUND: self._start_round,
            Interaction.DRAG_START: self._drag_start,
            Interaction.DROP: self._drop,
            Interaction.SPEAK: self._speak,
            Interaction.SET_VOICE: self._set_voice,
            Interaction.TOGGLE_VOICE: self._toggle_voice,
        }
        context.errors.subscribe(self._collect_transient)

    @classmethod
    def create(cls, store, remote, player, synthesizer, rng=None) -> 'GameController':
        """
        Build a controller with freshly loaded state.

        Args:
            store: KeyValueStore holding words and preferences
            remote: RemoteSpeechClient
            player: AudioPlayer for remote audio
            synthesizer: LocalSynthesizer for the fallback path
            rng: Optional random.Random for deterministic shuffles
        """
        errors = ErrorHandler()
        words = WordStore(store)
        words.load()
        preferences = PreferenceStore(store)
        preference = preferences.load()
        speech = SpeechDispatcher(
            remote=remote,
            player=player,
            synthesizer=synthesizer,
            preference=preference,
            notify=errors.add_error
        )
        context = GameContext(
            words=words,
            preferences=preferences,
            preference=preference,
            engine=MatchEngine(rng=rng),
            speech=speech,
            errors=errors
        )
        return cls(context)

    @classmethod
    def desktop(cls, base_url: str, rng=None) -> 'GameController':
        """
        Build a controller for a desktop session talking to a running server.

        Words and preferences persist to Config.get_data_file(); audio goes
        through pygame and pyttsx3 (the ``audio`` extra).
        """
        Config.ensure_directories()
        return cls.create(
            store=JsonFileStore(Config.get_data_file()),
            remote=HttpSpeechClient(base_url),
            player=PygameAudioPlayer(),
            synthesizer=Pyttsx3Synthesizer(),
            rng=rng
        )

    def dispatch(self, kind: Interaction, **payload) -> Feedback:
        handler = self._handlers.get(kind)
        if handler is None:
            raise UnknownInteractionError(unknown_interaction(kind))
        logger.debug(f"Dispatching {kind.value}")
        return handler(**payload)

    def _collect_transient(self, report: ErrorReport) -> None:
        if report.transient:
            self.transient_warnings.append(report)

    # Word list

    def _add_word(self, pinyin: str = '', english: str = '') -> Feedback:
        pair = self.context.words.add_entry(pinyin, english)
        if pair is None:
            return Feedback(accepted=False)
        return Feedback(data={'pair': pair})

    def _remove_word(self, index: int) -> Feedback:
        removed = self.context.words.remove_at(index)
        return Feedback(data={'pair': removed})

    def _bulk_add(self, text: str = '') -> Feedback:
        if not (text or '').strip():
            return Feedback(accepted=False)

        result = parse_bulk(text)
        self.context.words.add_many(result.pairs)
        data = {'added': result.added, 'skipped': result.skipped}

        if result.skipped:
            self.context.errors.add_error(invalid_bulk_lines(result.skipped))

        if result.added > 0:
            message = f"Added {result.added} pair(s)."
            if result.skipped:
                message += f" {result.skipped} skipped."
            return Feedback(message=message, level=FeedbackLevel.SUCCESS, data=data)
        if result.skipped > 0:
            return Feedback(message=BULK_HELP_MESSAGE, level=FeedbackLevel.ERROR,
                            accepted=False, data=data)
        return Feedback(accepted=False, data=data)

    def _clear_words(self, confirmed: bool = False) -> Feedback:
        if not len(self.context.words) or not confirmed:
            return Feedback(accepted=False)
        self.context.words.clear()
        return Feedback()

    # Game

    def _start_round(self) -> Feedback:
        try:
            state = self.context.engine.start_round(self.context.words.words)
        except InsufficientWordsError as e:
            self.context.errors.add_error(e.report)
            return Feedback(message=f"{e.report.message}.", level=FeedbackLevel.ERROR, accepted=False)
        return Feedback(data={'score': self.context.engine.score_label(), 'total': state.total})

    def _drag_start(self, pair_id: int) -> Feedback:
        engine = self.context.engine
        if not engine.can_drag(pair_id):
            return Feedback(accepted=False)
        card = engine.card(pair_id, CardSide.PINYIN)
        return self._speak_with_feedback(card.text)

    def _drop(self, dragged_id: int, target_id: int,
              dragged_side: CardSide = CardSide.PINYIN,
              target_side: CardSide = CardSide.ENGLISH) -> Feedback:
        engine = self.context.engine
        matched = engine.attempt_match(dragged_id, target_id, dragged_side, target_side)
        data = {'score': engine.score_label()}
        if not matched:
            return Feedback(accepted=False, data=data)
        if engine.phase == RoundPhase.COMPLETE:
            return Feedback(message=ROUND_COMPLETE_MESSAGE, level=FeedbackLevel.SUCCESS, data=data)
        return Feedback(data=data)

    # Voice

    def _speak(self, text: str = '') -> Feedback:
        return self._speak_with_feedback(text)

    def _speak_with_feedback(self, text: str) -> Feedback:
        """Speak text and surface a transient warning raised along the way, once."""
        self.transient_warnings.clear()
        route = self.context.speech.speak(text)
        data = {'speech': route.value}
        if not self.transient_warnings:
            return Feedback(data=data)

        warning = self.transient_warnings[-1]
        for report in self.transient_warnings:
            self.context.errors.dismiss(report)
        self.transient_warnings.clear()
        return Feedback(message=warning.message, level=FeedbackLevel.WARNING, data=data)

    def _set_voice(self, voice_name: Optional[str] = None) -> Feedback:
        self.context.preference.voice_name = voice_name or None
        self.context.preferences.save(self.context.preference)
        return Feedback()

    def _toggle_voice(self, enabled: bool) -> Feedback:
        self.context.preference.enabled = bool(enabled)
        if not enabled:
            self.context.speech.stop()
        self.context.preferences.save(self.context.preference)
        return Feedback()

"""
Speech dispatch: remote synthesis first, local synthesis as fallback.
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from pinyin_match.config import Config
from pinyin_match.errors import ErrorReport, RemoteSpeechError, no_chinese_voice, remote_speech_failure
from pinyin_match.models import Utterance, VoicePreference
from pinyin_match.speech.backends import (
    AudioPlayer,
    LocalSynthesizer,
    PlaybackHandle,
    RemoteSpeechClient,
)
from pinyin_match.speech.voices import VoiceResolver

logger = logging.getLogger(__name__)


class SpeechRoute(Enum):
    """Which path a speak() call took."""
    SKIPPED = "skipped"
    REMOTE = "remote"
    LOCAL = "local"


class PlaybackSlot:
    """Holds at most one playing clip; installing a new one stops the old one."""

    def __init__(self):
        self._lock = threading.Lock()
        self._current: Optional[PlaybackHandle] = None

    @property
    def current(self) -> Optional[PlaybackHandle]:
        return self._current

    def replace(self, handle: PlaybackHandle) -> None:
        with self._lock:
            previous, self._current = self._current, handle
        if previous is not None and previous is not handle:
            previous.stop()

    def release(self) -> None:
        with self._lock:
            previous, self._current = self._current, None
        if previous is not None:
            previous.stop()


class SpeechDispatcher:
    """
    Speaks text with one active audio stream at a time.

    The remote client is tried first. Any failure there (network, HTTP
    status, empty payload, playback) falls back to the local synthesizer,
    speaking slowly in the best available voice.
    """

    def __init__(
        self,
        remote: RemoteSpeechClient,
        player: AudioPlayer,
        synthesizer: LocalSynthesizer,
        preference: VoicePreference,
        resolver: Optional[VoiceResolver] = None,
        notify: Optional[Callable[[ErrorReport], None]] = None,
        settle_delay: float = Config.LOCAL_SETTLE_DELAY,
        catalog_timeout: float = Config.VOICE_CATALOG_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.remote = remote
        self.player = player
        self.synthesizer = synthesizer
        self.preference = preference
        self.resolver = resolver or VoiceResolver()
        self.notify = notify
        self.settle_delay = settle_delay
        self.catalog_timeout = catalog_timeout
        self._sleep = sleep
        self._slot = PlaybackSlot()
        self._catalog_checked = False

    @property
    def playback(self) -> PlaybackSlot:
        return self._slot

    def speak(self, text: str) -> SpeechRoute:
        if not self.preference.enabled or not text or not text.strip():
            return SpeechRoute.SKIPPED

        text = text.strip()
        try:
            self._speak_remote(text)
            return SpeechRoute.REMOTE
        except RemoteSpeechError as e:
            logger.info(f"Remote speech failed, using local synthesis: {e.report.details}")

        self._speak_local(text)
        return SpeechRoute.LOCAL

    def stop(self) -> None:
        """Silence everything that is playing."""
        self.synthesizer.cancel()
        self._slot.release()

    def _speak_remote(self, text: str) -> None:
        audio = self.remote.synthesize(text)
        self.synthesizer.cancel()
        self._slot.release()
        try:
            handle = self.player.play(audio)
        except Exception as e:
            raise RemoteSpeechError(remote_speech_failure(f"Playback failed: {e}")) from e
        self._slot.replace(handle)

    def _speak_local(self, text: str) -> None:
        self.synthesizer.cancel()
        self._slot.release()

        if not self._catalog_checked:
            if not self.synthesizer.wait_until_ready(self.catalog_timeout):
                logger.warning("Local voice catalog not ready, continuing with what is available")
            self._catalog_checked = True

        self._sleep(self.settle_delay)

        plan = self.resolver.resolve_for_speech(
            self.preference.voice_name,
            self.synthesizer.voices(),
            text
        )
        if plan.missing_chinese_voice:
            report = no_chinese_voice()
            if self.notify:
                self.notify(report)
            else:
                logger.warning(f"[{report.error_code}] {report.message}")

        self.synthesizer.speak(Utterance(
            text=plan.text,
            lang=plan.lang,
            voice=plan.voice,
            rate=Config.LOCAL_SPEECH_RATE,
            pitch=Config.LOCAL_SPEECH_PITCH,
            volume=Config.LOCAL_SPEECH_VOLUME
        ))

"""
Collaborator interfaces for speech output, and the HTTP client for the TTS proxy.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from pinyin_match.config import Config
from pinyin_match.errors import RemoteSpeechError, remote_speech_failure
from pinyin_match.models import SynthesisVoice, Utterance

logger = logging.getLogger(__name__)


class RemoteSpeechClient(ABC):
    """Base interface for remote text-to-speech."""

    @abstractmethod
    def synthesize(self, text: str) -> bytes:
        """
        Fetch spoken audio for text.

        Args:
            text: Text to speak

        Returns:
            MP3 audio bytes (never empty)

        Raises:
            RemoteSpeechError: On network failure, non-success status or empty payload
        """
        pass


class PlaybackHandle(ABC):
    """A clip that is currently playing."""

    @abstractmethod
    def stop(self) -> None:
        """Stop playback and release the clip. Safe to call more than once."""
        pass


class AudioPlayer(ABC):
    """Base interface for playing encoded audio."""

    @abstractmethod
    def play(self, audio: bytes) -> PlaybackHandle:
        """Start playing MP3 bytes and return a handle to stop them."""
        pass


class LocalSynthesizer(ABC):
    """Base interface for on-device speech synthesis."""

    @abstractmethod
    def wait_until_ready(self, timeout: float) -> bool:
        """Block until the voice catalog is available. Returns False on timeout."""
        pass

    @abstractmethod
    def voices(self) -> List[SynthesisVoice]:
        pass

    @abstractmethod
    def speak(self, utterance: Utterance) -> None:
        """Enqueue an utterance."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Drop the current and queued utterances."""
        pass


class HttpSpeechClient(RemoteSpeechClient):
    """Posts text to the proxy's /api/speak endpoint and returns the MP3 body."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = Config.REMOTE_SPEECH_TIMEOUT
    ):
        self.url = base_url.rstrip('/') + Config.SPEAK_ENDPOINT
        self.session = session or requests.Session()
        self.timeout = timeout

    def synthesize(self, text: str) -> bytes:
        try:
            response = self.session.post(self.url, json={'text': text}, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteSpeechError(remote_speech_failure(f"Request to {self.url} failed: {e}")) from e

        if not 200 <= response.status_code < 300:
            raise RemoteSpeechError(
                remote_speech_failure(f"{self.url} returned HTTP {response.status_code}")
            )

        audio = response.content
        if not audio:
            raise RemoteSpeechError(remote_speech_failure(f"{self.url} returned an empty payload"))

        logger.debug(f"Received {len(audio)} bytes of remote audio")
        return audio

"""
Desktop audio adapters: pygame for MP3 playback, pyttsx3 for local synthesis.

Both libraries are imported when the adapter is constructed so the rest of
the package works without the optional ``audio`` extra installed.
"""

import io
import logging
import threading
import time
from typing import List, Optional

from pinyin_match.models import SynthesisVoice, Utterance
from pinyin_match.speech.backends import AudioPlayer, LocalSynthesizer, PlaybackHandle

logger = logging.getLogger(__name__)


class PygameClip(PlaybackHandle):
    """The clip loaded into pygame's music channel."""

    def __init__(self, music, buffer: io.BytesIO):
        self._music = music
        self._buffer = buffer
        self._stopped = False

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._music.stop()
        self._music.unload()
        self._buffer.close()


class PygameAudioPlayer(AudioPlayer):
    """Plays MP3 bytes through pygame.mixer.music."""

    def __init__(self, mixer=None):
        if mixer is None:
            import pygame

            mixer = pygame.mixer
        self.mixer = mixer
        if not mixer.get_init():
            mixer.init()
        logger.info("Audio playback initialized with pygame")

    def play(self, audio: bytes) -> PlaybackHandle:
        buffer = io.BytesIO(audio)
        music = self.mixer.music
        music.load(buffer, 'mp3')
        music.play()
        return PygameClip(music, buffer)


def _voice_language(voice) -> str:
    """Best-effort BCP-47 tag for a pyttsx3 voice."""
    for lang in getattr(voice, 'languages', None) or []:
        if isinstance(lang, bytes):
            # espeak reports e.g. b'\x05zh-cn': a priority byte then the tag
            lang = lang.decode('utf-8', errors='ignore')
        lang = ''.join(ch for ch in str(lang) if ch.isprintable()).strip()
        if lang:
            return lang
    return ''


class Pyttsx3Synthesizer(LocalSynthesizer):
    """
    Local speech through pyttsx3.

    runAndWait() blocks, so each utterance runs on a daemon thread. Every
    speak() or cancel() starts a new generation; a worker whose generation
    is stale when it gets the engine returns without speaking, and cancel()
    also stops the engine to end the utterance already running.
    """

    def __init__(self, engine=None):
        if engine is None:
            import pyttsx3

            engine = pyttsx3.init()
        self.engine = engine
        self.base_rate = self.engine.getProperty('rate')
        self._lock = threading.Lock()
        self._generation_lock = threading.Lock()
        self._generation = 0
        self._worker: Optional[threading.Thread] = None

    def wait_until_ready(self, timeout: float) -> bool:
        deadline = time.monotonic() + timeout
        while True:
            if self.voices():
                return True
            if time.monotonic() >= deadline:
                return False
            time.sleep(0.05)

    def voices(self) -> List[SynthesisVoice]:
        return [
            SynthesisVoice(name=v.name, lang=_voice_language(v), voice_id=v.id)
            for v in self.engine.getProperty('voices') or []
        ]

    def speak(self, utterance: Utterance) -> None:
        generation = self._next_generation()

        def run():
            with self._lock:
                if generation != self._generation:
                    logger.debug("Dropping superseded utterance")
                    return
                if utterance.voice is not None and utterance.voice.voice_id:
                    self.engine.setProperty('voice', utterance.voice.voice_id)
                # pyttsx3 has no portable pitch control; pitch is ignored
                self.engine.setProperty('rate', int(self.base_rate * utterance.rate))
                self.engine.setProperty('volume', utterance.volume)
                self.engine.say(utterance.text)
                self.engine.runAndWait()

        # The previous worker is not joined; its generation is already stale.
        self._worker = threading.Thread(target=run, daemon=True)
        self._worker.start()

    def cancel(self) -> None:
        self._next_generation()
        self.engine.stop()

    def _next_generation(self) -> int:
        with self._generation_lock:
            self._generation += 1
            return self._generation

"""
Pytest configuration and shared fixtures.

Provides in-memory collaborators for the speech pipeline and configures
Hypothesis for the property-based tests.
"""

import random
from typing import List, Optional

import pytest
from hypothesis import settings, Verbosity

from pinyin_match.errors import RemoteSpeechError, remote_speech_failure
from pinyin_match.models import SynthesisVoice, Utterance, VoicePreference, WordPair
from pinyin_match.speech.backends import (
    AudioPlayer,
    LocalSynthesizer,
    PlaybackHandle,
    RemoteSpeechClient,
)
from pinyin_match.storage.key_value import MemoryStore


settings.register_profile("pinyin_match",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None
)
settings.load_profile("pinyin_match")


def pytest_configure(config):
    config.addinivalue_line("markers", "property: property-based tests using Hypothesis")


class FakeRemote(RemoteSpeechClient):
    """Remote client returning canned audio or failing."""

    def __init__(self, audio: bytes = b'ID3fake-mp3', fail: bool = False):
        self.audio = audio
        self.fail = fail
        self.requests: List[str] = []

    def synthesize(self, text: str) -> bytes:
        self.requests.append(text)
        if self.fail:
            raise RemoteSpeechError(remote_speech_failure("HTTP 500"))
        return self.audio


class FakeClip(PlaybackHandle):
    def __init__(self, audio: bytes):
        self.audio = audio
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakePlayer(AudioPlayer):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.clips: List[FakeClip] = []

    def play(self, audio: bytes) -> PlaybackHandle:
        if self.fail:
            raise RuntimeError("audio device unavailable")
        clip = FakeClip(audio)
        self.clips.append(clip)
        return clip


class FakeSynthesizer(LocalSynthesizer):
    """Records enqueued utterances instead of speaking."""

    def __init__(self, voices: Optional[List[SynthesisVoice]] = None, ready: bool = True):
        self._voices = list(voices or [])
        self.ready = ready
        self.spoken: List[Utterance] = []
        self.cancel_count = 0
        self.ready_checks = 0

    def wait_until_ready(self, timeout: float) -> bool:
        self.ready_checks += 1
        return self.ready

    def voices(self) -> List[SynthesisVoice]:
        return list(self._voices)

    def speak(self, utterance: Utterance) -> None:
        self.spoken.append(utterance)

    def cancel(self) -> None:
        self.cancel_count += 1


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sample_words():
    return [
        WordPair(pinyin='nǐ hǎo', english='hello'),
        WordPair(pinyin='xièxie', english='thank you'),
        WordPair(pinyin='zàijiàn', english='goodbye'),
        WordPair(pinyin='lǜ', english='green'),
    ]


@pytest.fixture
def chinese_voice():
    return SynthesisVoice(name='Microsoft Huihui Online (Natural)', lang='zh-CN', voice_id='huihui')


@pytest.fixture
def english_voice():
    return SynthesisVoice(name='Samantha', lang='en-US', voice_id='samantha')


@pytest.fixture
def preference():
    return VoicePreference()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)

"""Voice selection and speech dispatch."""

from .backends import (
    RemoteSpeechClient,
    PlaybackHandle,
    AudioPlayer,
    LocalSynthesizer,
    HttpSpeechClient
)
from .voices import VoiceResolver, pick_voice, transliterate
from .dispatcher import SpeechDispatcher, SpeechRoute, PlaybackSlot
from .local_audio import PygameAudioPlayer, Pyttsx3Synthesizer

__all__ = [
    'RemoteSpeechClient',
    'PlaybackHandle',
    'AudioPlayer',
    'LocalSynthesizer',
    'HttpSpeechClient',
    'VoiceResolver',
    'pick_voice',
    'transliterate',
    'SpeechDispatcher',
    'SpeechRoute',
    'PlaybackSlot',
    'PygameAudioPlayer',
    'Pyttsx3Synthesizer'
]

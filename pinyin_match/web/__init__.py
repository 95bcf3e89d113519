"""Text-to-speech proxy server and static file serving."""

from .app import create_app, resolve_static_path
from .tts_service import GoogleTextToSpeechService

__all__ = [
    'create_app',
    'resolve_static_path',
    'GoogleTextToSpeechService'
]

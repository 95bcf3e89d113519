"""
Configuration settings for Pinyin Match.
"""

import os
from pathlib import Path


class Config:
    """Configuration class for application settings."""

    # Project paths
    PACKAGE_ROOT = Path(__file__).parent
    PROJECT_ROOT = PACKAGE_ROOT.parent
    DATA_DIR = PROJECT_ROOT / "data"
    STATIC_DIR = PACKAGE_ROOT / "web" / "static"
    INDEX_DOCUMENT = "index.html"

    # Server settings
    DEFAULT_PORT = 3000

    # Persistence keys
    WORDS_KEY = "pinyin-english-pairs"
    VOICE_NAME_KEY = "pinyin-voice-name"
    VOICE_ENABLED_KEY = "pinyin-voice-enabled"

    # Google Cloud Text-to-Speech settings
    GOOGLE_TTS_URL = "https://texttospeech.googleapis.com/v1/text:synthesize"
    GOOGLE_TTS_LANGUAGE = "zh-CN"
    GOOGLE_TTS_VOICE = "zh-CN-Wavenet-A"
    GOOGLE_TTS_ENCODING = "MP3"
    GOOGLE_TTS_SPEAKING_RATE = 0.75
    GOOGLE_TTS_PITCH = 0
    GOOGLE_TTS_TIMEOUT = 15.0  # seconds

    # Client-side speech settings
    SPEAK_ENDPOINT = "/api/speak"
    REMOTE_SPEECH_TIMEOUT = 10.0  # seconds
    LOCAL_SPEECH_RATE = 0.6
    LOCAL_SPEECH_PITCH = 1.0
    LOCAL_SPEECH_VOLUME = 1.0
    LOCAL_SETTLE_DELAY = 0.1  # seconds
    VOICE_CATALOG_TIMEOUT = 2.0  # seconds
    DEFAULT_ENGLISH_LOCALE = "en-US"

    # Game settings
    MIN_ROUND_WORDS = 2

    @classmethod
    def get_port(cls) -> int:
        """Port from the PORT environment variable, falling back to the default."""
        return int(os.environ.get("PORT", cls.DEFAULT_PORT))

    @classmethod
    def get_tts_api_key(cls):
        """Google TTS API key, or None when remote synthesis is disabled."""
        return os.environ.get("GOOGLE_TTS_API_KEY") or None

    @classmethod
    def get_static_dir(cls) -> Path:
        return Path(os.environ.get("PINYIN_MATCH_STATIC_DIR", cls.STATIC_DIR)).resolve()

    @classmethod
    def get_data_file(cls) -> Path:
        default = cls.DATA_DIR / "pinyin_match.json"
        return Path(os.environ.get("PINYIN_MATCH_DATA_FILE", default))

    @classmethod
    def ensure_directories(cls):
        """Create necessary directories if they don't exist."""
        cls.get_data_file().parent.mkdir(parents=True, exist_ok=True)

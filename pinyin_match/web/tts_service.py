"""
Google Cloud Text-to-Speech client used by the /api/speak proxy.

Calls the REST endpoint with an API key and a fixed Mandarin voice.
"""

import base64
import binascii
import logging
from typing import Optional

import requests

from pinyin_match.config import Config
from pinyin_match.errors import (
    MissingCredentialsError,
    SpeechSynthesisError,
    missing_credentials,
    speech_synthesis_failed,
)


class GoogleTextToSpeechService:
    """
    Synthesizes Mandarin speech as MP3 through Google Cloud Text-to-Speech.

    The voice configuration is fixed: zh-CN, zh-CN-Wavenet-A, MP3 output at
    a reduced speaking rate for learners.
    """

    def __init__(
        self,
        api_key: Optional[str],
        session: Optional[requests.Session] = None,
        timeout: float = Config.GOOGLE_TTS_TIMEOUT
    ):
        """
        Initialize the service.

        Args:
            api_key: Google API key; None leaves the service disabled
            session: Optional requests session (shared connection pool)
            timeout: Request timeout in seconds
        """
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def build_request(self, text: str) -> dict:
        return {
            'input': {'text': text},
            'voice': {
                'languageCode': Config.GOOGLE_TTS_LANGUAGE,
                'name': Config.GOOGLE_TTS_VOICE,
            },
            'audioConfig': {
                'audioEncoding': Config.GOOGLE_TTS_ENCODING,
                'speakingRate': Config.GOOGLE_TTS_SPEAKING_RATE,
                'pitch': Config.GOOGLE_TTS_PITCH,
            },
        }

    def synthesize(self, text: str) -> bytes:
        """
        Convert text to MP3 audio.

        Args:
            text: Non-empty text to speak

        Returns:
            Decoded MP3 bytes

        Raises:
            MissingCredentialsError: If no API key is configured
            SpeechSynthesisError: If the request fails or returns no audio
        """
        if not self.api_key:
            raise MissingCredentialsError(missing_credentials())

        try:
            response = self.session.post(
                Config.GOOGLE_TTS_URL,
                params={'key': self.api_key},
                json=self.build_request(text),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.error(f"Google TTS request failed: {e}")
            raise SpeechSynthesisError(speech_synthesis_failed(f"request failed: {e}")) from e

        if not response.ok:
            self.logger.error(f"Google TTS returned {response.status_code}")
            raise SpeechSynthesisError(
                speech_synthesis_failed(f"{response.status_code} {response.text}")
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SpeechSynthesisError(speech_synthesis_failed("invalid JSON response")) from e

        audio_content = data.get('audioContent') if isinstance(data, dict) else None
        if not audio_content:
            raise SpeechSynthesisError(speech_synthesis_failed("no audioContent"))

        try:
            audio = base64.b64decode(audio_content, validate=True)
        except (binascii.Error, ValueError) as e:
            raise SpeechSynthesisError(speech_synthesis_failed("audioContent is not valid base64")) from e

        self.logger.info(f"Synthesized {len(audio)} bytes for {len(text)} characters")
        return audio

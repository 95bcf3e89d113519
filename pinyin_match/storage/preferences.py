"""
Persistence for the voice preference.
"""

from pinyin_match.config import Config
from pinyin_match.models import VoicePreference
from pinyin_match.storage.key_value import KeyValueStore


class PreferenceStore:
    """Reads and writes the pinned voice name and the voice-enabled flag."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self) -> VoicePreference:
        voice_name = self.store.get(Config.VOICE_NAME_KEY) or None
        enabled_raw = self.store.get(Config.VOICE_ENABLED_KEY)
        # Anything other than an explicit "false" keeps voice output on
        enabled = enabled_raw is None or enabled_raw.strip().lower() != 'false'
        return VoicePreference(voice_name=voice_name, enabled=enabled)

    def save(self, preference: VoicePreference) -> None:
        if preference.voice_name:
            self.store.set(Config.VOICE_NAME_KEY, preference.voice_name)
        else:
            self.store.remove(Config.VOICE_NAME_KEY)
        self.store.set(Config.VOICE_ENABLED_KEY, 'true' if preference.enabled else 'false')

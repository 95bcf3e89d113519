"""
Local synthesis voice selection.

Voice names are assigned by the operating system or browser vendor, so the
gender and quality hints below are string heuristics only. They pick a
reasonable default; a pinned voice always wins.
"""

import logging
import unicodedata
from typing import Iterable, List, Optional, Sequence

from pinyin_match.config import Config
from pinyin_match.models import SpeechPlan, SynthesisVoice

logger = logging.getLogger(__name__)

FEMALE_VOICE_TOKENS = (
    # gendered words
    'female', 'woman', 'girl',
    # Chinese voices
    'huihui', 'yaoyao', 'xiaoxiao', 'xiaoyi', 'xiaohan', 'xiaomo', 'xiaoxuan',
    'hanhan', 'tingting', 'ting-ting', 'meijia', 'mei-jia', 'sinji', 'sin-ji',
    'lili', 'lingling',
    # English voices
    'zira', 'samantha', 'victoria', 'karen', 'moira', 'tessa', 'fiona',
    'susan', 'hazel', 'serena', 'allison', 'ava', 'aria', 'jenny', 'libby',
)

QUALITY_VOICE_TOKENS = ('natural', 'neural', 'online', 'premium', 'enhanced')

CHINESE_PREFIX = 'zh'
ENGLISH_PREFIX = 'en'


def _normalize_lang(lang: str) -> str:
    return (lang or '').strip().lower().replace('_', '-')


def is_female_hinted(voice: SynthesisVoice) -> bool:
    name = voice.name.lower()
    return any(token in name for token in FEMALE_VOICE_TOKENS)


def is_higher_quality(voice: SynthesisVoice) -> bool:
    name = voice.name.lower()
    return any(token in name for token in QUALITY_VOICE_TOKENS)


def is_chinese(lang: str) -> bool:
    return _normalize_lang(lang).startswith(CHINESE_PREFIX)


def transliterate(text: str) -> str:
    """
    Strip tone marks from pinyin for voices that cannot read it.

    The result is an approximate Latin reading, not a phonetic transcription.

    Examples:
        >>> transliterate("nǐ hǎo")
        'ni hao'
        >>> transliterate("lǜ")
        'lu'
    """
    decomposed = unicodedata.normalize('NFD', text.replace('ü', 'u').replace('Ü', 'U'))
    stripped = ''.join(ch for ch in decomposed if unicodedata.category(ch) != 'Mn')
    return unicodedata.normalize('NFC', stripped)


def pick_voice(
    voices: Sequence[SynthesisVoice],
    language_prefix: Optional[str] = None
) -> Optional[SynthesisVoice]:
    """
    Pick the most suitable voice for a language.

    Preference: female-hinted and higher-quality, then female-hinted, then
    the first candidate in input order.

    Args:
        voices: Available voices
        language_prefix: Language tag prefix such as "zh"; None means any language

    Returns:
        The chosen voice, or None if no voice matches the prefix
    """
    if language_prefix:
        prefix = _normalize_lang(language_prefix)
        candidates = [v for v in voices if _normalize_lang(v.lang).startswith(prefix)]
    else:
        candidates = list(voices)

    if not candidates:
        return None

    for voice in candidates:
        if is_female_hinted(voice) and is_higher_quality(voice):
            return voice
    for voice in candidates:
        if is_female_hinted(voice):
            return voice
    return candidates[0]


class VoiceResolver:
    """Turns a pinned voice name, the voice catalog and a text into a SpeechPlan."""

    def __init__(self, default_locale: str = Config.DEFAULT_ENGLISH_LOCALE):
        self.default_locale = default_locale

    def pick_voice(self, voices, language_prefix=None):
        return pick_voice(voices, language_prefix)

    def resolve_for_speech(
        self,
        explicit_choice: Optional[str],
        voices: Iterable[SynthesisVoice],
        text: str
    ) -> SpeechPlan:
        voices: List[SynthesisVoice] = list(voices)

        if explicit_choice:
            pinned = next((v for v in voices if v.name == explicit_choice), None)
            if pinned is not None:
                if is_chinese(pinned.lang):
                    return SpeechPlan(voice=pinned, lang=pinned.lang, text=text)
                return SpeechPlan(
                    voice=pinned,
                    lang=pinned.lang,
                    text=transliterate(text),
                    transliterated=True
                )
            logger.debug(f"Pinned voice '{explicit_choice}' not installed, choosing automatically")

        chinese = pick_voice(voices, CHINESE_PREFIX)
        if chinese is not None:
            return SpeechPlan(voice=chinese, lang=chinese.lang, text=text)

        english = pick_voice(voices, ENGLISH_PREFIX)
        if english is not None:
            return SpeechPlan(
                voice=english,
                lang=english.lang,
                text=transliterate(text),
                transliterated=True,
                missing_chinese_voice=True
            )

        return SpeechPlan(
            voice=None,
            lang=self.default_locale,
            text=transliterate(text),
            transliterated=True,
            missing_chinese_voice=True
        )

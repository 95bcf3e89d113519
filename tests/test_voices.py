"""
Tests for local voice selection and transliteration.
"""

import pytest

from pinyin_match.models import SynthesisVoice
from pinyin_match.speech.voices import (
    VoiceResolver,
    is_female_hinted,
    is_higher_quality,
    pick_voice,
    transliterate,
)


HUIHUI = SynthesisVoice(name="Huihui Neural", lang="zh-CN")
KANGKANG = SynthesisVoice(name="Microsoft Kangkang", lang="zh-CN")
TINGTING = SynthesisVoice(name="Tingting", lang="zh-CN")
SAMANTHA = SynthesisVoice(name="Samantha", lang="en-US")
DANIEL = SynthesisVoice(name="Daniel", lang="en-GB")
AMELIE = SynthesisVoice(name="Amélie", lang="fr-CA")


class TestPickVoice:
    """Test voice ranking."""

    def test_empty_catalog(self):
        assert pick_voice([], "zh") is None

    def test_no_matching_language(self):
        assert pick_voice([SAMANTHA], "zh") is None

    def test_single_chinese_voice(self):
        assert pick_voice([HUIHUI], "zh") == HUIHUI

    def test_female_and_quality_preferred(self):
        """Test female + quality beats female only and input order."""
        assert pick_voice([KANGKANG, TINGTING, HUIHUI], "zh") == HUIHUI

    def test_female_preferred_over_first(self):
        assert pick_voice([KANGKANG, TINGTING], "zh") == TINGTING

    def test_first_candidate_fallback(self):
        other = SynthesisVoice(name="Microsoft Yunyang", lang="zh-CN")
        assert pick_voice([KANGKANG, other], "zh") == KANGKANG

    def test_no_prefix_uses_all_voices(self):
        assert pick_voice([DANIEL, SAMANTHA]) == SAMANTHA
        assert pick_voice([DANIEL, AMELIE]) == DANIEL

    @pytest.mark.parametrize("lang", ["zh_CN", "ZH-tw", "zh"])
    def test_language_tag_normalization(self, lang):
        voice = SynthesisVoice(name="Mei-Jia", lang=lang)
        assert pick_voice([SAMANTHA, voice], "zh") == voice

    def test_hints_are_case_insensitive(self):
        voice = SynthesisVoice(name="Google FEMALE Premium", lang="en-US")
        assert is_female_hinted(voice)
        assert is_higher_quality(voice)
        assert not is_higher_quality(SAMANTHA)


class TestTransliterate:
    """Test tone mark stripping."""

    @pytest.mark.parametrize("text, expected", [
        ("nǐ hǎo", "ni hao"),
        ("xièxie", "xiexie"),
        ("lǜ", "lu"),
        ("nǚ", "nu"),
        ("LÜ", "LU"),
        ("hello", "hello"),
        ("你好", "你好"),
    ])
    def test_transliterate(self, text, expected):
        assert transliterate(text) == expected


class TestResolveForSpeech:
    """Test speech plan resolution."""

    @pytest.fixture
    def resolver(self):
        return VoiceResolver()

    def test_pinned_chinese_voice(self, resolver):
        plan = resolver.resolve_for_speech("Microsoft Kangkang", [HUIHUI, KANGKANG], "nǐ hǎo")
        assert plan.voice == KANGKANG
        assert plan.lang == "zh-CN"
        assert plan.text == "nǐ hǎo"
        assert not plan.transliterated
        assert not plan.missing_chinese_voice

    def test_pinned_non_chinese_voice_transliterates(self, resolver):
        plan = resolver.resolve_for_speech("Daniel", [HUIHUI, DANIEL], "nǐ hǎo")
        assert plan.voice == DANIEL
        assert plan.lang == "en-GB"
        assert plan.text == "ni hao"
        assert plan.transliterated
        assert not plan.missing_chinese_voice

    def test_missing_pinned_voice_falls_back(self, resolver):
        plan = resolver.resolve_for_speech("Uninstalled", [SAMANTHA, HUIHUI], "hǎo")
        assert plan.voice == HUIHUI
        assert plan.text == "hǎo"

    def test_english_fallback_warns(self, resolver):
        plan = resolver.resolve_for_speech(None, [AMELIE, DANIEL, SAMANTHA], "zàijiàn")
        assert plan.voice == SAMANTHA
        assert plan.text == "zaijian"
        assert plan.missing_chinese_voice

    def test_no_voices_uses_default_locale(self, resolver):
        plan = resolver.resolve_for_speech(None, [AMELIE], "lǜ")
        assert plan.voice is None
        assert plan.lang == "en-US"
        assert plan.text == "lu"
        assert plan.missing_chinese_voice

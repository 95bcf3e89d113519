"""
Tests for core data models.
"""

import pytest
from pinyin_match.models import (
    CardSide,
    RoundCard,
    RoundState,
    SynthesisVoice,
    VoicePreference,
    WordPair
)


class TestWordPair:
    """Test cases for WordPair data model."""

    def test_word_pair_creation(self):
        """Test basic WordPair creation."""
        pair = WordPair(pinyin="nǐ hǎo", english="hello")
        assert pair.pinyin == "nǐ hǎo"
        assert pair.english == "hello"

    def test_word_pair_is_immutable(self):
        """Test that pairs cannot be edited in place."""
        pair = WordPair(pinyin="nǐ hǎo", english="hello")
        with pytest.raises(AttributeError):
            pair.english = "hi"

    def test_word_pair_dict_conversion(self):
        """Test conversion to and from the stored JSON shape."""
        pair = WordPair(pinyin="xièxie", english="thank you")
        assert pair.to_dict() == {'pinyin': 'xièxie', 'english': 'thank you'}
        assert WordPair.from_dict(pair.to_dict()) == pair

    @pytest.mark.parametrize("data", [
        None,
        "nǐ hǎo",
        {'pinyin': 'nǐ hǎo'},
        {'pinyin': 1, 'english': 'one'},
    ])
    def test_word_pair_from_malformed_dict(self, data):
        """Test that malformed entries are rejected."""
        with pytest.raises(ValueError):
            WordPair.from_dict(data)


class TestRoundModels:
    """Test cases for round cards and state."""

    def test_round_card_key(self):
        """Test that cards are keyed by pair id and side."""
        card = RoundCard(pair_id=3, side=CardSide.ENGLISH, text="goodbye")
        assert card.key == (3, CardSide.ENGLISH)
        assert card.matched is False

    def test_round_state_completion(self):
        """Test completion is matched_count == total."""
        state = RoundState(cards=[], matched_count=1, total=2)
        assert not state.is_complete
        state.matched_count = 2
        assert state.is_complete


class TestVoiceModels:
    """Test cases for voice-related models."""

    def test_voice_preference_defaults(self):
        """Test voice output is enabled with no pinned voice by default."""
        preference = VoicePreference()
        assert preference.voice_name is None
        assert preference.enabled is True

    def test_synthesis_voice_equality_ignores_engine_id(self):
        """Test that engine ids do not affect voice equality."""
        a = SynthesisVoice(name="Tingting", lang="zh-CN", voice_id="a")
        b = SynthesisVoice(name="Tingting", lang="zh-CN", voice_id="b")
        assert a == b

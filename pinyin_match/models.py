"""
Core data models for Pinyin Match.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class WordPair:
    """A pinyin/English vocabulary pair. Identity is its position in the word list."""
    pinyin: str
    english: str

    def to_dict(self) -> Dict[str, str]:
        return {'pinyin': self.pinyin, 'english': self.english}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WordPair':
        """Create instance from dictionary. Raises ValueError on malformed entries."""
        if not isinstance(data, dict):
            raise ValueError(f"Word pair must be an object, got {type(data).__name__}")
        pinyin = data.get('pinyin')
        english = data.get('english')
        if not isinstance(pinyin, str) or not isinstance(english, str):
            raise ValueError("Word pair requires string 'pinyin' and 'english' fields")
        return cls(pinyin=pinyin, english=english)


class CardSide(Enum):
    """Which side of the board a card belongs to."""
    PINYIN = "pinyin-side"
    ENGLISH = "english-side"


@dataclass
class RoundCard:
    """A single card on the board for the current round."""
    pair_id: int  # index into the word list at round start
    side: CardSide
    text: str
    matched: bool = False

    @property
    def key(self):
        return (self.pair_id, self.side)


class RoundPhase(Enum):
    """Lifecycle of the matching game."""
    IDLE = "idle"
    IN_ROUND = "in_round"
    COMPLETE = "complete"


@dataclass
class RoundState:
    """Cards and progress of one round."""
    cards: List[RoundCard]
    matched_count: int = 0
    total: int = 0

    @property
    def is_complete(self) -> bool:
        return self.matched_count == self.total


@dataclass
class VoicePreference:
    """User's voice choice; survives across rounds."""
    voice_name: Optional[str] = None
    enabled: bool = True


@dataclass(frozen=True)
class SynthesisVoice:
    """A local synthesis voice as reported by the environment."""
    name: str
    lang: str  # BCP-47 tag
    voice_id: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class SpeechPlan:
    """What to say, in which voice and language."""
    voice: Optional[SynthesisVoice]
    lang: str
    text: str
    transliterated: bool = False
    missing_chinese_voice: bool = False


@dataclass(frozen=True)
class Utterance:
    """Arguments for one local synthesis request."""
    text: str
    lang: str
    voice: Optional[SynthesisVoice] = None
    rate: float = 1.0
    pitch: float = 1.0
    volume: float = 1.0

"""
Card-matching state machine for a round of pinyin/English pairs.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from pinyin_match.config import Config
from pinyin_match.errors import InsufficientWordsError, insufficient_words
from pinyin_match.models import CardSide, RoundCard, RoundPhase, RoundState, WordPair

logger = logging.getLogger(__name__)

T = TypeVar('T')


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a uniformly shuffled copy of items (Fisher-Yates).

    The input sequence is never modified.
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class MatchEngine:
    """
    Runs one round at a time: Idle -> InRound -> Complete.

    A match is only recorded when a pinyin card is dropped onto the english
    card with the same pair identifier. The reverse direction is rejected.
    """

    def __init__(self, rng: Optional[random.Random] = None, min_words: int = Config.MIN_ROUND_WORDS):
        self.rng = rng or random.Random()
        self.min_words = min_words
        self.phase = RoundPhase.IDLE
        self.state: Optional[RoundState] = None
        self._cards: Dict[Tuple[int, CardSide], RoundCard] = {}
        self._order: List[int] = []
        self._match_listeners: List[Callable[[int], None]] = []
        self._complete_listeners: List[Callable[[RoundState], None]] = []

    def on_match(self, listener: Callable[[int], None]) -> None:
        """Register a callback receiving the pair id of every successful match."""
        self._match_listeners.append(listener)

    def on_round_complete(self, listener: Callable[[RoundState], None]) -> None:
        self._complete_listeners.append(listener)

    def start_round(self, words: Sequence[WordPair]) -> RoundState:
        """
        Shuffle the word list and lay out a fresh set of cards.

        Args:
            words: Current word list; not modified

        Returns:
            The new RoundState

        Raises:
            InsufficientWordsError: If there are fewer than two pairs
        """
        if len(words) < self.min_words:
            raise InsufficientWordsError(insufficient_words(len(words), self.min_words))

        tagged = shuffle(list(enumerate(words)), self.rng)

        self._cards = {}
        self._order = []
        cards: List[RoundCard] = []
        for pair_id, pair in tagged:
            pinyin_card = RoundCard(pair_id=pair_id, side=CardSide.PINYIN, text=pair.pinyin)
            english_card = RoundCard(pair_id=pair_id, side=CardSide.ENGLISH, text=pair.english)
            self._cards[pinyin_card.key] = pinyin_card
            self._cards[english_card.key] = english_card
            self._order.append(pair_id)
            cards.extend([pinyin_card, english_card])

        self.state = RoundState(cards=cards, matched_count=0, total=len(tagged))
        self.phase = RoundPhase.IN_ROUND
        logger.debug(f"Round started with {self.state.total} pairs")
        return self.state

    @property
    def pinyin_cards(self) -> List[RoundCard]:
        return [self._cards[(pair_id, CardSide.PINYIN)] for pair_id in self._order]

    @property
    def english_cards(self) -> List[RoundCard]:
        return [self._cards[(pair_id, CardSide.ENGLISH)] for pair_id in self._order]

    def card(self, pair_id: int, side: CardSide) -> Optional[RoundCard]:
        return self._cards.get((pair_id, side))

    def can_drag(self, pair_id: int) -> bool:
        """Only unmatched pinyin cards of the running round can be picked up."""
        if self.phase != RoundPhase.IN_ROUND:
            return False
        card = self.card(pair_id, CardSide.PINYIN)
        return card is not None and not card.matched

    def attempt_match(
        self,
        dragged_id: int,
        target_id: int,
        dragged_side: CardSide = CardSide.PINYIN,
        target_side: CardSide = CardSide.ENGLISH
    ) -> bool:
        """
        Try to match a dragged card with a drop target.

        Returns:
            True if a match was recorded, False if the attempt was a no-op
        """
        if self.phase != RoundPhase.IN_ROUND:
            return False
        if dragged_side != CardSide.PINYIN or target_side != CardSide.ENGLISH:
            return False
        if dragged_id != target_id:
            return False

        pinyin_card = self.card(dragged_id, CardSide.PINYIN)
        english_card = self.card(target_id, CardSide.ENGLISH)
        if pinyin_card is None or english_card is None:
            return False
        if pinyin_card.matched or english_card.matched:
            return False

        pinyin_card.matched = True
        english_card.matched = True
        self.state.matched_count += 1

        for listener in self._match_listeners:
            listener(dragged_id)

        if self.state.matched_count == self.state.total:
            self.phase = RoundPhase.COMPLETE
            logger.debug("Round complete")
            for listener in self._complete_listeners:
                listener(self.state)

        return True

    def score(self) -> float:
        """Fraction of pairs matched in the current round."""
        if not self.state or not self.state.total:
            return 0.0
        return self.state.matched_count / self.state.total

    def score_label(self) -> str:
        if not self.state or not self.state.total:
            return ''
        return f"Matched: {self.state.matched_count} / {self.state.total}"

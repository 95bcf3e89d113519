"""
Persistent ordered list of pinyin/English word pairs.
"""

import json
import logging
from typing import Iterable, List, Optional

from pinyin_match.config import Config
from pinyin_match.errors import (
    IndexOutOfRangeError,
    MalformedPersistedDataError,
    index_out_of_range,
    malformed_persisted_data,
)
from pinyin_match.models import WordPair
from pinyin_match.storage.key_value import KeyValueStore

logger = logging.getLogger(__name__)


class WordStore:
    """
    Owns the word list and writes it through to a key-value store.

    Every mutation persists immediately; there is no batching beyond
    add_many, which writes once for the whole batch.
    """

    def __init__(self, store: KeyValueStore, key: str = Config.WORDS_KEY):
        self.store = store
        self.key = key
        self._words: List[WordPair] = []

    @property
    def words(self) -> List[WordPair]:
        """A copy of the current word list."""
        return list(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def load(self) -> List[WordPair]:
        """
        Load the word list from the store.

        Malformed data is logged and treated as an empty list.
        """
        try:
            self._words = self._decode(self.store.get(self.key))
        except MalformedPersistedDataError as e:
            logger.warning(f"[{e.report.error_code}] {e.report.message}: {e.report.details}")
            self._words = []
        return self.words

    def save(self, pairs: Iterable[WordPair]) -> None:
        self._words = list(pairs)
        self._persist()

    def add(self, pair: WordPair) -> None:
        self._words.append(pair)
        self._persist()

    def add_many(self, pairs: Iterable[WordPair]) -> int:
        """Append several pairs with a single write. Returns how many were added."""
        new_pairs = list(pairs)
        if not new_pairs:
            return 0
        self._words.extend(new_pairs)
        self._persist()
        return len(new_pairs)

    def add_entry(self, pinyin: str, english: str) -> Optional[WordPair]:
        """Trim and add a manually entered pair; ignored when either side is blank."""
        pinyin = (pinyin or '').strip()
        english = (english or '').strip()
        if not pinyin or not english:
            return None
        pair = WordPair(pinyin=pinyin, english=english)
        self.add(pair)
        return pair

    def remove_at(self, index: int) -> WordPair:
        if not isinstance(index, int) or index < 0 or index >= len(self._words):
            raise IndexOutOfRangeError(index_out_of_range(index, len(self._words)))
        removed = self._words.pop(index)
        self._persist()
        return removed

    def clear(self) -> None:
        self._words = []
        self._persist()

    def _persist(self) -> None:
        payload = json.dumps([pair.to_dict() for pair in self._words], ensure_ascii=False)
        self.store.set(self.key, payload)

    @staticmethod
    def _decode(raw: Optional[str]) -> List[WordPair]:
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise MalformedPersistedDataError(malformed_persisted_data(f"Invalid JSON: {e}"))
        if not isinstance(data, list):
            raise MalformedPersistedDataError(
                malformed_persisted_data(f"Expected a list, got {type(data).__name__}")
            )
        try:
            return [WordPair.from_dict(item) for item in data]
        except ValueError as e:
            raise MalformedPersistedDataError(malformed_persisted_data(str(e)))

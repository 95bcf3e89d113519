"""Pinyin Match: a pinyin/English matching game with a text-to-speech proxy."""

__version__ = "0.1.0"

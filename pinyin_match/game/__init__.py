"""Bulk parsing, the matching engine and interaction handling."""

from .bulk_parser import BulkParseResult, parse_line, parse_bulk
from .match_engine import MatchEngine, shuffle
from .controller import GameController, GameContext, Interaction, Feedback, FeedbackLevel

__all__ = [
    'BulkParseResult',
    'parse_line',
    'parse_bulk',
    'MatchEngine',
    'shuffle',
    'GameController',
    'GameContext',
    'Interaction',
    'Feedback',
    'FeedbackLevel'
]

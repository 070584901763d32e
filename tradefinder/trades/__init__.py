"""
Trade matching and scoring engine.

Candidate discovery, positional needs, composite scoring, reasoning and the
league-wide ranking pipeline that ties them together.
"""

from .analyzer import TradeAnalyzer, format_trade_suggestion
from .candidates import CandidateFinder
from .needs import NeedsAssessor
from .reasoning import ReasoningGenerator
from .scoring import TradeScorer

__all__ = [
    "TradeAnalyzer",
    "format_trade_suggestion",
    "CandidateFinder",
    "NeedsAssessor",
    "ReasoningGenerator",
    "TradeScorer"
]

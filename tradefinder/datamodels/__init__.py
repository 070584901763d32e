"""
Data models for the fantasy trade finder.

This module exports all the core data structures used throughout the application.
"""

from .player import InjuryStatus, Player, PlayerAPI, PlayerPosition, PlayerTier, RosterSlot
from .team import LeagueData, LeagueSettings, ScoringFormat, Team, TeamAPI, TeamNotFoundError
from .suggestions import (
    PositionalRank, RosterNeeds, TeamNeed, TradeAnalysisRequest, TradeAnalysisResponse,
    TradeSuggestion, TradeSuggestionAPI, ValueComparison
)

__all__ = [
    "InjuryStatus",
    "Player",
    "PlayerAPI",
    "PlayerPosition",
    "PlayerTier",
    "RosterSlot",

    "LeagueData",
    "LeagueSettings",
    "ScoringFormat",
    "Team",
    "TeamAPI",
    "TeamNotFoundError",

    "PositionalRank",
    "RosterNeeds",
    "TeamNeed",
    "TradeAnalysisRequest",
    "TradeAnalysisResponse",
    "TradeSuggestion",
    "TradeSuggestionAPI",
    "ValueComparison"
]

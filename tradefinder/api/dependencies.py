"""
Request dependencies.

Shared collaborators are created once by the application factory and stored
on ``app.state``; routes reach them through these functions so tests can
swap them with ``app.dependency_overrides``.
"""

from fastapi import Request

from ..external.league_store import LeagueStore
from ..external.player_feed import PlayerFeed
from ..trades.analyzer import TradeAnalyzer


def get_league_store(request: Request) -> LeagueStore:
    return request.app.state.league_store


def get_player_feed(request: Request) -> PlayerFeed:
    return request.app.state.player_feed


def get_trade_analyzer(request: Request) -> TradeAnalyzer:
    return request.app.state.trade_analyzer

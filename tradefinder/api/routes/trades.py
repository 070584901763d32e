"""
Trade analysis endpoint.
"""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from ...datamodels.player import PlayerAPI
from ...datamodels.suggestions import TradeAnalysisRequest, TradeAnalysisResponse
from ...datamodels.team import TeamNotFoundError
from ...external.league_store import LeagueStore, LeagueStoreError
from ...trades.analyzer import TradeAnalyzer, format_trade_suggestion
from ..dependencies import get_league_store, get_trade_analyzer
from .league import load_league


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/trades/analyze", response_model=TradeAnalysisResponse)
async def analyze_trades(request: TradeAnalysisRequest,
                         store: LeagueStore = Depends(get_league_store),
                         analyzer: TradeAnalyzer = Depends(get_trade_analyzer)):
    """
    Rank trade targets across the league for one of the user's players.

    Every other team's roster is searched for players at the desired
    position (or FLEX alternatives when that position is thin).
    """
    start_time = time.time()

    try:
        league = await load_league(store)
        user_team = league.get_team(request.user_team_id).to_team()
    except TeamNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LeagueStoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to load league data: {e}")

    trade_player = user_team.get_player(request.trade_player_id)
    if trade_player is None:
        raise HTTPException(
            status_code=404,
            detail=f"Player '{request.trade_player_id}' is not on team '{request.user_team_id}'"
        )

    other_teams = [team for team in league.to_teams() if team.team_id != user_team.team_id]

    suggestions = analyzer.analyze_trades(user_team, other_teams, trade_player, request.desired_position)
    if request.max_results:
        suggestions = suggestions[:request.max_results]

    logger.info(f"Trade analysis for {trade_player.name} -> {request.desired_position}: "
                f"{len(suggestions)} suggestions in {time.time() - start_time:.3f}s")

    return TradeAnalysisResponse(
        suggestions=[format_trade_suggestion(s) for s in suggestions],
        count=len(suggestions),
        trade_player=PlayerAPI.from_player(trade_player),
        desired_position=request.desired_position,
    )

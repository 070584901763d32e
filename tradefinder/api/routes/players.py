"""
Player catalog endpoint.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ...datamodels.player import PlayerAPI
from ...datamodels.team import ScoringFormat
from ...external.player_feed import PlayerFeed, matches_search
from ...external.sleeper_client import SleeperAPIError
from ..dependencies import get_player_feed


router = APIRouter()
logger = logging.getLogger(__name__)


class PlayerCatalogResponse(BaseModel):
    players: List[PlayerAPI]
    count: int
    scoring: str
    current_week: int
    season: str


@router.get("/players", response_model=PlayerCatalogResponse)
async def get_players(scoring: ScoringFormat = Query(ScoringFormat.HALF, description="League scoring format"),
                      position: Optional[str] = Query(None, description="Only players at this position"),
                      q: Optional[str] = Query(None, description="Search by name, NFL team or position"),
                      feed: PlayerFeed = Depends(get_player_feed)):
    """Active NFL players at fantasy positions, best projection first."""
    try:
        catalog = await feed.get_catalog(scoring.value)
        state = await feed.get_nfl_state()
    except SleeperAPIError as e:
        logger.error(f"Error building player catalog: {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch players")

    if position:
        catalog = [p for p in catalog if p.position == position.upper()]
    if q:
        catalog = [p for p in catalog if matches_search(p, q)]

    return PlayerCatalogResponse(
        players=[PlayerAPI.from_player(p) for p in catalog],
        count=len(catalog),
        scoring=scoring.value,
        current_week=state["week"],
        season=state["season"],
    )

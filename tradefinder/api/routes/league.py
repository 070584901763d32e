"""
League setup endpoints.

Read, replace and clear the stored league, plus the roster operations the
setup page uses: add a player, remove a player, rename a team.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...datamodels.player import PlayerAPI
from ...datamodels.team import LeagueData, TeamAPI, TeamNotFoundError
from ...external.league_store import LeagueStore, LeagueStoreError
from ..dependencies import get_league_store


router = APIRouter()
logger = logging.getLogger(__name__)


class StatusResponse(BaseModel):
    success: bool
    message: str


class RenameTeamRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=60)


async def load_league(store: LeagueStore) -> LeagueData:
    """Stored league, or the empty default league when nothing is stored yet."""
    league = await store.get()
    return league if league is not None else LeagueData.default()


@router.get("/league", response_model=LeagueData)
async def get_league(store: LeagueStore = Depends(get_league_store)):
    """
    Get the stored league.

    Falls back to an empty 12-team league when nothing has been saved or the
    store is unreachable, so the setup page always has something to render.
    """
    try:
        return await load_league(store)
    except LeagueStoreError as e:
        logger.error(f"Serving default league, store unavailable: {e}")
        return LeagueData.default()


@router.post("/league", response_model=StatusResponse)
async def save_league(league: LeagueData, store: LeagueStore = Depends(get_league_store)):
    try:
        await store.save(league)
    except LeagueStoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to save league data: {e}")

    return StatusResponse(success=True, message="League data saved successfully")


@router.delete("/league", response_model=StatusResponse)
async def clear_league(store: LeagueStore = Depends(get_league_store)):
    try:
        await store.clear()
    except LeagueStoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to clear league data: {e}")

    return StatusResponse(success=True, message="League data cleared successfully")


async def _update_team(store: LeagueStore, team_id: str, operation) -> TeamAPI:
    try:
        league = await load_league(store)
        operation(league)
        await store.save(league)
        return league.get_team(team_id)
    except TeamNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LeagueStoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to update league data: {e}")


@router.post("/league/teams/{team_id}/players", response_model=TeamAPI)
async def add_player_to_team(team_id: str,
                             player: PlayerAPI,
                             store: LeagueStore = Depends(get_league_store)):
    """Add a player to a roster. Adding a player already on it changes nothing."""
    logger.info(f"Adding {player.name} to team {team_id}")
    return await _update_team(store, team_id, lambda league: league.add_player(team_id, player))


@router.delete("/league/teams/{team_id}/players/{player_id}", response_model=TeamAPI)
async def remove_player_from_team(team_id: str,
                                  player_id: str,
                                  store: LeagueStore = Depends(get_league_store)):
    logger.info(f"Removing player {player_id} from team {team_id}")
    return await _update_team(store, team_id, lambda league: league.remove_player(team_id, player_id))


@router.put("/league/teams/{team_id}", response_model=TeamAPI)
async def rename_team(team_id: str,
                      request: RenameTeamRequest,
                      store: LeagueStore = Depends(get_league_store)):
    return await _update_team(store, team_id, lambda league: league.rename_team(team_id, request.name))

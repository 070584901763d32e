"""
Player feed: turns raw Sleeper records into Player objects.

Filters the feed down to active, rostered NFL players at fantasy positions,
overlays bye weeks and injury designations, and scores season-to-date and
projected points for the league's scoring format. Everything downstream sees
only points, never the scoring format.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..config import FeedConfig
from ..datamodels.player import InjuryStatus, Player, PlayerPosition, RosterSlot
from ..datamodels.team import ScoringFormat
from ..utils.rounding import round_half_up
from ..valuation.projections import ProjectionModel, StatLineProjector, score_stat_line
from .cache import TTLCache
from .sleeper_client import SleeperAPIError, SleeperClient


logger = logging.getLogger(__name__)

FANTASY_POSITIONS = {position.value for position in PlayerPosition}

# Sleeper designations without a multiplier of their own
INJURY_ALIASES = {
    "Active": InjuryStatus.HEALTHY.value,
    "PUP": InjuryStatus.OUT.value,
    "Sus": InjuryStatus.OUT.value,
    "NA": InjuryStatus.OUT.value,
}

# Precomputed totals Sleeper includes in season stat lines
SEASON_POINT_KEYS = {
    "standard": "pts_std",
    "half": "pts_half_ppr",
    "full": "pts_ppr",
}


def normalize_injury_status(status: Optional[str]) -> str:
    if not status:
        return InjuryStatus.HEALTHY.value
    return INJURY_ALIASES.get(status, status)


def season_points(stat_line: Optional[Mapping[str, float]], position: str,
                  scoring_format: str, config: FeedConfig) -> float:
    if not stat_line:
        return 0.0

    precomputed = stat_line.get(SEASON_POINT_KEYS.get(scoring_format, ""))
    if precomputed is not None:
        return round_half_up(float(precomputed), 1)
    return round_half_up(score_stat_line(stat_line, position, scoring_format, config), 1)


def search_key(player: Player) -> str:
    position = player.position.value if player.position else ""
    return f"{player.name} {player.nfl_team or ''} {position}".lower()


def matches_search(player: Player, query: Optional[str]) -> bool:
    """Case-insensitive substring match on name, NFL team and position."""
    if not query or not query.strip():
        return True
    return query.strip().lower() in search_key(player)


def normalize_player(raw: Mapping[str, Any],
                     scoring_format: str = ScoringFormat.HALF.value,
                     projector: Optional[ProjectionModel] = None,
                     config: Optional[FeedConfig] = None,
                     stat_line: Optional[Mapping[str, float]] = None) -> Optional[Player]:
    """
    Build a Player from one Sleeper record.

    Returns:
        The player on the bench slot, or None when the record is inactive,
        teamless or not at a fantasy position
    """
    config = config or FeedConfig()
    projector = projector or StatLineProjector(config)

    position = raw.get("position")
    nfl_team = raw.get("team")
    if not raw.get("active") or position not in FANTASY_POSITIONS or not nfl_team:
        return None

    name = raw.get("full_name") or f"{raw.get('first_name', '')} {raw.get('last_name', '')}".strip()

    return Player(
        id=str(raw.get("player_id")),
        name=name,
        position=PlayerPosition(position),
        nfl_team=nfl_team,
        roster_slot=RosterSlot.BENCH,
        injury_status=normalize_injury_status(raw.get("injury_status")),
        injury_notes=raw.get("injury_body_part") or None,
        ytd_points=season_points(stat_line, position, scoring_format, config),
        projected_points=max(0.0, projector.project(raw, scoring_format)),
        bye_week=config.bye_week(nfl_team),
    )


def build_player_catalog(raw_players: Mapping[str, Mapping[str, Any]],
                         scoring_format: str = ScoringFormat.HALF.value,
                         projector: Optional[ProjectionModel] = None,
                         config: Optional[FeedConfig] = None,
                         season_stats: Optional[Mapping[str, Mapping[str, float]]] = None) -> List[Player]:
    """
    Normalize a whole feed, best projected players first.

    Args:
        raw_players: Sleeper player map keyed by player id
        scoring_format: standard, half or full
        projector: Projection model; defaults to StatLineProjector
        config: Feed configuration
        season_stats: Optional season-to-date stat lines keyed by player id
    """
    config = config or FeedConfig()
    projector = projector or StatLineProjector(config)
    season_stats = season_stats or {}

    catalog = []
    for player_id, raw in raw_players.items():
        record = dict(raw)
        record.setdefault("player_id", player_id)

        player = normalize_player(record, scoring_format, projector, config,
                                  stat_line=season_stats.get(record["player_id"]))
        if player is not None:
            catalog.append(player)

    catalog.sort(key=lambda p: p.projected_points, reverse=True)
    return catalog


class PlayerFeed:
    """
    Cached access to the normalized player catalog.

    Args:
        client: Sleeper API client
        cache: Cache for raw feeds and built catalogs
        projector: Projection model used for every player
        config: Feed configuration
    """

    def __init__(self,
                 client: SleeperClient,
                 cache: Optional[TTLCache] = None,
                 projector: Optional[ProjectionModel] = None,
                 config: Optional[FeedConfig] = None):
        self.client = client
        self.cache = cache or TTLCache(ttl_seconds=3600)
        self.config = config or FeedConfig()
        self.projector = projector or StatLineProjector(self.config)

    async def get_nfl_state(self) -> Dict[str, Any]:
        state = await self.cache.get_or_fetch("nfl:state", self.client.get_nfl_state)
        return {
            "week": state.get("week") or 5,
            "season": str(state.get("season") or self.config.season),
        }

    async def _season_stats(self, season: str) -> Mapping[str, Mapping[str, float]]:
        try:
            return await self.cache.get_or_fetch(f"stats:{season}",
                                                 lambda: self.client.get_season_stats(season))
        except SleeperAPIError as e:
            # Catalog still works on projections alone
            logger.warning(f"Season stats unavailable, YTD points default to 0: {e}")
            return {}

    async def get_catalog(self, scoring_format: str = ScoringFormat.HALF.value) -> List[Player]:
        async def build() -> List[Player]:
            raw_players = await self.cache.get_or_fetch("players:raw", self.client.get_players)
            state = await self.get_nfl_state()
            stats = await self._season_stats(state["season"])

            catalog = build_player_catalog(raw_players, scoring_format, self.projector,
                                           self.config, season_stats=stats)
            logger.info(f"Built {scoring_format} catalog with {len(catalog)} players")
            return catalog

        return await self.cache.get_or_fetch(f"players:{scoring_format}", build)

    async def close(self):
        await self.client.close()

"""
Season point projection models.

The player feed asks a projection model for each player's season points in
the league's scoring format. Every model here is deterministic: the same
inputs always give the same points, so a valuation built on them can be
reproduced and tested. Randomized projections take an explicit seed.
"""

import logging
import zlib
from typing import Any, Dict, Mapping, Optional

import numpy as np

from ..config import FeedConfig
from ..datamodels.player import PlayerTier
from ..utils.rounding import round_half_up


logger = logging.getLogger(__name__)

FLEX_POSITIONS = ("RB", "WR", "TE")


class ProjectionModel:
    """Base class: map a raw feed record to season fantasy points."""

    def project(self, raw_player: Mapping[str, Any], scoring_format: str = "half") -> float:
        raise NotImplementedError


def score_stat_line(stats: Mapping[str, float], position: Optional[str],
                    scoring_format: str = "half", config: Optional[FeedConfig] = None) -> float:
    """
    Fantasy points for one stat line.

    Args:
        stats: Sleeper-style stat keys (pass_yd, rush_td, rec, fgm, ...)
        position: Player position, decides whether DEF/K rules apply
        scoring_format: standard, half or full
        config: Supplies points per reception for the format

    Returns:
        Unrounded fantasy points
    """
    config = config or FeedConfig()
    points = 0.0

    # Passing
    if stats.get("pass_yd"):
        points += stats["pass_yd"] * 0.04
        points += (stats.get("pass_td") or 0) * 4
        points -= (stats.get("pass_int") or 0) * 2

    # Rushing
    if stats.get("rush_yd"):
        points += stats["rush_yd"] * 0.1
        points += (stats.get("rush_td") or 0) * 6

    # Receiving
    if stats.get("rec_yd"):
        points += stats["rec_yd"] * 0.1
        points += (stats.get("rec_td") or 0) * 6
        points += (stats.get("rec") or 0) * config.reception_points.get(scoring_format, 0.0)

    if position == "DEF":
        points += (stats.get("def_td") or 0) * 6
        points += (stats.get("sack") or 0) * 1
        points += (stats.get("int") or 0) * 2
        points += (stats.get("fum_rec") or 0) * 2

    if position == "K":
        points += (stats.get("fgm") or 0) * 3
        points += (stats.get("xpm") or 0) * 1

    return points


class StatLineProjector(ProjectionModel):
    """
    Projects from last season's stat line, or from experience when there is none.

    Args:
        config: Feed configuration (baseline ranges, PPR multipliers)
        stat_season: Key of the stat line inside the record's ``stats`` map
    """

    def __init__(self, config: Optional[FeedConfig] = None, stat_season: str = "2024"):
        self.config = config or FeedConfig()
        self.stat_season = stat_season

    def project(self, raw_player: Mapping[str, Any], scoring_format: str = "half") -> float:
        position = raw_player.get("position")
        baseline = self.config.baseline_ranges.get(position)
        if baseline is None:
            return 0.0

        stat_line = (raw_player.get("stats") or {}).get(self.stat_season)
        if stat_line:
            base_points = score_stat_line(stat_line, position, scoring_format, self.config)
        else:
            low, high = baseline
            years_exp = raw_player.get("years_exp") or 0
            exp_factor = min(years_exp / 5, 1)
            base_points = low + (high - low) * exp_factor * 0.7

        # Pass-catchers gain with PPR on top of any reception points in the line
        if position in FLEX_POSITIONS:
            base_points *= self.config.ppr_multipliers.get(scoring_format, 1.0)

        return float(round_half_up(base_points))


class TableProjector(ProjectionModel):
    """Looks projections up in a precomputed player id -> points table."""

    def __init__(self, table: Mapping[str, float], default: float = 0.0):
        self.table: Dict[str, float] = dict(table)
        self.default = default

    def project(self, raw_player: Mapping[str, Any], scoring_format: str = "half") -> float:
        player_id = raw_player.get("player_id")
        return float(self.table.get(player_id, self.default))


class SeededTierProjector(ProjectionModel):
    """
    Draws a tier per player and projects from the tier's share of the range.

    Each player gets a generator seeded from (seed, crc32(player_id)), so a
    draw does not depend on how many players were projected before it and two
    projectors with the same seed agree on every player.
    """

    TIER_WEIGHTS = {
        PlayerTier.ELITE: 0.05,
        PlayerTier.HIGH_END: 0.15,
        PlayerTier.MID_TIER: 0.30,
        PlayerTier.LOW_END: 0.30,
        PlayerTier.BENCH: 0.20,
    }

    # Fraction of the baseline range each tier lands at
    TIER_SHARE = {
        PlayerTier.ELITE: 1.0,
        PlayerTier.HIGH_END: 0.75,
        PlayerTier.MID_TIER: 0.5,
        PlayerTier.LOW_END: 0.25,
        PlayerTier.BENCH: 0.0,
    }

    def __init__(self, seed: int, config: Optional[FeedConfig] = None):
        self.seed = seed
        self.config = config or FeedConfig()
        self._tiers = list(self.TIER_WEIGHTS.keys())
        self._weights = np.array(list(self.TIER_WEIGHTS.values()))

    def _rng_for(self, player_id: str) -> np.random.Generator:
        player_key = zlib.crc32(str(player_id).encode("utf-8"))
        return np.random.default_rng([self.seed, player_key])

    def draw_tier(self, player_id: str) -> PlayerTier:
        rng = self._rng_for(player_id)
        index = rng.choice(len(self._tiers), p=self._weights)
        return self._tiers[int(index)]

    def project(self, raw_player: Mapping[str, Any], scoring_format: str = "half") -> float:
        position = raw_player.get("position")
        baseline = self.config.baseline_ranges.get(position)
        if baseline is None:
            return 0.0

        tier = self.draw_tier(raw_player.get("player_id", ""))
        low, high = baseline
        points = low + (high - low) * self.TIER_SHARE[tier]

        if position in FLEX_POSITIONS:
            points *= self.config.ppr_multipliers.get(scoring_format, 1.0)

        logger.debug(f"Projected {raw_player.get('player_id')} as {tier.value}: {points:.1f}")
        return float(round_half_up(points))

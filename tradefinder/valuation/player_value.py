"""
Player valuation model.

Turns a player's season-to-date and rest-of-season production, position and
injury status into one comparable number. Observed points are blended with the
projection rather than trusting either alone: early-season samples are noisy
and preseason projections go stale.
"""

import logging
from typing import Iterable, Optional, Sequence

import numpy as np

from ..config import ValuationConfig
from ..datamodels.player import Player, PlayerTier
from ..datamodels.suggestions import PositionalRank, ValueComparison
from ..utils.rounding import round_half_up


logger = logging.getLogger(__name__)


class PlayerValuator:
    """
    Computes player values, tiers and pairwise comparisons.

    The valuator keeps no state between calls; the config it is built with is
    the only input besides the players themselves.
    """

    def __init__(self, config: Optional[ValuationConfig] = None):
        self.config = config or ValuationConfig()

    def calculate_player_value(self, player: Optional[Player], scoring_format: Optional[str] = None) -> float:
        """
        Calculate a player's trade value.

        Args:
            player: Player to value; None is worth 0
            scoring_format: Accepted for symmetry with the points pipeline.
                Points arrive already translated for the league's format, so
                the formula never branches on it.

        Returns:
            Non-negative value rounded to one decimal
        """
        if player is None:
            return 0.0

        cfg = self.config
        ytd_points = player.ytd_points or 0.0
        projected_points = player.projected_points or 0.0

        ppg_actual = ytd_points / cfg.weeks_played if cfg.weeks_played > 0 else 0.0
        ppg_projected = projected_points / cfg.weeks_remaining if cfg.weeks_remaining > 0 else 0.0

        weighted_ppg = (ppg_actual * cfg.actual_weight) + (ppg_projected * cfg.projected_weight)

        total_projected_value = ytd_points + (ppg_projected * cfg.weeks_remaining)

        scarcity_multiplier = self._position_scarcity(player.position, weighted_ppg)
        injury_multiplier = self._injury_multiplier(player.injury_status)

        base_value = total_projected_value * scarcity_multiplier * injury_multiplier
        return round_half_up(base_value, 1)

    def _position_scarcity(self, position, weighted_ppg: float) -> float:
        """Multiplier for the tier a weekly scoring rate clears."""
        tiers = self.config.tiers_for(position)
        weeks = self.config.weeks_remaining
        multipliers = self.config.scarcity_multipliers

        if weeks <= 0:
            return multipliers[PlayerTier.BENCH.value]

        # Tier thresholds are season totals; compare on a per-week basis
        for tier, threshold in self._tier_ladder(tiers):
            if weighted_ppg >= threshold / weeks:
                return multipliers[tier.value]
        return multipliers[PlayerTier.BENCH.value]

    def _injury_multiplier(self, status: Optional[str]) -> float:
        if not status:
            return 1.0
        return self.config.injury_multipliers.get(status, 1.0)

    @staticmethod
    def _tier_ladder(tiers):
        return [
            (PlayerTier.ELITE, tiers.elite),
            (PlayerTier.HIGH_END, tiers.high),
            (PlayerTier.MID_TIER, tiers.mid),
            (PlayerTier.LOW_END, tiers.low),
        ]

    def compare_player_values(self, player1: Optional[Player], player2: Optional[Player]) -> ValueComparison:
        """
        Compare the player given up (player1) with the one received (player2).

        Percent difference is relative to player1 and is 0 when player1 has
        no value.
        """
        value1 = self.calculate_player_value(player1)
        value2 = self.calculate_player_value(player2)

        difference = value2 - value1
        percent_diff = (difference / value1) * 100 if value1 > 0 else 0.0

        return ValueComparison(
            player1_value=value1,
            player2_value=value2,
            difference=round_half_up(difference, 1),
            percent_difference=round_half_up(percent_diff, 1),
            is_upgrade=difference > 0,
            is_fair=abs(percent_diff) <= self.config.fair_trade_threshold,
        )

    def get_player_tier(self, player: Optional[Player]) -> PlayerTier:
        """Tier from the player's value against the position's season thresholds."""
        value = self.calculate_player_value(player)
        tiers = self.config.tiers_for(player.position if player else None)

        for tier, threshold in self._tier_ladder(tiers):
            if value >= threshold:
                return tier
        return PlayerTier.BENCH

    def calculate_positional_advantage(self, player: Player, all_players: Iterable[Player]) -> PositionalRank:
        """
        Rank a player among everyone at the same position.

        Rank is 1-based; percentile is the share of the pool ranked below.
        """
        player_value = self.calculate_player_value(player)
        ranked_values = sorted(
            (self.calculate_player_value(p) for p in all_players if p.position == player.position),
            reverse=True,
        )

        total = len(ranked_values)
        if total == 0:
            return PositionalRank(rank=0, total=0, percentile=0)

        rank = next((i for i, v in enumerate(ranked_values) if v <= player_value), -1) + 1
        percentile = int(round_half_up((1 - rank / total) * 100))

        return PositionalRank(rank=rank, total=total, percentile=percentile)

    def adjust_value_for_team_needs(self, player: Player, team_roster: Sequence[Player]) -> float:
        """Raise value for a thin position on the roster, lower it for a deep one."""
        value = self.calculate_player_value(player)
        position_count = len([p for p in team_roster if p.position == player.position])

        if position_count < 2:
            return value * 1.2
        if position_count > 4:
            return value * 0.8
        return value

    @staticmethod
    def calculate_schedule_impact(opponent_difficulties: Sequence[Optional[float]] = ()) -> float:
        """
        Multiplier for strength of schedule.

        Difficulties are on a 0-1 scale with 0.5 as average; an easier schedule
        gives a multiplier above 1.
        """
        if len(opponent_difficulties) == 0:
            return 1.0

        difficulties = [0.5 if d is None else d for d in opponent_difficulties]
        avg_difficulty = float(np.mean(difficulties))

        return 1.0 + (0.5 - avg_difficulty) * 0.3

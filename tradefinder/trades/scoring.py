"""
Composite trade scoring, recommendation labels and letter grades.
"""

from typing import Optional

from ..config import TradeConfig
from ..datamodels.player import Player
from ..datamodels.suggestions import TeamNeed, ValueComparison
from ..utils.rounding import round_half_up
from ..valuation.player_value import PlayerValuator


class TradeScorer:
    """
    Scores a trade from 0 to 100.

    Starting from a neutral base, the score moves with:
    1. Value gained or lost (percent difference, capped each way)
    2. How much each side needs the position it receives
    3. A premium for the position received
    4. A flat penalty when the received player is hurt
    5. A flat bonus when the received player's tier is at least as high
    """

    def __init__(self, valuator: Optional[PlayerValuator] = None, config: Optional[TradeConfig] = None):
        self.valuator = valuator or PlayerValuator()
        self.config = config or TradeConfig()

    def calculate_trade_score(self,
                              comparison: ValueComparison,
                              target_need: TeamNeed,
                              user_need: TeamNeed,
                              giving_player: Player,
                              receiving_player: Player) -> int:
        cfg = self.config
        score = cfg.base_score

        if comparison.is_upgrade:
            score += min(cfg.upgrade_cap, comparison.percent_difference * cfg.upgrade_weight)
        else:
            score -= min(cfg.downgrade_cap, abs(comparison.percent_difference) * cfg.downgrade_weight)

        # They need what we offer, we need what they offer
        score += target_need.need_score * cfg.need_weight
        score += user_need.need_score * cfg.need_weight

        score += self.position_premium(receiving_player.position)

        if not receiving_player.is_healthy:
            score -= cfg.injury_penalty

        giving_tier = self.valuator.get_player_tier(giving_player)
        receiving_tier = self.valuator.get_player_tier(receiving_player)
        if receiving_tier.rank >= giving_tier.rank:
            score += cfg.tier_bonus

        return int(max(0, min(100, round_half_up(score))))

    def position_premium(self, position) -> float:
        if not position:
            return 0
        return self.config.position_premium.get(position, 0)

    def get_trade_recommendation(self, trade_score: float) -> str:
        for threshold, label in self.config.recommendation_thresholds:
            if trade_score >= threshold:
                return label
        return self.config.recommendation_floor

    def get_score_grade(self, trade_score: float) -> str:
        for threshold, grade in self.config.grade_thresholds:
            if trade_score >= threshold:
                return grade
        return self.config.grade_floor

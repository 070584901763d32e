"""
Natural-language justification for a trade suggestion.

Lines are appended in a fixed order (value, their need, our need, tier,
injuries, production) so the explanation always reads the same way. The
lines describe the score's inputs; they carry no weight of their own.
"""

from typing import List, Optional

from ..datamodels.player import Player
from ..datamodels.suggestions import TeamNeed, ValueComparison
from ..valuation.player_value import PlayerValuator


HIGH_NEED = 60
MODERATE_NEED = 40

SIGNIFICANT_UPGRADE_PCT = 15
SLIGHT_UPGRADE_PCT = 5


def _position_label(position) -> str:
    return getattr(position, "value", position) or "?"


class ReasoningGenerator:

    def __init__(self, valuator: Optional[PlayerValuator] = None):
        self.valuator = valuator or PlayerValuator()

    def generate_trade_reasoning(self,
                                 giving_player: Player,
                                 receiving_player: Player,
                                 comparison: ValueComparison,
                                 target_need: TeamNeed,
                                 user_need: TeamNeed) -> List[str]:
        reasons = [self._value_reason(comparison)]

        target_reason = self._need_reason("Target team has {} need at {}",
                                          target_need, giving_player.position)
        if target_reason:
            reasons.append(target_reason)

        user_reason = self._need_reason("You have {} need at {}",
                                        user_need, receiving_player.position)
        if user_reason:
            reasons.append(user_reason)

        giving_tier = self.valuator.get_player_tier(giving_player)
        receiving_tier = self.valuator.get_player_tier(receiving_player)
        if giving_tier != receiving_tier:
            reasons.append(f"Trading {giving_tier.value} for {receiving_tier.value} player")

        if not receiving_player.is_healthy:
            reasons.append(f"⚠️ Target player is {receiving_player.injury_status}")

        if not giving_player.is_healthy:
            reasons.append(f"Your player is currently {giving_player.injury_status}")

        giving_ytd = giving_player.ytd_points or 0.0
        receiving_ytd = receiving_player.ytd_points or 0.0
        if receiving_ytd > giving_ytd:
            reasons.append(f"Target player has more YTD points ({receiving_ytd:.1f} vs {giving_ytd:.1f})")

        if (receiving_player.projected_points or 0.0) > (giving_player.projected_points or 0.0):
            reasons.append("Better ROS projection for target player")

        return reasons

    @staticmethod
    def _value_reason(comparison: ValueComparison) -> str:
        pct = comparison.percent_difference

        if comparison.is_upgrade and pct > SIGNIFICANT_UPGRADE_PCT:
            return f"You'd receive a significantly better player (+{pct:.1f}% value)"
        if comparison.is_upgrade and pct > SLIGHT_UPGRADE_PCT:
            return f"Slight upgrade in player value (+{pct:.1f}%)"
        if comparison.is_fair:
            return "Fair value exchange between players"
        return f"You'd give up more value ({abs(pct):.1f}% difference)"

    @staticmethod
    def _need_reason(template: str, need: TeamNeed, position) -> Optional[str]:
        if need.need_score >= HIGH_NEED:
            return template.format("high", _position_label(position))
        if need.need_score >= MODERATE_NEED:
            return template.format("moderate", _position_label(position))
        return None

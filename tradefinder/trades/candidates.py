"""
Trade candidate discovery on another team's roster.
"""

import logging
from typing import List, Optional

from ..config import TradeConfig
from ..datamodels.player import Player, RosterSlot
from ..datamodels.team import Team


logger = logging.getLogger(__name__)


class CandidateFinder:
    """
    Finds the players a team could send back at a desired position.

    When the team has few players at that position, FLEX-eligible players at
    adjacent positions are offered as well; with enough primary depth they are
    left out so they do not crowd the list.
    """

    def __init__(self, config: Optional[TradeConfig] = None):
        self.config = config or TradeConfig()

    def get_flex_alternatives(self, position) -> List[str]:
        return list(self.config.flex_alternates.get(position, [])) if position else []

    def find_trade_candidates(self, team: Team, desired_position) -> List[Player]:
        candidates = [
            p for p in team.roster
            if p.position == desired_position and p.roster_slot != RosterSlot.IR
        ]

        if len(candidates) < self.config.flex_fallback_threshold:
            seen_ids = {c.id for c in candidates}

            for flex_position in self.get_flex_alternatives(desired_position):
                for player in team.roster:
                    if (player.position == flex_position and
                            player.roster_slot != RosterSlot.IR and
                            player.id not in seen_ids):
                        candidates.append(player)
                        seen_ids.add(player.id)

        logger.debug(f"{len(candidates)} candidates on {team.name} for {desired_position}")
        return candidates

"""
Positional need assessment for a team.

Need is a coarse, deterministic urgency scale driven only by how many active
starters and bench players a team carries at a position.
"""

from collections import Counter
from typing import Dict, Optional

from ..datamodels.player import PlayerPosition, RosterSlot
from ..datamodels.suggestions import RosterNeeds, TeamNeed
from ..datamodels.team import Team


DEFAULT_ROSTER_MINIMUMS = {
    "QB": 1,
    "RB": 2,
    "WR": 2,
    "TE": 1,
    "DEF": 1,
    "K": 1,
}


class NeedsAssessor:

    def assess_team_needs(self, team: Team, position) -> TeamNeed:
        """
        Score how badly a team needs a position (10-100, higher = more need).

        IR players do not count toward depth.
        """
        position_players = [
            p for p in team.roster
            if p.position == position and p.roster_slot != RosterSlot.IR
        ]

        starter_count = len([p for p in position_players if p.roster_slot == RosterSlot.STARTER])
        bench_count = len([p for p in position_players if p.roster_slot == RosterSlot.BENCH])

        return TeamNeed(
            position=position.value if isinstance(position, PlayerPosition) else position,
            starters=starter_count,
            bench=bench_count,
            total=len(position_players),
            need_score=self.need_score(starter_count, bench_count),
        )

    @staticmethod
    def need_score(starters: int, bench: int) -> int:
        if starters == 0:
            return 100
        if starters == 1:
            return 80 if bench == 0 else 60
        if starters == 2:
            return 40 if bench == 0 else 20
        # Three or more starters is saturated no matter the depth
        return 10

    def summarize_roster_needs(self, team: Team, roster_size: Optional[int] = None,
                               minimums: Optional[Dict[str, int]] = None) -> RosterNeeds:
        """
        Count every position on a roster and list those below their minimum.

        Ten-man rosters start a third WR, so the WR minimum rises to 3 there.
        """
        if minimums is None:
            minimums = dict(DEFAULT_ROSTER_MINIMUMS)
            if roster_size == 10:
                minimums["WR"] = 3

        counter = Counter(p.position.value for p in team.roster if p.position)
        counts = {position.value: counter.get(position.value, 0) for position in PlayerPosition}

        needs = [position for position, minimum in minimums.items() if counts.get(position, 0) < minimum]
        return RosterNeeds(counts=counts, needs=needs)

"""
Player data model and related enums.

This is the core entity representing NFL players on fantasy rosters.
Designed to be immutable: a trade analysis reads players, never changes them.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PlayerPosition(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    DEF = "DEF"
    K = "K"


class RosterSlot(str, Enum):
    STARTER = "STARTER"
    BENCH = "BENCH"
    IR = "IR"


class InjuryStatus(str, Enum):
    HEALTHY = "Healthy"
    QUESTIONABLE = "Questionable"
    DOUBTFUL = "Doubtful"
    OUT = "Out"
    IR = "IR"


class PlayerTier(str, Enum):
    ELITE = "Elite"
    HIGH_END = "High-End"
    MID_TIER = "Mid-Tier"
    LOW_END = "Low-End"
    BENCH = "Bench/Waiver"

    @property
    def rank(self) -> int:
        tier_ranks = {
            PlayerTier.ELITE: 5,
            PlayerTier.HIGH_END: 4,
            PlayerTier.MID_TIER: 3,
            PlayerTier.LOW_END: 2,
            PlayerTier.BENCH: 1,
        }
        return tier_ranks[self]


@dataclass(frozen=True)
class Player:
    """
    Represents an NFL player as placed on a fantasy roster.

    Points are fantasy points already translated for the league's scoring
    format upstream, so nothing downstream needs to know the format.
    """

    id: str
    name: str
    position: Optional[PlayerPosition]
    nfl_team: Optional[str] = None

    roster_slot: RosterSlot = RosterSlot.BENCH
    injury_status: Optional[str] = None
    injury_notes: Optional[str] = None

    ytd_points: float = 0.0
    projected_points: float = 0.0
    bye_week: int = 0

    def __str__(self) -> str:
        position = self.position.value if self.position else "?"
        return f'{self.name} ({position}, {self.nfl_team})'

    def __repr__(self) -> str:
        return f'Player (id={self.id}, name={self.name}, position={self.position})'

    @property
    def is_healthy(self) -> bool:
        # No status reported counts as healthy
        return not self.injury_status or self.injury_status == InjuryStatus.HEALTHY

    @property
    def is_on_ir(self) -> bool:
        return self.roster_slot == RosterSlot.IR

    @property
    def is_flex_eligible(self) -> bool:
        return self.position in [PlayerPosition.RB, PlayerPosition.WR, PlayerPosition.TE]

    def with_slot(self, roster_slot: RosterSlot) -> 'Player':
        return replace(self, roster_slot=roster_slot)


class PlayerAPI(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: str
    name: str
    position: Optional[PlayerPosition] = None
    nfl_team: Optional[str] = None
    roster_slot: RosterSlot = RosterSlot.BENCH
    injury_status: Optional[str] = None
    injury_notes: Optional[str] = None
    ytd_points: float = Field(0.0, ge=0.0)
    projected_points: float = Field(0.0, ge=0.0)
    bye_week: int = Field(0, ge=0)

    @classmethod
    def from_player(cls, player: Player) -> 'PlayerAPI':
        return cls.model_validate(player)

    def to_player(self) -> Player:
        return Player(
            id=self.id,
            name=self.name,
            position=PlayerPosition(self.position) if self.position else None,
            nfl_team=self.nfl_team,
            roster_slot=RosterSlot(self.roster_slot),
            injury_status=self.injury_status,
            injury_notes=self.injury_notes,
            ytd_points=self.ytd_points,
            projected_points=self.projected_points,
            bye_week=self.bye_week,
        )

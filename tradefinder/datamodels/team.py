"""
Team, roster and league models.

Teams are read-only inside a trade analysis. Rosters only change through the
explicit add / remove / rename operations on LeagueData, which the league
routes call before persisting the league.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .player import Player, PlayerAPI


class TeamNotFoundError(LookupError):
    """Raised when a league operation names a team that does not exist."""
    pass


class ScoringFormat(str, Enum):
    STANDARD = "standard"
    HALF = "half"
    FULL = "full"


@dataclass(frozen=True)
class Team:
    team_id: str
    name: str
    owner_name: Optional[str] = None
    roster: Tuple[Player, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return f'{self.name} ({len(self.roster)} players)'

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.roster:
            if player.id == player_id:
                return player
        return None


class TeamAPI(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    owner_name: Optional[str] = None
    roster: List[PlayerAPI] = Field(default_factory=list)

    @classmethod
    def from_team(cls, team: Team) -> 'TeamAPI':
        return cls(id=team.team_id,
                   name=team.name,
                   owner_name=team.owner_name,
                   roster=[PlayerAPI.from_player(p) for p in team.roster])

    def to_team(self) -> Team:
        return Team(team_id=self.id,
                    name=self.name,
                    owner_name=self.owner_name,
                    roster=tuple(p.to_player() for p in self.roster))


class LeagueSettings(BaseModel):
    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)

    scoring: ScoringFormat = ScoringFormat.HALF
    roster_size: int = Field(9, ge=1, alias="rosterSize")
    team_count: int = Field(12, ge=1, alias="teamCount")


class LeagueData(BaseModel):
    """Everything persisted for one league: its settings and every roster."""

    model_config = ConfigDict(populate_by_name=True)

    league_settings: LeagueSettings = Field(default_factory=LeagueSettings, alias="leagueSettings")
    teams: List[TeamAPI] = Field(default_factory=list)

    @classmethod
    def default(cls, team_count: int = 12) -> 'LeagueData':
        """Empty league served before anything has been saved."""
        return cls(
            league_settings=LeagueSettings(team_count=team_count),
            teams=[TeamAPI(id=str(i + 1), name=f'Team {i + 1}') for i in range(team_count)],
        )

    def get_team(self, team_id: str) -> TeamAPI:
        for team in self.teams:
            if team.id == team_id:
                return team
        raise TeamNotFoundError(f"Team '{team_id}' not found")

    def add_player(self, team_id: str, player: PlayerAPI) -> bool:
        team = self.get_team(team_id)
        if any(p.id == player.id for p in team.roster):
            return False

        team.roster.append(player)
        return True

    def remove_player(self, team_id: str, player_id: str) -> bool:
        team = self.get_team(team_id)
        remaining = [p for p in team.roster if p.id != player_id]
        removed = len(remaining) != len(team.roster)
        team.roster = remaining
        return removed

    def rename_team(self, team_id: str, name: str) -> None:
        self.get_team(team_id).name = name

    def to_teams(self) -> List[Team]:
        return [team.to_team() for team in self.teams]

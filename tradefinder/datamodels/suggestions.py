"""
Trade suggestion models and response structures.

The dataclasses are what the engine produces; the pydantic models are the
shapes the API returns. Suggestions have no identity of their own: they are
built fresh for each analysis and discarded once the caller has them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .player import Player, PlayerAPI, PlayerPosition


@dataclass(frozen=True)
class ValueComparison:
    """Result of valuing player1 (given) against player2 (received)."""

    player1_value: float
    player2_value: float
    difference: float
    percent_difference: float
    is_upgrade: bool
    is_fair: bool


@dataclass(frozen=True)
class TeamNeed:
    position: Optional[str]
    starters: int
    bench: int
    total: int
    need_score: int


@dataclass(frozen=True)
class PositionalRank:
    rank: int
    total: int
    percentile: int


@dataclass(frozen=True)
class RosterNeeds:
    counts: Dict[str, int]
    needs: List[str]


@dataclass(frozen=True)
class TradeSuggestion:
    target_team_id: str
    target_team_name: str
    target_owner: Optional[str]
    target_player: Player

    value_comparison: ValueComparison
    target_team_need: TeamNeed
    user_team_need: TeamNeed

    trade_score: int
    grade: str
    recommendation: str
    reasoning: Tuple[str, ...] = field(default_factory=tuple)


class ValueComparisonAPI(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    player1_value: float
    player2_value: float
    difference: float
    percent_difference: float
    is_upgrade: bool
    is_fair: bool


class TeamNeedAPI(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    position: Optional[str] = None
    starters: int
    bench: int
    total: int
    need_score: int = Field(..., ge=0, le=100)


class TradeSuggestionAPI(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    target_team_id: str
    target_team_name: str
    target_owner: Optional[str] = None
    target_player: PlayerAPI

    value_comparison: ValueComparisonAPI
    target_team_need: TeamNeedAPI
    user_team_need: TeamNeedAPI

    trade_score: int = Field(..., ge=0, le=100, description="Composite trade score")
    grade: str = Field(..., description="Letter grade A-F")
    recommendation: str
    reasoning: List[str] = Field(default_factory=list, description="Ordered justification lines")

    # Display helpers
    display_text: str = ""
    score_grade: str = ""
    value_change: str = ""


class TradeAnalysisRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    user_team_id: str = Field(..., description="Team offering the trade")
    trade_player_id: str = Field(..., description="Player the user is willing to give up")
    desired_position: PlayerPosition = Field(..., description="Position the user wants back")
    max_results: Optional[int] = Field(None, ge=1, le=50, description="Trim the ranked list further")


class TradeAnalysisResponse(BaseModel):
    suggestions: List[TradeSuggestionAPI] = Field(..., description="Suggestions ordered by trade score")
    count: int
    trade_player: PlayerAPI
    desired_position: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def top_suggestion(self) -> Optional[TradeSuggestionAPI]:
        return self.suggestions[0] if self.suggestions else None

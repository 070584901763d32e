"""
Policy configuration for valuation, trade scoring and the player feed.

Every lookup table the engine relies on lives here rather than in module
constants, so a league or season can override any of them by building a
config object with different values. Defaults reproduce the stock policy.
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TierThresholds(BaseModel):
    """Season point totals that open each tier for one position."""

    elite: float
    high: float
    mid: float
    low: float
    bench: float


def _default_position_tiers() -> Dict[str, TierThresholds]:
    return {
        "QB": TierThresholds(elite=300, high=250, mid=200, low=150, bench=100),
        "RB": TierThresholds(elite=250, high=200, mid=150, low=100, bench=50),
        "WR": TierThresholds(elite=250, high=200, mid=150, low=100, bench=50),
        "TE": TierThresholds(elite=200, high=150, mid=100, low=75, bench=40),
        "DEF": TierThresholds(elite=150, high=120, mid=90, low=60, bench=30),
        "K": TierThresholds(elite=130, high=110, mid=90, low=70, bench=40),
    }


class ValuationConfig(BaseModel):
    """Knobs for the player valuation model."""

    weeks_played: int = Field(4, ge=0, description="Weeks already played this season")
    weeks_remaining: int = Field(14, ge=0, description="Weeks left in the fantasy season")

    # Observed performance is weighted above the static projection
    actual_weight: float = Field(0.6, ge=0.0, le=1.0)
    projected_weight: float = Field(0.4, ge=0.0, le=1.0)

    position_tiers: Dict[str, TierThresholds] = Field(default_factory=_default_position_tiers)
    fallback_position: str = "WR"

    scarcity_multipliers: Dict[str, float] = Field(default_factory=lambda: {
        "Elite": 1.3,
        "High-End": 1.15,
        "Mid-Tier": 1.0,
        "Low-End": 0.85,
        "Bench/Waiver": 0.7,
    })

    injury_multipliers: Dict[str, float] = Field(default_factory=lambda: {
        "Healthy": 1.0,
        "Questionable": 0.9,
        "Doubtful": 0.6,
        "Out": 0.3,
        "IR": 0.1,
    })

    fair_trade_threshold: float = Field(10.0, ge=0.0, description="Max |% difference| still considered fair")

    def tiers_for(self, position) -> TierThresholds:
        tiers = self.position_tiers.get(position) if position else None
        return tiers or self.position_tiers[self.fallback_position]


class TradeConfig(BaseModel):
    """Knobs for candidate selection, trade scoring and ranking."""

    flex_alternates: Dict[str, List[str]] = Field(default_factory=lambda: {
        "RB": ["WR", "TE"],
        "WR": ["RB", "TE"],
        "TE": ["WR", "RB"],
        "QB": [],
        "DEF": [],
        "K": [],
    })
    flex_fallback_threshold: int = Field(3, ge=0, description="Primary matches needed before FLEX is skipped")

    base_score: float = 50.0
    upgrade_weight: float = 0.5
    upgrade_cap: float = 30.0
    downgrade_weight: float = 0.3
    downgrade_cap: float = 15.0
    need_weight: float = 0.15

    position_premium: Dict[str, float] = Field(default_factory=lambda: {
        "RB": 5,
        "WR": 4,
        "TE": 3,
        "QB": 2,
        "DEF": 1,
        "K": 0,
    })
    injury_penalty: float = 10.0
    tier_bonus: float = 10.0

    max_suggestions: int = Field(20, ge=0)

    # Ordered highest first; the first threshold a score clears wins
    recommendation_thresholds: List[Tuple[int, str]] = Field(default_factory=lambda: [
        (80, "Highly Recommended"),
        (65, "Recommended"),
        (50, "Fair Trade"),
        (35, "Consider Carefully"),
    ])
    recommendation_floor: str = "Not Recommended"

    grade_thresholds: List[Tuple[int, str]] = Field(default_factory=lambda: [
        (80, "A"),
        (70, "B"),
        (60, "C"),
        (50, "D"),
    ])
    grade_floor: str = "F"


def _default_bye_weeks() -> Dict[str, int]:
    return {
        "ARI": 11, "ATL": 12, "BAL": 14, "BUF": 12, "CAR": 11,
        "CHI": 7, "CIN": 12, "CLE": 10, "DAL": 7, "DEN": 14,
        "DET": 5, "GB": 10, "HOU": 14, "IND": 14, "JAX": 11,
        "KC": 10, "LAC": 5, "LAR": 6, "LV": 10, "MIA": 6,
        "MIN": 6, "NE": 14, "NO": 12, "NYG": 11, "NYJ": 12,
        "PHI": 7, "PIT": 9, "SEA": 10, "SF": 9, "TB": 11,
        "TEN": 5, "WAS": 14,
    }


class FeedConfig(BaseModel):
    """Season data used when normalizing the upstream player feed."""

    season: str = "2025"
    bye_weeks: Dict[str, int] = Field(default_factory=_default_bye_weeks)

    # (min, max) season points used when a player has no stat line
    baseline_ranges: Dict[str, Tuple[float, float]] = Field(default_factory=lambda: {
        "QB": (180, 370),
        "RB": (80, 290),
        "WR": (70, 270),
        "TE": (50, 196),
        "DEF": (60, 118),
        "K": (60, 105),
    })
    # RB/WR/TE projections are scaled by these per format
    ppr_multipliers: Dict[str, float] = Field(default_factory=lambda: {
        "standard": 1.0,
        "half": 1.15,
        "full": 1.30,
    })
    reception_points: Dict[str, float] = Field(default_factory=lambda: {
        "standard": 0.0,
        "half": 0.5,
        "full": 1.0,
    })

    def bye_week(self, nfl_team) -> int:
        return self.bye_weeks.get(nfl_team, 0) if nfl_team else 0


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRADEFINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    title: str = "Fantasy Trade Finder"
    description: str = "Trade suggestions for fantasy football leagues"
    version: str = "1.0.0"
    debug: bool = False
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8080"]
    log_level: str = "INFO"

    redis_url: str = ""
    league_key: str = "nfl_trade_league_data"
    players_cache_ttl: float = 3600.0

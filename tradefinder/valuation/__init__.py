from .player_value import PlayerValuator
from .projections import (
    ProjectionModel, SeededTierProjector, StatLineProjector, TableProjector, score_stat_line
)

__all__ = [
    "PlayerValuator",
    "ProjectionModel",
    "SeededTierProjector",
    "StatLineProjector",
    "TableProjector",
    "score_stat_line"
]

"""
Trade analysis pipeline.

Runs every stage for each other team in the league and returns the best
suggestions first. This is the entry point the API calls.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from ..config import TradeConfig, ValuationConfig
from ..datamodels.player import Player
from ..datamodels.suggestions import TradeSuggestion, TradeSuggestionAPI
from ..datamodels.team import Team
from ..valuation.player_value import PlayerValuator
from .candidates import CandidateFinder
from .needs import NeedsAssessor
from .reasoning import ReasoningGenerator
from .scoring import TradeScorer


logger = logging.getLogger(__name__)


class TradeAnalyzer:
    """
    Finds and ranks trade targets across a league.

    The pipeline for each other team:
    1. Find candidates at the desired position (with FLEX fallback)
    2. Compare each candidate's value with the player offered
    3. Assess both teams' needs
    4. Score, grade and explain the match
    Suggestions from all teams are then ranked by score and truncated.

    Every stage is a pure function of its inputs, so teams can be evaluated in
    a thread pool; results are still gathered in team order, which keeps the
    ranking identical to a sequential run.
    """

    def __init__(self,
                 valuation_config: Optional[ValuationConfig] = None,
                 trade_config: Optional[TradeConfig] = None,
                 max_workers: int = 1):
        self.trade_config = trade_config or TradeConfig()
        self.valuator = PlayerValuator(valuation_config)
        self.needs_assessor = NeedsAssessor()
        self.candidate_finder = CandidateFinder(self.trade_config)
        self.scorer = TradeScorer(self.valuator, self.trade_config)
        self.reasoning = ReasoningGenerator(self.valuator)
        self.max_workers = max_workers

    def analyze_trades(self,
                       user_team: Team,
                       other_teams: Sequence[Team],
                       trade_player: Optional[Player],
                       desired_position) -> List[TradeSuggestion]:
        """
        Rank the best trade targets for a player the user wants to move.

        Args:
            user_team: Team offering the trade
            other_teams: Every potential trade partner
            trade_player: Player the user is willing to give up; None yields no suggestions
            desired_position: Position the user wants in return

        Returns:
            At most ``max_suggestions`` suggestions, highest score first.
            Equal scores keep team/candidate order.
        """
        if not other_teams or trade_player is None:
            return []

        def evaluate(team: Team) -> List[TradeSuggestion]:
            return [
                self.analyze_trade_match(user_team, team, trade_player, candidate)
                for candidate in self.candidate_finder.find_trade_candidates(team, desired_position)
            ]

        if self.max_workers > 1 and len(other_teams) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                per_team = list(pool.map(evaluate, other_teams))
        else:
            per_team = [evaluate(team) for team in other_teams]

        all_suggestions = [s for team_suggestions in per_team for s in team_suggestions]

        # sorted() is stable: ties keep enumeration order
        ranked = sorted(all_suggestions, key=lambda s: s.trade_score, reverse=True)

        logger.info(f"Scored {len(all_suggestions)} trade candidates across {len(other_teams)} teams "
                    f"for {trade_player.name}")
        return ranked[:self.trade_config.max_suggestions]

    def analyze_trade_match(self,
                            user_team: Team,
                            target_team: Team,
                            giving_player: Player,
                            receiving_player: Player) -> TradeSuggestion:
        comparison = self.valuator.compare_player_values(giving_player, receiving_player)

        # Does the partner need what we offer, and do we need what they offer?
        target_need = self.needs_assessor.assess_team_needs(target_team, giving_player.position)
        user_need = self.needs_assessor.assess_team_needs(user_team, receiving_player.position)

        trade_score = self.scorer.calculate_trade_score(
            comparison, target_need, user_need, giving_player, receiving_player
        )

        reasoning = self.reasoning.generate_trade_reasoning(
            giving_player, receiving_player, comparison, target_need, user_need
        )

        return TradeSuggestion(
            target_team_id=target_team.team_id,
            target_team_name=target_team.name,
            target_owner=target_team.owner_name,
            target_player=receiving_player,
            value_comparison=comparison,
            target_team_need=target_need,
            user_team_need=user_need,
            trade_score=trade_score,
            grade=self.scorer.get_score_grade(trade_score),
            recommendation=self.scorer.get_trade_recommendation(trade_score),
            reasoning=tuple(reasoning),
        )


def format_trade_suggestion(suggestion: TradeSuggestion) -> TradeSuggestionAPI:
    """Attach the display fields the trade results view shows."""
    formatted = TradeSuggestionAPI.model_validate(suggestion)

    player = suggestion.target_player
    position = player.position.value if player.position else "?"
    difference = suggestion.value_comparison.difference

    formatted.display_text = f"{suggestion.target_team_name}: {player.name} ({position} - {player.nfl_team})"
    formatted.score_grade = suggestion.grade
    formatted.value_change = f"+{difference}" if difference > 0 else f"{difference}"
    return formatted

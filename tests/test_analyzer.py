import pytest

from tradefinder.config import TradeConfig
from tradefinder.datamodels.player import RosterSlot
from tradefinder.trades.analyzer import TradeAnalyzer, format_trade_suggestion

from tests.builders import make_player, make_team


@pytest.fixture
def user_team(qb_200):
    return make_team("1", qb_200, make_player("u-rb", "RB", ytd=50, proj=150), name="My Team")


def league_of_quarterbacks(count):
    """One team per QB, each QB a little better than the last."""
    return [
        make_team(str(i + 2), make_player(f"qb{i}", "QB", ytd=60 + 2 * i, proj=110 + 3 * i, slot=RosterSlot.BENCH))
        for i in range(count)
    ]


class TestAnalyzeTrades:

    def test_single_upgrade_at_needed_position(self, analyzer, user_team, qb_200, qb_210):
        target = make_team("2", qb_210, name="Rivals", owner="Sam")

        suggestions = analyzer.analyze_trades(user_team, [target], qb_200, "QB")

        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion.target_team_id == "2"
        assert suggestion.target_team_name == "Rivals"
        assert suggestion.target_owner == "Sam"
        assert suggestion.target_player == qb_210
        assert suggestion.target_team_need.need_score == 100
        assert suggestion.user_team_need.need_score == 80
        # 50 + 2.5 + 15 + 12 + 2 + 10
        assert suggestion.trade_score == 92
        assert suggestion.recommendation == "Highly Recommended"
        assert suggestion.grade == "A"
        assert suggestion.reasoning == (
            "Fair value exchange between players",
            "Target team has high need at QB",
            "You have high need at QB",
            "Target player has more YTD points (84.0 vs 80.0)",
            "Better ROS projection for target player",
        )

    def test_no_other_teams(self, analyzer, user_team, qb_200):
        assert analyzer.analyze_trades(user_team, [], qb_200, "QB") == []

    def test_missing_trade_player(self, analyzer, user_team):
        teams = league_of_quarterbacks(3)
        assert analyzer.analyze_trades(user_team, teams, None, "QB") == []

    def test_no_candidates_anywhere(self, analyzer, user_team, qb_200):
        teams = [make_team("2", make_player("rb", "RB")), make_team("3")]
        assert analyzer.analyze_trades(user_team, teams, qb_200, "K") == []

    def test_ranked_by_score_and_truncated(self, analyzer, user_team, qb_200):
        teams = league_of_quarterbacks(30)

        suggestions = analyzer.analyze_trades(user_team, teams, qb_200, "QB")

        assert len(suggestions) == 20
        scores = [s.trade_score for s in suggestions]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= score <= 100 for score in scores)

    def test_truncation_keeps_the_best(self, analyzer, user_team, qb_200):
        teams = league_of_quarterbacks(30)

        everything = TradeAnalyzer(trade_config=TradeConfig(max_suggestions=100)).analyze_trades(
            user_team, teams, qb_200, "QB")
        top = analyzer.analyze_trades(user_team, teams, qb_200, "QB")

        assert len(everything) == 30
        assert top == everything[:20]

    def test_ties_keep_team_order(self, analyzer, user_team, qb_200):
        teams = [make_team(str(i), make_player(f"twin{i}", "QB", ytd=84, proj=126)) for i in range(2, 7)]

        suggestions = analyzer.analyze_trades(user_team, teams, qb_200, "QB")

        assert len({s.trade_score for s in suggestions}) == 1
        assert [s.target_team_id for s in suggestions] == ["2", "3", "4", "5", "6"]

    def test_candidates_keep_roster_order_within_team(self, analyzer, user_team, qb_200):
        target = make_team("2",
                           make_player("wr1", "WR", ytd=40, proj=140),
                           make_player("wr2", "WR", ytd=40, proj=140),
                           make_player("te1", "TE", ytd=40, proj=140))

        suggestions = analyzer.analyze_trades(user_team, [target], qb_200, "WR")

        # WR candidates tie; the TE comes in through FLEX
        assert {s.target_player.id for s in suggestions} == {"wr1", "wr2", "te1"}
        wr_ids = [s.target_player.id for s in suggestions if s.target_player.id.startswith("wr")]
        assert wr_ids == ["wr1", "wr2"]

    def test_injured_reserve_never_suggested(self, analyzer, user_team, qb_200):
        target = make_team("2", make_player("ir-qb", "QB", ytd=100, proj=200, slot=RosterSlot.IR))
        assert analyzer.analyze_trades(user_team, [target], qb_200, "QB") == []

    def test_parallel_run_matches_sequential(self, user_team, qb_200):
        teams = league_of_quarterbacks(12)
        teams.append(make_team("flex", make_player("rb", "RB", ytd=70, proj=150), make_player("te", "TE", ytd=30)))

        sequential = TradeAnalyzer().analyze_trades(user_team, teams, qb_200, "QB")
        parallel = TradeAnalyzer(max_workers=4).analyze_trades(user_team, teams, qb_200, "QB")

        assert parallel == sequential

    def test_inputs_are_not_modified(self, analyzer, user_team, qb_200):
        teams = league_of_quarterbacks(3)
        before = [team.roster for team in teams]

        analyzer.analyze_trades(user_team, teams, qb_200, "QB")

        assert [team.roster for team in teams] == before


class TestFormatTradeSuggestion:

    def test_display_fields(self, analyzer, user_team, qb_200, qb_210):
        target = make_team("2", qb_210, name="Rivals")
        suggestion = analyzer.analyze_trades(user_team, [target], qb_200, "QB")[0]

        formatted = format_trade_suggestion(suggestion)

        assert formatted.display_text == "Rivals: Target Quarterback (QB - KC)"
        assert formatted.score_grade == "A"
        assert formatted.value_change == "+10.0"
        assert formatted.trade_score == 92
        assert formatted.target_player.id == "qb210"
        assert formatted.reasoning == list(suggestion.reasoning)

    def test_value_change_for_downgrade(self, analyzer, qb_200, qb_210):
        user_team = make_team("1", qb_210)
        target = make_team("2", qb_200, name="Rivals")

        suggestion = analyzer.analyze_trade_match(user_team, target, qb_210, qb_200)

        assert format_trade_suggestion(suggestion).value_change == "-10.0"

    def test_value_change_for_even_swap(self, analyzer, qb_200):
        twin = make_player("twin", "QB", ytd=80, proj=120)
        suggestion = analyzer.analyze_trade_match(make_team("1", qb_200), make_team("2", twin), qb_200, twin)

        assert format_trade_suggestion(suggestion).value_change == "0.0"

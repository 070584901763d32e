import pytest

from tradefinder.config import TradeConfig
from tradefinder.datamodels.suggestions import TeamNeed, ValueComparison
from tradefinder.trades.scoring import TradeScorer

from tests.builders import make_player


def need(score, position="QB"):
    return TeamNeed(position=position, starters=0, bench=0, total=0, need_score=score)


def comparison(percent, upgrade=None):
    upgrade = percent > 0 if upgrade is None else upgrade
    return ValueComparison(
        player1_value=100.0,
        player2_value=100.0 + percent,
        difference=percent,
        percent_difference=percent,
        is_upgrade=upgrade,
        is_fair=abs(percent) <= 10,
    )


@pytest.fixture
def scorer(valuator):
    return TradeScorer(valuator)


ELITE_RB = make_player("rb", "RB", ytd=100, proj=280)
EMPTY_K = make_player("k", "K")


class TestCalculateTradeScore:

    def test_clamped_at_one_hundred(self, scorer, qb_200):
        # 50 + 30 + 15 + 15 + 5 + 10 = 125
        score = scorer.calculate_trade_score(comparison(300), need(100), need(100), qb_200, ELITE_RB)
        assert score == 100

    def test_clamped_at_zero(self, valuator):
        scorer = TradeScorer(valuator, TradeConfig(base_score=0))
        injured_k = make_player("k", "K", injury="Out")

        score = scorer.calculate_trade_score(comparison(-80), need(10), need(10), ELITE_RB, injured_k)
        assert score == 0

    def test_worst_case_with_default_policy(self, scorer):
        injured_k = make_player("k", "K", injury="Out")

        # 50 - 15 + 1.5 + 1.5 + 0 - 10
        score = scorer.calculate_trade_score(comparison(-80), need(10), need(10), ELITE_RB, injured_k)
        assert score == 28

    def test_upgrade_and_downgrade_are_capped(self, scorer):
        big_gain = scorer.calculate_trade_score(comparison(500), need(0), need(0), EMPTY_K, EMPTY_K)
        cap_gain = scorer.calculate_trade_score(comparison(60), need(0), need(0), EMPTY_K, EMPTY_K)
        big_loss = scorer.calculate_trade_score(comparison(-500), need(0), need(0), EMPTY_K, EMPTY_K)
        cap_loss = scorer.calculate_trade_score(comparison(-50), need(0), need(0), EMPTY_K, EMPTY_K)

        assert big_gain == cap_gain == 90
        assert big_loss == cap_loss == 45

    def test_half_points_round_up(self, scorer):
        # 50 + 2.5 + 10 = 62.5
        assert scorer.calculate_trade_score(comparison(5), need(0), need(0), EMPTY_K, EMPTY_K) == 63

    def test_needs_add_to_score(self, scorer):
        low = scorer.calculate_trade_score(comparison(0), need(0), need(0), EMPTY_K, EMPTY_K)
        high = scorer.calculate_trade_score(comparison(0), need(100), need(80), EMPTY_K, EMPTY_K)

        assert high - low == 27

    def test_injured_target_costs_ten_points(self, scorer):
        giving = make_player("zero", "QB")
        healthy = make_player("qb", "QB", ytd=80, proj=120)
        hurt = make_player("qb", "QB", ytd=80, proj=120, injury="Out")
        flat = comparison(0, upgrade=True)

        # Both receiving players are at least the giving player's tier
        assert scorer.calculate_trade_score(flat, need(40), need(40), giving, healthy) == 74
        assert scorer.calculate_trade_score(flat, need(40), need(40), giving, hurt) == 64

    def test_questionable_counts_as_injured(self, scorer):
        giving = make_player("zero", "QB")
        questionable = make_player("qb", "QB", ytd=80, proj=120, injury="Questionable")

        assert scorer.calculate_trade_score(comparison(0), need(40), need(40), giving, questionable) == 64

    def test_tier_bonus_only_when_not_dropping_a_tier(self, scorer, qb_200, qb_210):
        empty_qb = make_player("qb0", "QB")

        same_tier = scorer.calculate_trade_score(comparison(0), need(0), need(0), qb_210, qb_200)
        lower_tier = scorer.calculate_trade_score(comparison(0), need(0), need(0), qb_210, empty_qb)

        assert same_tier == 62
        assert lower_tier == 52

    @pytest.mark.parametrize("position,premium", [
        ("RB", 5), ("WR", 4), ("TE", 3), ("QB", 2), ("DEF", 1), ("K", 0), (None, 0),
    ])
    def test_position_premium(self, scorer, position, premium):
        assert scorer.position_premium(make_player("p", position).position) == premium

    def test_score_always_in_range(self, scorer, qb_200):
        receivers = [ELITE_RB, EMPTY_K, make_player("hurt", "WR", ytd=10, proj=20, injury="IR"), qb_200]
        for percent in (-1000, -40, -5, 0, 5, 40, 1000):
            for score_need in (10, 60, 100):
                for receiving in receivers:
                    score = scorer.calculate_trade_score(
                        comparison(percent), need(score_need), need(score_need), qb_200, receiving
                    )
                    assert 0 <= score <= 100
                    assert isinstance(score, int)


class TestLabels:

    @pytest.mark.parametrize("score,label", [
        (100, "Highly Recommended"),
        (80, "Highly Recommended"),
        (79, "Recommended"),
        (65, "Recommended"),
        (64, "Fair Trade"),
        (50, "Fair Trade"),
        (49, "Consider Carefully"),
        (35, "Consider Carefully"),
        (34, "Not Recommended"),
        (0, "Not Recommended"),
    ])
    def test_recommendation(self, scorer, score, label):
        assert scorer.get_trade_recommendation(score) == label

    @pytest.mark.parametrize("score,grade", [
        (100, "A"), (80, "A"),
        (79, "B"), (70, "B"),
        (69, "C"), (60, "C"),
        (59, "D"), (50, "D"),
        (49, "F"), (0, "F"),
    ])
    def test_grade(self, scorer, score, grade):
        assert scorer.get_score_grade(score) == grade

    def test_every_score_gets_exactly_one_label(self, scorer):
        labels = {"Highly Recommended", "Recommended", "Fair Trade", "Consider Carefully", "Not Recommended"}
        for score in range(0, 101):
            assert scorer.get_trade_recommendation(score) in labels
            assert scorer.get_score_grade(score) in "ABCDF"

    def test_custom_thresholds(self, valuator):
        config = TradeConfig(grade_thresholds=[(90, "A")], grade_floor="Z")
        scorer = TradeScorer(valuator, config)

        assert scorer.get_score_grade(95) == "A"
        assert scorer.get_score_grade(85) == "Z"

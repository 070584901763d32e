import pytest

from tradefinder.datamodels.player import RosterSlot
from tradefinder.trades.analyzer import TradeAnalyzer
from tradefinder.valuation.player_value import PlayerValuator

from tests.builders import make_player


@pytest.fixture
def valuator():
    return PlayerValuator()


@pytest.fixture
def analyzer():
    return TradeAnalyzer()


@pytest.fixture
def qb_200():
    return make_player("qb200", "QB", ytd=80, proj=120, name="Giving Quarterback")


@pytest.fixture
def qb_210():
    return make_player("qb210", "QB", ytd=84, proj=126, slot=RosterSlot.BENCH, name="Target Quarterback")

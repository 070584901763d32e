import asyncio

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from tradefinder.datamodels.player import PlayerAPI
from tradefinder.datamodels.team import LeagueData, LeagueSettings, TeamNotFoundError
from tradefinder.external.league_store import InMemoryLeagueStore, LeagueStoreError, RedisLeagueStore


def player(player_id, position="WR"):
    return PlayerAPI(id=player_id, name=f"Player {player_id}", position=position, nfl_team="KC")


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the league store."""

    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail
        self.closed = False

    def _check(self):
        if self.fail:
            raise RedisConnectionError("connection refused")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def set(self, key, value):
        self._check()
        self.data[key] = value
        return True

    async def delete(self, key):
        self._check()
        return 1 if self.data.pop(key, None) is not None else 0

    async def ping(self):
        self._check()
        return True

    async def aclose(self):
        self.closed = True


class TestLeagueData:

    def test_default_league(self):
        league = LeagueData.default()

        assert len(league.teams) == 12
        assert [t.id for t in league.teams[:3]] == ["1", "2", "3"]
        assert league.teams[11].name == "Team 12"
        assert all(t.roster == [] for t in league.teams)
        assert league.league_settings.scoring == "half"

    def test_add_player_rejects_duplicates(self):
        league = LeagueData.default()

        assert league.add_player("3", player("p1"))
        assert not league.add_player("3", player("p1"))
        assert [p.id for p in league.get_team("3").roster] == ["p1"]

    def test_remove_player(self):
        league = LeagueData.default()
        league.add_player("1", player("p1"))
        league.add_player("1", player("p2"))

        assert league.remove_player("1", "p1")
        assert not league.remove_player("1", "p1")
        assert [p.id for p in league.get_team("1").roster] == ["p2"]

    def test_rename_team(self):
        league = LeagueData.default()
        league.rename_team("5", "Gridiron Gang")

        assert league.get_team("5").name == "Gridiron Gang"

    def test_unknown_team(self):
        league = LeagueData.default()

        with pytest.raises(TeamNotFoundError):
            league.get_team("99")
        with pytest.raises(TeamNotFoundError):
            league.add_player("99", player("p1"))

    def test_settings_accept_camel_case(self):
        settings = LeagueSettings.model_validate({"scoring": "full", "rosterSize": 10, "teamCount": 10})

        assert settings.roster_size == 10
        assert settings.team_count == 10
        assert settings.scoring == "full"

    def test_camel_case_document_keeps_its_settings(self):
        document = {
            "leagueSettings": {"scoring": "full", "rosterSize": 10, "teamCount": 10},
            "teams": [{"id": "1", "name": "Team 1", "roster": []}],
        }

        league = LeagueData.model_validate(document)

        assert league.league_settings.scoring == "full"
        assert league.league_settings.roster_size == 10
        assert league.league_settings.team_count == 10
        assert league.model_dump(by_alias=True)["leagueSettings"] == document["leagueSettings"]

    def test_snake_case_names_still_accepted(self):
        league = LeagueData.model_validate({"league_settings": {"scoring": "standard", "roster_size": 8}})

        assert league.league_settings.scoring == "standard"
        assert league.league_settings.roster_size == 8

    def test_to_teams(self):
        league = LeagueData.default(team_count=2)
        league.add_player("2", player("p1", "TE"))

        teams = league.to_teams()

        assert [t.team_id for t in teams] == ["1", "2"]
        assert teams[1].roster[0].position == "TE"
        assert teams[1].get_player("p1").name == "Player p1"
        assert teams[0].get_player("p1") is None


class TestInMemoryLeagueStore:

    def test_empty_until_saved(self):
        store = InMemoryLeagueStore()

        async def scenario():
            before = await store.get()
            await store.save(LeagueData.default(team_count=4))
            after = await store.get()
            await store.clear()
            cleared = await store.get()
            return before, after, cleared

        before, after, cleared = asyncio.run(scenario())

        assert before is None
        assert len(after.teams) == 4
        assert cleared is None

    def test_returned_league_is_a_copy(self):
        store = InMemoryLeagueStore(LeagueData.default())

        async def scenario():
            league = await store.get()
            league.add_player("1", player("p1"))
            return await store.get()

        assert asyncio.run(scenario()).get_team("1").roster == []

    def test_ping(self):
        assert asyncio.run(InMemoryLeagueStore().ping())


class TestRedisLeagueStore:

    def test_round_trip(self):
        client = FakeRedis()
        store = RedisLeagueStore(client, key="league")
        league = LeagueData.default(team_count=3)
        league.add_player("2", player("p9", "RB"))

        async def scenario():
            await store.save(league)
            return await store.get()

        loaded = asyncio.run(scenario())

        assert loaded == league
        assert '"leagueSettings"' in client.data["league"]

    def test_reads_camel_case_document(self):
        client = FakeRedis()
        client.data["nfl_trade_league_data"] = (
            '{"leagueSettings": {"scoring": "full", "rosterSize": 10, "teamCount": 2}, "teams": []}'
        )

        league = asyncio.run(RedisLeagueStore(client).get())

        assert league.league_settings.scoring == "full"
        assert league.league_settings.team_count == 2

    def test_missing_key(self):
        assert asyncio.run(RedisLeagueStore(FakeRedis()).get()) is None

    def test_clear(self):
        client = FakeRedis()
        client.data["nfl_trade_league_data"] = LeagueData.default().model_dump_json()

        asyncio.run(RedisLeagueStore(client).clear())

        assert client.data == {}

    @pytest.mark.parametrize("operation", ["get", "save", "clear"])
    def test_redis_errors_become_store_errors(self, operation):
        store = RedisLeagueStore(FakeRedis(fail=True))
        args = (LeagueData.default(),) if operation == "save" else ()

        with pytest.raises(LeagueStoreError):
            asyncio.run(getattr(store, operation)(*args))

    def test_malformed_document(self):
        client = FakeRedis()
        client.data["nfl_trade_league_data"] = '{"teams": "not a list"}'

        with pytest.raises(LeagueStoreError):
            asyncio.run(RedisLeagueStore(client).get())

    def test_ping(self):
        assert asyncio.run(RedisLeagueStore(FakeRedis()).ping())
        assert not asyncio.run(RedisLeagueStore(FakeRedis(fail=True)).ping())

    def test_close(self):
        client = FakeRedis()
        asyncio.run(RedisLeagueStore(client).close())

        assert client.closed

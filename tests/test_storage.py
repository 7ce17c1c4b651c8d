# tests/test_storage.py

import asyncio
import json
from datetime import UTC, datetime, timedelta

import pytest

from core.models.errors import StorageError
from core.models.player import PlayerRegistration
from server.services.storage import PlayerStore


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 12, 0, tzinfo=UTC))


@pytest.fixture
def clocked_store(settings, clock) -> PlayerStore:
    return PlayerStore(settings.storage_path, clock=clock)


class TestPlayerStore:
    """Persistence of the Discord user -> PUBG player mapping."""

    @pytest.mark.asyncio
    async def test_fresh_registration(self, clocked_store):
        await clocked_store.save(
            "u1", PlayerRegistration(player_id="p1", player_name="Alice", clan_id=None)
        )

        record = await clocked_store.get("u1")
        assert record is not None
        assert record.player_id == "p1"
        assert record.player_name == "Alice"
        assert record.clan_id is None
        assert record.saved_at == record.updated_at

    @pytest.mark.asyncio
    async def test_re_registration_keeps_saved_at(self, clocked_store, clock):
        await clocked_store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice"))
        first = await clocked_store.get("u1")

        clock.advance(minutes=5)
        await clocked_store.save(
            "u1", PlayerRegistration(player_id="p1", player_name="Alice2", clan_id="c9")
        )
        second = await clocked_store.get("u1")

        assert second.player_name == "Alice2"
        assert second.clan_id == "c9"
        assert second.saved_at == first.saved_at
        assert second.updated_at > first.updated_at

    @pytest.mark.asyncio
    async def test_second_save_replaces_content(self, clocked_store):
        await clocked_store.save(
            "u1", PlayerRegistration(player_id="p1", player_name="Alice", clan_id="c1")
        )
        await clocked_store.save("u1", PlayerRegistration(player_id="p2", player_name="Bob"))

        record = await clocked_store.get("u1")
        assert record.player_id == "p2"
        assert record.player_name == "Bob"
        assert record.clan_id is None

    @pytest.mark.asyncio
    async def test_updated_at_never_precedes_saved_at(self, clocked_store, clock):
        await clocked_store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice"))
        clock.advance(hours=-1)
        await clocked_store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice"))

        record = await clocked_store.get("u1")
        assert record.saved_at <= record.updated_at

    @pytest.mark.asyncio
    async def test_empty_clan_id_is_stored_as_none(self, store):
        await store.save("u1", PlayerRegistration(player_id="p1", player_name="A", clan_id=""))
        record = await store.get("u1")
        assert record.clan_id is None

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, store):
        assert await store.get("nobody") is None

    @pytest.mark.asyncio
    async def test_delete_existing(self, store):
        await store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice"))

        assert await store.delete("u1") is True
        assert await store.get("u1") is None
        assert await store.has_registered("u1") is False

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, store, settings):
        await store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice"))
        before = settings.storage_path.read_text(encoding="utf-8")

        assert await store.delete("u2") is False
        assert settings.storage_path.read_text(encoding="utf-8") == before

    @pytest.mark.asyncio
    async def test_stats_are_consistent(self, store):
        assert (await store.stats()).total_users == 0

        await store.save("u1", PlayerRegistration(player_id="p1", player_name="A", clan_id="c1"))
        await store.save("u2", PlayerRegistration(player_id="p2", player_name="B"))
        await store.save("u3", PlayerRegistration(player_id="p3", player_name="C", clan_id="c1"))
        await store.delete("u3")

        stats = await store.stats()
        records = await store.get_all()
        assert stats.total_users == len(records) == 2
        assert stats.users_with_clans == 1
        assert stats.users_without_clans == 1
        assert stats.total_users == stats.users_with_clans + stats.users_without_clans
        assert stats.db_file_path == str(store.path)

    @pytest.mark.asyncio
    async def test_document_layout(self, clocked_store, settings):
        await clocked_store.save(
            "u1", PlayerRegistration(player_id="p1", player_name="Alice", clan_id="c9")
        )

        document = json.loads(settings.storage_path.read_text(encoding="utf-8"))
        assert set(document) == {"u1"}
        assert document["u1"]["playerId"] == "p1"
        assert document["u1"]["playerName"] == "Alice"
        assert document["u1"]["clanId"] == "c9"
        assert document["u1"]["savedAt"].startswith("2026-10-19T12:00:00")
        assert "updatedAt" in document["u1"]

    @pytest.mark.asyncio
    async def test_creates_data_directory(self, store, settings):
        assert not settings.storage_path.parent.exists()
        await store.get_all()
        assert settings.storage_path.parent.is_dir()

    @pytest.mark.asyncio
    async def test_reads_existing_document(self, settings):
        settings.storage_path.parent.mkdir(parents=True)
        settings.storage_path.write_text(
            json.dumps(
                {
                    "42": {
                        "playerId": "account.abc",
                        "playerName": "Existing",
                        "clanId": None,
                        "savedAt": "2025-01-01T00:00:00.000Z",
                        "updatedAt": "2025-02-01T00:00:00.000Z",
                    }
                }
            ),
            encoding="utf-8",
        )

        record = await PlayerStore(settings.storage_path).get("42")
        assert record.player_name == "Existing"
        assert record.saved_at < record.updated_at

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", ""])
    async def test_malformed_document_reads_as_empty(self, settings, content):
        settings.storage_path.parent.mkdir(parents=True)
        settings.storage_path.write_text(content, encoding="utf-8")
        store = PlayerStore(settings.storage_path)

        assert await store.get_all() == {}

        await store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice"))
        document = json.loads(settings.storage_path.read_text(encoding="utf-8"))
        assert list(document) == ["u1"]

    @pytest.mark.asyncio
    async def test_write_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file where the data directory should be")
        store = PlayerStore(blocker / "users.json")

        with pytest.raises(StorageError):
            await store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice"))

    @pytest.mark.asyncio
    async def test_concurrent_saves_are_not_lost(self, store):
        await asyncio.gather(
            *(
                store.save(f"u{i}", PlayerRegistration(player_id=f"p{i}", player_name=f"N{i}"))
                for i in range(20)
            )
        )

        records = await store.get_all()
        assert len(records) == 20
        assert records["u7"].player_id == "p7"

    @pytest.mark.asyncio
    async def test_unreadable_entries_survive_other_writes(self, settings):
        unreadable = {"playerId": 12345, "playerName": "Legacy", "savedAt": None}
        settings.storage_path.parent.mkdir(parents=True)
        settings.storage_path.write_text(json.dumps({"42": unreadable}), encoding="utf-8")
        store = PlayerStore(settings.storage_path)

        assert await store.get("42") is None
        assert (await store.stats()).total_users == 0

        await store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice"))
        await store.delete("u1")

        document = json.loads(settings.storage_path.read_text(encoding="utf-8"))
        assert document == {"42": unreadable}

    @pytest.mark.asyncio
    async def test_timestamps_without_offset_are_utc(self, settings, clock):
        settings.storage_path.parent.mkdir(parents=True)
        settings.storage_path.write_text(
            json.dumps(
                {
                    "u1": {
                        "playerId": "p1",
                        "playerName": "Alice",
                        "clanId": None,
                        "savedAt": "2025-01-01T00:00:00",
                        "updatedAt": "2025-01-02T00:00:00",
                    }
                }
            ),
            encoding="utf-8",
        )
        store = PlayerStore(settings.storage_path, clock=clock)

        record = await store.get("u1")
        assert record.saved_at == datetime(2025, 1, 1, tzinfo=UTC)

        await store.save("u1", PlayerRegistration(player_id="p1", player_name="Alice2"))

        record = await store.get("u1")
        assert record.player_name == "Alice2"
        assert record.saved_at == datetime(2025, 1, 1, tzinfo=UTC)
        assert record.updated_at == clock.now

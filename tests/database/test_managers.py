"""Tests for footy_arena/database — table managers against the fake store."""

import uuid

import pytest

from footy_arena.database.models import (
    PlayerStatus,
    Room,
    RoomSettings,
    RoomStatus,
    Visibility,
)
from footy_arena.database.profiles import ProfileManager
from footy_arena.database.room_players import RoomPlayerManager
from footy_arena.database.rooms import RoomManager


@pytest.fixture
def rooms(fake_db) -> RoomManager:
    return RoomManager(fake_db)


@pytest.fixture
def players(fake_db) -> RoomPlayerManager:
    return RoomPlayerManager(fake_db)


@pytest.fixture
def room(rooms) -> Room:
    return rooms.create("AB3XQZ", str(uuid.uuid4()), "who_am_i", RoomSettings(max_players=4))


class TestRoomManager:
    def test_create_defaults(self, room):
        assert room.status == RoomStatus.WAITING
        assert room.is_locked is False
        assert room.visibility == Visibility.PRIVATE
        assert room.settings.max_players == 4

    def test_get_by_code_case_insensitive(self, rooms, room):
        assert rooms.get_by_code("ab3xqz").id == room.id
        assert rooms.get_by_code("ZZZZZZ") is None

    def test_duplicate_code_first_match_wins(self, rooms, room):
        rooms.create("AB3XQZ", str(uuid.uuid4()), "who_am_i", RoomSettings())
        assert rooms.get_by_code("AB3XQZ").id == room.id

    def test_update_status_with_lock(self, rooms, room):
        updated = rooms.update_status(str(room.id), RoomStatus.PLAYING, lock=True)
        assert updated.status == RoomStatus.PLAYING
        assert updated.is_locked

    def test_set_host(self, rooms, room):
        new_host = str(uuid.uuid4())
        assert str(rooms.set_host(str(room.id), new_host).host_id) == new_host

    def test_get_by_id(self, rooms, room):
        assert rooms.get_by_id(str(room.id)).room_code == "AB3XQZ"
        assert rooms.get_by_id(str(uuid.uuid4())) is None


class TestRoomPlayerManager:
    def test_upsert_inserts_then_updates(self, fake_db, players, room):
        pid = str(uuid.uuid4())
        players.upsert(str(room.id), pid, join_order=1)
        updated = players.upsert(str(room.id), pid, join_order=5)

        assert updated.join_order == 5
        assert players.count_in_room(str(room.id)) == 1

    def test_upsert_declares_membership_key(self, fake_db, players, room):
        players.upsert(str(room.id), str(uuid.uuid4()), join_order=1)
        # A second player in the same room is a new row
        players.upsert(str(room.id), str(uuid.uuid4()), join_order=2)
        assert players.count_in_room(str(room.id)) == 2

    def test_upsert_resets_status(self, fake_db, players, room):
        pid = str(uuid.uuid4())
        players.add(str(room.id), pid, join_order=1)
        fake_db.tables["room_players"][0]["status"] = "disconnected"

        row = players.upsert(str(room.id), pid, join_order=2)
        assert row.status == PlayerStatus.CONNECTED

    def test_list_ordered_by_join_order(self, players, room):
        for order in (3, 1, 2):
            players.add(str(room.id), str(uuid.uuid4()), join_order=order)
        assert [p.join_order for p in players.list_by_room(str(room.id))] == [1, 2, 3]

    def test_remove_and_get(self, players, room):
        pid = str(uuid.uuid4())
        players.add(str(room.id), pid, join_order=1)
        assert players.get(str(room.id), pid) is not None

        players.remove(str(room.id), pid)
        assert players.get(str(room.id), pid) is None
        assert players.count_in_room(str(room.id)) == 0


class TestProfileManager:
    def test_create_and_lookup(self, fake_db):
        profiles = ProfileManager(fake_db)
        uid = str(uuid.uuid4())
        profiles.create(uid, "Foden_47", "#3b82f6")

        assert profiles.get(uid).username == "Foden_47"
        assert str(profiles.get_by_username("Foden_47").id) == uid
        assert profiles.get_by_username("nobody") is None

    def test_list_by_ids(self, fake_db):
        profiles = ProfileManager(fake_db)
        a = fake_db.add_profile("alpha")
        b = fake_db.add_profile("bravo")
        fake_db.add_profile("charlie")

        found = profiles.list_by_ids([a, b])
        assert {p.username for p in found.values()} == {"alpha", "bravo"}
        assert profiles.list_by_ids([]) == {}

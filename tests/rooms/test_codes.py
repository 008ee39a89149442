"""Tests for footy_arena/rooms/codes.py — room code generation."""

from unittest.mock import patch

from footy_arena.rooms.codes import (
    ROOM_CODE_ALPHABET,
    ROOM_CODE_LENGTH,
    generate_room_code,
    normalize_room_code,
)


class TestAlphabet:
    def test_exact_alphabet(self):
        assert ROOM_CODE_ALPHABET == "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"

    def test_thirty_two_unique_symbols(self):
        assert len(ROOM_CODE_ALPHABET) == 32
        assert len(set(ROOM_CODE_ALPHABET)) == 32

    def test_no_ambiguous_characters(self):
        for c in "0O1I":
            assert c not in ROOM_CODE_ALPHABET


class TestGenerateRoomCode:
    def test_length_and_symbols(self):
        for _ in range(500):
            code = generate_room_code()
            assert len(code) == ROOM_CODE_LENGTH
            assert set(code) <= set(ROOM_CODE_ALPHABET)

    def test_custom_length(self):
        assert len(generate_room_code(8)) == 8

    def test_independent_draws_from_alphabet(self):
        with patch("footy_arena.rooms.codes.secrets.choice", side_effect=list("AB3XQZ")) as choice:
            assert generate_room_code() == "AB3XQZ"
        assert choice.call_count == 6
        for call in choice.call_args_list:
            assert call.args[0] == ROOM_CODE_ALPHABET

    def test_all_symbols_reachable(self):
        seen = set()
        for _ in range(400):
            seen.update(generate_room_code())
        assert seen == set(ROOM_CODE_ALPHABET)


class TestNormalizeRoomCode:
    def test_trims_and_uppercases(self):
        assert normalize_room_code("  ab3xqz\n") == "AB3XQZ"

    def test_already_normal(self):
        assert normalize_room_code("AB3XQZ") == "AB3XQZ"

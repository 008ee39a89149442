"""
Footy Arena - Room Player Manager

CRUD operations for the `room_players` table.
"""

from supabase import Client

from footy_arena.database.models import PlayerStatus, RoomPlayer

# Declared uniqueness key used for rejoin upserts
MEMBERSHIP_KEY = "room_id,player_id"


class RoomPlayerManager:
    """Manages room membership rows in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("room_players")

    def add(self, room_id: str, player_id: str, join_order: int) -> RoomPlayer:
        """Insert a brand-new membership row."""
        data = (
            self.table
            .insert({
                "room_id": room_id,
                "player_id": player_id,
                "join_order": join_order,
            })
            .execute()
        )
        return RoomPlayer.model_validate(data.data[0])

    def upsert(
        self,
        room_id: str,
        player_id: str,
        join_order: int,
        status: PlayerStatus = PlayerStatus.CONNECTED,
    ) -> RoomPlayer:
        """Join or rejoin: insert, or update the existing (room, player) row."""
        data = (
            self.table
            .upsert(
                {
                    "room_id": room_id,
                    "player_id": player_id,
                    "join_order": join_order,
                    "status": status.value,
                },
                on_conflict=MEMBERSHIP_KEY,
            )
            .execute()
        )
        return RoomPlayer.model_validate(data.data[0])

    def get(self, room_id: str, player_id: str) -> RoomPlayer | None:
        data = (
            self.table
            .select("*")
            .eq("room_id", room_id)
            .eq("player_id", player_id)
            .execute()
        )
        if data.data:
            return RoomPlayer.model_validate(data.data[0])
        return None

    def list_by_room(self, room_id: str) -> list[RoomPlayer]:
        """Get all members of a room, ordered by arrival."""
        data = (
            self.table
            .select("id, room_id, player_id, join_order, status, score, joined_at")
            .eq("room_id", room_id)
            .order("join_order")
            .execute()
        )
        return [RoomPlayer.model_validate(row) for row in data.data]

    def count_in_room(self, room_id: str) -> int:
        """Exact count of members currently in a room."""
        data = (
            self.table
            .select("id", count="exact")
            .eq("room_id", room_id)
            .execute()
        )
        return data.count or 0

    def remove(self, room_id: str, player_id: str) -> None:
        """Delete a membership row (kick or leave)."""
        (
            self.table
            .delete()
            .eq("room_id", room_id)
            .eq("player_id", player_id)
            .execute()
        )

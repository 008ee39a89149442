"""
Footy Arena - Room Manager

CRUD operations for the `rooms` table.
"""

from supabase import Client

from footy_arena.database.models import Room, RoomSettings, RoomStatus, Visibility


class RoomManager:
    """Manages room rows in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("rooms")

    def create(
        self,
        room_code: str,
        host_id: str,
        game_type: str,
        settings: RoomSettings,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> Room:
        """Insert a new room in the waiting state."""
        data = (
            self.table
            .insert({
                "room_code": room_code,
                "host_id": host_id,
                "game_type": game_type,
                "settings": settings.model_dump(),
                "visibility": visibility.value,
                "status": RoomStatus.WAITING.value,
                "is_locked": False,
            })
            .execute()
        )
        return Room.model_validate(data.data[0])

    def get_by_code(self, room_code: str) -> Room | None:
        """Look up a room by its join code.

        Codes are not guaranteed unique; the first match wins.
        """
        data = (
            self.table
            .select("*")
            .eq("room_code", room_code.upper())
            .limit(1)
            .execute()
        )
        if data.data:
            return Room.model_validate(data.data[0])
        return None

    def get_by_id(self, room_id: str) -> Room | None:
        data = (
            self.table
            .select("*")
            .eq("id", room_id)
            .execute()
        )
        if data.data:
            return Room.model_validate(data.data[0])
        return None

    def update(self, room_id: str, **fields) -> Room:
        """Update arbitrary columns on a room row."""
        data = (
            self.table
            .update(fields)
            .eq("id", room_id)
            .execute()
        )
        return Room.model_validate(data.data[0])

    def set_locked(self, room_id: str, is_locked: bool) -> Room:
        return self.update(room_id, is_locked=is_locked)

    def set_host(self, room_id: str, host_id: str) -> Room:
        return self.update(room_id, host_id=host_id)

    def update_status(self, room_id: str, status: RoomStatus, *, lock: bool | None = None) -> Room:
        """Update room status, optionally setting the lock flag in the same write."""
        fields: dict = {"status": status.value}
        if lock is not None:
            fields["is_locked"] = lock
        return self.update(room_id, **fields)

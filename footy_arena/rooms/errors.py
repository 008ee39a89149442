"""
Footy Arena - Domain Exceptions

Every failure surfaced to a player derives from ``FootyArenaError``. The
second level groups errors by kind so the UI can treat a whole family the
same way; the leaves name the concrete situation.
"""


class FootyArenaError(Exception):
    """Base class for all Footy Arena errors."""

    #: Short, player-facing message. Subclasses override.
    message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


# ============ Categories ============

class NotFoundError(FootyArenaError):
    """A referenced room, member or profile does not exist."""

    message = "Not found"


class ConflictError(FootyArenaError):
    """A uniqueness constraint was violated."""

    message = "Already exists"


class CapacityExceededError(FootyArenaError):
    """A room has no free seats."""

    message = "Capacity exceeded"


class PermissionDeniedError(FootyArenaError):
    """The action is not allowed in the current room state."""

    message = "Permission denied"


class ValidationError(FootyArenaError):
    """Malformed user input."""

    message = "Invalid input"


class InsufficientStateError(FootyArenaError):
    """The room is not in a state that allows the action."""

    message = "Room is not ready"


class StoreError(FootyArenaError):
    """The backing service rejected or failed a request."""

    message = "Backend request failed"


# ============ Rooms ============

class RoomNotFound(NotFoundError):
    """No room matches the given code."""

    def __init__(self, room_code: str) -> None:
        self.room_code = room_code
        super().__init__("Room not found")


class NotAMember(NotFoundError):
    """The target player is not in the room."""

    def __init__(self, room_id: str, player_id: str) -> None:
        self.room_id = room_id
        self.player_id = player_id
        super().__init__("That player is not in this room")


class RoomLocked(PermissionDeniedError):
    message = "Room is locked"


class RoomFull(CapacityExceededError):
    """The room already holds ``max_players`` members."""

    def __init__(self, current: int, max_players: int) -> None:
        self.current = current
        self.max_players = max_players
        super().__init__("Room is full")


class InsufficientPlayers(InsufficientStateError):
    """Fewer than the minimum number of players to start."""

    def __init__(self, current: int, required: int) -> None:
        self.current = current
        self.required = required
        super().__init__(f"Need at least {required} players to start")


class RoomCreateError(StoreError):
    message = "Failed to create room"


class JoinError(StoreError):
    message = "Failed to join room"


# ============ Identity ============

class UsernameTaken(ConflictError):
    message = "Username is already taken"


class InvalidUsername(ValidationError):
    message = "Username must be 3-16 characters: letters, numbers, or underscore."


class AuthenticationError(StoreError):
    message = "Sign-in failed"


# ============ Room input ============

class InvalidGameType(ValidationError):
    """Unknown game type identifier."""

    def __init__(self, game_type: str) -> None:
        self.game_type = game_type
        super().__init__(f"Unknown game type: {game_type}")


class InvalidRoomSettings(ValidationError):
    message = "Room settings must be positive whole numbers"


class RoomNotWaiting(InsufficientStateError):
    """The room has already left the lobby."""

    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"Room is already {status}")

"""
Footy Arena - Room Codes

Short, human-readable join codes.
"""

import secrets
import string

ROOM_CODE_LENGTH = 6

# 32 symbols: no 0/O or 1/I
ROOM_CODE_ALPHABET = (
    string.ascii_uppercase.replace("O", "").replace("I", "")
    + string.digits.replace("0", "").replace("1", "")
)


def generate_room_code(length: int = ROOM_CODE_LENGTH) -> str:
    """Generate a room code from uniform, independent draws.

    No uniqueness check is made against existing rooms.
    """
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def normalize_room_code(raw: str) -> str:
    """Trim and uppercase a user-typed code."""
    return raw.strip().upper()

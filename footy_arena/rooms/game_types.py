"""
Footy Arena - Game Type Catalog

Static table of the available game modes and their display metadata.
"""

from dataclasses import dataclass
from enum import Enum

from footy_arena.rooms.errors import InvalidGameType


class GameType(Enum):
    """Available game modes."""
    PENALTY_SHOOTOUT = "penalty_shootout"
    QUICKFIRE_DUEL = "quickfire_duel"
    WHO_AM_I = "who_am_i"
    CAREER_PATH = "career_path"
    LAST_MAN_STANDING = "last_man_standing"
    HIGHER_OR_LOWER = "higher_or_lower"
    YOU_ARE_THE_REF = "you_are_the_ref"
    FOOTBALL_WORD_GAME = "football_word_game"


@dataclass(frozen=True)
class GameTypeInfo:
    """
    Display metadata for a game mode.

    Attributes:
        game_type: The mode identifier
        name: Title shown in the UI
        description: One-line pitch
        icon: Emoji shown next to the name
        party_mode: Free-for-all turn structure instead of opposing sides
    """
    game_type: GameType
    name: str
    description: str
    icon: str
    party_mode: bool = False

    @property
    def id(self) -> str:
        return self.game_type.value


GAME_TYPES: tuple[GameTypeInfo, ...] = (
    GameTypeInfo(
        GameType.PENALTY_SHOOTOUT,
        "Penalty Shootout Quiz",
        "Multiple choice questions - score goals with correct answers!",
        "⚽",
    ),
    GameTypeInfo(
        GameType.QUICKFIRE_DUEL,
        "Quickfire Duel",
        "Type your answer fast - first correct wins double points!",
        "⚡",
    ),
    GameTypeInfo(
        GameType.WHO_AM_I,
        "Who Am I?",
        "One player gives clues, others guess the footballer!",
        "🎭",
        party_mode=True,
    ),
    GameTypeInfo(
        GameType.CAREER_PATH,
        "Career Path Challenge",
        "Clues revealed one by one - buzz in to guess the player!",
        "🛤️",
    ),
    GameTypeInfo(
        GameType.LAST_MAN_STANDING,
        "Last Man Standing",
        "Take turns naming answers - last player standing wins!",
        "🏆",
    ),
    GameTypeInfo(
        GameType.HIGHER_OR_LOWER,
        "Higher or Lower",
        "Compare stats - is it higher or lower?",
        "📊",
    ),
    GameTypeInfo(
        GameType.YOU_ARE_THE_REF,
        "You Are The Ref",
        "Make the right call on tricky scenarios!",
        "🟨",
    ),
    GameTypeInfo(
        GameType.FOOTBALL_WORD_GAME,
        "Football Word Game",
        "Wordle-style - guess the footballer in 5 tries!",
        "🔤",
        party_mode=True,
    ),
)

_BY_ID: dict[str, GameTypeInfo] = {info.id: info for info in GAME_TYPES}


def get_game_type(game_type: str | GameType) -> GameTypeInfo:
    """Look up catalog metadata, raising InvalidGameType for unknown ids."""
    key = game_type.value if isinstance(game_type, GameType) else game_type
    try:
        return _BY_ID[key]
    except KeyError:
        raise InvalidGameType(str(key)) from None

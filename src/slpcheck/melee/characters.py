from __future__ import annotations

from enum import IntEnum
from typing import Final

from .codes import UnknownCode, lookup


class Character(IntEnum):
    """Character select screen ids, as stored in the game start player blocks."""

    CAPTAIN_FALCON = 0
    DONKEY_KONG = 1
    FOX = 2
    GAME_AND_WATCH = 3
    KIRBY = 4
    BOWSER = 5
    LINK = 6
    LUIGI = 7
    MARIO = 8
    MARTH = 9
    MEWTWO = 10
    NESS = 11
    PEACH = 12
    PIKACHU = 13
    ICE_CLIMBERS = 14
    JIGGLYPUFF = 15
    SAMUS = 16
    YOSHI = 17
    ZELDA = 18
    SHEIK = 19
    FALCO = 20
    YOUNG_LINK = 21
    DR_MARIO = 22
    ROY = 23
    PICHU = 24
    GANONDORF = 25
    MASTER_HAND = 26
    WIREFRAME_MALE = 27
    WIREFRAME_FEMALE = 28
    GIGA_BOWSER = 29
    CRAZY_HAND = 30
    SANDBAG = 31
    POPO = 32


class InternalCharacter(IntEnum):
    """In-engine character ids, as stored in post-frame records."""

    MARIO = 0
    FOX = 1
    CAPTAIN_FALCON = 2
    DONKEY_KONG = 3
    KIRBY = 4
    BOWSER = 5
    LINK = 6
    SHEIK = 7
    NESS = 8
    PEACH = 9
    POPO = 10
    NANA = 11
    PIKACHU = 12
    SAMUS = 13
    YOSHI = 14
    JIGGLYPUFF = 15
    MEWTWO = 16
    LUIGI = 17
    MARTH = 18
    ZELDA = 19
    YOUNG_LINK = 20
    DR_MARIO = 21
    FALCO = 22
    PICHU = 23
    GAME_AND_WATCH = 24
    GANONDORF = 25
    ROY = 26
    MASTER_HAND = 27
    CRAZY_HAND = 28
    WIREFRAME_MALE = 29
    WIREFRAME_FEMALE = 30
    GIGA_BOWSER = 31
    SANDBAG = 32


# The only character that brings a second controllable unit (Nana) along.
COMPANION_CHARACTER: Final[Character] = Character.ICE_CLIMBERS
COMPANION_INTERNAL: Final[InternalCharacter] = InternalCharacter.NANA

# Zelda can transform mid-match, after which her pre-frame states belong to Sheik's table.
ALTERNATE_FORMS: Final[dict[Character, Character]] = {
    Character.ZELDA: Character.SHEIK,
}

NON_TOURNAMENT_CHARACTERS: Final[frozenset[Character]] = frozenset(
    {
        Character.MASTER_HAND,
        Character.CRAZY_HAND,
        Character.GIGA_BOWSER,
        Character.WIREFRAME_MALE,
        Character.WIREFRAME_FEMALE,
        Character.SANDBAG,
    }
)

_CSS_TO_INTERNAL: Final[dict[Character, InternalCharacter]] = {
    Character.CAPTAIN_FALCON: InternalCharacter.CAPTAIN_FALCON,
    Character.DONKEY_KONG: InternalCharacter.DONKEY_KONG,
    Character.FOX: InternalCharacter.FOX,
    Character.GAME_AND_WATCH: InternalCharacter.GAME_AND_WATCH,
    Character.KIRBY: InternalCharacter.KIRBY,
    Character.BOWSER: InternalCharacter.BOWSER,
    Character.LINK: InternalCharacter.LINK,
    Character.LUIGI: InternalCharacter.LUIGI,
    Character.MARIO: InternalCharacter.MARIO,
    Character.MARTH: InternalCharacter.MARTH,
    Character.MEWTWO: InternalCharacter.MEWTWO,
    Character.NESS: InternalCharacter.NESS,
    Character.PEACH: InternalCharacter.PEACH,
    Character.PIKACHU: InternalCharacter.PIKACHU,
    Character.ICE_CLIMBERS: InternalCharacter.POPO,
    Character.JIGGLYPUFF: InternalCharacter.JIGGLYPUFF,
    Character.SAMUS: InternalCharacter.SAMUS,
    Character.YOSHI: InternalCharacter.YOSHI,
    Character.ZELDA: InternalCharacter.ZELDA,
    Character.SHEIK: InternalCharacter.SHEIK,
    Character.FALCO: InternalCharacter.FALCO,
    Character.YOUNG_LINK: InternalCharacter.YOUNG_LINK,
    Character.DR_MARIO: InternalCharacter.DR_MARIO,
    Character.ROY: InternalCharacter.ROY,
    Character.PICHU: InternalCharacter.PICHU,
    Character.GANONDORF: InternalCharacter.GANONDORF,
    Character.MASTER_HAND: InternalCharacter.MASTER_HAND,
    Character.WIREFRAME_MALE: InternalCharacter.WIREFRAME_MALE,
    Character.WIREFRAME_FEMALE: InternalCharacter.WIREFRAME_FEMALE,
    Character.GIGA_BOWSER: InternalCharacter.GIGA_BOWSER,
    Character.CRAZY_HAND: InternalCharacter.CRAZY_HAND,
    Character.SANDBAG: InternalCharacter.SANDBAG,
    Character.POPO: InternalCharacter.POPO,
}


def character_from_css(value: int) -> Character | UnknownCode:
    return lookup(Character, value, kind="character")


def character_from_internal(value: int) -> InternalCharacter | UnknownCode:
    return lookup(InternalCharacter, value, kind="internal character")


def to_internal(character: Character | UnknownCode) -> InternalCharacter | UnknownCode:
    if isinstance(character, UnknownCode):
        return character
    return _CSS_TO_INTERNAL[character]

from __future__ import annotations

from enum import IntEnum

from .codes import UnknownCode, lookup


class Attack(IntEnum):
    """Ids written to the post-frame "last attack landed" field."""

    NONE = 0
    NON_STALING = 1
    JAB_1 = 2
    JAB_2 = 3
    JAB_3 = 4
    RAPID_JABS = 5
    DASH_ATTACK = 6
    SIDE_TILT = 7
    UP_TILT = 8
    DOWN_TILT = 9
    SIDE_SMASH = 10
    UP_SMASH = 11
    DOWN_SMASH = 12
    NAIR = 13
    FAIR = 14
    BAIR = 15
    UAIR = 16
    DAIR = 17
    NEUTRAL_SPECIAL = 18
    SIDE_SPECIAL = 19
    UP_SPECIAL = 20
    DOWN_SPECIAL = 21
    KIRBY_HAT_MARIO = 22
    KIRBY_HAT_FOX = 23
    KIRBY_HAT_CAPTAIN_FALCON = 24
    KIRBY_HAT_DONKEY_KONG = 25
    KIRBY_HAT_BOWSER = 26
    KIRBY_HAT_LINK = 27
    KIRBY_HAT_SHEIK = 28
    KIRBY_HAT_NESS = 29
    KIRBY_HAT_PEACH = 30
    KIRBY_HAT_ICE_CLIMBERS = 31
    KIRBY_HAT_PIKACHU = 32
    KIRBY_HAT_SAMUS = 33
    KIRBY_HAT_YOSHI = 34
    KIRBY_HAT_JIGGLYPUFF = 35
    KIRBY_HAT_MEWTWO = 36
    KIRBY_HAT_LUIGI = 37
    KIRBY_HAT_MARTH = 38
    KIRBY_HAT_ZELDA = 39
    KIRBY_HAT_YOUNG_LINK = 40
    KIRBY_HAT_DR_MARIO = 41
    KIRBY_HAT_FALCO = 42
    KIRBY_HAT_PICHU = 43
    KIRBY_HAT_GAME_AND_WATCH = 44
    KIRBY_HAT_GANONDORF = 45
    KIRBY_HAT_ROY = 46
    GETUP_ATTACK_BACK = 50
    GETUP_ATTACK_FRONT = 51
    PUMMEL = 52
    FORWARD_THROW = 53
    BACK_THROW = 54
    UP_THROW = 55
    DOWN_THROW = 56
    CARGO_FORWARD_THROW = 57
    CARGO_BACK_THROW = 58
    CARGO_UP_THROW = 59
    CARGO_DOWN_THROW = 60
    LEDGE_ATTACK_SLOW = 61
    LEDGE_ATTACK = 62
    BEAM_SWORD_JAB = 63
    BEAM_SWORD_TILT = 64
    BEAM_SWORD_SMASH = 65
    BEAM_SWORD_DASH = 66
    HOME_RUN_BAT_JAB = 67
    HOME_RUN_BAT_TILT = 68
    HOME_RUN_BAT_SMASH = 69
    HOME_RUN_BAT_DASH = 70
    PARASOL_JAB = 71
    PARASOL_TILT = 72
    PARASOL_SMASH = 73
    PARASOL_DASH = 74
    FAN_JAB = 75
    FAN_TILT = 76
    FAN_SMASH = 77
    FAN_DASH = 78
    STAR_ROD_JAB = 79
    STAR_ROD_TILT = 80
    STAR_ROD_SMASH = 81
    STAR_ROD_DASH = 82
    LIP_STICK_JAB = 83
    LIP_STICK_TILT = 84
    LIP_STICK_SMASH = 85
    LIP_STICK_DASH = 86
    OPEN_PARASOL = 87
    RAY_GUN_SHOOT = 88
    FIRE_FLOWER_SHOOT = 89
    SCREW_ATTACK = 90
    SUPER_SCOPE_RAPID = 91
    SUPER_SCOPE_CHARGED = 92
    HAMMER = 93


def attack_from_id(value: int) -> Attack | UnknownCode:
    return lookup(Attack, value, kind="attack")

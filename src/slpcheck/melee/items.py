from __future__ import annotations

from enum import IntEnum

from .codes import UnknownCode, lookup


class Item(IntEnum):
    """Item and projectile type ids carried by item-frame records."""

    CAPSULE = 0x00
    BOX = 0x01
    BARREL = 0x02
    EGG = 0x03
    PARTY_BALL = 0x04
    BARREL_CANNON = 0x05
    BOB_OMB = 0x06
    MR_SATURN = 0x07
    HEART_CONTAINER = 0x08
    MAXIM_TOMATO = 0x09
    STARMAN = 0x0A
    HOME_RUN_BAT = 0x0B
    BEAM_SWORD = 0x0C
    PARASOL = 0x0D
    GREEN_SHELL = 0x0E
    RED_SHELL = 0x0F
    RAY_GUN = 0x10
    FREEZIE = 0x11
    FOOD = 0x12
    PROXIMITY_MINE = 0x13
    FLIPPER = 0x14
    SUPER_SCOPE = 0x15
    STAR_ROD = 0x16
    LIPS_STICK = 0x17
    FAN = 0x18
    FIRE_FLOWER = 0x19
    SUPER_MUSHROOM = 0x1A
    POISON_MUSHROOM = 0x1B
    HAMMER = 0x1C
    WARP_STAR = 0x1D
    SCREW_ATTACK = 0x1E
    BUNNY_HOOD = 0x1F
    METAL_BOX = 0x20
    CLOAKING_DEVICE = 0x21
    POKE_BALL = 0x22
    RAY_GUN_RECOIL_EFFECT = 0x23
    STAR_ROD_STAR = 0x24
    LIPS_STICK_DUST = 0x25
    SUPER_SCOPE_BEAM = 0x26
    RAY_GUN_BEAM = 0x27
    HAMMER_HEAD = 0x28
    FLOWER = 0x29
    YOSHIS_EGG_EVENT = 0x2A
    GOOMBA = 0x2B
    REDEAD = 0x2C
    OCTAROK = 0x2D
    OTTOSEA = 0x2E
    STONE = 0x2F
    MARIO_FIRE = 0x30
    DR_MARIO_CAPSULE = 0x31
    KIRBY_CUTTER_BEAM = 0x32
    KIRBY_HAMMER = 0x33
    LASER_GUN_PULL = 0x34
    FOX_LASER = 0x35
    FALCO_LASER = 0x36
    FOX_SHADOW = 0x37
    FALCO_SHADOW = 0x38
    LINK_BOMB = 0x39
    YOUNG_LINK_BOMB = 0x3A
    LINK_BOOMERANG = 0x3B
    YOUNG_LINK_BOOMERANG = 0x3C
    LINK_HOOKSHOT = 0x3D
    YOUNG_LINK_HOOKSHOT = 0x3E
    LINK_ARROW = 0x3F
    YOUNG_LINK_FIRE_ARROW = 0x40
    NESS_PK_FIRE = 0x41
    NESS_PK_FLASH_1 = 0x42
    NESS_PK_FLASH_2 = 0x43
    NESS_PK_THUNDER = 0x44
    NESS_PK_THUNDER_1 = 0x45
    NESS_PK_THUNDER_2 = 0x46
    NESS_PK_THUNDER_3 = 0x47
    NESS_PK_THUNDER_4 = 0x48
    FOX_BLASTER = 0x49
    FALCO_BLASTER = 0x4A
    LINK_BOW = 0x4B
    YOUNG_LINK_BOW = 0x4C
    NESS_PK_FLASH_EXPLOSION = 0x4D
    SHEIK_NEEDLE_THROWN = 0x4E
    SHEIK_NEEDLE = 0x4F
    PIKACHU_THUNDER = 0x50
    PICHU_THUNDER = 0x51
    MARIO_CAPE = 0x52
    DR_MARIO_CAPE = 0x53
    SHEIK_SMOKE = 0x54
    YOSHI_EGG_THROWN = 0x55
    YOSHI_TONGUE = 0x56
    YOSHI_STAR = 0x57
    PIKACHU_THUNDER_JOLT_1 = 0x58
    PIKACHU_THUNDER_JOLT_2 = 0x59
    PICHU_THUNDER_JOLT_1 = 0x5A
    PICHU_THUNDER_JOLT_2 = 0x5B
    SAMUS_BOMB = 0x5C
    SAMUS_CHARGESHOT = 0x5D
    SAMUS_MISSILE = 0x5E
    SAMUS_GRAPPLE_BEAM = 0x5F
    SHEIK_CHAIN = 0x60
    PEACH_TURNIP = 0x63
    BOWSER_FLAME = 0x64
    NESS_BAT = 0x65
    NESS_YOYO = 0x66
    PEACH_PARASOL = 0x67
    PEACH_TOAD = 0x68
    LUIGI_FIRE = 0x69
    ICE_CLIMBERS_ICE = 0x6A
    ICE_CLIMBERS_BLIZZARD = 0x6B
    ZELDA_FIRE = 0x6C
    ZELDA_FIRE_EXPLOSION = 0x6D
    TOAD_SPORE = 0x6F
    MEWTWO_SHADOW_BALL = 0x70
    ICE_CLIMBERS_UP_B = 0x71
    GAME_AND_WATCH_PESTICIDE = 0x72
    GAME_AND_WATCH_MANHOLE = 0x73
    GAME_AND_WATCH_FIRE = 0x74
    GAME_AND_WATCH_PARACHUTE = 0x75
    GAME_AND_WATCH_TURTLE = 0x76
    GAME_AND_WATCH_SPERKY = 0x77
    GAME_AND_WATCH_JUDGE = 0x78
    GAME_AND_WATCH_SAUSAGE = 0x7A
    MILK_CUP = 0x7B
    GAME_AND_WATCH_PARACHUTE_2 = 0x7C
    GAME_AND_WATCH_TURTLE_2 = 0x7D
    NESS_PK_STARSTORM = 0x7E
    MASTER_HAND_LASER = 0x7F
    MASTER_HAND_BULLET = 0x80
    CRAZY_HAND_LASER = 0x81
    CRAZY_HAND_BULLET = 0x82
    CRAZY_HAND_BOMB = 0x83
    KIRBY_COPY_MARIO_FIRE = 0x84
    KIRBY_COPY_DR_MARIO_CAPSULE = 0x85
    KIRBY_COPY_LUIGI_FIRE = 0x86
    KIRBY_COPY_ICE_CLIMBERS_ICE = 0x87
    KIRBY_COPY_PEACH_TOAD = 0x88
    KIRBY_COPY_TOAD_SPORE = 0x89
    KIRBY_COPY_SAMUS_CHARGESHOT = 0x8A
    KIRBY_COPY_FOX_LASER = 0x8B
    KIRBY_COPY_FALCO_LASER = 0x8C
    KIRBY_COPY_LINK_ARROW = 0x8D
    KIRBY_COPY_YOUNG_LINK_FIRE_ARROW = 0x8E
    KIRBY_COPY_NESS_PK_FLASH = 0x8F
    KIRBY_COPY_PIKACHU_THUNDER = 0x90
    KIRBY_COPY_PICHU_THUNDER = 0x91
    KIRBY_COPY_SHEIK_NEEDLE = 0x92
    KIRBY_COPY_MEWTWO_SHADOW_BALL = 0x93
    KIRBY_COPY_GAME_AND_WATCH_SAUSAGE = 0x94
    KIRBY_COPY_ZELDA_FIRE = 0x95
    KIRBY_COPY_YOSHI_EGG = 0x96
    KIRBY_COPY_BOWSER_FLAME = 0x97
    KIRBY_COPY_ROY_FLAME = 0x98
    KIRBY_COPY_MARTH_SHIELD_BREAKER = 0x99
    TARGET = 0xD0
    SHY_GUY = 0xD1
    KOOPA_TROOPA = 0xD2
    KOOPA_TROOPA_RED = 0xD3
    LIKE_LIKE = 0xD4
    WHITE_BEAR = 0xD6
    KLAP_TRAP = 0xD7
    GREEN_SHELL_2 = 0xD8
    SAMUS_BOMB_EFFECT = 0xDD
    ARWING_LASER = 0xDE
    GREAT_FOX_LASER = 0xDF
    BIRDO_EGG = 0xE0


def item_from_id(value: int) -> Item | UnknownCode:
    return lookup(Item, value, kind="item")

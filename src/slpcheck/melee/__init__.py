from __future__ import annotations

from .attacks import Attack, attack_from_id
from .characters import (
    ALTERNATE_FORMS,
    COMPANION_CHARACTER,
    COMPANION_INTERNAL,
    Character,
    InternalCharacter,
    character_from_css,
    character_from_internal,
    to_internal,
)
from .codes import UnknownCode, code_label, lookup
from .geom import Position, StickPos, Vec2, Velocity
from .items import Item, item_from_id
from .stages import Stage, stage_from_id
from .states import ActionState, CharacterState, State, resolve_action_state

__all__ = [
    "ALTERNATE_FORMS",
    "COMPANION_CHARACTER",
    "COMPANION_INTERNAL",
    "ActionState",
    "Attack",
    "Character",
    "CharacterState",
    "InternalCharacter",
    "Item",
    "Position",
    "Stage",
    "State",
    "StickPos",
    "UnknownCode",
    "Vec2",
    "Velocity",
    "attack_from_id",
    "character_from_css",
    "character_from_internal",
    "code_label",
    "item_from_id",
    "lookup",
    "resolve_action_state",
    "stage_from_id",
    "to_internal",
]

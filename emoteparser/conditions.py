"""Known conditions and dynamic texts derived from log message calls.

The game's markup calls functions and tags that read the current player and
the message participants. Rather than evaluating those calls directly, each
known call shape is mapped onto a named Condition or DynamicText, so a
message can be reduced once and answered later for any participants.

The tables below are closed: a shape missing from them is an error, never a
guess.
"""

import logging
from enum import Enum
from typing import Dict, Union

from .errors import ConditionError, DynamicTextError
from .nodes import FuncName, Function, IfParam, Obj, Tag, TagName

logger = logging.getLogger(__name__)


class Condition(Enum):
    """Boolean facts about the participants. Only valid as an If condition."""

    # Equal(ObjectParameter(1),ObjectParameter(2))
    IS_SELF_ORIGIN = "is_self_origin"
    # Equal(ObjectParameter(1),ObjectParameter(3))
    IS_SELF_TARGET = "is_self_target"
    # <Sheet(BNpcName,PlayerParameter(7),6)/>
    IS_ORIGIN_FEMALE = "is_origin_female"
    # PlayerParameter(5), seemingly used when the origin is not a player
    IS_ORIGIN_FEMALE_DEFAULT = "is_origin_female_default"
    # PlayerParameter(7)
    IS_ORIGIN_PLAYER = "is_origin_player"
    # PlayerParameter(8)
    IS_TARGET_PLAYER = "is_target_player"


class DynamicText(Enum):
    """Participant-dependent strings. Only valid in text position."""

    # ObjectParameter(2)
    NPC_ORIGIN_NAME = "npc_origin_name"
    # ObjectParameter(3)
    NPC_TARGET_NAME = "npc_target_name"
    # <SheetEn(ObjStr,2,PlayerParameter(7),1,1)/>
    PLAYER_ORIGIN_NAME_EN = "player_origin_name_en"
    # <SheetEn(ObjStr,2,PlayerParameter(8),1,1)/>
    PLAYER_TARGET_NAME_EN = "player_target_name_en"
    # <Sheet(ObjStr,PlayerParameter(7),0)/>
    PLAYER_ORIGIN_NAME_JP = "player_origin_name_jp"
    # <Sheet(ObjStr,PlayerParameter(8),0)/>
    PLAYER_TARGET_NAME_JP = "player_target_name_jp"


def _object_parameter(index: int) -> Function:
    return Function(FuncName.OBJECT_PARAMETER, (index,))


def _player_parameter(index: int) -> Function:
    return Function(FuncName.PLAYER_PARAMETER, (index,))


# AST nodes are frozen dataclasses, so the exact call shapes can key the tables
CONDITION_SHAPES: Dict[IfParam, Condition] = {
    Function(FuncName.EQUAL, (_object_parameter(1), _object_parameter(2))): Condition.IS_SELF_ORIGIN,
    Function(FuncName.EQUAL, (_object_parameter(1), _object_parameter(3))): Condition.IS_SELF_TARGET,
    _player_parameter(7): Condition.IS_ORIGIN_PLAYER,
    _player_parameter(8): Condition.IS_TARGET_PLAYER,
    _player_parameter(5): Condition.IS_ORIGIN_FEMALE_DEFAULT,
    Tag(TagName.SHEET, (Obj.BNPC_NAME, _player_parameter(7), 6)): Condition.IS_ORIGIN_FEMALE,
}

DYNAMIC_TEXT_SHAPES: Dict[Union[Function, Tag], DynamicText] = {
    _object_parameter(2): DynamicText.NPC_ORIGIN_NAME,
    _object_parameter(3): DynamicText.NPC_TARGET_NAME,
    Tag(TagName.SHEET, (Obj.OBJ_STR, _player_parameter(7), 0)): DynamicText.PLAYER_ORIGIN_NAME_JP,
    Tag(TagName.SHEET, (Obj.OBJ_STR, _player_parameter(8), 0)): DynamicText.PLAYER_TARGET_NAME_JP,
    Tag(TagName.SHEET_EN, (Obj.OBJ_STR, 2, _player_parameter(7), 1, 1)): DynamicText.PLAYER_ORIGIN_NAME_EN,
    Tag(TagName.SHEET_EN, (Obj.OBJ_STR, 2, _player_parameter(8), 1, 1)): DynamicText.PLAYER_TARGET_NAME_EN,
}


def condition_from(node: IfParam) -> Condition:
    """Resolve an If condition node to its Condition.

    Raises:
        ConditionError: carrying ``node`` if the shape is not known.
    """
    condition = CONDITION_SHAPES.get(node)
    if condition is None:
        logger.debug(f"No condition for {node}")
        raise ConditionError(node)
    return condition


def dynamic_text_from(node: Union[Function, Tag]) -> DynamicText:
    """Resolve a text-position tag or function to its DynamicText.

    Raises:
        DynamicTextError: carrying ``node`` if the shape is not known.
    """
    text = DYNAMIC_TEXT_SHAPES.get(node)
    if text is None:
        logger.debug(f"No dynamic text for {node}")
        raise DynamicTextError(node)
    return text

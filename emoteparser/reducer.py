"""Reduce a Message to the flat list of texts and the conditions guarding them.

Walks the AST once, carrying the conditions accumulated from enclosing If
elements. Every text leaf becomes one ConditionText, emitted in source order,
if-branch before else-branch.
"""

import logging
from typing import List, Tuple

from .condition_texts import ConditionState, ConditionText, ConditionTexts
from .conditions import condition_from, dynamic_text_from
from .errors import (DanglingFunction, InvalidTag, UnexpectedClickable,
                     UnexpectedNum, UnexpectedObj)
from .nodes import (FuncName, Function, IfElse, Message, Obj, TagElement,
                    TagName)

logger = logging.getLogger(__name__)

Conditions = Tuple[ConditionState, ...]

# functions that only ever answer conditions, never produce text
CONDITION_ONLY_FUNCTIONS = frozenset({FuncName.EQUAL, FuncName.PLAYER_PARAMETER})


def reduce_message(message: Message) -> ConditionTexts:
    """Reduce a parsed message to its ConditionTexts.

    Raises:
        ReduceError: a subclass naming the node that could not be reduced.
    """
    items: List[ConditionText] = []
    for part in message.parts:
        items.extend(_reduce_part(part, ()))
    logger.debug(f"Reduced {len(message)} parts to {len(items)} condition texts")
    return ConditionTexts(tuple(items))


def _reduce_part(part, conditions: Conditions) -> List[ConditionText]:
    if isinstance(part, str):
        return [ConditionText(conditions, part)]
    if isinstance(part, IfElse):
        return _reduce_if_else(part, conditions)
    if isinstance(part, TagElement):
        return _reduce_tag(part, conditions)
    if isinstance(part, Function):
        return _reduce_function(part, conditions)
    if isinstance(part, Obj):
        raise UnexpectedObj(part)
    if isinstance(part, int):
        raise UnexpectedNum(part)
    raise TypeError(f"Not a message node: {part!r}")


def _reduce_if_else(if_else: IfElse, conditions: Conditions) -> List[ConditionText]:
    condition = condition_from(if_else.if_cond)
    if_conditions = conditions + (ConditionState(condition, True),)
    else_conditions = conditions + (ConditionState(condition, False),)

    res = []
    for then in if_else.if_then:
        res.extend(_reduce_part(then, if_conditions))
    for then in if_else.else_then:
        res.extend(_reduce_part(then, else_conditions))
    return res


def _reduce_tag(element: TagElement, conditions: Conditions) -> List[ConditionText]:
    tag = element.tag
    if tag.name is TagName.CLICKABLE:
        # Clickable is a transparent wrapper around a single part
        if not tag.params and element.text is not None:
            return [ConditionText(conditions, element.text)]
        if len(tag.params) == 1 and element.text is None:
            return _reduce_part(tag.params[0], conditions)
        raise UnexpectedClickable(tag.params)

    if element.text is not None:
        raise InvalidTag(tag, element.text)
    return [ConditionText(conditions, dynamic_text_from(tag))]


def _reduce_function(function: Function, conditions: Conditions) -> List[ConditionText]:
    if function.name in CONDITION_ONLY_FUNCTIONS:
        raise DanglingFunction(function)
    return [ConditionText(conditions, dynamic_text_from(function))]

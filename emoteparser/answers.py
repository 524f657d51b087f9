"""Participant data that answers conditions and dynamic texts."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .conditions import Condition, DynamicText
from .errors import MultipleSelves

logger = logging.getLogger(__name__)


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"


class Character(BaseModel):
    """One participant of a log message.

    Attributes:
        name: Display name, used as is for both languages
        gender: Grammatical gender used for pronouns
        is_player: Whether this is a player character rather than an NPC
        is_self: Whether this is the character of whoever reads the message
    """

    model_config = ConfigDict(frozen=True)

    name: str
    gender: Gender = Gender.MALE
    is_player: bool = True
    is_self: bool = False


class Answers(ABC):
    """Oracle that resolves conditions and dynamic texts for one pair of participants."""

    @abstractmethod
    def as_bool(self, condition: Condition) -> bool: ...

    @abstractmethod
    def as_string(self, text: DynamicText) -> str: ...


class LogMessageAnswers(Answers):
    """Answers backed by an origin and an optional target Character.

    Raises:
        MultipleSelves: If origin and target are different characters that are
            both flagged ``is_self``.
    """

    def __init__(self, origin: Character, target: Optional[Character] = None):
        if target is not None and origin.is_self and target.is_self and origin != target:
            raise MultipleSelves(origin, target)
        self._origin = origin
        self._target = target

    @property
    def origin(self) -> Character:
        return self._origin

    @property
    def target(self) -> Optional[Character]:
        return self._target

    def __repr__(self):
        return f"LogMessageAnswers(origin={self._origin!r}, target={self._target!r})"

    def as_bool(self, condition: Condition) -> bool:
        if condition is Condition.IS_SELF_ORIGIN:
            return self._origin.is_self
        if condition is Condition.IS_SELF_TARGET:
            return self._target is not None and self._target.is_self
        if condition in (Condition.IS_ORIGIN_FEMALE, Condition.IS_ORIGIN_FEMALE_DEFAULT):
            return self._origin.gender is Gender.FEMALE
        if condition is Condition.IS_ORIGIN_PLAYER:
            return self._origin.is_player
        if condition is Condition.IS_TARGET_PLAYER:
            return self._target is not None and self._target.is_player
        raise ValueError(f"Unhandled condition: {condition}")

    def as_string(self, text: DynamicText) -> str:
        # names are the same regardless of language
        if text in (
            DynamicText.NPC_ORIGIN_NAME,
            DynamicText.PLAYER_ORIGIN_NAME_EN,
            DynamicText.PLAYER_ORIGIN_NAME_JP,
        ):
            return self._origin.name
        if text in (
            DynamicText.NPC_TARGET_NAME,
            DynamicText.PLAYER_TARGET_NAME_EN,
            DynamicText.PLAYER_TARGET_NAME_JP,
        ):
            if self._target is None:
                logger.warning(f"Message asked for {text.value} but has no target")
                return ""
            return self._target.name
        raise ValueError(f"Unhandled dynamic text: {text}")

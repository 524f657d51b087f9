"""Lookup of emote log message markup by text command.

The repository only holds markup strings; parsing and rendering stay in the
rest of the package. Data is a JSON list of emotes, each reachable through
any of its text commands:

    [{"id": 1, "name": "Surprised", "commands": ["/surprised", "/ss"],
      "en": {"targeted": "...", "untargeted": "..."},
      "ja": {"targeted": "...", "untargeted": "..."}}]
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .answers import Character, LogMessageAnswers
from .cache import cached_reduce
from .errors import MessageNotFound, RepositoryError

logger = logging.getLogger(__name__)


class Language(str, Enum):
    EN = "en"
    JA = "ja"


class LogMessagePair(BaseModel):
    model_config = ConfigDict(frozen=True)

    targeted: str
    untargeted: str


class EmoteData(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    commands: List[str] = Field(default_factory=list)
    en: LogMessagePair
    ja: LogMessagePair

    def pair(self, language: Language) -> LogMessagePair:
        return self.en if Language(language) is Language.EN else self.ja


class MarkupLookup(Protocol):
    """Anything that can hand out log message markup by key."""

    def get_markup(
        self, key: str, language: Language, targeted: bool
    ) -> Optional[str]: ...


_emote_list_adapter = TypeAdapter(List[EmoteData])


class EmoteRepository:
    """In-memory emote log messages keyed by text command."""

    def __init__(self, emotes: List[EmoteData]):
        self._messages: Dict[str, EmoteData] = {}
        for emote in emotes:
            for command in emote.commands:
                if not command:
                    continue
                logger.debug(f"{command} => {emote.name}")
                self._messages[command] = emote

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "EmoteRepository":
        try:
            emotes = _emote_list_adapter.validate_json(text)
        except ValidationError as e:
            raise RepositoryError(f"Invalid emote json: {e}") from e
        logger.debug(f"Loaded {len(emotes)} emotes")
        return cls(emotes)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "EmoteRepository":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise RepositoryError(f"Cannot read emote data {path}: {e}") from e
        return cls.from_json(text)

    def messages(self, name: str) -> EmoteData:
        try:
            return self._messages[name]
        except KeyError:
            raise MessageNotFound(name) from None

    def targeted(self, name: str, language: Language) -> str:
        return self.messages(name).pair(language).targeted

    def untargeted(self, name: str, language: Language) -> str:
        return self.messages(name).pair(language).untargeted

    def get_markup(self, key: str, language: Language, targeted: bool) -> Optional[str]:
        emote = self._messages.get(key)
        if emote is None:
            return None
        pair = emote.pair(language)
        return pair.targeted if targeted else pair.untargeted

    def all_messages(self) -> List[EmoteData]:
        """Every distinct emote, in id order."""
        unique = {emote.id: emote for emote in self._messages.values()}
        return [unique[i] for i in sorted(unique)]

    def contains_emote(self, name: str) -> bool:
        return name in self._messages

    def emote_list(self) -> Iterator[str]:
        return iter(self._messages)

    def emote_list_by_id(self) -> Iterator[str]:
        return iter(sorted(self._messages, key=lambda name: self._messages[name].id))

    def find_emote_id(self, name: str) -> Optional[int]:
        emote = self._messages.get(name)
        return emote.id if emote is not None else None


def render_emote(
    lookup: MarkupLookup,
    key: str,
    language: Language,
    origin: Character,
    target: Optional[Character] = None,
) -> str:
    """Look up an emote and render it for the given participants.

    The targeted message is used when a target is given.

    Raises:
        MessageNotFound: If the lookup has no markup for ``key``.
    """
    markup = lookup.get_markup(key, language, target is not None)
    if markup is None:
        raise MessageNotFound(key)
    answers = LogMessageAnswers(origin, target)
    return cached_reduce(markup).evaluate(answers)

"""emoteparser -- render game emote log message markup for given participants."""

import logging

# Version - reads from package metadata (set in pyproject.toml)
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("emoteparser")
except PackageNotFoundError:
    __version__ = "0.0.0+dev"

logger = logging.getLogger(__name__)

from .answers import Answers, Character, Gender, LogMessageAnswers
from .cache import cached_reduce, clear_cache, reduce_markup
from .condition_texts import (ConditionState, ConditionText, ConditionTexts,
                              evaluate)
from .conditions import Condition, DynamicText, condition_from, dynamic_text_from
from .errors import (AstError, ConditionError, DanglingFunction,
                     DynamicTextError, EmoteParserError, InvalidTag,
                     MessageNotFound, MultipleSelves, ParseError, ReduceError,
                     RepositoryError, UnexpectedClickable, UnexpectedNum,
                     UnexpectedObj)
from .nodes import (FuncName, Function, IfElse, Message, Obj, Tag, TagElement,
                    TagName)
from .parsing import build_message, parse_message, parse_tree
from .reducer import reduce_message
from .repository import (EmoteData, EmoteRepository, Language, LogMessagePair,
                         MarkupLookup, render_emote)


def reduce(markup: str) -> ConditionTexts:
    """
    Parse markup and reduce it to reusable ConditionTexts.

    Example:
        texts = reduce("<If(PlayerParameter(7))>a player<Else/>an npc</If>")
        texts.evaluate(LogMessageAnswers(origin))

    Raises:
        ParseError: markup does not match the grammar
        AstError: tags are unknown or mismatched
        ReduceError: a call shape has no known meaning in its position
    """
    return reduce_markup(markup)


def process(markup: str, answers: Answers) -> str:
    """One-shot reduce and evaluate."""
    return evaluate(reduce(markup), answers)

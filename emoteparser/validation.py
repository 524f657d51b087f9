"""Batch validation of log message markup.

Every message is checked on its own, so one unmodelled call shape does not
stop the rest of a corpus from being checked.
"""

import logging
from typing import Callable, List, Optional

from pydantic import BaseModel

from .cache import reduce_markup
from .errors import EmoteParserError
from .repository import EmoteRepository, Language

logger = logging.getLogger(__name__)


class MessageCheck(BaseModel):
    """Outcome of reducing one markup string.

    Attributes:
        markup: The markup that was checked
        emote: Emote name, when checked from a repository
        language: Message language, when checked from a repository
        targeted: Whether the targeted message was checked
        error_type: Exception class name, or None on success
        error: Exception message, or None on success
    """

    markup: str
    emote: Optional[str] = None
    language: Optional[Language] = None
    targeted: Optional[bool] = None
    error_type: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_type is None


def check_markup(markup: str, **labels) -> MessageCheck:
    try:
        reduce_markup(markup)
    except EmoteParserError as e:
        logger.error(f"Failed to reduce {markup!r}: {e}")
        return MessageCheck(
            markup=markup, error_type=type(e).__name__, error=str(e), **labels
        )
    return MessageCheck(markup=markup, **labels)


def check_repository(
    repository: EmoteRepository,
    on_checked: Optional[Callable[[MessageCheck], None]] = None,
) -> List[MessageCheck]:
    """Reduce every message of every emote, in both languages.

    Args:
        repository: Emotes to check
        on_checked: Called after each message, e.g. to advance a progress bar
    """
    results = []
    for emote in repository.all_messages():
        for language in Language:
            pair = emote.pair(language)
            for targeted, markup in ((True, pair.targeted), (False, pair.untargeted)):
                result = check_markup(
                    markup, emote=emote.name, language=language, targeted=targeted
                )
                results.append(result)
                if on_checked is not None:
                    on_checked(result)
    failed = sum(1 for r in results if not r.ok)
    logger.debug(f"Checked {len(results)} messages, {failed} failed")
    return results

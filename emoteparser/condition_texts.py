"""The reduced, reusable form of a log message and its evaluation."""

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from .answers import Answers
from .conditions import Condition, DynamicText

logger = logging.getLogger(__name__)

Text = Union[str, DynamicText]


@dataclass(frozen=True)
class ConditionState:
    condition: Condition
    expected: bool


@dataclass(frozen=True)
class ConditionText:
    """A text leaf and the conjunction of conditions required to reach it."""

    conditions: Tuple[ConditionState, ...]
    text: Text

    def holds(self, answers: Answers) -> bool:
        return all(
            answers.as_bool(state.condition) == state.expected
            for state in self.conditions
        )


@dataclass(frozen=True)
class ConditionTexts:
    """Ordered condition texts of one message.

    Built once per markup string and evaluated any number of times, against
    any Answers. Immutable, so it can be cached and shared between threads.
    """

    items: Tuple[ConditionText, ...] = ()

    def __iter__(self) -> Iterator[ConditionText]:
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def texts(self, answers: Answers) -> Iterator[Text]:
        """Yield the text of every item whose conditions hold, in source order."""
        for ctext in self.items:
            if ctext.holds(answers):
                logger.debug(f"conditions hold, keeping {ctext.text!r}")
                yield ctext.text
            else:
                logger.debug(f"conditions fail, skipping {ctext.text!r}")

    def evaluate(self, answers: Answers) -> str:
        return "".join(
            answers.as_string(text) if isinstance(text, DynamicText) else text
            for text in self.texts(answers)
        )


def evaluate(condition_texts: ConditionTexts, answers: Answers) -> str:
    """Render reduced condition texts for one set of participants."""
    return condition_texts.evaluate(answers)

"""Exception classes for emoteparser."""

from typing import Any, List, Optional


class EmoteParserError(Exception):
    """Base class for every error raised by emoteparser."""


class ParseError(EmoteParserError):
    """Markup did not conform to the log message grammar."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        expected: Optional[List[str]] = None,
    ):
        self.original_error = original_error
        self.line = line
        self.column = column
        self.expected = sorted(set(expected or []))
        super().__init__(message)

    def __str__(self):
        parts = [f"Error: {self.args[0]}"]
        if self.line is not None:
            parts.append(f"  At: line {self.line}, column {self.column}")
        if self.expected:
            parts.append(f"  Expected: {', '.join(self.expected)}")
        return "\n".join(parts)


class AstError(EmoteParserError):
    """Markup matched the grammar but could not be built into an AST."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self):
        if self.line is not None:
            return f"{self.args[0]} (line {self.line}, column {self.column})"
        return self.args[0]


class ReduceError(EmoteParserError):
    """A node could not be reduced to condition texts."""


class ConditionError(ReduceError):
    """An if-condition used a call shape with no known Condition."""

    def __init__(self, origin: Any):
        self.origin = origin
        super().__init__(f"Unknown condition ({origin})")


class DynamicTextError(ReduceError):
    """A text leaf used a call shape with no known DynamicText."""

    def __init__(self, origin: Any):
        self.origin = origin
        super().__init__(f"Unknown dynamic text ({origin})")


class DanglingFunction(ReduceError):
    """A function that only makes sense as a condition was used as text."""

    def __init__(self, function: Any):
        self.function = function
        super().__init__(f"Function used in unexpected place ({function})")


class InvalidTag(ReduceError):
    """A tag was used as an open/close pair where only auto-closing makes sense."""

    def __init__(self, tag: Any, text: Optional[str] = None):
        self.tag = tag
        self.text = text
        super().__init__(
            f"Tag used with inline text where only auto-closing is valid ({tag.name.value})"
        )


class UnexpectedClickable(ReduceError):
    """Clickable did not wrap exactly one element or function."""

    def __init__(self, params: Any):
        self.params = params
        super().__init__(f"Clickable contained unexpected params ({','.join(str(p) for p in params)})")


class UnexpectedNum(ReduceError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Unexpected num parameter ({value})")


class UnexpectedObj(ReduceError):
    def __init__(self, obj: Any):
        self.obj = obj
        super().__init__(f"Unexpected obj parameter ({obj.value})")


class MultipleSelves(EmoteParserError):
    """Two different characters were both flagged as the current player."""

    def __init__(self, origin: Any, target: Any):
        self.origin = origin
        self.target = target
        super().__init__("Only one character can be self")


class RepositoryError(EmoteParserError):
    """Emote data could not be loaded."""


class MessageNotFound(RepositoryError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Message not found: {name}")

"""Typed AST for log message markup.

Every node is a frozen dataclass, so a parsed Message can be shared and
cached freely. ``str(node)`` renders the node back to markup, which is what
error messages show.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class TagName(Enum):
    CLICKABLE = "Clickable"
    SHEET = "Sheet"
    SHEET_EN = "SheetEn"


class FuncName(Enum):
    EQUAL = "Equal"
    OBJECT_PARAMETER = "ObjectParameter"
    PLAYER_PARAMETER = "PlayerParameter"


class Obj(Enum):
    """Object literals accepted as Sheet parameters."""

    OBJ_STR = "ObjStr"
    BNPC_NAME = "BNpcName"

    def __str__(self):
        return self.value


def _render_params(params) -> str:
    if not params:
        return ""
    return "(" + ",".join(str(p) for p in params) + ")"


@dataclass(frozen=True)
class Function:
    """A bare call such as ``PlayerParameter(7)``."""

    name: FuncName
    params: Tuple["Param", ...] = ()

    def __str__(self):
        return f"{self.name.value}{_render_params(self.params)}"


@dataclass(frozen=True)
class Tag:
    """An angle-bracket call such as ``<Sheet(ObjStr,PlayerParameter(7),0)/>``."""

    name: TagName
    params: Tuple["Param", ...] = ()

    def __str__(self):
        return f"<{self.name.value}{_render_params(self.params)}/>"


@dataclass(frozen=True)
class TagElement:
    """A tag in text position.

    ``text`` is set when the tag came from an open/close pair, and is None for
    auto-closing tags.
    """

    tag: Tag
    text: Optional[str] = None

    def __str__(self):
        if self.text is None:
            return str(self.tag)
        name = self.tag.name.value
        return f"<{name}{_render_params(self.tag.params)}>{self.text}</{name}>"


@dataclass(frozen=True)
class IfElse:
    if_cond: "IfParam"
    if_then: Tuple["IfElseThen", ...] = ()
    else_then: Tuple["IfElseThen", ...] = ()

    def __str__(self):
        if_then = "".join(str(part) for part in self.if_then)
        else_then = "".join(str(part) for part in self.else_then)
        return f"<If({self.if_cond})>{if_then}<Else/>{else_then}</If>"


Element = Union[TagElement, IfElse]

# only these two node kinds may appear as an If condition
IfParam = Union[Function, Tag]

Param = Union[TagElement, IfElse, Function, int, Obj]

IfElseThen = Union[Function, TagElement, IfElse, str]

MessagePart = Union[str, TagElement, IfElse, Function]


@dataclass(frozen=True)
class Message:
    """Root of a parsed log message: its parts in source order."""

    parts: Tuple[MessagePart, ...] = ()

    def __str__(self):
        return "".join(str(part) for part in self.parts)

    def __iter__(self):
        return iter(self.parts)

    def __len__(self):
        return len(self.parts)

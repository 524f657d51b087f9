import logging
from importlib.resources import files
from pathlib import Path

from lark import Lark, Transformer, Tree, v_args
from lark.exceptions import UnexpectedEOF, UnexpectedInput, VisitError
from lark.lexer import PatternStr

from .errors import AstError, ParseError
from .nodes import (Function, FuncName, IfElse, Message, Obj, Tag,
                    TagElement, TagName)

logger = logging.getLogger(__name__)

try:
    log_message_grammar = (files(__package__) / "grammar.lark").read_text(
        encoding="utf-8"
    )
except Exception:
    # fallback to relative path from current file
    grammar_path = Path(__file__).parent / "grammar.lark"
    log_message_grammar = grammar_path.read_text(encoding="utf-8")


class MessageTransformer(Transformer):
    """Builds the typed AST from a concrete log message parse tree.

    Each grammar rule maps to exactly one node constructor. Terminals are
    converted first (tag/function names to their enums, numbers to int), so
    rule handlers only ever see AST values.
    """

    # -------------------------------------------------------------------------
    # Terminals
    # -------------------------------------------------------------------------

    def TAG_NAME(self, token):
        try:
            return TagName(str(token))
        except ValueError:
            raise AstError(f"Unknown tag name ({token})", token.line, token.column) from None

    def FUNC_NAME(self, token):
        return FuncName(str(token))

    def OBJ_NAME(self, token):
        try:
            return Obj(str(token))
        except ValueError:
            raise AstError(f"Unknown object literal ({token})", token.line, token.column) from None

    def NUMBER(self, token):
        return int(token)

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def start(self, items):
        return Message(tuple(items))

    def text(self, items):
        return str(items[0])

    def element(self, items):
        (node,) = items
        if isinstance(node, Tag):
            return TagElement(node)
        return node

    @v_args(meta=True)
    def paired_tag(self, meta, items):
        """Grammar: paired_tag: open_tag text? close_tag

        Open and close names must agree, e.g. <Clickable>..</Sheet> is rejected.
        """
        open_tag, close_name = items[0], items[-1]
        text = items[1] if len(items) == 3 else None
        if open_tag.name != close_name:
            raise AstError(
                f"Open and close tags do not match ({open_tag.name.value}, {close_name.value})",
                getattr(meta, "line", None),
                getattr(meta, "column", None),
            )
        return TagElement(open_tag, text)

    def open_tag(self, items):
        name, *params = items
        return Tag(name, tuple(params))

    def close_tag(self, items):
        return items[0]

    def auto_closing_tag(self, items):
        name, *params = items
        return Tag(name, tuple(params))

    def function(self, items):
        name, *params = items
        return Function(name, tuple(params))

    def number(self, items):
        return items[0]

    def object_literal(self, items):
        return items[0]

    def if_else(self, items):
        if_cond, if_then, else_then = items
        return IfElse(if_cond, if_then, else_then)

    def if_param(self, items):
        return items[0]

    def branch(self, items):
        return tuple(items)


# Module-level cached Lark parser (compiled once, reused for all parses)
_cached_lark = None


def _get_cached_lark():
    """Get or create the cached Lark parser."""
    global _cached_lark
    if _cached_lark is None:
        _cached_lark = Lark(
            log_message_grammar,
            parser="earley",
            lexer="dynamic",
            propagate_positions=True,
        )
    return _cached_lark


def _describe_terminal(name: str) -> str:
    """Show literal terminals by their text rather than lark's generated name."""
    try:
        pattern = _get_cached_lark().get_terminal(name).pattern
    except KeyError:
        return name
    if isinstance(pattern, PatternStr):
        return repr(pattern.value)
    return name


def _expected_terminals(error: UnexpectedInput) -> list:
    expected = getattr(error, "expected", None) or getattr(error, "allowed", None) or []
    return [_describe_terminal(str(getattr(term, "name", term))) for term in expected]


def _end_position(text: str):
    """1-based line and column just past the last character."""
    line = text.count("\n") + 1
    column = len(text) - text.rfind("\n")
    return line, column


def parse_tree(text: str) -> Tree:
    """Parse markup into the concrete lark tree.

    Raises:
        ParseError: If the text does not conform to the grammar.
    """
    try:
        return _get_cached_lark().parse(text)
    except UnexpectedEOF as e:
        line, column = _end_position(text)
        raise ParseError(
            "Unexpected end of log message",
            original_error=e,
            line=line,
            column=column,
            expected=_expected_terminals(e),
        ) from e
    except UnexpectedInput as e:
        raise ParseError(
            f"Parse error at line {e.line}, column {e.column}",
            original_error=e,
            line=e.line,
            column=e.column,
            expected=_expected_terminals(e),
        ) from e


def build_message(tree: Tree) -> Message:
    """Transform a concrete tree into a Message.

    Raises:
        AstError: If tag names are unknown or open/close tags disagree.
    """
    try:
        return MessageTransformer().transform(tree)
    except VisitError as e:
        # Unwrap VisitError to preserve original exception type
        if isinstance(e.orig_exc, AstError):
            raise e.orig_exc from None
        raise


def parse_message(text: str) -> Message:
    """Parse markup straight to its AST."""
    logger.debug(f"Parsing log message: {text!r}")
    message = build_message(parse_tree(text))
    logger.debug(f"Parsed {len(message)} message parts")
    return message

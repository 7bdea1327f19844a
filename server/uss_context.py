"""
Cursor context classification.

Decides what the user is typing from the text around the cursor alone:
the current line up to the cursor, plus how many braces are still open
before it. No parser, no AST, no memory of previous calls. The rules are
tried most specific first and the first one that matches wins, because
a var() can sit inside a value, which sits inside a block.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from uss_buffer import TextBuffer, is_word_char
from uss_types import Position


class ContextKind(Enum):
    SELECTOR = 'selector'
    CLASS_SELECTOR = 'class-selector'
    ID_SELECTOR = 'id-selector'
    PSEUDO_CLASS = 'pseudo-class'
    PROPERTY_NAME = 'property-name'
    PROPERTY_VALUE = 'property-value'
    URL_ARGUMENT = 'url-argument'
    VARIABLE_ARGUMENT = 'variable-argument'
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class Context:
    kind: ContextKind
    property_name: Optional[str] = None

    def to_lsp(self) -> dict:
        result = {'kind': self.kind.value}
        if self.property_name is not None:
            result['property'] = self.property_name
        return result


UNKNOWN = Context(ContextKind.UNKNOWN)

_URL_FUNCTIONS = ('url', 'resource')


def open_calls(prefix: str) -> List[str]:
    """Names of the functions whose '(' is still open at the end of `prefix`."""
    stack: List[str] = []
    for i, ch in enumerate(prefix):
        if ch == '(':
            start = i
            while start > 0 and is_word_char(prefix[start - 1]):
                start -= 1
            stack.append(prefix[start:i].lower())
        elif ch == ')' and stack:
            stack.pop()
    return stack


def current_statement(prefix: str) -> str:
    """The part of the line prefix after the last '{', ';' or '}'."""
    cut = max(prefix.rfind('{'), prefix.rfind(';'), prefix.rfind('}'))
    return prefix[cut + 1:]


def looks_like_property(name: str) -> bool:
    if not name or name[0] in '.#':
        return False
    return all(is_word_char(ch) for ch in name)


def classify(buffer: TextBuffer, position: Position) -> Context:
    """Work out which construct surrounds `position`. Never raises."""
    offset = buffer.position_to_offset(position)
    line = buffer.line_text(position.line)
    if offset is None or line is None:
        return UNKNOWN

    prefix = line[:offset - buffer.line_start(position.line)]
    opens, closes = buffer.brace_counts(offset)
    in_block = opens > closes

    calls = open_calls(prefix)
    if 'var' in calls:
        return Context(ContextKind.VARIABLE_ARGUMENT)
    if any(name in _URL_FUNCTIONS for name in calls):
        return Context(ContextKind.URL_ARGUMENT)

    statement = current_statement(prefix)

    if prefix.endswith(':') and not prefix.endswith('::'):
        # A bare colon is either "property:" or "Selector:pseudo"
        trimmed = prefix.strip()
        if in_block and trimmed.count(':') == 1:
            name = trimmed.split(':', 1)[0].strip()
            if not looks_like_property(name):
                # "Button { color:" keeps the selector on the same line
                name = statement.split(':', 1)[0].strip()
            if looks_like_property(name):
                return Context(ContextKind.PROPERTY_VALUE, name)
        return Context(ContextKind.PSEUDO_CLASS)

    if prefix.endswith('.'):
        return Context(ContextKind.CLASS_SELECTOR)
    if prefix.endswith('#'):
        return Context(ContextKind.ID_SELECTOR)

    if not in_block:
        return Context(ContextKind.SELECTOR)

    if ':' in prefix:
        name = prefix.split(':', 1)[0].strip()
        if not looks_like_property(name) and ':' in statement:
            name = statement.split(':', 1)[0].strip()
        if looks_like_property(name):
            return Context(ContextKind.PROPERTY_VALUE, name)

    trimmed = statement.strip()
    if not trimmed or all(is_word_char(ch) for ch in trimmed):
        return Context(ContextKind.PROPERTY_NAME)

    return UNKNOWN

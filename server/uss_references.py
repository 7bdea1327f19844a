"""
Definitions, references and renames by pattern scan.

There is no index to keep up to date: every query scans the whole
document text with a regex. Stylesheets are single files and regexes are
fast, so this is the whole trick.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

import re
from typing import List, Optional, Set, Tuple

from uss_buffer import TextBuffer, is_word_char
from uss_types import Position, Range, TextEdit

# A token must not continue into more token characters on either side
_TOKEN_START = r'(?<![\w-])'
_TOKEN_END = r'(?![\w-])'

# Selector names only: a '{' must come before the next ';' or '}', which
# keeps '#fade00;' and 'url(icon.png);' out
_IN_SELECTOR = r'(?=[^;{}]*\{)'
CLASS_NAME_PATTERN = re.compile(r'\.([a-zA-Z_][\w-]*)' + _IN_SELECTOR)
ID_NAME_PATTERN = re.compile(r'#([a-zA-Z_][\w-]*)' + _IN_SELECTOR)
VARIABLE_DEFINITION_PATTERN = re.compile(r'(--[\w-]+)\s*:')


def token_at(buffer: TextBuffer, position: Position) -> Optional[Tuple[str, int]]:
    """
    The token at `position` with its start offset.

    A '.' or '#' right before the word is included, so a class selector
    comes back as '.foo' rather than 'foo'.
    """
    span = buffer.word_range_at(position)
    if span is None:
        return None
    start, end = span
    sigil = buffer.char_at(start - 1) if start > 0 else None
    if sigil in ('.', '#'):
        start -= 1
    return buffer.text_range(start, end), start


def _range(buffer: TextBuffer, start: int, end: int) -> Range:
    return Range(buffer.offset_to_position(start), buffer.offset_to_position(end))


def definition_of(buffer: TextBuffer, token: str) -> Optional[Range]:
    """
    Where `token` is defined: '--var' followed by ':', or '.class' / '#id'
    followed by '{'. Bare identifiers have no definition.
    """
    if token.startswith('--'):
        pattern = re.compile(_TOKEN_START + re.escape(token) + r'\s*:')
    elif token[:1] in ('.', '#') and len(token) > 1:
        pattern = re.compile(re.escape(token) + r'\s*\{')
    else:
        return None

    match = pattern.search(buffer.full_text())
    if not match:
        return None
    return _range(buffer, match.start(), match.start() + len(token))


def occurrences(buffer: TextBuffer, word: str) -> List[Range]:
    """Every whole-token occurrence of `word`, in document order."""
    if not word:
        return []
    pattern = re.compile(_TOKEN_START + re.escape(word) + _TOKEN_END)
    return [_range(buffer, m.start(), m.end()) for m in pattern.finditer(buffer.full_text())]


def find_definition(buffer: TextBuffer, position: Position) -> Optional[Range]:
    found = token_at(buffer, position)
    if found is None:
        return None
    return definition_of(buffer, found[0])


def find_references(buffer: TextBuffer, position: Position) -> List[Range]:
    word = buffer.word_at(position)
    if not word:
        return []
    return occurrences(buffer, word)


def is_valid_name(name: str) -> bool:
    return bool(name) and all(is_word_char(ch) for ch in name)


def rename_edits(buffer: TextBuffer, position: Position, new_name: str) -> List[TextEdit]:
    """Edits replacing every occurrence of the token under the cursor. Empty means no rename."""
    if not is_valid_name(new_name):
        return []
    return [TextEdit(rng, new_name) for rng in find_references(buffer, position)]


def class_names(text: str) -> Set[str]:
    return {m.group(1) for m in CLASS_NAME_PATTERN.finditer(text)}


def id_names(text: str) -> Set[str]:
    return {m.group(1) for m in ID_NAME_PATTERN.finditer(text)}


def variable_names(text: str) -> Set[str]:
    """Custom properties that get a value somewhere in `text`."""
    return {m.group(1) for m in VARIABLE_DEFINITION_PATTERN.finditer(text)}

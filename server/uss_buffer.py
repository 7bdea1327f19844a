"""
Text buffer for open USS documents.

The content lives in a randomized balanced tree (a treap) of text chunks.
Every node carries the character, newline and brace counts of its subtree,
so converting between offsets and positions, and asking how many braces
precede an offset, walks one root-to-leaf path instead of the whole text.
Edits split the tree at the two ends of the range and merge the
replacement in between.

Lines are separated by '\\n'. A '\\r' before it belongs to the line as far
as offsets go, but line_text() strips it.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

import logging
import random
from typing import Iterator, List, Optional, Tuple

from uss_types import Position, Range

logger = logging.getLogger(__name__)

CHUNK_SIZE = 512


def is_word_char(ch: str) -> bool:
    """Token characters: letters, digits, '-' and '_'."""
    return ch.isalnum() or ch == '-' or ch == '_'


class _Node:
    __slots__ = ('text', 'priority', 'left', 'right',
                 'own_newlines', 'own_opens', 'own_closes',
                 'length', 'newlines', 'opens', 'closes', 'count')

    def __init__(self, text: str):
        self.text = text
        self.priority = random.random()
        self.left: Optional['_Node'] = None
        self.right: Optional['_Node'] = None
        self.own_newlines = text.count('\n')
        self.own_opens = text.count('{')
        self.own_closes = text.count('}')
        self.update()

    def update(self):
        length = len(self.text)
        newlines = self.own_newlines
        opens = self.own_opens
        closes = self.own_closes
        count = 1
        for child in (self.left, self.right):
            if child is not None:
                length += child.length
                newlines += child.newlines
                opens += child.opens
                closes += child.closes
                count += child.count
        self.length = length
        self.newlines = newlines
        self.opens = opens
        self.closes = closes
        self.count = count


def _merge(a: Optional[_Node], b: Optional[_Node]) -> Optional[_Node]:
    if a is None:
        return b
    if b is None:
        return a
    if a.priority > b.priority:
        a.right = _merge(a.right, b)
        a.update()
        return a
    b.left = _merge(a, b.left)
    b.update()
    return b


def _split(node: Optional[_Node], offset: int) -> Tuple[Optional[_Node], Optional[_Node]]:
    """Split into (first `offset` characters, the rest)."""
    if node is None:
        return None, None
    left_len = node.left.length if node.left else 0
    if offset <= left_len:
        head, tail = _split(node.left, offset)
        node.left = tail
        node.update()
        return head, node
    own = len(node.text)
    if offset >= left_len + own:
        head, tail = _split(node.right, offset - left_len - own)
        node.right = head
        node.update()
        return node, tail
    # The cut falls inside this node's chunk
    cut = offset - left_len
    head = _merge(node.left, _Node(node.text[:cut]))
    tail = _merge(_Node(node.text[cut:]), node.right)
    return head, tail


def _build(text: str) -> Optional[_Node]:
    root = None
    for start in range(0, len(text), CHUNK_SIZE):
        root = _merge(root, _Node(text[start:start + CHUNK_SIZE]))
    return root


def _chunks(node: Optional[_Node]) -> Iterator[str]:
    stack: List[_Node] = []
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node.text
        node = node.right


class TextBuffer:
    """
    Mutable document text with line/offset bookkeeping.

    Offsets index characters of the whole document. Positions address a
    line and a column within it. Both conversions and edits are
    logarithmic in the document size (plus the size of the edit).
    """

    def __init__(self, text: str = '', version: int = 0):
        self.version = version
        self._root = _build(text)

    def __len__(self) -> int:
        return self._root.length if self._root else 0

    @property
    def line_count(self) -> int:
        """Lines in the document. A trailing newline opens one more, empty line."""
        return (self._root.newlines if self._root else 0) + 1

    def full_text(self) -> str:
        return ''.join(_chunks(self._root))

    def set_full_text(self, text: str):
        self._root = _build(text)

    def apply_edit(self, rng: Range, text: str) -> bool:
        """
        Replace the characters covered by `rng` with `text`.

        Returns False (and changes nothing) when either end of the range
        names a line that does not exist.
        """
        start = self.position_to_offset(rng.start)
        end = self.position_to_offset(rng.end)
        if start is None or end is None:
            logger.debug("Ignoring edit with unresolvable range %s", rng)
            return False
        if end < start:
            start, end = end, start
        self.replace(start, end, text)
        return True

    def replace(self, start: int, end: int, text: str):
        """Replace offsets [start, end) with `text`."""
        head, rest = _split(self._root, start)
        _, tail = _split(rest, end - start)
        self._root = _merge(_merge(head, _build(text)), tail)
        self._compact()

    def _compact(self):
        # Small edits leave small chunks behind; rebuild once they pile up
        root = self._root
        if root is not None and root.count > 2 * (root.length // CHUNK_SIZE) + 256:
            logger.debug("Compacting buffer: %d chunks for %d chars", root.count, root.length)
            self._root = _build(self.full_text())

    def line_start(self, line: int) -> Optional[int]:
        """Offset of the first character of `line`, or None past the last line."""
        if line < 0 or line >= self.line_count:
            return None
        if line == 0:
            return 0
        # Find the `line`-th newline; the line starts right after it
        remaining = line
        base = 0
        node = self._root
        while node is not None:
            left = node.left
            left_newlines = left.newlines if left else 0
            if remaining <= left_newlines:
                node = left
                continue
            remaining -= left_newlines
            left_len = left.length if left else 0
            if remaining <= node.own_newlines:
                index = -1
                for _ in range(remaining):
                    index = node.text.index('\n', index + 1)
                return base + left_len + index + 1
            remaining -= node.own_newlines
            base += left_len + len(node.text)
            node = node.right
        return None

    def line_end(self, line: int) -> Optional[int]:
        """Offset of the newline ending `line` (document length on the last line)."""
        if line < 0 or line >= self.line_count:
            return None
        if line == self.line_count - 1:
            return len(self)
        return self.line_start(line + 1) - 1

    def position_to_offset(self, pos: Position) -> Optional[int]:
        """
        Offset for a position. Columns past the end of the line clamp to the
        line's end; a line past the end of the document gives None.
        """
        start = self.line_start(pos.line)
        if start is None:
            return None
        end = self.line_end(pos.line)
        return min(start + max(pos.character, 0), end)

    def offset_to_position(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self))
        line = self._prefix_counts(offset)[0]
        return Position(line, offset - self.line_start(line))

    def line_text(self, line: int) -> Optional[str]:
        start = self.line_start(line)
        if start is None:
            return None
        text = self.text_range(start, self.line_end(line))
        if text.endswith('\r'):
            text = text[:-1]
        return text

    def text_range(self, start: int, end: int) -> str:
        """Characters in [start, end)."""
        start = max(start, 0)
        end = min(end, len(self))
        if start >= end:
            return ''
        pieces: List[str] = []
        self._collect(self._root, start, end, pieces)
        return ''.join(pieces)

    def _collect(self, node: Optional[_Node], start: int, end: int, out: List[str]):
        # start/end are relative to this subtree
        if node is None or start >= end:
            return
        left_len = node.left.length if node.left else 0
        if start < left_len:
            self._collect(node.left, start, min(end, left_len), out)
        own_start = left_len
        own_end = left_len + len(node.text)
        if start < own_end and end > own_start:
            out.append(node.text[max(start, own_start) - own_start:min(end, own_end) - own_start])
        if end > own_end:
            self._collect(node.right, max(start, own_end) - own_end, end - own_end, out)

    def char_at(self, offset: int) -> Optional[str]:
        node = self._root
        if offset < 0 or offset >= len(self):
            return None
        while node is not None:
            left_len = node.left.length if node.left else 0
            if offset < left_len:
                node = node.left
                continue
            offset -= left_len
            if offset < len(node.text):
                return node.text[offset]
            offset -= len(node.text)
            node = node.right
        return None

    def brace_counts(self, offset: int) -> Tuple[int, int]:
        """Number of '{' and '}' before `offset`."""
        _, opens, closes = self._prefix_counts(offset)
        return opens, closes

    def _prefix_counts(self, offset: int) -> Tuple[int, int, int]:
        newlines = opens = closes = 0
        node = self._root
        while node is not None and offset > 0:
            left = node.left
            left_len = left.length if left else 0
            if offset <= left_len:
                node = left
                continue
            if left is not None:
                newlines += left.newlines
                opens += left.opens
                closes += left.closes
            offset -= left_len
            if offset <= len(node.text):
                piece = node.text[:offset]
                newlines += piece.count('\n')
                opens += piece.count('{')
                closes += piece.count('}')
                break
            newlines += node.own_newlines
            opens += node.own_opens
            closes += node.own_closes
            offset -= len(node.text)
            node = node.right
        return newlines, opens, closes

    def word_range_at(self, pos: Position) -> Optional[Tuple[int, int]]:
        """Offsets [start, end) of the token touching `pos`, if any."""
        offset = self.position_to_offset(pos)
        if offset is None:
            return None
        line_start = self.line_start(pos.line)
        line = self.text_range(line_start, self.line_end(pos.line))
        col = offset - line_start

        start = col
        while start > 0 and is_word_char(line[start - 1]):
            start -= 1
        end = col
        while end < len(line) and is_word_char(line[end]):
            end += 1

        if start < end:
            return line_start + start, line_start + end
        return None

    def word_at(self, pos: Position) -> Optional[str]:
        """The token under or immediately before the cursor."""
        span = self.word_range_at(pos)
        if span is None:
            return None
        return self.text_range(*span)

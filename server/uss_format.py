"""
USS formatter.

Re-emits the stylesheet one character at a time: one declaration per
line, blocks indented, a space after a declaration's colon. Block comments
and quoted strings pass through untouched.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

from typing import List, Optional

from uss_buffer import TextBuffer
from uss_types import FormattingOptions, Position, Range, TextEdit


def _ends_with(out: List[str], *chars: str) -> bool:
    return bool(out) and out[-1] in chars


def _trim_trailing_blanks(out: List[str]):
    while _ends_with(out, ' ', '\t'):
        out.pop()


def format_text(text: str, options: FormattingOptions) -> str:
    indent = options.indent
    out: List[str] = []
    level = 0
    in_comment = False
    quote = ''
    parens = 0
    prev = ''

    for ch in text:
        if not quote:
            if prev == '/' and ch == '*':
                in_comment = True
            elif prev == '*' and ch == '/':
                in_comment = False

        if in_comment:
            out.append(ch)
            prev = ch
            continue

        # Strings are copied as they are, so "project://..." survives
        if quote:
            out.append(ch)
            if ch == quote:
                quote = ''
            prev = ch
            continue
        if ch in '"\'':
            quote = ch
            out.append(ch)
            prev = ch
            continue

        if ch == '(':
            parens += 1
        elif ch == ')':
            parens = max(parens - 1, 0)

        if ch == ':' and parens:
            out.append(ch)
        elif ch == '{':
            if out and not _ends_with(out, ' ', '\n'):
                out.append(' ')
            out.append('{\n')
            level += 1
        elif ch == '}':
            _trim_trailing_blanks(out)
            if out and not _ends_with(out, '\n', '{\n', ';\n', '}\n'):
                out.append('\n')
            level = max(level - 1, 0)
            out.append(indent * level)
            out.append('}\n')
        elif ch == ';':
            out.append(';\n')
        elif ch == ':':
            # Selectors keep "Button:hover" tight; declarations get "name: value"
            out.append(': ' if level > 0 else ':')
        elif ch == '\n':
            if out and not _at_line_start(out):
                out.append('\n')
        elif ch in ' \t\r':
            if not out or _at_line_start(out) or _ends_with(out, ' ', ': '):
                pass
            else:
                out.append(' ')
        else:
            if out and _at_line_start(out):
                out.append(indent * level)
            out.append(ch)

        prev = ch

    return ''.join(out)


def _at_line_start(out: List[str]) -> bool:
    return bool(out) and out[-1].endswith('\n')


def format_document(buffer: TextBuffer, options: FormattingOptions) -> List[TextEdit]:
    """A single whole-document edit, or nothing when the text is already tidy."""
    text = buffer.full_text()
    formatted = format_text(text, options)
    if formatted == text:
        return []
    whole = Range(Position(0, 0), buffer.offset_to_position(len(buffer)))
    return [TextEdit(whole, formatted)]


def format_range(buffer: TextBuffer, rng: Range, options: FormattingOptions) -> List[TextEdit]:
    start: Optional[int] = buffer.position_to_offset(rng.start)
    end: Optional[int] = buffer.position_to_offset(rng.end)
    if start is None:
        start = 0
    if end is None:
        end = len(buffer)
    text = buffer.text_range(start, end)
    formatted = format_text(text, options)
    if formatted == text:
        return []
    return [TextEdit(Range(buffer.offset_to_position(start), buffer.offset_to_position(end)), formatted)]

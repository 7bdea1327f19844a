"""
Line-by-line diagnostics for USS documents.

One pass, top to bottom, remembering only how deep in braces we are.
Each line is judged on its own: unknown properties, empty values, hex
colours with the wrong number of digits, unbalanced parentheses and
missing semicolons. Comments are only recognised when a line starts
with one, so a declaration inside a multi-line comment still gets
checked. Good enough for a linter that runs on every keystroke.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

import re
from typing import List, Optional

from uss_buffer import TextBuffer
from uss_data import USS_PROPERTIES
from uss_types import Diagnostic, DiagnosticSeverity, Position, Range

PROPERTY_PATTERN = re.compile(r'^\s*([\w-]+)\s*:\s*([^;{}]*);?\s*$')
HEX_COLOR_PATTERN = re.compile(r'#([0-9A-Fa-f]+)(?![\w-])')
VALID_HEX_LENGTHS = (3, 4, 6, 8)


def _span(line_num: int, start: int, end: int) -> Range:
    return Range(Position(line_num, start), Position(line_num, end))


def check_property_declaration(line: str, line_num: int) -> List[Diagnostic]:
    """Unknown property names and empty values in a `name: value` line."""
    diagnostics = []
    match = PROPERTY_PATTERN.match(line)
    if not match:
        return diagnostics

    name = match.group(1)
    value = match.group(2)

    if not name.startswith('--') and name not in USS_PROPERTIES:
        diagnostics.append(Diagnostic(
            _span(line_num, match.start(1), match.end(1)),
            DiagnosticSeverity.WARNING,
            f"Unknown USS property: '{name}'",
        ))

    if not value.strip():
        colon = line.index(':', match.end(1))
        diagnostics.append(Diagnostic(
            _span(line_num, colon, len(line)),
            DiagnosticSeverity.ERROR,
            'Property value is empty',
        ))

    return diagnostics


def check_hex_colors(line: str, line_num: int) -> List[Diagnostic]:
    diagnostics = []
    for match in HEX_COLOR_PATTERN.finditer(line):
        digits = match.group(1)
        if len(digits) not in VALID_HEX_LENGTHS:
            diagnostics.append(Diagnostic(
                _span(line_num, match.start(), match.end()),
                DiagnosticSeverity.ERROR,
                f'Invalid hex color length: {len(digits)}. Expected 3, 4, 6, or 8 characters.',
            ))
    return diagnostics


def check_parentheses(line: str, line_num: int) -> Optional[Diagnostic]:
    """The first parenthesis imbalance on the line, if there is one."""
    unclosed: List[int] = []
    for i, ch in enumerate(line):
        if ch == '(':
            unclosed.append(i)
        elif ch == ')':
            if not unclosed:
                return Diagnostic(_span(line_num, i, i + 1), DiagnosticSeverity.ERROR,
                                  'Unmatched closing parenthesis')
            unclosed.pop()
    if unclosed:
        first = unclosed[0]
        return Diagnostic(_span(line_num, first, first + 1), DiagnosticSeverity.ERROR,
                          'Unclosed parenthesis')
    return None


def check_missing_semicolon(line: str, line_num: int) -> Optional[Diagnostic]:
    trimmed = line.strip()
    if not trimmed or trimmed.count(':') != 1:
        return None
    if trimmed.endswith((';', '{', '}')):
        return None
    # url(...) and var(...) values are allowed to run onto the next line
    if 'url(' in trimmed or 'var(' in trimmed:
        return None
    end = len(line.rstrip())
    return Diagnostic(_span(line_num, end - 1, end), DiagnosticSeverity.WARNING,
                      'Missing semicolon at end of declaration')


def get_diagnostics(buffer: TextBuffer) -> List[Diagnostic]:
    """Every diagnostic for the document, in line order."""
    diagnostics: List[Diagnostic] = []
    depth = 0

    for line_num, line in enumerate(buffer.full_text().split('\n')):
        line = line.rstrip('\r')
        trimmed = line.strip()
        if not trimmed or trimmed.startswith(('/*', '//')):
            continue

        depth += line.count('{') - line.count('}')
        in_block = depth > 0

        if in_block:
            diagnostics.extend(check_property_declaration(line, line_num))

        diagnostics.extend(check_hex_colors(line, line_num))

        paren = check_parentheses(line, line_num)
        if paren:
            diagnostics.append(paren)

        if in_block:
            semicolon = check_missing_semicolon(line, line_num)
            if semicolon:
                diagnostics.append(semicolon)

    last_line = buffer.line_count - 1
    if depth > 0:
        diagnostics.append(Diagnostic(
            _span(last_line, 0, 0), DiagnosticSeverity.ERROR,
            f'Unclosed brace(s): {depth} opening brace(s) without closing',
        ))
    elif depth < 0:
        diagnostics.append(Diagnostic(
            _span(last_line, 0, 0), DiagnosticSeverity.ERROR,
            f'Extra closing brace(s): {-depth} more closing than opening',
        ))

    return diagnostics

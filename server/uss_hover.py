"""
Hover text for USS tokens.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

import re
from typing import Optional

from uss_buffer import TextBuffer
from uss_data import USS_COLORS, USS_KEYWORDS, USS_PROPERTIES, USS_PSEUDO_CLASSES, USS_UNITS, UXML_ELEMENTS
from uss_references import token_at
from uss_types import Position

DIMENSION_PATTERN = re.compile(r'^-?\d*\.?\d+([a-z]+|%)$')


def get_hover(buffer: TextBuffer, position: Position) -> Optional[dict]:
    found = token_at(buffer, position)
    if found is None:
        return None
    token, start = found

    before = buffer.char_at(start - 1) if start > 0 else None
    content = hover_content(token, after_colon=before == ':')
    if content is None:
        return None
    return {'contents': {'kind': 'markdown', 'value': content}}


def hover_content(token: str, after_colon: bool = False) -> Optional[str]:
    """Markdown describing `token`, or None when there is nothing to say."""
    if token in USS_PROPERTIES:
        prop = USS_PROPERTIES[token]
        return (f'## {token}\n\n{prop.description}\n\n**Syntax:** `{prop.syntax}`\n\n'
                f'**Initial:** `{prop.initial}`\n\n**Inherited:** {"Yes" if prop.inherited else "No"}')

    if token in UXML_ELEMENTS:
        namespace, desc = UXML_ELEMENTS[token]
        return (f'## {token}\n\n{desc}\n\n**Namespace:** `{namespace}`\n\n'
                f'[Unity Documentation](https://docs.unity3d.com/ScriptReference/UIElements.{token}.html)')

    if after_colon and token in USS_PSEUDO_CLASSES:
        return f'## :{token}\n\n{USS_PSEUDO_CLASSES[token]}'

    if token in USS_COLORS:
        hex_value = USS_COLORS[token]
        return f'## Color: {token}\n\n**Hex:** `{hex_value}`'

    dimension = DIMENSION_PATTERN.match(token)
    if dimension and dimension.group(1) in USS_UNITS:
        unit = dimension.group(1)
        return f'## Unit: {unit}\n\n{USS_UNITS[unit]}'

    if token.startswith('--'):
        return f'## USS Variable\n\n`{token}`\n\nCustom property (variable) defined in this stylesheet.'

    if token.startswith('.'):
        return f'## Class Selector\n\n`{token}`\n\nMatches elements with the class `{token[1:]}`.'

    if token.startswith('#'):
        return f'## ID Selector\n\n`{token}`\n\nMatches the element with name `{token[1:]}`.'

    if token in USS_KEYWORDS:
        return f'## `{token}`\n\n{USS_KEYWORDS[token]}'

    return None

"""
Colour literals: finding them and writing them back out.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

import re
from typing import Any, Dict, List, NamedTuple, Optional

from uss_buffer import TextBuffer
from uss_types import Range

HEX_COLOR_PATTERN = re.compile(r'#([0-9A-Fa-f]{3,8})(?![\w-])')
RGBA_COLOR_PATTERN = re.compile(
    r'rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)'
)


class Color(NamedTuple):
    """RGBA with every channel in 0..1."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_lsp(cls, data: Dict[str, Any]) -> 'Color':
        return cls(float(data.get('red', 0)), float(data.get('green', 0)),
                   float(data.get('blue', 0)), float(data.get('alpha', 1)))

    def to_lsp(self) -> Dict[str, float]:
        return {'red': self.red, 'green': self.green, 'blue': self.blue, 'alpha': self.alpha}


def parse_hex_color(digits: str) -> Optional[Color]:
    """'f80', 'f80c', 'ff8800' or 'ff8800cc' (no '#')."""
    digits = digits.lstrip('#')
    if len(digits) in (3, 4):
        digits = ''.join(c * 2 for c in digits)
    if len(digits) not in (6, 8):
        return None
    try:
        channels = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
    except ValueError:
        return None
    if len(channels) == 3:
        channels.append(1.0)
    return Color(*channels)


def find_colors(buffer: TextBuffer) -> List[Dict[str, Any]]:
    """Every colour literal in the document as LSP ColorInformation."""
    text = buffer.full_text()
    colors = []

    for match in HEX_COLOR_PATTERN.finditer(text):
        color = parse_hex_color(match.group(1))
        if color is None:
            continue
        rng = Range(buffer.offset_to_position(match.start()), buffer.offset_to_position(match.end()))
        colors.append({'range': rng.to_lsp(), 'color': color.to_lsp()})

    for match in RGBA_COLOR_PATTERN.finditer(text):
        red, green, blue = (min(int(match.group(i)), 255) / 255.0 for i in (1, 2, 3))
        try:
            alpha = float(match.group(4)) if match.group(4) else 1.0
        except ValueError:
            alpha = 1.0
        rng = Range(buffer.offset_to_position(match.start()), buffer.offset_to_position(match.end()))
        colors.append({'range': rng.to_lsp(), 'color': Color(red, green, blue, alpha).to_lsp()})

    return colors


def color_presentations(color: Color) -> List[Dict[str, str]]:
    """Hex first, then rgb()/rgba(); the alpha decides which flavour."""
    r, g, b = (round(channel * 255) for channel in (color.red, color.green, color.blue))
    if color.alpha >= 1.0:
        return [
            {'label': f'#{r:02X}{g:02X}{b:02X}'},
            {'label': f'rgb({r}, {g}, {b})'},
        ]
    a = round(color.alpha * 255)
    return [
        {'label': f'#{r:02X}{g:02X}{b:02X}{a:02X}'},
        {'label': f'rgba({r}, {g}, {b}, {color.alpha:.2f})'},
    ]

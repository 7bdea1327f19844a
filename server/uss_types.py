"""
Protocol-shaped value types shared by the USS providers.

Positions count characters per line (Python code points) and lines from
zero, as the editor sees them. Each type knows how to turn itself into the
plain dict the JSON-RPC layer sends.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line and character. Ordering is document order."""
    line: int
    character: int

    @classmethod
    def from_lsp(cls, data: Dict[str, Any]) -> 'Position':
        return cls(int(data.get('line', 0)), int(data.get('character', 0)))

    def to_lsp(self) -> Dict[str, int]:
        return {'line': self.line, 'character': self.character}


@dataclass(frozen=True)
class Range:
    """A span between two positions; start == end is an insertion point."""
    start: Position
    end: Position

    @classmethod
    def from_lsp(cls, data: Dict[str, Any]) -> 'Range':
        return cls(Position.from_lsp(data['start']), Position.from_lsp(data['end']))

    def to_lsp(self) -> Dict[str, Dict[str, int]]:
        return {'start': self.start.to_lsp(), 'end': self.end.to_lsp()}

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class TextEdit:
    range: Range
    new_text: str

    def to_lsp(self) -> Dict[str, Any]:
        return {'range': self.range.to_lsp(), 'newText': self.new_text}


class DiagnosticSeverity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class Diagnostic:
    range: Range
    severity: DiagnosticSeverity
    message: str
    source: str = 'uss'

    def to_lsp(self) -> Dict[str, Any]:
        return {
            'range': self.range.to_lsp(),
            'severity': int(self.severity),
            'source': self.source,
            'message': self.message,
        }


@dataclass(frozen=True)
class FormattingOptions:
    """How the formatter indents. Mirrors the editor's tabSize/insertSpaces."""
    use_spaces: bool = True
    indent_width: int = 4

    @classmethod
    def from_lsp(cls, data: Optional[Dict[str, Any]]) -> 'FormattingOptions':
        data = data or {}
        width = data.get('tabSize', 4)
        if not isinstance(width, int) or width < 1:
            width = 4
        return cls(use_spaces=bool(data.get('insertSpaces', True)), indent_width=width)

    @property
    def indent(self) -> str:
        return ' ' * self.indent_width if self.use_spaces else '\t'

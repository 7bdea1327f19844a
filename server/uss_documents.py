"""
Open documents and the operations the server runs against them.

One Document per open URI, kept until the editor closes it. The map
itself has a lock that is only held long enough to add, remove or look up
an entry; each Document has its own lock held for a single edit or a
single query. Edits to one file never wait on queries against another.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from uss_buffer import TextBuffer
from uss_context import UNKNOWN, Context, classify
from uss_diagnostics import get_diagnostics
from uss_references import find_definition, find_references, rename_edits
from uss_types import Diagnostic, Position, Range, TextEdit

logger = logging.getLogger(__name__)

T = TypeVar('T')

# (range or None for "replace everything", new text)
ContentChange = Tuple[Optional[Range], str]


class Document:
    """An open stylesheet: its text, the editor's version number and a lock."""

    def __init__(self, uri: str, text: str, version: int = 0):
        self.uri = uri
        self.buffer = TextBuffer(text, version)
        self.lock = threading.Lock()

    @property
    def version(self) -> int:
        return self.buffer.version

    def apply_changes(self, changes: Iterable[ContentChange], version: Optional[int] = None):
        with self.lock:
            for rng, text in changes:
                if rng is None:
                    self.buffer.set_full_text(text)
                else:
                    self.buffer.apply_edit(rng, text)
            if version is not None:
                if version < self.buffer.version:
                    logger.debug("%s went from version %d back to %d", self.uri, self.buffer.version, version)
                self.buffer.version = version


class DocumentStore:
    """Thread-safe URI -> Document map."""

    def __init__(self):
        self._documents: Dict[str, Document] = {}
        self._lock = threading.Lock()

    def __contains__(self, uri: str) -> bool:
        with self._lock:
            return uri in self._documents

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def get(self, uri: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(uri)

    def open(self, uri: str, text: str, version: int = 0) -> Document:
        doc = Document(uri, text, version)
        with self._lock:
            self._documents[uri] = doc
        logger.debug("Opened %s (version %d, %d chars)", uri, version, len(text))
        return doc

    def change(self, uri: str, changes: Iterable[ContentChange], version: Optional[int] = None) -> bool:
        doc = self.get(uri)
        if doc is None:
            logger.debug("Change for unknown document %s", uri)
            return False
        doc.apply_changes(changes, version)
        return True

    def close(self, uri: str) -> bool:
        with self._lock:
            doc = self._documents.pop(uri, None)
        if doc is not None:
            logger.debug("Closed %s", uri)
        return doc is not None

    def query(self, uri: str, fn: Callable[[TextBuffer], T], default: T) -> T:
        """Run `fn` against the document's buffer under its lock; `default` if it isn't open."""
        doc = self.get(uri)
        if doc is None:
            return default
        with doc.lock:
            return fn(doc.buffer)

    def classify(self, uri: str, position: Position) -> Context:
        return self.query(uri, lambda buffer: classify(buffer, position), UNKNOWN)

    def diagnostics(self, uri: str) -> List[Diagnostic]:
        return self.query(uri, get_diagnostics, [])

    def definition(self, uri: str, position: Position) -> Optional[Range]:
        return self.query(uri, lambda buffer: find_definition(buffer, position), None)

    def references(self, uri: str, position: Position) -> List[Range]:
        return self.query(uri, lambda buffer: find_references(buffer, position), [])

    def rename(self, uri: str, position: Position, new_name: str) -> Optional[Dict[str, List[TextEdit]]]:
        """Every edit needed to rename the token at `position`, or None for "no changes"."""
        edits = self.query(uri, lambda buffer: rename_edits(buffer, position, new_name), [])
        if not edits:
            return None
        return {uri: edits}

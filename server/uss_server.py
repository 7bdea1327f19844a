#!/usr/bin/env python3
"""
USS Language Server Protocol Implementation

For Unity Style Sheets, the CSS dialect that styles every inventory
screen you have ever squinted at. Completion, hover, diagnostics,
formatting, colours, go-to-definition, references and rename.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

import argparse
import json
import logging
import os
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Tuple

from uss_colors import Color, color_presentations, find_colors
from uss_completion import get_completions, resolve_completion
from uss_diagnostics import get_diagnostics
from uss_documents import DocumentStore
from uss_format import format_document, format_range
from uss_hover import get_hover
from uss_types import FormattingOptions, Position, Range

logger = logging.getLogger(__name__)

SERVER_NAME = 'USS Language Server'
SERVER_VERSION = '0.1.0'

# JSON-RPC error codes
PARSE_ERROR = -32700
INTERNAL_ERROR = -32603

# Requests that must be answered in order, on the reader thread
_INLINE_REQUESTS = {'initialize', 'shutdown'}


def text_document_position(params: dict) -> Tuple[str, Position]:
    return params['textDocument']['uri'], Position.from_lsp(params['position'])


class UssLanguageServer:
    """
    USS Language Server

    Reads JSON-RPC frames from one stream and writes them to another.
    Notifications (open, change, close, save) are applied in arrival order
    on the reader thread, so edits never overtake each other. Requests go
    to a worker pool and answer whenever they are done.
    """

    def __init__(self, reader: Optional[BinaryIO] = None, writer: Optional[BinaryIO] = None,
                 workers: int = 4):
        self.documents = DocumentStore()
        self.reader = reader if reader is not None else sys.stdin.buffer
        self.writer = writer if writer is not None else sys.stdout.buffer
        self.running = True
        self.shutdown_requested = False
        self._write_lock = threading.Lock()
        self._executor = (ThreadPoolExecutor(max_workers=workers, thread_name_prefix='uss-request')
                          if workers > 0 else None)
        self.request_handlers: Dict[str, Callable[[dict], Any]] = {
            'initialize': self.handle_initialize,
            'shutdown': self.handle_shutdown,
            'textDocument/completion': self.handle_completion,
            'completionItem/resolve': resolve_completion,
            'textDocument/hover': self.handle_hover,
            'textDocument/definition': self.handle_definition,
            'textDocument/references': self.handle_references,
            'textDocument/rename': self.handle_rename,
            'textDocument/formatting': self.handle_formatting,
            'textDocument/rangeFormatting': self.handle_range_formatting,
            'textDocument/documentColor': self.handle_document_color,
            'textDocument/colorPresentation': self.handle_color_presentation,
            'uss/classify': self.handle_classify,
        }

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def send_message(self, message: dict):
        """Send a JSON-RPC message to the client."""
        content = json.dumps(message).encode('utf-8')
        header = f'Content-Length: {len(content)}\r\n\r\n'.encode('ascii')
        with self._write_lock:
            self.writer.write(header + content)
            self.writer.flush()

    def send_response(self, request_id: Any, result: Any):
        self.send_message({
            'jsonrpc': '2.0',
            'id': request_id,
            'result': result
        })

    def send_error(self, request_id: Any, code: int, message: str):
        self.send_message({
            'jsonrpc': '2.0',
            'id': request_id,
            'error': {'code': code, 'message': message}
        })

    def send_notification(self, method: str, params: Any):
        self.send_message({
            'jsonrpc': '2.0',
            'method': method,
            'params': params
        })

    def read_message(self) -> Optional[dict]:
        """
        Read one framed message. None means the stream is finished; an empty
        dict means the frame was unusable and should be skipped.
        """
        headers = {}
        while True:
            line = self.reader.readline()
            if not line:
                return None
            line = line.decode('ascii', errors='replace').strip()
            if not line:
                break
            if ':' in line:
                key, value = line.split(':', 1)
                headers[key.strip().lower()] = value.strip()

        try:
            content_length = int(headers.get('content-length', 0))
        except ValueError:
            logger.warning("Bad Content-Length header: %r", headers.get('content-length'))
            return {}
        if content_length <= 0:
            return {}

        content = self.reader.read(content_length)
        if len(content) < content_length:
            return None

        try:
            message = json.loads(content.decode('utf-8'))
        except ValueError as e:
            logger.warning("Dropping unparseable message: %s", e)
            self.send_error(None, PARSE_ERROR, f'Parse error: {e}')
            return {}
        return message if isinstance(message, dict) else {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def handle_initialize(self, params: dict) -> dict:
        client = (params.get('clientInfo') or {}).get('name', 'unknown client')
        logger.info("Initializing for %s", client)
        return {
            'capabilities': {
                'textDocumentSync': {
                    'openClose': True,
                    'change': 2,  # Incremental
                    'save': {'includeText': False}
                },
                'completionProvider': {
                    'triggerCharacters': ['.', '#', ':', '-', '/', '('],
                    'resolveProvider': True
                },
                'hoverProvider': True,
                'definitionProvider': True,
                'referencesProvider': True,
                'renameProvider': True,
                'documentFormattingProvider': True,
                'documentRangeFormattingProvider': True,
                'colorProvider': True,
            },
            'serverInfo': {
                'name': SERVER_NAME,
                'version': SERVER_VERSION
            }
        }

    def handle_initialized(self, params: dict):
        logger.info("Client initialized")
        self.send_notification('window/logMessage', {'type': 3, 'message': f'{SERVER_NAME} ready'})

    def handle_shutdown(self, params: Any) -> None:
        logger.info("Shutdown requested")
        self.shutdown_requested = True
        return None

    # ------------------------------------------------------------------
    # Document sync
    # ------------------------------------------------------------------

    def handle_did_open(self, params: dict):
        doc = params['textDocument']
        self.documents.open(doc['uri'], doc.get('text', ''), doc.get('version', 0))
        self.publish_diagnostics(doc['uri'])

    def handle_did_change(self, params: dict):
        uri = params['textDocument']['uri']
        version = params['textDocument'].get('version')
        changes = []
        for change in params.get('contentChanges', []):
            rng = Range.from_lsp(change['range']) if change.get('range') else None
            changes.append((rng, change.get('text', '')))
        if self.documents.change(uri, changes, version):
            self.publish_diagnostics(uri)

    def handle_did_close(self, params: dict):
        uri = params['textDocument']['uri']
        self.documents.close(uri)
        self.send_notification('textDocument/publishDiagnostics', {'uri': uri, 'diagnostics': []})

    def handle_did_save(self, params: dict):
        self.publish_diagnostics(params['textDocument']['uri'])

    def publish_diagnostics(self, uri: str):
        found = self.documents.query(uri, lambda buffer: (buffer.version, get_diagnostics(buffer)), None)
        if found is None:
            return
        version, diagnostics = found
        logger.debug("Publishing %d diagnostics for %s", len(diagnostics), uri)
        self.send_notification('textDocument/publishDiagnostics', {
            'uri': uri,
            'version': version,
            'diagnostics': [d.to_lsp() for d in diagnostics],
        })

    # ------------------------------------------------------------------
    # Language features
    # ------------------------------------------------------------------

    def handle_completion(self, params: dict) -> List[dict]:
        uri, position = text_document_position(params)
        return self.documents.query(uri, lambda buffer: get_completions(buffer, position), [])

    def handle_hover(self, params: dict) -> Optional[dict]:
        uri, position = text_document_position(params)
        return self.documents.query(uri, lambda buffer: get_hover(buffer, position), None)

    def handle_definition(self, params: dict) -> Optional[dict]:
        uri, position = text_document_position(params)
        rng = self.documents.definition(uri, position)
        if rng is None:
            return None
        return {'uri': uri, 'range': rng.to_lsp()}

    def handle_references(self, params: dict) -> List[dict]:
        uri, position = text_document_position(params)
        return [{'uri': uri, 'range': rng.to_lsp()} for rng in self.documents.references(uri, position)]

    def handle_rename(self, params: dict) -> Optional[dict]:
        uri, position = text_document_position(params)
        changes = self.documents.rename(uri, position, params.get('newName', ''))
        if changes is None:
            return None
        return {'changes': {target: [edit.to_lsp() for edit in edits] for target, edits in changes.items()}}

    def handle_formatting(self, params: dict) -> List[dict]:
        uri = params['textDocument']['uri']
        options = FormattingOptions.from_lsp(params.get('options'))
        edits = self.documents.query(uri, lambda buffer: format_document(buffer, options), [])
        return [edit.to_lsp() for edit in edits]

    def handle_range_formatting(self, params: dict) -> List[dict]:
        uri = params['textDocument']['uri']
        rng = Range.from_lsp(params['range'])
        options = FormattingOptions.from_lsp(params.get('options'))
        edits = self.documents.query(uri, lambda buffer: format_range(buffer, rng, options), [])
        return [edit.to_lsp() for edit in edits]

    def handle_document_color(self, params: dict) -> List[dict]:
        uri = params['textDocument']['uri']
        return self.documents.query(uri, find_colors, [])

    def handle_color_presentation(self, params: dict) -> List[dict]:
        return color_presentations(Color.from_lsp(params['color']))

    def handle_classify(self, params: dict) -> dict:
        uri, position = text_document_position(params)
        return self.documents.classify(uri, position).to_lsp()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle_notification(self, method: str, params: dict):
        if method == 'initialized':
            self.handle_initialized(params)

        elif method == 'exit':
            self.running = False

        elif method == 'textDocument/didOpen':
            self.handle_did_open(params)

        elif method == 'textDocument/didChange':
            self.handle_did_change(params)

        elif method == 'textDocument/didClose':
            self.handle_did_close(params)

        elif method == 'textDocument/didSave':
            self.handle_did_save(params)

        else:
            logger.debug("Ignoring notification %s", method)

    def serve_request(self, request_id: Any, method: str, params: Any):
        handler = self.request_handlers.get(method)
        if handler is None:
            # Unknown method with ID - send empty response
            self.send_response(request_id, None)
            return
        try:
            result = handler(params)
        except Exception as e:
            logger.exception("Request %s failed", method)
            self.send_error(request_id, INTERNAL_ERROR, str(e))
            return
        self.send_response(request_id, result)

    def handle_message(self, message: dict):
        method = message.get('method')
        if not method:
            return  # a response to something we never asked, or junk
        params = message.get('params')
        if params is None:
            params = {}
        request_id = message.get('id')

        if request_id is None:
            try:
                self.handle_notification(method, params)
            except Exception:
                logger.exception("Notification %s failed", method)
            return

        if self._executor is not None and method not in _INLINE_REQUESTS:
            self._executor.submit(self.serve_request, request_id, method, params)
        else:
            self.serve_request(request_id, method, params)

    def run(self):
        """Main server loop."""
        logger.info("%s %s listening on stdio", SERVER_NAME, SERVER_VERSION)
        try:
            while self.running:
                message = self.read_message()
                if message is None:
                    break
                if message:
                    self.handle_message(message)
        finally:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
        logger.info("Server loop finished")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='uss-lsp', description='Language server for Unity Style Sheets')
    parser.add_argument('--log-level', type=str.upper,
                        default=os.environ.get('USS_LSP_LOG_LEVEL', 'WARNING').upper(),
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='logging verbosity (env: USS_LSP_LOG_LEVEL)')
    parser.add_argument('--log-file', help='write logs here instead of stderr')
    parser.add_argument('--workers', type=int, default=4,
                        help='request worker threads; 0 answers requests on the reader thread')
    parser.add_argument('--stdio', action='store_true',
                        help='accepted for editor compatibility; stdio is the only transport')
    args = parser.parse_args(argv)
    if args.workers < 0:
        parser.error('--workers must be 0 or more')
    return args


def configure_logging(level: str, log_file: Optional[str] = None):
    # stdout carries the protocol, so logs never go there
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding='utf-8')
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    server = UssLanguageServer(workers=args.workers)
    server.run()
    return 0 if server.shutdown_requested else 1


if __name__ == '__main__':
    sys.exit(main())

import io
import json

import pytest

from uss_server import INTERNAL_ERROR, PARSE_ERROR, SERVER_NAME, UssLanguageServer, parse_args

URI = 'file:///Assets/UI/main.uss'


def frame(message):
    body = json.dumps(message).encode('utf-8')
    return f'Content-Length: {len(body)}\r\n\r\n'.encode('ascii') + body


def request(request_id, method, params=None):
    return frame({'jsonrpc': '2.0', 'id': request_id, 'method': method, 'params': params or {}})


def notify(method, params=None):
    return frame({'jsonrpc': '2.0', 'method': method, 'params': params or {}})


def read_frames(data):
    messages = []
    stream = io.BytesIO(data)
    while True:
        header = stream.readline()
        if not header:
            return messages
        length = int(header.split(b':')[1])
        stream.readline()
        messages.append(json.loads(stream.read(length).decode('utf-8')))


def run_session(*frames):
    output = io.BytesIO()
    server = UssLanguageServer(io.BytesIO(b''.join(frames)), output, workers=0)
    server.run()
    return server, read_frames(output.getvalue())


def responses(messages):
    return {m['id']: m for m in messages if 'id' in m and 'method' not in m}


def notifications(messages, method):
    return [m['params'] for m in messages if m.get('method') == method]


def text_position(line, character):
    return {'textDocument': {'uri': URI}, 'position': {'line': line, 'character': character}}


def open_document(text, version=1):
    return notify('textDocument/didOpen', {
        'textDocument': {'uri': URI, 'languageId': 'uss', 'version': version, 'text': text},
    })


def test_initialize_advertises_capabilities():
    server, messages = run_session(
        request(1, 'initialize', {'clientInfo': {'name': 'pytest'}}),
        notify('initialized'),
    )
    result = responses(messages)[1]['result']
    assert result['serverInfo']['name'] == SERVER_NAME
    capabilities = result['capabilities']
    assert capabilities['textDocumentSync']['change'] == 2
    assert capabilities['hoverProvider'] is True
    assert capabilities['renameProvider'] is True
    assert '.' in capabilities['completionProvider']['triggerCharacters']
    assert notifications(messages, 'window/logMessage')[0]['message'] == f'{SERVER_NAME} ready'


def test_open_publishes_diagnostics():
    _, messages = run_session(open_document("Button {\n    colr: red;\n", version=3))
    published = notifications(messages, 'textDocument/publishDiagnostics')
    assert len(published) == 1
    assert published[0]['uri'] == URI
    assert published[0]['version'] == 3
    assert [d['message'] for d in published[0]['diagnostics']] == [
        "Unknown USS property: 'colr'",
        'Unclosed brace(s): 1 opening brace(s) without closing',
    ]


def test_incremental_change_then_requests():
    change = notify('textDocument/didChange', {
        'textDocument': {'uri': URI, 'version': 2},
        'contentChanges': [{
            'range': {'start': {'line': 1, 'character': 0}, 'end': {'line': 1, 'character': 0}},
            'text': '    width: ',
        }],
    })
    server, messages = run_session(
        open_document("Button {\n\n}"),
        change,
        request(1, 'uss/classify', text_position(1, 11)),
        request(2, 'textDocument/completion', text_position(1, 11)),
    )
    assert server.documents.get(URI).buffer.full_text() == "Button {\n    width: \n}"
    by_id = responses(messages)
    assert by_id[1]['result'] == {'kind': 'property-value', 'property': 'width'}
    assert 'auto' in [item['label'] for item in by_id[2]['result']]
    versions = [p['version'] for p in notifications(messages, 'textDocument/publishDiagnostics')]
    assert versions == [1, 2]


def test_hover_definition_references_and_rename():
    text = ":root {\n    --gap: 4px;\n}\nButton {\n    margin: var(--gap);\n}\n"
    _, messages = run_session(
        open_document(text),
        request(1, 'textDocument/hover', text_position(4, 6)),
        request(2, 'textDocument/definition', text_position(4, 18)),
        request(3, 'textDocument/references', dict(text_position(4, 18), context={'includeDeclaration': True})),
        request(4, 'textDocument/rename', dict(text_position(1, 6), newName='--space')),
        request(5, 'textDocument/rename', dict(text_position(2, 0), newName='--space')),
    )
    by_id = responses(messages)
    assert by_id[1]['result']['contents']['value'].startswith('## margin')
    assert by_id[2]['result'] == {
        'uri': URI,
        'range': {'start': {'line': 1, 'character': 4}, 'end': {'line': 1, 'character': 9}},
    }
    assert [ref['range']['start']['line'] for ref in by_id[3]['result']] == [1, 4]
    edits = by_id[4]['result']['changes'][URI]
    assert [edit['newText'] for edit in edits] == ['--space', '--space']
    assert by_id[5]['result'] is None


def test_formatting_and_colours():
    _, messages = run_session(
        open_document("Button{color:#ff0000;}"),
        request(1, 'textDocument/formatting', {'textDocument': {'uri': URI},
                                               'options': {'tabSize': 2, 'insertSpaces': True}}),
        request(2, 'textDocument/documentColor', {'textDocument': {'uri': URI}}),
        request(3, 'textDocument/colorPresentation', {
            'textDocument': {'uri': URI},
            'color': {'red': 1, 'green': 0, 'blue': 0, 'alpha': 1},
            'range': {'start': {'line': 0, 'character': 13}, 'end': {'line': 0, 'character': 20}},
        }),
    )
    by_id = responses(messages)
    assert by_id[1]['result'][0]['newText'] == "Button {\n  color: #ff0000;\n}\n"
    assert by_id[2]['result'][0]['color'] == {'red': 1.0, 'green': 0.0, 'blue': 0.0, 'alpha': 1.0}
    assert by_id[3]['result'][0] == {'label': '#FF0000'}


def test_close_clears_diagnostics():
    server, messages = run_session(
        open_document("Button {"),
        notify('textDocument/didClose', {'textDocument': {'uri': URI}}),
    )
    assert URI not in server.documents
    assert notifications(messages, 'textDocument/publishDiagnostics')[-1] == {'uri': URI, 'diagnostics': []}


def test_requests_for_unopened_documents():
    _, messages = run_session(
        request(1, 'textDocument/completion', text_position(0, 0)),
        request(2, 'textDocument/hover', text_position(0, 0)),
        request(3, 'textDocument/references', text_position(0, 0)),
    )
    by_id = responses(messages)
    assert by_id[1]['result'] == []
    assert by_id[2]['result'] is None
    assert by_id[3]['result'] == []


def test_unknown_method_gets_null_result():
    _, messages = run_session(request(7, 'workspace/symbol', {'query': ''}))
    assert responses(messages)[7] == {'jsonrpc': '2.0', 'id': 7, 'result': None}


def test_failing_handler_reports_internal_error():
    _, messages = run_session(
        request(1, 'textDocument/hover', {'textDocument': {'uri': URI}}),
        request(2, 'shutdown'),
    )
    by_id = responses(messages)
    assert by_id[1]['error']['code'] == INTERNAL_ERROR
    assert by_id[2]['result'] is None


def test_unparseable_message_is_skipped():
    body = b'{not json'
    broken = f'Content-Length: {len(body)}\r\n\r\n'.encode('ascii') + body
    server, messages = run_session(broken, request(1, 'shutdown'))
    assert messages[0]['error']['code'] == PARSE_ERROR
    assert messages[0]['id'] is None
    assert responses(messages)[1]['result'] is None
    assert server.shutdown_requested


def test_content_length_counts_bytes():
    text = "/* été ☃ */\nButton {}"
    server, _ = run_session(open_document(text))
    assert server.documents.get(URI).buffer.full_text() == text


def test_exit_stops_the_loop():
    server, messages = run_session(
        request(1, 'shutdown'),
        notify('exit'),
        request(2, 'textDocument/hover', text_position(0, 0)),
    )
    assert server.shutdown_requested
    assert server.running is False
    assert 2 not in responses(messages)


def test_worker_pool_answers_every_request():
    frames = [open_document("Button {\n    width: 1px;\n}")]
    frames += [request(i, 'textDocument/hover', text_position(1, 6)) for i in range(1, 21)]
    output = io.BytesIO()
    server = UssLanguageServer(io.BytesIO(b''.join(frames)), output, workers=4)
    server.run()
    by_id = responses(read_frames(output.getvalue()))
    assert sorted(by_id) == list(range(1, 21))
    assert all(m['result']['contents']['value'].startswith('## width') for m in by_id.values())


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv('USS_LSP_LOG_LEVEL', raising=False)
    args = parse_args([])
    assert args.log_level == 'WARNING'
    assert args.workers == 4
    assert args.log_file is None


def test_parse_args_environment(monkeypatch):
    monkeypatch.setenv('USS_LSP_LOG_LEVEL', 'debug')
    assert parse_args([]).log_level == 'DEBUG'
    assert parse_args(['--log-level', 'error', '--stdio']).log_level == 'ERROR'


def test_parse_args_rejects_negative_workers():
    with pytest.raises(SystemExit):
        parse_args(['--workers', '-1'])

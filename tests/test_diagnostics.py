import pytest

from uss_buffer import TextBuffer
from uss_diagnostics import check_hex_colors, check_missing_semicolon, check_parentheses, get_diagnostics
from uss_types import DiagnosticSeverity, Position, Range


def diagnose(text):
    return get_diagnostics(TextBuffer(text))


def span(line, start, end):
    return Range(Position(line, start), Position(line, end))


def test_clean_stylesheet():
    text = (
        ":root {\n"
        "    --accent: #ff8800;\n"
        "}\n"
        "Button:hover {\n"
        "    color: var(--accent);\n"
        "    background-image: url(\"project://database/Assets/icon.png\");\n"
        "    width: calc(100% - 4px);\n"
        "}\n"
    )
    assert diagnose(text) == []


def test_seven_digit_hex_is_the_only_error():
    diagnostics = diagnose("color: #1234567;")
    assert len(diagnostics) == 1
    assert diagnostics[0].severity == DiagnosticSeverity.ERROR
    assert diagnostics[0].range == span(0, 7, 15)
    assert diagnostics[0].message == 'Invalid hex color length: 7. Expected 3, 4, 6, or 8 characters.'


@pytest.mark.parametrize('value', ['#abc', '#abcd', '#aabbcc', '#aabbccdd'])
def test_valid_hex_lengths(value):
    assert check_hex_colors(f"  color: {value};", 0) == []


def test_hex_followed_by_word_is_not_a_colour():
    assert check_hex_colors("#add-button {", 0) == []


def test_unclosed_brace_reported_on_last_line():
    diagnostics = diagnose("Button {\n    width: 10px;\n")
    assert len(diagnostics) == 1
    assert diagnostics[0].severity == DiagnosticSeverity.ERROR
    assert diagnostics[0].range == span(2, 0, 0)
    assert diagnostics[0].message == 'Unclosed brace(s): 1 opening brace(s) without closing'


def test_extra_closing_brace():
    diagnostics = diagnose("Button { }\n}")
    assert [d.message for d in diagnostics] == ['Extra closing brace(s): 1 more closing than opening']
    assert diagnostics[0].range == span(1, 0, 0)


def test_unknown_property_warning():
    diagnostics = diagnose("Button {\n  colr: red;\n}")
    assert len(diagnostics) == 1
    assert diagnostics[0].severity == DiagnosticSeverity.WARNING
    assert diagnostics[0].range == span(1, 2, 6)
    assert diagnostics[0].message == "Unknown USS property: 'colr'"


def test_custom_properties_are_never_unknown():
    assert diagnose("Button {\n  --my-size: 4px;\n}") == []


def test_properties_outside_blocks_are_not_checked():
    assert diagnose("colr: red;") == []


def test_empty_value():
    diagnostics = diagnose("Button {\n  width: ;\n}")
    assert len(diagnostics) == 1
    assert diagnostics[0].severity == DiagnosticSeverity.ERROR
    assert diagnostics[0].range == span(1, 7, 10)
    assert diagnostics[0].message == 'Property value is empty'


def test_empty_value_without_semicolon():
    diagnostics = diagnose("Button {\n  width:\n}")
    assert [(d.severity, d.message) for d in diagnostics] == [
        (DiagnosticSeverity.ERROR, 'Property value is empty'),
        (DiagnosticSeverity.WARNING, 'Missing semicolon at end of declaration'),
    ]


def test_selector_with_pseudo_class_is_not_a_declaration():
    assert diagnose("Button:hover {\n}") == []


def test_unclosed_parenthesis():
    diagnostics = diagnose("Button {\n  width: calc(1px;\n}")
    assert len(diagnostics) == 1
    assert diagnostics[0].range == span(1, 13, 14)
    assert diagnostics[0].message == 'Unclosed parenthesis'


def test_unmatched_closing_parenthesis():
    diagnostics = diagnose("Button {\n  width: 1px);\n}")
    assert len(diagnostics) == 1
    assert diagnostics[0].range == span(1, 12, 13)
    assert diagnostics[0].message == 'Unmatched closing parenthesis'


def test_one_parenthesis_diagnostic_per_line():
    diagnostic = check_parentheses(")) ((", 4)
    assert diagnostic.range == span(4, 0, 1)
    assert check_parentheses("a(b(c)", 0).range == span(0, 1, 2)
    assert check_parentheses("rgb(1, 2, 3)", 0) is None


def test_missing_semicolon():
    diagnostics = diagnose("Button {\n  width: 10px\n}")
    assert len(diagnostics) == 1
    assert diagnostics[0].severity == DiagnosticSeverity.WARNING
    assert diagnostics[0].range == span(1, 12, 13)


def test_missing_semicolon_ignores_trailing_whitespace():
    assert check_missing_semicolon("  width: 10px   ", 0).range == span(0, 12, 13)


@pytest.mark.parametrize('line', [
    "  background-image: url(a.png)",
    "  color: var(--accent)",
    "  width: 10px;",
    "Button:hover {",
    "}",
    "",
])
def test_no_missing_semicolon(line):
    assert check_missing_semicolon(line, 0) is None


def test_comment_lines_are_skipped():
    text = "Button {\n  /* colr: #12345 */\n  // widht: (\n}"
    assert diagnose(text) == []


def test_crlf_line_endings():
    diagnostics = diagnose("Button {\r\n  width: 10px\r\n}\r\n")
    assert len(diagnostics) == 1
    assert diagnostics[0].range == span(1, 12, 13)


def test_diagnostics_come_in_line_order():
    text = "Button {\n  colr: #12;\n  width: (\n}"
    lines = [d.range.start.line for d in diagnose(text)]
    assert lines == sorted(lines)
    assert lines == [1, 1, 2, 2]


def test_to_lsp():
    diagnostic = diagnose("color: #12;")[0]
    assert diagnostic.to_lsp() == {
        'range': {'start': {'line': 0, 'character': 7}, 'end': {'line': 0, 'character': 10}},
        'severity': 1,
        'source': 'uss',
        'message': 'Invalid hex color length: 2. Expected 3, 4, 6, or 8 characters.',
    }

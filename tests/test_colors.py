import pytest

from uss_buffer import TextBuffer
from uss_colors import Color, color_presentations, find_colors, parse_hex_color


@pytest.mark.parametrize('digits, expected', [
    ('fff', Color(1.0, 1.0, 1.0, 1.0)),
    ('#000000', Color(0.0, 0.0, 0.0, 1.0)),
    ('ff000000', Color(1.0, 0.0, 0.0, 0.0)),
    ('f00f', Color(1.0, 0.0, 0.0, 1.0)),
])
def test_parse_hex_color(digits, expected):
    assert parse_hex_color(digits) == expected


@pytest.mark.parametrize('digits', ['12345', 'ff', '', 'zzz'])
def test_parse_hex_color_rejects(digits):
    assert parse_hex_color(digits) is None


def test_find_colors():
    buffer = TextBuffer(
        "Button {\n"
        "    color: #ff0000;\n"
        "    background-color: rgba(0, 128, 255, 0.5);\n"
        "}\n"
    )
    colors = find_colors(buffer)
    assert colors[0] == {
        'range': {'start': {'line': 1, 'character': 11}, 'end': {'line': 1, 'character': 18}},
        'color': {'red': 1.0, 'green': 0.0, 'blue': 0.0, 'alpha': 1.0},
    }
    assert colors[1]['range'] == {'start': {'line': 2, 'character': 22}, 'end': {'line': 2, 'character': 44}}
    assert colors[1]['color']['green'] == pytest.approx(128 / 255)
    assert colors[1]['color']['alpha'] == 0.5
    assert len(colors) == 2


def test_selectors_are_not_colours():
    assert find_colors(TextBuffer("#header {\n}\n#bad-id {\n}")) == []


def test_rgb_channels_are_capped():
    colors = find_colors(TextBuffer("color: rgb(300, 0, 0);"))
    assert colors[0]['color'] == {'red': 1.0, 'green': 0.0, 'blue': 0.0, 'alpha': 1.0}


def test_presentations_for_opaque_colour():
    assert color_presentations(Color(1.0, 0.0, 0.0)) == [{'label': '#FF0000'}, {'label': 'rgb(255, 0, 0)'}]


def test_presentations_for_translucent_colour():
    assert color_presentations(Color(0.0, 0.0, 0.0, 0.5)) == [
        {'label': '#00000080'},
        {'label': 'rgba(0, 0, 0, 0.50)'},
    ]


def test_color_from_lsp():
    assert Color.from_lsp({'red': 1, 'green': 0.5, 'blue': 0}) == Color(1.0, 0.5, 0.0, 1.0)

from uss_buffer import TextBuffer
from uss_completion import get_completions, property_value_completions, resolve_completion
from uss_data import USS_PROPERTIES, USS_PSEUDO_CLASSES
from uss_types import Position

DOCUMENT = (
    ":root {\n"
    "    --accent: #ff8800;\n"
    "    --spacing: 4px;\n"
    "}\n"
    ".panel {\n"
    "}\n"
    "#header {\n"
    "}\n"
    ".card-title {\n"
    "}\n"
)


def complete(text):
    buffer = TextBuffer(text)
    return get_completions(buffer, buffer.offset_to_position(len(buffer)))


def labels(items):
    return [item['label'] for item in items]


def test_selector_completions_offer_elements_and_snippets():
    items = complete("")
    found = labels(items)
    assert 'Button' in found
    assert 'VisualElement' in found
    assert {'.', '#', '*'} <= set(found)
    button = next(item for item in items if item['label'] == 'Button')
    assert button['kind'] == 7
    assert button['insertText'] == 'Button {\n    $0\n}'
    assert button['insertTextFormat'] == 2


def test_class_completions_come_from_the_document():
    items = complete(DOCUMENT + "Label.")
    assert labels(items) == ['card-title', 'panel']
    assert all(item['kind'] == 7 for item in items)


def test_id_completions_come_from_the_document():
    assert labels(complete(DOCUMENT + "Label #")) == ['header']


def test_pseudo_class_completions():
    found = labels(complete("Button:"))
    assert found == list(USS_PSEUDO_CLASSES)
    assert 'hover' in found


def test_property_name_completions():
    items = complete("Button {\n    ")
    assert labels(items) == list(USS_PROPERTIES)
    width = next(item for item in items if item['label'] == 'width')
    assert width['kind'] == 10
    assert width['insertText'] == 'width: $0;'


def test_variable_completions():
    assert labels(complete(DOCUMENT + "Button {\n    margin: var(")) == ['--accent', '--spacing']


def test_url_completions():
    assert labels(complete("Button {\n    background-image: url(")) == ['Assets/', 'project://']


def test_nothing_for_unknown_context():
    assert complete("Button {\n    not a declaration") == []


def test_keyword_values_for_known_property():
    found = labels(complete("Button {\n    display: "))
    assert found[:2] == ['flex', 'none']
    assert 'var()' in found


def test_color_values():
    found = labels(property_value_completions('border-color'))
    assert 'red' in found
    assert 'rgb()' in found
    assert 'rgba()' in found


def test_length_units_for_sizes():
    found = labels(property_value_completions('width'))
    assert '0px' in found
    assert '0%' in found
    assert '0deg' not in found
    assert '0ms' not in found


def test_angle_units_for_rotate():
    found = labels(property_value_completions('rotate'))
    assert ['0deg', '0rad', '0turn'] == [label for label in found if label.startswith('0')]


def test_time_units_for_durations():
    found = labels(property_value_completions('transition-duration'))
    assert '0s' in found
    assert '0ms' in found


def test_asset_functions():
    assert 'url()' in labels(property_value_completions('background-image'))
    assert 'resource()' in labels(property_value_completions('-unity-font'))
    assert 'url()' in labels(property_value_completions('cursor'))
    assert 'url()' not in labels(property_value_completions('width'))


def test_unknown_property_still_offers_var():
    assert labels(property_value_completions('--my-thing')) == ['var()']


def test_resolve_property_item():
    item = resolve_completion({'label': 'width', 'kind': 10})
    assert item['documentation']['kind'] == 'markdown'
    assert item['documentation']['value'].startswith('## width')
    assert '**Syntax:**' in item['documentation']['value']


def test_resolve_element_item():
    item = resolve_completion({'label': 'Button', 'kind': 7})
    assert 'A clickable button.' in item['documentation']['value']


def test_resolve_leaves_other_items_alone():
    item = {'label': 'panel', 'kind': 7}
    assert resolve_completion(dict(item)) == item


def test_resolve_class_named_like_an_element():
    items = complete(".Button {\n}\nLabel.")
    assert items == [{'label': 'Button', 'kind': 7, 'detail': 'Class selector'}]
    assert 'documentation' not in resolve_completion(items[0])

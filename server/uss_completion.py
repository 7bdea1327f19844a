"""
Completion items for USS.

Classifies the cursor first, then hands out whatever the knowledge
tables (or the document itself) have for that context.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

from typing import Any, Dict, List

from uss_buffer import TextBuffer
from uss_context import ContextKind, classify
from uss_data import ANGLE_UNITS, USS_COLORS, USS_PROPERTIES, USS_PSEUDO_CLASSES, USS_UNITS, UXML_ELEMENTS
from uss_references import class_names, id_names, variable_names
from uss_types import Position

SNIPPET = 2  # InsertTextFormat.Snippet
CLASS_SELECTOR_DETAIL = 'Class selector'

# Substrings of a property name that decide which extra values it gets
_SIZE_HINTS = ('width', 'height', 'margin', 'padding', 'size', 'radius', 'spacing')
_ASSET_HINTS = ('image', 'font')

CompletionItem = Dict[str, Any]


def get_completions(buffer: TextBuffer, position: Position) -> List[CompletionItem]:
    context = classify(buffer, position)
    kind = context.kind

    if kind == ContextKind.SELECTOR:
        return selector_completions()
    if kind == ContextKind.CLASS_SELECTOR:
        return [{'label': name, 'kind': 7, 'detail': CLASS_SELECTOR_DETAIL}  # Class
                for name in sorted(class_names(buffer.full_text()))]
    if kind == ContextKind.ID_SELECTOR:
        return [{'label': name, 'kind': 18, 'detail': 'ID selector'}  # Reference
                for name in sorted(id_names(buffer.full_text()))]
    if kind == ContextKind.PSEUDO_CLASS:
        return pseudo_class_completions()
    if kind == ContextKind.PROPERTY_NAME:
        return property_name_completions()
    if kind == ContextKind.PROPERTY_VALUE:
        return property_value_completions(context.property_name or '')
    if kind == ContextKind.URL_ARGUMENT:
        return [
            {'label': 'Assets/', 'kind': 19, 'detail': 'Assets folder'},  # Folder
            {'label': 'project://', 'kind': 18, 'detail': 'Project-relative path'},  # Reference
        ]
    if kind == ContextKind.VARIABLE_ARGUMENT:
        return [{'label': name, 'kind': 6, 'detail': 'USS variable'}  # Variable
                for name in sorted(variable_names(buffer.full_text()))]
    return []


def selector_completions() -> List[CompletionItem]:
    items = []
    for name, (namespace, desc) in UXML_ELEMENTS.items():
        items.append({
            'label': name,
            'kind': 7,  # Class
            'detail': namespace,
            'documentation': desc,
            'insertText': f'{name} {{\n    $0\n}}',
            'insertTextFormat': SNIPPET,
        })

    for label, detail, snippet in (('.', 'Class selector', '.$1 {\n    $0\n}'),
                                   ('#', 'ID selector', '#$1 {\n    $0\n}'),
                                   ('*', 'Universal selector', '* {\n    $0\n}')):
        items.append({
            'label': label,
            'kind': 15,  # Snippet
            'detail': detail,
            'insertText': snippet,
            'insertTextFormat': SNIPPET,
        })
    return items


def pseudo_class_completions() -> List[CompletionItem]:
    return [{
        'label': name,
        'kind': 14,  # Keyword
        'detail': 'Pseudo-class',
        'documentation': desc,
    } for name, desc in USS_PSEUDO_CLASSES.items()]


def property_name_completions() -> List[CompletionItem]:
    items = []
    for name, prop in USS_PROPERTIES.items():
        items.append({
            'label': name,
            'kind': 10,  # Property
            'detail': prop.syntax,
            'documentation': {
                'kind': 'markdown',
                'value': f'{prop.description}\n\n**Initial:** `{prop.initial}`\n\n'
                         f'**Inherited:** {"Yes" if prop.inherited else "No"}',
            },
            'insertText': f'{name}: $0;',
            'insertTextFormat': SNIPPET,
        })
    return items


def _function(label: str, snippet: str) -> CompletionItem:
    return {'label': label, 'kind': 3, 'insertText': snippet, 'insertTextFormat': SNIPPET}  # Function


def _unit(unit: str, desc: str) -> CompletionItem:
    return {
        'label': f'0{unit}',
        'kind': 11,  # Unit
        'detail': desc,
        'insertText': f'${{1:0}}{unit}',
        'insertTextFormat': SNIPPET,
    }


def property_value_completions(property_name: str) -> List[CompletionItem]:
    """Values that make sense after `property_name:`."""
    items = []

    prop = USS_PROPERTIES.get(property_name)
    if prop:
        for value in prop.values:
            items.append({
                'label': value,
                'kind': 12,  # Value
                'detail': f'Value for {property_name}',
            })

    if 'color' in property_name:
        for name, hex_value in USS_COLORS.items():
            items.append({
                'label': name,
                'kind': 16,  # Color
                'detail': hex_value,
                'documentation': f'Color: {hex_value}',
            })
        items.append(_function('rgb()', 'rgb(${1:0}, ${2:0}, ${3:0})'))
        items.append(_function('rgba()', 'rgba(${1:0}, ${2:0}, ${3:0}, ${4:1})'))

    if any(hint in property_name for hint in _ASSET_HINTS) or property_name == 'cursor':
        items.append(_function('url()', 'url("$1")'))
        items.append(_function('resource()', 'resource("$1")'))

    items.append(_function('var()', 'var(--$1)'))

    if any(hint in property_name for hint in _SIZE_HINTS):
        for unit, desc in USS_UNITS.items():
            if unit in ANGLE_UNITS or unit in ('s', 'ms'):
                continue
            items.append(_unit(unit, desc))

    if property_name == 'rotate':
        for unit in ANGLE_UNITS:
            items.append(_unit(unit, USS_UNITS[unit]))

    if 'duration' in property_name or 'delay' in property_name:
        items.append(_unit('s', USS_UNITS['s']))
        items.append(_unit('ms', USS_UNITS['ms']))

    return items


def resolve_completion(item: CompletionItem) -> CompletionItem:
    """Fill in the long-form documentation for property and element items."""
    label = item.get('label', '')
    kind = item.get('kind')

    if kind == 10 and label in USS_PROPERTIES:
        prop = USS_PROPERTIES[label]
        item['documentation'] = {
            'kind': 'markdown',
            'value': f'## {label}\n\n{prop.description}\n\n**Syntax:** `{prop.syntax}`\n\n'
                     f'**Initial value:** `{prop.initial}`\n\n'
                     f'**Inherited:** {"Yes" if prop.inherited else "No"}',
        }
    elif kind == 7 and label in UXML_ELEMENTS and item.get('detail') != CLASS_SELECTOR_DETAIL:
        namespace, desc = UXML_ELEMENTS[label]
        item['documentation'] = {
            'kind': 'markdown',
            'value': f'## {label}\n\n{desc}\n\n**Namespace:** `{namespace}`',
        }
    return item

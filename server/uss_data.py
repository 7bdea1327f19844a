"""
USS Language Definitions

Unity Style Sheets: CSS that went to Unity and came back with opinions
about text alignment. Everything here is built once at import time and
only ever read afterwards.

MIT/Apache 2.0 License - Zane Hambly 2025
"""

from typing import Dict, List, NamedTuple, Tuple


class UssProperty(NamedTuple):
    syntax: str
    initial: str
    inherited: bool
    values: Tuple[str, ...]
    description: str


def _prop(syntax: str, initial: str, inherited: bool, values: List[str], description: str) -> UssProperty:
    return UssProperty(syntax, initial, inherited, tuple(values), description)


_LENGTH_AUTO = '<length> | <percentage> | auto'
_ALIGN = 'auto | flex-start | center | flex-end | stretch'
_CURSORS = [
    'arrow', 'text', 'resize-vertical', 'resize-horizontal', 'link', 'slide-arrow',
    'resize-up-right', 'resize-up-left', 'move-arrow', 'rotate-arrow', 'scale-arrow',
    'arrow-plus', 'arrow-minus', 'pan', 'orbit', 'zoom', 'fps',
    'split-resize-up-down', 'split-resize-left-right',
]

# Properties - what a declaration block is allowed to say
USS_PROPERTIES: Dict[str, UssProperty] = {
    # Flex layout
    'flex-direction': _prop('row | row-reverse | column | column-reverse', 'column', False,
                            ['row', 'row-reverse', 'column', 'column-reverse'],
                            'Specifies the direction of the main axis in the flex container.'),
    'flex-wrap': _prop('nowrap | wrap | wrap-reverse', 'nowrap', False,
                       ['nowrap', 'wrap', 'wrap-reverse'],
                       'Controls whether flex items wrap to multiple lines.'),
    'flex-grow': _prop('<number>', '0', False, [],
                       'Specifies how much the item will grow relative to other flex items.'),
    'flex-shrink': _prop('<number>', '1', False, [],
                         'Specifies how much the item will shrink relative to other flex items.'),
    'flex-basis': _prop(_LENGTH_AUTO, 'auto', False, ['auto'],
                        'Specifies the initial main size of a flex item.'),
    'align-items': _prop(_ALIGN, 'stretch', False, ['auto', 'flex-start', 'center', 'flex-end', 'stretch'],
                         'Aligns flex items along the cross axis.'),
    'align-self': _prop(_ALIGN, 'auto', False, ['auto', 'flex-start', 'center', 'flex-end', 'stretch'],
                        'Overrides the align-items value for specific flex items.'),
    'align-content': _prop(_ALIGN, 'auto', False,
                           ['auto', 'flex-start', 'center', 'flex-end', 'stretch',
                            'space-between', 'space-around'],
                           'Aligns flex lines within the flex container when there is extra '
                           'space on the cross axis.'),
    'justify-content': _prop('flex-start | center | flex-end | space-between | space-around', 'flex-start',
                             False, ['flex-start', 'center', 'flex-end', 'space-between', 'space-around'],
                             'Aligns flex items along the main axis.'),

    # Size
    'width': _prop(_LENGTH_AUTO, 'auto', False, ['auto'], 'Sets the width of an element.'),
    'height': _prop(_LENGTH_AUTO, 'auto', False, ['auto'], 'Sets the height of an element.'),
    'min-width': _prop(_LENGTH_AUTO, 'auto', False, ['auto'], 'Sets the minimum width of an element.'),
    'min-height': _prop(_LENGTH_AUTO, 'auto', False, ['auto'], 'Sets the minimum height of an element.'),
    'max-width': _prop('<length> | <percentage> | none', 'none', False, ['none'],
                       'Sets the maximum width of an element.'),
    'max-height': _prop('<length> | <percentage> | none', 'none', False, ['none'],
                        'Sets the maximum height of an element.'),

    # Margins and padding
    'margin': _prop(_LENGTH_AUTO, '0', False, ['auto'], 'Shorthand for setting all margins.'),
    'margin-left': _prop(_LENGTH_AUTO, '0', False, ['auto'], 'Sets the left margin of an element.'),
    'margin-right': _prop(_LENGTH_AUTO, '0', False, ['auto'], 'Sets the right margin of an element.'),
    'margin-top': _prop(_LENGTH_AUTO, '0', False, ['auto'], 'Sets the top margin of an element.'),
    'margin-bottom': _prop(_LENGTH_AUTO, '0', False, ['auto'], 'Sets the bottom margin of an element.'),
    'padding': _prop('<length> | <percentage>', '0', False, [], 'Shorthand for setting all padding.'),
    'padding-left': _prop('<length> | <percentage>', '0', False, [], 'Sets the left padding of an element.'),
    'padding-right': _prop('<length> | <percentage>', '0', False, [], 'Sets the right padding of an element.'),
    'padding-top': _prop('<length> | <percentage>', '0', False, [], 'Sets the top padding of an element.'),
    'padding-bottom': _prop('<length> | <percentage>', '0', False, [],
                            'Sets the bottom padding of an element.'),

    # Borders
    'border-width': _prop('<length>', '0', False, [], 'Sets the width of all borders.'),
    'border-left-width': _prop('<length>', '0', False, [], 'Sets the width of the left border.'),
    'border-right-width': _prop('<length>', '0', False, [], 'Sets the width of the right border.'),
    'border-top-width': _prop('<length>', '0', False, [], 'Sets the width of the top border.'),
    'border-bottom-width': _prop('<length>', '0', False, [], 'Sets the width of the bottom border.'),
    'border-color': _prop('<color>', 'black', False, [], 'Sets the color of all borders.'),
    'border-left-color': _prop('<color>', 'black', False, [], 'Sets the color of the left border.'),
    'border-right-color': _prop('<color>', 'black', False, [], 'Sets the color of the right border.'),
    'border-top-color': _prop('<color>', 'black', False, [], 'Sets the color of the top border.'),
    'border-bottom-color': _prop('<color>', 'black', False, [], 'Sets the color of the bottom border.'),
    'border-radius': _prop('<length>', '0', False, [], 'Sets the radius of all corners.'),
    'border-top-left-radius': _prop('<length>', '0', False, [], 'Sets the radius of the top-left corner.'),
    'border-top-right-radius': _prop('<length>', '0', False, [], 'Sets the radius of the top-right corner.'),
    'border-bottom-left-radius': _prop('<length>', '0', False, [],
                                       'Sets the radius of the bottom-left corner.'),
    'border-bottom-right-radius': _prop('<length>', '0', False, [],
                                        'Sets the radius of the bottom-right corner.'),

    # Positioning
    'position': _prop('relative | absolute', 'relative', False, ['relative', 'absolute'],
                      'Specifies the positioning method.'),
    'left': _prop(_LENGTH_AUTO, 'auto', False, ['auto'], 'Sets the left offset for positioned elements.'),
    'right': _prop(_LENGTH_AUTO, 'auto', False, ['auto'], 'Sets the right offset for positioned elements.'),
    'top': _prop(_LENGTH_AUTO, 'auto', False, ['auto'], 'Sets the top offset for positioned elements.'),
    'bottom': _prop(_LENGTH_AUTO, 'auto', False, ['auto'], 'Sets the bottom offset for positioned elements.'),

    # Text
    'color': _prop('<color>', 'black', True, [], 'Sets the text color.'),
    'font-size': _prop('<length>', '12px', True, [], 'Sets the font size.'),
    '-unity-font': _prop('resource(<path>) | url(<path>)', 'none', True, ['none'],
                         'Sets the font asset (legacy).'),
    '-unity-font-definition': _prop('resource(<path>) | url(<path>)', 'none', True, ['none'],
                                    'Sets the font asset.'),
    '-unity-font-style': _prop('normal | bold | italic | bold-and-italic', 'normal', True,
                               ['normal', 'bold', 'italic', 'bold-and-italic'], 'Sets the font style.'),
    '-unity-text-align': _prop('upper-left | middle-left | lower-left | upper-center | middle-center | '
                               'lower-center | upper-right | middle-right | lower-right', 'upper-left', True,
                               ['upper-left', 'middle-left', 'lower-left', 'upper-center', 'middle-center',
                                'lower-center', 'upper-right', 'middle-right', 'lower-right'],
                               'Sets the text alignment.'),
    '-unity-text-outline-width': _prop('<length>', '0', True, [], 'Sets the text outline width.'),
    '-unity-text-outline-color': _prop('<color>', 'black', True, [], 'Sets the text outline color.'),
    'white-space': _prop('normal | nowrap | pre | pre-wrap', 'normal', True,
                         ['normal', 'nowrap', 'pre', 'pre-wrap'], 'Specifies how white space is handled.'),
    'text-overflow': _prop('clip | ellipsis', 'clip', False, ['clip', 'ellipsis'],
                           'Specifies how overflowed text is handled.'),
    'letter-spacing': _prop('<length>', '0', True, [], 'Sets the spacing between characters.'),
    'word-spacing': _prop('<length>', '0', True, [], 'Sets the spacing between words.'),
    '-unity-paragraph-spacing': _prop('<length>', '0', True, [], 'Sets the spacing between paragraphs.'),

    # Background
    'background-color': _prop('<color>', 'transparent', False, ['transparent'], 'Sets the background color.'),
    'background-image': _prop('resource(<path>) | url(<path>) | none', 'none', False, ['none'],
                              'Sets the background image.'),
    '-unity-background-scale-mode': _prop('stretch-to-fill | scale-and-crop | scale-to-fit', 'stretch-to-fill',
                                          False, ['stretch-to-fill', 'scale-and-crop', 'scale-to-fit'],
                                          'Sets how the background image is scaled.'),
    '-unity-background-image-tint-color': _prop('<color>', 'white', False, [],
                                                'Sets the tint color for the background image.'),

    # 9-slice
    '-unity-slice-left': _prop('<integer>', '0', False, [], 'Sets the left slice for 9-slice scaling.'),
    '-unity-slice-right': _prop('<integer>', '0', False, [], 'Sets the right slice for 9-slice scaling.'),
    '-unity-slice-top': _prop('<integer>', '0', False, [], 'Sets the top slice for 9-slice scaling.'),
    '-unity-slice-bottom': _prop('<integer>', '0', False, [], 'Sets the bottom slice for 9-slice scaling.'),
    '-unity-slice-scale': _prop('<number>', '1', False, [], 'Sets the scale for 9-slice scaling.'),

    # Appearance
    'opacity': _prop('<number>', '1', False, [], 'Sets the opacity level.'),
    'visibility': _prop('visible | hidden', 'visible', True, ['visible', 'hidden'], 'Sets the visibility.'),
    'display': _prop('flex | none', 'flex', False, ['flex', 'none'], 'Sets the display type.'),
    'overflow': _prop('visible | hidden | scroll', 'visible', False, ['visible', 'hidden', 'scroll'],
                      'Specifies how overflow is handled.'),
    '-unity-overflow-clip-box': _prop('padding-box | content-box', 'padding-box', False,
                                      ['padding-box', 'content-box'], 'Sets the clipping box for overflow.'),

    # Transforms
    'rotate': _prop('<angle>', '0', False, [], 'Sets the rotation.'),
    'scale': _prop('<number> | <number> <number> | <number> <number> <number>', '1 1 1', False, [],
                   'Sets the scale.'),
    'translate': _prop('<length> | <length> <length> | <length> <length> <length>', '0 0 0', False, [],
                       'Sets the translation.'),
    'transform-origin': _prop('<length> | <percentage> | left | center | right | top | bottom', 'center',
                              False, ['left', 'center', 'right', 'top', 'bottom'],
                              'Sets the origin for transformations.'),

    # Transitions
    'transition-property': _prop('<property-name> | all | none', 'all', False, ['all', 'none'],
                                 'Specifies which properties to transition.'),
    'transition-duration': _prop('<time>', '0s', False, [], 'Sets the duration of the transition.'),
    'transition-timing-function': _prop('ease | linear | ease-in | ease-out | ease-in-out', 'ease', False,
                                        ['ease', 'linear', 'ease-in', 'ease-out', 'ease-in-out'],
                                        'Sets the timing function for the transition.'),
    'transition-delay': _prop('<time>', '0s', False, [], 'Sets the delay before the transition starts.'),

    'cursor': _prop('resource(<path>) | url(<path>) | <cursor-type>', 'arrow', True, _CURSORS,
                    'Sets the cursor type.'),
}

_ENGINE = 'UnityEngine.UIElements'
_EDITOR = 'UnityEditor.UIElements'

# UXML elements - the things a bare selector can name
# (namespace, description)
UXML_ELEMENTS: Dict[str, Tuple[str, str]] = {
    'VisualElement': (_ENGINE, 'The base class for all visual elements.'),
    'BindableElement': (_ENGINE, 'A visual element that can be bound to a property.'),
    'Box': (_ENGINE, 'A container for grouping elements.'),
    'TextElement': (_ENGINE, 'The base class for text elements.'),
    'Label': (_ENGINE, 'A text label.'),
    'Image': (_ENGINE, 'Displays an image.'),
    'IMGUIContainer': (_ENGINE, 'A container for IMGUI content.'),
    'Foldout': (_ENGINE, 'A collapsible container.'),
    'ScrollView': (_ENGINE, 'A scrollable container.'),
    'ListView': (_ENGINE, 'A virtualized list view.'),
    'TreeView': (_ENGINE, 'A tree view for hierarchical data.'),
    'MultiColumnListView': (_ENGINE, 'A multi-column list view.'),
    'MultiColumnTreeView': (_ENGINE, 'A multi-column tree view.'),
    'GroupBox': (_ENGINE, 'A container with a title.'),
    'TwoPaneSplitView': (_ENGINE, 'A split view with two panes.'),
    'Button': (_ENGINE, 'A clickable button.'),
    'RepeatButton': (_ENGINE, 'A button that repeats its action.'),
    'Toggle': (_ENGINE, 'A checkbox toggle.'),
    'Scroller': (_ENGINE, 'A scrollbar control.'),
    'Slider': (_ENGINE, 'A slider for float values.'),
    'SliderInt': (_ENGINE, 'A slider for integer values.'),
    'MinMaxSlider': (_ENGINE, 'A slider for selecting a range.'),
    'ProgressBar': (_ENGINE, 'A progress bar.'),
    'DropdownField': (_ENGINE, 'A dropdown selection field.'),
    'EnumField': (_ENGINE, 'A dropdown for enum values.'),
    'EnumFlagsField': (_ENGINE, 'A field for enum flags.'),
    'RadioButton': (_ENGINE, 'A radio button.'),
    'RadioButtonGroup': (_ENGINE, 'A group of radio buttons.'),
    'TextField': (_ENGINE, 'A text input field.'),
    'IntegerField': (_ENGINE, 'An input field for integers.'),
    'LongField': (_ENGINE, 'An input field for long integers.'),
    'FloatField': (_ENGINE, 'An input field for floats.'),
    'DoubleField': (_ENGINE, 'An input field for doubles.'),
    'Vector2Field': (_ENGINE, 'An input field for Vector2.'),
    'Vector3Field': (_ENGINE, 'An input field for Vector3.'),
    'Vector4Field': (_ENGINE, 'An input field for Vector4.'),
    'Vector2IntField': (_ENGINE, 'An input field for Vector2Int.'),
    'Vector3IntField': (_ENGINE, 'An input field for Vector3Int.'),
    'RectField': (_ENGINE, 'An input field for Rect.'),
    'RectIntField': (_ENGINE, 'An input field for RectInt.'),
    'BoundsField': (_ENGINE, 'An input field for Bounds.'),
    'BoundsIntField': (_ENGINE, 'An input field for BoundsInt.'),
    'Hash128Field': (_ENGINE, 'An input field for Hash128.'),
    # Editor only, because the inspector has needs
    'ColorField': (_EDITOR, 'A color picker field.'),
    'CurveField': (_EDITOR, 'An animation curve field.'),
    'GradientField': (_EDITOR, 'A gradient field.'),
    'ObjectField': (_EDITOR, 'A field for Unity objects.'),
    'PropertyField': (_EDITOR, 'A field for serialized properties.'),
    'LayerField': (_EDITOR, 'A layer selection field.'),
    'LayerMaskField': (_EDITOR, 'A layer mask field.'),
    'MaskField': (_EDITOR, 'A mask field.'),
    'TagField': (_EDITOR, 'A tag selection field.'),
    'Template': (_ENGINE, 'A UXML template reference.'),
    'TemplateContainer': (_ENGINE, 'A container for template instances.'),
    'Instance': (_ENGINE, 'An instance of a template.'),
}

USS_PSEUDO_CLASSES: Dict[str, str] = {
    'hover': 'Applied when the mouse is over the element.',
    'active': 'Applied when the element is being activated (clicked).',
    'focus': 'Applied when the element has focus.',
    'disabled': 'Applied when the element is disabled.',
    'enabled': 'Applied when the element is enabled.',
    'checked': 'Applied when a toggle is checked.',
    'selected': 'Applied when the element is selected.',
    'root': 'Applied to the root element.',
    'first-child': 'Applied to the first child of its parent.',
    'last-child': 'Applied to the last child of its parent.',
}

USS_UNITS: Dict[str, str] = {
    'px': 'Pixels',
    '%': 'Percentage',
    'em': 'Relative to font size',
    'rem': 'Relative to root font size',
    'vw': 'Viewport width',
    'vh': 'Viewport height',
    'deg': 'Degrees',
    'rad': 'Radians',
    'turn': 'Turns',
    's': 'Seconds',
    'ms': 'Milliseconds',
}

ANGLE_UNITS = ('deg', 'rad', 'turn')

USS_COLORS: Dict[str, str] = {
    'transparent': '#00000000',
    'black': '#000000',
    'white': '#FFFFFF',
    'red': '#FF0000',
    'green': '#008000',
    'blue': '#0000FF',
    'yellow': '#FFFF00',
    'cyan': '#00FFFF',
    'magenta': '#FF00FF',
    'gray': '#808080',
    'grey': '#808080',
    'silver': '#C0C0C0',
    'maroon': '#800000',
    'olive': '#808000',
    'lime': '#00FF00',
    'aqua': '#00FFFF',
    'teal': '#008080',
    'navy': '#000080',
    'fuchsia': '#FF00FF',
    'purple': '#800080',
    'orange': '#FFA500',
}

# Keyword values worth a sentence on hover
USS_KEYWORDS: Dict[str, str] = {
    'flex': 'Sets the element to use flexbox layout.',
    'none': 'Removes/hides the element or disables a feature.',
    'auto': 'Allows the engine to calculate the value automatically.',
    'inherit': 'Inherits the value from the parent element.',
    'initial': 'Resets to the initial/default value.',
    'transparent': 'Fully transparent color (`rgba(0, 0, 0, 0)`).',
    'row': 'Flex items are laid out horizontally.',
    'column': 'Flex items are laid out vertically.',
    'row-reverse': 'Flex items are laid out horizontally in reverse order.',
    'column-reverse': 'Flex items are laid out vertically in reverse order.',
    'wrap': 'Flex items wrap to multiple lines.',
    'nowrap': 'Flex items stay on a single line.',
    'flex-start': 'Aligns items to the start of the flex container.',
    'flex-end': 'Aligns items to the end of the flex container.',
    'center': 'Centers items in the flex container.',
    'stretch': 'Stretches items to fill the container.',
    'space-between': 'Distributes items evenly with space between them.',
    'space-around': 'Distributes items evenly with space around them.',
    'relative': 'Positioned relative to its normal position.',
    'absolute': 'Positioned relative to the nearest positioned ancestor.',
    'visible': 'The element is visible.',
    'hidden': 'The element is hidden but still takes up space.',
    'scroll': 'Adds scrollbars when content overflows.',
    'normal': 'Normal/default style.',
    'bold': 'Bold font weight.',
    'italic': 'Italic font style.',
    'bold-and-italic': 'Both bold and italic.',
    'upper-left': 'Text aligned to top-left.',
    'middle-left': 'Text aligned to middle-left.',
    'lower-left': 'Text aligned to bottom-left.',
    'upper-center': 'Text aligned to top-center.',
    'middle-center': 'Text aligned to center.',
    'lower-center': 'Text aligned to bottom-center.',
    'upper-right': 'Text aligned to top-right.',
    'middle-right': 'Text aligned to middle-right.',
    'lower-right': 'Text aligned to bottom-right.',
    'stretch-to-fill': 'Stretches the image to fill the element.',
    'scale-and-crop': 'Scales and crops the image to fill the element.',
    'scale-to-fit': 'Scales the image to fit within the element.',
    'ease': 'Transition with slow start, then fast, then slow end.',
    'linear': 'Constant speed transition.',
    'ease-in': 'Transition with slow start.',
    'ease-out': 'Transition with slow end.',
    'ease-in-out': 'Transition with slow start and end.',
    'pre': 'Preserves whitespace and line breaks.',
    'pre-wrap': 'Preserves whitespace but wraps text.',
    'clip': 'Clips overflowing text.',
    'ellipsis': 'Shows ellipsis (...) for overflowing text.',
}

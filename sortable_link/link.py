"""Sortable column links.

render() turns a column name into an anchor that cycles that column through
ascending, descending and unsorted while keeping the rest of the current
query string:

    render('author.name', 'Author', {'per_page': 20}, {'class': 'btn'},
           context=QueryContext('/books', {'sort': 'title'}),
           config=SortableLinkConfig())

The column may be qualified by a relation ('author.name'). The full string is
the sort parameter used in the query string, the part after the separator is
the column used for icons and the default title.
"""
from __future__ import annotations
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union
from markupsafe import Markup, escape

from sortable_link.config.sortablelink import SortableLinkConfig, resolve_formatting_function
from sortable_link.exceptions import MalformedColumnSpecifier
from sortable_link.utils.query import DIRECTION_KEY, SORT_KEY, QueryContext, build_query_string
from sortable_link.utils.sorting import find_direction, is_active, parse_sort_tokens, toggle_sort

Title = Union[str, Markup, None]


class SortLink(NamedTuple):
    html: Markup
    title: Any


def explode_sort_parameter(parameter: str, separator: str) -> List[str]:
    """Return [relation, column] for a qualified parameter, [] when unqualified."""
    if separator and separator in parameter:
        parts = parameter.split(separator)
        if len(parts) != 2:
            raise MalformedColumnSpecifier(parameter, separator)
        return parts
    return []


def parse_parameters(
    column: str,
    title: Title = None,
    query_parameters: Optional[Mapping[str, Any]] = None,
    anchor_attributes: Optional[Mapping[str, Any]] = None,
    separator: str = '.',
) -> Tuple[str, str, Title, Dict[str, Any], Dict[str, Any]]:
    """Normalize render arguments.

    Returns (sort_column, sort_parameter, title, query_parameters, anchor_attributes).
    Non-mapping query parameters or attributes are ignored. Both mappings are
    copied so the caller's objects are never modified.
    """
    exploded = explode_sort_parameter(column, separator)
    sort_column = exploded[1] if exploded else column
    query_parameters = dict(query_parameters) if isinstance(query_parameters, Mapping) else {}
    anchor_attributes = dict(anchor_attributes) if isinstance(anchor_attributes, Mapping) else {}
    return sort_column, column, title, query_parameters, anchor_attributes


def apply_formatting(title: Title, sort_column: str, config: SortableLinkConfig) -> Any:
    if isinstance(title, Markup):
        return title
    if title is None:
        title = sort_column
    elif not config.format_custom_titles:
        return title
    formatter = resolve_formatting_function(config.formatting_function)
    if formatter is not None:
        title = formatter(title)
    return title


def select_icon(sort_column: str, config: SortableLinkConfig) -> str:
    """Icon set for a column; the last matching rule in config.columns wins."""
    icon = config.default_icon_set
    for rule in config.columns:
        if sort_column in rule.get('rows', ()):
            icon = rule['class']
    return icon


def determine_direction(
    sort_column: str,
    sort_parameter: str,
    tokens: List[str],
    config: SortableLinkConfig,
) -> Tuple[str, Optional[bool]]:
    """Return (icon class, direction); direction is None when the column is unsorted."""
    direction = find_direction(tokens, sort_parameter)
    if direction is None:
        return config.sortable_icon, None
    suffix = config.asc_suffix if direction else config.desc_suffix
    return select_icon(sort_column, config) + suffix, direction


def form_trailing_tag(icon: str, config: SortableLinkConfig) -> str:
    if not config.enable_icons:
        return '</a>'
    icon_tag = f'<i class="{icon}"></i>'
    if config.clickable_icon:
        return config.icon_text_separator + icon_tag + '</a>'
    return '</a>' + config.icon_text_separator + icon_tag


def get_anchor_class(
    sort_parameter: str,
    anchor_attributes: Dict[str, Any],
    context: QueryContext,
    config: SortableLinkConfig,
) -> str:
    """Build the class attribute and pop 'class' from anchor_attributes.

    The direction class follows the separate ``direction`` query parameter,
    not the per-column state in ``sort``.
    """
    classes: List[str] = []
    active = is_active(parse_sort_tokens(context.get(SORT_KEY)), sort_parameter)
    if config.anchor_class is not None:
        classes.append(config.anchor_class)
    if config.active_anchor_class is not None and active:
        classes.append(config.active_anchor_class)
    if config.direction_anchor_class_prefix is not None and active:
        suffix = config.asc_suffix if context.get(DIRECTION_KEY) == 'asc' else config.desc_suffix
        classes.append(config.direction_anchor_class_prefix + suffix)
    if 'class' in anchor_attributes:
        classes.extend(str(anchor_attributes.pop('class')).split())
    if not classes:
        return ''
    return ' class="' + str(escape(' '.join(classes))) + '"'


def build_anchor_attributes_string(anchor_attributes: Mapping[str, Any]) -> str:
    parts = []
    for name, value in anchor_attributes.items():
        if name in ('href', 'class'):
            continue
        if value is None or value == '':
            parts.append(f' {name}')
        else:
            parts.append(f' {name}="{escape(value)}"')
    return ''.join(parts)


def build_url(query_string: str, anchor_attributes: Mapping[str, Any], context: QueryContext) -> str:
    base = anchor_attributes.get('href')
    if base is None:
        base = context.path
    return f'{base}?{query_string}'


def render_link(
    column: str,
    title: Title = None,
    query_parameters: Optional[Mapping[str, Any]] = None,
    anchor_attributes: Optional[Mapping[str, Any]] = None,
    *,
    context: QueryContext,
    config: Optional[SortableLinkConfig] = None,
) -> SortLink:
    """Render the anchor and return it together with the resolved title.

    Raises MalformedColumnSpecifier when a qualified column does not split into
    exactly two parts.
    """
    config = config or SortableLinkConfig()
    sort_column, sort_parameter, title, query_parameters, anchor_attributes = parse_parameters(
        column, title, query_parameters, anchor_attributes, config.uri_relation_column_separator,
    )
    title = apply_formatting(title, sort_column, config)
    tokens = parse_sort_tokens(context.get(SORT_KEY))

    icon, _direction = determine_direction(sort_column, sort_parameter, tokens, config)
    trailing_tag = form_trailing_tag(icon, config)
    anchor_class = get_anchor_class(sort_parameter, anchor_attributes, context, config)
    attributes = build_anchor_attributes_string(anchor_attributes)
    query_string = build_query_string(query_parameters, context, toggle_sort(tokens, sort_parameter))
    url = build_url(query_string, anchor_attributes, context)

    html = Markup(
        '<a' + anchor_class + ' href="' + str(escape(url)) + '"' + attributes + '>'
        + str(escape(title)) + trailing_tag
    )
    return SortLink(html, title)


def render(
    column: str,
    title: Title = None,
    query_parameters: Optional[Mapping[str, Any]] = None,
    anchor_attributes: Optional[Mapping[str, Any]] = None,
    *,
    context: QueryContext,
    config: Optional[SortableLinkConfig] = None,
) -> Markup:
    return render_link(
        column, title, query_parameters, anchor_attributes, context=context, config=config,
    ).html


__all__ = [
    'SortLink', 'render', 'render_link', 'explode_sort_parameter', 'parse_parameters',
    'apply_formatting', 'select_icon', 'determine_direction', 'form_trailing_tag',
    'get_anchor_class', 'build_anchor_attributes_string', 'build_url',
]

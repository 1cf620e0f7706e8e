"""Resolved options for sortable column links.

Options are read once per render from a SortableLinkConfig. Flask apps keep them
in app.config under SORTABLELINK_<OPTION>; environment variables with the same
names (and an optional dotenv file) override the defaults in SortableLink.init_app().
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from werkzeug.utils import import_string

logger = logging.getLogger(__name__)

CONFIG_PREFIX = 'SORTABLELINK_'

DEFAULTS: Dict[str, Any] = {
    'uri_relation_column_separator': '.',
    'inject_title_as': None,
    'format_custom_titles': True,
    'formatting_function': None,
    'default_icon_set': 'fa fa-sort',
    'columns': (),
    'sortable_icon': 'fa fa-sort',
    'asc_suffix': '-asc',
    'desc_suffix': '-desc',
    'enable_icons': True,
    'icon_text_separator': '',
    'clickable_icon': False,
    'anchor_class': None,
    'active_anchor_class': None,
    'direction_anchor_class_prefix': None,
}

BOOL_OPTIONS = ('format_custom_titles', 'enable_icons', 'clickable_icon')
NULLABLE_OPTIONS = (
    'inject_title_as', 'formatting_function', 'anchor_class',
    'active_anchor_class', 'direction_anchor_class_prefix',
)
_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


@dataclass(frozen=True)
class SortableLinkConfig:
    uri_relation_column_separator: str = '.'
    inject_title_as: Optional[str] = None
    format_custom_titles: bool = True
    formatting_function: Any = None
    default_icon_set: str = 'fa fa-sort'
    columns: Tuple[Dict[str, Any], ...] = ()
    sortable_icon: str = 'fa fa-sort'
    asc_suffix: str = '-asc'
    desc_suffix: str = '-desc'
    enable_icons: bool = True
    icon_text_separator: str = ''
    clickable_icon: bool = False
    anchor_class: Optional[str] = None
    active_anchor_class: Optional[str] = None
    direction_anchor_class_prefix: Optional[str] = None

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None) -> 'SortableLinkConfig':
        """Build from plain option names; unknown keys are ignored."""
        mapping = mapping or {}
        values = {f.name: mapping[f.name] for f in fields(cls) if f.name in mapping}
        if 'columns' in values:
            values['columns'] = tuple(values['columns'] or ())
        return cls(**values)

    @classmethod
    def from_app_config(cls, app_config: Mapping[str, Any]) -> 'SortableLinkConfig':
        return cls.from_mapping({
            f.name: app_config[config_key(f.name)]
            for f in fields(cls) if config_key(f.name) in app_config
        })


def config_key(option: str) -> str:
    return CONFIG_PREFIX + option.upper()


def _coerce_bool(name: str, raw: str) -> bool:
    val = raw.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    raise ValueError(f'{name} must be a boolean, got {raw!r}')


def env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect SORTABLELINK_* variables as app.config entries.

    Raises ValueError on unparsable booleans or columns JSON.
    """
    overrides: Dict[str, Any] = {}
    for option in DEFAULTS:
        key = config_key(option)
        if key not in environ:
            continue
        raw = environ[key]
        if option in BOOL_OPTIONS:
            overrides[key] = _coerce_bool(key, raw)
        elif option == 'columns':
            try:
                overrides[key] = tuple(json.loads(raw) if raw.strip() else ())
            except (ValueError, TypeError) as e:
                raise ValueError(f'{key} must be a JSON list of {{class, rows}} objects') from e
        elif option in NULLABLE_OPTIONS and raw == '':
            overrides[key] = None
        else:
            overrides[key] = raw
    return overrides


def resolve_formatting_function(value: Any) -> Optional[Callable[[str], Any]]:
    """Return a callable for a formatting_function option, or None.

    Accepts a callable or a dotted import path ('package.module.func' or
    'package.module:func'). Unresolvable references are skipped.
    """
    if value is None:
        return None
    if callable(value):
        return value
    if isinstance(value, str) and value:
        func = import_string(value, silent=True)
        if callable(func):
            return func
    logger.debug('formatting_function %r could not be resolved; titles left unformatted', value)
    return None


__all__ = [
    'CONFIG_PREFIX', 'DEFAULTS', 'SortableLinkConfig', 'config_key',
    'env_overrides', 'resolve_formatting_function',
]

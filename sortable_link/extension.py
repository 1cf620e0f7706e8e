"""Flask integration: exposes ``sortablelink`` and ``all_filled`` to Jinja templates.

    sortable = SortableLink()
    sortable.init_app(app)

    {{ sortablelink('author.name', 'Author', {'per_page': 20}, {'class': 'btn'}) }}
"""
from __future__ import annotations
import os
from typing import Any, Dict, Mapping, Optional
from dotenv import dotenv_values
from flask import Flask, current_app, g, request
from markupsafe import Markup

from sortable_link.config.sortablelink import DEFAULTS, SortableLinkConfig, config_key, env_overrides
from sortable_link.link import Title, render_link
from sortable_link.utils.query import QueryContext

EXTENSION_KEY = 'sortablelink'
# per-request storage for injected titles lives under this attribute of flask.g
INJECTED_TITLES_ATTR = '_sortablelink_titles'


class SortableLink:
    """Options resolve as app.config, then SORTABLELINK_* environment
    variables (plus an optional dotenv file, read without touching
    os.environ), then DEFAULTS.
    """

    def __init__(self, app: Optional[Flask] = None, env_file: Optional[str] = None):
        self.env_file = env_file
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask):
        environ: Dict[str, Any] = {}
        if self.env_file:
            environ.update(dotenv_values(self.env_file))
        environ.update(os.environ)
        overrides = env_overrides({k: v for k, v in environ.items() if v is not None})
        for option, default in DEFAULTS.items():
            key = config_key(option)
            app.config.setdefault(key, overrides.get(key, default))
        app.extensions[EXTENSION_KEY] = self
        app.jinja_env.globals['sortablelink'] = sortablelink
        app.jinja_env.globals['all_filled'] = all_filled
        app.jinja_env.globals['injected_title'] = injected_title

    @staticmethod
    def current_config() -> SortableLinkConfig:
        return SortableLinkConfig.from_app_config(current_app.config)


def sortablelink(
    column: str,
    title: Title = None,
    query_parameters: Optional[Mapping[str, Any]] = None,
    anchor_attributes: Optional[Mapping[str, Any]] = None,
) -> Markup:
    """Render a sortable link for the current request.

    When inject_title_as is configured the resolved title is stored on flask.g
    for the rest of this request (see injected_title()).
    """
    config = SortableLink.current_config()
    link = render_link(
        column, title, query_parameters, anchor_attributes,
        context=QueryContext.from_request(request), config=config,
    )
    if config.inject_title_as:
        titles = g.setdefault(INJECTED_TITLES_ATTR, {})
        titles[config.inject_title_as] = link.title
    current_app.logger.debug('sortablelink %s -> %s', column, link.html)
    return link.html


def injected_title(key: Optional[str] = None, default: Any = None) -> Any:
    """Return the last title injected during this request."""
    key = key or current_app.config.get(config_key('inject_title_as'))
    if not key:
        return default
    return g.get(INJECTED_TITLES_ATTR, {}).get(key, default)


def all_filled(*keys: str) -> bool:
    """True when every named query parameter is present and non-empty."""
    return all(request.args.get(key, '').strip() != '' for key in keys)


__all__ = ['SortableLink', 'sortablelink', 'injected_title', 'all_filled']

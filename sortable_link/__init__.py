from .config.sortablelink import SortableLinkConfig, env_overrides
from .exceptions import SortableLinkException, MalformedColumnSpecifier
from .extension import SortableLink, sortablelink, injected_title, all_filled
from .link import SortLink, render, render_link
from .utils.query import QueryContext

__all__ = [
    'SortableLink', 'sortablelink', 'injected_title', 'all_filled',
    'render', 'render_link', 'SortLink', 'SortableLinkConfig', 'env_overrides',
    'QueryContext', 'SortableLinkException', 'MalformedColumnSpecifier',
]

"""Read-only view of the current request's query state and query string building."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import quote, urlencode

QueryValue = Union[str, List[str]]

SORT_KEY = 'sort'
PAGE_KEY = 'page'
DIRECTION_KEY = 'direction'
# RFC 3986 path characters left unencoded
PATH_SAFE = "/:@!$&'()*+,;="


@dataclass(frozen=True)
class QueryContext:
    """Current path plus query parameters; multi-valued keys hold lists."""
    path: str = '/'
    args: Mapping[str, QueryValue] = field(default_factory=dict)

    @classmethod
    def from_request(cls, request) -> 'QueryContext':
        args: Dict[str, QueryValue] = {}
        for key, values in request.args.lists():
            args[key] = values if len(values) > 1 else values[0]
        # script_root keeps mounted apps under their prefix; re-encode the decoded path
        return cls(path=quote(request.script_root + request.path, safe=PATH_SAFE), args=args)

    def has(self, key: str) -> bool:
        return key in self.args

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        if key not in self.args:
            return default
        value = self.args[key]
        if isinstance(value, (list, tuple)):
            return value[0] if value else default
        return value

    def except_keys(self, *keys: str) -> Dict[str, QueryValue]:
        return {k: v for k, v in self.args.items() if k not in keys}


def _keep_value(value: Any) -> bool:
    # lists always persist, scalars only when non-empty
    if isinstance(value, (list, tuple)):
        return True
    return value is not None and len(str(value)) > 0


def persisted_parameters(context: QueryContext) -> Dict[str, QueryValue]:
    """Query parameters carried into the next link (everything but sort and page)."""
    return {k: v for k, v in context.except_keys(SORT_KEY, PAGE_KEY).items() if _keep_value(v)}


def build_query_string(
    extra: Optional[Mapping[str, Any]],
    context: QueryContext,
    sort_tokens: Sequence[str],
) -> str:
    """Merge extra < persisted < sort and url-encode the result.

    The sort key is omitted entirely when no tokens remain, even if extra
    supplied one.
    """
    params: Dict[str, Any] = dict(extra or {})
    params.update(persisted_parameters(context))
    if sort_tokens:
        params[SORT_KEY] = ','.join(sort_tokens)
    else:
        params.pop(SORT_KEY, None)
    return urlencode(params, doseq=True)


__all__ = [
    'QueryContext', 'persisted_parameters', 'build_query_string',
    'SORT_KEY', 'PAGE_KEY', 'DIRECTION_KEY',
]

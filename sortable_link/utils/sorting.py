"""Multi-column sort state carried in a comma-separated ``sort`` query value.

Each token is a column parameter, optionally prefixed with '-' for descending.
Token order is the user's sort priority.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

DESC_PREFIX = '-'


def parse_sort_tokens(sort_value: Optional[str]) -> List[str]:
    """Split a raw sort value into tokens, keeping order and dropping empty ones."""
    if not sort_value:
        return []
    return [token for token in sort_value.split(',') if token]


def split_token(token: str) -> Tuple[str, bool]:
    """Return (parameter, ascending) with a single leading '-' stripped."""
    if token.startswith(DESC_PREFIX):
        return token[len(DESC_PREFIX):], False
    return token, True


def find_direction(tokens: Sequence[str], sort_parameter: str) -> Optional[bool]:
    """Direction of the first token naming sort_parameter, None when absent."""
    for token in tokens:
        key, ascending = split_token(token)
        if key == sort_parameter:
            return ascending
    return None


def is_active(tokens: Sequence[str], sort_parameter: str) -> bool:
    return any(split_token(token)[0] == sort_parameter for token in tokens)


def toggle_sort(tokens: Sequence[str], sort_parameter: str) -> List[str]:
    """Advance sort_parameter one step: absent -> asc -> desc -> absent.

    Ascending flips to descending in place, descending is removed and an absent
    column is appended with the lowest priority. Other tokens pass through
    unchanged and in order.
    """
    result: List[str] = []
    found = False
    for token in tokens:
        if token == sort_parameter:
            result.append(DESC_PREFIX + sort_parameter)
            found = True
        elif token == DESC_PREFIX + sort_parameter:
            found = True
        else:
            result.append(token)
    if not found:
        result.append(sort_parameter)
    return result


__all__ = ['parse_sort_tokens', 'split_token', 'find_direction', 'is_active', 'toggle_sort']

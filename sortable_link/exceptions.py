"""Errors raised while rendering sortable column links."""


class SortableLinkException(Exception):
    """Base class for every error raised by sortable_link."""


class MalformedColumnSpecifier(SortableLinkException):
    """A relation-qualified column did not split into exactly two segments.

    Indicates a misconfigured view or template, so it is never caught here.
    """

    def __init__(self, specifier: str, separator: str):
        self.specifier = specifier
        self.separator = separator
        super().__init__(
            f"Column '{specifier}' must be '<relation>{separator}<column>' "
            f"(exactly one '{separator}')"
        )


__all__ = ['SortableLinkException', 'MalformedColumnSpecifier']

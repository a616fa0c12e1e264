"""
Tooltip templates.

A template is plain text with ``%`` tags, e.g. ``"%l (%x, %y): %z"``. The
scanner has two states, normal and escaped: ``%`` switches to escaped, and
the next character selects a field. Unknown tags are copied through
unchanged and a trailing ``%`` is dropped.
"""

from typing import Callable, Mapping

TagHandler = Callable[[], str]


def format_tooltip(template: str, handlers: Mapping[str, TagHandler]) -> str:
    """
    Expand the ``%`` tags of a template.

    Parameters
    ----------
    template : str
        Template text.
    handlers : mapping
        Tag character -> zero-argument callable returning the replacement.
        Handlers are only called for tags present in the template.

    Returns
    -------
    str
        The expanded label.
    """
    parts = []
    escaped = False
    for char in template:
        if escaped:
            handler = handlers.get(char)
            parts.append(handler() if handler is not None else '%' + char)
            escaped = False
        elif char == '%':
            escaped = True
        else:
            parts.append(char)
    return ''.join(parts)


def format_number(value: float, precision: int = 6) -> str:
    """Compact representation of a coordinate, e.g. ``1.5`` or ``1e+06``."""
    return f"{value:.{precision}g}"

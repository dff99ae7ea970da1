"""
Number and template formatting helpers shared by the markup builders.
"""

import re
from typing import Union

SIZES_PLACEHOLDER = re.compile(r"%(?:(\d+)\$)?([ds%])")


def format_number(value: Union[int, float]) -> str:
    """Render a number the way it should appear in markup: 50.0 -> "50", 56.25 -> "56.25"."""
    return "%.14g" % value


def format_sizes(template: str, width: int) -> str:
    """
    Substitute a width into a printf-style sizes template.

    Supports ``%d``, ``%s``, positional ``%1$d`` and the ``%%`` escape.
    Every placeholder receives the same width, so
    ``"(min-width: %1$dpx) %1$dpx, 100vw"`` and
    ``"(min-width: %dpx) %dpx, 100vw"`` both expand fully.

    Args:
        template: Sizes query template.
        width: Width in pixels.

    Returns:
        Expanded sizes query.
    """
    def replace(match: "re.Match") -> str:
        if match.group(2) == "%":
            return "%"
        return str(int(width))

    return SIZES_PLACEHOLDER.sub(replace, template)

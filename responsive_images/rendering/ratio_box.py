"""
Aspect-ratio preserving wrapper around rendered image markup.
"""

from typing import Union

from responsive_images.exceptions import ConfigurationError, DegenerateRatioError
from responsive_images.models import DerivativeImage
from responsive_images.rendering.tag_builder import TagBuilder
from responsive_images.utils.formatting import format_number

AUTO_RATIO = "auto"


def is_auto_ratio(ratio_spec: Union[bool, float, str]) -> bool:
    if ratio_spec is True:
        return True
    return isinstance(ratio_spec, str) and ratio_spec.strip().lower() == AUTO_RATIO


def box_ratio(ratio_spec: Union[bool, float, str], fallback: DerivativeImage) -> float:
    """
    Padding percentage for the ratio box.

    Args:
        ratio_spec: ``"auto"`` (or True) for the fallback image ratio, else a percentage.
        fallback: Fallback derivative whose size defines the automatic ratio.

    Returns:
        Percentage (height / width * 100 for automatic ratios).
    """
    if is_auto_ratio(ratio_spec):
        if not fallback.width:
            raise DegenerateRatioError(f"Fallback image {fallback.url} has zero width")
        return fallback.height / fallback.width * 100

    try:
        return float(ratio_spec)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid ratio box value: {ratio_spec!r}")


def wrap(
    markup: str,
    ratio_spec: Union[bool, float, str],
    fallback: DerivativeImage,
    class_name: str = "ratio-box",
) -> TagBuilder:
    """Wrap markup in a padding-bottom ratio box."""
    box = TagBuilder("div")
    box.add_attribute("class", class_name)
    box.add_attribute("style", f"padding-bottom: {format_number(box_ratio(ratio_spec, fallback))}%")
    box.set_content(markup)
    return box

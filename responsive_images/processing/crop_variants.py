"""
Crop variant parsing and crop/focus area resolution.

A crop configuration is a JSON object keyed by variant name:

    {"default": {"cropArea": {"x": 0.1, "y": 0, "width": 0.8, "height": 1},
                 "focusArea": {"x": 0.4, "y": 0.4, "width": 0.2, "height": 0.2},
                 "selectedRatio": "16:9"}}

Broken configuration never stops rendering: it resolves to "no crop".
"""

import json
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from responsive_images.config import DEFAULT_CROP_VARIANT
from responsive_images.models import AbsoluteArea, Area, CropVariant, ImageReference
from responsive_images.utils.render_logger import LogLevel, get_logger


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _parse_area(data: Any) -> Optional[Area]:
    """Parse a relative area dict, clamped into the unit square."""
    if not isinstance(data, dict):
        return None
    try:
        area = Area(**{key: data[key] for key in ("x", "y", "width", "height") if key in data})
    except (TypeError, ValidationError):
        return None

    x = _clamp(area.x)
    y = _clamp(area.y)
    return Area(
        x=x,
        y=y,
        width=min(_clamp(area.width), 1.0 - x),
        height=min(_clamp(area.height), 1.0 - y),
    )


class CropVariantCollection:
    """Named crop variants parsed from a crop configuration string."""

    def __init__(self, variants: Optional[Dict[str, CropVariant]] = None):
        self.variants = variants or {}

    @classmethod
    def create(cls, crop_string: Optional[str]) -> "CropVariantCollection":
        """
        Parse a crop configuration string.

        Args:
            crop_string: JSON crop configuration; may be empty or None.

        Returns:
            CropVariantCollection; empty when the input cannot be parsed.
        """
        if not crop_string or not crop_string.strip():
            return cls()

        try:
            data = json.loads(crop_string)
        except ValueError:
            get_logger().log_message(
                LogLevel.DEBUG, "crop", f"Ignoring malformed crop configuration: {crop_string[:80]}"
            )
            return cls()

        if not isinstance(data, dict):
            get_logger().log_message(
                LogLevel.DEBUG, "crop", "Ignoring crop configuration that is not an object"
            )
            return cls()

        variants = {}
        for name, config in data.items():
            if not isinstance(config, dict):
                continue
            crop_area = _parse_area(config.get("cropArea"))
            if crop_area is None:
                continue
            selected_ratio = config.get("selectedRatio")
            variants[name] = CropVariant(
                name=name,
                crop_area=crop_area,
                focus_area=_parse_area(config.get("focusArea")),
                selected_ratio=str(selected_ratio) if selected_ratio is not None else None,
            )
        return cls(variants)

    def get_crop_area(self, name: str = DEFAULT_CROP_VARIANT) -> Area:
        variant = self.variants.get(name)
        if variant is None:
            return Area.create_empty()
        return variant.crop_area

    def get_focus_area(self, name: str = DEFAULT_CROP_VARIANT) -> Area:
        variant = self.variants.get(name)
        if variant is None or variant.focus_area is None:
            return Area.create_empty()
        return variant.focus_area

    def __contains__(self, name: str) -> bool:
        return name in self.variants

    def __len__(self) -> int:
        return len(self.variants)


def resolve(crop_string: Optional[str], variant_name: Optional[str] = None) -> Tuple[Area, Area]:
    """Crop and focus area of a variant ("default" when no name is given)."""
    collection = CropVariantCollection.create(crop_string)
    name = variant_name or DEFAULT_CROP_VARIANT
    return collection.get_crop_area(name), collection.get_focus_area(name)


def absolute_crop(area: Area, image: ImageReference) -> Optional[AbsoluteArea]:
    """Pixel crop rectangle for the source image, or None for no cropping."""
    if area.is_empty():
        return None
    return area.make_absolute(image.width, image.height)

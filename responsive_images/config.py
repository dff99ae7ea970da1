"""
Render settings with environment overrides.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

DEFAULT_SIZES_TEMPLATE = "(min-width: %1$dpx) %1$dpx, 100vw"
DEFAULT_CROP_VARIANT = "default"

ENV_PREFIX = "RESPONSIVE_IMAGES_"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class RenderSettings(BaseModel):
    """Defaults applied when a render call leaves an argument unset."""
    sizes_template: str = DEFAULT_SIZES_TEMPLATE
    picturefill: bool = True
    lazyload: bool = False
    lazyload_class: str = "lazyload"
    ratio_box_class: str = "ratio-box"
    default_crop_variant: str = DEFAULT_CROP_VARIANT
    max_workers: int = 1

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "RenderSettings":
        """
        Build settings from ``RESPONSIVE_IMAGES_*`` environment variables.

        Args:
            env_file: Optional path to a .env file (default: search upwards).

        Returns:
            RenderSettings; unparsable values fall back to the defaults.
        """
        load_dotenv(env_file)
        defaults = cls()

        try:
            max_workers = int(os.getenv(ENV_PREFIX + "MAX_WORKERS", defaults.max_workers))
        except ValueError:
            max_workers = defaults.max_workers

        try:
            return cls(
                sizes_template=os.getenv(ENV_PREFIX + "SIZES", defaults.sizes_template),
                picturefill=_env_flag("PICTUREFILL", defaults.picturefill),
                lazyload=_env_flag("LAZYLOAD", defaults.lazyload),
                lazyload_class=os.getenv(ENV_PREFIX + "LAZYLOAD_CLASS", defaults.lazyload_class),
                ratio_box_class=os.getenv(ENV_PREFIX + "RATIO_BOX_CLASS", defaults.ratio_box_class),
                default_crop_variant=os.getenv(
                    ENV_PREFIX + "CROP_VARIANT", defaults.default_crop_variant
                ),
                max_workers=max(1, max_workers),
            )
        except ValidationError:
            return defaults

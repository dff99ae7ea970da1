"""
Crop resolution, derivative generation and breakpoint resolution.
"""

from responsive_images.processing.breakpoints import (
    BreakpointResolver,
    normalize_breakpoints,
    parse_srcset,
)
from responsive_images.processing.crop_variants import CropVariantCollection, resolve
from responsive_images.processing.derivatives import DerivativeGenerator, build_instructions

__all__ = [
    "BreakpointResolver",
    "CropVariantCollection",
    "DerivativeGenerator",
    "build_instructions",
    "normalize_breakpoints",
    "parse_srcset",
    "resolve",
]

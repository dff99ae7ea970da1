"""
Responsive Images for Template Rendering

Generates <picture> and <img srcset> markup from a source image and a set of
breakpoints, with picturefill-compatible fallbacks, lazy loading and
aspect-ratio boxes.
"""

__version__ = "0.1.0"

from responsive_images.config import RenderSettings
from responsive_images.exceptions import (
    ConfigurationError,
    DegenerateRatioError,
    ResponsiveImagesError,
)
from responsive_images.models import (
    Breakpoint,
    DerivativeImage,
    Failure,
    ImageArguments,
    ImageReference,
    ProcessingInstructions,
    ResolutionFailure,
)
from responsive_images.pipeline.renderer import (
    ResponsiveImageRenderer,
    ResponsiveMediaRenderer,
)

__all__ = [
    "Breakpoint",
    "ConfigurationError",
    "DegenerateRatioError",
    "DerivativeImage",
    "Failure",
    "ImageArguments",
    "ImageReference",
    "ProcessingInstructions",
    "RenderSettings",
    "ResolutionFailure",
    "ResponsiveImageRenderer",
    "ResponsiveImagesError",
    "ResponsiveMediaRenderer",
]

"""
Exception types raised by the responsive image renderers.

Only broken template input surfaces as an exception. Storage and lookup
problems are reported as ``Failure`` values (see ``responsive_images.models``).
"""


class ResponsiveImagesError(Exception):
    """Base class for all responsive image errors."""


class ConfigurationError(ResponsiveImagesError, ValueError):
    """Raised when the renderer arguments contradict each other."""


class DegenerateRatioError(ResponsiveImagesError, ZeroDivisionError):
    """Raised when an automatic ratio box meets a zero-width fallback image."""

"""
Breakpoint resolution: one set of derivative images per breakpoint.

Breakpoints are processed in the order they are given, since the order of
``<source>`` elements decides which one the browser picks. Nothing is merged
or deduplicated, even when two breakpoints produce identical derivatives.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Optional, Union

from pydantic import ValidationError

from responsive_images.models import (
    Breakpoint,
    Failure,
    ImageReference,
    ResolvedBreakpoint,
    SrcsetCandidate,
)
from responsive_images.processing.crop_variants import CropVariantCollection
from responsive_images.processing.derivatives import DerivativeGenerator, build_instructions
from responsive_images.utils.formatting import format_number, format_sizes
from responsive_images.utils.render_logger import LogLevel, get_logger


def _to_breakpoint(item: Any) -> Optional[Breakpoint]:
    if isinstance(item, Breakpoint):
        return item
    if isinstance(item, dict):
        try:
            return Breakpoint.model_validate(item)
        except ValidationError as e:
            get_logger().log_message(LogLevel.DEBUG, "breakpoints", f"Skipping breakpoint: {e}")
    return None


def normalize_breakpoints(value: Optional[Iterable[Any]]) -> List[Breakpoint]:
    """Breakpoint objects from a list of Breakpoints or dicts, order kept."""
    if not value:
        return []
    breakpoints = []
    for item in value:
        breakpoint = _to_breakpoint(item)
        if breakpoint is not None:
            breakpoints.append(breakpoint)
    return breakpoints


def parse_srcset(value: Any, reference_width: int) -> List[Breakpoint]:
    """
    Turn a srcset argument into breakpoints.

    Accepted entries: ``400`` / ``"400"`` / ``"400w"`` (width descriptors),
    ``"2x"`` (density of the reference width), Breakpoint objects and dicts.
    A string is split on commas.

    Args:
        value: srcset argument from the template.
        reference_width: Width of the fallback image, base for ``x`` entries.

    Returns:
        List of Breakpoint in the given order.
    """
    if value is None or value == "":
        return []
    if isinstance(value, (str, int)):
        items: List[Any] = str(value).split(",")
    else:
        items = list(value)

    breakpoints = []
    for item in items:
        if isinstance(item, (Breakpoint, dict)):
            breakpoint = _to_breakpoint(item)
            if breakpoint is not None:
                breakpoints.append(breakpoint)
            continue

        token = str(item).strip().lower()
        if not token:
            continue
        try:
            if token.endswith("x"):
                density = float(token[:-1])
                breakpoints.append(
                    Breakpoint(name=token, width=reference_width, densities=[density])
                )
            else:
                width = int(float(token.rstrip("w")))
                breakpoints.append(Breakpoint(name=f"{width}w", width=width))
        except ValueError:
            get_logger().log_message(
                LogLevel.DEBUG, "breakpoints", f"Skipping invalid srcset entry: {token!r}"
            )

    if any(breakpoint.densities for breakpoint in breakpoints) and any(
        not breakpoint.densities for breakpoint in breakpoints
    ):
        breakpoints = _densities_to_widths(breakpoints, reference_width)
    return breakpoints


def _densities_to_widths(breakpoints: List[Breakpoint], reference_width: int) -> List[Breakpoint]:
    """Turn density entries into width entries; a srcset cannot mix both descriptors."""
    converted = []
    for breakpoint in breakpoints:
        if not breakpoint.densities:
            converted.append(breakpoint)
            continue
        base_width = breakpoint.width or reference_width
        for density in breakpoint.densities:
            width = int(base_width * density)
            get_logger().log_message(
                LogLevel.DEBUG,
                "breakpoints",
                f"Using width {width}w for density {format_number(density)}x in a width srcset",
            )
            converted.append(
                breakpoint.model_copy(update={"name": f"{width}w", "width": width, "densities": None})
            )
    return converted


def media_condition(breakpoint: Breakpoint) -> Optional[str]:
    """Explicit media query, or a min-width condition built from the threshold."""
    if breakpoint.media:
        return breakpoint.media
    if breakpoint.threshold > 0:
        return f"(min-width: {breakpoint.threshold}px)"
    return None


def _scaled(value: Optional[int], density: float) -> Optional[int]:
    if not value:
        return None
    return int(value * density)


class BreakpointResolver:
    """Computes the derivative images needed for each breakpoint."""

    def __init__(self, generator: DerivativeGenerator, max_workers: int = 1):
        """
        Initialize the resolver.

        Args:
            generator: Derivative generator wrapping the image service.
            max_workers: Breakpoints processed concurrently (1 = sequential).
        """
        self.generator = generator
        self.max_workers = max_workers

    def resolve(
        self,
        image: ImageReference,
        breakpoints: List[Breakpoint],
        crop_variants: CropVariantCollection,
        sizes_template: Optional[str],
        default_crop_variant: str = "default",
        default_width: Optional[int] = None,
        absolute: bool = False,
        render_id: str = "",
    ) -> Union[List[ResolvedBreakpoint], Failure]:
        """
        Resolve all breakpoints against the source image.

        Args:
            image: Source image.
            breakpoints: Breakpoints in output order.
            crop_variants: Crop variants of the source image.
            sizes_template: Template for the sizes attribute of width candidates.
            default_crop_variant: Variant used when a breakpoint names none.
            default_width: Width used when a breakpoint has no width or threshold.
            absolute: Whether derivative URLs should be absolute.
            render_id: Render call identifier for logging.

        Returns:
            ResolvedBreakpoint list in input order, or the first Failure.
        """
        def resolve_one(breakpoint: Breakpoint) -> Union[ResolvedBreakpoint, Failure]:
            return self._resolve_breakpoint(
                image, breakpoint, crop_variants, sizes_template,
                default_crop_variant, default_width, absolute, render_id,
            )

        if self.max_workers > 1 and len(breakpoints) > 1:
            # executor.map yields results in submission order
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(resolve_one, breakpoints))
        else:
            results = []
            for breakpoint in breakpoints:
                result = resolve_one(breakpoint)
                results.append(result)
                if isinstance(result, Failure):
                    break

        for result in results:
            if isinstance(result, Failure):
                return result
        return results

    def _resolve_breakpoint(
        self,
        image: ImageReference,
        breakpoint: Breakpoint,
        crop_variants: CropVariantCollection,
        sizes_template: Optional[str],
        default_crop_variant: str,
        default_width: Optional[int],
        absolute: bool,
        render_id: str,
    ) -> Union[ResolvedBreakpoint, Failure]:
        crop_area = crop_variants.get_crop_area(breakpoint.crop_variant or default_crop_variant)
        base_width = breakpoint.width or breakpoint.threshold or default_width

        candidates = []
        for density in breakpoint.densities or [1.0]:
            instructions = build_instructions(
                image,
                width=_scaled(base_width, density),
                min_width=_scaled(breakpoint.min_width, density),
                max_width=_scaled(breakpoint.max_width, density),
                height=_scaled(breakpoint.height, density),
                crop_area=crop_area,
            )
            derivative = self.generator.generate(image, instructions, absolute, render_id)
            if isinstance(derivative, Failure):
                return derivative

            if breakpoint.densities:
                descriptor = f"{format_number(density)}x"
            else:
                # Actual width: the service may refuse to upscale
                descriptor = f"{derivative.width}w"
            candidates.append(SrcsetCandidate(image=derivative, descriptor=descriptor))

        sizes = None
        template = breakpoint.sizes or sizes_template
        if not breakpoint.densities and template:
            sizes = format_sizes(template, base_width or candidates[0].image.width)

        return ResolvedBreakpoint(
            breakpoint=breakpoint,
            candidates=candidates,
            media=media_condition(breakpoint),
            sizes=sizes,
        )

"""
Markup assembly for <picture> and <img srcset> output.
"""

import json
from typing import List, Optional

from responsive_images.config import RenderSettings
from responsive_images.models import Area, DerivativeImage, ImageReference, ResolvedBreakpoint
from responsive_images.rendering.lazyload import apply_lazyload
from responsive_images.rendering.tag_builder import TagBuilder
from responsive_images.utils.formatting import format_sizes
from responsive_images.utils.render_logger import LogLevel, get_logger


class MarkupAssembler:
    """Builds picture, source and img tags from resolved breakpoints."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings or RenderSettings()

    def create_picture_tag(
        self,
        resolved: List[ResolvedBreakpoint],
        fallback: DerivativeImage,
        image: ImageReference,
        fallback_tag: Optional[TagBuilder] = None,
        focus_area: Optional[Area] = None,
        picturefill: bool = True,
        lazyload: bool = False,
    ) -> TagBuilder:
        """
        Build a <picture> element.

        Args:
            resolved: Resolved breakpoints, one <source> each, in order. An
                entry without media condition matches always and belongs last.
            fallback: Fallback derivative for the <img> element.
            image: Original image (alt/title metadata).
            fallback_tag: Tag carrying the caller's attributes for the <img>.
            focus_area: Focus area of the selected crop variant.
            picturefill: Wrap the fallback <img> in <noscript>.
            lazyload: Use data-srcset/data-src and the lazyload class.

        Returns:
            TagBuilder for the picture element.
        """
        source_markup = []
        for index, entry in enumerate(resolved):
            if not entry.media and index < len(resolved) - 1:
                # First matching <source> wins
                get_logger().log_message(
                    LogLevel.DEBUG,
                    "markup",
                    f"Breakpoint {entry.breakpoint.name or index} has no media condition "
                    "and hides all later sources",
                )
            source = TagBuilder("source")
            source.add_attribute("srcset", entry.srcset)
            if entry.media:
                source.add_attribute("media", entry.media)
            if entry.sizes:
                source.add_attribute("sizes", entry.sizes)
            if lazyload:
                apply_lazyload(source, self.settings.lazyload_class, add_class=False)
            source_markup.append(source.render())

        fallback_tag = self.create_simple_image_tag(fallback, image, fallback_tag, focus_area)
        if lazyload:
            apply_lazyload(fallback_tag, self.settings.lazyload_class)

        fallback_markup = fallback_tag.render()
        if picturefill:
            fallback_markup = TagBuilder("noscript", fallback_markup).render()

        picture = TagBuilder("picture")
        picture.set_content("".join(source_markup) + fallback_markup)
        return picture

    def create_image_tag_with_srcset(
        self,
        resolved: List[ResolvedBreakpoint],
        fallback: DerivativeImage,
        image: ImageReference,
        tag: Optional[TagBuilder] = None,
        focus_area: Optional[Area] = None,
        sizes_template: Optional[str] = None,
        lazyload: bool = False,
    ) -> TagBuilder:
        """
        Build an <img> element with srcset and sizes attributes.

        The sizes query is only added for width descriptors and uses the
        width of the fallback image.
        """
        tag = tag or TagBuilder("img")
        tag.set_tag_name("img")

        candidates = [candidate for entry in resolved for candidate in entry.candidates]

        tag.add_attribute("src", fallback.url)
        tag.add_attribute("srcset", ", ".join(candidate.render() for candidate in candidates))
        width_descriptors = all(candidate.descriptor.endswith("w") for candidate in candidates)
        if candidates and width_descriptors and sizes_template:
            tag.add_attribute("sizes", format_sizes(sizes_template, fallback.width))
        tag.add_attribute("width", fallback.width)
        tag.add_attribute("height", fallback.height)

        self.add_metadata(tag, image, fallback, focus_area)

        if lazyload:
            apply_lazyload(tag, self.settings.lazyload_class)
        return tag

    def create_simple_image_tag(
        self,
        fallback: DerivativeImage,
        image: ImageReference,
        tag: Optional[TagBuilder] = None,
        focus_area: Optional[Area] = None,
    ) -> TagBuilder:
        """Plain <img> pointing at the fallback derivative."""
        tag = tag or TagBuilder("img")
        tag.set_tag_name("img")
        tag.add_attribute("src", fallback.url)
        tag.add_attribute("width", fallback.width)
        tag.add_attribute("height", fallback.height)
        self.add_metadata(tag, image, fallback, focus_area)
        return tag

    def add_metadata(
        self,
        tag: TagBuilder,
        image: ImageReference,
        fallback: DerivativeImage,
        focus_area: Optional[Area] = None,
    ):
        """Add focus area, alt and title attributes."""
        if focus_area is not None and not focus_area.is_empty() and not tag.has_attribute("data-focus-area"):
            absolute = focus_area.make_absolute(fallback.width, fallback.height)
            tag.add_attribute("data-focus-area", json.dumps(absolute.as_dict()))

        # alt is mandatory for valid markup, even when empty
        if not tag.get_attribute("alt"):
            tag.add_attribute("alt", image.alternative or "")
        if not tag.get_attribute("title") and image.title:
            tag.add_attribute("title", image.title)

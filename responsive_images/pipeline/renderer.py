"""
Top-level responsive image rendering.

The renderers decorate the host framework's default image rendering: without
``srcset`` or ``breakpoints`` they hand over to the injected base renderer,
otherwise they produce <picture> or <img srcset> markup from derivatives
requested through the injected image service.
"""

import time
from typing import Optional, Tuple, Union

from responsive_images.config import RenderSettings
from responsive_images.exceptions import ConfigurationError
from responsive_images.io.image_service import BaseRenderer, ImageService
from responsive_images.models import (
    DerivativeImage,
    Failure,
    ImageArguments,
    ImageReference,
)
from responsive_images.processing.breakpoints import (
    BreakpointResolver,
    normalize_breakpoints,
    parse_srcset,
)
from responsive_images.processing.crop_variants import CropVariantCollection
from responsive_images.processing.derivatives import DerivativeGenerator, build_instructions
from responsive_images.rendering.lazyload import rewrite_lazyload_markup
from responsive_images.rendering.markup import MarkupAssembler
from responsive_images.rendering.ratio_box import wrap
from responsive_images.rendering.tag_builder import TagBuilder
from responsive_images.utils.render_logger import get_logger

ResponsiveResult = Tuple[TagBuilder, DerivativeImage, int]


class ResponsiveRendererBase:
    """Shared wiring of the image and media renderers."""

    component = "renderer"

    def __init__(
        self,
        image_service: ImageService,
        base_renderer: BaseRenderer,
        settings: Optional[RenderSettings] = None,
        assembler: Optional[MarkupAssembler] = None,
        resolver: Optional[BreakpointResolver] = None,
    ):
        """
        Initialize the renderer.

        Args:
            image_service: Image lookup and processing service.
            base_renderer: Host renderer for non-responsive output.
            settings: Render defaults (default: RenderSettings()).
            assembler: Markup assembler (default: built from settings).
            resolver: Breakpoint resolver (default: built from settings).
        """
        self.settings = settings or RenderSettings()
        self.image_service = image_service
        self.base_renderer = base_renderer
        self.generator = DerivativeGenerator(image_service)
        self.resolver = resolver or BreakpointResolver(self.generator, self.settings.max_workers)
        self.assembler = assembler or MarkupAssembler(self.settings)
        self.logger = get_logger()

    def create_tag(self, arguments: ImageArguments) -> TagBuilder:
        """Initial <img> tag carrying the caller's attributes."""
        tag = TagBuilder("img")
        if arguments.css_class:
            tag.add_attribute("class", arguments.css_class)
        if arguments.alt is not None:
            tag.add_attribute("alt", arguments.alt)
        if arguments.title:
            tag.add_attribute("title", arguments.title)
        return tag

    def _lazyload(self, arguments: ImageArguments) -> bool:
        if arguments.lazyload is None:
            return self.settings.lazyload
        return arguments.lazyload

    def _picturefill(self, arguments: ImageArguments) -> bool:
        if arguments.picturefill is None:
            return self.settings.picturefill
        return arguments.picturefill

    def _render_base(self, arguments: ImageArguments, tag: TagBuilder, lazyload: bool) -> str:
        markup = self.base_renderer.render(arguments, tag)
        if lazyload:
            markup = rewrite_lazyload_markup(markup)
        return markup

    def _build_responsive(
        self,
        image: ImageReference,
        arguments: ImageArguments,
        tag: TagBuilder,
        crop_string: Optional[str],
        fallback_dimensions: dict,
        lazyload: bool,
        render_id: str,
    ) -> Union[ResponsiveResult, Failure]:
        """
        Generate the fallback derivative and the picture or srcset markup.

        Returns:
            (tag, fallback derivative, candidate count), or the first Failure.
        """
        crop_variants = CropVariantCollection.create(crop_string)
        crop_variant = arguments.crop_variant or self.settings.default_crop_variant
        crop_area = crop_variants.get_crop_area(crop_variant)
        focus_area = crop_variants.get_focus_area(crop_variant)

        instructions = build_instructions(image, crop_area=crop_area, **fallback_dimensions)
        fallback = self.generator.generate(image, instructions, arguments.absolute, render_id)
        if isinstance(fallback, Failure):
            return fallback

        sizes_template = arguments.sizes if arguments.sizes is not None else self.settings.sizes_template

        if arguments.breakpoints:
            resolved = self.resolver.resolve(
                image,
                normalize_breakpoints(arguments.breakpoints),
                crop_variants,
                sizes_template,
                default_crop_variant=crop_variant,
                default_width=fallback.width,
                absolute=arguments.absolute,
                render_id=render_id,
            )
            if isinstance(resolved, Failure):
                return resolved
            responsive_tag = self.assembler.create_picture_tag(
                resolved,
                fallback,
                image,
                fallback_tag=tag,
                focus_area=focus_area,
                picturefill=self._picturefill(arguments),
                lazyload=lazyload,
            )
        else:
            resolved = self.resolver.resolve(
                image,
                parse_srcset(arguments.srcset, fallback.width),
                crop_variants,
                None,
                default_crop_variant=crop_variant,
                default_width=fallback.width,
                absolute=arguments.absolute,
                render_id=render_id,
            )
            if isinstance(resolved, Failure):
                return resolved
            responsive_tag = self.assembler.create_image_tag_with_srcset(
                resolved,
                fallback,
                image,
                tag=tag,
                focus_area=focus_area,
                sizes_template=sizes_template,
                lazyload=lazyload,
            )

        candidate_count = sum(len(entry.candidates) for entry in resolved)
        return responsive_tag, fallback, candidate_count


class ResponsiveImageRenderer(ResponsiveRendererBase):
    """Renders an image given by src or image reference."""

    component = "image"

    def render(self, arguments: ImageArguments, tag: Optional[TagBuilder] = None) -> str:
        """
        Render responsive markup for an image.

        Args:
            arguments: Render arguments; exactly one of src and image is required.
            tag: Tag carrying host attributes (default: built from arguments).

        Returns:
            HTML fragment. Storage problems degrade to the plain tag.

        Raises:
            ConfigurationError: If both or neither of src and image are given.
            DegenerateRatioError: If an automatic ratio box meets a zero-width image.
        """
        if (arguments.src is None) == (arguments.image is None):
            raise ConfigurationError("You must either specify a string src or an image reference.")

        tag = tag or self.create_tag(arguments)
        lazyload = self._lazyload(arguments)
        if lazyload:
            tag.add_class(self.settings.lazyload_class)

        # Host default rendering if no responsive feature was selected
        if not arguments.breakpoints and not arguments.srcset:
            return self._render_base(arguments, tag, lazyload)

        start_time = time.time()
        mode = "picture" if arguments.breakpoints else "srcset"
        source = arguments.src if arguments.src is not None else arguments.image.identifier
        render_id = self.logger.log_render_start(self.component, mode, source)

        image = self.image_service.get_image(
            arguments.src, arguments.image, arguments.treat_id_as_reference
        )
        if isinstance(image, Failure):
            result: Union[ResponsiveResult, Failure] = image
        else:
            crop_string = arguments.crop if arguments.crop is not None else image.crop
            result = self._build_responsive(
                image,
                arguments,
                tag,
                crop_string,
                {
                    "width": arguments.width,
                    "min_width": arguments.min_width,
                    "max_width": arguments.max_width,
                    "height": arguments.height,
                    "min_height": arguments.min_height,
                    "max_height": arguments.max_height,
                },
                lazyload,
                render_id,
            )

        if isinstance(result, Failure):
            self.logger.log_degradation(render_id, self.component, result.reason.value, result.detail)
            return tag.render()

        responsive_tag, fallback, candidate_count = result
        markup = responsive_tag.render()
        if arguments.ratio_box:
            markup = wrap(markup, arguments.ratio_box, fallback, self.settings.ratio_box_class).render()

        self.logger.log_render_complete(
            render_id,
            self.component,
            mode,
            candidate_count,
            (time.time() - start_time) * 1000,
            markup,
        )
        return markup


class ResponsiveMediaRenderer(ResponsiveRendererBase):
    """Renders a media file; image files get responsive markup."""

    component = "media"

    def render(
        self,
        file: ImageReference,
        arguments: Optional[ImageArguments] = None,
        tag: Optional[TagBuilder] = None,
    ) -> str:
        """
        Render a media file.

        Non-image files and calls without srcset or breakpoints are rendered
        by the base renderer. Image files use their own crop configuration
        and only the width argument for the fallback image.

        Args:
            file: The media file.
            arguments: Render arguments (src and image are ignored).
            tag: Tag carrying host attributes (default: built from arguments).

        Returns:
            HTML fragment.
        """
        arguments = (arguments or ImageArguments()).model_copy(update={"image": file, "src": None})
        tag = tag or self.create_tag(arguments)
        lazyload = self._lazyload(arguments)
        if lazyload:
            tag.add_class(self.settings.lazyload_class)

        if not file.is_image() or (not arguments.breakpoints and not arguments.srcset):
            return self._render_base(arguments, tag, lazyload)

        start_time = time.time()
        mode = "picture" if arguments.breakpoints else "srcset"
        render_id = self.logger.log_render_start(self.component, mode, file.identifier)

        result = self._build_responsive(
            file,
            arguments,
            tag,
            file.crop,
            {"width": arguments.width},
            lazyload,
            render_id,
        )
        if isinstance(result, Failure):
            self.logger.log_degradation(render_id, self.component, result.reason.value, result.detail)
            return tag.render()

        responsive_tag, _, candidate_count = result
        markup = responsive_tag.render()
        self.logger.log_render_complete(
            render_id,
            self.component,
            mode,
            candidate_count,
            (time.time() - start_time) * 1000,
            markup,
        )
        return markup

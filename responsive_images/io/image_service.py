"""
Interfaces of the collaborators the renderers depend on.

The image service owns storage lookup and the actual resizing/encoding.
The base renderer produces the host framework's non-responsive markup.
Both are injected into the renderers; nothing here is resolved globally.
"""

from typing import TYPE_CHECKING, Optional, Protocol, Union

from responsive_images.models import (
    DerivativeImage,
    Failure,
    ImageArguments,
    ImageReference,
    ProcessingInstructions,
)

if TYPE_CHECKING:
    from responsive_images.rendering.tag_builder import TagBuilder


class ImageService(Protocol):
    """Storage-backed image lookup and processing."""

    def get_image(
        self,
        src: Optional[str],
        image: Optional[ImageReference],
        treat_id_as_reference: bool = False,
    ) -> Union[ImageReference, Failure]:
        """
        Resolve the source image.

        Args:
            src: Path, URL or identifier of the image.
            image: Already resolved image reference.
            treat_id_as_reference: Interpret a numeric src as a file reference id.

        Returns:
            ImageReference, or Failure when the image cannot be resolved.
        """
        ...

    def apply_processing_instructions(
        self,
        image: ImageReference,
        instructions: ProcessingInstructions,
    ) -> Union[DerivativeImage, Failure]:
        """Create (or reuse) a derivative matching the instructions."""
        ...

    def get_image_uri(self, image: DerivativeImage, absolute: bool = False) -> str:
        """Public URL of a derivative, optionally absolute."""
        ...


class BaseRenderer(Protocol):
    """Renders the host framework's default, non-responsive tag."""

    def render(self, arguments: ImageArguments, tag: "TagBuilder") -> str:
        ...

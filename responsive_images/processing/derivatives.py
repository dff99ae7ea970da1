"""
Derivative image generation through the injected image service.
"""

import time
from typing import Optional, Union

from responsive_images.io.image_service import ImageService
from responsive_images.models import (
    Area,
    DerivativeImage,
    Failure,
    ImageReference,
    ProcessingInstructions,
)
from responsive_images.processing.crop_variants import absolute_crop
from responsive_images.utils.render_logger import get_logger


def _dimension(value: Optional[int]) -> Optional[int]:
    """Treat zero and negative dimensions as unset."""
    if value is None:
        return None
    value = int(value)
    return value if value > 0 else None


def build_instructions(
    image: ImageReference,
    width: Optional[int] = None,
    min_width: Optional[int] = None,
    max_width: Optional[int] = None,
    height: Optional[int] = None,
    min_height: Optional[int] = None,
    max_height: Optional[int] = None,
    crop_area: Optional[Area] = None,
) -> ProcessingInstructions:
    """
    Assemble processing instructions for one derivative.

    Args:
        image: Source image; its pixel size turns the crop area absolute.
        width, min_width, max_width, height, min_height, max_height:
            Optional constraints; unset or zero values are omitted.
        crop_area: Relative crop area (None or empty for no cropping).

    Returns:
        ProcessingInstructions.
    """
    return ProcessingInstructions(
        width=_dimension(width),
        min_width=_dimension(min_width),
        max_width=_dimension(max_width),
        height=_dimension(height),
        min_height=_dimension(min_height),
        max_height=_dimension(max_height),
        crop=absolute_crop(crop_area, image) if crop_area is not None else None,
    )


class DerivativeGenerator:
    """Requests processed images from the image service."""

    def __init__(self, image_service: ImageService):
        """
        Initialize the generator.

        Args:
            image_service: Service that creates the derivative files.
        """
        self.image_service = image_service
        self.logger = get_logger()

    def generate(
        self,
        image: ImageReference,
        instructions: ProcessingInstructions,
        absolute: bool = False,
        render_id: str = "",
    ) -> Union[DerivativeImage, Failure]:
        """
        Generate a derivative and resolve its public URL.

        Args:
            image: Source image.
            instructions: Sizing and cropping constraints.
            absolute: Whether the URL should be absolute.
            render_id: Render call identifier for logging.

        Returns:
            DerivativeImage, or the Failure reported by the image service.
        """
        start_time = time.time()
        result = self.image_service.apply_processing_instructions(image, instructions)

        if not isinstance(result, Failure):
            url = self.image_service.get_image_uri(result, absolute)
            if url != result.url:
                result = result.model_copy(update={"url": url})

        self.logger.log_derivative(
            render_id=render_id,
            component="derivatives",
            source=image.identifier,
            options=instructions.as_options(),
            result=result,
            latency_ms=(time.time() - start_time) * 1000,
        )
        return result

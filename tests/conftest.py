"""
Shared fixtures: in-memory image service and host base renderer.
"""

from typing import Dict, List, Optional

import pytest

from responsive_images.models import (
    DerivativeImage,
    Failure,
    ImageArguments,
    ImageReference,
    ProcessingInstructions,
    ResolutionFailure,
)
from responsive_images.utils.render_logger import RenderLogger


class FakeImageService:
    """Computes derivative sizes the way a real processor would, without files."""

    def __init__(
        self,
        images: Optional[Dict[str, ImageReference]] = None,
        base_url: str = "https://cdn.example.com",
        allow_upscaling: bool = True,
    ):
        self.images = images or {}
        self.base_url = base_url
        self.allow_upscaling = allow_upscaling
        self.processing_failure: Optional[Failure] = None
        self.calls: List[ProcessingInstructions] = []

    def get_image(self, src, image, treat_id_as_reference=False):
        if image is not None:
            return image
        if src in self.images:
            return self.images[src]
        return Failure(reason=ResolutionFailure.NOT_FOUND, detail=f"File {src} does not exist")

    def apply_processing_instructions(self, image, instructions):
        self.calls.append(instructions)
        if self.processing_failure is not None:
            return self.processing_failure

        crop = instructions.crop
        source_width = crop.width if crop else image.width
        source_height = crop.height if crop else image.height

        width = instructions.width or source_width
        if instructions.max_width and width > instructions.max_width:
            width = instructions.max_width
        if instructions.min_width and width < instructions.min_width:
            width = instructions.min_width
        if not self.allow_upscaling and width > source_width:
            width = source_width
        height = instructions.height or int(round(source_height * width / source_width))

        stem = image.identifier.rsplit(".", 1)[0]
        return DerivativeImage(url=f"/processed/{stem}_{width}x{height}.jpg", width=width, height=height)

    def get_image_uri(self, image, absolute=False):
        return self.base_url + image.url if absolute else image.url


class FakeBaseRenderer:
    """Host default rendering: a plain <img> pointing at the original file."""

    def __init__(self):
        self.calls = 0

    def render(self, arguments: ImageArguments, tag):
        self.calls += 1
        source = arguments.src if arguments.src is not None else arguments.image.identifier
        tag.add_attribute("src", f"/fileadmin/{source}")
        if arguments.width:
            tag.add_attribute("width", arguments.width)
        return tag.render()


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Fresh render logger with logging disabled for every test."""
    monkeypatch.delenv("RESPONSIVE_IMAGES_DEBUG_LEVEL", raising=False)
    monkeypatch.delenv("RESPONSIVE_IMAGES_LOG_TO_FILE", raising=False)
    RenderLogger._instance = None
    yield
    RenderLogger._instance = None


@pytest.fixture
def photo():
    return ImageReference(identifier="photo.jpg", width=1600, height=900, alternative="A photo")


@pytest.fixture
def wide_photo():
    return ImageReference(identifier="wide.jpg", width=1600, height=800)


@pytest.fixture
def image_service(photo, wide_photo):
    return FakeImageService(images={"photo.jpg": photo, "wide.jpg": wide_photo})


@pytest.fixture
def base_renderer():
    return FakeBaseRenderer()

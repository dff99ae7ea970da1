"""
Tests for breakpoint parsing and resolution.
"""

import json

import pytest

from responsive_images.models import Breakpoint, Failure, ResolutionFailure
from responsive_images.processing.breakpoints import (
    BreakpointResolver,
    media_condition,
    normalize_breakpoints,
    parse_srcset,
)
from responsive_images.processing.crop_variants import CropVariantCollection
from responsive_images.processing.derivatives import DerivativeGenerator

from conftest import FakeImageService

SIZES = "(min-width: %1$dpx) %1$dpx, 100vw"


@pytest.fixture
def resolver(image_service):
    return BreakpointResolver(DerivativeGenerator(image_service))


def test_parse_srcset_string():
    """Test comma separated widths with and without descriptor."""
    breakpoints = parse_srcset("480, 800w,1200", reference_width=800)
    assert [breakpoint.width for breakpoint in breakpoints] == [480, 800, 1200]
    assert all(breakpoint.densities is None for breakpoint in breakpoints)


def test_parse_srcset_densities():
    """Test density entries based on the reference width."""
    breakpoints = parse_srcset(["1x", "2x"], reference_width=640)
    assert [breakpoint.width for breakpoint in breakpoints] == [640, 640]
    assert [breakpoint.densities for breakpoint in breakpoints] == [[1.0], [2.0]]


def test_parse_srcset_widths_and_densities():
    """Test that density entries become widths when mixed with width entries."""
    breakpoints = parse_srcset("400, 2x, 1.5x", reference_width=800)
    assert [breakpoint.width for breakpoint in breakpoints] == [400, 1600, 1200]
    assert [breakpoint.name for breakpoint in breakpoints] == ["400w", "1600w", "1200w"]
    assert all(breakpoint.densities is None for breakpoint in breakpoints)


def test_parse_srcset_mixed_dict_densities():
    """Test that a breakpoint with several densities expands into width entries."""
    breakpoints = parse_srcset([300, {"width": 500, "densities": [1, 2]}], reference_width=800)
    assert [breakpoint.width for breakpoint in breakpoints] == [300, 500, 1000]


def test_parse_srcset_mixed_items():
    """Test ints, dicts and Breakpoint objects in a list."""
    breakpoints = parse_srcset(
        [400, {"width": 600, "cropVariant": "mobile"}, Breakpoint(width=900)],
        reference_width=800,
    )
    assert [breakpoint.width for breakpoint in breakpoints] == [400, 600, 900]
    assert breakpoints[1].crop_variant == "mobile"


def test_parse_srcset_skips_invalid_entries():
    """Test that garbage entries are dropped."""
    assert [bp.width for bp in parse_srcset("abc, 300, , x", 800)] == [300]
    assert parse_srcset(None, 800) == []
    assert parse_srcset("", 800) == []


def test_normalize_breakpoints_keeps_order():
    """Test that breakpoints keep the caller's order."""
    breakpoints = normalize_breakpoints([
        {"name": "desktop", "threshold": 1200},
        Breakpoint(name="mobile"),
        "not a breakpoint",
        {"name": "tablet", "threshold": 768},
    ])
    assert [breakpoint.name for breakpoint in breakpoints] == ["desktop", "mobile", "tablet"]


def test_media_condition():
    """Test explicit media queries and threshold conditions."""
    assert media_condition(Breakpoint(threshold=768)) == "(min-width: 768px)"
    assert media_condition(Breakpoint(threshold=768, media="(orientation: portrait)")) == "(orientation: portrait)"
    assert media_condition(Breakpoint()) is None


def test_resolve_in_order(resolver, photo):
    """Test one resolved entry per breakpoint, in input order."""
    breakpoints = [
        Breakpoint(name="desktop", threshold=1200),
        Breakpoint(name="tablet", threshold=768),
        Breakpoint(name="mobile", width=480),
    ]
    resolved = resolver.resolve(photo, breakpoints, CropVariantCollection(), SIZES)

    assert [entry.breakpoint.name for entry in resolved] == ["desktop", "tablet", "mobile"]
    assert [entry.srcset for entry in resolved] == [
        "/processed/photo_1200x675.jpg 1200w",
        "/processed/photo_768x432.jpg 768w",
        "/processed/photo_480x270.jpg 480w",
    ]
    assert [entry.media for entry in resolved] == ["(min-width: 1200px)", "(min-width: 768px)", None]
    assert resolved[1].sizes == "(min-width: 768px) 768px, 100vw"


def test_resolve_does_not_deduplicate(resolver, photo, image_service):
    """Test that identical breakpoints each produce an entry."""
    breakpoints = [Breakpoint(width=600), Breakpoint(width=600)]
    resolved = resolver.resolve(photo, breakpoints, CropVariantCollection(), SIZES)
    assert len(resolved) == 2
    assert resolved[0].srcset == resolved[1].srcset
    assert len(image_service.calls) == 2


def test_resolve_densities(resolver, photo):
    """Test density multipliers on a breakpoint."""
    resolved = resolver.resolve(
        photo, [Breakpoint(width=400, densities=[1, 2])], CropVariantCollection(), SIZES
    )
    assert resolved[0].srcset == "/processed/photo_400x225.jpg 1x, /processed/photo_800x450.jpg 2x"
    assert resolved[0].sizes is None


def test_resolve_uses_actual_width_without_upscaling(photo):
    """Test that the width descriptor follows the processed image."""
    service = FakeImageService(images={"photo.jpg": photo}, allow_upscaling=False)
    resolver = BreakpointResolver(DerivativeGenerator(service))
    resolved = resolver.resolve(photo, [Breakpoint(width=2400)], CropVariantCollection(), SIZES)
    assert resolved[0].srcset == "/processed/photo_1600x900.jpg 1600w"


def test_resolve_crop_variants(resolver, photo, image_service):
    """Test per-breakpoint crop variants with fallback to the default variant."""
    crop = CropVariantCollection.create(json.dumps({
        "default": {"cropArea": {"x": 0.25, "y": 0, "width": 0.5, "height": 1}},
        "square": {"cropArea": {"x": 0, "y": 0, "width": 0.5625, "height": 1}},
    }))
    resolver.resolve(
        photo,
        [Breakpoint(width=800), Breakpoint(width=400, crop_variant="square")],
        crop,
        SIZES,
    )
    assert image_service.calls[0].crop.as_dict() == {"x": 400, "y": 0, "width": 800, "height": 900}
    assert image_service.calls[1].crop.as_dict() == {"x": 0, "y": 0, "width": 900, "height": 900}


def test_resolve_tag_level_variant(resolver, photo, image_service):
    """Test that the tag-level variant applies to breakpoints without one."""
    crop = CropVariantCollection.create(json.dumps({
        "wide": {"cropArea": {"x": 0, "y": 0.25, "width": 1, "height": 0.5}},
    }))
    resolver.resolve(photo, [Breakpoint(width=800)], crop, SIZES, default_crop_variant="wide")
    assert image_service.calls[0].crop.as_dict() == {"x": 0, "y": 225, "width": 1600, "height": 450}


def test_resolve_default_width(resolver, photo, image_service):
    """Test that a breakpoint without width uses the default width."""
    resolved = resolver.resolve(
        photo, [Breakpoint(name="any")], CropVariantCollection(), SIZES, default_width=640
    )
    assert image_service.calls[0].width == 640
    assert resolved[0].sizes == "(min-width: 640px) 640px, 100vw"


def test_resolve_returns_failure(resolver, photo, image_service):
    """Test that a processing failure is returned, not raised."""
    image_service.processing_failure = Failure(reason=ResolutionFailure.OUTSIDE_STORAGE)
    result = resolver.resolve(photo, [Breakpoint(width=400), Breakpoint(width=800)], CropVariantCollection(), SIZES)
    assert isinstance(result, Failure)
    assert result.reason == ResolutionFailure.OUTSIDE_STORAGE
    assert len(image_service.calls) == 1


def test_resolve_concurrently_keeps_order(image_service, photo):
    """Test that concurrent resolution returns entries in input order."""
    resolver = BreakpointResolver(DerivativeGenerator(image_service), max_workers=4)
    widths = [1200, 300, 900, 600, 1500, 450]
    resolved = resolver.resolve(
        photo, [Breakpoint(width=width) for width in widths], CropVariantCollection(), SIZES
    )
    assert [entry.candidates[0].image.width for entry in resolved] == widths

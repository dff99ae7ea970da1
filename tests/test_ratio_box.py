"""
Tests for the ratio box wrapper.
"""

import pytest

from responsive_images.exceptions import ConfigurationError, DegenerateRatioError
from responsive_images.models import DerivativeImage
from responsive_images.rendering.ratio_box import box_ratio, wrap


def test_auto_ratio():
    """Test automatic ratio from the fallback image."""
    fallback = DerivativeImage(url="/a.jpg", width=800, height=400)
    assert box_ratio("auto", fallback) == 50
    assert box_ratio(True, fallback) == 50


def test_fixed_ratio_ignores_image():
    """Test that a numeric ratio is used as is."""
    fallback = DerivativeImage(url="/a.jpg", width=800, height=400)
    assert box_ratio(75, fallback) == 75
    assert box_ratio("62.5", fallback) == 62.5


def test_wrap():
    """Test the wrapper markup."""
    fallback = DerivativeImage(url="/a.jpg", width=800, height=450)
    box = wrap('<img src="/a.jpg" />', "auto", fallback)
    assert box.render() == (
        '<div class="ratio-box" style="padding-bottom: 56.25%"><img src="/a.jpg" /></div>'
    )


def test_wrap_custom_class():
    """Test a configured wrapper class."""
    fallback = DerivativeImage(url="/a.jpg", width=800, height=400)
    box = wrap("<img />", 75, fallback, class_name="aspect")
    assert box.render() == '<div class="aspect" style="padding-bottom: 75%"><img /></div>'


def test_zero_width_fallback_raises():
    """Test that an automatic ratio on a zero-width image is a visible error."""
    fallback = DerivativeImage(url="/broken.jpg", width=0, height=400)
    with pytest.raises(DegenerateRatioError):
        box_ratio("auto", fallback)
    with pytest.raises(ZeroDivisionError):
        box_ratio("auto", fallback)


def test_invalid_ratio_raises():
    """Test that a ratio that is neither a number nor auto is rejected."""
    fallback = DerivativeImage(url="/a.jpg", width=800, height=400)
    with pytest.raises(ConfigurationError):
        box_ratio("wide", fallback)

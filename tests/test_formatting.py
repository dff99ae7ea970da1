"""
Tests for sizes templates and number formatting.
"""

from responsive_images.config import DEFAULT_SIZES_TEMPLATE
from responsive_images.utils.formatting import format_number, format_sizes


def test_default_sizes_template():
    """Test the positional default template."""
    assert format_sizes(DEFAULT_SIZES_TEMPLATE, 768) == "(min-width: 768px) 768px, 100vw"


def test_plain_placeholders_repeat_width():
    """Test that every plain placeholder receives the same width."""
    assert format_sizes("(min-width: %dpx) %dpx, 100vw", 1200) == "(min-width: 1200px) 1200px, 100vw"
    assert format_sizes("%s", 480) == "480"


def test_percent_escape():
    """Test the %% escape."""
    assert format_sizes("(max-width: %1$dpx) 100vw, 50%%", 600) == "(max-width: 600px) 100vw, 50%"


def test_template_without_placeholder():
    """Test that a literal template is kept as is."""
    assert format_sizes("100vw", 600) == "100vw"


def test_format_number():
    """Test markup number formatting."""
    assert format_number(50.0) == "50"
    assert format_number(75) == "75"
    assert format_number(56.25) == "56.25"
    assert format_number(2.0) == "2"
    assert format_number(1.5) == "1.5"

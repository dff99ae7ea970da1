"""
Tag building, markup assembly, lazy loading and ratio boxes.
"""

from responsive_images.rendering.lazyload import apply_lazyload, rewrite_lazyload_markup
from responsive_images.rendering.markup import MarkupAssembler
from responsive_images.rendering.ratio_box import box_ratio, wrap
from responsive_images.rendering.tag_builder import TagBuilder

__all__ = [
    "MarkupAssembler",
    "TagBuilder",
    "apply_lazyload",
    "box_ratio",
    "rewrite_lazyload_markup",
    "wrap",
]

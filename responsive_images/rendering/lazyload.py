"""
Lazy-loading rewrites for built tags and for host-rendered markup.

Lazy loading scripts pick up images by class and read their sources from
``data-src`` / ``data-srcset``, so the real attributes are renamed.
"""

import re

from bs4 import BeautifulSoup

from responsive_images.rendering.tag_builder import TagBuilder

LAZY_ATTRIBUTES = (("src", "data-src"), ("srcset", "data-srcset"))


def apply_lazyload(tag: TagBuilder, class_name: str = "lazyload", add_class: bool = True) -> TagBuilder:
    """
    Prepare a built tag for a lazy loading script.

    Args:
        tag: Tag to modify in place.
        class_name: Class token marking the element as lazy.
        add_class: Whether to add the class token (not needed on <source>).

    Returns:
        The same tag.
    """
    if add_class:
        tag.add_class(class_name)
    for attribute, lazy_attribute in LAZY_ATTRIBUTES:
        if tag.has_attribute(attribute) and not tag.has_attribute(lazy_attribute):
            tag.rename_attribute(attribute, lazy_attribute)
    return tag


def rewrite_lazyload_markup(markup: str) -> str:
    """
    Rename source attributes in markup produced by the host renderer.

    The markup is parsed only to find the attributes to rename; the rename
    itself is applied to the original string so the host output is kept
    byte for byte otherwise. Markup that already carries ``data-src`` was
    rewritten before and is returned untouched.

    Args:
        markup: HTML fragment.

    Returns:
        Rewritten HTML fragment.
    """
    if not markup or "data-src" in markup:
        return markup

    soup = BeautifulSoup(markup, "html.parser")
    renames = set()
    for element in soup.find_all(True):
        for attribute, lazy_attribute in LAZY_ATTRIBUTES:
            if attribute in element.attrs and lazy_attribute not in element.attrs:
                renames.add(attribute)

    if not renames:
        return markup

    # Longest name first so "srcset" is not matched as "src"
    names = "|".join(sorted(renames, key=len, reverse=True))
    return re.sub(rf"(\s)({names})(\s*=)", r"\1data-\2\3", markup)

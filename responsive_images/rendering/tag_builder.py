"""
Minimal HTML tag builder.
"""

from html import escape
from typing import Dict, Optional

VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
}


class TagBuilder:
    """Builds a single HTML element with ordered attributes and raw content."""

    def __init__(self, tag_name: str = "", content: str = "", force_closing_tag: bool = False):
        self.tag_name = tag_name
        self.content = content
        self.force_closing_tag = force_closing_tag
        self.attributes: Dict[str, str] = {}

    def set_tag_name(self, tag_name: str):
        self.tag_name = tag_name

    def set_content(self, content: str):
        self.content = content

    def has_content(self) -> bool:
        return bool(self.content)

    def add_attribute(self, name: str, value):
        """Set an attribute; a new attribute goes last, an existing one keeps its position."""
        self.attributes[name] = "" if value is None else str(value)

    def add_attributes(self, attributes: Dict[str, object]):
        for name, value in attributes.items():
            self.add_attribute(name, value)

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def remove_attribute(self, name: str):
        self.attributes.pop(name, None)

    def rename_attribute(self, old: str, new: str):
        """Rename an attribute in place, keeping its position."""
        if old not in self.attributes:
            return
        self.attributes = {
            (new if name == old else name): value
            for name, value in self.attributes.items()
        }

    def add_class(self, token: str):
        """Append a class token unless it is already present."""
        classes = (self.attributes.get("class") or "").split()
        if token not in classes:
            classes.append(token)
        self.add_attribute("class", " ".join(classes))

    def render(self) -> str:
        if not self.tag_name:
            return ""

        output = "<" + self.tag_name
        for name, value in self.attributes.items():
            output += f' {name}="{escape(value, quote=True)}"'

        if self.has_content() or self.force_closing_tag or self.tag_name not in VOID_ELEMENTS:
            output += f">{self.content}</{self.tag_name}>"
        else:
            output += " />"
        return output

    def __str__(self) -> str:
        return self.render()

"""Read-only helpers over a parsed BeautifulSoup document.

The extraction code treats the tree as borrowed: nothing here mutates a node.
Element nodes are ``bs4.Tag``; text nodes are plain ``NavigableString``
instances (comments, doctypes and CDATA sections are not text).
"""

import re
from typing import Any, Iterator, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

HIDDEN_MARKER = "data-md-hidden"

_HIDDEN_STYLE = re.compile(r"(?:^|;)\s*(?:display\s*:\s*none|visibility\s*:\s*hidden)\b", re.IGNORECASE)


def parse_html(html: str) -> BeautifulSoup:
    """Parse markup into a document tree (lxml, best-effort recovery)."""
    return BeautifulSoup(html or "", "lxml")


def is_element(node: Any) -> bool:
    return isinstance(node, Tag)


def is_text(node: Any) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def tag_name(node: Any) -> Optional[str]:
    """Lowercase tag name of an element, ``None`` for anything else."""
    if not isinstance(node, Tag) or not node.name:
        return None
    return node.name.lower()


def child_elements(node: Tag) -> Iterator[Tag]:
    for child in node.children:
        if isinstance(child, Tag):
            yield child


def text_content(node: Any) -> str:
    """Concatenated text of every descendant text node, unfiltered."""
    if is_text(node):
        return str(node)
    if not isinstance(node, Tag):
        return ""
    return "".join(str(d) for d in node.descendants if is_text(d))


def attr_string(node: Tag, name: str) -> str:
    """Attribute value as a single string (multi-valued attributes are space-joined)."""
    value = node.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def class_and_id(node: Tag) -> str:
    return attr_string(node, "class") + " " + attr_string(node, "id")


def is_rendered(node: Tag) -> bool:
    """Best-effort visibility from a static snapshot.

    The Playwright renderer stamps ``data-md-hidden`` on elements the live
    page reported as not rendered. Static markup falls back to the inline
    ``style`` declaration and the ``hidden`` attribute.
    """
    if node.has_attr(HIDDEN_MARKER):
        return False
    if node.has_attr("hidden"):
        return False
    return not _HIDDEN_STYLE.search(attr_string(node, "style"))


def document_body(root: Tag) -> Tag:
    """The document ``<body>``, or the root itself when there is none."""
    if tag_name(root) == "body":
        return root
    body = root.find("body")
    return body if isinstance(body, Tag) else root

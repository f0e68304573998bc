"""Recursive DOM -> Markdown conversion.

Every element is classified into exactly one ``TagRule`` and handed to the
matching handler. Handlers are pure: each returns the Markdown for its own
subtree and the caller concatenates results in document order.
"""

import re
from enum import Enum
from typing import Callable, Dict, List, Optional
from urllib.parse import urljoin

from bs4 import Tag

from markdown_mcp.extract.classifier import flatten_text, should_skip
from markdown_mcp.extract.dom import attr_string, child_elements, is_element, is_text, tag_name, text_content
from markdown_mcp.extract.options import ConversionContext, ExtractOptions

_HEADING = re.compile(r"^h([1-6])$")
_LANGUAGE = re.compile(r"language-(\w+)")


class TagRule(Enum):
    """Conversion rules, one per supported element family."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    PREFORMATTED = "preformatted"
    INLINE_CODE = "inline_code"
    BLOCKQUOTE = "blockquote"
    LIST = "list"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    RULE = "rule"
    TABLE = "table"
    LINE_BREAK = "line_break"
    LINK = "link"
    IMAGE = "image"
    CONTAINER = "container"
    OTHER = "other"


_SIMPLE_RULES: Dict[str, TagRule] = {
    "p": TagRule.PARAGRAPH,
    "pre": TagRule.PREFORMATTED,
    "blockquote": TagRule.BLOCKQUOTE,
    "ul": TagRule.LIST,
    "ol": TagRule.LIST,
    "strong": TagRule.STRONG,
    "b": TagRule.STRONG,
    "em": TagRule.EMPHASIS,
    "i": TagRule.EMPHASIS,
    "hr": TagRule.RULE,
    "table": TagRule.TABLE,
    "br": TagRule.LINE_BREAK,
    "a": TagRule.LINK,
    "img": TagRule.IMAGE,
}

CONTAINER_TAGS = frozenset(["div", "section", "article", "main", "span", "td", "th", "li"])


def classify(node: Tag) -> TagRule:
    """Map an element to its conversion rule; unknown tags get ``OTHER``."""
    name = tag_name(node) or ""
    if _HEADING.match(name):
        return TagRule.HEADING
    if name == "code":
        # code directly under pre is handled by the pre rule
        return TagRule.OTHER if tag_name(node.parent) == "pre" else TagRule.INLINE_CODE
    rule = _SIMPLE_RULES.get(name)
    if rule is not None:
        return rule
    if name in CONTAINER_TAGS:
        return TagRule.CONTAINER
    return TagRule.OTHER


def _wrap(text: str, marker: str) -> str:
    text = text.strip()
    return f"{marker}{text}{marker}" if text else ""


class MarkdownConverter:
    """Convert an element subtree into Markdown text.

    ``include_links`` renders anchors as ``[label](href)`` (plain label when
    off); ``include_images`` renders ``![alt](src)`` (nothing when off).
    Relative targets are resolved against ``base_url`` when one is given.
    """

    def __init__(
        self,
        include_images: bool = True,
        include_links: bool = True,
        base_url: Optional[str] = None,
    ):
        self.include_images = include_images
        self.include_links = include_links
        self.base_url = base_url
        self._handlers: Dict[TagRule, Callable[[Tag, ConversionContext], str]] = {
            TagRule.HEADING: self._heading,
            TagRule.PARAGRAPH: self._paragraph,
            TagRule.PREFORMATTED: self._preformatted,
            TagRule.INLINE_CODE: self._inline_code,
            TagRule.BLOCKQUOTE: self._blockquote,
            TagRule.LIST: self._list,
            TagRule.STRONG: self._strong,
            TagRule.EMPHASIS: self._emphasis,
            TagRule.RULE: self._rule,
            TagRule.TABLE: self._table,
            TagRule.LINE_BREAK: self._line_break,
            TagRule.LINK: self._link,
            TagRule.IMAGE: self._image,
            TagRule.CONTAINER: self._container,
            TagRule.OTHER: self._other,
        }

    @classmethod
    def from_options(cls, options: ExtractOptions, base_url: Optional[str] = None) -> "MarkdownConverter":
        return cls(
            include_images=options.include_images,
            include_links=options.include_links,
            base_url=base_url,
        )

    def convert(self, node, context: Optional[ConversionContext] = None) -> str:
        """Markdown for *node*; skipped nodes and non-elements yield ``""``."""
        if node is None or should_skip(node):
            return ""
        context = context or ConversionContext()
        return self._handlers[classify(node)](node, context)

    # ---- helpers -------------------------------------------------------------

    def _mixed_children(self, node: Tag, context: ConversionContext) -> str:
        """Raw text children plus converted element children under *context*."""
        parts: List[str] = []
        for child in node.children:
            if is_text(child):
                parts.append(str(child))
            elif is_element(child):
                parts.append(self.convert(child, context))
        return "".join(parts)

    def _element_children(self, node: Tag, context: ConversionContext) -> str:
        return "".join(self.convert(child, context) for child in child_elements(node))

    def _resolve(self, target: str) -> Optional[str]:
        """Absolute form of *target*, or None when the markup holds a malformed URL."""
        if self.base_url:
            try:
                target = urljoin(self.base_url, target)
            except ValueError:
                return None
        return target.replace(" ", "%20")

    # ---- rules ---------------------------------------------------------------

    def _heading(self, node: Tag, context: ConversionContext) -> str:
        level = int(_HEADING.match(tag_name(node)).group(1))
        text = flatten_text(node).strip()
        if not text:
            return ""
        return "\n" + "#" * level + " " + text + "\n\n"

    def _paragraph(self, node: Tag, context: ConversionContext) -> str:
        # paragraphs reset list membership for their children
        text = self._mixed_children(node, context.descend(in_list=False)).strip()
        return text + "\n\n" if text else ""

    def _preformatted(self, node: Tag, context: ConversionContext) -> str:
        code = node.find("code")
        text = text_content(code if code is not None else node).strip()
        if not text:
            return ""
        match = _LANGUAGE.search(attr_string(code, "class")) if code is not None else None
        language = match.group(1) if match else ""
        return "\n```" + language + "\n" + text + "\n```\n\n"

    def _inline_code(self, node: Tag, context: ConversionContext) -> str:
        return "`" + text_content(node).strip() + "`"

    def _blockquote(self, node: Tag, context: ConversionContext) -> str:
        text = flatten_text(node).strip()
        if not text:
            return ""
        lines = [line.strip() for line in text.split("\n") if line.strip()]
        return "\n" + "\n".join("> " + line for line in lines) + "\n\n"

    def _list(self, node: Tag, context: ConversionContext) -> str:
        ordered = tag_name(node) == "ol"
        item_context = context.descend(in_list=True)
        items = [child for child in child_elements(node) if tag_name(child) == "li"]

        out: List[str] = []
        for idx, item in enumerate(items, start=1):
            prefix = f"{idx}. " if ordered else "- "
            text = self._mixed_children(item, item_context).strip()
            if text:
                out.append(prefix + text + "\n")
        # only the outermost list closes with a blank line
        if not context.in_list:
            out.append("\n")
        return "".join(out)

    def _strong(self, node: Tag, context: ConversionContext) -> str:
        return _wrap(flatten_text(node), "**")

    def _emphasis(self, node: Tag, context: ConversionContext) -> str:
        return _wrap(flatten_text(node), "*")

    def _rule(self, node: Tag, context: ConversionContext) -> str:
        return "\n---\n\n"

    def _table(self, node: Tag, context: ConversionContext) -> str:
        out: List[str] = []
        for row in node.find_all("tr"):
            cells = row.find_all(["th", "td"])
            texts = [flatten_text(cell).strip().replace("\n", " ") for cell in cells]
            if not any(texts):
                continue
            out.append("| " + " | ".join(texts) + " |\n")
            if len(out) == 1:
                # sized from the first emitted row only
                out.append("| " + " | ".join("---" for _ in cells) + " |\n")
        if not out:
            return ""
        return "".join(out) + "\n"

    def _line_break(self, node: Tag, context: ConversionContext) -> str:
        return "\n"

    def _link(self, node: Tag, context: ConversionContext) -> str:
        label = flatten_text(node).strip().replace("\n", " ")
        if not label:
            label = self._element_children(node, context.descend()).strip()
        if not self.include_links or not label:
            return label
        href = attr_string(node, "href").strip()
        if not href or href.startswith("#") or href.lower().startswith("javascript:"):
            return label
        target = self._resolve(href)
        return f"[{label}]({target})" if target else label

    def _image(self, node: Tag, context: ConversionContext) -> str:
        if not self.include_images:
            return ""
        src = attr_string(node, "src").strip()
        if not src or src.lower().startswith("data:"):
            return ""
        target = self._resolve(src)
        if not target:
            return ""
        alt = attr_string(node, "alt").strip()
        return f"![{alt}]({target})"

    def _container(self, node: Tag, context: ConversionContext) -> str:
        parts: List[str] = []
        for child in node.children:
            if is_element(child):
                parts.append(self.convert(child, context.descend()))
            elif is_text(child) and context.depth == 0 and not context.in_list:
                # deeper text is already captured by the flattening rules
                text = str(child).strip()
                if text:
                    parts.append(text + " ")
        return "".join(parts)

    def _other(self, node: Tag, context: ConversionContext) -> str:
        return self._element_children(node, context.descend())


def convert_to_markdown(
    node: Tag,
    options: Optional[ExtractOptions] = None,
    base_url: Optional[str] = None,
) -> str:
    """Entry point: convert *node* starting from depth 0, outside any list."""
    converter = MarkdownConverter.from_options(options or ExtractOptions(), base_url=base_url)
    return converter.convert(node, ConversionContext())

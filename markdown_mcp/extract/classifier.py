"""Skip classifier -- decides which elements are boilerplate or invisible."""

from typing import Any

from markdown_mcp.extract.dom import attr_string, class_and_id, is_rendered, is_text, tag_name

# Content-bearing tags survive even inside containers flagged below.
NEVER_SKIP_TAGS = frozenset(
    ["p", "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "li", "table", "pre", "code", "blockquote"]
)
TECHNICAL_TAGS = frozenset(["script", "style", "noscript", "iframe"])
BOILERPLATE_ROLES = frozenset(["navigation", "banner", "contentinfo", "complementary"])
BOILERPLATE_TAGS = frozenset(["nav", "header", "footer", "aside"])

# Kept narrow: broader patterns ("sidebar", "menu") match real content.
SKIP_PATTERNS = ("cookie-banner", "gdpr", "advertisement", "sponsored")


def should_skip(node: Any) -> bool:
    """Return True when *node* (and its whole subtree) must be left out.

    Rules are evaluated in order and the first match wins.
    """
    name = tag_name(node)
    if name is None:
        return True

    if name in NEVER_SKIP_TAGS:
        return False

    if name not in ("script", "style") and not is_rendered(node):
        return True

    if name in TECHNICAL_TAGS:
        return True

    if attr_string(node, "role") in BOILERPLATE_ROLES:
        return True

    if name in BOILERPLATE_TAGS:
        return True

    combined = class_and_id(node).lower()
    return any(pattern in combined for pattern in SKIP_PATTERNS)


def flatten_text(node: Any) -> str:
    """Text of *node* with skipped descendants removed and ``<br>`` as newline."""
    parts = []
    for child in node.children:
        if is_text(child):
            parts.append(str(child))
            continue
        name = tag_name(child)
        if name == "br":
            parts.append("\n")
        elif name is not None and not should_skip(child):
            parts.append(flatten_text(child))
    return "".join(parts)

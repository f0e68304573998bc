"""Unit tests for the skip classifier and skip-aware text flattening."""

from markdown_mcp.extract.classifier import flatten_text, should_skip
from markdown_mcp.extract.dom import parse_html


def _el(html: str, selector: str):
    return parse_html(html).select_one(selector)


class TestShouldSkip:
    def test_none_and_text_nodes(self):
        assert should_skip(None) is True
        p = _el("<p>hello</p>", "p")
        assert should_skip(p.contents[0]) is True

    def test_plain_div_kept(self):
        assert should_skip(_el("<div>content</div>", "div")) is False

    def test_technical_tags(self):
        for tag in ("script", "style", "noscript", "iframe"):
            html = f"<body><{tag}></{tag}></body>"
            assert should_skip(_el(html, tag)) is True, tag

    def test_boilerplate_tags(self):
        for tag in ("nav", "header", "footer", "aside"):
            html = f"<body><{tag}>x</{tag}></body>"
            assert should_skip(_el(html, tag)) is True, tag

    def test_boilerplate_roles(self):
        for role in ("navigation", "banner", "contentinfo", "complementary"):
            html = f'<div role="{role}">x</div>'
            assert should_skip(_el(html, "div")) is True, role

    def test_other_role_kept(self):
        assert should_skip(_el('<div role="main">x</div>', "div")) is False

    def test_deny_listed_class_or_id(self):
        assert should_skip(_el('<div class="Cookie-Banner top">x</div>', "div")) is True
        assert should_skip(_el('<div id="gdpr-consent">x</div>', "div")) is True
        assert should_skip(_el('<div class="sponsored-links">x</div>', "div")) is True

    def test_sidebar_class_not_deny_listed(self):
        assert should_skip(_el('<div class="sidebar-content">x</div>', "div")) is False

    def test_content_tags_never_skipped(self):
        for tag in ("p", "h2", "ul", "ol", "table", "pre", "blockquote"):
            html = f'<{tag} class="advertisement" role="navigation">x</{tag}>'
            assert should_skip(_el(html, tag)) is False, tag

    def test_inline_hidden_styles(self):
        assert should_skip(_el('<div style="display: none">x</div>', "div")) is True
        assert should_skip(_el('<div style="color:red;visibility:hidden">x</div>', "div")) is True
        assert should_skip(_el('<div style="display:block">x</div>', "div")) is False

    def test_hidden_attribute_and_marker(self):
        assert should_skip(_el("<div hidden>x</div>", "div")) is True
        assert should_skip(_el('<span data-md-hidden="1">x</span>', "span")) is True

    def test_hidden_paragraph_still_kept(self):
        assert should_skip(_el('<p style="display:none">x</p>', "p")) is False


class TestFlattenText:
    def test_br_becomes_newline(self):
        assert flatten_text(_el("<div>a<br>b</div>", "div")) == "a\nb"

    def test_skipped_descendants_removed(self):
        html = "<div>keep <script>var x;</script><nav>menu</nav><span>this</span></div>"
        assert flatten_text(_el(html, "div")) == "keep this"

    def test_comments_ignored(self):
        assert flatten_text(_el("<div>a<!-- note -->b</div>", "div")) == "ab"

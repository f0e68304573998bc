"""Unit tests for the recursive Markdown converter."""

from markdown_mcp.extract.converter import MarkdownConverter, TagRule, classify, convert_to_markdown
from markdown_mcp.extract.dom import parse_html
from markdown_mcp.extract.normalizer import clean_markdown
from markdown_mcp.extract.options import ConversionContext, ExtractOptions


def _first(html: str):
    """First element inside <body>."""
    return parse_html(html).body.find(True)


def _md(html: str, **kwargs) -> str:
    return convert_to_markdown(_first(html), **kwargs)


class TestClassify:
    def test_rules(self):
        assert classify(_first("<h3>x</h3>")) is TagRule.HEADING
        assert classify(_first("<ol><li>x</li></ol>")) is TagRule.LIST
        assert classify(_first("<b>x</b>")) is TagRule.STRONG
        assert classify(_first("<section>x</section>")) is TagRule.CONTAINER
        assert classify(_first("<label>x</label>")) is TagRule.OTHER

    def test_code_depends_on_parent(self):
        pre = _first("<pre><code>x</code></pre>")
        assert classify(pre.code) is TagRule.OTHER
        p = _first("<p><code>x</code></p>")
        assert classify(p.code) is TagRule.INLINE_CODE

    def test_every_rule_has_a_handler(self):
        assert set(MarkdownConverter()._handlers) == set(TagRule)


class TestHeadings:
    def test_heading(self):
        assert _md("<h2>Title</h2>") == "\n## Title\n\n"

    def test_heading_levels(self):
        assert _md("<h6> Deep </h6>") == "\n###### Deep\n\n"

    def test_empty_heading_emits_nothing(self):
        assert _md("<h3>   </h3>") == ""

    def test_heading_br(self):
        assert _md("<h1>A<br>B</h1>") == "\n# A\nB\n\n"

    def test_heading_own_line_between_blank_lines(self):
        html = "<div><p>Before the heading.</p><h2>Title</h2><p>After the heading.</p></div>"
        assert "\n\n## Title\n\n" in clean_markdown(_md(html))


class TestInline:
    def test_paragraph_with_strong(self):
        assert _md("<p>Hello <strong>world</strong>!</p>") == "Hello **world**!\n\n"

    def test_emphasis(self):
        assert _md("<p><em>hi</em> and <i>there</i></p>") == "*hi* and *there*\n\n"

    def test_empty_strong(self):
        assert _md("<b>  </b>") == ""

    def test_inline_code(self):
        assert _md("<p>Use <code> x </code> now</p>") == "Use `x` now\n\n"

    def test_empty_paragraph(self):
        assert _md("<p>   </p>") == ""

    def test_line_break_and_rule(self):
        assert _md("<br>") == "\n"
        assert _md("<hr>") == "\n---\n\n"


class TestCodeBlocks:
    def test_fenced_with_language(self):
        html = '<pre><code class="language-js">const x=1;</code></pre>'
        assert _md(html) == "\n```js\nconst x=1;\n```\n\n"

    def test_internal_whitespace_preserved(self):
        html = "<pre><code>def f():\n    return 1\n</code></pre>"
        assert _md(html) == "\n```\ndef f():\n    return 1\n```\n\n"

    def test_pre_without_code(self):
        assert _md("<pre>  raw text  </pre>") == "\n```\nraw text\n```\n\n"

    def test_code_content_is_opaque(self):
        html = '<pre><code class="language-html"><b>not bold</b></code></pre>'
        assert _md(html) == "\n```html\nnot bold\n```\n\n"

    def test_empty_pre(self):
        assert _md("<pre><code>  </code></pre>") == ""


class TestBlockquote:
    def test_lines_prefixed(self):
        html = "<blockquote>line one<br><br>  line two </blockquote>"
        assert _md(html) == "\n> line one\n> line two\n\n"

    def test_empty(self):
        assert _md("<blockquote> </blockquote>") == ""


class TestLists:
    def test_ordered(self):
        assert _md("<ol><li>A</li><li>B</li></ol>") == "1. A\n2. B\n\n"

    def test_unordered(self):
        assert _md("<ul><li>A</li><li><b>B</b> too</li></ul>") == "- A\n- **B** too\n\n"

    def test_nested_list_has_no_blank_line(self):
        html = "<ul><li>One\n<ul><li>Sub</li></ul></li><li>Two</li></ul>"
        assert _md(html) == "- One\n- Sub\n- Two\n\n"

    def test_numbering_counts_empty_items(self):
        assert _md("<ol><li>A</li><li> </li><li>C</li></ol>") == "1. A\n3. C\n\n"

    def test_list_inside_list_context(self):
        ul = _first("<ul><li>A</li></ul>")
        converter = MarkdownConverter()
        assert converter.convert(ul, ConversionContext(depth=2, in_list=True)) == "- A\n"


class TestTables:
    def test_header_separator_and_row(self):
        html = "<table><tr><th>H1</th><th>H2</th></tr><tr><td>a</td><td>b</td></tr></table>"
        assert _md(html) == "| H1 | H2 |\n| --- | --- |\n| a | b |\n\n"

    def test_empty_rows_filtered_and_separator_follows_first_emitted(self):
        html = (
            "<table><tr><td></td></tr>"
            "<tr><td>x</td><td>y</td></tr>"
            "<tr><td>z</td></tr></table>"
        )
        assert _md(html) == "| x | y |\n| --- | --- |\n| z |\n\n"

    def test_cell_newlines_become_spaces(self):
        assert _md("<table><tr><td>a<br>b</td></tr></table>") == "| a b |\n| --- |\n\n"

    def test_all_empty_table(self):
        assert _md("<table><tr><td> </td></tr></table>") == ""


class TestContainers:
    def test_top_level_text_kept(self):
        html = "<div>Intro <p>Para</p> tail</div>"
        assert _md(html) == "Intro Para\n\ntail "

    def test_deep_text_dropped(self):
        assert _md("<div><div>lost <p>kept</p></div></div>") == "kept\n\n"

    def test_unknown_tag_drops_own_text(self):
        assert _md("<div><label>dropped<b>bold</b></label></div>") == "**bold**"

    def test_nav_subtree_skipped(self):
        html = "<div><nav><p>menu</p></nav><p>body text</p></div>"
        assert _md(html) == "body text\n\n"

    def test_sidebar_class_paragraph_kept(self):
        assert _md('<div class="sidebar-content"><p>Side text</p></div>') == "Side text\n\n"


class TestLinksAndImages:
    def test_link_resolved_against_base(self):
        html = '<p>See <a href="/docs">the docs</a>.</p>'
        out = _md(html, base_url="https://example.com/a/")
        assert out == "See [the docs](https://example.com/docs).\n\n"

    def test_links_disabled_keeps_label(self):
        html = '<p>See <a href="/docs">the docs</a>.</p>'
        out = _md(html, options=ExtractOptions(include_links=False))
        assert out == "See the docs.\n\n"

    def test_fragment_link_is_plain_text(self):
        assert _md('<p><a href="#top">Back</a></p>') == "Back\n\n"

    def test_image(self):
        html = '<div><img src="pic.png" alt="A pic"></div>'
        out = _md(html, base_url="https://example.com/x/")
        assert out == "![A pic](https://example.com/x/pic.png)"

    def test_images_disabled(self):
        html = '<div><img src="pic.png" alt="A pic"></div>'
        assert _md(html, options=ExtractOptions(include_images=False)) == ""

    def test_data_uri_image_dropped(self):
        assert _md('<div><img src="data:image/png;base64,AAAA"></div>') == ""

    def test_linked_image(self):
        html = '<p><a href="/full.png"><img src="/thumb.png" alt="thumb"></a></p>'
        out = _md(html, base_url="https://e.com/")
        assert out == "[![thumb](https://e.com/thumb.png)](https://e.com/full.png)\n\n"


def test_conversion_does_not_mutate_tree():
    soup = parse_html("<div><h1>T</h1><p>x <b>y</b></p><ul><li>z</li></ul></div>")
    before = str(soup)
    first = convert_to_markdown(soup.body)
    second = convert_to_markdown(soup.body)
    assert first == second
    assert str(soup) == before


class TestMalformedTargets:
    def test_malformed_href_keeps_label(self):
        html = '<p>Go <a href="http://[broken">there</a> now</p>'
        assert _md(html, base_url="https://example.com/") == "Go there now\n\n"

    def test_malformed_src_dropped(self):
        html = '<div><img src="http://[broken/pic.png" alt="pic"></div>'
        assert _md(html, base_url="https://example.com/") == ""

    def test_line_break_in_link_label(self):
        html = '<p><a href="/a">first<br>second</a></p>'
        assert _md(html, base_url="https://example.com/") == "[first second](https://example.com/a)\n\n"

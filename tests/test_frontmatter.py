from __future__ import annotations

from ccc_cli.frontmatter import parse_frontmatter, render_frontmatter


class TestParseFrontmatter:
    def test_fields_and_body(self):
        text = "---\nname: reviewer\ndescription: Reviews code\n---\n\nBody text\n"
        fields, body = parse_frontmatter(text)
        assert fields == {"name": "reviewer", "description": "Reviews code"}
        assert body == "\nBody text\n"

    def test_no_header_returns_text_unchanged(self):
        text = "# Just markdown\n\nname: not a field\n"
        assert parse_frontmatter(text) == ({}, text)

    def test_empty_text(self):
        assert parse_frontmatter("") == ({}, "")

    def test_unterminated_header_is_ignored(self):
        text = "---\nname: reviewer\nno closing line\n"
        assert parse_frontmatter(text) == ({}, text)

    def test_skips_comments_and_blank_lines(self):
        text = "---\n# a comment\n\nname: x\n---\nbody"
        fields, body = parse_frontmatter(text)
        assert fields == {"name": "x"}
        assert body == "body"

    def test_first_colon_separates_value(self):
        fields, _ = parse_frontmatter("---\nurl: https://example.com:8080/x\n---\n")
        assert fields == {"url": "https://example.com:8080/x"}

    def test_duplicate_keys_last_write_wins(self):
        fields, _ = parse_frontmatter("---\nmodel: a\nmodel: b\n---\n")
        assert fields == {"model": "b"}

    def test_lines_without_colon_are_ignored(self):
        fields, _ = parse_frontmatter("---\nname: x\njust words\n---\n")
        assert fields == {"name": "x"}

    def test_values_stay_strings(self):
        fields, _ = parse_frontmatter("---\ntimeout: 30\nenabled: true\n---\n")
        assert fields == {"timeout": "30", "enabled": "true"}

    def test_delimiter_must_be_exact(self):
        text = "----\nname: x\n----\nbody"
        assert parse_frontmatter(text) == ({}, text)

    def test_leading_byte_order_mark(self):
        fields, body = parse_frontmatter("\ufeff---\nname: x\n---\nbody\n")
        assert fields == {"name": "x"}
        assert body == "body\n"

    def test_crlf_line_endings(self):
        fields, body = parse_frontmatter("---\r\nname: x\r\n---\r\nbody\r\n")
        assert fields == {"name": "x"}
        assert body == "body\r\n"


class TestRenderFrontmatter:
    def test_renders_in_given_order_and_skips_none(self):
        text = render_frontmatter({"name": "a", "model": None, "color": "red"}, "Hello")
        assert text == "---\nname: a\ncolor: red\n---\n\nHello"

    def test_parse_recovers_rendered_fields(self):
        fields = {"name": "a", "description": "does things", "tools": "Read, Grep"}
        parsed, body = parse_frontmatter(render_frontmatter(fields, "Body"))
        assert parsed == fields
        assert body.strip() == "Body"

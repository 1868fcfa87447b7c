"""Frontmatter splitting and value coercion."""

import pytest

from motif import parse
from motif.parser.frontmatter import coerce_value, parse_frontmatter_block, split_frontmatter


class TestSplit:
    def test_splits_block_from_body(self):
        body, data, consumed = split_frontmatter("---\ntitle: Home\n---\n<h1>x</h1>")
        assert body == "<h1>x</h1>"
        assert data == {"title": "Home"}
        assert consumed == 3

    def test_no_block(self):
        assert split_frontmatter("<p>x</p>") == ("<p>x</p>", {}, 0)

    def test_unterminated_block_is_body(self):
        source = "---\ntitle: Home\n<p>x</p>"
        assert split_frontmatter(source) == (source, {}, 0)

    def test_block_must_lead(self):
        source = "\n---\ntitle: x\n---\n"
        assert split_frontmatter(source)[1] == {}

    def test_empty_block(self):
        body, data, _ = split_frontmatter("---\n---\nbody")
        assert (body, data) == ("body", {})

    def test_crlf_fences(self):
        body, data, _ = split_frontmatter("---\r\nlayout: base\r\n---\r\nbody")
        assert body == "body"
        assert data == {"layout": "base"}

    def test_body_line_numbers_follow_the_file(self):
        nodes = parse("---\ntitle: x\n---\n{{ y }}").nodes
        assert nodes[0].lineno == 4


class TestBlockLines:
    def test_skips_blank_comment_and_invalid_lines(self):
        block = "# comment\n\ntitle: Home\nnot a pair\n: no key"
        assert parse_frontmatter_block(block) == {"title": "Home"}

    def test_value_may_contain_colons(self):
        assert parse_frontmatter_block("time: 10:30") == {"time": "10:30"}

    def test_later_keys_win(self):
        assert parse_frontmatter_block("a: 1\na: 2") == {"a": 2}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42),
        ("-7", -7),
        ("3.5", 3.5),
        ("true", True),
        ("false", False),
        ("plain text", "plain text"),
        ('"quoted: yes"', "quoted: yes"),
        ("'single'", "single"),
        ("[a, b]", ["a", "b"]),
        ("[1, two, 'three']", [1, "two", "three"]),
        ("[]", []),
        ('["x", 2]', ["x", 2]),
        ('{"a": 1}', {"a": 1}),
        ("{not json}", "{not json}"),
        ("", ""),
    ],
)
def test_coerce_value(raw, expected):
    assert coerce_value(raw) == expected


def test_layout_must_be_a_non_empty_string():
    assert parse("---\nlayout: 3\n---\nx").metadata.layout is None
    assert parse("---\nlayout: \n---\nx").metadata.layout is None
    assert parse("---\nlayout: base\n---\nx").metadata.layout == "base"

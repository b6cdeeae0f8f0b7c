"""Unit tests for XML tree queries and the streaming tree builder."""

import xml.etree.ElementTree as ET

import pytest

from feedread.xmltree import (
    TreeBuilder,
    find_all,
    find_all_text,
    find_tag_text,
    local_name,
    named,
)

DOCUMENT = """\
<root>
  <item id="1"><title>First</title><item id="nested"/></item>
  <group>
    <item id="2">Second <b>bold</b> tail</item>
  </group>
  <item id="3"/>
</root>
"""


class TestTreeQueriesUnit:
    """Unit tests for find_all, find_all_text and find_tag_text."""

    def test_find_all_non_recursive_skips_nested_matches(self):
        """Test that matches inside a match are skipped without recursion."""
        root = ET.fromstring(DOCUMENT)

        finds = find_all(root, named("item"), recurse=False)

        assert [e.get("id") for e in finds] == ["1", "2", "3"]

    def test_find_all_recursive_includes_nested_matches(self):
        """Test that recursion returns nested matches in document order."""
        root = ET.fromstring(DOCUMENT)

        finds = find_all(root, named("item"), recurse=True)

        assert [e.get("id") for e in finds] == ["1", "nested", "2", "3"]

    def test_find_all_checks_the_root_itself(self):
        """Test that the root node is a candidate."""
        root = ET.fromstring(DOCUMENT)

        assert find_all(root, named("root"), recurse=False) == [root]

    def test_find_all_no_matches(self):
        """Test that no matches gives an empty list."""
        root = ET.fromstring(DOCUMENT)

        assert find_all(root, named("missing"), recurse=True) == []

    def test_find_all_accepts_lambda_predicates(self):
        """Test that any callable works as a predicate."""
        root = ET.fromstring(DOCUMENT)

        finds = find_all(root, lambda e: e.get("id") == "3", recurse=False)

        assert len(finds) == 1 and finds[0].tag == "item"

    def test_find_all_does_not_modify_tree(self):
        """Test that searching leaves the tree unchanged."""
        root = ET.fromstring(DOCUMENT)
        before = ET.tostring(root)

        find_all(root, named("item"), recurse=True)

        assert ET.tostring(root) == before

    def test_find_all_text_non_recursive(self):
        """Test that only the node's own text fragments are joined."""
        item = ET.fromstring("<item>Second <b>bold</b> tail</item>")

        assert find_all_text(item, recurse=False) == "Second  tail"

    def test_find_all_text_recursive(self):
        """Test that recursion joins all text in the subtree in order."""
        item = ET.fromstring("<item>Second <b>bold <i>and</i> more</b> tail</item>")

        assert find_all_text(item, recurse=True) == "Second bold and more tail"

    def test_find_all_text_ignores_own_tail(self):
        """Test that text after the node's end tag is not its text."""
        root = ET.fromstring("<r><a>inside</a>outside</r>")

        assert find_all_text(root[0], recurse=True) == "inside"

    def test_find_all_text_empty_element(self):
        """Test that an empty element has empty text."""
        assert find_all_text(ET.fromstring("<a/>"), recurse=True) == ""

    def test_find_tag_text_single_match(self):
        """Test the text of a single matching child."""
        item = ET.fromstring("<item><title>Hello</title><link>x</link></item>")

        assert find_tag_text(item, named("title")) == "Hello"

    def test_find_tag_text_is_not_recursive(self):
        """Test that text inside nested elements is left out."""
        item = ET.fromstring("<item><title>Hello <b>big</b> world</title></item>")

        assert find_tag_text(item, named("title")) == "Hello  world"

    def test_find_tag_text_missing_is_empty(self):
        """Test that no match gives an empty string."""
        item = ET.fromstring("<item><link>x</link></item>")

        assert find_tag_text(item, named("title")) == ""

    def test_find_tag_text_ambiguous_is_empty(self):
        """Test that two matches give an empty string."""
        item = ET.fromstring("<item><title>One</title><title>Two</title></item>")

        assert find_tag_text(item, named("title")) == ""

    def test_find_tag_text_nested_match_counts_once(self):
        """Test that a match nested in a match does not make it ambiguous."""
        # The inner title is inside a match, so it is never seen.
        item = ET.fromstring("<item><title>Outer<title>Inner</title></title></item>")

        assert find_tag_text(item, named("title")) == "Outer"

    def test_cdata_is_plain_text(self):
        """Test that CDATA content reads as plain text."""
        item = ET.fromstring(
            "<item><description><![CDATA[<p>Hi</p>]]></description></item>"
        )

        assert find_tag_text(item, named("description")) == "<p>Hi</p>"


class TestNamesUnit:
    """Unit tests for tag name helpers."""

    def test_local_name_strips_namespace(self):
        """Test that the namespace URI is removed."""
        assert local_name("{http://www.w3.org/2005/Atom}entry") == "entry"

    def test_local_name_plain(self):
        """Test that tags without a namespace are unchanged."""
        assert local_name("item") == "item"

    def test_named_matches_namespaced_tags(self):
        """Test that named() compares local names."""
        root = ET.fromstring('<feed xmlns="http://www.w3.org/2005/Atom"><title/></feed>')

        assert named("title")(root[0])
        assert not named("feed")(root[0])

    def test_named_is_case_sensitive(self):
        """Test that tag names are compared exactly."""
        assert not named("pubdate")(ET.Element("pubDate"))

    def test_named_ignores_comment_nodes(self):
        """Test that comment nodes never match."""
        assert not named("item")(ET.Comment("item"))


class TestTreeBuilderUnit:
    """Unit tests for TreeBuilder."""

    def test_single_document(self):
        """Test building one complete tree."""
        builder = TreeBuilder()

        trees = list(builder.feed(b"<rss><channel/></rss>"))
        trees += list(builder.close())

        assert len(trees) == 1
        assert trees[0].tag == "rss"
        assert trees[0][0].tag == "channel"

    def test_document_split_across_chunks(self):
        """Test that a tree split across chunks is rebuilt whole."""
        builder = TreeBuilder()
        document = b"<rss><channel><item><title>T</title></item></channel></rss>"

        trees = []
        for start in range(0, len(document), 5):
            trees += list(builder.feed(document[start : start + 5]))
        trees += list(builder.close())

        assert len(trees) == 1
        assert find_tag_text(trees[0], named("title")) == "T"

    def test_open_root_yields_nothing(self):
        """Test that no tree is yielded until its root closes."""
        builder = TreeBuilder()

        assert list(builder.feed(b"<rss><channel>")) == []
        trees = list(builder.feed(b"</channel></rss>")) + list(builder.close())
        assert [t.tag for t in trees] == ["rss"]

    def test_accepts_text_input(self):
        """Test that str chunks are accepted."""
        builder = TreeBuilder()

        trees = list(builder.feed("<rss>café</rss>")) + list(builder.close())

        assert trees[0].text == "café"

    def test_honours_xml_encoding_declaration(self):
        """Test that byte input is decoded per the XML declaration."""
        builder = TreeBuilder()
        document = '<?xml version="1.0" encoding="ISO-8859-1"?><rss>café</rss>'

        trees = list(builder.feed(document.encode("latin-1")))
        trees += list(builder.close())

        assert trees[0].text == "café"

    def test_unclosed_tag_fails(self):
        """Test that mismatched tags raise ParseError."""
        builder = TreeBuilder()

        with pytest.raises(ET.ParseError):
            list(builder.feed(b"<rss><channel><item></channel></rss>"))
            list(builder.close())

    def test_truncated_document_fails_on_close(self):
        """Test that closing with an open root raises ParseError."""
        builder = TreeBuilder()

        assert list(builder.feed(b"<rss><channel>")) == []
        with pytest.raises(ET.ParseError):
            list(builder.close())

    def test_empty_stream_fails_on_close(self):
        """Test that closing an empty stream raises ParseError."""
        with pytest.raises(ET.ParseError):
            list(TreeBuilder().close())

    def test_second_root_fails_after_first_tree(self):
        """Test that a second root fails after the first tree is yielded."""
        builder = TreeBuilder()
        trees = []

        with pytest.raises(ET.ParseError):
            for tree in builder.feed(b"<a/><b/>"):
                trees.append(tree)
            for tree in builder.close():
                trees.append(tree)

        assert [t.tag for t in trees] == ["a"]

import pytest

from core.errors import MarkupError
from core.html_query import Document

HTML = """
<div class="entry">
  <a class="name big" href="hobby/1">Name</a>
  <img alt="no source">
</div>
"""


class TestDocument:
    def test_text_of_missing_node_is_empty(self):
        doc = Document(HTML)
        assert doc.text(".missing") == ""

    def test_text_of_present_node(self):
        doc = Document(HTML)
        assert doc.text(".name") == "Name"

    def test_attr_missing_is_none(self):
        img = Document(HTML).find("img")
        assert img is not None
        assert img.attr("src") is None

    def test_list_attribute_is_joined(self):
        name = Document(HTML).find(".name")
        assert name.attr("class") == "name big"

    def test_require_attr_missing_attribute(self):
        entry = Document(HTML).find(".entry")
        with pytest.raises(MarkupError) as exc:
            entry.require_attr("img", "src")
        assert exc.value.selector == "img"
        assert exc.value.attr == "src"

    def test_require_attr_missing_node(self):
        entry = Document(HTML).find(".entry")
        with pytest.raises(MarkupError) as exc:
            entry.require_attr(".pay", "href")
        assert exc.value.attr is None

    def test_find_all_keeps_document_order(self):
        doc = Document("<p>a</p><p>b</p><p>c</p>")
        assert [n.text() for n in doc.find_all("p")] == ["a", "b", "c"]

    def test_text_reads_first_match_only(self):
        doc = Document('<a class="name">first</a><a class="name">second</a>')
        assert doc.text(".name") == "first"

import pytest

from cosmos2xlsx.exceptions import CollectionReadError
from cosmos2xlsx.export.events import EventKind
from cosmos2xlsx.export.reader import CollectionReader
from cosmos2xlsx.source.base import DocumentPage

from conftest import FakeSource


class ScriptedSource(FakeSource):
    """Returns a fixed list of pages regardless of the token passed."""

    def __init__(self, pages):
        super().__init__({})
        self.pages = list(pages)

    def fetch_page(self, collection, continuation_token=None):
        self.fetches.append((collection, continuation_token))
        page = self.pages.pop(0)
        if isinstance(page, Exception):
            raise page
        return page


def test_read_follows_continuation_tokens(sample_documents, observer):
    source = FakeSource({"people": sample_documents}, page_size=1)
    reader = CollectionReader(source, observer)

    documents = reader.read("people")

    assert documents == sample_documents
    assert source.fetches == [("people", None), ("people", "1"), ("people", "2")]


def test_read_preserves_source_order_and_duplicates():
    docs = [{"id": "b"}, {"id": "a"}, {"id": "b"}]
    reader = CollectionReader(FakeSource({"c": docs}, page_size=2))

    assert reader.read("c") == docs


def test_read_empty_collection_returns_empty_list():
    reader = CollectionReader(FakeSource({"c": []}))

    assert reader.read("c") == []


def test_read_emits_running_count_per_page(sample_documents, observer):
    reader = CollectionReader(FakeSource({"people": sample_documents}, page_size=2), observer)

    reader.read("people")

    pages = [e for e in observer.events if e.kind == EventKind.PAGE_RETRIEVED]
    assert [e.message for e in pages] == [
        "Retrieved 2 items so far...",
        "Retrieved 3 items so far...",
    ]
    assert all(e.collection == "people" for e in pages)


def test_iter_pages_is_lazy():
    source = FakeSource({"c": [{"n": i} for i in range(6)]}, page_size=2)
    pages = CollectionReader(source).iter_pages("c")

    first = next(pages)

    assert first.documents == [{"n": 0}, {"n": 1}]
    assert len(source.fetches) == 1


def test_source_error_becomes_collection_read_error():
    reader = CollectionReader(FakeSource({"c": RuntimeError("throttled")}))

    with pytest.raises(CollectionReadError) as exc_info:
        reader.read("c")

    assert exc_info.value.collection == "c"
    assert "throttled" in exc_info.value.message
    assert isinstance(exc_info.value.cause, RuntimeError)


def test_error_on_later_page_aborts_collection():
    source = ScriptedSource(
        [DocumentPage([{"a": 1}], "t1"), ConnectionError("reset")]
    )

    with pytest.raises(CollectionReadError, match="page 2"):
        CollectionReader(source).read("c")


def test_repeated_continuation_token_is_rejected():
    source = ScriptedSource(
        [DocumentPage([{"a": 1}], "same"), DocumentPage([{"a": 2}], "same")]
    )

    with pytest.raises(CollectionReadError, match="same continuation token"):
        CollectionReader(source).read("c")


def test_empty_intermediate_page_is_followed():
    source = ScriptedSource(
        [
            DocumentPage([], "t1"),
            DocumentPage([{"a": 1}], None),
        ]
    )

    assert CollectionReader(source).read("c") == [{"a": 1}]

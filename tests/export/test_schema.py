import random

from cosmos2xlsx.export.schema import parse_column_list, unify_columns


def test_union_of_all_top_level_properties(sample_documents):
    columns = unify_columns(sample_documents)

    expected = {key for doc in sample_documents for key in doc}
    assert set(columns) == expected
    assert len(columns) == len(expected)


def test_columns_sorted_ordinally():
    docs = [{"b": 1, "a": 2}, {"B": 3, "_id": 4, "é": 5}]
    assert unify_columns(docs) == ["B", "_id", "a", "b", "é"]


def test_ordering_is_independent_of_document_order(sample_documents):
    shuffled = list(sample_documents)
    random.Random(7).shuffle(shuffled)
    assert unify_columns(shuffled) == unify_columns(sample_documents)


def test_nested_keys_are_not_flattened():
    docs = [{"address": {"city": "Oslo", "zip": "0150"}}]
    assert unify_columns(docs) == ["address"]


def test_override_returned_verbatim_in_caller_order(sample_documents):
    override = ["name", "missing", "id"]
    assert unify_columns(sample_documents, override) == override


def test_override_duplicates_dropped():
    assert unify_columns([], ["a", "b", "a", ""]) == ["a", "b"]


def test_empty_override_derives_columns():
    assert unify_columns([{"x": 1}], []) == ["x"]


def test_empty_documents_yield_empty_column_set():
    assert unify_columns([]) == []


def test_parse_column_list_handles_repeats_and_commas():
    assert parse_column_list(["id,name", " age ", "a,,b"]) == ["id", "name", "age", "a", "b"]


def test_parse_column_list_empty():
    assert parse_column_list(None) == []
    assert parse_column_list([]) == []

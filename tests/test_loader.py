import json
import logging

import pytest

from shamir_consensus.errors import InvalidBase, ParseError, UnknownExpression
from shamir_consensus.loader import KEYED, SHARE_LIST, load_document, parse_document


def _share_list(**overrides):
    data = {
        "n": 3,
        "k": 2,
        "shares": [
            {"id": 1, "value": "sum(10,5)"},
            {"id": 2, "value": "multiply(3,7)"},
            {"id": 3, "value": "27"},
        ],
    }
    data.update(overrides)
    return data


def test_share_list_layout():
    document = parse_document(json.dumps(_share_list()))

    assert document.layout == SHARE_LIST
    assert (document.n, document.k, document.degree) == (3, 2, 1)
    assert [share.id for share in document.shares] == [1, 2, 3]
    assert [int(share.value) for share in document.shares] == [15, 21, 27]
    assert document.shares[0].source == "sum(10,5)"


def test_share_list_with_base_records():
    data = _share_list(shares=[{"id": 1, "base": "2", "value": "111"}, {"id": 2, "base": 16, "value": "ff"}], n=2)
    document = parse_document(data)
    assert [int(share.value) for share in document.shares] == [7, 255]
    assert document.shares[1].source == "ff (base 16)"


def test_only_first_n_records_are_used():
    document = parse_document(_share_list(n=2))
    assert len(document.shares) == 2


def test_keyed_layout_sorted_by_x():
    data = {
        "keys": {"n": 4, "k": 3},
        "6": {"base": "4", "value": "213"},
        "1": {"base": "10", "value": "4"},
        "3": {"base": "10", "value": "12"},
        "2": {"base": "2", "value": "111"},
    }
    document = parse_document(json.dumps(data))

    assert document.layout == KEYED
    assert (document.n, document.k) == (4, 3)
    assert [share.id for share in document.shares] == [1, 2, 3, 6]
    assert [int(share.value) for share in document.shares] == [4, 7, 12, 39]


@pytest.mark.parametrize(
    "data",
    [
        "{not json",
        "[1, 2, 3]",
        {"k": 2, "shares": []},
        {"n": "3", "k": 2, "shares": []},
        {"n": 3, "k": 0, "shares": []},
        {"n": 3, "k": 2, "shares": "nope"},
        {"n": 3, "k": 2, "shares": [{"id": 1, "value": "1"}]},
        {"n": 1, "k": 1, "shares": [{"id": 0, "value": "1"}]},
        {"n": 1, "k": 1, "shares": [{"id": True, "value": "1"}]},
        {"n": 1, "k": 1, "shares": [{"value": "1"}]},
        {"n": 1, "k": 1, "shares": [{"id": 1, "value": ["1"]}]},
        {"n": 1, "k": 1, "shares": ["1"]},
        {"keys": {"n": 1, "k": 1}, "x": {"base": "10", "value": "1"}},
        {"keys": {"n": 1, "k": 1}, "0": {"base": "10", "value": "1"}},
        {"keys": {"n": 2, "k": 1}, "1": {"base": "10", "value": "1"}},
        {"keys": [], "1": {"base": "10", "value": "1"}},
    ],
)
def test_malformed_documents(data):
    with pytest.raises(ParseError):
        parse_document(data if isinstance(data, str) else json.dumps(data))


def test_unknown_expression_is_a_parse_error():
    data = _share_list(shares=[{"id": 1, "value": "mystery(1,2)"}], n=1, k=1)
    with pytest.raises(UnknownExpression):
        parse_document(data)


def test_invalid_base_aborts_loading():
    data = {"keys": {"n": 1, "k": 1}, "1": {"base": "37", "value": "1"}}
    with pytest.raises(InvalidBase):
        parse_document(data)
    data = {"keys": {"n": 1, "k": 1}, "1": {"base": "10", "value": "z"}}
    with pytest.raises(InvalidBase):
        parse_document(data)


def test_duplicate_ids_are_reported(caplog):
    data = _share_list(shares=[{"id": 1, "value": "1"}, {"id": 1, "value": "2"}, {"id": 3, "value": "3"}])
    with caplog.at_level(logging.WARNING, logger="shamir_consensus.loader"):
        document = parse_document(data)
    assert len(document.shares) == 3
    assert "Duplicate share ids [1]" in caplog.text


def test_load_document_from_file(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(_share_list()), encoding="utf-8")
    assert load_document(path).n == 3
    assert load_document(str(path)).k == 2


def test_load_document_missing_file(tmp_path):
    with pytest.raises(ParseError) as exc:
        load_document(tmp_path / "missing.json")
    assert "Could not open file" in str(exc.value)


def test_non_utf8_document_is_a_parse_error(tmp_path):
    raw = b'{"n": 1, "k": 1, "shares": [{"id": 1, "value": "\xff"}]}'
    path = tmp_path / "input.json"
    path.write_bytes(raw)

    with pytest.raises(ParseError) as exc:
        load_document(path)
    assert "not valid UTF-8" in str(exc.value)

    with pytest.raises(ParseError) as exc:
        parse_document(raw)
    assert "not valid UTF-8" in str(exc.value)

"""Loading share documents from JSON.

Two layouts are understood. The share-list layout::

    {"n": 4, "k": 3, "shares": [{"id": 1, "value": "sum(10,5)"}, ...]}

where each value is an expression (see :mod:`shamir_consensus.expressions`)
or, when the record also carries ``"base"``, a base-encoded digit string.
The keyed layout::

    {"keys": {"n": 4, "k": 3}, "1": {"base": "10", "value": "4"}, ...}

where every key other than ``"keys"`` is the x-coordinate of a base-encoded
point.
"""
from __future__ import annotations

import json
import logging
import os
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Union

from .bigint import BigInteger
from .consensus import Share
from .decoding import decode_base, parse_base
from .errors import ParseError
from .expressions import evaluate_expression

_logger = logging.getLogger(__name__)

SHARE_LIST = "shares"
KEYED = "keyed"


@dataclass
class ShareDocument:
    n: int
    k: int
    shares: List[Share] = field(default_factory=list)
    layout: str = SHARE_LIST

    @property
    def degree(self) -> int:
        return self.k - 1


def _require_int(mapping: Mapping[str, Any], name: str, context: str) -> int:
    if name not in mapping:
        raise ParseError(f"{context}: missing field {name!r}")
    value = mapping[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"{context}: field {name!r} must be an integer, got {value!r}")
    return value


def _require_text(mapping: Mapping[str, Any], name: str, context: str) -> str:
    if name not in mapping:
        raise ParseError(f"{context}: missing field {name!r}")
    value = mapping[name]
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ParseError(f"{context}: field {name!r} must be a string, got {value!r}")
    return value


def _require_mapping(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"{context}: expected an object, got {type(value).__name__}")
    return value


def _check_threshold(n: int, k: int) -> None:
    if n < 1:
        raise ParseError(f"n must be at least 1, got {n}")
    if k < 1:
        raise ParseError(f"k must be at least 1, got {k}")


def _decode_point(id_: int, record: Mapping[str, Any], context: str) -> Share:
    base = parse_base(_require_text(record, "base", context))
    encoded = _require_text(record, "value", context)
    value = decode_base(encoded, base)
    return Share(id=id_, value=value, source=f"{encoded} (base {base})")


def _parse_record(record: Any, position: int) -> Share:
    context = f"share #{position + 1}"
    record = _require_mapping(record, context)
    id_ = _require_int(record, "id", context)
    if id_ < 1:
        raise ParseError(f"{context}: id must be positive, got {id_}")
    if "base" in record:
        return _decode_point(id_, record, context)
    expression = _require_text(record, "value", context)
    return Share(id=id_, value=evaluate_expression(expression), source=expression)


def _parse_share_list(data: Mapping[str, Any]) -> ShareDocument:
    n = _require_int(data, "n", "document")
    k = _require_int(data, "k", "document")
    _check_threshold(n, k)
    records = data.get("shares")
    if not isinstance(records, list):
        raise ParseError("document: 'shares' must be a list")
    if len(records) < n:
        raise ParseError(f"document declares n={n} but lists {len(records)} shares")
    shares = [_parse_record(record, position) for position, record in enumerate(records[:n])]
    return ShareDocument(n=n, k=k, shares=shares, layout=SHARE_LIST)


def _parse_keyed(data: Mapping[str, Any]) -> ShareDocument:
    keys = _require_mapping(data["keys"], "keys")
    n = _require_int(keys, "n", "keys")
    k = _require_int(keys, "k", "keys")
    _check_threshold(n, k)

    shares: List[Share] = []
    for key, record in data.items():
        if key == "keys":
            continue
        context = f"point {key!r}"
        x = BigInteger(key)
        if x <= 0:
            raise ParseError(f"{context}: x-coordinate must be positive")
        shares.append(_decode_point(int(x), _require_mapping(record, context), context))

    shares.sort(key=lambda share: share.id)
    if len(shares) < n:
        raise ParseError(f"keys declare n={n} but the document has {len(shares)} points")
    return ShareDocument(n=n, k=k, shares=shares[:n], layout=KEYED)


def parse_document(data: Union[str, bytes, Mapping[str, Any]]) -> ShareDocument:
    """Build a :class:`ShareDocument` from JSON text or an already parsed object."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except UnicodeDecodeError as exc:
            raise ParseError(f"Document is not valid UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON: {exc}") from exc
    data = _require_mapping(data, "document")

    document = _parse_keyed(data) if "keys" in data else _parse_share_list(data)

    duplicates = sorted(id_ for id_, seen in Counter(s.id for s in document.shares).items() if seen > 1)
    if duplicates:
        _logger.warning("Duplicate share ids %s; subsets containing them will be skipped", duplicates)
    _logger.info("Loaded %d shares (n=%d, k=%d, layout=%s)", len(document.shares), document.n, document.k, document.layout)
    return document


def load_document(path: Union[str, "os.PathLike[str]"]) -> ShareDocument:
    """Read and parse the JSON document at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ParseError(f"Could not open file: {path}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path} is not valid UTF-8: {exc}") from exc
    return parse_document(text)


__all__ = ["ShareDocument", "parse_document", "load_document", "SHARE_LIST", "KEYED"]

from __future__ import annotations

import pytest

from rangescan.core.errors import ProtocolError, RequestRejectedError, ServerError
from rangescan.core.models import RawColumn, RowSlice
from rangescan.core.response_parsing import parse_json_payload, parse_key_slices
from tests.shared.gateway import Response


def test_parse_key_slices_decodes_base64_rows_in_order():
    payload = {
        "key_slices": [
            {
                "key": "YQ==",
                "columns": [
                    {"name": "bg==", "value": "dg==", "timestamp": 10, "ttl": None},
                    {"name": "bTI=", "value": "", "timestamp": 11},
                ],
            },
            {"key": "Yg==", "columns": []},
        ]
    }
    assert parse_key_slices(payload) == (
        RowSlice(
            key=b"a",
            columns=(
                RawColumn(name=b"n", value=b"v", timestamp=10),
                RawColumn(name=b"m2", value=b"", timestamp=11),
            ),
        ),
        RowSlice(key=b"b", columns=()),
    )


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"key_slices": {}},
        {"key_slices": ["x"]},
        {"key_slices": [{"key": 1}]},
        {"key_slices": [{"key": "!!"}]},
        {"key_slices": [{"key": "YQ==", "columns": {}}]},
        {"key_slices": [{"key": "YQ==", "columns": [{"name": "YQ==", "value": "YQ==", "timestamp": "1"}]}]},
    ],
    ids=["missing", "not-list", "row-not-object", "key-not-str", "key-bad-b64", "columns-not-list", "bad-ts"],
)
def test_parse_key_slices_rejects_malformed_payloads(payload):
    with pytest.raises(ProtocolError):
        parse_key_slices(payload)


def test_parse_json_payload_maps_http_errors():
    with pytest.raises(RequestRejectedError, match="unknown column family"):
        parse_json_payload(
            Response(400, {"error": {"message": "unknown column family"}}),
            http_status=400,
        )
    with pytest.raises(ServerError):
        parse_json_payload(Response(500, ValueError("not json")), http_status=500)


def test_parse_json_payload_rejects_non_object_and_invalid_json():
    with pytest.raises(ProtocolError):
        parse_json_payload(Response(200, []), http_status=200)
    with pytest.raises(ProtocolError):
        parse_json_payload(Response(200, ValueError("not json")), http_status=200)

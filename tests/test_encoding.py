import io
import json

from plugconta.core.encoding import encode_body, flatten_form_data


def test_flat_values_are_kept():
    assert flatten_form_data({"a": 1, "b": "x"}) == {"a": 1, "b": "x"}


def test_deeply_nested_mapping_is_flattened():
    assert flatten_form_data({"a": {"b": {"c": 1}}}) == {"a[b][c]": 1}


def test_lists_use_their_index():
    data = {"phones": ["1", "2"], "address": {"lines": ["x", {"n": 3}]}}
    assert flatten_form_data(data) == {
        "phones[0]": "1",
        "phones[1]": "2",
        "address[lines][0]": "x",
        "address[lines][1][n]": 3,
    }


def test_flattening_leaves_no_nested_values():
    data = {"a": {"b": {"c": {"d": {"e": [1, [2, {"f": 3}]]}}}}}
    flat = flatten_form_data(data)
    assert all(not isinstance(value, (dict, list)) for value in flat.values())
    assert flat["a[b][c][d][e][1][1][f]"] == 3


def test_empty_body():
    assert flatten_form_data({}) == {}
    assert json.loads(encode_body(None, upload=False).content) == {}
    encoded = encode_body({}, upload=True)
    assert encoded.content_type.startswith("multipart/form-data")
    assert b"Content-Disposition" not in encoded.content


def test_json_mode_is_plain_serialization():
    body = {"payer": {"name": "Ana"}, "active": True}
    encoded = encode_body(body, upload=False)
    assert encoded.content_type == "application/json"
    assert json.loads(encoded.content) == body


def test_form_mode_encodes_files_and_fields():
    handle = io.BytesIO(b"OFXHEADER:100")
    handle.name = "/tmp/extrato.ofx"
    encoded = encode_body(
        {"file": handle, "meta": {"bank": 341, "draft": False}}, upload=True
    )
    assert b'name="file"; filename="extrato.ofx"' in encoded.content
    assert b"OFXHEADER:100" in encoded.content
    assert b'name="meta[bank]"' in encoded.content
    assert b"341" in encoded.content
    assert b"false" in encoded.content


def test_form_mode_accepts_file_tuples():
    encoded = encode_body({"file": ("a.csv", b"1;2", "text/csv")}, upload=True)
    assert b'filename="a.csv"' in encoded.content
    assert b"Content-Type: text/csv" in encoded.content


def test_tuples_are_flattened_like_lists():
    assert flatten_form_data({"tags": ("a", "b")}) == {"tags[0]": "a", "tags[1]": "b"}
    assert flatten_form_data({"x": {"pair": ("k", ("v", 1)), "one": ("z",)}}) == {
        "x[pair][0]": "k",
        "x[pair][1][0]": "v",
        "x[pair][1][1]": 1,
        "x[one][0]": "z",
    }


def test_text_tuples_become_fields_not_files():
    encoded = encode_body({"tags": ("a", "b")}, upload=True)
    assert b'name="tags[0]"' in encoded.content
    assert b'name="tags[1]"' in encoded.content
    assert b"filename=" not in encoded.content


def test_file_tuple_inside_nested_body_stays_a_file():
    encoded = encode_body({"docs": [("a.txt", b"hello")]}, upload=True)
    assert b'name="docs[0]"; filename="a.txt"' in encoded.content

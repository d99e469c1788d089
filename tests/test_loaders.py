import json

import pytest
import yaml

from urlshort.errors import ParseError
from urlshort.loaders import parse_json, parse_yaml
from urlshort.lookup import build_path_table
from urlshort.schemas import PathRedirect


def test_yaml_and_json_build_identical_tables(sample_yaml, sample_json):
    from_yaml = build_path_table(parse_yaml(sample_yaml))
    from_json = build_path_table(parse_json(sample_json))
    assert dict(from_yaml) == dict(from_json) == {
        "/gh": "https://github.com",
        "/yt": "https://youtube.com",
    }


def test_entries_survive_encoding_to_either_format():
    entries = [
        PathRedirect(path="/a", url="https://a.example/x?y=1"),
        PathRedirect(path="/b", url=""),
        PathRedirect(path="/a", url="https://a.example/override"),
    ]
    expected = dict(build_path_table(entries))
    raw = [e.model_dump() for e in entries]

    assert dict(build_path_table(parse_yaml(yaml.safe_dump(raw).encode()))) == expected
    assert dict(build_path_table(parse_json(json.dumps(raw).encode()))) == expected


@pytest.mark.parametrize("payload", [b"", b"# nothing here\n", b"null"])
def test_empty_yaml_means_no_entries(payload):
    assert parse_yaml(payload) == []


def test_json_null_means_no_entries():
    assert parse_json(b"null") == []


def test_missing_and_unknown_keys():
    entries = parse_yaml(b"- url: https://a.example\n- path: /b\n  comment: ignored\n- path:\n  url: https://c.example\n")
    assert entries == [
        PathRedirect(path="", url="https://a.example"),
        PathRedirect(path="/b", url=""),
        PathRedirect(path="", url="https://c.example"),
    ]


@pytest.mark.parametrize(
    "payload",
    [
        b"- path: /a\n  url: [unterminated\n",
        b"path: /a\nurl: https://a.example\n",
        b"- just-a-string\n",
        b"- path: 42\n  url: https://a.example\n",
        b"- path: /a\n  url:\n    nested: true\n",
    ],
)
def test_malformed_yaml_raises_parse_error(payload):
    with pytest.raises(ParseError) as exc_info:
        parse_yaml(payload)
    assert exc_info.value.fmt == "yaml"


@pytest.mark.parametrize(
    "payload",
    [
        b'[{"path": "/a", "url": "https://a.example"}',
        b'{"path": "/a", "url": "https://a.example"}',
        b'[{"path": "/a", "url": 7}]',
        b'["/a"]',
        b"\x80\x81\x82",
    ],
)
def test_malformed_json_raises_parse_error(payload):
    with pytest.raises(ParseError) as exc_info:
        parse_json(payload)
    assert exc_info.value.fmt == "json"

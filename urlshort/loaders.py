from __future__ import annotations

import json
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ParseError
from .schemas import PathRedirect, PathRedirectList


def _validate(fmt: str, data: Any) -> list[PathRedirect]:
    # empty document / null decode to "no entries"
    if data is None:
        return []
    try:
        return PathRedirectList.validate_python(data)
    except ValidationError as e:
        raise ParseError(fmt, f"{e.error_count()} schema error(s): {e.errors()[0]['msg']}") from e


def parse_yaml(payload: bytes) -> list[PathRedirect]:
    """Decode a YAML sequence of ``{path, url}`` mappings.

    Expected layout::

        - path: /some-path
          url: https://www.some-url.com/demo
    """
    try:
        data = yaml.safe_load(payload)
    except yaml.YAMLError as e:
        raise ParseError("yaml", str(e)) from e
    return _validate("yaml", data)


def parse_json(payload: bytes) -> list[PathRedirect]:
    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError("json", str(e)) from e
    return _validate("json", data)

"""Front matter splitter and header decoder.

A document may open with a YAML header fenced by ``---`` markers:

    ---
    title: Binary search
    date: 2025-01-25
    tags: [Java, Algorithm]
    ---
    # Body starts here

The closing marker is the first ``---`` after the opening one, wherever it
occurs. Documents without a complete header are treated as body-only.

Headers are read with a SafeLoader subclass that leaves timestamps as plain
strings, so dates are validated (and rejected with a warning) by the metadata
builder instead of failing the whole header.
"""

from __future__ import annotations

from typing import Any

import yaml

DELIMITER = "---"

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _HeaderLoader(yaml.SafeLoader):
    """SafeLoader without implicit timestamp resolution."""


_HeaderLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class FrontMatterError(ValueError):
    """Raised when a header block cannot be decoded into a key/value mapping."""


def split_front_matter(raw: str) -> tuple[str, str]:
    """Split *raw* into ``(header, body)``; both are stripped.

    Never raises. ``header`` is empty when *raw* has no complete header block,
    in which case ``body`` is the whole input.
    """
    if raw.startswith(DELIMITER):
        end = raw.find(DELIMITER, len(DELIMITER))
        if end != -1:
            header = raw[len(DELIMITER):end].strip()
            body = raw[end + len(DELIMITER):].strip()
            return header, body
    return "", raw.strip()


def parse_header(header_text: str) -> dict[str, Any]:
    """Decode a header block into a dict.

    Returns an empty dict for an empty header.

    Raises:
        FrontMatterError: if the YAML is invalid or is not a mapping.
    """
    if not header_text.strip():
        return {}

    try:
        data = yaml.load(header_text, Loader=_HeaderLoader)
    except (yaml.YAMLError, ValueError) as exc:
        raise FrontMatterError(f"invalid YAML header: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"header must be a mapping of fields, got {type(data).__name__}"
        )
    return {str(k): v for k, v in data.items()}

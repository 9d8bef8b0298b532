"""Loaders for ``--metadata-from-manifest`` and ``--extra-data`` values.

Both options take either inline YAML/JSON or ``@filename``.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .exceptions import OptionError
from .metadata import Metadata

MANIFEST_OPTION = "metadata-from-manifest"
EXTRA_DATA_OPTION = "extra-data"

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class JsonCompatibleLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as strings so values stay JSON-compatible."""


JsonCompatibleLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def read_reference(value: str, option: str) -> str:
    """Return inline text, or the file contents when ``value`` starts with ``@``."""
    if not value.startswith("@"):
        return value
    filename = value[1:]
    try:
        return Path(filename).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise OptionError(option, value, str(e)) from e


def _load_document(value: str, option: str) -> Any:
    text = read_reference(value, option)
    try:
        return yaml.load(text, Loader=JsonCompatibleLoader)
    except yaml.YAMLError as e:
        raise OptionError(option, value, str(e)) from e


def _string_mapping(raw: Any, field: str, value: str) -> Dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise OptionError(MANIFEST_OPTION, value, f"metadata.{field} must be a mapping")
    result: Dict[str, str] = {}
    for key, item in raw.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise OptionError(
                MANIFEST_OPTION,
                value,
                f"metadata.{field} must map strings to strings (offending entry: {key!r}: {item!r})",
            )
        result[key] = item
    return result


def load_manifest(value: str) -> Metadata:
    """Extract name, labels and annotations from a manifest's ``metadata`` block.

    Raises:
        OptionError: If the manifest cannot be read, parsed or has the wrong shape
    """
    doc = _load_document(value, MANIFEST_OPTION)
    if not isinstance(doc, Mapping) or "metadata" not in doc:
        raise OptionError(MANIFEST_OPTION, value, "manifest must be a mapping with a 'metadata' key")
    meta = doc["metadata"]
    if not isinstance(meta, Mapping):
        raise OptionError(MANIFEST_OPTION, value, "'metadata' must be a mapping")
    name = meta.get("name")
    if name is not None and not isinstance(name, str):
        raise OptionError(MANIFEST_OPTION, value, "metadata.name must be a string")
    return Metadata(
        name=name,
        labels=_string_mapping(meta.get("labels"), "labels", value),
        annotations=_string_mapping(meta.get("annotations"), "annotations", value),
    )


def load_extra_properties(value: Optional[str]) -> Dict[str, Any]:
    """Parse the extra properties merged into the top level of the payload.

    Raises:
        OptionError: If the data cannot be read or parsed, is not a mapping,
            or holds values JSON cannot represent (binary, NaN, infinity)
    """
    if value is None:
        return {}
    doc = _load_document(value, EXTRA_DATA_OPTION)
    if not isinstance(doc, Mapping):
        raise OptionError(EXTRA_DATA_OPTION, value, "extra data must be a mapping")
    for key in doc:
        if not isinstance(key, str):
            raise OptionError(EXTRA_DATA_OPTION, value, f"extra data keys must be strings, got {key!r}")
    try:
        json.dumps(doc, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise OptionError(EXTRA_DATA_OPTION, value, f"extra data must be JSON-compatible: {e}") from e
    return dict(doc)

"""Merge manifest metadata with labels and annotations given on the command line.

Precedence, lowest first: manifest values, then CLI values in the order
they were given. A later entry with the same key replaces the earlier one.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from .exceptions import ConfigurationError, OptionError
from .labels import ParseError, parse_annotation, parse_labels

NAME_FROM_MANIFEST = "-"
LABELS_OPTION = "labels"
ANNOTATION_OPTION = "annotation"


@dataclass
class Metadata:
    name: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)


def merge_labels(base: Mapping[str, str], label_args: Iterable[str]) -> Dict[str, str]:
    """Upsert every CLI label string into a copy of ``base``.

    Raises:
        OptionError: If a label string does not parse
    """
    labels = dict(base)
    for raw in label_args:
        try:
            pairs = parse_labels(raw)
        except ParseError as e:
            raise OptionError(LABELS_OPTION, raw, str(e)) from e
        for pair in pairs:
            labels[pair.key] = pair.value
    return labels


def merge_annotations(base: Mapping[str, str], annotation_args: Iterable[str]) -> Dict[str, str]:
    """Upsert every CLI annotation string into a copy of ``base``.

    Raises:
        OptionError: If an annotation string does not parse
    """
    annotations = dict(base)
    for raw in annotation_args:
        try:
            pair = parse_annotation(raw)
        except ParseError as e:
            raise OptionError(ANNOTATION_OPTION, raw, str(e)) from e
        annotations[pair.key] = pair.value
    return annotations


def resolve_name(
    name: str,
    manifest: Optional[Metadata],
    product_key: str,
    strip_prefix: bool = False,
) -> str:
    """Work out the namespace name sent to the API.

    Args:
        name: Name from the command line, or NAME_FROM_MANIFEST
        manifest: Parsed manifest metadata, if any
        product_key: Product key whose ``<product_key>-`` prefix may be stripped
        strip_prefix: Strip the prefix if present

    Returns:
        Resolved namespace name

    Raises:
        ConfigurationError: If the manifest has no name, or a manifest
            name lacks the product key prefix
    """
    prefix = f"{product_key}-"
    if name != NAME_FROM_MANIFEST:
        if strip_prefix and name.startswith(prefix):
            return name[len(prefix):]
        return name

    if manifest is None or manifest.name is None:
        raise ConfigurationError(
            f"name passed as '{NAME_FROM_MANIFEST}' but no name provided in manifest metadata"
        )
    if not manifest.name.startswith(prefix):
        raise ConfigurationError(
            f"Expected that name '{manifest.name}' is prefixed with product key '{product_key}' "
            f"(expected prefix '{prefix}')"
        )
    return manifest.name[len(prefix):]


def merge(
    manifest: Optional[Metadata],
    label_args: Iterable[str],
    annotation_args: Iterable[str],
    name: str,
    product_key: str,
    strip_prefix: bool = False,
) -> Metadata:
    """Combine manifest metadata with CLI labels/annotations and resolve the name."""
    base = manifest or Metadata()
    return Metadata(
        name=resolve_name(name, manifest, product_key, strip_prefix),
        labels=merge_labels(base.labels, label_args),
        annotations=merge_annotations(base.annotations, annotation_args),
    )

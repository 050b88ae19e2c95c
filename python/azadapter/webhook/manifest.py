"""
azadapter/webhook/manifest.py

Field-level edits on plain (dict) Kubernetes manifests, used by the control-plane
ensurer. Every helper is idempotent: applying it twice gives the same result as
applying it once.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, List, Mapping, Optional


def container_with_name(
    containers: List[Dict[str, Any]], name: str
) -> Optional[Dict[str, Any]]:
    """Return the container called `name`, or None."""
    return next((c for c in containers if c.get("name") == name), None)


def _prefix_index(items: List[str], prefix: str) -> int:
    return next((i for i, item in enumerate(items) if item.startswith(prefix)), -1)


def ensure_string_with_prefix(items: List[str], prefix: str, value: str) -> List[str]:
    """
    Ensure `items` holds `prefix + value`, replacing any other item with that prefix.

    Example:
        ensure_string_with_prefix(["--v=2"], "--cloud-provider=", "azure")
        => ["--v=2", "--cloud-provider=azure"]
    """
    item = prefix + value
    i = _prefix_index(items, prefix)
    if i < 0:
        return items + [item]
    return items[:i] + [item] + items[i + 1 :]


def ensure_string_with_prefix_contains(
    items: List[str], prefix: str, value: str, sep: str
) -> List[str]:
    """Ensure the `sep`-separated list after `prefix` contains `value`."""
    i = _prefix_index(items, prefix)
    if i < 0:
        return items + [prefix + value]
    values = [v for v in items[i][len(prefix) :].split(sep) if v]
    if value in values:
        return items
    return items[:i] + [prefix + sep.join(values + [value])] + items[i + 1 :]


def ensure_no_string_with_prefix_contains(
    items: List[str], prefix: str, value: str, sep: str
) -> List[str]:
    """Ensure the `sep`-separated list after `prefix` does not contain `value`."""
    i = _prefix_index(items, prefix)
    if i < 0:
        return items
    values = items[i][len(prefix) :].split(sep)
    if value not in values:
        return items
    remaining = [v for v in values if v != value]
    return items[:i] + [prefix + sep.join(remaining)] + items[i + 1 :]


def _ensure_with_name(
    elements: List[Dict[str, Any]], element: Dict[str, Any]
) -> List[Dict[str, Any]]:
    names = [e.get("name") for e in elements]
    if element["name"] in names:
        i = names.index(element["name"])
        return elements[:i] + [element] + elements[i + 1 :]
    return elements + [element]


def ensure_volume_mount_with_name(
    mounts: List[Dict[str, Any]], mount: Dict[str, Any]
) -> List[Dict[str, Any]]:
    """Ensure `mount` is present, replacing a mount with the same name."""
    return _ensure_with_name(mounts, mount)


def ensure_volume_with_name(
    volumes: List[Dict[str, Any]], volume: Dict[str, Any]
) -> List[Dict[str, Any]]:
    """Ensure `volume` is present, replacing a volume with the same name."""
    return _ensure_with_name(volumes, volume)


def ensure_annotation_or_label(
    mapping: Optional[Dict[str, str]], key: str, value: str
) -> Dict[str, str]:
    """Return `mapping` with `key` set to `value`, creating the mapping if needed."""
    result = dict(mapping or {})
    result[key] = value
    return result


def compute_checksum(data: Mapping[str, str]) -> str:
    """SHA-256 hex digest of the compact, key-sorted JSON encoding of `data`."""
    encoded = json.dumps(dict(data), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()

from __future__ import annotations

import copy
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from hal_client.models import LinkObject

LINKS_KEY = "_links"
EMBEDDED_KEY = "_embedded"
CURIES_REL = "curies"

_CONTENT_TYPE_RE = re.compile(r"^([^;]+)(;\s?(charset|boundary)=(.+))?$")


def link_entry(value: Any) -> Dict[str, Any]:
    """Bare link entries are hrefs: '/a' -> {'href': '/a'}."""
    return {"href": value}


def resource_entry(value: Any) -> Dict[int, Any]:
    """Bare embedded entries become a one-element, index-keyed property map."""
    return dict(enumerate([value]))


def normalize_entries(
    data: Any, wrap_scalar: Callable[[Any], Dict[Any, Any]]
) -> List[Dict[Any, Any]]:
    """
    Turn a raw `_links` / `_embedded` value into an ordered list of maps.

    A relation may hold a single entry or a list of entries, and an entry may
    be a map, a bare scalar or null:
      - falsy values yield []
      - a non-list value is treated as a one-element list
      - scalars go through wrap_scalar, nested lists become index-keyed maps
      - null entries are dropped
    """
    if not data:
        return []

    if not isinstance(data, list):
        data = [data]

    entries: List[Dict[Any, Any]] = []
    for entry in data:
        if entry is None:
            continue
        if isinstance(entry, list):
            entry = dict(enumerate(entry))
        elif not isinstance(entry, dict):
            entry = wrap_scalar(entry)
        entries.append(entry)
    return entries


def iter_curies(links: Mapping[str, Any]) -> Iterable[LinkObject]:
    for entry in normalize_entries(links.get(CURIES_REL), link_entry):
        yield LinkObject.parse(entry)


def resolve_link_rel(links: Mapping[str, Any], rel: str) -> Optional[str]:
    """
    Find the key under which `rel` is stored in a `_links` map.

    Tries the relation as given, then every declared curie prefix in order
    ("ex:" + rel). Returns None when nothing matches.
    """
    if links.get(rel) is not None:
        return rel

    if links.get(CURIES_REL) is None:
        return None

    for curie in iter_curies(links):
        if not curie.name:
            continue
        candidate = f"{curie.name}:{rel}"
        if links.get(candidate) is not None:
            return candidate

    return None


def split_document(
    data: Any,
) -> Tuple[Dict[Any, Any], Dict[str, Any], Dict[str, Any]]:
    """Split a decoded body into (properties, links, embedded).

    The body is deep-copied; the caller keeps ownership of `data`.
    """
    if data is None:
        document: Dict[Any, Any] = {}
    elif isinstance(data, dict):
        document = copy.deepcopy(data)
    elif isinstance(data, list):
        document = dict(enumerate(copy.deepcopy(data)))
    else:
        document = {0: copy.deepcopy(data)}

    links = document.pop(LINKS_KEY, None)
    embedded = document.pop(EMBEDDED_KEY, None)

    return (
        document,
        links if isinstance(links, dict) else {},
        embedded if isinstance(embedded, dict) else {},
    )


def strip_content_type_params(value: str) -> str:
    """'application/json; charset=utf-8' -> 'application/json'."""
    match = _CONTENT_TYPE_RE.match(value)
    return match.group(1) if match else value


def is_valid_content_type(
    header_values: List[str], valid_types: Iterable[str]
) -> bool:
    if not header_values:
        return False
    return strip_content_type_params(", ".join(header_values)) in set(valid_types)


__all__ = [
    "LINKS_KEY",
    "EMBEDDED_KEY",
    "CURIES_REL",
    "link_entry",
    "resource_entry",
    "normalize_entries",
    "iter_curies",
    "resolve_link_rel",
    "split_document",
    "strip_content_type_params",
    "is_valid_content_type",
]

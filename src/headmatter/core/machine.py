# topmark:header:start
#
#   project      : Headmatter
#   file         : machine.py
#   file_relpath : src/headmatter/core/machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Pure JSON/NDJSON shaping and serialization for machine output.

This module is console-free and Click-free: it turns domain objects into
JSON-friendly payloads, wraps them in envelopes and serializes them.

Shapes:
    - JSON: one object ``{"meta": {...}, <name>: <payload>, ...}``.
    - NDJSON: one record per line, ``{"kind": <kind>, "meta": {...}, <kind>: <payload>}``.

Conventions:
    - `serialize_json_envelope` returns pretty-printed JSON without a trailing newline.
    - `serialize_ndjson` returns a string ending with a final ``\n``.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any, TypedDict

from headmatter.constants import HEADMATTER_VERSION
from headmatter.core.diagnostics import diagnostics_counts_to_dict

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from headmatter.core.diagnostics import Diagnostic
    from headmatter.header import Header


class MetaPayload(TypedDict):
    """Metadata attached to every machine-readable document or record."""

    tool: str
    version: str
    platform: str


def build_meta_payload() -> MetaPayload:
    """Build the metadata payload with tool name, version and platform."""
    return MetaPayload(tool="headmatter", version=HEADMATTER_VERSION, platform=sys.platform)


def header_to_payload(header: Header) -> dict[str, Any]:
    """Return a JSON-friendly mapping describing one header."""
    return {
        "key": header.key,
        "raw": header.raw,
        "value": header.value,
        "reversible": header.is_reversible(),
    }


def diagnostics_to_payload(diagnostics: Iterable[Diagnostic]) -> dict[str, Any]:
    """Return ``{"counts": {...}, "items": [...]}`` for a sequence of diagnostics."""
    items: list[Diagnostic] = list(diagnostics)
    return {
        "counts": diagnostics_counts_to_dict(items),
        "items": [{"level": d.level.value, "message": d.message} for d in items],
    }


def build_json_envelope(meta: MetaPayload, **payloads: object) -> dict[str, object]:
    """Return ``{"meta": meta, **payloads}``."""
    envelope: dict[str, object] = {"meta": dict(meta)}
    envelope.update(payloads)
    return envelope


def build_ndjson_record(*, kind: str, meta: MetaPayload, payload: object) -> dict[str, object]:
    """Build a single NDJSON record with a uniform envelope.

    Every line includes ``kind`` and ``meta``; the payload is stored under the
    ``kind`` key.

    Args:
        kind (str): Record kind (e.g. ``"header"``, ``"file"``).
        meta (MetaPayload): Metadata payload.
        payload (object): JSON-friendly payload.

    Returns:
        dict[str, object]: The shaped record (not serialized).
    """
    return {"kind": kind, "meta": dict(meta), kind: payload}


def serialize_json_envelope(meta: MetaPayload, **payloads: object) -> str:
    """Serialize a JSON envelope with ``meta`` plus named payloads (pretty-printed)."""
    # Keys may be arbitrary objects when an identity transform is configured.
    return json.dumps(build_json_envelope(meta, **payloads), indent=2, default=str)


def serialize_ndjson(records: Iterable[Mapping[str, object]]) -> str:
    """Serialize records into newline-delimited JSON, ending with a newline.

    An empty ``records`` gives an empty string.
    """
    lines: list[str] = [json.dumps(record, default=str) for record in records]
    return "".join(line + "\n" for line in lines)

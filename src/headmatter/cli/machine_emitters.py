# topmark:header:start
#
#   project      : Headmatter
#   file         : machine_emitters.py
#   file_relpath : src/headmatter/cli/machine_emitters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI helpers for emitting machine-readable output.

This module is console-aware and only writes machine output (JSON or NDJSON)
shaped by `headmatter.core.machine` to the active `ClickConsole`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from headmatter.cli.console import get_console_safely
from headmatter.core.formats import OutputFormat, is_machine_format
from headmatter.core.machine import (
    build_meta_payload,
    build_ndjson_record,
    serialize_json_envelope,
    serialize_ndjson,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from headmatter.cli.console import ClickConsole
    from headmatter.core.machine import MetaPayload


def emit_machine(
    *,
    fmt: OutputFormat,
    kind: str,
    container: str,
    items: Sequence[object],
    **extra: object,
) -> None:
    """Emit ``items`` as JSON or NDJSON.

    Shapes:
        - JSON: ``{"meta": ..., <container>: [items...], **extra}``.
        - NDJSON: one ``{"kind": <kind>, "meta": ..., <kind>: item}`` record per
          item, followed by one record per ``extra`` entry (kind = its name).

    Args:
        fmt (OutputFormat): `OutputFormat.JSON` or `OutputFormat.NDJSON`.
        kind (str): NDJSON record kind for each item.
        container (str): JSON key holding the list of items.
        items (Sequence[object]): JSON-friendly payloads.
        **extra (object): Additional named payloads (e.g. ``summary``).

    Raises:
        ValueError: If ``fmt`` is not a machine format.
    """
    if not is_machine_format(fmt):
        raise ValueError(f"Unsupported machine output format: {fmt!r}")

    console: ClickConsole = get_console_safely()
    meta: MetaPayload = build_meta_payload()
    if fmt == OutputFormat.JSON:
        console.print(serialize_json_envelope(meta, **{container: list(items)}, **extra))
        return

    records = [build_ndjson_record(kind=kind, meta=meta, payload=item) for item in items]
    for name, payload in extra.items():
        records.append(build_ndjson_record(kind=name, meta=meta, payload=payload))
    console.print(serialize_ndjson(records), nl=False)


def emit_machine_object(*, fmt: OutputFormat, kind: str, payload: object) -> None:
    """Emit a single named payload as JSON (``{"meta", kind}``) or one NDJSON record."""
    if not is_machine_format(fmt):
        raise ValueError(f"Unsupported machine output format: {fmt!r}")

    console: ClickConsole = get_console_safely()
    meta: MetaPayload = build_meta_payload()
    if fmt == OutputFormat.JSON:
        console.print(serialize_json_envelope(meta, **{kind: payload}))
    else:
        record = build_ndjson_record(kind=kind, meta=meta, payload=payload)
        console.print(serialize_ndjson([record]), nl=False)

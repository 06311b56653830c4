# topmark:header:start
#
#   project      : Headmatter
#   file         : __init__.py
#   file_relpath : src/headmatter/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter package.

Headmatter parses documents that start with a block of ``Name: value`` header
lines followed by a blank line and a body, as found in email-like text files,
static-site sources and plain-text notes::

    Title: Hello world
    Published-On: 2025-01-01

    Body text...

Each header has a normalized *key* (``published_on``) for lookups and keeps the
*raw* name it was written with (``Published-On``). The mapping between the two
is pluggable (see `headmatter.transforms`), and the library can tell whether a
raw name survives a raw→key→raw round trip.

Typical use:
    ```python
    from headmatter import Document

    doc = Document.parse(text)
    doc.headers["title"].value        # "Hello world"
    doc.headers.set("draft", "yes")   # adds "Draft: yes"
    doc.compose()                     # header block + blank line + body
    ```
"""

from __future__ import annotations

from headmatter.collection import HeaderCollection
from headmatter.constants import HEADMATTER_VERSION
from headmatter.document import Document, HeaderPatch, has_header_block
from headmatter.errors import HeadmatterError, MalformedHeaderLineError, UnknownTransformError
from headmatter.header import Header, is_header_line
from headmatter.transforms import (
    NameTransforms,
    TransformRegistry,
    default_transforms,
    get_default_transforms,
    set_default_transforms,
    to_key,
    to_raw,
)

__version__: str = HEADMATTER_VERSION

__all__: list[str] = [
    "Document",
    "Header",
    "HeaderCollection",
    "HeaderPatch",
    "HeadmatterError",
    "MalformedHeaderLineError",
    "NameTransforms",
    "TransformRegistry",
    "UnknownTransformError",
    "__version__",
    "default_transforms",
    "get_default_transforms",
    "has_header_block",
    "is_header_line",
    "set_default_transforms",
    "to_key",
    "to_raw",
]

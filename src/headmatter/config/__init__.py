# topmark:header:start
#
#   project      : Headmatter
#   file         : __init__.py
#   file_relpath : src/headmatter/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for Headmatter.

Submodules:
    - `headmatter.config.logging`: TRACE-aware logger and colored formatter.
    - `headmatter.config.io`: TOML loading, typed value getters and rendering.
    - `headmatter.config.model`: `Config` / `MutableConfig` with discovery
      and merge policy.

The configuration model is not re-exported here: the core modules import
`headmatter.config.logging` and must be able to do so without pulling in the
model (which itself depends on the transform presets).
"""

from __future__ import annotations

# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Renderers for parsed PDL documents: canonical PDL text and JSON."""

from pdl.render.config import RenderConfig, RenderConfigError, load_render_config, parse_render_config
from pdl.render.json_export import from_dict, from_json, to_dict, to_json
from pdl.render.printer import to_pdl

__all__ = [
    "to_pdl",
    "to_json",
    "to_dict",
    "from_json",
    "from_dict",
    "RenderConfig",
    "RenderConfigError",
    "load_render_config",
    "parse_render_config",
]

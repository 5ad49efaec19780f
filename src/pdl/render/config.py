# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering options for the PDL printer and JSON exporter, and their YAML loader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############


class RenderConfigError(Exception):
    """Raised when a render configuration is invalid or cannot be loaded."""


@dataclass(frozen=True)
class RenderConfig:
    """Formatting options shared by the renderers.

    Attributes:
        indent_width: Spaces per nesting level in printed PDL.
        use_tabs: Indent printed PDL with one tab per level instead of spaces.
        json_indent: Indentation of exported JSON. None produces compact JSON.
    """

    indent_width: int = 2
    use_tabs: bool = False
    json_indent: int | None = None

    def __post_init__(self) -> None:
        if self.indent_width < 1:
            raise RenderConfigError(f"indent-width must be at least 1, got {self.indent_width}")
        if self.json_indent is not None and self.json_indent < 0:
            raise RenderConfigError(f"json-indent must not be negative, got {self.json_indent}")

    @property
    def indent_unit(self) -> str:
        """The text written once per nesting level."""
        return "\t" if self.use_tabs else " " * self.indent_width


def load_render_config(path: Path) -> RenderConfig:
    """Load rendering options from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        A RenderConfig populated from the file; missing keys keep their defaults.

    Raises:
        RenderConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise RenderConfigError(f"Render config file not found: {path}") from None
    except OSError as exc:
        raise RenderConfigError(f"Cannot read render config file: {exc}") from exc

    return parse_render_config(text, source_label=str(path))


def parse_render_config(text: str, source_label: str = "<string>") -> RenderConfig:
    """Parse rendering options from YAML text.

    Recognised keys are ``indent-width``, ``use-tabs``, and ``json-indent``.
    An empty document yields the defaults.

    Raises:
        RenderConfigError: If the YAML is invalid, a key is unknown, or a value
            has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RenderConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return RenderConfig()
    if not isinstance(data, dict):
        raise RenderConfigError(f"{source_label}: render config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KEYS)
    if unknown:
        raise RenderConfigError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    indent_width = _optional_int(data, "indent-width", source_label)
    json_indent = _optional_int(data, "json-indent", source_label)
    use_tabs = data.get("use-tabs", False)
    if not isinstance(use_tabs, bool):
        raise RenderConfigError(f"{source_label}: 'use-tabs' must be a boolean")

    return RenderConfig(
        indent_width=2 if indent_width is None else indent_width,
        use_tabs=use_tabs,
        json_indent=json_indent,
    )


# ################
# Implementation
# ################

_KEYS = frozenset({"indent-width", "use-tabs", "json-indent"})


def _optional_int(mapping: dict[str, object], key: str, source_label: str) -> int | None:
    """Extract an optional integer field, raising RenderConfigError on other types."""
    value = mapping.get(key)
    if value is None:
        return None
    # bool is a subclass of int; YAML 'true' is not a width.
    if isinstance(value, bool) or not isinstance(value, int):
        raise RenderConfigError(f"{source_label}: '{key}' must be an integer")
    return value

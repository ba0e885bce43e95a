"""Base classes and shared segment options for prompt modules."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from ..config import Config, ConfigError
from ..models import Color, Fragment, RenderContext, RenderResult, Style, StyledText
from ..style import parse_color
from ..templates import render_template


class ProviderError(RuntimeError):
    """Raised when a module cannot gather the data it renders."""


@dataclass(frozen=True)
class SegmentOptions:
    """Appearance of one segment, read from the module's config table.

    ``separator_fg`` and ``separator_bg`` stay unset unless configured; the
    separator then takes the segment background as its foreground and the
    successor's background as its background.
    """

    fg: Color = None
    bg: Color = None
    bold: bool = False
    padding_left: int = 1
    padding_right: int = 1
    separator: str = "\ue0b0"
    separator_fg: Color = None
    separator_bg: Color = None
    separator_fg_set: bool = False
    separator_bg_set: bool = False

    def merged(self, table: Config) -> "SegmentOptions":
        """Return a copy with any values present in ``table`` applied."""
        updates: dict[str, Any] = {}
        if table.has("output.fg"):
            updates["fg"] = parse_color(table.get("output.fg"))
        if table.has("output.bg"):
            updates["bg"] = parse_color(table.get("output.bg"))
        bold = table.get_bool("output.bold")
        if bold is not None:
            updates["bold"] = bold
        for key in ("padding_left", "padding_right"):
            padding = table.get_int(f"output.{key}")
            if padding is not None:
                if padding < 0:
                    raise ConfigError(f"'output.{key}' must not be negative")
                updates[key] = padding
        separator = table.get_str("separator.content")
        if separator is not None:
            updates["separator"] = separator
        if table.has("separator.fg"):
            updates["separator_fg"] = parse_color(table.get("separator.fg"))
            updates["separator_fg_set"] = True
        if table.has("separator.bg"):
            updates["separator_bg"] = parse_color(table.get("separator.bg"))
            updates["separator_bg_set"] = True
        return replace(self, **updates) if updates else self

    @property
    def style(self) -> Style:
        return Style(fg=self.fg, bg=self.bg, bold=self.bold)

    def separator_style(self, next_bg: Color) -> Style:
        fg = self.separator_fg if self.separator_fg_set else self.bg
        bg = self.separator_bg if self.separator_bg_set else next_bg
        return Style(fg=fg, bg=bg)


class Module(ABC):
    """Contract for data providers that render one prompt segment."""

    name: str

    @abstractmethod
    def render(self, config: Config, context: RenderContext, next_bg: Color) -> RenderResult:
        """Render this module given the background of the segment after it."""

    def table(self, config: Config) -> Config:
        return config.section(self.name)

    def format_content(
        self,
        table: Config,
        default_format: str,
        variables: Mapping[str, Any],
    ) -> str:
        source = table.get_str("format", default_format) or ""
        return render_template(source, variables, module=self.name)


def build_segment(content: str, options: SegmentOptions, next_bg: Color) -> RenderResult:
    """Wrap ``content`` in padding and a trailing separator.

    Empty content produces no output, leaving the background chain untouched.
    """
    if not content:
        return RenderResult.empty()
    body = f"{' ' * options.padding_left}{content}{' ' * options.padding_right}"
    runs = [StyledText(body, options.style)]
    if options.separator:
        runs.append(StyledText(options.separator, options.separator_style(next_bg)))
    return RenderResult(output=Fragment.of(runs), next_bg=options.bg)


def env_lookup(context: RenderContext, key: str) -> Optional[str]:
    value = context.environ.get(key)
    return value if value else None


def working_directory(context: RenderContext) -> Path:
    """Return the directory the prompt describes."""
    if context.cwd is not None:
        return context.cwd
    try:
        physical = os.getcwd()
    except OSError as exc:
        raise ProviderError(f"Cannot determine the working directory: {exc}") from exc
    # Prefer $PWD so symlinked directories show the path the user typed.
    logical = env_lookup(context, "PWD")
    if logical and _same_directory(logical, physical):
        return Path(logical)
    return Path(physical)


def _same_directory(first: str, second: str) -> bool:
    try:
        return os.path.samefile(first, second)
    except OSError:
        return False


__all__ = [
    "Module",
    "ProviderError",
    "SegmentOptions",
    "build_segment",
    "env_lookup",
    "working_directory",
]

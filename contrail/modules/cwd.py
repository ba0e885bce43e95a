"""Current working directory module."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence

from ..config import Config, ConfigError
from ..logging import get_logger
from ..models import Color, RenderContext, RenderResult
from .base import Module, SegmentOptions, build_segment, env_lookup, working_directory

_DEFAULTS = SegmentOptions(fg="white", bg="blue")


class CwdModule(Module):
    """Renders the working directory, home-relative and depth-limited."""

    name = "cwd"

    def __init__(self) -> None:
        self.logger = get_logger("modules.cwd")

    def render(self, config: Config, context: RenderContext, next_bg: Color) -> RenderResult:
        table = self.table(config)
        options = _DEFAULTS.merged(table)
        max_depth = table.get_int("max_depth", 4)
        if max_depth is None or max_depth < 0:
            raise ConfigError("'cwd.max_depth' must not be negative")
        home_symbol = table.get_str("home_symbol", "~") or ""
        truncation_symbol = table.get_str("truncation_symbol", "…") or ""

        cwd = working_directory(context)
        home = env_lookup(context, "HOME")
        path, depth = shorten_path(
            cwd,
            home=Path(home) if home else None,
            max_depth=max_depth,
            home_symbol=home_symbol,
            truncation_symbol=truncation_symbol,
        )
        self.logger.debug("Rendering cwd %s as %s", cwd, path)
        content = self.format_content(table, "{{ path }}", {"path": path, "depth": depth})
        return build_segment(content, options, next_bg)


def shorten_path(
    path: Path,
    *,
    home: Optional[Path],
    max_depth: int,
    home_symbol: str = "~",
    truncation_symbol: str = "…",
) -> tuple[str, int]:
    """Return ``path`` as displayed in the prompt and its component depth."""
    head: str
    parts: Sequence[str]
    if home is not None and _is_within(path, home):
        head = home_symbol
        parts = path.relative_to(home).parts
    else:
        head = path.anchor or "/"
        parts = path.parts[1:] if path.anchor else path.parts
    depth = len(parts)
    if max_depth and depth > max_depth:
        head = truncation_symbol
        parts = parts[-max_depth:]
    if not parts:
        return head, depth
    separator = "" if head.endswith(("/", os.sep)) else "/"
    return f"{head}{separator}{'/'.join(parts)}", depth


def _is_within(path: Path, parent: Path) -> bool:
    try:
        path.relative_to(parent)
    except ValueError:
        return False
    return True


__all__ = ["CwdModule", "shorten_path"]

"""Prompt character module."""

from __future__ import annotations

from dataclasses import replace

from ..config import Config
from ..models import Color, RenderContext, RenderResult
from .base import Module, SegmentOptions, build_segment

_DEFAULTS = SegmentOptions(fg="white", bg="black")
_ERROR_BG = "red"


class PromptModule(Module):
    """Renders the prompt character, recoloured after a failed command.

    Settings under ``[prompt.error]`` override the segment style whenever the
    last exit code is non-zero. The background turns red on errors unless
    ``output.bg`` is configured.
    """

    name = "prompt"

    def render(self, config: Config, context: RenderContext, next_bg: Color) -> RenderResult:
        table = self.table(config)
        options = _DEFAULTS.merged(table)
        if context.exit_code != 0:
            if not table.has("output.bg"):
                options = replace(options, bg=_ERROR_BG)
            options = options.merged(table.section("error"))
        content = self.format_content(
            table,
            "{{ content }}",
            {"content": table.get_str("content", "$"), "code": context.exit_code},
        )
        return build_segment(content, options, next_bg)


__all__ = ["PromptModule"]

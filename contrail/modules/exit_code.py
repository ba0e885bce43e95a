"""Last exit status module."""

from __future__ import annotations

from ..config import Config
from ..models import Color, RenderContext, RenderResult
from .base import Module, SegmentOptions, build_segment

_DEFAULTS = SegmentOptions(fg="white", bg="red")


class ExitCodeModule(Module):
    """Shows the exit status of the previous command when it failed."""

    name = "exit_code"

    def render(self, config: Config, context: RenderContext, next_bg: Color) -> RenderResult:
        table = self.table(config)
        if context.exit_code == 0 and not table.get_bool("show_zero", False):
            return RenderResult.empty()
        options = _DEFAULTS.merged(table)
        content = self.format_content(table, "{{ code }}", {"code": context.exit_code})
        return build_segment(content, options, next_bg)


__all__ = ["ExitCodeModule"]

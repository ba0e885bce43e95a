"""User-defined modules backed by static text or an environment variable."""

from __future__ import annotations

from ..config import Config
from ..logging import get_logger
from ..models import Color, RenderContext, RenderResult
from .base import Module, SegmentOptions, build_segment, env_lookup

_DEFAULTS = SegmentOptions(fg="white", bg="black")


class GenericModule(Module):
    """Renders ``[<name>].content`` or the value of an environment variable.

    The variable defaults to the module name upper-cased with dashes turned
    into underscores, so a module called ``virtual_env`` reads
    ``$VIRTUAL_ENV``. Unset or empty values render nothing.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.logger = get_logger("modules.generic")

    def render(self, config: Config, context: RenderContext, next_bg: Color) -> RenderResult:
        table = self.table(config)
        value = table.get_str("content")
        if not value:
            variable = table.get_str("env") or self.default_variable
            value = env_lookup(context, variable)
            self.logger.debug("Module %s read $%s: %r", self.name, variable, value)
        if not value:
            return RenderResult.empty()
        options = _DEFAULTS.merged(table)
        content = self.format_content(table, "{{ value }}", {"value": value, "name": self.name})
        return build_segment(content, options, next_bg)

    @property
    def default_variable(self) -> str:
        return self.name.upper().replace("-", "_")

    def __repr__(self) -> str:
        return f"GenericModule({self.name!r})"


__all__ = ["GenericModule"]

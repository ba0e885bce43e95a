"""Jinja2 rendering for per-module ``format`` strings."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from .config import ConfigError

_ENV = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=False)


@lru_cache(maxsize=64)
def _compile(source: str) -> Template:
    return _ENV.from_string(source)


def render_template(source: str, context: Mapping[str, Any], *, module: str) -> str:
    """Render a module's format template.

    Syntax errors and references to undefined variables surface as
    :class:`ConfigError` naming the module.
    """
    try:
        return _compile(source).render(**context)
    except TemplateError as exc:
        raise ConfigError(f"Invalid format for module '{module}': {exc}") from exc


__all__ = ["render_template"]

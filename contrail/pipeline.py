"""Segment composition: module order, background chaining and line assembly."""

from __future__ import annotations

import sys
from collections import deque
from typing import Callable, Deque, Iterable, List, Sequence, TextIO

from .config import Config
from .logging import get_logger
from .models import Color, Fragment, RenderContext
from .modules import Module, resolve_module
from .style import StyleRenderer

DEFAULT_MODULE_ORDER: Sequence[str] = ("cwd", "git", "prompt")

_MODULES_KEY = "global.modules"

logger = get_logger("pipeline")


def resolve_module_order(config: Config) -> List[str]:
    """Return module names in left-to-right display order.

    Reads ``global.modules`` verbatim when configured and falls back to
    ``cwd, git, prompt``. Names are not validated; unknown ones become
    generic modules during evaluation.
    """
    names = config.get_str_list(_MODULES_KEY)
    if names is None:
        return list(DEFAULT_MODULE_ORDER)
    return names


def evaluate_chain(
    order: Sequence[str],
    config: Config,
    context: RenderContext,
    *,
    resolve: Callable[[str], Module] = resolve_module,
) -> List[Fragment]:
    """Render ``order`` right to left so each module knows its successor's background.

    A module without output is skipped and leaves ``next_bg`` untouched, so
    its neighbours chain as if it were absent. Provider errors propagate.
    """
    fragments: Deque[Fragment] = deque()
    next_bg: Color = None
    for name in reversed(order):
        module = resolve(name)
        result = module.render(config, context, next_bg)
        if result.output is None:
            logger.debug("Module %s rendered nothing (next_bg=%s)", name, next_bg)
            continue
        logger.debug("Module %s rendered with bg=%s (next_bg=%s)", name, result.next_bg, next_bg)
        fragments.appendleft(result.output)
        next_bg = result.next_bg
    return list(fragments)


def assemble_line(fragments: Iterable[Fragment], renderer: StyleRenderer) -> str:
    """Concatenate fragments, in order, into one encoded prompt line."""
    return renderer.render(run for fragment in fragments for run in fragment.runs)


def write_line(line: str, stream: TextIO | None = None) -> None:
    """Write ``line`` without a trailing newline and flush best-effort."""
    target = stream if stream is not None else sys.stdout
    target.write(line)
    try:
        target.flush()
    except OSError as exc:
        logger.debug("Ignoring flush failure: %s", exc)


def render_prompt(
    config: Config,
    context: RenderContext,
    *,
    resolve: Callable[[str], Module] = resolve_module,
) -> str:
    """Run the full pipeline and return the encoded prompt line."""
    order = resolve_module_order(config)
    logger.debug("Module order: %s", ", ".join(order) or "(empty)")
    fragments = evaluate_chain(order, config, context, resolve=resolve)
    return assemble_line(fragments, StyleRenderer(context.shell))


__all__ = [
    "DEFAULT_MODULE_ORDER",
    "assemble_line",
    "evaluate_chain",
    "render_prompt",
    "resolve_module_order",
    "write_line",
]

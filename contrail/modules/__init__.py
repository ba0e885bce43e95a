"""Prompt module implementations and name-based dispatch."""

from __future__ import annotations

from typing import Callable, Dict

from .base import Module, ProviderError, SegmentOptions, build_segment
from .cwd import CwdModule
from .exit_code import ExitCodeModule
from .generic import GenericModule
from .git import GitModule
from .prompt import PromptModule

_BUILTIN_FACTORIES: Dict[str, Callable[[], Module]] = {
    "cwd": CwdModule,
    "exit_code": ExitCodeModule,
    "git": GitModule,
    "prompt": PromptModule,
}

BUILTIN_MODULES = tuple(_BUILTIN_FACTORIES)


def resolve_module(name: str) -> Module:
    """Return the provider for ``name``.

    Built-in names map to their dedicated modules; every other name is a
    generic module parameterised by that exact string.
    """
    factory = _BUILTIN_FACTORIES.get(name)
    if factory is None:
        return GenericModule(name)
    return factory()


__all__ = [
    "BUILTIN_MODULES",
    "CwdModule",
    "ExitCodeModule",
    "GenericModule",
    "GitModule",
    "Module",
    "PromptModule",
    "ProviderError",
    "SegmentOptions",
    "build_segment",
    "resolve_module",
]

"""Core data models shared across contrail components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence, Tuple

# A color as written in configuration after normalisation (for example
# "blue", "#ff8700" or "color(33)"). None is the terminal default.
Color = Optional[str]

GitRunner = Callable[..., str]


class Shell(str, Enum):
    """Shell dialects whose prompt escaping rules we know."""

    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    POWERSHELL = "powershell"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Style:
    """Foreground, background and weight of one visual run."""

    fg: Color = None
    bg: Color = None
    bold: bool = False

    @property
    def is_plain(self) -> bool:
        return self.fg is None and self.bg is None and not self.bold


@dataclass(frozen=True)
class StyledText:
    """A contiguous run of text drawn in a single style."""

    text: str
    style: Style = field(default_factory=Style)


@dataclass(frozen=True)
class Fragment:
    """Everything one module contributes to the prompt line."""

    runs: Tuple[StyledText, ...]

    @classmethod
    def of(cls, runs: Sequence[StyledText]) -> "Fragment":
        return cls(runs=tuple(run for run in runs if run.text))

    @property
    def plain_text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class RenderResult:
    """Outcome of rendering one module.

    ``next_bg`` is the background the module drew with; the module to its
    left receives it as its own ``next_bg``. It is only meaningful when
    ``output`` is present.
    """

    output: Optional[Fragment] = None
    next_bg: Color = None

    @classmethod
    def empty(cls) -> "RenderResult":
        return cls(output=None, next_bg=None)


@dataclass(frozen=True)
class RenderContext:
    """Render-global inputs shared by every module in one invocation."""

    exit_code: int = 255
    shell: Shell = Shell.BASH
    environ: Mapping[str, str] = field(default_factory=dict)
    cwd: Optional[Path] = None
    git_runner: Optional[GitRunner] = None

"""Terminal style encoding for shell prompts."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterable, List, Tuple

from rich.color import Color as RichColor
from rich.color import ColorParseError

from .config import ConfigError
from .models import Color, Shell, Style, StyledText

_ESC = "\x1b"
_RESET_CODES = "0"
_DEFAULT_NAMES = {"default", "none"}

# Non-printing markers so the shell can compute the visible prompt width.
_NON_PRINTING: dict[Shell, Tuple[str, str]] = {
    Shell.BASH: ("\\[", "\\]"),
    Shell.ZSH: ("%{", "%}"),
    Shell.FISH: ("", ""),
    Shell.POWERSHELL: ("", ""),
}


def parse_color(value: Any) -> Color:
    """Validate a configured color and return its normalised form.

    Accepts anything ``rich`` understands (``blue``, ``bright_red``,
    ``#ff8700``, ``rgb(0,95,175)``, ``color(33)``), integers ``0..255`` as
    xterm-256 indexes, and ``default``/``none`` for the terminal default.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"Invalid color {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 255:
            raise ConfigError(f"Color index {value} is outside 0..255")
        return f"color({value})"
    if not isinstance(value, str):
        raise ConfigError(f"Invalid color {value!r}")
    normalised = value.strip().lower()
    if normalised in _DEFAULT_NAMES:
        return None
    try:
        _parse(normalised)
    except ColorParseError as exc:
        raise ConfigError(f"Invalid color {value!r}: {exc}") from exc
    return normalised


@lru_cache(maxsize=None)
def _parse(value: str) -> RichColor:
    return RichColor.parse(value)


def sgr_codes(style: Style) -> List[str]:
    """Return the SGR parameters that select ``style``."""
    codes: List[str] = []
    if style.bold:
        codes.append("1")
    if style.fg is not None:
        codes.extend(_parse(style.fg).get_ansi_codes(foreground=True))
    if style.bg is not None:
        codes.extend(_parse(style.bg).get_ansi_codes(foreground=False))
    return codes


class StyleRenderer:
    """Encodes styled runs into escape sequences for one shell dialect."""

    def __init__(self, shell: Shell = Shell.BASH) -> None:
        self.shell = shell
        self._open, self._close = _NON_PRINTING[shell]

    def render(self, runs: Iterable[StyledText]) -> str:
        """Concatenate ``runs``, switching styles only where they change."""
        parts: List[str] = []
        current = Style()
        for run in runs:
            if not run.text:
                continue
            if run.style != current:
                parts.append(self._transition(current, run.style))
                current = run.style
            parts.append(self.escape_text(run.text))
        if not current.is_plain:
            parts.append(self._escape(_RESET_CODES))
        return "".join(parts)

    def escape_text(self, text: str) -> str:
        """Escape characters the shell would otherwise expand inside a prompt."""
        if self.shell is Shell.BASH:
            return text.replace("\\", "\\\\")
        if self.shell is Shell.ZSH:
            return text.replace("%", "%%")
        return text

    def _transition(self, previous: Style, style: Style) -> str:
        codes = sgr_codes(style)
        if previous.is_plain:
            return self._escape(";".join(codes)) if codes else ""
        return self._escape(";".join([_RESET_CODES, *codes]))

    def _escape(self, codes: str) -> str:
        return f"{self._open}{_ESC}[{codes}m{self._close}"


__all__ = ["StyleRenderer", "parse_color", "sgr_codes"]

"""Git working tree status module."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..config import Config
from ..logging import get_logger
from ..models import Color, RenderContext, RenderResult
from .base import Module, ProviderError, SegmentOptions, build_segment, working_directory

_DEFAULTS = SegmentOptions(fg="black", bg="green")
_DIRTY_BG = "yellow"

_DEFAULT_FORMAT = (
    "{{ branch }}"
    "{% if ahead %} {{ ahead_symbol }}{{ ahead }}{% endif %}"
    "{% if behind %} {{ behind_symbol }}{{ behind }}{% endif %}"
    "{% if dirty %} {{ dirty_symbol }}{% endif %}"
)

# git exits with 128 when the directory is not inside a repository.
_NOT_A_REPOSITORY = 128


@dataclass(frozen=True)
class GitStatus:
    """Branch and change summary for a working tree."""

    branch: str
    ahead: int = 0
    behind: int = 0
    dirty: bool = False


class GitStatusReader:
    """Reads working tree status through the git command line."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("modules.git")

    def read(self, directory: Path, *, include_untracked: bool = True) -> Optional[GitStatus]:
        """Return the status of the repository containing ``directory``.

        Returns None when ``directory`` is not inside a work tree or git is
        not installed.
        """
        try:
            inside = self._run(["git", "rev-parse", "--is-inside-work-tree"], cwd=directory)
        except FileNotFoundError:
            self.logger.debug("git executable not found; skipping git module")
            return None
        except subprocess.CalledProcessError as exc:
            if exc.returncode == _NOT_A_REPOSITORY:
                return None
            raise ProviderError(f"git rev-parse failed in {directory}: {_stderr(exc)}") from exc
        if inside.strip() != "true":
            return None

        args = ["git", "status", "--porcelain=v2", "--branch"]
        if not include_untracked:
            args.append("--untracked-files=no")
        try:
            output = self._run(args, cwd=directory)
        except (OSError, subprocess.CalledProcessError) as exc:
            detail = _stderr(exc) if isinstance(exc, subprocess.CalledProcessError) else str(exc)
            raise ProviderError(f"git status failed in {directory}: {detail}") from exc
        return parse_porcelain_v2(output.splitlines())

    def _run(self, args: Iterable[str], *, cwd: Path) -> str:
        return self._runner(args, cwd=cwd, capture_output=True)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


def parse_porcelain_v2(lines: Iterable[str]) -> GitStatus:
    """Build a :class:`GitStatus` from ``git status --porcelain=v2 --branch``."""
    oid = ""
    head = ""
    ahead = behind = 0
    dirty = False
    for line in lines:
        if not line:
            continue
        if line.startswith("# branch.oid "):
            oid = line[len("# branch.oid "):].strip()
        elif line.startswith("# branch.head "):
            head = line[len("# branch.head "):].strip()
        elif line.startswith("# branch.ab "):
            for token in line[len("# branch.ab "):].split():
                if token.startswith("+"):
                    ahead = int(token[1:])
                elif token.startswith("-"):
                    behind = int(token[1:])
        elif not line.startswith("#"):
            dirty = True

    if head == "(detached)":
        branch = oid[:7] if oid and oid != "(initial)" else head
    elif head:
        branch = head
    else:
        branch = oid[:7] if oid else "(unknown)"
    return GitStatus(branch=branch, ahead=ahead, behind=behind, dirty=dirty)


class GitModule(Module):
    """Renders the branch, divergence from upstream, and a dirty marker."""

    name = "git"

    def __init__(self, reader: GitStatusReader | None = None) -> None:
        self._reader = reader

    def render(self, config: Config, context: RenderContext, next_bg: Color) -> RenderResult:
        table = self.table(config)
        reader = self._reader or GitStatusReader(runner=context.git_runner)
        status = reader.read(
            working_directory(context),
            include_untracked=bool(table.get_bool("include_untracked", True)),
        )
        if status is None:
            return RenderResult.empty()

        options = _DEFAULTS.merged(table)
        if status.dirty:
            if not table.has("output.bg"):
                options = replace(options, bg=_DIRTY_BG)
            options = options.merged(table.section("dirty"))

        content = self.format_content(
            table,
            _DEFAULT_FORMAT,
            {
                "branch": status.branch,
                "ahead": status.ahead,
                "behind": status.behind,
                "dirty": status.dirty,
                "dirty_symbol": table.get_str("dirty_symbol", "*"),
                "ahead_symbol": table.get_str("ahead_symbol", "↑"),
                "behind_symbol": table.get_str("behind_symbol", "↓"),
            },
        )
        return build_segment(content, options, next_bg)


def _stderr(exc: subprocess.CalledProcessError) -> str:
    detail = exc.stderr.strip() if isinstance(exc.stderr, str) else ""
    return detail or f"exit status {exc.returncode}"


__all__ = ["GitModule", "GitStatus", "GitStatusReader", "parse_porcelain_v2"]

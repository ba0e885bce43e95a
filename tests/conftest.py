from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from contrail.models import RenderContext, Shell
from tests._fixtures.stub_modules import StubRegistry


def not_a_repository(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
    raise subprocess.CalledProcessError(128, list(args), stderr="fatal: not a git repository")


@pytest.fixture
def registry() -> StubRegistry:
    """Provide an empty registry of scripted modules."""
    return StubRegistry()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home" / "ada"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def context(home: Path) -> RenderContext:
    """Render context rooted in a fake home directory, outside any git repository."""
    return RenderContext(
        exit_code=0,
        shell=Shell.FISH,
        environ={"HOME": str(home)},
        cwd=home / "projects" / "contrail",
        git_runner=not_a_repository,
    )

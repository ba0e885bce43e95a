"""Tests for the working directory module."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from contrail.config import Config, ConfigError
from contrail.models import RenderContext, Style
from contrail.modules import ProviderError
from contrail.modules.base import working_directory
from contrail.modules.cwd import CwdModule, shorten_path


def test_shorten_path_replaces_home_prefix() -> None:
    home = Path("/home/ada")
    assert shorten_path(Path("/home/ada"), home=home, max_depth=4) == ("~", 0)
    assert shorten_path(Path("/home/ada/src/app"), home=home, max_depth=4) == ("~/src/app", 2)


def test_shorten_path_outside_home() -> None:
    assert shorten_path(Path("/"), home=Path("/home/ada"), max_depth=4) == ("/", 0)
    assert shorten_path(Path("/etc/nginx"), home=Path("/home/ada"), max_depth=4) == ("/etc/nginx", 2)
    assert shorten_path(Path("/etc"), home=None, max_depth=4) == ("/etc", 1)


def test_shorten_path_truncates_deep_paths() -> None:
    path = Path("/home/ada/a/b/c/d/e")
    assert shorten_path(path, home=Path("/home/ada"), max_depth=3) == ("…/c/d/e", 5)
    assert shorten_path(path, home=None, max_depth=2, truncation_symbol="...") == (".../d/e", 7)
    assert shorten_path(path, home=None, max_depth=0) == ("/home/ada/a/b/c/d/e", 7)


def test_cwd_module_renders_home_relative_path(context: RenderContext) -> None:
    result = CwdModule().render(Config(), context, "green")

    assert result.output is not None
    body, separator = result.output.runs
    assert body.text == " ~/projects/contrail "
    assert body.style == Style(fg="white", bg="blue")
    assert separator.style == Style(fg="blue", bg="green")
    assert result.next_bg == "blue"


def test_cwd_module_honours_configuration(context: RenderContext, home: Path) -> None:
    config = Config(
        data={
            "cwd": {
                "max_depth": 1,
                "truncation_symbol": "<",
                "format": "{{ path }} ({{ depth }})",
                "output": {"bg": "cyan"},
            }
        }
    )
    deep = replace(context, cwd=home / "a" / "b" / "c")

    result = CwdModule().render(config, deep, None)

    assert result.output is not None
    assert result.output.runs[0].text == " </c (3) "
    assert result.next_bg == "cyan"


def test_cwd_module_rejects_negative_depth(context: RenderContext) -> None:
    config = Config(data={"cwd": {"max_depth": -2}})

    with pytest.raises(ConfigError):
        CwdModule().render(config, context, None)


def test_working_directory_prefers_logical_pwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    link.symlink_to(real, target_is_directory=True)
    monkeypatch.chdir(real)

    context = RenderContext(environ={"PWD": str(link)})

    assert working_directory(context) == link


def test_working_directory_ignores_stale_pwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    context = RenderContext(environ={"PWD": str(tmp_path / "gone")})

    assert working_directory(context) == Path.cwd()


def test_working_directory_failure_is_a_provider_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def vanished() -> str:
        raise FileNotFoundError("No such file or directory")

    monkeypatch.setattr("contrail.modules.base.os.getcwd", vanished)

    with pytest.raises(ProviderError, match="working directory"):
        CwdModule().render(Config(), RenderContext(), None)

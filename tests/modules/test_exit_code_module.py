"""Tests for the exit code module."""

from __future__ import annotations

from dataclasses import replace

from contrail.config import Config
from contrail.models import RenderContext, Style
from contrail.modules.exit_code import ExitCodeModule


def test_exit_code_hidden_after_success(context: RenderContext) -> None:
    assert ExitCodeModule().render(Config(), context, "black").output is None


def test_exit_code_shown_after_failure(context: RenderContext) -> None:
    failed = replace(context, exit_code=127)

    result = ExitCodeModule().render(Config(), failed, "black")

    assert result.output is not None
    body, separator = result.output.runs
    assert body.text == " 127 "
    assert body.style == Style(fg="white", bg="red")
    assert separator.style == Style(fg="red", bg="black")
    assert result.next_bg == "red"


def test_exit_code_show_zero_and_custom_format(context: RenderContext) -> None:
    config = Config(data={"exit_code": {"show_zero": True, "format": "✘{{ code }}"}})

    result = ExitCodeModule().render(config, context, None)

    assert result.output is not None
    assert result.output.runs[0].text == " ✘0 "

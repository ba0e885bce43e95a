"""CLI entrypoint for contrail."""

from __future__ import annotations

import argparse
import os
import re
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError, load_config
from .logging import configure_logging, get_logger
from .models import RenderContext, Shell
from .modules import ProviderError
from .pipeline import render_prompt, write_line

_CONFIG_ENV = "CONTRAIL_CONFIG"
_DEFAULT_EXIT_CODE = 255
_EXIT_CODE_PATTERN = re.compile(r"\+?[0-9]+")


def _exit_code(value: str) -> int:
    if not _EXIT_CODE_PATTERN.fullmatch(value):
        raise argparse.ArgumentTypeError(
            f"exit code must be an integer in 0..255, got {value!r}"
        )
    code = int(value)
    if not 0 <= code <= 255:
        raise argparse.ArgumentTypeError(f"exit code must be in 0..255, got {code}")
    return code


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contrail",
        description="Fast and configurable shell prompter.",
    )
    parser.add_argument(
        "-e",
        "--exit_code",
        dest="exit_code",
        metavar="CODE",
        type=_exit_code,
        default=_DEFAULT_EXIT_CODE,
        help="Exit code of the last-executed command (defaults to 255).",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=Path,
        default=None,
        help=f"Location of the TOML configuration file (defaults to ${_CONFIG_ENV}).",
    )
    parser.add_argument(
        "--shell",
        choices=[shell.value for shell in Shell],
        default=Shell.BASH.value,
        help="Shell the prompt is rendered for; controls escape sequences.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log module evaluation details to stderr.",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        type=Path,
        default=None,
        help="Also write diagnostics to FILE.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint: render the prompt and write it to stdout."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    except OSError as exc:
        parser.error(f"cannot open log file {args.log_file}: {exc.strerror or exc}")
    logger = get_logger("cli")

    config_path = args.config
    if config_path is None and os.environ.get(_CONFIG_ENV):
        config_path = Path(os.environ[_CONFIG_ENV])

    context = RenderContext(
        exit_code=args.exit_code,
        shell=Shell(args.shell),
        environ=dict(os.environ),
    )

    try:
        config = load_config(config_path)
        line = render_prompt(config, context)
    except ConfigError as exc:
        logger.debug("Configuration error", exc_info=True)
        parser.exit(1, f"contrail: configuration error: {exc}\n")
    except ProviderError as exc:
        logger.debug("Module failed", exc_info=True)
        parser.exit(1, f"contrail: {exc}\n")

    write_line(line)


if __name__ == "__main__":
    main(sys.argv[1:])

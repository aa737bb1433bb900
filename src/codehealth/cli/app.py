# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for codehealth."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Final

from codehealth import __version__
from codehealth.analysis.invoker import CodeHealthChecker
from codehealth.cli.formatting import render_results
from codehealth.cli.io import echo
from codehealth.config import ConfigValidationError, load_settings
from codehealth.core.model_types import LogComponent, OutputFormat
from codehealth.document import TextDocument
from codehealth.exceptions import CodeHealthError
from codehealth.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra

if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Future

    from codehealth.core.types import Diagnostic

logger: logging.Logger = logging.getLogger("codehealth.cli")

CODEHEALTH_VERSION: Final[str] = __version__


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the codehealth command-line interface.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Exit code (0 for success, 1 when any analysis failed, 2 for
        configuration errors).
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"codehealth {CODEHEALTH_VERSION}")
        return 0
    if args.command is None:
        parser.error("No command provided.")
    try:
        loaded = load_settings(explicit_path=args.config)
    except ConfigValidationError as exc:
        echo(f"[codehealth] {exc}", err=True)
        return 2
    settings = loaded.settings
    configure_logging(args.log_format or settings.log_format, log_level=args.log_level or settings.log_level)
    return _run_check(args, cli_path=args.cli_path or settings.cli_path, max_workers=settings.max_workers)


def _run_check(args: argparse.Namespace, *, cli_path: str, max_workers: int) -> int:
    documents: list[TextDocument] = []
    for raw in args.paths:
        try:
            documents.append(TextDocument.open(Path(raw)))
        except (OSError, UnicodeDecodeError) as exc:
            echo(f"[codehealth] Cannot read {raw}: {exc}", err=True)
            return 1

    results: dict[str, list[Diagnostic]] = {}
    failed = False
    with CodeHealthChecker(max_workers=max_workers) as checker:
        pending: list[tuple[TextDocument, Future[list[Diagnostic]]]] = [
            (document, checker.check(cli_path, document, args.skip_cache)) for document in documents
        ]
        for document, future in pending:
            try:
                results[str(document.path)] = future.result()
            except CodeHealthError as exc:
                failed = True
                logger.warning(
                    "Analysis failed for %s: %s",
                    document.path,
                    exc,
                    extra=structured_extra(LogComponent.CLI, path=document.path),
                )
                echo(f"[codehealth] {exc}", err=True)
    rendered = render_results(results, OutputFormat.from_str(args.format))
    if rendered:
        echo(rendered)
    return 1 if failed else 0


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the codehealth CLI.

    Returns:
        argparse.ArgumentParser: Parser with global options and the ``check`` subcommand.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Select logging output format (human-readable text or structured JSON).",
    )
    common.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Set verbosity of logged events.",
    )
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Load settings from this file instead of searching for one.",
    )
    parser = argparse.ArgumentParser(
        prog="codehealth",
        description="Run the code health tool on files and print its diagnostics.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the codehealth version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command")
    check = subparsers.add_parser(
        "check",
        parents=[common],
        help="Analyse files and print diagnostics.",
    )
    check.add_argument("paths", nargs="+", help="Files to analyse.")
    check.add_argument("--cli-path", default=None, help="Executable of the code health tool.")
    check.add_argument(
        "--skip-cache",
        action="store_true",
        help="Always run the tool, ignoring cached results.",
    )
    check.add_argument(
        "--format",
        choices=tuple(fmt.value for fmt in OutputFormat),
        default=OutputFormat.TEXT.value,
        help="Output format for diagnostics.",
    )
    return parser


__all__ = ["main"]

"""CLI entrypoints for ngmap commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import REPORT_FORMATS, ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator
from .report import MarkdownRenderer, render_json


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngmap",
        description="Map components, services, modules, pipes, routes and imports of an Angular project.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors to the console.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Write the full structural report.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_path_argument(analyze_parser)
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Report destination (defaults to stdout or report.output from .ngmap.yml).",
    )
    analyze_parser.add_argument(
        "--format",
        choices=REPORT_FORMATS,
        default=None,
        help="Report format (defaults to report.format from .ngmap.yml, else markdown).",
    )
    analyze_parser.add_argument(
        "--section",
        action="append",
        dest="sections",
        default=None,
        help="Only include the named section; may be repeated.",
    )

    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the component containment tree.",
    )
    _add_verbose_option(tree_parser, suppress_default=True)
    _add_path_argument(tree_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ngmap commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.quiet, log_file=args.log_file)

    try:
        config = load_config(Path(args.path))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    orchestrator = Orchestrator(config=config)
    try:
        result = orchestrator.analyze(args.path)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except Exception as exc:  # pragma: no cover - defensive guard
        parser.exit(1, f"ngmap {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    if args.command == "tree":
        sys.stdout.write(MarkdownRenderer().render_tree(result))
        return

    if args.command == "analyze":
        fmt = args.format or config.report.format
        sections = args.sections or config.report.sections or None
        try:
            if fmt == "json":
                text = render_json(result, sections)
            else:
                text = MarkdownRenderer().render(result, sections)
        except ValueError as exc:
            parser.exit(1, f"{exc}\n")

        output = args.output or config.report.output
        if output is None:
            sys.stdout.write(text)
            return
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        print(f"Report written to {_relativize(output)}")
        return

    parser.exit(1, "Unknown command\n")  # pragma: no cover - argparse enforces choices


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])

"""
cli.py

Responsibility: CLI entrypoint for finisher-v1.

Two single-shot commands share one scan root (the working directory by default):
- `validate`: check the tree for unresolved placeholders, sample-domain
  vocabulary and dangling `@docs/` references.
- `cleanup`: delete the template scaffolding files once customization is done.

This module orchestrates and owns exit status; the work itself lives in:
- Configuration: `config.py`
- Verification: `scanner.py`
- Removal: `remover.py`
- Console text: `report.py`
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from finisher.config import ConfigError, ToolConfig, load_config
from finisher.logging_config import get_logger, setup_logging
from finisher.remover import CustomizationIncompleteError, cleanup
from finisher.report import (
    render_cleanup_report,
    render_guard_failure,
    render_marker_missing,
    render_scan_report,
)
from finisher.scanner import MarkerMissingError, verify

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _load(args: argparse.Namespace) -> tuple[Path, ToolConfig]:
    root = Path(args.root).resolve()
    logger.debug("scan root: %s", root)
    return root, load_config(root, args.config)


def validate_cmd(args: argparse.Namespace) -> int:
    root, config = _load(args)
    try:
        result = verify(root, config)
    except MarkerMissingError as e:
        print(render_marker_missing(e), end="")
        return EXIT_FAILED

    print(render_scan_report(result, config), end="")
    return EXIT_FAILED if result.failed else EXIT_OK


def cleanup_cmd(args: argparse.Namespace) -> int:
    root, config = _load(args)
    try:
        result = cleanup(root, config, dry_run=bool(args.dry_run))
    except CustomizationIncompleteError as e:
        print(render_guard_failure(e), end="")
        return EXIT_FAILED

    print(render_cleanup_report(result), end="")
    # Deletion errors are advisory unless --strict is given.
    if args.strict and not result.succeeded:
        return EXIT_FAILED
    return EXIT_OK


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--root", default=".", help="Template root to operate on (default: current directory)")
    p.add_argument("--config", default=None, help="YAML config file, or markdown file with YAML frontmatter")
    p.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="finisher", description="finisher-v1 - template customization verifier and cleanup")
    sub = p.add_subparsers(dest="command", required=True)

    v = sub.add_parser("validate", help="Check that template placeholders and sample content were replaced")
    _add_common(v)
    v.set_defaults(func=validate_cmd)

    c = sub.add_parser("cleanup", help="Remove template scaffolding files after customization")
    _add_common(c)
    c.add_argument("--dry-run", action="store_true", help="List the files that would be removed, remove nothing")
    c.add_argument("--strict", action="store_true", help="Exit non-zero when any file could not be removed")
    c.set_defaults(func=cleanup_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=bool(args.verbose))
    try:
        return int(args.func(args))
    except ConfigError as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG


def validate_main() -> int:
    return main(["validate", *sys.argv[1:]])


def cleanup_main() -> int:
    return main(["cleanup", *sys.argv[1:]])


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line host for translation builds.

Usage:
    localemerge build --config i18n.json --out dist
    localemerge build --config i18n.json --out dist --watch

Exit Codes:
    0: Build succeeded (or watch mode interrupted)
    1: Build failed (broken fallback chain, bad translation file)
    2: Configuration error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from collections.abc import Callable
from pathlib import Path

from localemerge.config import BuildConfig
from localemerge.constants import DEFAULT_WATCH_INTERVAL
from localemerge.diagnostics import LocaleMergeError
from localemerge.localization.build import BuildResult, TranslationBuild

__all__ = ["build_parser", "main", "watch"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BUILD_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="localemerge",
        description="Merge JSON translation files with their locale fallback chains.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One-off build into dist/translations/:
  localemerge build --config i18n.json --out dist

  # Rebuild whenever a translation file changes:
  localemerge build --config i18n.json --out dist --watch
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Merge every supported locale")
    build.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="JSON configuration file (master, sourcePath, supportedLocales, fallbacks)",
    )
    build.add_argument(
        "--out",
        "-o",
        type=Path,
        default=None,
        help="Directory to write assets to (default: report only)",
    )
    build.add_argument(
        "--no-cache",
        action="store_true",
        help="Re-read every file on every build",
    )
    build.add_argument(
        "--jobs",
        "-j",
        type=int,
        default=None,
        help="Merge locales on a thread pool of this size",
    )
    build.add_argument(
        "--watch",
        action="store_true",
        help="Rebuild when a declared dependency changes",
    )
    build.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_WATCH_INTERVAL,
        help=f"Seconds between dependency polls in watch mode (default: {DEFAULT_WATCH_INTERVAL})",
    )
    build.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log chains and cache activity",
    )
    return parser


def _run_once(build: TranslationBuild, out_dir: Path | None) -> BuildResult:
    result = build.run()
    if out_dir is not None:
        build.write(result, out_dir)
    for name, asset in result.assets.items():
        status = result.statuses.get(asset.locale)
        print(f"{name}  {asset.size()} bytes  ({status})")
    return result


def _snapshot(paths: frozenset[Path]) -> dict[Path, int | None]:
    mtimes: dict[Path, int | None] = {}
    for path in paths:
        try:
            mtimes[path] = os.stat(path).st_mtime_ns
        except OSError:
            mtimes[path] = None
    return mtimes


def watch(
    build: TranslationBuild,
    out_dir: Path | None,
    interval: float,
    *,
    max_cycles: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Build, then rebuild whenever a declared dependency changes.

    A failed build is reported and watching continues; the previous assets
    stay in place until a build succeeds.

    Args:
        build: Build to rerun
        out_dir: Output directory (None: report only)
        interval: Seconds between polls
        max_cycles: Stop after this many polls (None: until interrupted)
        sleep: Sleep function (injectable for tests)

    Returns:
        Exit code of the last build attempt
    """
    config = build.config
    dependencies = frozenset(config.source_file(locale) for locale in config.locales)
    exit_code = EXIT_OK
    try:
        result = _run_once(build, out_dir)
        dependencies = result.file_dependencies
    except LocaleMergeError as e:
        print(e, file=sys.stderr)
        exit_code = EXIT_BUILD_FAILED

    snapshot = _snapshot(dependencies)
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        sleep(interval)
        cycles += 1
        current = _snapshot(dependencies)
        if current == snapshot:
            continue
        snapshot = current
        logger.info("Change detected, rebuilding...")
        try:
            result = _run_once(build, out_dir)
        except LocaleMergeError as e:
            print(e, file=sys.stderr)
            exit_code = EXIT_BUILD_FAILED
            continue
        exit_code = EXIT_OK
        if result.file_dependencies != dependencies:
            dependencies = result.file_dependencies
            snapshot = _snapshot(dependencies)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = BuildConfig.from_file(args.config)
        build = TranslationBuild(config, use_cache=not args.no_cache, max_workers=args.jobs)
    except (OSError, ValueError, ImportError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.watch:
        try:
            return watch(build, args.out, args.interval)
        except KeyboardInterrupt:
            return EXIT_OK

    try:
        _run_once(build, args.out)
    except LocaleMergeError as e:
        print(e, file=sys.stderr)
        return EXIT_BUILD_FAILED
    return EXIT_OK

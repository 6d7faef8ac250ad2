from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from stackvm.config import load_settings, repo_root
from stackvm.engine import Engine
from stackvm.fixtures import counter_loop_program
from stackvm.linecount import search_files


def _existing_dir(value: str) -> Path:
    p = Path(value)
    if not p.is_dir():
        raise argparse.ArgumentTypeError(f"directory not found: {value}")
    return p


def _extension(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("extension must be non-empty")
    return value


def _configure_logging(*, verbose: bool) -> None:
    level = logging.DEBUG
    if not verbose:
        try:
            level = load_settings().log_level_value
        except ValueError:
            level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _config_validate() -> int:
    issues: list[str] = []
    checks_passed = 0

    env_path = repo_root() / ".env"
    if env_path.exists():
        print(f"✓ .env file found: {env_path}")
        checks_passed += 1
    else:
        print(f"  .env file not found at {env_path} (using process environment)")

    try:
        settings = load_settings()
    except ValueError as e:
        issues.append(f"✗ {e}")
    else:
        print(f"✓ STACKVM_MAX_OPS: {settings.max_ops}")
        print(f"✓ STACKVM_LOG_LEVEL: {settings.log_level}")
        checks_passed += 1

    print()
    if issues:
        print("Issues found:")
        for issue in issues:
            print(f"  {issue}")
        print(f"\n{checks_passed} checks passed, {len(issues)} issues found")
        return 1
    print(f"✓ All {checks_passed} checks passed")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="stackvm")
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    sub = parser.add_subparsers(dest="cmd", required=True)

    lines_p = sub.add_parser(
        "count-lines", help="print '<path> <line-count>' for files with an extension"
    )
    lines_p.add_argument("dir", type=_existing_dir)
    lines_p.add_argument("ext", type=_extension, help="file extension without the leading dot")

    config_p = sub.add_parser("config", help="configuration utilities")
    config_sub = config_p.add_subparsers(dest="config_cmd", required=True)
    config_sub.add_parser("validate", help="validate configuration")

    sub.add_parser("demo", help="run the built-in counter loop program")

    args = parser.parse_args(argv)
    _configure_logging(verbose=args.verbose)

    if args.cmd == "count-lines":
        try:
            search_files(args.dir, args.ext)
        except OSError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        return 0

    if args.cmd == "config":
        if args.config_cmd == "validate":
            return _config_validate()
        raise AssertionError(f"unhandled config_cmd: {args.config_cmd}")

    if args.cmd == "demo":
        try:
            settings = load_settings()
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        result = Engine(settings=settings.engine_settings()).run(counter_loop_program())
        if not result.success:
            print(f"error: {result.error}", file=sys.stderr)
            return 1
        print(result.value)
        return 0

    raise AssertionError(f"unhandled cmd: {args.cmd}")


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""CLI interface for envsource"""
import argparse
import io
import json
import logging
import os
import shlex
import subprocess
import sys
from contextlib import contextmanager
from typing import List, Optional, Tuple

from .config import DEFAULT_CONFIG, SPACE_TAB, SourcerConfig
from .errors import SourcingError
from .quoting import quote
from .source import Sourcer

logger = logging.getLogger(__name__)


def _needs_quoting(value: str, config: SourcerConfig = DEFAULT_CONFIG) -> bool:
    """Whether `value` would not survive a round trip as an unquoted value under `config`."""
    if not value:
        return False
    return (
        value[0] in SPACE_TAB
        or value[-1] in SPACE_TAB
        or (bool(config.quote) and value.startswith(config.quote))
        or (bool(config.comment) and config.comment in value)
        or not value.isprintable()
    )


def format_pairs(
    pairs: List[Tuple[str, str]],
    output_format: str,
    config: SourcerConfig = DEFAULT_CONFIG,
) -> str:
    """Render definitions as env lines, shell export lines or JSON.

    Shell lines are quoted with shlex so they can be evaluated by a POSIX
    shell. Env lines are re-quoted in the double quoted literal form only
    where `config` would not read the bare value back unchanged.
    """
    if output_format == "json":
        return json.dumps([list(pair) for pair in pairs], ensure_ascii=False, indent=2)

    lines = []
    for name, value in pairs:
        if output_format == "shell":
            lines.append(f"export {name}={shlex.quote(value)}")
        else:
            lines.append(f"{name}={quote(value) if _needs_quoting(value, config) else value}")
    return "\n".join(lines)


def _build_config(args) -> SourcerConfig:
    config = SourcerConfig.from_env()
    changes = {}
    for field_name in ("comment", "quote", "export"):
        value = getattr(args, field_name)
        if value is not None:
            changes[field_name] = value
    return config.replace(**changes) if changes else config


@contextmanager
def _stdin(encoding: str):
    """Standard input split on LF only, like files opened by Sourcer."""
    stream = io.TextIOWrapper(sys.stdin.buffer, encoding=encoding, newline="\n")
    try:
        yield stream
    finally:
        # Leave sys.stdin.buffer open for the caller.
        stream.detach()


def _read_pairs(sourcer: Sourcer, path: str, encoding: str) -> List[Tuple[str, str]]:
    if path == "-":
        with _stdin(encoding) as stream:
            return sourcer.name_vars(stream, source_name="<stdin>")
    return sourcer.name_vars_file(path, encoding=encoding)


def _cmd_check(sourcer: Sourcer, args) -> int:
    status = 0
    for path in args.files:
        try:
            pairs = _read_pairs(sourcer, path, args.encoding)
        except FileNotFoundError:
            print(f"Error: File not found: {path}", file=sys.stderr)
            status = 1
            continue
        except SourcingError as e:
            # The error message already carries the file name.
            print(str(e), file=sys.stderr)
            status = 1
            continue
        print(f"{path}: ok ({len(pairs)} definitions)")
    return status


def _cmd_list(sourcer: Sourcer, args) -> int:
    try:
        pairs = _read_pairs(sourcer, args.file, args.encoding)
    except FileNotFoundError:
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1
    except SourcingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = format_pairs(pairs, args.format, sourcer.config)
    if output:
        print(output)
    return 0


def _cmd_run(sourcer: Sourcer, args) -> int:
    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        print("Error: No command given. Usage: envsource run FILE -- COMMAND [ARGS...]", file=sys.stderr)
        return 2

    env = dict(os.environ)
    try:
        if args.file == "-":
            with _stdin(args.encoding) as stream:
                sourcer.source(stream, environ=env, source_name="<stdin>")
        else:
            sourcer.source_file(args.file, environ=env, encoding=args.encoding)
    except FileNotFoundError:
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1
    except SourcingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug(f"Running {command[0]} with {len(env)} environment variables")
    try:
        completed = subprocess.run(command, env=env)
    except FileNotFoundError:
        print(f"Error: Command not found: {command[0]}", file=sys.stderr)
        return 127
    return completed.returncode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envsource",
        description="Parse and source dotenv-style environment definition files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  envsource check .env
  envsource list .env --format json
  envsource list .env --format shell > env.sh
  envsource run .env -- python manage.py runserver
        """
    )

    parser.add_argument(
        "--comment",
        type=str,
        default=None,
        help="Comment token (default: '#', or ENVSOURCE_COMMENT). Empty string disables comments."
    )
    parser.add_argument(
        "--quote",
        type=str,
        default=None,
        help="Quote token (default: '\"', or ENVSOURCE_QUOTE). Empty string disables quoting."
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help="Export keyword (default: 'export', or ENVSOURCE_EXPORT). Empty string disables it."
    )
    parser.add_argument(
        "--encoding",
        type=str,
        default="utf-8",
        help="Input file encoding (default: utf-8)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command_name", required=True)

    check_parser = subparsers.add_parser("check", help="Validate one or more files")
    check_parser.add_argument("files", nargs="+", help="Files to check, or '-' for stdin")

    list_parser = subparsers.add_parser("list", help="Print the definitions of a file")
    list_parser.add_argument("file", help="File to read, or '-' for stdin")
    list_parser.add_argument(
        "--format",
        choices=["env", "shell", "json"],
        default="env",
        help="Output format (default: env)"
    )

    run_parser = subparsers.add_parser("run", help="Run a command with a file's definitions set")
    run_parser.add_argument("file", help="File to source, or '-' for stdin")
    run_parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to run, after '--'")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    sourcer = Sourcer(_build_config(args))

    handlers = {
        "check": _cmd_check,
        "list": _cmd_list,
        "run": _cmd_run,
    }
    return handlers[args.command_name](sourcer, args)


if __name__ == "__main__":
    sys.exit(main())

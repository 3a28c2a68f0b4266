"""
Command-line front end for FileSeal.

Commands:
  lock PATH [-o OUT] [--mime TYPE] [--keep-name]  -> seal a file into a .fs container
  unlock CONTAINER [-o DIR] [--force]            -> restore the original file
  inspect CONTAINER                              -> show the header (no password needed)
  tui                                            -> start the Textual front end

The password is read from FILESEAL_PASSWORD if set, otherwise prompted for.
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from fileseal.core import files
from fileseal.core.container import inspect
from fileseal.core.exceptions import FileSealError
from fileseal.core.sealer import Phase, open_container, seal
from fileseal.frontend.cli.context import CliContext, build_context
from fileseal.frontend.cli.logging_config import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _print_phase(phase: Phase) -> None:
    print(phase.value, file=sys.stderr)


def _read_password(ctx: CliContext, confirm: bool) -> str:
    if ctx.password:
        return ctx.password
    password = getpass.getpass("Password: ")
    if confirm and getpass.getpass("Confirm password: ") != password:
        raise ValueError("Passwords do not match")
    return password


def cmd_lock(args, ctx: CliContext) -> int:
    data, name, mime_type = files.read_source(args.path, args.mime)
    password = _read_password(ctx, confirm=True)

    container = seal(data, name, mime_type, password, policy=ctx.policy, progress=_print_phase)

    if args.output:
        out_path = Path(args.output).expanduser()
    elif args.keep_name:
        out_path = ctx.output_dir / (name + files.CONTAINER_SUFFIX)
    else:
        out_path = ctx.output_dir / files.opaque_name()
    out_path.write_bytes(container)
    print(f"File encrypted: {out_path}")
    return EXIT_OK


def cmd_unlock(args, ctx: CliContext) -> int:
    container = Path(args.container).expanduser().read_bytes()
    # fail on a non-container before asking for a password
    inspect(container)
    password = _read_password(ctx, confirm=False)

    restored = open_container(container, password, progress=_print_phase)

    out_dir = Path(args.output).expanduser() if args.output else ctx.output_dir
    target = files.safe_output_path(out_dir, restored.filename, force=args.force)
    target.write_bytes(restored.data)
    print(f"File restored: {target} ({restored.mime_type}, {len(restored.data)} bytes)")
    return EXIT_OK


def cmd_inspect(args, ctx: CliContext) -> int:
    container = Path(args.container).expanduser().read_bytes()
    info = inspect(container)
    print(json.dumps(info.to_dict(), indent=2))
    return EXIT_OK


def cmd_tui(args, ctx: CliContext) -> int:
    # Imported lazily so the plain CLI does not pay for loading Textual.
    from fileseal.frontend.cli.app import FileSealApp

    FileSealApp(ctx).run()
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fileseal", description="Password-sealed file containers")
    parser.add_argument("--log-level", default=None, help="override FILESEAL_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    lock = sub.add_parser("lock", help="seal a file into a container")
    lock.add_argument("path")
    lock.add_argument("-o", "--output", default=None, help="container path (default: random name)")
    lock.add_argument("--mime", default=None, help="MIME type to record (default: guessed)")
    lock.add_argument("--keep-name", action="store_true", help="name the container after the file")
    lock.set_defaults(func=cmd_lock)

    unlock = sub.add_parser("unlock", help="restore the file from a container")
    unlock.add_argument("container")
    unlock.add_argument("-o", "--output", default=None, help="directory to restore into")
    unlock.add_argument("--force", action="store_true", help="overwrite an existing file")
    unlock.set_defaults(func=cmd_unlock)

    insp = sub.add_parser("inspect", help="show the unencrypted header")
    insp.add_argument("container")
    insp.set_defaults(func=cmd_inspect)

    tui = sub.add_parser("tui", help="start the interactive front end")
    tui.set_defaults(func=cmd_tui)
    return parser


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        ctx = build_context()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE
    configure_logging(args.log_level or ctx.log_level)

    try:
        return args.func(args, ctx)
    except FileSealError as e:
        logger.debug("operation failed: %r", e)
        print(f"Error: {e.user_message}", file=sys.stderr)
        return EXIT_FAILED
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())

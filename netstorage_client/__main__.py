"""
NetStorage client - command line entry point.

Thin wrapper that loads configuration, sets up logging and runs one client
operation, printing the response body.
"""

import argparse
import logging
import sys

from .client import NetStorage
from .config import load_config
from .errors import NetStorageError
from .logger import setup_logging
from .response import NetStorageResult

logger = logging.getLogger(__name__)

# command -> (help, positional arguments)
COMMANDS = {
    "dir": ("List a directory (XML)", ["path"]),
    "du": ("Show disk usage of a directory (XML)", ["path"]),
    "stat": ("Show metadata of a path (XML)", ["path"]),
    "download": ("Download a file", ["path", "destination?"]),
    "mkdir": ("Create a directory", ["path"]),
    "rmdir": ("Remove an empty directory", ["path"]),
    "mtime": ("Set modification time (epoch seconds)", ["path", "mtime"]),
    "delete": ("Delete a file or symlink", ["path"]),
    "quick-delete": ("Recursively delete a directory tree", ["path"]),
    "rename": ("Rename a file or symlink", ["target", "destination"]),
    "symlink": ("Create a symlink at destination pointing to target", ["target", "destination"]),
    "upload": ("Upload a local file", ["source", "destination"]),
}


def parse_args(argv=None):
    """Parse command-line arguments."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Path to configuration file")
    common.add_argument("--host", help="NetStorage hostname (e.g. example-nsu.akamaihd.net)")
    common.add_argument("--keyname", help="Upload account key name")
    common.add_argument("--key", help="Upload account key")
    common.add_argument("--no-ssl", action="store_true", help="Use http instead of https")
    common.add_argument("--timeout", type=int, help="Request timeout in seconds")
    common.add_argument("--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="netstorage",
        description="NetStorage HTTP API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  netstorage dir /123456/dir --config netstorage.ini
  netstorage upload ./report.txt /123456/dir/ --config netstorage.ini
  netstorage download /123456/dir/report.txt ./downloads --config netstorage.ini
  netstorage rename /123456/a.txt /123456/b.txt --host example-nsu.akamaihd.net --keyname k --key s
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, (help_text, positionals) in COMMANDS.items():
        sub = subparsers.add_parser(name, parents=[common], help=help_text)
        for arg in positionals:
            if arg.endswith("?"):
                sub.add_argument(arg[:-1], nargs="?", default="")
            elif arg == "mtime":
                sub.add_argument(arg, type=int)
            else:
                sub.add_argument(arg)

    return parser.parse_args(argv)


def run_command(client: NetStorage, args) -> NetStorageResult:
    """Map a parsed command onto the matching client method."""
    command = args.command
    if command == "download":
        return client.download(args.path, args.destination)
    if command == "mtime":
        return client.mtime(args.path, args.mtime)
    if command == "rename":
        return client.rename(args.target, args.destination)
    if command == "symlink":
        return client.symlink(args.target, args.destination)
    if command == "upload":
        return client.upload(args.source, args.destination)
    if command == "quick-delete":
        return client.quick_delete(args.path)
    return getattr(client, command)(args.path)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.command is None:
        print("Usage: netstorage <command> [options]")
        print()
        print("Run 'netstorage --help' for the list of commands.")
        return 1

    try:
        config = load_config(
            config_path=args.config,
            host=args.host,
            keyname=args.keyname,
            key=args.key,
            ssl=False if args.no_ssl else None,
            timeout=args.timeout,
            debug=args.verbose,
        )
    except ValueError as e:
        print(f"[ERROR] Configuration error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging)

    with NetStorage.from_config(config) as client:
        try:
            result = run_command(client, args)
        except NetStorageError as e:
            logger.error("%s failed: %s", args.command, e)
            print(f"[ERROR] {e}", file=sys.stderr)
            return 1

    print(result.body)
    if not result.ok:
        print(f"[ERROR] NetStorage returned HTTP {result.response.status_code}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)

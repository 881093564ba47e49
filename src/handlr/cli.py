"""
Command-line interface for handlr.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import argparse
import subprocess
import sys

from handlr.apps.system_apps import SystemApps
from handlr.apps_config import AppsConfig
from handlr.core.config_manager import HandlrConfig
from handlr.core.errors import Cancelled, ConfigError, HandlrError
from handlr.core.global_config import GlobalConfig
from handlr.core.logging import debug_print
from handlr.core.mime import MimeType
from handlr.core.utils import notify


def _add_selector_args(parser):
    parser.add_argument("--selector", help="Selector command used when several handlers are set")
    parser.add_argument("--enable-selector", action="store_true", help="Use the selector for this call")
    parser.add_argument("--disable-selector", action="store_true", help="Never use the selector for this call")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="handlr", description="Manage and use default applications")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("open", help="Open paths or URLs with their handlers")
    p.add_argument("paths", nargs="+")
    _add_selector_args(p)

    p = sub.add_parser("set", help="Set the default handler for a mime type")
    p.add_argument("mime")
    p.add_argument("handler")

    p = sub.add_parser("add", help="Add a handler for a mime type")
    p.add_argument("mime")
    p.add_argument("handler")

    p = sub.add_parser("unset", help="Remove the default handlers of a mime type")
    p.add_argument("mime")

    p = sub.add_parser("remove", help="Remove one handler of a mime type")
    p.add_argument("mime")
    p.add_argument("handler")

    p = sub.add_parser("launch", help="Launch the handler of a mime type with arguments")
    p.add_argument("mime")
    p.add_argument("args", nargs="*")
    _add_selector_args(p)

    p = sub.add_parser("get", help="Show the handler of a mime type")
    p.add_argument("mime")
    p.add_argument("--json", action="store_true")
    _add_selector_args(p)

    p = sub.add_parser("list", help="List associations")
    p.add_argument("--all", action="store_true", help="Include added associations and system apps")
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("mime", help="Show the mime type of paths")
    p.add_argument("paths", nargs="+")
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("autocomplete", help="Completion helpers")
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("-d", "--desktop-files", action="store_true")
    group.add_argument("-m", "--mimes", action="store_true")

    return parser


def _load_config() -> HandlrConfig:
    try:
        return HandlrConfig.load()
    except ConfigError as e:
        debug_print(f"{e}; using defaults", level=1, exc=e)
        return HandlrConfig()


def run(args) -> None:
    """Execute a parsed command."""
    if args.command == "autocomplete":
        if args.desktop_files:
            SystemApps.list_handlers()
        else:
            for mime, _ in sorted(AppsConfig.load(_load_config()).system_apps.items()):
                print(mime)
        return

    config = _load_config()
    apps = AppsConfig.load(config)

    selector = config.get_selector(getattr(args, "selector", None))
    use_selector = config.use_selector(
        getattr(args, "enable_selector", False),
        getattr(args, "disable_selector", False),
    )

    if args.command == "open":
        apps.open_paths(apps.resolve_paths(args.paths), selector, use_selector)
    elif args.command == "set":
        apps.set_handler(MimeType.parse_user_input(args.mime), args.handler)
    elif args.command == "add":
        apps.add_handler(MimeType.parse_user_input(args.mime), args.handler)
    elif args.command == "unset":
        apps.unset_handler(MimeType.parse_user_input(args.mime))
    elif args.command == "remove":
        apps.remove_handler(MimeType.parse_user_input(args.mime), args.handler)
    elif args.command == "launch":
        apps.launch_handler(MimeType.parse_user_input(args.mime), args.args, selector, use_selector)
    elif args.command == "get":
        print(apps.show_handler(MimeType.parse_user_input(args.mime), args.json, selector, use_selector))
    elif args.command == "list":
        print(apps.list_associations(args.all, args.json))
    elif args.command == "mime":
        print(apps.mime_table(apps.resolve_paths(args.paths), args.json))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        GlobalConfig.set_debug_level(args.verbose)

    try:
        run(args)
    except Cancelled:
        return 1
    except (HandlrError, OSError) as e:
        if sys.stdout.isatty():
            print(f"handlr: {e}", file=sys.stderr)
        else:
            try:
                notify("handlr error", str(e))
            except (OSError, subprocess.CalledProcessError):
                print(f"handlr: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

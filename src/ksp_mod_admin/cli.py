"""Command-line front end."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .constants import APP_VERSION
from .models import DownloadInfo, ModInfo
from .services import ckan_service, mod_service, mod_store, settings_store
from .util.errors import ConfigError, DownloadCancelled, ModAdminError
from .util.logging import configure_logging


log = logging.getLogger(__name__)


def _print_mod(mod: ModInfo) -> None:
    print(f"{mod.name} by {mod.author or '?'}")
    print(f"  url:      {mod.mod_url}")
    print(f"  site:     {mod.site_handler_name}")
    print(f"  version:  {mod.version or '-'}")
    date = mod.latest_date
    print(f"  changed:  {date.isoformat() if date else '-'}")
    if mod.local_path:
        print(f"  archive:  {mod.local_path}")


def _progress(received: int, total: int) -> None:
    if total:
        sys.stderr.write(f"\r  {received * 100 // total:3d}% ({received}/{total} bytes)")
    else:
        sys.stderr.write(f"\r  {received} bytes")
    sys.stderr.flush()


def _make_selector(pick: int | None):
    def select(options: Sequence[DownloadInfo]) -> DownloadInfo | None:
        if pick is not None:
            if not 1 <= pick <= len(options):
                raise ConfigError(f"--pick must be between 1 and {len(options)}")
            return options[pick - 1]
        if len(options) == 1:
            return options[0]
        for i, option in enumerate(options, start=1):
            print(f"  [{i}] {option.filename}")
        answer = input("Select download (empty to cancel): ").strip()
        if not answer:
            return None
        if not answer.isdigit() or not 1 <= int(answer) <= len(options):
            raise ConfigError(f"Invalid selection: {answer}")
        return options[int(answer) - 1]

    return select


def _status(msg: str) -> None:
    print(msg, file=sys.stderr)


def cmd_info(args: argparse.Namespace) -> int:
    _print_mod(mod_service.get_mod_info(args.url))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    if args.url:
        mod_url = mod_service.plain_mod_url(args.url)
        mod = mod_store.find_mod(mod_store.load_mods(), mod_url)
        if mod is None:
            mod = ModInfo(mod_url=mod_url, version=args.version)
        updated, new_mod = mod_service.check_for_update(mod)
        print(f"{new_mod.name}: {'update available' if updated else 'up to date'}"
              f" ({mod.version or '-'} -> {new_mod.version or '-'})")
        return 0

    updates = mod_service.check_all_updates()
    if not updates:
        print("All mods are up to date.")
    for old, new in updates:
        print(f"{old.name}: {old.version or '-'} -> {new.version or '-'}")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    mod = mod_service.handle_add(
        args.url,
        mod_name=args.name,
        install=args.install,
        select=_make_selector(args.pick),
        on_progress=_progress,
        on_status=_status,
    )
    sys.stderr.write("\n")
    _print_mod(mod)
    return 0


def cmd_update(args: argparse.Namespace) -> int:
    mods = mod_store.load_mods()
    if args.url:
        mod_url = mod_service.plain_mod_url(args.url)
        mods = [m for m in mods if m.mod_url == mod_url]
        if not mods:
            raise ConfigError(f"Mod not in selection: {args.url}")
    for mod in mods:
        new_mod = mod_service.update_mod(
            mod,
            install=args.install,
            select=_make_selector(args.pick),
            on_progress=_progress,
            on_status=_status,
        )
        if new_mod is None:
            print(f"{mod.name}: up to date")
        else:
            sys.stderr.write("\n")
            print(f"{mod.name}: updated to {new_mod.version or new_mod.latest_date}")
    return 0


def cmd_list(_args: argparse.Namespace) -> int:
    mods = mod_store.load_mods()
    if not mods:
        print("No mods added yet.")
    for mod in mods:
        _print_mod(mod)
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    mod_url = mod_service.plain_mod_url(args.url)
    if not mod_store.remove_mod(mod_url):
        raise ConfigError(f"Mod not in selection: {args.url}")
    print(f"Removed {mod_url}")
    return 0


def cmd_repos(_args: argparse.Namespace) -> int:
    settings = settings_store.load_settings()
    repos = ckan_service.fetch_repositories(
        settings.ckan_repository_list_url, timeout_s=settings.http_timeout_s
    )
    for repo in repos:
        print(repo)
    return 0


def cmd_paths(args: argparse.Namespace) -> int:
    if args.action == "add":
        settings = settings_store.add_game_path(args.path, select=not args.no_select)
    elif args.action == "select":
        settings = settings_store.select_game_path(args.path)
    else:
        settings = settings_store.load_settings()
    for path in settings.known_game_paths:
        marker = "*" if path == settings.selected_game_path else " "
        print(f"{marker} {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ksp-mod-admin",
        description="Check, download and install KSP mods hosted on GitHub.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("info", help="show mod info scraped from a URL")
    p.add_argument("url")
    p.set_defaults(func=cmd_info)

    p = sub.add_parser("check", help="check one URL or all stored mods for updates")
    p.add_argument("url", nargs="?")
    p.add_argument("--version", dest="version", default=None,
                   help="local version to compare against (URL not in selection)")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("add", help="download a mod and add it to the selection")
    p.add_argument("url")
    p.add_argument("--name", default=None, help="name to store the mod under")
    p.add_argument("--install", action="store_true", help="install into the selected KSP path")
    p.add_argument("--pick", type=int, default=None, help="1-based download option to take")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("update", help="download newer releases of stored mods")
    p.add_argument("url", nargs="?")
    p.add_argument("--install", action="store_true")
    p.add_argument("--pick", type=int, default=None)
    p.set_defaults(func=cmd_update)

    p = sub.add_parser("list", help="list stored mods")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("remove", help="remove a mod from the selection")
    p.add_argument("url")
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser("repos", help="list known CKAN repositories")
    p.set_defaults(func=cmd_repos)

    p = sub.add_parser("paths", help="manage known KSP install folders")
    p.add_argument("action", choices=("list", "add", "select"), nargs="?", default="list")
    p.add_argument("path", nargs="?")
    p.add_argument("--no-select", action="store_true", help="add without selecting")
    p.set_defaults(func=cmd_paths)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "action", None) in ("add", "select") and not args.path:
        parser.error(f"paths {args.action} requires a folder")

    configure_logging(logging.DEBUG if args.verbose else logging.INFO, console=args.verbose)
    try:
        return args.func(args)
    except DownloadCancelled as e:
        print(str(e), file=sys.stderr)
        return 1
    except ModAdminError as e:
        log.error("%s", e)
        # with -v the console log handler already showed it
        if not args.verbose:
            print(f"Error: {e}", file=sys.stderr)
        return 1

"""Command-line entry point."""

import argparse
from typing import List, Optional

from .commands import cmd_add, cmd_init, cmd_status
from .config import load_config
from .errors import StriborError
from .models import DEFAULT_CATEGORY
from .utils import PROG, die


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog=PROG, description="Git-based bookmark manager")
    ap.add_argument("--config", help="config file (default is $HOME/.stribor.yaml)")
    ap.add_argument(
        "--dirHome", "--dir-home", dest="dir_home", help="Base directory, typically your home"
    )
    ap.add_argument(
        "--dirName",
        "--dir-name",
        dest="dir_name",
        help="Name of the directory to save your bookmarks in (default: bookmarks)",
    )
    sp = ap.add_subparsers(dest="cmd")

    p = sp.add_parser("init", help="Initialize a new bookmark directory")
    p.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Delete existing folder and start over (make sure you know what you are doing)",
    )

    p = sp.add_parser("add", help="Add new bookmark")
    p.add_argument("url")
    p.add_argument("-c", "--category", default=DEFAULT_CATEGORY, help="Bookmark category")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config, args.dir_home, args.dir_name)
        if args.cmd == "init":
            cmd_init(config, force=args.force)
        elif args.cmd == "add":
            cmd_add(config, args.url, args.category)
        else:
            cmd_status(config)
    except StriborError as exc:
        die(str(exc), code=exc.exit_code)
    return 0

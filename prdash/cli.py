"""prdash CLI: GitHub pull request dashboard for the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import DashboardConfig, get_log_path, load_config, parse_interval
from .exceptions import PrDashError
from .models import PanelKind

logger = logging.getLogger(__name__)

START_TABS = {
    "prs": PanelKind.MY_PRS,
    "requests": PanelKind.MY_REQUESTS,
    "all": PanelKind.ALL_PRS,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prdash",
        description="Browse your GitHub pull requests and review requests",
    )
    parser.add_argument(
        "tab", nargs="?", choices=sorted(START_TABS), default="prs",
        help="Tab to open on start (default: prs)",
    )
    parser.add_argument("-d", "--include-drafts", action="store_true", help="Include draft PRs")
    parser.add_argument("-c", "--include-closed", action="store_true", help="Include closed PRs")
    parser.add_argument(
        "-w", "--watch", metavar="INTERVAL",
        help="Refresh the active tab every INTERVAL (e.g. 90, 30s, 5m)",
    )
    parser.add_argument(
        "-f", "--config", metavar="PATH",
        help="Config file (default: $XDG_CONFIG_HOME/prdash/config.yaml)",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args: argparse.Namespace) -> DashboardConfig:
    """Load the config file, then apply command-line overrides."""
    if args.config:
        config = load_config(Path(args.config), required=True)
    else:
        config = load_config()
    if args.include_drafts:
        config.include_drafts = True
    if args.include_closed:
        config.include_closed = True
    if args.watch:
        config.interval = parse_interval(args.watch)
    return config


def setup_logging(debug: bool = False) -> Path:
    log_path = get_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_path),
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return log_path


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    try:
        config = resolve_config(args)
    except PrDashError as e:
        print(f"ERROR: failed to load options: {e}", file=sys.stderr)
        return 2

    from .app import PRDashApp

    try:
        app = PRDashApp(config, start_tab=START_TABS[args.tab])
        app.run()
    except Exception:
        logger.exception("Dashboard crashed")
        raise
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

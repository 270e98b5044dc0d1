"""
cli.py
------
Loads the launch list once, then prints the (optionally filtered) list
and the detail panel for a selected flight.

    launchboard --query falcon --select 1
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from launchboard.config import load_settings, setup_logging
from launchboard.fetch import Aggregator
from launchboard.models import LaunchSet
from launchboard.state import LaunchBoard
from launchboard.viewmodel import UNKNOWN, ViewFields, date_only, safe_get

console = Console()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="launchboard", description="Browse past and upcoming SpaceX launches.")
    p.add_argument("-q", "--query", default="", help="show launches whose mission or rocket name contains this text")
    p.add_argument("-s", "--select", type=int, metavar="FLIGHT", help="show details for this flight number")
    p.add_argument("--base-url", help="API root (default: $LAUNCHBOARD_BASE_URL or the public v3 API)")
    p.add_argument("--timeout", type=float, help="per-request timeout in seconds")
    return p


def launch_table(launches: LaunchSet) -> Table:
    table = Table(title=f"Launches ({len(launches)})")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Mission")
    table.add_column("Date")
    table.add_column("Site")
    # newest first, as the list view has always shown them
    for r in reversed(launches):
        table.add_row(
            str(r.flight_number),
            escape(r.mission_name),
            date_only(r),
            escape(safe_get(r, "launch_site", "site_name_long", default=UNKNOWN)),
        )
    return table


def detail_panel(fields: ViewFields) -> Panel:
    lines = [
        f"{fields.date_only} • {fields.site_name}",
        f"Rocket : {fields.rocket_name}",
        f"Payload : {fields.payload_text}",
        f"Launch Success: {fields.success_label}",
        f"Video Link: {fields.video_link or UNKNOWN}",
        f"Wikipedia Link: {fields.wikipedia or UNKNOWN}",
        f"Details: {fields.details}",
    ]
    return Panel(escape("\n".join(lines)), title=f"[bold]{escape(fields.mission_name)}[/bold]")


def run(argv: Optional[Sequence[str]] = None, board: Optional[LaunchBoard] = None) -> int:
    args = build_parser().parse_args(argv)
    if board is None:
        settings = load_settings().with_overrides(base_url=args.base_url, timeout=args.timeout)
        setup_logging(settings)
        board = LaunchBoard(Aggregator(settings))

    with console.status("Loading..."):
        outcome = asyncio.run(board.start())

    if not outcome.ok:
        console.print(f"[red]⛔ {escape(board.state.error or 'Launch load was cancelled')}[/red]")
        return 1
    if board.state.warning:
        console.print(f"[yellow]Warning:[/yellow] {escape(board.state.warning)}")

    board.set_query(args.query)
    console.print(launch_table(board.visible()))

    if args.select is not None:
        board.select(args.select)
        fields = board.details()
        if fields is None:
            console.print(f"No launch with flight number {args.select}.")
        else:
            console.print(detail_panel(fields))
    return 0


def main() -> None:
    try:
        code = run()
    except Exception as e:
        logging.exception("Unexpected failure: %s", e)
        console.print(f"[red]Unexpected error[/red]: {e}")
        raise SystemExit(1)
    raise SystemExit(code)


if __name__ == "__main__":
    main()

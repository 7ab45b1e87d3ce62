from datetime import datetime

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from slog import __version__
from slog.config import load_settings, save_setting
from slog.errors import SlogError
from slog.store import LogStore
from slog.timeline import parse_shift, replay, replay_active
from slog.writer import append


class _MessageGroup(click.Group):
    """Treat `slog "some message"` as `slog add "some message"`."""

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            return "add", self.get_command(ctx, "add"), args
        return super().resolve_command(ctx, args)


def _fail(message):
    Console(stderr=True).print(f"[red]{escape(str(message))}[/red]")
    raise SystemExit(1)


@click.group(cls=_MessageGroup)
@click.version_option(version=__version__)
def main():
    """slog: timestamp what happens during a stream.

    \b
    Examples:
        slog start
        slog "first boss down"
        slog stamp --shift 01:30
    """
    load_settings()


@main.command()
def start():
    """Start logging for a new stream."""
    try:
        log = LogStore().start()
    except SlogError as e:
        _fail(e)
    click.echo(f"Created stream log at {log.path}")


@main.command()
@click.argument("message")
def add(message):
    """Append MESSAGE to the current stream log."""
    try:
        append(message)
    except SlogError as e:
        _fail(e)


@main.command()
@click.option("-s", "--shift", default=None,
              help='Shift the timestamps forward by this much, as "HH:MM:SS". '
                   "Hours and minutes can be skipped.")
@click.option("-l", "--log", "log_id", type=int, default=None,
              help="Replay this log instead of the latest one.")
def stamp(shift, log_id):
    """Print out timestamps for a stream archive."""
    try:
        if log_id is None:
            lines = replay_active(shift)
        else:
            store = LogStore()
            log = store.get(log_id)
            if log is None:
                _fail(f"No stream log {log_id} in {store.resolve_root()}")
            lines = replay(log, parse_shift(shift) or 0)
        for line in lines:
            click.echo(line)
    except SlogError as e:
        _fail(e)


@main.command("list")
def list_logs():
    """List stream logs, newest last."""
    console = Console()
    store = LogStore()
    try:
        logs = store.logs()
    except SlogError as e:
        _fail(e)

    if not logs:
        console.print(f"[dim]No stream logs in {escape(str(store.resolve_root()))}.[/dim]")
        return

    active = logs[-1]
    table = Table(title=f"Stream logs in {escape(str(store.resolve_root()))}")
    table.add_column("ID", style="bold cyan")
    table.add_column("Started", style="dim")
    table.add_column("Entries", justify="right")
    table.add_column("")

    for log in logs:
        started = datetime.fromtimestamp(log.timestamp).strftime("%Y-%m-%d %H:%M")
        try:
            entries = sum(1 for line in replay(log))
        except SlogError:
            entries = "?"
        table.add_row(
            str(log.timestamp),
            started,
            str(entries),
            "[green]active[/green]" if log is active else "",
        )

    console.print(table)


@main.command()
@click.argument("key")
@click.argument("value")
def config(key, value):
    """Save a setting. Stored in ~/.slog/settings.

    Example:
        slog config SLOG_DIR ~/Videos/stream-logs
    """
    try:
        path = save_setting(key, value)
    except SlogError as e:
        _fail(e)
    click.echo(f"Saved {key} to {path}")

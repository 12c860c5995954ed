"""
Command-line interface for lab administration.

Provides commands for listing, adding, editing, toggling and removing labs,
plus the web server and configuration helpers.
"""

import logging
import sys
from pathlib import Path

import click

from labadmin import __version__
from labadmin.core.config import (
    DEFAULT_CONFIG_FILE,
    Config,
    load_config,
    save_config,
)
from labadmin.core.models import Lab, LabForm, parse_capacity
from labadmin.core.notify import (
    Notification,
    NotificationHandler,
    NotificationLevel,
    Notifier,
)
from labadmin.core.view import LabAdminView
from labadmin.store.base import get_store


class EchoNotificationHandler(NotificationHandler):
    """Handler that prints notifications to the terminal."""

    def send(self, notification: Notification) -> None:
        if notification.level == NotificationLevel.ERROR:
            click.echo(f"Error: {notification.message}", err=True)
        else:
            click.echo(notification.message)


def _get_view(ctx: click.Context) -> LabAdminView:
    """Get or create the admin view from context."""
    if "view" not in ctx.obj:
        config: Config = ctx.obj["config"]
        try:
            store = get_store(config)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        notifier = Notifier([EchoNotificationHandler()])
        ctx.obj["view"] = LabAdminView(store, notifier=notifier)
    return ctx.obj["view"]


def _load_labs(ctx: click.Context) -> LabAdminView:
    """Fetch the lab list, exiting if the store is unreachable."""
    view = _get_view(ctx)
    if not view.fetch_labs():
        sys.exit(1)
    return view


def _require_lab(view: LabAdminView, lab_id: str) -> Lab:
    lab = view.find_lab(lab_id)
    if not lab:
        click.echo(f"Error: Lab '{lab_id}' not found", err=True)
        sys.exit(1)
    return lab


@click.group()
@click.version_option(version=__version__, prog_name="labadmin")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "-c", "--config", "config_path", type=click.Path(exists=True, path_type=Path),
    help="Path to config file"
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Lab Administration - Manage lab rooms and their facilities."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = load_config(config_path)

    level = "DEBUG" if verbose else ctx.obj["config"].log_level
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# --- Lab Commands ---

@main.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List all labs by building and name."""
    verbose = ctx.obj.get("verbose", False)
    view = _load_labs(ctx)

    if not view.labs:
        click.echo("No labs found. Use 'labadmin add <name> <building>' to add one.")
        return

    click.echo(f"{'ID':<38} {'NAME':<20} {'BUILDING':<15} {'CAPACITY':<10} {'FACILITIES':<16} {'STATUS':<10}")
    click.echo("-" * 112)

    for row in view.rows():
        facilities = ", ".join(row.cells["facilities"]) or "-"
        click.echo(
            f"{row.lab.id:<38} {row.cells['name']:<20} {row.cells['building']:<15} "
            f"{row.cells['capacity']:<10} {facilities:<16} {row.cells['status']:<10}"
        )

    if verbose:
        click.echo(f"\n{len(view.labs)} lab(s)")


@main.command("add")
@click.argument("name")
@click.argument("building")
@click.option("--capacity", "-n", default="30", help="Seats (default: 30)")
@click.option("--no-projector", is_flag=True, help="Lab has no projector")
@click.option("--no-ac", is_flag=True, help="Lab has no air conditioning")
@click.pass_context
def add_cmd(
    ctx: click.Context,
    name: str,
    building: str,
    capacity: str,
    no_projector: bool,
    no_ac: bool,
) -> None:
    """Add a new lab. New labs start out available."""
    view = _get_view(ctx)
    view.open_create()

    form = {
        "name": name,
        "building": building,
        "capacity": capacity,
        "has_projector": None if no_projector else "on",
        "has_ac": None if no_ac else "on",
    }
    if not view.submit(form):
        sys.exit(1)


@main.command("edit")
@click.argument("lab_id")
@click.option("--name", help="Set lab name")
@click.option("--building", "-b", help="Set building")
@click.option("--capacity", "-n", help="Set number of seats")
@click.option("--projector/--no-projector", default=None, help="Set projector flag")
@click.option("--ac/--no-ac", default=None, help="Set air conditioning flag")
@click.pass_context
def edit_cmd(
    ctx: click.Context,
    lab_id: str,
    name: str | None,
    building: str | None,
    capacity: str | None,
    projector: bool | None,
    ac: bool | None,
) -> None:
    """Edit a lab's details. Availability is not changed."""
    view = _load_labs(ctx)
    lab = _require_lab(view, lab_id)

    if all(v is None for v in [name, building, capacity, projector, ac]):
        click.echo("No changes specified. Use --name, --building, --capacity, --projector or --ac.")
        return

    # Unspecified fields keep their current values; the save is still a full edit
    current = LabForm.from_lab(lab)
    form = LabForm(
        name=name if name is not None else current.name,
        building=building if building is not None else current.building,
        capacity=parse_capacity(capacity) if capacity is not None else current.capacity,
        has_projector=current.has_projector if projector is None else projector,
        has_ac=current.has_ac if ac is None else ac,
    )

    view.open_edit(lab)
    if not view.submit(form):
        sys.exit(1)


@main.command("toggle")
@click.argument("lab_id")
@click.pass_context
def toggle_cmd(ctx: click.Context, lab_id: str) -> None:
    """Switch a lab between Available and In Use."""
    view = _load_labs(ctx)
    lab = _require_lab(view, lab_id)

    if not view.toggle_availability(lab.id, lab.is_available):
        sys.exit(1)

    updated = view.find_lab(lab.id)
    if updated:
        click.echo(f"{updated.name}: {updated.status_label}")


@main.command("remove")
@click.argument("lab_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def remove_cmd(ctx: click.Context, lab_id: str, yes: bool) -> None:
    """Remove a lab."""
    view = _load_labs(ctx)
    lab = _require_lab(view, lab_id)

    def confirm(message: str) -> bool:
        if not yes:
            click.confirm(f"{message} ({lab.name}, {lab.building})", abort=True)
        return True

    if not view.delete(lab.id, confirm=confirm):
        sys.exit(1)


# --- Web Server ---

@main.command("web")
@click.option("--host", "-h", help="Address to listen on")
@click.option("--port", "-p", type=int, help="Port to listen on")
@click.option("--debug", is_flag=True, help="Enable Flask debug mode")
@click.pass_context
def web_cmd(ctx: click.Context, host: str | None, port: int | None, debug: bool) -> None:
    """Run the lab management web interface."""
    from labadmin.web import events
    from labadmin.web.app import create_app

    config: Config = ctx.obj["config"]
    try:
        app = create_app(config)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    host = host or config.web.host
    port = port or config.web.port
    click.echo(f"Serving lab management on http://{host}:{port}/")
    events.get_socketio(app).run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)


# --- Configuration Commands ---

@main.group("config")
def config_group() -> None:
    """Show or initialize configuration."""
    pass


@config_group.command("show")
@click.pass_context
def config_show_cmd(ctx: click.Context) -> None:
    """Show the effective configuration."""
    config: Config = ctx.obj["config"]
    data = config.to_dict()
    if data["store"]["api_key"]:
        data["store"]["api_key"] = data["store"]["api_key"][:4] + "..."

    click.echo(f"Store backend: {data['store']['backend']}")
    click.echo(f"Store URL:     {data['store']['url'] or '-'}")
    click.echo(f"API key:       {data['store']['api_key'] or '-'}")
    click.echo(f"Table:         {data['store']['table']}")
    click.echo(f"Database:      {data['database_path']}")
    click.echo(f"Web:           {data['web']['host']}:{data['web']['port']}")
    click.echo(f"Log level:     {data['log_level']}")


@config_group.command("init")
@click.option(
    "--path", type=click.Path(path_type=Path), default=DEFAULT_CONFIG_FILE,
    show_default=True, help="Where to write the config file"
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def config_init_cmd(ctx: click.Context, path: Path, force: bool) -> None:
    """Write the current configuration to a YAML file."""
    if path.exists() and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    save_config(ctx.obj["config"], path)
    click.echo(f"Wrote configuration to {path}")


if __name__ == "__main__":
    main()

"""RFL database tools - Mii database editor."""
from __future__ import annotations

import functools
from pathlib import Path

import click

from rfl_core.errors import FormatError
from rfl_core.ids import mii_id
from rfl_core.mii import is_mii, mii_name, record_hex
from rfl_core.protocol import DEFAULT_RENDER_TYPE, DEFAULT_RENDER_WIDTH, MII_SLOTS, STUDIO_IMAGE_URL

from rfl_edit.database import Database, parse_database
from rfl_edit.inventory import write_inventory
from rfl_edit.studio import studio_code, studio_fields, studio_url

SLOT = click.IntRange(0, MII_SLOTS - 1)


def load_database(path: Path) -> Database:
    result = parse_database(Path(path).read_bytes())
    if isinstance(result, FormatError):
        raise ValueError(f"{path}: {result}")
    return result


def save_database(db: Database, path: Path) -> None:
    Path(path).write_bytes(db.to_bytes())
    click.echo(f"PASS: Database written to {path}")


def fail_closed(fn):
    """Turn any error into a single FATAL line and exit status 1."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            # Avoid stack traces for malformed inputs and automated pipelines.
            click.echo(f"FATAL: {e}")
            raise SystemExit(1)

    return wrapper


def out_option(fn):
    return click.option(
        "-o", "--out", type=click.Path(dir_okay=False, path_type=Path), default=None,
        help="Write the result here instead of rewriting DB in place",
    )(fn)


def studio_options(fn):
    fn = click.option("--base-url", default=STUDIO_IMAGE_URL, envvar="RFL_STUDIO_URL", show_default=True)(fn)
    fn = click.option("--width", type=int, default=DEFAULT_RENDER_WIDTH, envvar="RFL_STUDIO_WIDTH", show_default=True)(fn)
    fn = click.option("--type", "render_type", default=DEFAULT_RENDER_TYPE, envvar="RFL_STUDIO_TYPE", show_default=True)(fn)
    return fn


DB_ARG = click.argument("db", type=click.Path(exists=True, dir_okay=False, path_type=Path))


@click.group()
def main():
    """Inspect and edit RFL_DB.dat Mii databases."""


@main.command("new")
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite OUT if it exists")
@fail_closed
def new_cmd(out: Path, force: bool):
    """Write an empty database."""
    if out.exists() and not force:
        raise ValueError(f"{out} exists, use --force to overwrite")
    save_database(Database.new(), out)


@main.command("ls")
@DB_ARG
@click.option("--all", "show_all", is_flag=True, help="Include empty slots")
@click.option("--find", "needle", default=None, help="Only slots whose name contains this text")
@fail_closed
def ls_cmd(db: Path, show_all: bool, needle: str | None):
    """List Mii slots."""
    database = load_database(db)
    slots = set(database.find(needle)) if needle is not None else None
    for slot, record in enumerate(database):
        if slots is not None and slot not in slots:
            continue
        if is_mii(record):
            click.echo(f"{slot:>3}  {mii_name(record)}  {mii_id(record)}")
        elif show_all and slots is None:
            click.echo(f"{slot:>3}  (empty)")
    click.echo(f"Miis: {len(database.valid_slots())}/{MII_SLOTS}")


@main.command("show")
@DB_ARG
@click.argument("slot", type=SLOT)
@studio_options
@fail_closed
def show_cmd(db: Path, slot: int, render_type: str, width: int, base_url: str):
    """Show one slot: name, raw data and Studio conversion."""
    record = load_database(db)[slot]
    if not is_mii(record):
        click.echo(f"Slot {slot}: empty")
        return
    click.echo(f"Slot {slot}: {mii_name(record)}")
    click.echo(f"  mii_id: {mii_id(record)}")
    click.echo(f"  data:   {record_hex(record)}")
    click.echo(f"  studio: {studio_code(record)}")
    click.echo(f"  url:    {studio_url(record, render_type, width, base_url)}")
    for name, value in studio_fields(record).items():
        click.echo(f"    {name:<18} {value}")


@main.command("export")
@DB_ARG
@click.argument("slot", type=SLOT)
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
@fail_closed
def export_cmd(db: Path, slot: int, out: Path):
    """Save one slot as a raw 74-byte .mii file."""
    record = load_database(db).export_record(slot)
    if not is_mii(record):
        click.echo(f"WARNING: Slot {slot} is empty; exporting zero bytes", err=True)
    out.write_bytes(record)
    click.echo(f"PASS: Slot {slot} exported to {out}")


@main.command("import")
@DB_ARG
@click.argument("slot", type=SLOT)
@click.argument("mii", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@out_option
@fail_closed
def import_cmd(db: Path, slot: int, mii: Path, out: Path | None):
    """Replace one slot with the contents of a .mii file."""
    database = load_database(db)
    err = database.import_record(slot, mii.read_bytes())
    if err is not None:
        raise ValueError(f"{mii}: {err}")
    save_database(database, out or db)


@main.command("clear")
@DB_ARG
@click.argument("slot", type=SLOT)
@out_option
@fail_closed
def clear_cmd(db: Path, slot: int, out: Path | None):
    """Empty one slot."""
    database = load_database(db)
    database.clear(slot)
    save_database(database, out or db)


@main.command("swap")
@DB_ARG
@click.argument("a", type=SLOT)
@click.argument("b", type=SLOT)
@out_option
@fail_closed
def swap_cmd(db: Path, a: int, b: int, out: Path | None):
    """Exchange two slots."""
    database = load_database(db)
    database.swap(a, b)
    save_database(database, out or db)


@main.command("clean")
@DB_ARG
@out_option
@fail_closed
def clean_cmd(db: Path, out: Path | None):
    """Move every Mii to the front, closing gaps."""
    database = load_database(db)
    database.clean()
    save_database(database, out or db)


@main.command("studio")
@DB_ARG
@click.argument("slot", type=SLOT)
@studio_options
@fail_closed
def studio_cmd(db: Path, slot: int, render_type: str, width: int, base_url: str):
    """Print the Studio render URL for one slot."""
    url = studio_url(load_database(db)[slot], render_type, width, base_url)
    if url is None:
        raise ValueError(f"Slot {slot} is empty")
    click.echo(url)


@main.command("inventory")
@DB_ARG
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--valid-only", is_flag=True, help="Skip empty slots")
@fail_closed
def inventory_cmd(db: Path, out: Path, valid_only: bool):
    """Write a parquet table describing every slot."""
    n = write_inventory(load_database(db), out, include_empty=not valid_only)
    click.echo(f"PASS: Inventory written to {out}")
    click.echo(f"  Rows: {n}")


if __name__ == "__main__":
    main()

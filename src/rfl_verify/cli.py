import json
from pathlib import Path
import click
from .logic import verify_database

@click.group()
def main():
    pass

@main.command("db")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def db_cmd(path: Path):
    result = verify_database(path)
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

if __name__ == "__main__":
    main()

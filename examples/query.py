"""Query a slot inventory - find Miis by name and print their render URLs."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb

from rfl_edit.studio import render_url


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python query.py <inventory.parquet> <name>")
        print("Example: python query.py slots.parquet mario")
        sys.exit(1)

    inventory = Path(sys.argv[1])
    name = sys.argv[2]

    con = duckdb.connect(":memory:")
    con.execute("CREATE VIEW slots AS SELECT * FROM read_parquet(?)", [str(inventory)])

    sql = """
    SELECT slot, name, mii_id, studio
    FROM slots
    WHERE valid AND lower(name) LIKE '%' || lower(?) || '%'
    ORDER BY slot
    """

    print(f"--- Miis matching: {name} ---\n")

    df = con.execute(sql, [name]).fetchdf()
    if df.empty:
        print("No Miis found.")
        return

    for _, row in df.iterrows():
        print(f"SLOT {row['slot']}: {row['name']}")
        print(f"  Id: {row['mii_id']}")
        print(f"  Render: {render_url(row['studio'])}")
        print()


if __name__ == "__main__":
    main()

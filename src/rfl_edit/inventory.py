from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from rfl_core.ids import content_hash, mii_id
from rfl_core.mii import is_mii, mii_name

from .database import Database
from .studio import studio_code

INVENTORY_SCHEMA = pa.schema(
    [
        ("slot", pa.int32()),
        ("valid", pa.bool_()),
        ("name", pa.string()),
        ("mii_id", pa.string()),
        ("content_hash", pa.string()),
        ("studio", pa.string()),
    ]
)


def inventory_rows(db: Database, include_empty: bool = True) -> list[dict]:
    """One row per slot. Empty slots carry no id, hash or studio code."""
    rows: list[dict] = []
    for slot, record in enumerate(db):
        valid = is_mii(record)
        if not valid and not include_empty:
            continue
        rows.append(
            {
                "slot": slot,
                "valid": valid,
                "name": mii_name(record),
                "mii_id": mii_id(record) if valid else None,
                "content_hash": content_hash(record) if valid else None,
                "studio": studio_code(record),
            }
        )
    return rows


def inventory_frame(db: Database, include_empty: bool = True) -> pd.DataFrame:
    rows = inventory_rows(db, include_empty=include_empty)
    return pd.DataFrame(rows, columns=INVENTORY_SCHEMA.names)


def write_inventory(db: Database, out_path: Path, include_empty: bool = True) -> int:
    """Write the slot inventory as parquet. Returns the number of rows written."""
    df = inventory_frame(db, include_empty=include_empty)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pandas(df, schema=INVENTORY_SCHEMA, preserve_index=False)
    pq.write_table(table, Path(out_path))
    return len(df)

#!/usr/bin/env python3
"""Create the megawatt display DuckDB database, optionally with demo rows.

Usage:
    python scripts/build_duckdb.py                   # schema only, data/megadisp.duckdb
    python scripts/build_duckdb.py --db other.duckdb --seed
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

import duckdb

SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT))

from megadisp.db.schema import load_schema  # noqa: E402
from megadisp.readings.blocks import current_block_no  # noqa: E402

DB_FILE = Path("data/megadisp.duckdb")

SEED_TABLES = (
    "megadisp_source",
    "megawattdisplay_extended",
    "abt_flow",
    "block_data_dc",
    "block_data_sg",
)


def reset_tables(connection: duckdb.DuckDBPyConnection) -> None:
    """Clear existing data to avoid duplicate rows on rebuild."""
    for table in SEED_TABLES:
        connection.execute(f"DELETE FROM {table}")


def seed_demo_rows(connection: duckdb.DuckDBPyConnection, now: datetime) -> None:
    """Insert one row per reading table; ``megadisp_source`` stays empty."""
    connection.execute(
        "INSERT INTO abt_flow (UNIT_7, UNIT_8, BLOCK_NO, FREQUENCY, ACT_SENT_OUT, "
        "GT_7, GT_8, ST_7, ST_8, SG_SCH, DC_SCH) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        [300, 250, 5, 50.01, 540, 10, 8, 2, 1, 12.5, 3.2],
    )
    connection.execute(
        "INSERT INTO megawattdisplay_extended (UNIT7, UNIT8, WBSETCL, FREQUENCY, INSERTION_TIME) "
        "VALUES (?, ?, ?, ?, ?)",
        [280.5, 231.25, 480.0, 49.98, now],
    )
    block = current_block_no(now)
    connection.execute("INSERT INTO block_data_dc (BLOCK_NO, DCON) VALUES (?, ?)", [block, "520.00"])
    connection.execute("INSERT INTO block_data_sg (BLOCK_NO, SGON) VALUES (?, ?)", [block, "505.00"])


def build_database(db_file: Path, seed: bool = False) -> None:
    db_file.parent.mkdir(parents=True, exist_ok=True)
    connection = duckdb.connect(str(db_file))
    try:
        load_schema(connection)
        if seed:
            connection.execute("BEGIN")
            try:
                reset_tables(connection)
                seed_demo_rows(connection, datetime.now())
                connection.execute("COMMIT")
            except Exception:
                connection.execute("ROLLBACK")
                raise

        print("\nDatabase build complete")
        for table in SEED_TABLES:
            count = connection.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
            print(f"  {table:<26}: {count:,}")
        print(f"  {'DuckDB file':<26}: {db_file}")
    finally:
        connection.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--db", type=Path, default=DB_FILE, help="DuckDB file to create")
    parser.add_argument("--seed", action="store_true", help="Insert demonstration rows")
    args = parser.parse_args(argv)
    build_database(args.db, seed=args.seed)


if __name__ == "__main__":
    main()

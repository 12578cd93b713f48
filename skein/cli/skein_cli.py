#!/usr/bin/env python3
"""
Skein CLI - command line access to a knot database

Usage:
    skein init
    skein seed
    skein import-csv knots.csv
    skein export-csv out.csv | export-json out.json
    skein show 3_1
    skein list | stats | duplicates
    skein invariants "[1,-2,3,-1,2,-3]"
    skein compare "[1,-2,3,-1,2,-3]" "[2,-3,1,-2,3,-1]"
    skein delete 3_1

The database path comes from --db or SKEIN_DB_PATH.
"""

import argparse
import sys
from typing import List, Optional

from skein import config
from skein.canonical import canonical_gauss
from skein.equivalence import is_amphichiral, is_equivalent, is_isotopic
from skein.errors import SkeinError
from skein.gauss_code import deserialise_gauss, serialise_gauss
from skein.import_export import export_csv, export_json, import_csv, import_knot_table
from skein.invariants import crossing_number, gauss_hash, writhe
from skein.records import KnotRecord
from skein.reidemeister import simplify_r1
from skein.storage import SkeinDB


def display_record(record: KnotRecord):
    print()
    print(f"Knot: {record.name}")
    print("=" * 60)
    print(f"  Gauss code: {serialise_gauss(record.gauss_code)}")
    print(f"  Crossings:  {record.crossing_number}")
    print(f"  Writhe:     {record.writhe}")
    print(f"  Hash:       {record.gauss_hash}")
    if record.jones_polynomial:
        print(f"  Jones:      {record.jones_polynomial}")
    for key in sorted(record.metadata):
        print(f"  {key}: {record.metadata[key]}")
    print(f"  Created:    {record.created_at.isoformat()}")
    print(f"  Updated:    {record.updated_at.isoformat()}")
    print("=" * 60)


def cmd_init(db: SkeinDB):
    print(f"[OK] Database ready: {db.path} ({len(db)} knots)")
    return 0


def cmd_seed(db: SkeinDB):
    added = import_knot_table(db)
    print(f"[OK] Added {added} knots from the prime knot table")
    return 0


def cmd_import_csv(db: SkeinDB, path: str):
    count = import_csv(db, path)
    print(f"[OK] Imported {count} knots from {path}")
    return 0


def cmd_export(db: SkeinDB, path: str, fmt: str):
    count = export_json(db, path) if fmt == "json" else export_csv(db, path)
    print(f"[OK] Exported {count} knots to {path}")
    return 0


def cmd_show(db: SkeinDB, name: str):
    record = db.fetch(name)
    if record is None:
        print(f"[FAIL] Knot '{name}' not found")
        return 1
    display_record(record)
    return 0


def cmd_list(db: SkeinDB, limit: int):
    records = db.list_knots(limit=limit)
    if not records:
        print("No knots stored.")
        return 0
    for r in records:
        print(f"{r.name:<20} {r.crossing_number:>3} crossings  writhe {r.writhe:>3}  {serialise_gauss(r.gauss_code)}")
    return 0


def cmd_stats(db: SkeinDB):
    stats = db.statistics()
    print()
    print("Skein Database Statistics")
    print("=" * 60)
    print(f"Total knots: {stats['total_knots']}")
    print(f"Crossings:   {stats['min_crossings']} .. {stats['max_crossings']}")
    for n, count in stats["crossing_distribution"].items():
        print(f"  {n:>3} crossings: {count}")
    print("=" * 60)
    return 0


def cmd_duplicates(db: SkeinDB):
    groups = db.duplicates()
    if not groups:
        print("No duplicate diagrams.")
    for group in groups:
        print(f"{group[0].gauss_hash[:12]}  " + ", ".join(r.name for r in group))
    return 0


def cmd_delete(db: SkeinDB, name: str):
    if db.delete(name):
        print(f"[OK] Deleted '{name}'")
        return 0
    print(f"[FAIL] Knot '{name}' not found")
    return 1


def cmd_invariants(code: str):
    g = deserialise_gauss(code)
    print(f"Gauss code:  {serialise_gauss(g)}")
    print(f"Well-formed: {g.is_well_formed}")
    print(f"Crossings:   {crossing_number(g)}")
    print(f"Writhe:      {writhe(g)}")
    print(f"Hash:        {gauss_hash(g)}")
    print(f"Canonical:   {serialise_gauss(canonical_gauss(g))}")
    print(f"Simplified:  {serialise_gauss(simplify_r1(g))}")
    print(f"Amphichiral: {is_amphichiral(g)} (diagram-level)")
    return 0


def cmd_compare(code_a: str, code_b: str):
    a = deserialise_gauss(code_a)
    b = deserialise_gauss(code_b)
    print(f"Equivalent (rotation + relabelling): {is_equivalent(a, b)}")
    print(f"Isotopic (heuristic, R1 only):       {is_isotopic(a, b)}")
    return 0


DB_COMMANDS = {"init", "seed", "import-csv", "export-csv", "export-json",
               "show", "list", "stats", "duplicates", "delete"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skein",
        description="Skein knot database CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  skein --db knots.db seed
  skein show 3_1
  skein compare "[1,-2,3,-1,2,-3]" "[3,-1,2,-3,1,-2]"
        """
    )
    parser.add_argument("--db", help="Database path (default: SKEIN_DB_PATH)")
    parser.add_argument("--log-level", help="Logging level (default: SKEIN_LOG_LEVEL)")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("init", help="Create the database if missing")
    sub.add_parser("seed", help="Load the prime knot table")
    p = sub.add_parser("import-csv", help="Import knots from CSV")
    p.add_argument("path")
    p = sub.add_parser("export-csv", help="Export knots to CSV")
    p.add_argument("path")
    p = sub.add_parser("export-json", help="Export knots to JSON")
    p.add_argument("path")
    p = sub.add_parser("show", help="Show one knot")
    p.add_argument("name")
    p = sub.add_parser("list", help="List stored knots")
    p.add_argument("--limit", type=int, default=None)
    sub.add_parser("stats", help="Database statistics")
    sub.add_parser("duplicates", help="Knots sharing an identical Gauss code")
    p = sub.add_parser("delete", help="Delete a knot")
    p.add_argument("name")
    p = sub.add_parser("invariants", help="Invariants of a Gauss code")
    p.add_argument("code")
    p = sub.add_parser("compare", help="Compare two Gauss codes")
    p.add_argument("code_a")
    p.add_argument("code_b")
    return parser


def _dispatch(args, db: Optional[SkeinDB]) -> int:
    cmd = args.command
    if cmd == "init":
        return cmd_init(db)
    elif cmd == "seed":
        return cmd_seed(db)
    elif cmd == "import-csv":
        return cmd_import_csv(db, args.path)
    elif cmd == "export-csv":
        return cmd_export(db, args.path, "csv")
    elif cmd == "export-json":
        return cmd_export(db, args.path, "json")
    elif cmd == "show":
        return cmd_show(db, args.name)
    elif cmd == "list":
        return cmd_list(db, args.limit)
    elif cmd == "stats":
        return cmd_stats(db)
    elif cmd == "duplicates":
        return cmd_duplicates(db)
    elif cmd == "delete":
        return cmd_delete(db, args.name)
    elif cmd == "invariants":
        return cmd_invariants(args.code)
    elif cmd == "compare":
        return cmd_compare(args.code_a, args.code_b)
    raise ValueError(f"Unknown command {cmd!r}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    config.setup_logging(args.log_level)

    try:
        if args.command in DB_COMMANDS:
            with SkeinDB(args.db or config.db_path()) as db:
                return _dispatch(args, db)
        return _dispatch(args, None)
    except (SkeinError, ValueError, OSError) as e:
        print(f"[FAIL] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)

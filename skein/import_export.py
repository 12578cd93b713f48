"""
Import/export for common knot data sources.

Bulk import from (name, GaussCode) pairs or CSV (KnotInfo-style), the
built-in prime knot table, and export to CSV and JSON for interop with
other tools. Gauss codes travel in their text encoding "[1,-2,3]".
"""

import csv
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from skein.gauss_code import GaussCode, deserialise_gauss, serialise_gauss
from skein.storage import SkeinDB

log = logging.getLogger("skein.import_export")

PathLike = Union[str, Path]

# Standard prime knots up to 7 crossings.
# Notation: n_k = k-th prime knot with n crossings
KNOT_TABLE = [
    ("0_1", [], {"type": "trivial", "alternating": "true"}),
    ("3_1", [1, -2, 3, -1, 2, -3],
     {"type": "torus", "alternating": "true", "family": "(2,3)-torus"}),
    ("4_1", [1, -2, 3, -4, 2, -1, 4, -3],
     {"type": "twist", "alternating": "true"}),
    ("5_1", [1, -2, 3, -4, 5, -1, 2, -3, 4, -5],
     {"type": "torus", "alternating": "true", "family": "(2,5)-torus"}),
    ("5_2", [1, -2, 3, -4, 5, -3, 4, -1, 2, -5],
     {"type": "twist", "alternating": "true"}),
    ("6_1", [1, -2, 3, -4, 5, -6, 4, -3, 6, -1, 2, -5],
     {"type": "twist", "alternating": "true", "alias": "stevedore"}),
    ("6_2", [1, -2, 3, -4, 5, -6, 2, -5, 4, -1, 6, -3],
     {"type": "alternating", "alternating": "true"}),
    ("6_3", [1, -2, 3, -4, 5, -6, 4, -1, 6, -3, 2, -5],
     {"type": "alternating", "alternating": "true"}),
    ("7_1", [1, -2, 3, -4, 5, -6, 7, -1, 2, -3, 4, -5, 6, -7],
     {"type": "torus", "alternating": "true", "family": "(2,7)-torus"}),
]

EXPORT_COLUMNS = ["name", "gauss_code", "crossing_number", "writhe"]


def bulk_import(db: SkeinDB, records: Iterable[Tuple[str, GaussCode]],
                metadata: Optional[Dict[str, Dict[str, str]]] = None) -> int:
    """
    Insert (name, GaussCode) pairs in a single transaction.

    metadata maps a knot name to its metadata dict. Returns the number
    of knots stored.

        bulk_import(db, [
            ("3_1", GaussCode([1, -2, 3, -1, 2, -3])),
            ("4_1", GaussCode([1, -2, 3, -4, 2, -1, 4, -3])),
        ])
    """
    return db.store_many(records, metadata=metadata)


def import_csv(db: SkeinDB, path: PathLike, name_col: int = 0,
               gauss_col: int = 1, delimiter: str = ",") -> int:
    """
    Import knots from a CSV file with a header row.

    Columns are zero-based. Every column other than name and gauss code
    is stored as metadata keyed by its header. Rows too short to hold
    both required columns are skipped.
    """
    db.require_writable()
    path = Path(path)

    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f, delimiter=delimiter)
        headers = next(reader, None)
        if headers is None:
            return 0
        headers = [h.strip() for h in headers]
        meta_cols = [i for i in range(len(headers)) if i not in (name_col, gauss_col)]

        knots = []
        metadata = {}
        skipped = 0
        for fields in reader:
            fields = [x.strip() for x in fields]
            if len(fields) <= max(name_col, gauss_col):
                skipped += 1
                continue
            name = fields[name_col]
            knots.append((name, deserialise_gauss(fields[gauss_col])))
            metadata[name] = {headers[i]: fields[i] for i in meta_cols if i < len(fields)}

    count = db.store_many(knots, metadata=metadata)
    log.info(f"Imported {count} knots from {path} ({skipped} short rows skipped)")
    return count


def _select(db: SkeinDB, predicates):
    if predicates:
        return db.query(*predicates, limit=-1)
    return db.list_knots(limit=-1)


def export_csv(db: SkeinDB, path: PathLike, *predicates) -> int:
    """
    Export the database (or the knots matching predicates) to CSV.
    Returns the number of rows written.
    """
    records = _select(db, predicates)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(EXPORT_COLUMNS)
        for r in records:
            writer.writerow([r.name, serialise_gauss(r.gauss_code), r.crossing_number, r.writhe])
    log.info(f"Exported {len(records)} knots to {path}")
    return len(records)


def export_json(db: SkeinDB, path: PathLike, *predicates) -> int:
    """
    Export knots as a JSON array with their invariants and metadata.
    Returns the number of knots written.
    """
    records = _select(db, predicates)
    payload = [
        {
            "name": r.name,
            "gauss_code": list(r.gauss_code.crossings),
            "crossing_number": r.crossing_number,
            "writhe": r.writhe,
            "metadata": r.metadata,
        }
        for r in records
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    log.info(f"Exported {len(records)} knots to {path}")
    return len(records)


def import_knot_table(db: SkeinDB) -> int:
    """
    Populate the database with the prime knot table up to 7 crossings.
    Knots already present by name are left alone. Returns the number added.
    """
    db.require_writable()
    pending = [(name, GaussCode(code)) for name, code, _ in KNOT_TABLE if name not in db]
    metadata = {name: meta for name, _, meta in KNOT_TABLE}
    return db.store_many(pending, metadata=metadata) if pending else 0

"""
SkeinDB — SQLite storage for knots

One table for knots, one for metadata key/value pairs. Invariants are
indexed columns for fast filtering; the Gauss code itself is stored in
its text encoding "[1,-2,3,-1,2,-3]".

    with SkeinDB("knots.db") as db:
        db.store("trefoil", GaussCode([1, -2, 3, -1, 2, -3]),
                 metadata={"family": "torus"})
        db.fetch("trefoil")

Use ":memory:" for a throwaway database. readonly=True opens the file
with SQLite's mode=ro and refuses every mutation with ReadOnlyError.
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from skein import config
from skein.equivalence import is_equivalent
from skein.errors import DuplicateKnotError, KnotNotFoundError, ReadOnlyError
from skein.gauss_code import GaussCode, deserialise_gauss, serialise_gauss
from skein.invariants import crossing_number
from skein.query import Equals, build_where
from skein.records import KnotRecord, make_record

log = logging.getLogger("skein.storage")

SCHEMA_VERSION = 1

CREATE_TABLES = [
    """CREATE TABLE IF NOT EXISTS knots (
        id               TEXT PRIMARY KEY,
        name             TEXT NOT NULL UNIQUE,
        gauss_code       TEXT NOT NULL,
        crossing_number  INTEGER NOT NULL,
        writhe           INTEGER NOT NULL,
        gauss_hash       TEXT NOT NULL,
        jones_polynomial TEXT,
        created_at       TEXT NOT NULL,
        updated_at       TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS knot_metadata (
        knot_id TEXT NOT NULL,
        key     TEXT NOT NULL,
        value   TEXT NOT NULL,
        PRIMARY KEY (knot_id, key),
        FOREIGN KEY (knot_id) REFERENCES knots(id) ON DELETE CASCADE
    )""",
    """CREATE TABLE IF NOT EXISTS schema_info (
        key   TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )""",
    "CREATE INDEX IF NOT EXISTS idx_knots_crossing ON knots(crossing_number)",
    "CREATE INDEX IF NOT EXISTS idx_knots_writhe ON knots(writhe)",
    "CREATE INDEX IF NOT EXISTS idx_knots_hash ON knots(gauss_hash)",
    "CREATE INDEX IF NOT EXISTS idx_metadata_key ON knot_metadata(key)",
]

MEMORY = ":memory:"


class SkeinDB:
    """Open or create a Skein database at the given path."""

    def __init__(self, path: Union[str, Path] = MEMORY, readonly: bool = False):
        self.path = str(path)
        self.readonly = readonly
        self._closed = False

        if readonly and self.path != MEMORY:
            self.conn = sqlite3.connect(f"file:{Path(self.path).as_posix()}?mode=ro", uri=True, timeout=10,
                                        check_same_thread=False)
        else:
            if self.path != MEMORY:
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(self.path, timeout=10, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys=ON")

        if not readonly:
            self.conn.execute("PRAGMA journal_mode=WAL")
            self._init_schema()
        elif self.path == MEMORY:
            # A read-only in-memory store is empty but still queryable
            self._init_schema()

    def _init_schema(self):
        with self.conn:
            for stmt in CREATE_TABLES:
                self.conn.execute(stmt)
            self.conn.execute(
                "INSERT OR REPLACE INTO schema_info (key, value) VALUES ('version', ?)",
                (str(SCHEMA_VERSION),))

    # -- Lifecycle --

    @property
    def is_open(self) -> bool:
        return not self._closed

    def close(self):
        if not self._closed:
            self.conn.close()
            self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        if self._closed:
            return f"SkeinDB({self.path!r}, closed)"
        return f"SkeinDB({self.path!r}, {self.count_knots()} knots, open)"

    def require_writable(self):
        if self.readonly:
            raise ReadOnlyError(f"Database is read-only: {self.path}")

    # -- Counting / membership --

    def count_knots(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM knots").fetchone()[0]

    def __len__(self) -> int:
        return self.count_knots()

    def has_knot(self, name: str) -> bool:
        row = self.conn.execute("SELECT 1 FROM knots WHERE name = ? LIMIT 1", (name,)).fetchone()
        return row is not None

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and self.has_knot(name)

    # -- Core CRUD --

    def _insert(self, record: KnotRecord):
        try:
            self.conn.execute("""
                INSERT INTO knots
                (id, name, gauss_code, crossing_number, writhe, gauss_hash,
                 jones_polynomial, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                record.id,
                record.name,
                serialise_gauss(record.gauss_code),
                record.crossing_number,
                record.writhe,
                record.gauss_hash,
                record.jones_polynomial,
                record.created_at.isoformat(),
                record.updated_at.isoformat(),
            ))
        except sqlite3.IntegrityError as e:
            raise DuplicateKnotError(f"Knot '{record.name}' already exists") from e

        self.conn.executemany(
            "INSERT INTO knot_metadata (knot_id, key, value) VALUES (?, ?, ?)",
            [(record.id, k, v) for k, v in record.metadata.items()])

    def put(self, record: KnotRecord) -> str:
        """
        Persist a prebuilt record. Its invariants are written as given;
        the store does not recompute them.
        """
        self.require_writable()
        with self.conn:
            self._insert(record)
        log.info(f"Stored knot '{record.name}' ({record.crossing_number} crossings)")
        return record.id

    def store(self, name: str, g: GaussCode,
              metadata: Optional[Dict[str, str]] = None) -> str:
        """
        Store a knot, computing its invariants. Returns the new id.
        Raises DuplicateKnotError if the name is taken.
        """
        self.require_writable()
        return self.put(make_record(name, g, metadata))

    def store_many(self, knots: Iterable[Tuple[str, GaussCode]],
                   metadata: Optional[Dict[str, Dict[str, str]]] = None) -> int:
        """Store (name, GaussCode) pairs in one transaction. All or nothing."""
        self.require_writable()
        metadata = metadata or {}
        count = 0
        with self.conn:
            for name, g in knots:
                self._insert(make_record(name, g, metadata.get(name)))
                count += 1
        log.info(f"Stored {count} knots in one transaction")
        return count

    def fetch(self, name: str) -> Optional[KnotRecord]:
        """Retrieve a knot by name. Returns None if not found."""
        row = self.conn.execute("SELECT * FROM knots WHERE name = ?", (name,)).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def fetch_metadata(self, knot_id: str) -> Dict[str, str]:
        rows = self.conn.execute(
            "SELECT key, value FROM knot_metadata WHERE knot_id = ?", (knot_id,)).fetchall()
        return {r["key"]: r["value"] for r in rows}

    def delete(self, name: str) -> bool:
        """Remove a knot and its metadata. Returns False if it was not stored."""
        self.require_writable()
        with self.conn:
            cur = self.conn.execute("DELETE FROM knots WHERE name = ?", (name,))
        deleted = cur.rowcount > 0
        if deleted:
            log.info(f"Deleted knot '{name}'")
        return deleted

    def list_knots(self, limit: Optional[int] = None, offset: int = 0) -> List[KnotRecord]:
        """List knots ordered by name. limit=-1 returns every row."""
        if limit is None:
            limit = config.query_limit()
        rows = self.conn.execute(
            "SELECT * FROM knots ORDER BY name LIMIT ? OFFSET ?", (limit, offset)).fetchall()
        return [self._row_to_record(r) for r in rows]

    def update_metadata(self, name: str, metadata: Dict[str, str]):
        """Merge metadata into an existing knot. Existing keys are overwritten."""
        self.require_writable()
        record = self.fetch(name)
        if record is None:
            raise KnotNotFoundError(name)

        with self.conn:
            self.conn.executemany(
                "INSERT OR REPLACE INTO knot_metadata (knot_id, key, value) VALUES (?, ?, ?)",
                [(record.id, str(k), str(v)) for k, v in metadata.items()])
            self.conn.execute(
                "UPDATE knots SET updated_at = ? WHERE id = ?",
                (datetime.now().isoformat(), record.id))
        log.info(f"Updated metadata on '{name}': {sorted(metadata)}")

    # -- Queries --

    def query(self, *predicates, limit: Optional[int] = None, offset: int = 0) -> List[KnotRecord]:
        """
        Knots matching every predicate (see skein.query), ordered by
        crossing number then name. No predicates means every knot.
        """
        if limit is None:
            limit = config.query_limit()
        join_clause, where_clause, params = build_where(predicates)
        sql = f"""
            SELECT k.* FROM knots k
            {join_clause}
            {where_clause}
            ORDER BY k.crossing_number, k.name
            LIMIT ? OFFSET ?
        """
        log.debug(f"query: {where_clause or '(all)'} params={params}")
        rows = self.conn.execute(sql, (*params, limit, offset)).fetchall()
        return [self._row_to_record(r) for r in rows]

    def duplicates(self) -> List[List[KnotRecord]]:
        """
        Groups of knots sharing a Gauss hash (identical sequences stored
        under different names).
        """
        rows = self.conn.execute("""
            SELECT gauss_hash FROM knots
            GROUP BY gauss_hash HAVING COUNT(*) > 1
            ORDER BY gauss_hash
        """).fetchall()
        return [self.query(Equals("gauss_hash", r["gauss_hash"]), limit=-1) for r in rows]

    def find_equivalent(self, g: GaussCode) -> List[KnotRecord]:
        """
        Stored knots whose diagram is equivalent to g up to rotation and
        relabelling. Candidates are narrowed by crossing number in SQL.
        """
        candidates = self.query(Equals("crossing_number", crossing_number(g)), limit=-1)
        return [r for r in candidates if is_equivalent(r.gauss_code, g)]

    def statistics(self) -> dict:
        """Summary statistics about the database contents."""
        total = self.count_knots()
        row = self.conn.execute(
            "SELECT MIN(crossing_number) AS mn, MAX(crossing_number) AS mx FROM knots").fetchone()
        distribution = {
            r["crossing_number"]: r["n"]
            for r in self.conn.execute("""
                SELECT crossing_number, COUNT(*) AS n FROM knots
                GROUP BY crossing_number ORDER BY crossing_number
            """)
        }
        return {
            "total_knots": total,
            "min_crossings": row["mn"],
            "max_crossings": row["mx"],
            "crossing_distribution": distribution,
        }

    # -- Internal helpers --

    def _row_to_record(self, row: sqlite3.Row) -> KnotRecord:
        return KnotRecord(
            id=row["id"],
            name=row["name"],
            gauss_code=deserialise_gauss(row["gauss_code"]),
            crossing_number=row["crossing_number"],
            writhe=row["writhe"],
            gauss_hash=row["gauss_hash"],
            jones_polynomial=row["jones_polynomial"],
            metadata=self.fetch_metadata(row["id"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

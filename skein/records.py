"""
KnotRecord — a stored knot with computed invariants and metadata.

Records are built by make_record(), which computes every invariant up
front. The store persists those values as they are and never recomputes
them.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from skein import providers
from skein.gauss_code import GaussCode
from skein.invariants import crossing_number, gauss_hash, writhe


@dataclass(frozen=True)
class KnotRecord:
    """Returned by fetch and query; handed to SkeinDB for persistence."""
    id: str
    name: str
    gauss_code: GaussCode
    crossing_number: int
    writhe: int
    gauss_hash: str
    jones_polynomial: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict, hash=False)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "gauss_code": list(self.gauss_code.crossings),
            "crossing_number": self.crossing_number,
            "writhe": self.writhe,
            "gauss_hash": self.gauss_hash,
            "jones_polynomial": self.jones_polynomial,
            "metadata": dict(self.metadata),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    def __repr__(self):
        return f"KnotRecord({self.name!r}, crossings={self.crossing_number})"


def make_record(name: str, g: GaussCode,
                metadata: Optional[Dict[str, str]] = None) -> KnotRecord:
    """Build a fresh record, computing all invariants now."""
    now = datetime.now()
    return KnotRecord(
        id=str(uuid.uuid4()),
        name=name,
        gauss_code=g,
        crossing_number=crossing_number(g),
        writhe=writhe(g),
        gauss_hash=gauss_hash(g),
        jones_polynomial=providers.richer_invariant(g),
        metadata={str(k): str(v) for k, v in (metadata or {}).items()},
        created_at=now,
        updated_at=now,
    )

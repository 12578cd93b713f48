"""
Knot API Routes
================
Read-only HTTP access to a Skein database plus stateless invariant and
comparison endpoints.

Endpoints:
  GET  /api/knots               — list / filter stored knots
  GET  /api/knots/stats         — database statistics
  GET  /api/knots/{name}        — one knot by name
  POST /api/knots/invariants    — invariants of a posted Gauss code
  POST /api/knots/compare       — equivalence of two posted Gauss codes

The database is opened read-only per request from SKEIN_DB_PATH and
closed when the request ends. Comparison results are heuristics and are
flagged as such in the response.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from skein import config
from skein.canonical import canonical_gauss
from skein.equivalence import is_amphichiral, is_equivalent, is_isotopic
from skein.gauss_code import GaussCode
from skein.invariants import crossing_number, gauss_hash, writhe
from skein.query import predicates_from_kwargs
from skein.reidemeister import simplify_r1
from skein.storage import SkeinDB

router = APIRouter(prefix="/api/knots", tags=["knots"])


def get_db():
    """Yield a read-only SkeinDB; closed on every exit path."""
    path = config.db_path()
    if not path.exists():
        raise HTTPException(status_code=503, detail=f"Knot DB not found: {path}")
    db = SkeinDB(path, readonly=True)
    try:
        yield db
    finally:
        db.close()


def _code(values: List[int]) -> GaussCode:
    try:
        return GaussCode(values)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))


# ── Models ─────────────────────────────────────────────────────────────────

class CodeRequest(BaseModel):
    gauss_code: List[int]

class CompareRequest(BaseModel):
    a: List[int]
    b: List[int]


# ── Stored knots ───────────────────────────────────────────────────────────

@router.get("")
def list_knots(
    crossing_number: Optional[int] = Query(None, ge=0),
    writhe: Optional[int] = Query(None),
    name_like: Optional[str] = Query(None, description="SQL LIKE pattern, e.g. 'torus%'"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: SkeinDB = Depends(get_db),
):
    predicates = predicates_from_kwargs(
        crossing_number=crossing_number, writhe=writhe, name_like=name_like)
    records = db.query(*predicates, limit=limit, offset=offset)
    return {"knots": [r.to_dict() for r in records], "count": len(records)}


@router.get("/stats")
def stats(db: SkeinDB = Depends(get_db)):
    return db.statistics()


@router.get("/{name}")
def get_knot(name: str, db: SkeinDB = Depends(get_db)):
    record = db.fetch(name)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Knot '{name}' not found")
    return record.to_dict()


# ── Stateless computations ─────────────────────────────────────────────────

@router.post("/invariants")
def invariants(body: CodeRequest):
    g = _code(body.gauss_code)
    return {
        "gauss_code": list(g.crossings),
        "well_formed": g.is_well_formed,
        "crossing_number": crossing_number(g),
        "writhe": writhe(g),
        "gauss_hash": gauss_hash(g),
        "canonical": list(canonical_gauss(g).crossings),
        "simplified": list(simplify_r1(g).crossings),
        "amphichiral": is_amphichiral(g),
    }


@router.post("/compare")
def compare(body: CompareRequest):
    a = _code(body.a)
    b = _code(body.b)
    return {
        "equivalent": is_equivalent(a, b),
        "isotopic": is_isotopic(a, b),
        "heuristic": True,
    }

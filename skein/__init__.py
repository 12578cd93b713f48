# Skein — Gauss-code knot diagrams, invariants and equivalence
#
# SCOPE OF THE EQUIVALENCE CHECKS
# ===============================
#
# 1. DIAGRAM LEVEL ONLY — crossing_number and writhe describe the diagram
#    as written, not the knot type. crossing_number is not the minimal
#    crossing number.
#
# 2. CANONICAL FORM — canonical_gauss identifies diagrams that differ by
#    the starting point of the trace and by crossing numbering. Nothing
#    else.
#
# 3. ISOTOPY IS A HEURISTIC — is_isotopic removes Reidemeister I kinks
#    and compares canonical forms. Reidemeister II and III are never
#    applied, so False does not mean "different knots".
#
# 4. SOFT VALIDATION — GaussCode accepts malformed sequences, logs a
#    warning and reports is_well_formed = False. Check it before trusting
#    any invariant computed from untrusted input.
#
# 5. HASH IS EXACT-SEQUENCE — gauss_hash deduplicates identical
#    sequences; use find_equivalent / is_equivalent for diagram matches.

from skein.gauss_code import GaussCode, validate_gauss_code, serialise_gauss, deserialise_gauss
from skein.invariants import crossing_number, writhe, gauss_hash, content_hash
from skein.canonical import normalise_gauss, canonical_gauss, normalise, canonical_form
from skein.reidemeister import simplify_r1, simplify_kinks
from skein.equivalence import (
    mirror,
    is_equivalent,
    is_isotopic,
    is_amphichiral,
    diagram_equivalent,
    isotopic_heuristic,
    is_amphichiral_heuristic,
)
from skein.records import KnotRecord, make_record
from skein.query import Equals, Range, OneOf, Pattern, MetaEquals, predicates_from_kwargs
from skein.storage import SkeinDB
from skein.import_export import bulk_import, import_csv, export_csv, export_json, import_knot_table
from skein.errors import (
    SkeinError,
    MalformedGaussCodeError,
    ReadOnlyError,
    DuplicateKnotError,
    KnotNotFoundError,
    ProviderUnavailableError,
)

__version__ = "0.1.0"

__all__ = [
    # Gauss codes
    'GaussCode',
    'validate_gauss_code',
    'serialise_gauss',
    'deserialise_gauss',
    # Invariants
    'crossing_number',
    'writhe',
    'gauss_hash',
    'content_hash',
    # Normalisation
    'normalise_gauss',
    'canonical_gauss',
    'normalise',
    'canonical_form',
    # Simplification
    'simplify_r1',
    'simplify_kinks',
    # Equivalence
    'mirror',
    'is_equivalent',
    'is_isotopic',
    'is_amphichiral',
    'diagram_equivalent',
    'isotopic_heuristic',
    'is_amphichiral_heuristic',
    # Records and storage
    'KnotRecord',
    'make_record',
    'SkeinDB',
    'Equals',
    'Range',
    'OneOf',
    'Pattern',
    'MetaEquals',
    'predicates_from_kwargs',
    # Import / export
    'bulk_import',
    'import_csv',
    'export_csv',
    'export_json',
    'import_knot_table',
    # Errors
    'SkeinError',
    'MalformedGaussCodeError',
    'ReadOnlyError',
    'DuplicateKnotError',
    'KnotNotFoundError',
    'ProviderUnavailableError',
]

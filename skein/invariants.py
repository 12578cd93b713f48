"""
Standalone invariant computations from Gauss codes.

These are basic: crossing number, writhe and a content
hash for deduplication. Richer invariants (Jones polynomial, etc.) come
from an optional provider, see skein.providers.
"""

import hashlib
from typing import Dict

from skein.gauss_code import GaussCode, serialise_gauss


def crossing_number(g: GaussCode) -> int:
    """
    Number of distinct crossings in the Gauss code.

    This is the *diagram* crossing number, not the minimal crossing
    number of the knot type.
    """
    return len({abs(c) for c in g.crossings})


def writhe(g: GaussCode) -> int:
    """
    Signed crossing total of the diagram.

    Each crossing contributes the sign it was first seen with, counted
    when its second leg is reached. Depends on the diagram, so it is an
    index key rather than a knot invariant.
    """
    first_sign: Dict[int, int] = {}
    w = 0
    for c in g.crossings:
        idx = abs(c)
        if idx not in first_sign:
            first_sign[idx] = 1 if c > 0 else -1
        else:
            w += first_sign[idx]
    return w


def gauss_hash(g: GaussCode) -> str:
    """
    SHA-256 hex digest of the raw sequence's text encoding.

    Identifies identical sequences only. Rotated or relabelled copies of
    the same diagram hash differently.
    """
    return hashlib.sha256(serialise_gauss(g).encode("utf-8")).hexdigest()


content_hash = gauss_hash

"""
Normalisation and canonical forms

normalise_gauss relabels crossings 1, 2, 3, ... in order of first
appearance. canonical_gauss additionally removes the choice of starting
point: it normalises every cyclic rotation and keeps the
lexicographically smallest.

Cost of canonical_gauss is O(n^2) in the sequence length. It is the
slow step of any batch pass over a store.
"""

from typing import Dict, List, Sequence

from skein.gauss_code import GaussCode


def _relabel(crossings: Sequence[int]) -> List[int]:
    mapping: Dict[int, int] = {}
    out = []
    for c in crossings:
        idx = abs(c)
        if idx not in mapping:
            mapping[idx] = len(mapping) + 1
        out.append(mapping[idx] if c > 0 else -mapping[idx])
    return out


def normalise_gauss(g: GaussCode) -> GaussCode:
    """
    Relabel crossings to consecutive integers from 1, keeping every
    entry's position and sign.

    >>> normalise_gauss(GaussCode([5, -10, 15, -5, 10, -15]))
    GaussCode([1, -2, 3, -1, 2, -3])
    """
    if g.is_unknot():
        return g
    return GaussCode(_relabel(g.crossings))


def canonical_gauss(g: GaussCode) -> GaussCode:
    """
    Canonical representative under cyclic rotation and relabelling.

    Two codes differing only in where the trace starts and how the
    crossings are numbered give the same result.
    """
    if g.is_unknot():
        return g

    crossings = list(g.crossings)
    best = _relabel(crossings)
    for shift in range(1, len(crossings)):
        normed = _relabel(crossings[shift:] + crossings[:shift])
        if normed < best:
            best = normed
    return GaussCode(best)


normalise = normalise_gauss
canonical_form = canonical_gauss

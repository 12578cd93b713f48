"""
Equivalence checking

All three checks here are diagram-level heuristics:

    is_equivalent   same canonical form (rotation + relabelling)
    is_isotopic     is_equivalent after Reidemeister I simplification
    is_amphichiral  is_equivalent(g, mirror(g))

None of them applies Reidemeister II or III moves, so two diagrams of
the same knot can still compare False. A True from is_equivalent is
reliable; a False from is_isotopic is not a proof of distinct knots.
"""

from skein.canonical import canonical_gauss
from skein.gauss_code import GaussCode
from skein.invariants import crossing_number
from skein.reidemeister import simplify_r1


def mirror(g: GaussCode) -> GaussCode:
    """Mirror image of the diagram: flip every sign."""
    return GaussCode(-c for c in g.crossings)


def is_equivalent(g1: GaussCode, g2: GaussCode) -> bool:
    """
    Whether two codes describe the same diagram up to cyclic rotation
    and crossing relabelling.
    """
    if crossing_number(g1) != crossing_number(g2):
        return False
    return canonical_gauss(g1) == canonical_gauss(g2)


def is_isotopic(g1: GaussCode, g2: GaussCode) -> bool:
    """
    Heuristic isotopy: strip kinks from both codes, then compare
    diagrams. Misses equivalences that need Reidemeister II or III.
    """
    return is_equivalent(simplify_r1(g1), simplify_r1(g2))


def is_amphichiral(g: GaussCode) -> bool:
    """Whether the diagram is equivalent to its own mirror image."""
    return is_equivalent(g, mirror(g))


diagram_equivalent = is_equivalent
isotopic_heuristic = is_isotopic
is_amphichiral_heuristic = is_amphichiral

"""
Test Reidemeister I simplification
"""

from skein.gauss_code import GaussCode
from skein.reidemeister import simplify_kinks, simplify_r1


def test_removes_leading_kink():
    g = GaussCode([1, -1, 2, -3, 4, -2, 3, -4])
    assert simplify_r1(g) == GaussCode([2, -3, 4, -2, 3, -4])


def test_removes_wraparound_kink(trefoil):
    g = GaussCode([4, 1, -2, 3, -1, 2, -3, -4])
    assert simplify_r1(g) == trefoil


def test_removes_inner_kink(trefoil):
    g = GaussCode([1, -2, 4, -4, 3, -1, 2, -3])
    assert simplify_r1(g) == trefoil


def test_nested_kinks_collapse_to_unknot():
    assert simplify_r1(GaussCode([1, 2, -2, -1])) == GaussCode([])
    assert simplify_r1(GaussCode([1, -1, 2, -2])) == GaussCode([])
    assert simplify_r1(GaussCode([3, 1, 2, -2, -1, -3])).is_unknot()


def test_no_kinks_unchanged(trefoil, figure_eight, unknot):
    assert simplify_r1(trefoil) == trefoil
    assert simplify_r1(figure_eight) == figure_eight
    assert simplify_r1(unknot) == unknot


def test_same_sign_pair_is_not_a_kink():
    assert simplify_r1(GaussCode([2, 1, -2, -1])) == GaussCode([2, 1, -2, -1])


def test_idempotent(trefoil, figure_eight):
    for g in (
        trefoil,
        figure_eight,
        GaussCode([1, -1, 2, -3, 4, -2, 3, -4]),
        GaussCode([5, 1, -2, 6, -6, 3, -1, 2, -3, -5]),
    ):
        once = simplify_r1(g)
        assert simplify_r1(once) == once


def test_input_not_mutated():
    g = GaussCode([1, -1, 2, -2])
    simplify_r1(g)
    assert g.crossings == (1, -1, 2, -2)


def test_alias():
    assert simplify_kinks is simplify_r1

"""
Gauss Code — the diagram value type

A knot diagram is traced once around the curve; every crossing is passed
twice, and each pass is written down as a signed integer. |i| names the
crossing, sign(i) records which strand-pass (over / under) was seen.

    trefoil = GaussCode([1, -2, 3, -1, 2, -3])
    unknot  = GaussCode([])

Construction is permissive: a sequence that breaks the pairing rule is
still built, logged as malformed, and reported through `is_well_formed`.
Callers that need strictness check it themselves (or parse with
strict=True).

Text encoding: "[1,-2,3,-1,2,-3]" — used by the content hash and by every
flat file format.
"""

import logging
from collections import Counter
from typing import Iterable, Iterator, Tuple

from skein.errors import MalformedGaussCodeError

log = logging.getLogger("skein.gauss_code")


def validate_gauss_code(crossings: Iterable[int]) -> bool:
    """
    Check the pairing rule: every magnitude appears exactly twice,
    once positive and once negative, and 0 never appears. The empty
    sequence is the unknot and is valid.
    """
    seen = Counter(crossings)
    magnitudes = {abs(c) for c in seen}
    for m in magnitudes:
        if m == 0 or seen.get(m, 0) != 1 or seen.get(-m, 0) != 1:
            return False
    return True


def _coerce(crossings: Iterable[int]) -> Tuple[int, ...]:
    values = []
    for c in crossings:
        if isinstance(c, bool) or not isinstance(c, int):
            raise TypeError(f"Gauss code entries must be int, got {type(c).__name__}: {c!r}")
        if c == 0:
            raise ValueError("Gauss code entries must be nonzero")
        values.append(int(c))
    return tuple(values)


class GaussCode:
    """
    Immutable signed crossing sequence.

    Equality is structural: two labellings of the same diagram are not
    equal here. Use skein.equivalence.is_equivalent for that.
    """

    __slots__ = ("_crossings", "_well_formed")

    def __init__(self, crossings: Iterable[int] = ()):
        values = _coerce(crossings)
        well_formed = validate_gauss_code(values)
        if not well_formed:
            log.warning(f"Gauss code may be malformed: {list(values)}")
        object.__setattr__(self, "_crossings", values)
        object.__setattr__(self, "_well_formed", well_formed)

    def __setattr__(self, key, value):
        raise AttributeError("GaussCode is immutable")

    @property
    def crossings(self) -> Tuple[int, ...]:
        return self._crossings

    # alias
    sequence = crossings

    @property
    def is_well_formed(self) -> bool:
        return self._well_formed

    def is_unknot(self) -> bool:
        return not self._crossings

    def __len__(self) -> int:
        return len(self._crossings)

    def __iter__(self) -> Iterator[int]:
        return iter(self._crossings)

    def __getitem__(self, index):
        return self._crossings[index]

    def __eq__(self, other):
        if not isinstance(other, GaussCode):
            return NotImplemented
        return self._crossings == other._crossings

    def __hash__(self):
        return hash(("GaussCode", self._crossings))

    def __repr__(self):
        return f"GaussCode({list(self._crossings)})"


# =========================================================================
# Text codec
# =========================================================================

def serialise_gauss(g: GaussCode) -> str:
    """Encode as a bracketed, comma-separated list with no spaces."""
    return "[" + ",".join(str(c) for c in g.crossings) + "]"


def deserialise_gauss(text: str, strict: bool = False) -> GaussCode:
    """
    Parse "[1,-2,3,-1,2,-3]" back into a GaussCode.

    Text that is not a bracketed integer list raises ValueError. A code
    that parses but breaks the pairing rule is flagged (soft policy), or
    raises MalformedGaussCodeError when strict=True.
    """
    stripped = text.strip()
    if not (stripped.startswith("[") and stripped.endswith("]")):
        raise ValueError(f"Gauss code must be bracketed: {text!r}")
    body = stripped[1:-1].strip()
    if not body:
        return GaussCode(())

    try:
        crossings = [int(part.strip()) for part in body.split(",")]
    except ValueError:
        raise ValueError(f"Gauss code entries must be integers: {text!r}") from None

    if strict and not validate_gauss_code(crossings):
        raise MalformedGaussCodeError(f"Malformed Gauss code: {text!r}")
    return GaussCode(crossings)

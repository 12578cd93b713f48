"""
Reidemeister I simplification.

A kink shows up in a Gauss code as two cyclically adjacent entries
±i, ∓i. Removing the pair is a Reidemeister I move. Reidemeister II and
III are not attempted.
"""

import logging

from skein.gauss_code import GaussCode

log = logging.getLogger("skein.reidemeister")


def _is_kink(a: int, b: int) -> bool:
    return a == -b


def simplify_r1(g: GaussCode) -> GaussCode:
    """
    Remove kinks until none remain, including the pair formed by the
    last and first entries.

    Always returns a new GaussCode; terminates because each removal
    shortens the sequence by two.
    """
    current = list(g.crossings)
    removed = 0

    changed = True
    while changed:
        changed = False
        i = 0
        while i < len(current) - 1:
            if _is_kink(current[i], current[i + 1]):
                del current[i:i + 2]
                removed += 1
                changed = True
            else:
                i += 1

        # Wrap-around: last entry is adjacent to the first
        if len(current) >= 2 and _is_kink(current[0], current[-1]):
            del current[-1]
            del current[0]
            removed += 1
            changed = True

    if removed:
        log.debug(f"simplify_r1 removed {removed} kink(s): {len(g)} -> {len(current)} entries")
    return GaussCode(current)


simplify_kinks = simplify_r1

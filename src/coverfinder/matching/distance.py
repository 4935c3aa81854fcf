# ABOUTME: String and artist-list distance measures used for candidate scoring.
# ABOUTME: Levenshtein edit distance plus a nearest-neighbour average over artist names.

from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings with unit costs.

    Compares code points, so accented and non-Latin characters count as one
    character each. edit_distance("", s) == len(s).
    """
    return Levenshtein.distance(a, b)


def artist_set_distance(a: Sequence[str], b: Sequence[str]) -> int:
    """Distance between two artist lists, independent of order and of which is local.

    Every name in the shorter list is matched to its nearest name in the longer
    list; the summed distances are integer-divided by the longer list's length.
    On equal lengths the second list is treated as the longer one.

    Raises:
        ValueError: If either list is empty.
    """
    if not a or not b:
        msg = "artist lists must be non-empty"
        raise ValueError(msg)

    if len(a) > len(b):
        larger, smaller = a, b
    else:
        larger, smaller = b, a

    total = 0
    for name in smaller:
        total += min(edit_distance(name, other) for other in larger)
    return total // len(larger)

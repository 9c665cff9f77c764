"""Enumerate ordered arrangements of every non-empty subset of a sequence.

The rule builder needs one rewrite pattern per ordering of every subset of a
resource's filter keys, so ``["a", "b"]`` has to yield ``a``, ``a/b``, ``b``
and ``b/a`` rather than only the two full-length permutations offered by
:func:`itertools.permutations`.

The traversal order is part of the contract. Calling :func:`permute_all` on two
sequences of equal length walks both through the same positions in the same
order, so the ``i``-th result of one call corresponds element-for-element to
the ``i``-th result of the other. The rule builder zips filter-key names with
their path slugs on that basis.

Examples
--------
>>> from catalog_routes.permutations import permute_all
>>> permute_all(["a", "b"])
[('a',), ('a', 'b'), ('b',), ('b', 'a')]
>>> len(permute_all("abc"))
15
>>> permute_all([])
[]
"""

from __future__ import annotations

import math
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

T = typ.TypeVar("T")


def permute_all(items: cabc.Sequence[T]) -> list[tuple[T, ...]]:
    """Return every ordering of every non-empty subset of ``items``.

    Parameters
    ----------
    items : Sequence
        Items to arrange. Duplicates are kept as-is, callers are expected to
        supply distinct values.

    Returns
    -------
    list[tuple]
        Permutations in pre-order: each ``k``-length arrangement is emitted
        immediately before the ``k + 1``-length arrangements that extend it.
        The list holds ``count_permutations(len(items))`` entries.
    """
    return _permute(tuple(items), ())


def _permute(remaining: tuple[T, ...], prefix: tuple[T, ...]) -> list[tuple[T, ...]]:
    output: list[tuple[T, ...]] = []
    for index, item in enumerate(remaining):
        arrangement = (*prefix, item)
        output.append(arrangement)
        rest = remaining[:index] + remaining[index + 1 :]
        output.extend(_permute(rest, arrangement))
    return output


def count_permutations(size: int) -> int:
    """Return how many arrangements :func:`permute_all` yields for ``size`` items.

    >>> [count_permutations(n) for n in range(5)]
    [0, 1, 4, 15, 64]
    """
    return sum(math.perm(size, length) for length in range(1, size + 1))


__all__ = ["count_permutations", "permute_all"]

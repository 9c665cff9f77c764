"""Unit tests for subset permutation enumeration."""

from __future__ import annotations

import math

import pytest

from catalog_routes.permutations import count_permutations, permute_all


def test_two_items_yield_preorder_arrangements() -> None:
    """Each arrangement should precede the longer arrangements extending it."""
    actual = permute_all(["a", "b"])
    assert actual == [("a",), ("a", "b"), ("b",), ("b", "a")], (
        f"unexpected permutation order: {actual!r}"
    )


def test_three_items_follow_recursive_elimination_order() -> None:
    actual = permute_all("abc")
    assert actual[:5] == [
        ("a",),
        ("a", "b"),
        ("a", "b", "c"),
        ("a", "c"),
        ("a", "c", "b"),
    ], f"unexpected leading permutations: {actual[:5]!r}"
    assert actual[5] == ("b",), f"expected ('b',) to open the second branch, got {actual[5]!r}"


@pytest.mark.parametrize("size", [1, 2, 3, 4, 5])
def test_permutation_count_and_shape(size: int) -> None:
    """Output size should equal the sum of k-permutations for k = 1..n."""
    items = list(range(size))
    actual = permute_all(items)
    expected = sum(
        math.factorial(size) // math.factorial(size - length)
        for length in range(1, size + 1)
    )
    assert len(actual) == expected == count_permutations(size), (
        f"expected {expected} permutations for {size} items, got {len(actual)}"
    )
    assert len(set(actual)) == len(actual), "expected every arrangement to be distinct"
    assert all(1 <= len(arrangement) <= size for arrangement in actual)


def test_empty_input_yields_nothing() -> None:
    assert permute_all([]) == []
    assert count_permutations(0) == 0


def test_parallel_inputs_stay_positionally_aligned() -> None:
    """Names and slugs permuted separately should still pair up by index."""
    names = ["category", "post_tag", "genre", "author_name"]
    slugs = ["cat", "tag", "kind", "writer"]
    slug_for = dict(zip(names, slugs, strict=True))

    name_combos = permute_all(names)
    slug_combos = permute_all(slugs)

    assert len(name_combos) == len(slug_combos)
    for name_combo, slug_combo in zip(name_combos, slug_combos, strict=True):
        assert tuple(slug_for[name] for name in name_combo) == slug_combo, (
            f"misaligned combo pair: {name_combo!r} vs {slug_combo!r}"
        )


def test_repeated_calls_do_not_share_state() -> None:
    first = permute_all(["x", "y"])
    second = permute_all(["x", "y"])
    assert first == second
    assert first is not second


def test_duplicates_are_not_removed() -> None:
    assert permute_all(["a", "a"]) == [("a",), ("a", "a"), ("a",), ("a", "a")]

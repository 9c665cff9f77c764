"""Build rewrite rules for every combination of a resource's filter keys.

Given a base path such as ``articles/`` and the ordered mapping of filter-key
names to path slugs (``{"category": "cat", "post_tag": "tag"}``), the builder
emits one rewrite pattern per ordering of every non-empty subset of the keys,
together with the query string that binds each captured group to its key. Every
rule also gets a paginated twin with a trailing ``page/N`` capture.

The resulting mapping is ordered and first-wins: a pattern that appears twice
(for instance when two keys share a slug) keeps the query it was first paired
with.

Example
-------
>>> from catalog_routes.rules import generate_rules
>>> rules = generate_rules("article", "articles/", {"category": "cat"})
>>> for pattern, query in rules.items():
...     print(pattern, "=>", query)
articles/cat/([^/]+)/page/([0-9]{1,})/?$ => index.php?post_type=article&category=$matches[1]&paged=$matches[2]
articles/cat/([^/]+)/?$ => index.php?post_type=article&category=$matches[1]

Preconditions
-------------
Filter-key names and slugs are inserted verbatim. Values containing regular
expression metacharacters, ``/``, ``&`` or ``=`` produce patterns or queries
the routing engine will misread; the configuration layer is responsible for
supplying clean identifiers.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from ._constants import (
    CAPTURE_REFERENCE_TEMPLATE,
    CAPTURE_SEGMENT,
    DEFAULT_MAX_FILTER_KEYS,
    DEFAULT_QUERY_PREFIX,
    PAGINATION_QUERY_VAR,
    PAGINATION_SEGMENT,
    PATTERN_TERMINATOR,
    QUERY_BASE_TEMPLATE,
)
from .permutations import count_permutations, permute_all

if typ.TYPE_CHECKING:
    from .config import ResourceConfig


class FilterKeyLimitError(ValueError):
    """Raised when a resource has too many filter keys to enumerate safely."""


@dc.dataclass(frozen=True, slots=True)
class PaginatedRule:
    """A rewrite rule and its paginated counterpart.

    Attributes
    ----------
    pattern : str
        End-anchored pattern with an optional trailing slash.
    query : str
        Query template bound to ``pattern``'s capture groups.
    paged_pattern : str
        ``pattern`` extended with a ``page/N`` capture segment.
    paged_query : str
        ``query`` extended with the page-number binding.
    """

    pattern: str
    query: str
    paged_pattern: str
    paged_query: str

    def items(self) -> list[tuple[str, str]]:
        """Return ``(pattern, query)`` pairs, paginated variant first."""
        return [(self.paged_pattern, self.paged_query), (self.pattern, self.query)]


@dc.dataclass(frozen=True, slots=True)
class RuleSetSummary:
    """Counts describing a generated rule mapping."""

    total: int
    paginated: int

    @property
    def plain(self) -> int:
        return self.total - self.paginated


def capture_reference(index: int) -> str:
    """Return the query-side reference to the 1-based capture ``index``."""
    return CAPTURE_REFERENCE_TEMPLATE.format(index=index)


def resolve_base_path(rewrite_slug: str, has_archive: bool | str | None) -> str:
    """Return the path prefix under which a resource's filter rules live.

    ``has_archive`` is ``True`` when the archive is served from the resource's
    rewrite slug, or a string naming a custom archive path. Any falsy value
    yields ``"/"``; rules rooted there are rarely useful but the value is kept
    so existing route tables stay stable.

    >>> resolve_base_path("articles", True)
    'articles/'
    >>> resolve_base_path("articles", "library/articles")
    'library/articles/'
    >>> resolve_base_path("articles", False)
    '/'
    """
    if has_archive is True:
        return f"{rewrite_slug}/"
    if isinstance(has_archive, str) and has_archive:
        return f"{has_archive}/"
    return "/"


def paginate(pattern: str, query: str, pagination_index: int) -> PaginatedRule:
    """Terminate ``pattern`` and derive its paginated variant.

    Parameters
    ----------
    pattern : str
        Unterminated rewrite pattern ending in ``/``.
    query : str
        Query template for ``pattern``.
    pagination_index : int
        Capture index of the page number, one past the last filter capture.

    Returns
    -------
    PaginatedRule
        Both variants, each made end-anchored with an optional trailing slash.
    """
    paged_pattern = pattern + PAGINATION_SEGMENT + PATTERN_TERMINATOR
    paged_query = (
        f"{query}&{PAGINATION_QUERY_VAR}={capture_reference(pagination_index)}"
    )
    return PaginatedRule(
        pattern=pattern + PATTERN_TERMINATOR,
        query=query,
        paged_pattern=paged_pattern,
        paged_query=paged_query,
    )


def add_rule_with_pagination(
    rules: cabc.Mapping[str, str],
    pattern: str,
    query: str,
    pagination_index: int,
) -> dict[str, str]:
    """Return ``rules`` merged with ``pattern`` and its paginated variant.

    Existing entries are never overwritten.
    """
    merged = dict(rules)
    _merge_first_wins(merged, paginate(pattern, query, pagination_index))
    return merged


def _merge_first_wins(rules: dict[str, str], rule: PaginatedRule) -> None:
    for pattern, query in rule.items():
        rules.setdefault(pattern, query)


def generate_rules(
    post_type: str,
    base_path: str,
    filter_keys: cabc.Mapping[str, str],
    *,
    query_prefix: str = DEFAULT_QUERY_PREFIX,
    max_filter_keys: int = DEFAULT_MAX_FILTER_KEYS,
) -> dict[str, str]:
    """Generate rewrite rules for every ordering of every subset of filter keys.

    Parameters
    ----------
    post_type : str
        Resource type bound in every query (``post_type=<post_type>``).
    base_path : str
        Path prefix including its trailing ``/``, usually obtained from
        :func:`resolve_base_path`.
    filter_keys : Mapping[str, str]
        Ordered mapping of query-variable name to path slug.
    query_prefix : str, optional
        Script the queries are addressed to, ``index.php`` by default.
    max_filter_keys : int, optional
        Upper bound on ``len(filter_keys)``; the rule count grows factorially.

    Returns
    -------
    dict[str, str]
        Ordered pattern to query mapping. Empty when ``filter_keys`` is empty.

    Raises
    ------
    FilterKeyLimitError
        If ``filter_keys`` holds more than ``max_filter_keys`` entries.
    """
    key_count = len(filter_keys)
    if key_count > max_filter_keys:
        msg = (
            f"Refusing to generate rules for '{post_type}': {key_count} filter keys "
            f"exceed the limit of {max_filter_keys} "
            f"({2 * count_permutations(key_count)} rules would be produced)."
        )
        raise FilterKeyLimitError(msg)

    query_base = QUERY_BASE_TEMPLATE.format(prefix=query_prefix, post_type=post_type)
    name_combos = permute_all(list(filter_keys.keys()))
    slug_combos = permute_all(list(filter_keys.values()))

    rules: dict[str, str] = {}
    for names, slugs in zip(name_combos, slug_combos, strict=True):
        pattern = base_path + CAPTURE_SEGMENT.join(slugs) + CAPTURE_SEGMENT
        query = query_base + "".join(
            f"&{name}={capture_reference(position)}"
            for position, name in enumerate(names, start=1)
        )
        _merge_first_wins(rules, paginate(pattern, query, len(names) + 1))
    return rules


def generate_resource_rules(
    resource: ResourceConfig, *, max_filter_keys: int | None = None
) -> dict[str, str]:
    """Generate the rule mapping for a configured resource type."""
    return generate_rules(
        resource.name,
        resource.base_path,
        resource.filter_keys(),
        query_prefix=resource.query_prefix,
        max_filter_keys=(
            DEFAULT_MAX_FILTER_KEYS if max_filter_keys is None else max_filter_keys
        ),
    )


def summarize_rules(rules: cabc.Mapping[str, str]) -> RuleSetSummary:
    """Count the rules in ``rules`` and how many of them are paginated."""
    paginated = sum(
        1
        for pattern in rules
        if pattern.endswith(PAGINATION_SEGMENT + PATTERN_TERMINATOR)
    )
    return RuleSetSummary(total=len(rules), paginated=paginated)


__all__ = [
    "FilterKeyLimitError",
    "PaginatedRule",
    "RuleSetSummary",
    "add_rule_with_pagination",
    "capture_reference",
    "generate_resource_rules",
    "generate_rules",
    "paginate",
    "resolve_base_path",
    "summarize_rules",
]

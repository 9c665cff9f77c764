"""In-memory routing table for generated catalog rewrite rules.

:class:`RouteTable` stands in for the routing engine that normally consumes the
rule builder's output. Rules are registered in order with first-wins semantics,
and :meth:`RouteTable.resolve` walks them in that order, returning the query
variables bound by the first pattern that matches a request path.

Example
-------
>>> from catalog_routes.routing import RouteTable
>>> from catalog_routes.rules import generate_rules
>>> table = RouteTable(generate_rules("article", "articles/", {"category": "cat"}))
>>> table.resolve("/articles/cat/news/page/2/").params
{'post_type': 'article', 'category': 'news', 'paged': '2'}
>>> table.resolve("/articles/unknown/news/") is None
True
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from urllib.parse import parse_qsl, quote, unquote, urlsplit

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_CAPTURE_REFERENCE = re.compile(r"\$matches\[(\d+)\]")


@dc.dataclass(frozen=True, slots=True)
class RouteMatch:
    """Outcome of resolving a request path against a route table.

    Attributes
    ----------
    pattern : str
        The rewrite pattern that matched.
    query : str
        The query template with capture references substituted.
    params : dict[str, str]
        Query variables parsed from ``query``, in template order.
    """

    pattern: str
    query: str
    params: dict[str, str]


class RouteTable:
    """Ordered, first-wins collection of rewrite rules."""

    def __init__(self, rules: cabc.Mapping[str, str] | None = None) -> None:
        self._rules: dict[str, str] = {}
        self._compiled: dict[str, re.Pattern[str]] = {}
        if rules:
            self.register(rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._rules

    @property
    def rules(self) -> dict[str, str]:
        """Return a copy of the registered rules in match order."""
        return dict(self._rules)

    def register(self, rules: cabc.Mapping[str, str]) -> int:
        """Add ``rules`` after the existing ones, keeping earlier duplicates.

        Returns
        -------
        int
            Number of patterns that were not registered before.
        """
        added = 0
        for pattern, query in rules.items():
            if pattern in self._rules:
                continue
            self._rules[pattern] = query
            added += 1
        return added

    def resolve(self, path: str) -> RouteMatch | None:
        """Return the first rule matching ``path``, or ``None``.

        ``path`` may be a full URL or an absolute path; the query string and
        fragment are ignored and the leading slash is dropped. Matching runs on
        the still-encoded path so an escaped ``%2F`` stays inside its segment;
        captured values are decoded afterwards.
        """
        candidate = urlsplit(path).path.lstrip("/")
        for pattern, template in self._rules.items():
            match = self._compile(pattern).match(candidate)
            if match is None:
                continue
            groups = tuple(unquote(group or "") for group in match.groups())
            query = _substitute_captures(template, groups)
            return RouteMatch(pattern=pattern, query=query, params=_parse_query(query))
        return None

    def _compile(self, pattern: str) -> re.Pattern[str]:
        compiled = self._compiled.get(pattern)
        if compiled is None:
            compiled = re.compile(pattern)
            self._compiled[pattern] = compiled
        return compiled


def _substitute_captures(template: str, groups: tuple[str, ...]) -> str:
    def replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < 1 or index > len(groups):
            return ""
        return quote(groups[index - 1], safe="")

    return _CAPTURE_REFERENCE.sub(replace, template)


def _parse_query(query: str) -> dict[str, str]:
    _, _, query_string = query.partition("?")
    return dict(parse_qsl(query_string, keep_blank_values=True))


__all__ = ["RouteMatch", "RouteTable"]

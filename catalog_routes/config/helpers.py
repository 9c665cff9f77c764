"""Utility helpers shared by the routing configuration loader."""

from __future__ import annotations

import typing as typ

from .models import RoutesConfigError, TaxonomyConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: object | None, *, field: str) -> list[str]:
    """Normalize a list of identifiers, rejecting non-list payloads."""
    match value:
        case None:
            return []
        case str() as text:
            return [text.strip()] if text.strip() else []
        case list():
            return [text for item in value if (text := str(item).strip())]
        case _:
            msg = f"'{field}' must be a list of names."
            raise RoutesConfigError(msg)


def _parse_has_archive(value: object, *, resource: str) -> bool | str:
    """Return ``True``/``False`` or a custom archive path with slashes trimmed."""
    match value:
        case bool():
            return value
        case None:
            return False
        case str() as text:
            return text.strip().strip("/")
        case _:
            msg = f"Resource '{resource}' has an invalid 'has_archive' value."
            raise RoutesConfigError(msg)


def _parse_taxonomies(
    payload: object | None, *, resource: str
) -> list[TaxonomyConfig]:
    """Build taxonomy entries from a ``query_var -> slug`` mapping or name list.

    A ``null`` or ``false`` slug, or a bare name in a list, means the taxonomy
    has no rewrite slug.
    """
    if payload is None:
        return []
    if isinstance(payload, list):
        return [TaxonomyConfig(str(query_var)) for query_var in payload]
    if not isinstance(payload, dict):
        msg = f"Resource '{resource}' must define 'taxonomies' as a mapping or list."
        raise RoutesConfigError(msg)
    taxonomies: list[TaxonomyConfig] = []
    for query_var, slug in payload.items():
        rewrite_slug = None if slug is False else _optional_str(slug)
        taxonomies.append(TaxonomyConfig(str(query_var), rewrite_slug))
    return taxonomies


def _parse_query_vars(payload: object | None, *, resource: str) -> dict[str, str]:
    """Build the extra ``name -> slug`` mapping; empty slugs reuse the name."""
    if payload is None:
        return {}
    if isinstance(payload, list):
        return {str(name): str(name) for name in payload}
    if not isinstance(payload, dict):
        msg = f"Resource '{resource}' must define 'query_vars' as a mapping or list."
        raise RoutesConfigError(msg)
    return {
        str(name): _optional_str(slug) or str(name) for name, slug in payload.items()
    }


def _positive_int(value: typ.Any, *, field: str) -> int:
    """Coerce ``value`` to an integer of at least one."""
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        msg = f"'{field}' must be an integer."
        raise RoutesConfigError(msg) from exc
    if number < 1:
        msg = f"'{field}' must be at least 1."
        raise RoutesConfigError(msg)
    return number


__all__ = [
    "_optional_str",
    "_parse_has_archive",
    "_parse_query_vars",
    "_parse_taxonomies",
    "_positive_int",
    "_string_list",
]

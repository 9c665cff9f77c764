"""Typed dataclasses describing catalog routing configuration."""

from __future__ import annotations

import dataclasses as dc

from .._constants import DEFAULT_MAX_FILTER_KEYS, DEFAULT_QUERY_PREFIX
from ..rules import resolve_base_path


class RoutesConfigError(ValueError):
    """Raised when the routing configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class TaxonomyConfig:
    """A classification dimension that content of a resource can be filtered by.

    Attributes
    ----------
    query_var : str
        Query-variable name bound in generated queries.
    rewrite_slug : str or None
        Path segment used in URLs; ``None`` when the taxonomy has no rewrite
        slug and the query variable doubles as the segment.
    """

    query_var: str
    rewrite_slug: str | None = None

    @property
    def slug(self) -> str:
        return self.rewrite_slug or self.query_var


@dc.dataclass(slots=True)
class ResourceConfig:
    """A filterable resource type (for example a post type) and its filters."""

    name: str
    rewrite_slug: str
    has_archive: bool | str = True
    enabled: bool = True
    taxonomies: list[TaxonomyConfig] = dc.field(default_factory=list)
    excluded_taxonomies: list[str] = dc.field(default_factory=list)
    query_vars: dict[str, str] = dc.field(default_factory=dict)
    query_prefix: str = DEFAULT_QUERY_PREFIX

    @property
    def slug(self) -> str:
        """Return the rewrite slug, falling back to the resource name."""
        return self.rewrite_slug or self.name

    @property
    def base_path(self) -> str:
        return resolve_base_path(self.slug, self.has_archive)

    def filter_keys(self) -> dict[str, str]:
        """Return the ordered ``query_var -> slug`` mapping used for rules.

        Taxonomies listed in ``excluded_taxonomies`` are skipped. Extra query
        variables are appended after the taxonomies and never replace one.
        """
        keys: dict[str, str] = {}
        for taxonomy in self.taxonomies:
            if taxonomy.query_var in self.excluded_taxonomies:
                continue
            keys[taxonomy.query_var] = taxonomy.slug
        for name, slug in self.query_vars.items():
            keys.setdefault(name, slug)
        return keys


@dc.dataclass(slots=True)
class RoutesConfig:
    """Root configuration for catalog route generation."""

    resources: dict[str, ResourceConfig]
    max_filter_keys: int = DEFAULT_MAX_FILTER_KEYS

    def get_resource(self, name: str) -> ResourceConfig:
        """Return the resource configured under ``name``.

        Raises
        ------
        RoutesConfigError
            If no resource with that name is configured.
        """
        try:
            return self.resources[name]
        except KeyError as exc:
            msg = f"Unknown resource '{name}'."
            raise RoutesConfigError(msg) from exc

    def enabled_resources(self) -> list[ResourceConfig]:
        return [resource for resource in self.resources.values() if resource.enabled]


__all__ = [
    "ResourceConfig",
    "RoutesConfig",
    "RoutesConfigError",
    "TaxonomyConfig",
]

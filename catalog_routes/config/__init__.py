"""Load and validate routing configuration YAML for catalog filter routes.

This subpackage parses the project's ``routes.yaml`` file, applies global
defaults to each resource entry, and produces typed dataclasses
(:class:`RoutesConfig`, :class:`ResourceConfig`, :class:`TaxonomyConfig`) that
the rule builder consumes. The primary entry point is
:func:`load_routes_config`.

Examples
--------
>>> from pathlib import Path
>>> from catalog_routes.config import load_routes_config
>>> config = load_routes_config(Path("routes.yaml"))  # doctest: +SKIP
>>> config.get_resource("article").base_path  # doctest: +SKIP
'articles/'
"""

from .loader import load_routes_config, resource_slug
from .models import (
    ResourceConfig,
    RoutesConfig,
    RoutesConfigError,
    TaxonomyConfig,
)

__all__ = [
    "ResourceConfig",
    "RoutesConfig",
    "RoutesConfigError",
    "TaxonomyConfig",
    "load_routes_config",
    "resource_slug",
]

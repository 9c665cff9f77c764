"""Load routing configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ruamel.yaml import YAML

from .._constants import DEFAULT_MAX_FILTER_KEYS, DEFAULT_QUERY_PREFIX
from .helpers import (
    _optional_str,
    _parse_has_archive,
    _parse_query_vars,
    _parse_taxonomies,
    _positive_int,
    _string_list,
)
from .models import ResourceConfig, RoutesConfig, RoutesConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_routes_config(path: Path) -> RoutesConfig:
    """Load the YAML configuration describing filterable resource types.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML routing configuration (for example,
        ``routes.yaml``).

    Returns
    -------
    RoutesConfig
        Parsed configuration holding every resource, in file order, with
        defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    RoutesConfigError
        If no resources are defined or a resource entry is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from catalog_routes.config import load_routes_config
    >>> config = load_routes_config(Path("routes.yaml"))  # doctest: +SKIP
    >>> config.get_resource("article").filter_keys()  # doctest: +SKIP
    {'category': 'cat', 'post_tag': 'tag'}
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    if not isinstance(defaults, dict):
        msg = "'defaults' must be a mapping."
        raise RoutesConfigError(msg)

    resource_defaults = _ResourceDefaults(
        query_prefix=_optional_str(defaults.get("query_prefix"))
        or DEFAULT_QUERY_PREFIX,
        excluded_taxonomies=_string_list(
            defaults.get("excluded_taxonomies"), field="defaults.excluded_taxonomies"
        ),
    )
    max_filter_keys = _positive_int(
        defaults.get("max_filter_keys", DEFAULT_MAX_FILTER_KEYS),
        field="defaults.max_filter_keys",
    )

    resources_raw = raw.get("resources") or {}
    if not resources_raw:
        msg = "No resources defined in routing configuration."
        raise RoutesConfigError(msg)
    if not isinstance(resources_raw, dict):
        msg = "'resources' must be a mapping of resource names."
        raise RoutesConfigError(msg)

    resources: dict[str, ResourceConfig] = {}
    for key, payload in resources_raw.items():
        match payload:
            case dict():
                resources[str(key)] = _build_resource_config(
                    name=str(key), payload=payload, defaults=resource_defaults
                )
            case None:
                resources[str(key)] = _build_resource_config(
                    name=str(key), payload={}, defaults=resource_defaults
                )
            case _:
                msg = f"Resource '{key}' must be a mapping."
                raise RoutesConfigError(msg)

    return RoutesConfig(resources=resources, max_filter_keys=max_filter_keys)


@dc.dataclass(slots=True)
class _ResourceDefaults:
    """Internal container for resource default configuration values."""

    query_prefix: str
    excluded_taxonomies: list[str]


def _build_resource_config(
    *,
    name: str,
    payload: typ.Mapping[str, typ.Any],
    defaults: _ResourceDefaults,
) -> ResourceConfig:
    """Build a ResourceConfig for a single entry using defaults and overrides."""
    rewrite_slug = _optional_str(payload.get("rewrite_slug")) or name
    has_archive = _parse_has_archive(payload.get("has_archive", True), resource=name)
    if "excluded_taxonomies" in payload:
        excluded = _string_list(
            payload.get("excluded_taxonomies"),
            field=f"resources.{name}.excluded_taxonomies",
        )
    else:
        excluded = list(defaults.excluded_taxonomies)

    return ResourceConfig(
        name=name,
        rewrite_slug=rewrite_slug.strip("/"),
        has_archive=has_archive,
        enabled=bool(payload.get("enabled", True)),
        taxonomies=_parse_taxonomies(payload.get("taxonomies"), resource=name),
        excluded_taxonomies=excluded,
        query_vars=_parse_query_vars(payload.get("query_vars"), resource=name),
        query_prefix=_optional_str(payload.get("query_prefix"))
        or defaults.query_prefix,
    )


def resource_slug(config: RoutesConfig, name: str) -> str:
    """Return the rewrite slug of the resource configured under ``name``."""
    return config.get_resource(name).slug


__all__ = ["load_routes_config", "resource_slug"]

"""Cyclopts CLI entrypoint for generating and checking catalog filter routes.

The ``routes`` console script defined here reads ``routes.yaml``, expands every
enabled resource's filter keys into rewrite rules, and either prints them or
writes them to a file for the routing engine to load. ``routes match`` resolves
a request path against the generated rules, which is handy when checking what
a filtered archive URL will query, and ``routes slug`` reports a resource's
rewrite slug.

Examples
--------
Print every rule for the default configuration:

>>> from catalog_routes.cli import main
>>> main()  # doctest: +SKIP

Write the rules for one resource as JSON:

>>> from catalog_routes.cli import app
>>> app(
...     ["generate", "--resource", "article", "--format", "json",
...      "--output", "dist/article-routes.json"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_routes_config, resource_slug
from .export import RuleFormat, render_rules
from .routing import RouteTable
from .rules import generate_resource_rules, summarize_rules

if typ.TYPE_CHECKING:
    from .config import ResourceConfig, RoutesConfig

DEFAULT_CONFIG = Path("config/routes.yaml")

app = App(name="routes", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _select_resources(
    routes_config: RoutesConfig, resource: str | None
) -> list[ResourceConfig]:
    if resource:
        return [routes_config.get_resource(resource)]
    return routes_config.enabled_resources()


def _collect_rules(
    routes_config: RoutesConfig, resources: list[ResourceConfig]
) -> dict[str, dict[str, str]]:
    return {
        item.name: generate_resource_rules(
            item, max_filter_keys=routes_config.max_filter_keys
        )
        for item in resources
    }


@app.command(help="Generate rewrite rules for every filter-key combination.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to routes config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    resource: typ.Annotated[
        str | None, Parameter(help="Resource identifier", env_var="INPUT_RESOURCE")
    ] = None,
    fmt: typ.Annotated[
        RuleFormat,
        Parameter(name="--format", help="Output format", env_var="INPUT_FORMAT"),
    ] = "text",
    output: typ.Annotated[
        Path | None,
        Parameter(help="Write rules to this file", env_var="INPUT_OUTPUT"),
    ] = None,
) -> None:
    """Generate rewrite rules for the configured resources.

    Parameters
    ----------
    config : Path, optional
        Path to the ``routes.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    resource : str or None, optional
        Resource to generate rules for; when ``None`` (default) every enabled
        resource is processed. Naming a disabled resource still generates it.
    fmt : {"text", "json", "yaml"}, optional
        Serialisation used for the rules.
    output : Path or None, optional
        File receiving the rules. When ``None`` the rules are printed.

    Returns
    -------
    None
        Prints one summary line per resource to stderr, then either the rules
        or the path they were written to on stdout.

    Raises
    ------
    RoutesConfigError
        If ``resource`` is unknown or the configuration is invalid.
    FilterKeyLimitError
        If a resource has more filter keys than ``max_filter_keys`` allows.
    """
    routes_config = load_routes_config(config)
    per_resource = _collect_rules(
        routes_config, _select_resources(routes_config, resource)
    )

    combined: dict[str, str] = {}
    for name, rules in per_resource.items():
        summary = summarize_rules(rules)
        print(
            f"{name}: {summary.total} rules ({summary.paginated} paginated)",
            file=sys.stderr,
        )
        for pattern, query in rules.items():
            combined.setdefault(pattern, query)

    rendered = render_rules(combined, fmt)
    if output is None:
        print(rendered, end="")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Show which query a request path resolves to.")
def match(
    path: str,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to routes config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    resource: typ.Annotated[
        str | None, Parameter(help="Resource identifier", env_var="INPUT_RESOURCE")
    ] = None,
) -> None:
    """Resolve ``path`` against the generated rules and print the result.

    Raises
    ------
    LookupError
        If no generated rule matches ``path``.
    """
    routes_config = load_routes_config(config)
    table = RouteTable()
    for rules in _collect_rules(
        routes_config, _select_resources(routes_config, resource)
    ).values():
        table.register(rules)

    result = table.resolve(path)
    if result is None:
        msg = f"No rewrite rule matches '{path}'."
        raise LookupError(msg)
    print(f"pattern: {result.pattern}")
    print(f"query: {result.query}")
    for key, value in result.params.items():
        print(f"  {key} = {value}")


@app.command(help="Print the rewrite slug of a resource.")
def slug(
    name: str,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to routes config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print the rewrite slug configured for resource ``name``."""
    print(resource_slug(load_routes_config(config), name))


def main() -> None:
    """Invoke the Cyclopts application that powers the `routes` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

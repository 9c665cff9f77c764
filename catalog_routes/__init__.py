"""Generate URL rewrite rules for filtering a content catalog by taxonomy.

This package expands a resource's filter keys (taxonomies and extra query
variables) into rewrite rules covering every ordering of every subset of those
keys, each paired with the query it maps to and a paginated variant. The
``routes`` console script wraps the generator for use from CI or a shell.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``generate_rules``: Build the pattern to query mapping for one resource.
- ``permute_all``: Enumerate ordered arrangements of every non-empty subset.

Examples
--------
>>> from catalog_routes import generate_rules
>>> len(generate_rules("article", "articles/", {"category": "cat", "post_tag": "tag"}))
8
"""

from __future__ import annotations

from .cli import app, main
from .permutations import permute_all
from .rules import generate_rules

__all__ = ["app", "generate_rules", "main", "permute_all"]

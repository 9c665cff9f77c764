"""Common literal values used across catalog_routes.

These constants keep the rewrite pattern fragments and query template pieces
in one place so the rule builder, the routing table, and tests agree on the
exact strings a routing engine receives.

Examples
--------
>>> from catalog_routes import _constants
>>> _constants.CAPTURE_REFERENCE_TEMPLATE.format(index=2)
'$matches[2]'
>>> "articles/cat" + _constants.CAPTURE_SEGMENT + _constants.PATTERN_TERMINATOR
'articles/cat/([^/]+)/?$'
"""

CAPTURE_SEGMENT = "/([^/]+)/"
PAGINATION_SEGMENT = "page/([0-9]{1,})/"
PATTERN_TERMINATOR = "?$"
CAPTURE_REFERENCE_TEMPLATE = "$matches[{index}]"
QUERY_BASE_TEMPLATE = "{prefix}?post_type={post_type}"
PAGINATION_QUERY_VAR = "paged"
DEFAULT_QUERY_PREFIX = "index.php"
DEFAULT_MAX_FILTER_KEYS = 8

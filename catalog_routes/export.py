"""Serialise generated rule mappings for routing engines and humans.

Three formats are supported:

``text``
    One ``pattern => query`` line per rule, in match order.
``json``
    A pretty-printed JSON object mapping patterns to queries.
``yaml``
    A YAML mapping with the same content, suitable for checking into a repo.

Example
-------
>>> from catalog_routes.export import render_rules
>>> print(render_rules({"articles/?$": "index.php?post_type=article"}, "text"), end="")
articles/?$ => index.php?post_type=article
"""

from __future__ import annotations

import io
import typing as typ

import msgspec.json
from ruamel.yaml import YAML

if typ.TYPE_CHECKING:
    import collections.abc as cabc

RuleFormat = typ.Literal["text", "json", "yaml"]
FORMATS: tuple[str, ...] = typ.get_args(RuleFormat)


def render_rules(rules: cabc.Mapping[str, str], fmt: str = "text") -> str:
    """Return ``rules`` rendered in ``fmt``, always ending with a newline.

    Raises
    ------
    ValueError
        If ``fmt`` is not one of :data:`FORMATS`.
    """
    match fmt:
        case "text":
            return "".join(f"{pattern} => {query}\n" for pattern, query in rules.items())
        case "json":
            encoded = msgspec.json.format(msgspec.json.encode(dict(rules)), indent=2)
            return encoded.decode("utf-8") + "\n"
        case "yaml":
            return _dump_yaml(dict(rules))
        case _:
            msg = f"Unsupported rule format '{fmt}'; expected one of {', '.join(FORMATS)}."
            raise ValueError(msg)


def _dump_yaml(payload: dict[str, str]) -> str:
    yaml = YAML()
    yaml.width = 4096
    yaml.default_flow_style = False
    stream = io.StringIO()
    yaml.dump(payload, stream)
    return stream.getvalue()


__all__ = ["FORMATS", "RuleFormat", "render_rules"]

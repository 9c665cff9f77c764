"""Unit tests for loading ``routes.yaml`` configuration files.

These tests cover how resource entries are merged with defaults, how taxonomy
slugs fall back to their query variables, and how malformed files surface as
:class:`RoutesConfigError`.

Usage
-----
Run ``pytest tests/test_config_loader.py -v``. Only pytest's built-in
``tmp_path`` fixture is required.
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from catalog_routes.config import (
    RoutesConfigError,
    TaxonomyConfig,
    load_routes_config,
    resource_slug,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "routes.yaml"
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_resources_are_loaded_with_defaults(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path,
        """
        defaults:
          max_filter_keys: 5
          excluded_taxonomies: [post_format]
        resources:
          article:
            rewrite_slug: articles
            taxonomies:
              category: cat
              post_tag: null
              post_format: format
            query_vars:
              author_name: writer
          event:
            has_archive: calendar/events/
            enabled: false
            excluded_taxonomies: []
            taxonomies:
              venue: false
        """,
    )
    config = load_routes_config(config_path)

    assert config.max_filter_keys == 5
    assert list(config.resources) == ["article", "event"]

    article = config.get_resource("article")
    assert article.taxonomies[1] == TaxonomyConfig("post_tag", None)
    assert article.filter_keys() == {
        "category": "cat",
        "post_tag": "post_tag",
        "author_name": "writer",
    }, f"unexpected filter keys: {article.filter_keys()!r}"
    assert article.base_path == "articles/"
    assert article.query_prefix == "index.php"

    event = config.get_resource("event")
    assert event.rewrite_slug == "event", "expected rewrite slug to default to the key"
    assert event.base_path == "calendar/events/"
    assert event.filter_keys() == {"venue": "venue"}
    assert [item.name for item in config.enabled_resources()] == ["article"]


def test_query_vars_never_replace_taxonomies(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path,
        """
        resources:
          article:
            taxonomies:
              category: cat
            query_vars:
              category: other
              year: ""
        """,
    )
    article = load_routes_config(config_path).get_resource("article")
    assert article.filter_keys() == {"category": "cat", "year": "year"}


def test_taxonomies_accept_a_list_of_names(tmp_path: Path) -> None:
    """Listed taxonomies should use their query variable as the slug."""
    config_path = _write_config(
        tmp_path,
        """
        resources:
          article:
            taxonomies: [category, post_tag]
            query_vars: [year]
        """,
    )
    article = load_routes_config(config_path).get_resource("article")
    assert article.taxonomies == [
        TaxonomyConfig("category"),
        TaxonomyConfig("post_tag"),
    ]
    assert article.filter_keys() == {
        "category": "category",
        "post_tag": "post_tag",
        "year": "year",
    }, f"unexpected filter keys: {article.filter_keys()!r}"


def test_missing_archive_flag_defaults_to_slug_archive(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path,
        """
        resources:
          book:
            rewrite_slug: /library/books/
        """,
    )
    book = load_routes_config(config_path).get_resource("book")
    assert book.rewrite_slug == "library/books"
    assert book.base_path == "library/books/"


def test_disabled_archive_keeps_bare_separator(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path,
        """
        resources:
          page:
            has_archive: false
        """,
    )
    assert load_routes_config(config_path).get_resource("page").base_path == "/"


def test_resource_slug_helper(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path,
        """
        resources:
          article:
            rewrite_slug: articles
          note:
        """,
    )
    config = load_routes_config(config_path)
    assert resource_slug(config, "article") == "articles"
    assert resource_slug(config, "note") == "note"


def test_unknown_resource_raises(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "resources:\n  article: {}\n")
    config = load_routes_config(config_path)
    with pytest.raises(RoutesConfigError, match="Unknown resource 'missing'"):
        config.get_resource("missing")


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_routes_config(tmp_path / "absent.yaml")


def test_non_mapping_document_raises(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "- article\n- event\n")
    with pytest.raises(TypeError):
        load_routes_config(config_path)


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("defaults: {}\n", "No resources defined"),
        ("resources:\n  article: [cat]\n", "Resource 'article' must be a mapping"),
        (
            "resources:\n  article:\n    taxonomies: cat\n",
            "'taxonomies' as a mapping or list",
        ),
        (
            "defaults:\n  max_filter_keys: 0\nresources:\n  article: {}\n",
            "must be at least 1",
        ),
        (
            "resources:\n  article:\n    has_archive: 3\n",
            "invalid 'has_archive'",
        ),
    ],
)
def test_malformed_config_raises(tmp_path: Path, body: str, message: str) -> None:
    config_path = _write_config(tmp_path, body)
    with pytest.raises(RoutesConfigError, match=message):
        load_routes_config(config_path)

"""Tests for the slug resolver."""

from __future__ import annotations

import pytest

from slugwiki.domain.slug import FALLBACK_SLUG, decide_slug, slugify


def taken(*slugs):
    in_use = set(slugs)
    return lambda article_id, slug: slug in in_use


def test_slugify_normalizes_titles():
    assert slugify("Hello World") == "hello-world"
    assert slugify("  Hello,   World!  ") == "hello-world"
    assert slugify("hello-world") == "hello-world"
    assert slugify("Crème Brûlée") == "creme-brulee"
    assert slugify("") == ""


def test_new_article_gets_title_slug():
    assert decide_slug(1, "", "Hello World", slug_in_use=taken()) == "hello-world"


def test_taken_slug_is_disambiguated():
    assert decide_slug(2, "", "Hello World", slug_in_use=taken("hello-world")) == "hello-world-2"
    assert (
        decide_slug(3, "", "Hello World", slug_in_use=taken("hello-world", "hello-world-2"))
        == "hello-world-3"
    )


def test_disambiguation_skips_only_taken_suffixes():
    in_use = taken("hello-world", "hello-world-2", "hello-world-4")
    assert decide_slug(5, "", "Hello World", slug_in_use=in_use) == "hello-world-3"


def test_front_page_never_gets_a_slug():
    assert decide_slug(1, "Main", "Something Else", "", slug_in_use=taken()) == ""
    assert decide_slug(1, "", "Main Page", "", slug_in_use=taken()) == ""


def test_unchanged_title_keeps_previous_slug():
    # even when the slug no longer matches a fresh derivation
    result = decide_slug(1, "Hello World", "Hello World", "hello-world-2", slug_in_use=taken())
    assert result == "hello-world-2"


def test_matching_previous_slug_is_kept_without_checking_usage():
    def never_called(article_id, slug):
        raise AssertionError("slug_in_use must not be consulted")

    result = decide_slug(1, "Hello World", "Hello, World!", "hello-world", slug_in_use=never_called)
    assert result == "hello-world"


def test_renamed_article_follows_its_title():
    result = decide_slug(1, "Hello World", "Goodbye World", "hello-world", slug_in_use=taken())
    assert result == "goodbye-world"


@pytest.mark.parametrize("title", ["!!!", "???", "---", "   "])
def test_unsluggable_titles_fall_back(title):
    assert decide_slug(1, "", title, slug_in_use=taken()) == FALLBACK_SLUG


def test_fallback_is_disambiguated_too():
    assert decide_slug(2, "", "!!!", slug_in_use=taken("article")) == "article-2"


@pytest.mark.parametrize(
    "title",
    ["Hello World", "a", "!!!", "日本語", "x" * 300, "Ünïcödé", "123", "-"],
)
def test_new_articles_never_get_empty_slug(title):
    assert decide_slug(1, "", title, None, slug_in_use=taken()) != ""


def test_usage_check_receives_article_id():
    seen = []

    def record(article_id, slug):
        seen.append((article_id, slug))
        return False

    decide_slug(42, "", "Hello", slug_in_use=record)

    assert seen == [(42, "hello")]


def test_html_entities_are_not_decoded():
    assert slugify("&amp; x") == "amp-x"
    assert slugify("Tom &#38; Jerry") == "tom-38-jerry"


def test_creation_target_is_used_when_free():
    assert decide_slug(1, "", "Hello World", "hello-world", slug_in_use=taken()) == "hello-world"


def test_creation_target_claimed_meanwhile_is_disambiguated():
    result = decide_slug(2, "", "Hello World", "hello-world", slug_in_use=taken("hello-world"))
    assert result == "hello-world-2"

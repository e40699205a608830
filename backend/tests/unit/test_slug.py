"""Unit tests for slug generation."""

from app.domain.slug import MAX_SLUG_LENGTH, generate_slug


def test_punctuation_is_dropped_and_words_hyphenated():
    assert generate_slug("Hello, World!") == "hello-world"


def test_separator_runs_collapse_to_one_hyphen():
    assert generate_slug("  Data  --  Privacy__Policy ") == "data-privacy-policy"


def test_slug_is_truncated():
    slug = generate_slug("word " * 60)
    assert len(slug) <= MAX_SLUG_LENGTH
    assert slug.startswith("word-word")


def test_non_ascii_letters_are_removed():
    assert generate_slug("Café Réglement") == "caf-rglement"


def test_title_without_allowed_characters_gives_empty_slug():
    assert generate_slug("!!! ???") == ""

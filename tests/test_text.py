"""Tests for text normalization helpers."""

import re

import pytest

from src.recommender.text import strip_punctuation, tokenize

TOKEN_RE = re.compile(r"^\w+$")


def test_tokenize_lowercases_and_drops_punctuation():
    assert tokenize("Wireless, Mouse!") == ["wireless", "mouse"]


def test_tokenize_splits_on_hyphens():
    assert tokenize("USB-C Cable") == ["usb", "c", "cable"]


def test_tokenize_keeps_short_tokens_and_digits():
    assert tokenize("a 4K tv") == ["a", "4k", "tv"]


def test_tokenize_empty_and_whitespace():
    assert tokenize("") == []
    assert tokenize("   \t\n ") == []
    assert tokenize("?!...") == []


def test_tokenize_keeps_underscores_and_unicode_letters():
    assert tokenize("snake_case Café") == ["snake_case", "café"]


@pytest.mark.parametrize(
    "text",
    [
        "Best-rated Wireless Keyboard (2024 edition)!!",
        "  $49.99 -- USB/C hub; 7 ports  ",
        "Crème brûlée torch, 'pro' model",
        "",
    ],
)
def test_tokenize_output_is_clean_and_idempotent(text):
    """Tokens are lower-case word characters, and tokenizing them again is a no-op."""
    tokens = tokenize(text)

    for token in tokens:
        assert token == token.lower()
        assert TOKEN_RE.match(token)

    assert tokenize(" ".join(tokens)) == tokens


def test_strip_punctuation_collapses_whitespace():
    assert strip_punctuation("  hello,   world! ") == "hello world"
    assert strip_punctuation("") == ""


def test_strip_punctuation_preserves_case():
    assert strip_punctuation("Wireless-Mouse") == "Wireless Mouse"

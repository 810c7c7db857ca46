"""Unit tests for bilingual text normalization"""

from domain.text.normalizer import MIN_TOKEN_LENGTH, normalize, tokenize


class TestNormalize:
    """Test normalize()"""

    def test_lowercases_and_collapses_punctuation(self):
        assert normalize("  Pepsi-Cola 330ML!! ") == "pepsi cola 330ml"

    def test_keeps_arabic_characters(self):
        assert normalize("بيبسي 330 مل") == "بيبسي 330 مل"

    def test_arabic_punctuation_inside_block_is_kept(self):
        """Arabic comma (U+060C) lies inside the Arabic block"""
        assert normalize("بيبسي، 330 مل") == "بيبسي، 330 مل"

    def test_mixed_script(self):
        assert normalize("Pepsi/بيبسي®") == "pepsi بيبسي"

    def test_underscore_is_a_separator(self):
        assert normalize("fresh_milk") == "fresh milk"

    def test_non_ascii_latin_letters_are_separators(self):
        assert normalize("Café") == "caf"

    def test_empty_and_none(self):
        assert normalize("") == ""
        assert normalize(None) == ""

    def test_only_punctuation(self):
        assert normalize("---!!!") == ""

    def test_idempotent(self):
        once = normalize("Almarai  Fresh Milk (1L)")
        assert normalize(once) == once


class TestTokenize:
    """Test tokenize()"""

    def test_drops_short_tokens(self):
        assert tokenize("Pepsi 330 ml can") == ["pepsi", "330", "can"]

    def test_arabic_tokens(self):
        assert tokenize("بيبسي 330 مل") == ["بيبسي", "330"]

    def test_preserves_order_and_duplicates(self):
        assert tokenize("milk fresh milk") == ["milk", "fresh", "milk"]

    def test_min_length_boundary(self):
        word = "a" * MIN_TOKEN_LENGTH
        assert tokenize(word) == [word]
        assert tokenize(word[:-1]) == []

    def test_empty(self):
        assert tokenize("") == []

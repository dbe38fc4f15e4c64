"""
Keyword Extraction Tests

Whole-token, case-insensitive matching against the design vocabulary.

Run:
----
    pytest tests/test_keywords.py -v
"""

from discovery.stages.keywords import DESIGN_VOCABULARY, extract_keywords


class TestExtractKeywords:

    def test_vocabulary_has_36_terms(self):
        assert len(DESIGN_VOCABULARY) == 36
        assert len(set(DESIGN_VOCABULARY)) == 36

    def test_matches_in_input_order(self):
        text = "I love the warm wood and open space"
        assert extract_keywords(text) == ["warm", "wood", "open", "space"]

    def test_case_insensitive(self):
        assert extract_keywords("Bright MODERN Sofa") == ["bright", "modern", "sofa"]

    def test_duplicates_kept(self):
        assert extract_keywords("wood wood and more wood") == ["wood", "wood", "wood"]

    def test_no_partial_or_punctuated_matches(self):
        # "colors," keeps its comma; "woodsy" is not "wood"
        assert extract_keywords("the colors, so woodsy") == []

    def test_empty_text(self):
        assert extract_keywords("") == []
        assert extract_keywords(None) == []

    def test_custom_vocabulary(self):
        assert extract_keywords("rattan and wicker chairs", ["rattan", "wicker"]) == [
            "rattan",
            "wicker",
        ]

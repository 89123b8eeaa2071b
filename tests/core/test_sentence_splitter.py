"""
Test suite for paragraph and sentence splitting.

System role: Verification of text segmentation heuristics
"""

from ragcore.configs import SentenceSplitMode
from ragcore.core.chunking import (
    split_paragraphs,
    split_sentences,
    split_sentences_basic,
    split_sentences_improved,
)


class TestSplitParagraphs:
    """Test suite for split_paragraphs."""

    def test_split_paragraphs_should_handle_all_break_styles(self) -> None:
        """Test LF, CRLF and CR blank lines all separate paragraphs."""
        text = "first\n\nsecond\r\n\r\nthird\r\rfourth"

        assert split_paragraphs(text) == ["first", "second", "third", "fourth"]

    def test_split_paragraphs_should_trim_and_drop_blank(self) -> None:
        """Test surrounding whitespace is trimmed and empty paragraphs dropped."""
        text = "  one  \n\n\n\n   \n\n two \n\n"

        assert split_paragraphs(text) == ["one", "two"]


class TestSplitSentencesBasic:
    """Test suite for punctuation-based splitting."""

    def test_split_should_break_after_terminal_punctuation(self) -> None:
        """Test '.', '!' and '?' followed by whitespace end sentences."""
        result = split_sentences_basic("Hello world. How are you? Fine!")

        assert result == ["Hello world.", "How are you?", "Fine!"]

    def test_split_should_not_break_inside_numbers(self) -> None:
        """Test a period not followed by whitespace is not a boundary."""
        assert split_sentences_basic("Version 1.5 is out.") == ["Version 1.5 is out."]

    def test_split_should_keep_unterminated_tail(self) -> None:
        """Test trailing text without punctuation is its own sentence."""
        assert split_sentences_basic("Done. and then") == ["Done.", "and then"]


class TestSplitSentencesImproved:
    """Test suite for abbreviation-aware splitting."""

    def test_split_should_skip_known_abbreviations(self) -> None:
        """Test 'Dr.' does not end a sentence."""
        result = split_sentences_improved("Dr. Smith arrived. He sat down.")

        assert result == ["Dr. Smith arrived.", "He sat down."]

    def test_split_should_require_capitalised_next_word(self) -> None:
        """Test punctuation followed by a lowercase word does not split."""
        result = split_sentences_improved("It costs 5 dollars. then it rose.")

        assert result == ["It costs 5 dollars. then it rose."]

    def test_split_should_treat_short_capitalised_tokens_as_abbreviations(self) -> None:
        """Test short capitalised words like 'St.' do not split."""
        result = split_sentences_improved("Meet at St. Mary church. Bring food.")

        assert result == ["Meet at St. Mary church.", "Bring food."]

    def test_split_should_end_sentence_on_lowercase_words_matching_dotted_entries(self) -> None:
        """Test 'no.' and 'approx.' end a sentence before a capitalised word."""
        result = split_sentences_improved("He said no. Then it cost approx. Ten more.")

        assert result == ["He said no.", "Then it cost approx.", "Ten more."]

    def test_split_sentences_should_dispatch_on_mode(self) -> None:
        """Test split_sentences selects the heuristic by mode."""
        text = "It costs 5 dollars. then it rose."

        assert len(split_sentences(text, SentenceSplitMode.BASIC)) == 2
        assert len(split_sentences(text, SentenceSplitMode.IMPROVED)) == 1

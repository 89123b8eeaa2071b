"""
Test suite for token counting strategies.

System role: Verification of chunk sizing primitives
"""

from unittest.mock import MagicMock, patch

from ragcore.configs import TokenizerMode
from ragcore.core.tokenization import (
    ApproximateTokenCounter,
    TiktokenTokenCounter,
    TokenCounter,
    build_token_counter,
)


class TestApproximateTokenCounter:
    """Test suite for the 4-characters-per-token estimate."""

    def test_count_tokens_should_return_zero_for_empty_text(self) -> None:
        """Test empty text has no tokens."""
        assert ApproximateTokenCounter().count_tokens("") == 0

    def test_count_tokens_should_round_up(self) -> None:
        """Test partial tokens count as a whole token."""
        counter = ApproximateTokenCounter()

        assert counter.count_tokens("abcd") == 1
        assert counter.count_tokens("abcde") == 2
        assert counter.count_tokens("x" * 400) == 100

    def test_model_name_should_identify_strategy(self) -> None:
        """Test model name used in logs."""
        assert ApproximateTokenCounter().model_name == "approx-4chars"


class TestTiktokenTokenCounter:
    """Test suite for tiktoken-backed counting."""

    def test_count_tokens_should_delegate_to_encoding(self) -> None:
        """Test exact counter returns the encoding's token count."""
        # Arrange
        encoding = MagicMock()
        encoding.encode.return_value = [1, 2, 3]
        with patch(
            "ragcore.core.tokenization.token_counter.tiktoken.get_encoding",
            return_value=encoding,
        ) as get_encoding:
            counter = TiktokenTokenCounter("cl100k_base")

            # Act
            count = counter.count_tokens("hello there")

        # Assert
        get_encoding.assert_called_once_with("cl100k_base")
        encoding.encode.assert_called_once_with("hello there", disallowed_special=())
        assert count == 3
        assert counter.model_name == "tiktoken-cl100k_base"

    def test_count_tokens_should_skip_encoding_for_empty_text(self) -> None:
        """Test empty text short-circuits to zero."""
        encoding = MagicMock()
        with patch(
            "ragcore.core.tokenization.token_counter.tiktoken.get_encoding",
            return_value=encoding,
        ):
            counter = TiktokenTokenCounter()

        assert counter.count_tokens("") == 0
        encoding.encode.assert_not_called()


class TestBuildTokenCounter:
    """Test suite for build_token_counter factory."""

    def test_build_token_counter_should_default_to_approximate(self) -> None:
        """Test approximate mode returns the character estimate."""
        counter = build_token_counter(TokenizerMode.APPROXIMATE)

        assert isinstance(counter, ApproximateTokenCounter)
        assert isinstance(counter, TokenCounter)

    def test_build_token_counter_should_use_tiktoken_for_exact_mode(self) -> None:
        """Test exact mode builds a tiktoken counter with the given encoding."""
        with patch(
            "ragcore.core.tokenization.token_counter.tiktoken.get_encoding",
            return_value=MagicMock(),
        ) as get_encoding:
            counter = build_token_counter(TokenizerMode.EXACT, "o200k_base")

        assert isinstance(counter, TiktokenTokenCounter)
        get_encoding.assert_called_once_with("o200k_base")

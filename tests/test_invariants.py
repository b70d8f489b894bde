"""Property-based tests for tokenizer invariants using Hypothesis.

These hold for any input text: the tokenizer always terminates, never
drops or duplicates a character, and never emits an empty token.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from studiolex.lib.lexer import StudioLexer
from studiolex.lib.tokenizer import Tokenizer
from studiolex.models.tokens import Category

# Characters that open, close or escape something in at least one state
SHELL_ALPHABET = list("ab_1 \t\n$(){}[]`'\"\\<>-#;|&=*!%+/.:@?") + ["EOF", "hab", "case", "esac", "in"]

shell_text = st.lists(st.sampled_from(SHELL_ALPHABET), max_size=80).map("".join)

tokenizer = Tokenizer()


class TestReconstruction:
    """Token texts concatenate back to the input"""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_arbitrary_text(self, source: str) -> None:
        tokens = tokenizer.tokenize(source)
        assert "".join(t.text for t in tokens) == source

    @given(shell_text)
    @settings(max_examples=500)
    def test_shell_like_text(self, source: str) -> None:
        tokens = tokenizer.tokenize(source)
        assert "".join(t.text for t in tokens) == source

    @given(shell_text)
    @settings(max_examples=200)
    def test_iterate_matches_tokenize(self, source: str) -> None:
        assert list(tokenizer.tokens_iterate(source)) == tokenizer.tokenize(source)


class TestProgress:
    """Every token advances the cursor"""

    @given(shell_text)
    @settings(max_examples=300)
    def test_offsets_contiguous_and_non_empty(self, source: str) -> None:
        position = 0
        for token in tokenizer.tokenize(source):
            assert token.text, "Tokens must not be empty"
            assert token.offset == position
            position = token.end
        assert position == len(source)

    @given(shell_text)
    @settings(max_examples=100)
    def test_categories_are_closed_set(self, source: str) -> None:
        for token in tokenizer.tokenize(source):
            assert isinstance(token.category, Category)


class TestPygmentsAdapter:
    """The Pygments lexer preserves the same invariants"""

    @given(shell_text)
    @settings(max_examples=100)
    def test_unprocessed_tokens_reconstruct(self, source: str) -> None:
        lexer = StudioLexer()
        parts = list(lexer.get_tokens_unprocessed(source))
        assert "".join(value for _, _, value in parts) == source
        for (index, _, value), token in zip(parts, tokenizer.tokenize(source)):
            assert index == token.offset
            assert value == token.text

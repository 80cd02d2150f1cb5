"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from rulelex import Lexer, TokenCategory, get_grammar, tokenize

LD = get_grammar("ldscript")

# Characters that exercise every ldscript rule
ld_alphabet = st.text(
    alphabet="ENTRYSECIONtextbd.0123456789xabfKMG_'\"#/*\\:;(){}=-+ \t\n",
    max_size=300,
)


class TestCoverage:
    """Tokens cover the source exactly."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_tokens_cover_source_without_gaps(self, source: str) -> None:
        """Consecutive tokens abut and span [0, len(source))."""
        tokens = list(Lexer(LD, source).tokenize())

        pos = 0
        for token in tokens:
            assert token.start == pos, f"gap or overlap at {pos}: {token!r}"
            assert token.end > token.start, f"empty token {token!r}"
            assert token.text == source[token.start : token.end]
            pos = token.end
        assert pos == len(source)

    @given(ld_alphabet)
    @settings(max_examples=300)
    def test_coverage_on_grammar_heavy_input(self, source: str) -> None:
        """Same property on input dense in comments, strings and numbers."""
        tokens = list(tokenize(source, "ldscript"))
        assert "".join(t.text for t in tokens) == source
        starts = [t.start for t in tokens]
        assert starts == sorted(starts)

    @given(ld_alphabet)
    @settings(max_examples=200)
    def test_no_adjacent_text_tokens(self, source: str) -> None:
        """Unclassified characters are merged into one run."""
        tokens = list(tokenize(source, "ldscript"))
        for left, right in zip(tokens, tokens[1:]):
            assert not (left.category is TokenCategory.TEXT and right.category is TokenCategory.TEXT)


class TestDeterminism:
    """Tokenizing is a pure function of grammar and source."""

    @given(ld_alphabet)
    @settings(max_examples=100)
    def test_repeated_tokenization_identical(self, source: str) -> None:
        first = list(tokenize(source, "ldscript"))
        second = list(tokenize(source, "ldscript"))
        assert first == second

    @given(ld_alphabet)
    @settings(max_examples=50)
    def test_same_lexer_restarts_from_zero(self, source: str) -> None:
        """Each tokenize() call on one Lexer starts over at offset 0."""
        lexer = Lexer(LD, source)
        first = list(lexer.tokenize())
        assert list(lexer.tokenize()) == first


class TestWhitespace:
    @given(st.text(alphabet=" \t\r\n\f\v", max_size=200))
    @settings(max_examples=100)
    def test_whitespace_only_is_unclassified(self, source: str) -> None:
        tokens = list(tokenize(source, "ldscript"))
        assert all(t.category is TokenCategory.TEXT for t in tokens)
        assert len(tokens) == (1 if source else 0)


class TestNeverRaises:
    @given(st.text(alphabet="/*\"'#\\\n", max_size=200))
    @settings(max_examples=100)
    def test_delimiter_soup(self, source: str) -> None:
        """Any combination of comment and string delimiters scans cleanly."""
        tokens = list(tokenize(source, "ldscript"))
        assert "".join(t.text for t in tokens) == source

    @given(st.text(alphabet="0123456789xbkKmMgG.-:_ ", max_size=200))
    @settings(max_examples=100)
    def test_number_soup_categories_exclusive(self, source: str) -> None:
        """Each numeric lexeme gets exactly one numeric category."""
        tokens = list(tokenize(source, "ldscript"))
        assert "".join(t.text for t in tokens) == source
        for token in tokens:
            if token.category is TokenCategory.NUMBER_DEC:
                assert not token.text.startswith(("0x", "0b"))

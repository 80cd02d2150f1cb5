"""Rule-based lexer with first-match-wins semantics.

Scans the source left to right. At each position the grammar's rules are
tried in declared order and the first non-empty match is committed. When no
rule matches, one character joins the pending unclassified run; the run is
emitted as a single TEXT token just before the next classified token, or at
end of input.

The produced tokens cover the source exactly: no gaps, no overlaps, in
increasing offset order. No input makes the lexer raise.

Thread Safety:
The scan cursor is a local of ``tokenize()``. A Lexer may be shared and
scanned from several threads at once; each call starts again at offset 0.

"""

from __future__ import annotations

from collections.abc import Iterator

from rulelex.grammar import Grammar
from rulelex.tokens import Token, TokenCategory


class Lexer:
    """Tokenizer bound to one grammar and one source string.

    Usage:
            >>> from rulelex import get_grammar
            >>> lexer = Lexer(get_grammar("ldscript"), "ENTRY(_start)")
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(KEYWORD, 'ENTRY', 0:5)
        Token(TEXT, '(_start)', 5:13)

    """

    __slots__ = ("_grammar", "_source", "_source_len")

    def __init__(self, grammar: Grammar, source: str) -> None:
        self._grammar = grammar
        self._source = source
        self._source_len = len(source)

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def source(self) -> str:
        return self._source

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            Token objects one at a time, in source order

        Complexity: O(n * r) rule attempts for n characters and r rules
        Memory: O(1) iterator (tokens yielded, not accumulated)
        """
        source = self._source
        source_len = self._source_len  # Local var for faster access
        rules = self._grammar.rules
        pos = 0
        text_start = 0  # Start of the pending unclassified run

        while pos < source_len:
            for rule in rules:
                result = rule.match(source, pos)
                if result is not None:
                    break
            else:
                pos += 1
                continue

            category, end = result
            if category is None:
                # Lexeme outside the literal sets, consumed whole as plain text
                pos = end
                continue

            if text_start < pos:
                yield Token(TokenCategory.TEXT, text_start, pos, source[text_start:pos])
            yield Token(category, pos, end, source[pos:end])
            pos = end
            text_start = end

        if text_start < source_len:
            yield Token(TokenCategory.TEXT, text_start, source_len, source[text_start:])


def tokenize(source: str, language: str | Grammar) -> Iterator[Token]:
    """Tokenize source with a grammar or a registered language name.

    Args:
        source: Text to classify
        language: Grammar, or a name/alias in the default registry

    Returns:
        Lazy token iterator

    Raises:
        KeyError: If the language name is not registered
    """
    if isinstance(language, Grammar):
        grammar = language
    else:
        from rulelex.registry import get_grammar

        grammar = get_grammar(language)
    return Lexer(grammar, source).tokenize()

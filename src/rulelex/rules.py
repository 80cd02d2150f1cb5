"""Rule descriptors and compiled match rules.

Descriptors are the declarative building blocks a grammar is written in.
``compile_rule`` turns one descriptor into one or more immutable ``Rule``
records; the lexer only ever sees compiled rules.

Descriptor variants:
- LineComment: marker through end of line (newline excluded)
- BlockComment: start marker through the nearest end marker, non-nesting
- QuotedString: quote through the matching quote, backslash escapes
- Custom: any pattern, or an ordered group of variants sharing a relevance

Unterminated comments and strings extend to the end of the buffer.

Thread Safety:
All descriptors and rules are frozen dataclasses. Safe to share.

"""

from __future__ import annotations

import re
from dataclasses import dataclass

from rulelex.errors import GrammarError
from rulelex.tokens import TokenCategory


@dataclass(frozen=True, slots=True)
class LineComment:
    """Comment from ``marker`` to end of line."""

    marker: str
    relevance: int = 0


@dataclass(frozen=True, slots=True)
class BlockComment:
    """Comment from ``start`` to the nearest ``end`` (or end of buffer)."""

    start: str
    end: str
    relevance: int = 0


@dataclass(frozen=True, slots=True)
class QuotedString:
    """Single-character quoted string with backslash escapes."""

    quote: str = '"'
    relevance: int = 0


@dataclass(frozen=True, slots=True)
class Variant:
    """One alternative of a Custom rule.

    Attributes:
        pattern: Regular expression matched at the cursor
        category: Overrides the owning rule's category when set
    """

    pattern: str
    category: TokenCategory | str | None = None


@dataclass(frozen=True, slots=True)
class Custom:
    """Pattern rule, or an ordered group of variants.

    Exactly one of ``pattern`` or ``variants`` is required. Variants are
    tried in order and the first that matches wins.
    """

    category: TokenCategory | str
    pattern: str | None = None
    relevance: int = 1
    variants: tuple[Variant | str, ...] = ()


RuleDescriptor = LineComment | BlockComment | QuotedString | Custom


# Primitive builders, named after their highlight.js counterparts
HASH_COMMENT = LineComment("#")
C_BLOCK_COMMENT = BlockComment("/*", "*/")
QUOTE_STRING = QuotedString('"')


def comment(start: str, end: str, relevance: int = 0) -> LineComment | BlockComment:
    """Build a comment descriptor; an ``end`` of ``"$"`` means end of line."""
    if end == "$":
        return LineComment(start, relevance)
    return BlockComment(start, end, relevance)


@dataclass(frozen=True, slots=True)
class Rule:
    """A compiled classification rule.

    Attributes:
        category: Category of the tokens this rule produces
        pattern: Compiled pattern anchored at the cursor
        relevance: Auto-detection weight, not used for matching

    """

    category: TokenCategory
    pattern: re.Pattern[str]
    relevance: int = 1

    def match(self, source: str, pos: int) -> tuple[TokenCategory, int] | None:
        """Match at ``pos``; return (category, end) for a non-empty match."""
        m = self.pattern.match(source, pos)
        if m is None or m.end() == pos:
            return None
        return self.category, m.end()


@dataclass(frozen=True, slots=True)
class LexemeRule:
    """Keyword and built-in lookup over identifier-shaped lexemes.

    A lexeme starts only at a token boundary and is consumed whole. Lexemes
    outside both literal sets are returned with a None category so the
    lexer folds them into the unclassified run. ``literals`` matches the
    entries the lexeme pattern cannot produce (e.g. ``/DISCARD/``).

    """

    pattern: re.Pattern[str]
    keywords: frozenset[str]
    builtins: frozenset[str]
    literals: re.Pattern[str] | None = None
    case_sensitive: bool = True
    relevance: int = 1

    def match(self, source: str, pos: int) -> tuple[TokenCategory | None, int] | None:
        if pos > 0 and is_word_char(source[pos - 1]):
            return None
        if self.literals is not None:
            m = self.literals.match(source, pos)
            if m is not None:
                return self.classify(m.group()), m.end()
        m = self.pattern.match(source, pos)
        if m is None or m.end() == pos:
            return None
        return self.classify(m.group()), m.end()

    def classify(self, lexeme: str) -> TokenCategory | None:
        key = lexeme if self.case_sensitive else lexeme.casefold()
        if key in self.keywords:
            return TokenCategory.KEYWORD
        if key in self.builtins:
            return TokenCategory.BUILTIN
        return None


def is_word_char(char: str) -> bool:
    """Same character class as the regex ``\\w``."""
    return char.isalnum() or char == "_"


def parse_category(language: str, value: TokenCategory | str) -> TokenCategory:
    """Resolve a category given as an enum member or its string value."""
    if isinstance(value, TokenCategory):
        return value
    try:
        return TokenCategory(value)
    except ValueError:
        raise GrammarError(language, f"unknown token category {value!r}") from None


def compile_pattern(language: str, pattern: str | None, flags: int = 0) -> re.Pattern[str]:
    """Compile a rule pattern, rejecting empty and invalid expressions."""
    if not isinstance(pattern, str) or not pattern:
        raise GrammarError(language, "rule pattern must be a non-empty string")
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise GrammarError(language, f"invalid pattern {pattern!r}: {exc}") from exc


def _require_marker(language: str, marker: str, what: str) -> str:
    if not isinstance(marker, str) or not marker:
        raise GrammarError(language, f"{what} must be a non-empty string")
    return re.escape(marker)


def compile_rule(language: str, descriptor: RuleDescriptor, flags: int = 0) -> tuple[Rule, ...]:
    """Compile one descriptor into rules, in match order.

    Args:
        language: Language name, used in error messages
        descriptor: The rule descriptor
        flags: ``re`` flags shared by the whole grammar

    Returns:
        One rule, or one rule per variant for a Custom group

    Raises:
        GrammarError: For empty markers, invalid patterns, or a Custom
            rule with neither a pattern nor variants
    """
    match descriptor:
        case LineComment(marker=marker, relevance=relevance):
            start = _require_marker(language, marker, "comment marker")
            pattern = compile_pattern(language, start + r"[^\r\n]*", flags)
            return (Rule(TokenCategory.COMMENT, pattern, relevance),)
        case BlockComment(start=start, end=end, relevance=relevance):
            begin = _require_marker(language, start, "comment start marker")
            close = _require_marker(language, end, "comment end marker")
            pattern = compile_pattern(language, rf"{begin}[\s\S]*?(?:{close}|\Z)", flags)
            return (Rule(TokenCategory.COMMENT, pattern, relevance),)
        case QuotedString(quote=quote, relevance=relevance):
            q = _require_marker(language, quote, "string quote")
            if len(quote) != 1:
                raise GrammarError(language, f"string quote must be one character, got {quote!r}")
            pattern = compile_pattern(language, rf"{q}(?:[^{q}\\]|\\[\s\S]?)*{q}?", flags)
            return (Rule(TokenCategory.STRING, pattern, relevance),)
        case Custom(category=category, pattern=pattern, relevance=relevance, variants=variants):
            base = parse_category(language, category)
            if pattern is not None and variants:
                raise GrammarError(language, "custom rule takes a pattern or variants, not both")
            if pattern is not None:
                return (Rule(base, compile_pattern(language, pattern, flags), relevance),)
            if not variants:
                raise GrammarError(language, "custom rule needs a pattern or variants")
            rules: list[Rule] = []
            for variant in variants:
                if isinstance(variant, str):
                    variant = Variant(variant)
                cat = base if variant.category is None else parse_category(language, variant.category)
                rules.append(Rule(cat, compile_pattern(language, variant.pattern, flags), relevance))
            return tuple(rules)
        case _:
            raise GrammarError(language, f"unsupported rule descriptor {type(descriptor).__name__}")

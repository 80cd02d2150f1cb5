"""Grammar descriptors and their compiled, immutable form.

A language module describes itself with a ``GrammarDescriptor``: literal
configuration in the shape highlight.js grammars use (name, aliases,
case sensitivity, keyword lists with a lexeme pattern, and an ordered list
of rule descriptors). ``compile_grammar`` validates the description and
produces a ``Grammar`` the lexer can scan with.

Example:
    >>> from rulelex.rules import LineComment
    >>> descriptor = GrammarDescriptor(
    ...     name="Example",
    ...     keywords=KeywordSpec(pattern=r"[a-z]+", keyword=("let",)),
    ...     contains=(LineComment("#"),),
    ... )
    >>> grammar = compile_grammar("example", descriptor)
    >>> grammar.language
    'example'

Thread Safety:
Grammar is immutable after compilation. Safe to share across threads.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from rulelex.errors import GrammarError
from rulelex.rules import (
    LexemeRule,
    Rule,
    RuleDescriptor,
    compile_pattern,
    compile_rule,
)
from rulelex.tokens import TokenCategory


@dataclass(frozen=True, slots=True)
class KeywordSpec:
    """Keyword and built-in literal lists.

    Attributes:
        pattern: Lexeme pattern; only lexemes it matches are looked up
        keyword: Reserved words
        builtin: Well-known, non-reserved identifiers
        relevance: Detection weight of each keyword/built-in token
    """

    pattern: str = r"\w+"
    keyword: tuple[str, ...] = ()
    builtin: tuple[str, ...] = ()
    relevance: int = 1


@dataclass(frozen=True, slots=True)
class GrammarDescriptor:
    """Declarative description of one language.

    Attributes:
        name: Human-readable title (e.g., "GNU linker script")
        aliases: Extra registry keys for the language
        case_sensitive: Applies uniformly to every rule and literal set
        keywords: Keyword/built-in lists, or None for none
        contains: Rule descriptors in match order
    """

    name: str
    aliases: tuple[str, ...] = ()
    case_sensitive: bool = True
    keywords: KeywordSpec | None = None
    contains: tuple[RuleDescriptor, ...] = ()


@dataclass(frozen=True, slots=True, eq=False)
class Grammar:
    """Compiled grammar: an ordered, immutable rule set.

    Rule order is significant. At each cursor position the first rule with
    a non-empty match wins. The lexeme rule, when present, comes last.
    """

    language: str
    name: str
    aliases: frozenset[str]
    case_sensitive: bool
    rules: tuple[Rule | LexemeRule, ...]
    keywords: frozenset[str] = frozenset()
    builtins: frozenset[str] = frozenset()
    _relevance: Mapping[TokenCategory, int] = field(
        default_factory=lambda: MappingProxyType({}), repr=False
    )

    @property
    def keys(self) -> tuple[str, ...]:
        """Registry keys: the language name followed by its aliases."""
        return (self.language, *sorted(self.aliases))

    def relevance_of(self, category: TokenCategory) -> int:
        """Detection weight of a token category (0 when no rule produces it)."""
        return self._relevance.get(category, 0)


def _literal_set(language: str, entries: tuple[str, ...], case_sensitive: bool) -> frozenset[str]:
    for entry in entries:
        if not isinstance(entry, str) or not entry:
            raise GrammarError(language, f"keyword entries must be non-empty strings, got {entry!r}")
    if case_sensitive:
        return frozenset(entries)
    return frozenset(entry.casefold() for entry in entries)


def _compile_lexeme_rule(language: str, spec: KeywordSpec, case_sensitive: bool, flags: int) -> LexemeRule:
    keywords = _literal_set(language, spec.keyword, case_sensitive)
    builtins = _literal_set(language, spec.builtin, case_sensitive)
    pattern = compile_pattern(language, spec.pattern, flags)
    # Entries the lexeme pattern cannot produce get their own literal matcher
    unreachable = sorted(
        {entry for entry in (*spec.keyword, *spec.builtin) if not pattern.fullmatch(entry)},
        key=lambda entry: (-len(entry), entry),
    )
    literals = None
    if unreachable:
        alternation = "|".join(re.escape(entry) for entry in unreachable)
        literals = compile_pattern(language, rf"(?<!\w)(?:{alternation})(?!\w)", flags)
    return LexemeRule(
        pattern=pattern,
        keywords=keywords,
        builtins=builtins,
        literals=literals,
        case_sensitive=case_sensitive,
        relevance=spec.relevance,
    )


def compile_grammar(language: str, descriptor: GrammarDescriptor) -> Grammar:
    """Validate and compile a grammar descriptor.

    Args:
        language: Primary registry name (e.g., "ldscript")
        descriptor: The language description

    Returns:
        Immutable Grammar

    Raises:
        GrammarError: If the language name, title, aliases, literal lists, or
            any rule pattern is empty or invalid
    """
    if not isinstance(language, str) or not language:
        raise GrammarError(str(language), "language name must be a non-empty string")
    if not isinstance(descriptor, GrammarDescriptor):
        raise GrammarError(language, f"factory returned {type(descriptor).__name__}, not GrammarDescriptor")
    if not descriptor.name:
        raise GrammarError(language, "grammar name must be a non-empty string")
    for alias in descriptor.aliases:
        if not isinstance(alias, str) or not alias:
            raise GrammarError(language, f"aliases must be non-empty strings, got {alias!r}")

    case_sensitive = descriptor.case_sensitive
    flags = 0 if case_sensitive else re.IGNORECASE

    rules: list[Rule | LexemeRule] = []
    relevance: dict[TokenCategory, int] = {}
    for rule_descriptor in descriptor.contains:
        for rule in compile_rule(language, rule_descriptor, flags):
            rules.append(rule)
            relevance.setdefault(rule.category, rule.relevance)

    keywords: frozenset[str] = frozenset()
    builtins: frozenset[str] = frozenset()
    if descriptor.keywords is not None:
        lexeme_rule = _compile_lexeme_rule(language, descriptor.keywords, case_sensitive, flags)
        rules.append(lexeme_rule)
        keywords = lexeme_rule.keywords
        builtins = lexeme_rule.builtins
        relevance.setdefault(TokenCategory.KEYWORD, lexeme_rule.relevance)
        relevance.setdefault(TokenCategory.BUILTIN, lexeme_rule.relevance)

    return Grammar(
        language=language,
        name=descriptor.name,
        aliases=frozenset(descriptor.aliases) - {language},
        case_sensitive=case_sensitive,
        rules=tuple(rules),
        keywords=keywords,
        builtins=builtins,
        _relevance=MappingProxyType(relevance),
    )

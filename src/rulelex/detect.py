"""Relevance scoring and language auto-detection.

Each grammar weighs its token categories (keywords count, comments and
numbers usually do not). Scoring a snippet against every registered
grammar and keeping the best total picks the most likely language, the
way highlight.js auto-detection does.

Example:
    >>> detect_language("SECTIONS { .text : { *(.text) } }")
    'ldscript'

"""

from __future__ import annotations

from rulelex.grammar import Grammar
from rulelex.lexer import Lexer
from rulelex.registry import LanguageRegistry, get_default_registry


def relevance(code: str, grammar: Grammar) -> int:
    """Sum the relevance weights of the tokens ``grammar`` finds in ``code``."""
    return sum(grammar.relevance_of(token.category) for token in Lexer(grammar, code).tokenize())


def detect_language(code: str, registry: LanguageRegistry | None = None) -> str | None:
    """Pick the registered language that scores ``code`` highest.

    Args:
        code: Snippet to classify
        registry: Registry to search; defaults to the process-wide registry

    Returns:
        Primary language name, or None if no grammar scores above zero.
        Ties go to the language registered first.
    """
    if registry is None:
        registry = get_default_registry()
    best: str | None = None
    best_score = 0
    for grammar in registry.grammars:
        score = relevance(code, grammar)
        if score > best_score:
            best, best_score = grammar.language, score
    return best

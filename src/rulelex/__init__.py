"""
rulelex — Rule-based token classification for syntax highlighting

Grammars are declarative rule tables: comments, strings, number variants,
symbols, and keyword/built-in lists. The lexer scans a buffer left to right,
first match wins, and yields classified tokens that cover the input exactly.
Ships with a GNU linker script grammar. Zero runtime dependencies.

Quick Start:
    >>> from rulelex import tokenize
    >>> [(t.category.value, t.text) for t in tokenize("ENTRY(_start)", "ldscript")]
    [('keyword', 'ENTRY'), ('text', '(_start)')]

    >>> from rulelex import highlight
    >>> html = highlight("/* boot */ ENTRY(_start)", "ld")

Custom Languages:
    >>> from rulelex import GrammarDescriptor, KeywordSpec, create_registry_with_defaults
    >>> from rulelex.rules import HASH_COMMENT
    >>>
    >>> builder = create_registry_with_defaults()
    >>> builder.register_language(
    ...     "conf",
    ...     lambda: GrammarDescriptor(
    ...         name="Config",
    ...         keywords=KeywordSpec(keyword=("include",)),
    ...         contains=(HASH_COMMENT,),
    ...     ),
    ... )
    >>> registry = builder.build()
"""

from rulelex.config import (
    HighlightConfig,
    get_highlight_config,
    highlight_config_context,
    reset_highlight_config,
    set_highlight_config,
)
from rulelex.detect import detect_language, relevance
from rulelex.errors import DuplicateLanguageError, GrammarError, RulelexError
from rulelex.grammar import Grammar, GrammarDescriptor, KeywordSpec, compile_grammar
from rulelex.highlighting import (
    Highlighter,
    RuleHighlighter,
    highlight,
    render_html,
    set_highlighter,
    supports_language,
)
from rulelex.languages import BUILTIN_LANGUAGES, builtin_language
from rulelex.lexer import Lexer, tokenize
from rulelex.registry import (
    LanguageRegistry,
    LanguageRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
    get_default_registry,
    get_grammar,
)
from rulelex.rules import (
    BlockComment,
    Custom,
    LineComment,
    QuotedString,
    Rule,
    Variant,
)
from rulelex.tokens import Token, TokenCategory

__version__ = "0.1.0"

__all__ = [
    # Tokenizing
    "Lexer",
    "Token",
    "TokenCategory",
    "tokenize",
    # Grammars
    "BlockComment",
    "Custom",
    "Grammar",
    "GrammarDescriptor",
    "KeywordSpec",
    "LineComment",
    "QuotedString",
    "Rule",
    "Variant",
    "compile_grammar",
    # Registry
    "BUILTIN_LANGUAGES",
    "LanguageRegistry",
    "LanguageRegistryBuilder",
    "builtin_language",
    "create_default_registry",
    "create_registry_with_defaults",
    "get_default_registry",
    "get_grammar",
    # Highlighting
    "Highlighter",
    "RuleHighlighter",
    "highlight",
    "render_html",
    "set_highlighter",
    "supports_language",
    # Detection
    "detect_language",
    "relevance",
    # Configuration
    "HighlightConfig",
    "get_highlight_config",
    "highlight_config_context",
    "reset_highlight_config",
    "set_highlight_config",
    # Errors
    "DuplicateLanguageError",
    "GrammarError",
    "RulelexError",
]

"""HTML rendering of token streams and the highlighter protocol.

Turns the lexer's tokens into highlight.js-compatible markup: every
classified token becomes ``<span class="hljs-{scope}">``, unclassified text
is emitted as-is, and all text is HTML-escaped.

Usage:
    >>> from rulelex import highlight
    >>> highlight("ENTRY(_start)", "ldscript")
    '<pre><code class="language-ldscript"><span class="hljs-keyword">ENTRY</span>(_start)</code></pre>'

    # Manual injection
    from rulelex.highlighting import set_highlighter

    def my_highlighter(code: str, language: str) -> str:
        return f'<pre class="language-{language}"><code>{code}</code></pre>'

    set_highlighter(my_highlighter)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from html import escape
from typing import Protocol

from rulelex.config import get_highlight_config
from rulelex.grammar import Grammar
from rulelex.lexer import Lexer
from rulelex.registry import LanguageRegistry, get_default_registry
from rulelex.tokens import Token
from rulelex.utils.logger import get_logger

logger = get_logger(__name__)


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Highlighters take code and language and return HTML markup
    with syntax highlighting applied.

    Thread Safety:
        Implementations must be thread-safe. The highlight() method
        may be called concurrently from multiple render threads.
    """

    def highlight(
        self,
        code: str,
        language: str,
        *,
        hl_lines: list[int] | None = None,
        show_linenos: bool = False,
    ) -> str:
        """Highlight code with syntax colors.

        Contract:
            - MUST return valid HTML (never raise for bad input)
            - MUST escape HTML entities in code
            - MUST use CSS classes (not inline styles)
            - SHOULD fall back to plain text for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language.

        Contract:
            - MUST NOT raise exceptions
        """
        ...


# Support for simple callable-based highlighters
SimpleHighlighter = Callable[[str, str], str]


def _span(text: str, scope: str | None, class_prefix: str) -> str:
    if scope is None:
        return escape(text, quote=False)
    return f'<span class="{class_prefix}{scope}">{escape(text, quote=False)}</span>'


def render_html(tokens: Iterable[Token], *, class_prefix: str | None = None) -> str:
    """Render tokens as HTML spans.

    Args:
        tokens: Tokens from Lexer.tokenize()
        class_prefix: CSS class prefix; defaults to the active HighlightConfig

    Returns:
        Escaped markup, one span per classified token
    """
    if class_prefix is None:
        class_prefix = get_highlight_config().class_prefix
    return "".join(_span(token.text, token.category.scope, class_prefix) for token in tokens)


def render_lines(tokens: Iterable[Token], *, class_prefix: str | None = None) -> list[str]:
    """Render tokens as one markup string per source line.

    Tokens spanning several lines (block comments, strings) are split at
    each newline so every line's markup is balanced. Newlines are dropped.
    """
    if class_prefix is None:
        class_prefix = get_highlight_config().class_prefix
    lines: list[list[str]] = [[]]
    for token in tokens:
        scope = token.category.scope
        for i, part in enumerate(token.text.split("\n")):
            if i:
                lines.append([])
            if part:
                lines[-1].append(_span(part, scope, class_prefix))
    return ["".join(parts) for parts in lines]


class RuleHighlighter:
    """Highlighter backed by the rule-based lexer.

    Implements the Highlighter protocol over a language registry
    (the process-wide default registry unless one is given).

    Thread Safety:
        Holds only an immutable registry. Safe to share.

    """

    __slots__ = ("_registry",)

    def __init__(self, registry: LanguageRegistry | None = None) -> None:
        self._registry = registry

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry if self._registry is not None else get_default_registry()

    def _lookup(self, language: str) -> Grammar | None:
        if not isinstance(language, str) or not language:
            return None
        registry = self.registry
        return registry.get(language) or registry.get(language.lower())

    def supports_language(self, language: str) -> bool:
        """Check if the registry knows the language name or alias."""
        return self._lookup(language) is not None

    def highlight(
        self,
        code: str,
        language: str,
        *,
        hl_lines: list[int] | None = None,
        show_linenos: bool = False,
    ) -> str:
        """Highlight code, falling back to escaped plain text.

        Args:
            code: Source code to highlight
            language: Language name or alias
            hl_lines: 1-indexed line numbers to emphasize (optional)
            show_linenos: Prefix each line with its number

        Returns:
            ``<pre><code>`` markup
        """
        config = get_highlight_config()
        grammar = self._lookup(language)
        if grammar is None:
            logger.debug("No grammar for language %r, rendering plain text", language)
            lang_class = f' class="{config.language_class_prefix}{escape(language)}"' if language else ""
            return f"<pre><code{lang_class}>{escape(code, quote=False)}</code></pre>"

        tokens = Lexer(grammar, code).tokenize()
        if not hl_lines and not show_linenos:
            body = render_html(tokens, class_prefix=config.class_prefix)
        else:
            lines = render_lines(tokens, class_prefix=config.class_prefix)
            emphasized = set(hl_lines or ())
            width = len(str(len(lines)))
            rendered = []
            for lineno, line in enumerate(lines, start=1):
                if show_linenos:
                    line = f'<span class="{config.lineno_class}">{str(lineno).rjust(width)}</span>{line}'
                if lineno in emphasized:
                    line = f'<span class="{config.line_class}">{line}</span>'
                rendered.append(line)
            body = "\n".join(rendered)

        lang_class = f' class="{config.language_class_prefix}{grammar.language}"'
        return f"<pre><code{lang_class}>{body}</code></pre>"


# Global highlighter
_highlighter: Highlighter | SimpleHighlighter = RuleHighlighter()


def set_highlighter(highlighter: Highlighter | SimpleHighlighter | None) -> None:
    """Set the global syntax highlighter.

    Args:
        highlighter: A Highlighter protocol implementation, or a simple
            function that takes (code, language) and returns HTML.
            Pass None to restore the rule-based highlighter.
    """
    global _highlighter
    _highlighter = highlighter if highlighter is not None else RuleHighlighter()


def get_highlighter() -> Highlighter | SimpleHighlighter:
    """Get the current highlighter instance."""
    return _highlighter


def highlight(
    code: str,
    language: str,
    *,
    hl_lines: list[int] | None = None,
    show_linenos: bool = False,
) -> str:
    """Highlight code using the configured highlighter.

    Args:
        code: Source code to highlight
        language: Language identifier
        hl_lines: 1-indexed line numbers to emphasize (optional)
        show_linenos: Include line numbers in output

    Returns:
        HTML markup (highlighted if the language is known, plain otherwise)
    """
    highlighter = _highlighter
    if hasattr(highlighter, "highlight") and callable(highlighter.highlight):
        return highlighter.highlight(code, language, hl_lines=hl_lines, show_linenos=show_linenos)
    return highlighter(code, language)


def supports_language(language: str) -> bool:
    """Check if the configured highlighter supports a language."""
    highlighter = _highlighter
    if hasattr(highlighter, "supports_language"):
        try:
            return bool(highlighter.supports_language(language))
        except Exception:
            return False
    return False

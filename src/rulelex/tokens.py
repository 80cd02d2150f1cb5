"""Token categories and the Token dataclass produced by the lexer.

Tokens are transient: one scan creates them and hands them to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenCategory(Enum):
    """Classification assigned to a span of source text.

    Values are the category names used in grammar descriptions.
    TEXT marks the implicit unclassified run between classified tokens.
    """

    KEYWORD = "keyword"
    BUILTIN = "builtin"
    STRING = "string"
    COMMENT = "comment"
    NUMBER_HEX = "number-hex"
    NUMBER_BIN = "number-bin"
    NUMBER_DEC = "number-dec"
    NUMBER_FLOAT = "number-float"
    SYMBOL = "symbol"
    TEXT = "text"

    @property
    def scope(self) -> str | None:
        """highlight.js scope name used for CSS classes (None for TEXT)."""
        return _SCOPES[self]


_SCOPES: dict[TokenCategory, str | None] = {
    TokenCategory.KEYWORD: "keyword",
    TokenCategory.BUILTIN: "built_in",
    TokenCategory.STRING: "string",
    TokenCategory.COMMENT: "comment",
    TokenCategory.NUMBER_HEX: "number",
    TokenCategory.NUMBER_BIN: "number",
    TokenCategory.NUMBER_DEC: "number",
    TokenCategory.NUMBER_FLOAT: "number",
    TokenCategory.SYMBOL: "symbol",
    TokenCategory.TEXT: None,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A classified span of source text.

    Attributes:
        category: The token category
        start: Absolute start offset in source
        end: Absolute end offset in source (exclusive)
        text: The matched substring, source[start:end]

    Thread Safety:
        Frozen dataclass, safe to share.

    """

    category: TokenCategory
    start: int
    end: int
    text: str

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.text
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.category.name}, {val!r}, {self.start}:{self.end})"

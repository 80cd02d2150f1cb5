"""Exception classes for rulelex.

Scanning never raises. Every error here is a configuration error surfaced
while a grammar is compiled or registered.
"""

from __future__ import annotations


class RulelexError(Exception):
    """Base exception for all rulelex errors.
    
    Subclass this for specific error categories.
    """

    pass


class GrammarError(RulelexError):
    """Error in a grammar description.

    Raised at construction time for empty or invalid patterns, malformed
    rule descriptors, and registry collisions.
    """

    def __init__(self, language: str, message: str) -> None:
        """Initialize grammar error.
        
        Args:
            language: Name of the language being compiled or registered
            message: Description of the problem
        """
        self.language = language
        self.message = message
        super().__init__(f"Grammar '{language}': {message}")


class DuplicateLanguageError(GrammarError):
    """A language name or alias is already registered."""

    def __init__(self, language: str, key: str, existing: str) -> None:
        self.key = key
        self.existing = existing
        super().__init__(language, f"'{key}' already registered by '{existing}'")

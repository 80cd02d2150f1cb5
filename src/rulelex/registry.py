"""Language registry mapping names and aliases to compiled grammars.

Thread Safety:
LanguageRegistry is immutable after creation. Safe to share.
Use LanguageRegistryBuilder for mutable construction. The default
registry is built once, on first use, under a lock.

Example:
    >>> from rulelex.languages.ldscript import ldscript
    >>> builder = LanguageRegistryBuilder()
    >>> builder.register_language("ldscript", ldscript)
    >>> registry = builder.build()
    >>> registry.get("ld").name
    'GNU linker script'

"""

from __future__ import annotations

import threading
from collections.abc import Callable

from rulelex.errors import DuplicateLanguageError
from rulelex.grammar import Grammar, GrammarDescriptor, compile_grammar
from rulelex.utils.logger import get_logger

logger = get_logger(__name__)

GrammarFactory = Callable[[], GrammarDescriptor]


class LanguageRegistry:
    """Immutable registry of compiled grammars.

    Thread Safety:
        Immutable after creation. Safe to share across threads.

    """

    __slots__ = ("_grammars", "_by_name")

    def __init__(self, grammars: tuple[Grammar, ...], by_name: dict[str, Grammar]) -> None:
        """Initialize registry with pre-built mappings.

        Use LanguageRegistryBuilder to create instances.
        """
        self._grammars = grammars
        self._by_name = by_name

    def get(self, name: str) -> Grammar | None:
        """Get grammar for a language name or alias.

        Args:
            name: Language name or alias (e.g., "ldscript", "ld")

        Returns:
            Grammar if registered, None otherwise
        """
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        """Check if a language name or alias is registered."""
        return name in self._by_name

    @property
    def names(self) -> frozenset[str]:
        """All registered names and aliases."""
        return frozenset(self._by_name.keys())

    @property
    def languages(self) -> tuple[str, ...]:
        """Primary language names in registration order."""
        return tuple(grammar.language for grammar in self._grammars)

    @property
    def grammars(self) -> tuple[Grammar, ...]:
        return self._grammars

    def __contains__(self, name: str) -> bool:
        """Support 'name in registry' syntax."""
        return self.has(name)

    def __len__(self) -> int:
        """Number of registered names and aliases."""
        return len(self._by_name)


class LanguageRegistryBuilder:
    """Mutable builder for LanguageRegistry.

    Example:
            >>> builder = LanguageRegistryBuilder()
            >>> builder.register_language("ldscript", ldscript)
            >>> builder.register_language("ld", ldscript)
            Traceback (most recent call last):
            ...
            rulelex.errors.DuplicateLanguageError: Grammar 'ld': 'ld' already registered by 'ldscript'

    """

    __slots__ = ("_grammars", "_by_name")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._grammars: list[Grammar] = []
        self._by_name: dict[str, Grammar] = {}

    def register_language(self, name: str, factory: GrammarFactory) -> LanguageRegistryBuilder:
        """Compile a grammar and register it under its name and aliases.

        Args:
            name: Primary language name
            factory: Zero-argument callable returning a GrammarDescriptor

        Returns:
            Self for chaining

        Raises:
            GrammarError: If the descriptor does not compile
            DuplicateLanguageError: If the name or an alias is already taken
        """
        return self.register(compile_grammar(name, factory()))

    def register(self, grammar: Grammar) -> LanguageRegistryBuilder:
        """Register an already compiled grammar.

        Raises:
            DuplicateLanguageError: If the name or an alias is already taken
        """
        # Check every key before inserting any, so a failed call leaves no trace
        for key in grammar.keys:
            if key in self._by_name:
                raise DuplicateLanguageError(grammar.language, key, self._by_name[key].language)
        for key in grammar.keys:
            self._by_name[key] = grammar
        self._grammars.append(grammar)
        logger.debug("Registered language %s (keys: %s)", grammar.language, ", ".join(grammar.keys))
        return self

    def build(self) -> LanguageRegistry:
        """Build immutable registry from registered grammars.

        Returns:
            Immutable LanguageRegistry
        """
        return LanguageRegistry(grammars=tuple(self._grammars), by_name=dict(self._by_name))

    def __len__(self) -> int:
        """Number of registered grammars."""
        return len(self._grammars)


def create_registry_with_defaults() -> LanguageRegistryBuilder:
    """Create a builder pre-populated with the built-in languages.

    Use this to add your own grammars next to the built-in ones.

    Returns:
        Builder with every built-in language registered
    """
    from rulelex.languages import BUILTIN_LANGUAGES

    builder = LanguageRegistryBuilder()
    for name, factory in BUILTIN_LANGUAGES.items():
        builder.register_language(name, factory)
    return builder


def create_default_registry() -> LanguageRegistry:
    """Create registry with all built-in languages."""
    return create_registry_with_defaults().build()


_default_registry: LanguageRegistry | None = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> LanguageRegistry:
    """Get the process-wide registry, building it on first use.

    Thread Safety:
        Built exactly once under a lock; read-only afterwards.
    """
    global _default_registry
    registry = _default_registry
    if registry is not None:
        return registry
    with _default_registry_lock:
        if _default_registry is None:
            _default_registry = create_default_registry()
        return _default_registry


def get_grammar(name: str) -> Grammar:
    """Look up a language in the default registry.

    Args:
        name: Language name or alias

    Returns:
        The compiled grammar

    Raises:
        KeyError: If the name is not registered
    """
    registry = get_default_registry()
    grammar = registry.get(name)
    if grammar is None:
        available = ", ".join(sorted(registry.names))
        raise KeyError(f"Unknown language: {name!r}. Available: {available}")
    return grammar

"""Built-in language grammars.

Each language module defines a factory returning a GrammarDescriptor and
registers it with ``@builtin_language``. The default registry compiles
every factory recorded here.

Usage:
    >>> from rulelex.languages import BUILTIN_LANGUAGES
    >>> sorted(BUILTIN_LANGUAGES)
    ['ldscript']

Adding a language:
    @builtin_language("mylang")
    def mylang() -> GrammarDescriptor:
        return GrammarDescriptor(name="My Language", contains=(HASH_COMMENT,))

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rulelex.grammar import GrammarDescriptor

__all__ = [
    "BUILTIN_LANGUAGES",
    "builtin_language",
]

GrammarFactory = Callable[[], "GrammarDescriptor"]

# Registry of built-in grammar factories, keyed by primary language name
BUILTIN_LANGUAGES: dict[str, GrammarFactory] = {}


def builtin_language(name: str) -> Callable[[GrammarFactory], GrammarFactory]:
    """Decorator to record a built-in grammar factory.

    Args:
        name: Primary language name

    Returns:
        Decorator function that records and returns the factory

    """

    def decorator(factory: GrammarFactory) -> GrammarFactory:
        BUILTIN_LANGUAGES[name] = factory
        return factory

    return decorator


# Import built-in languages to register them
# These imports trigger the @builtin_language decorators
from rulelex.languages.ldscript import ldscript  # noqa: E402

__all__ += ["ldscript"]

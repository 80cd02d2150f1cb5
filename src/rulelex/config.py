"""ContextVar-based highlight configuration for rulelex.

Controls the CSS class names the HTML renderer and highlighter emit.
Config is read at render time from the current context, so concurrent
renders in different threads can use different settings.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from rulelex.config import HighlightConfig, highlight_config_context

    with highlight_config_context(HighlightConfig(class_prefix="tok-")):
        html = highlight("ENTRY(_start)", "ldscript")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    """Immutable highlight configuration.

    Attributes:
        class_prefix: Prefix of token span classes ("hljs-keyword")
        language_class_prefix: Prefix of the <code> language class
        line_class: Class wrapping emphasized lines (hl_lines)
        lineno_class: Class of line number spans (show_linenos)

    """

    class_prefix: str = "hljs-"
    language_class_prefix: str = "language-"
    line_class: str = "hll"
    lineno_class: str = "lineno"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "HighlightConfig":
        """Create HighlightConfig from dictionary.

        Only includes keys that are valid HighlightConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = HighlightConfig.from_dict({
            ...     "class_prefix": "tok-",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.class_prefix
            'tok-'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: HighlightConfig = HighlightConfig()

_highlight_config: ContextVar[HighlightConfig] = ContextVar(
    "highlight_config",
    default=_DEFAULT_CONFIG,
)


def get_highlight_config() -> HighlightConfig:
    """Get current highlight configuration (thread-local)."""
    return _highlight_config.get()


def set_highlight_config(config: HighlightConfig) -> None:
    """Set highlight configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _highlight_config.set(config)


def reset_highlight_config() -> None:
    """Reset to default configuration."""
    _highlight_config.set(_DEFAULT_CONFIG)


@contextmanager
def highlight_config_context(config: HighlightConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: HighlightConfig to use within the context.

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _highlight_config.get()
    _highlight_config.set(config)
    try:
        yield
    finally:
        _highlight_config.set(previous)


__all__ = [
    "HighlightConfig",
    "get_highlight_config",
    "set_highlight_config",
    "reset_highlight_config",
    "highlight_config_context",
]

"""Tests for ContextVar-based highlight configuration.

Validates thread isolation and context manager behavior.
"""

from threading import Thread

import pytest

from rulelex import (
    HighlightConfig,
    get_highlight_config,
    highlight,
    highlight_config_context,
    reset_highlight_config,
    set_highlight_config,
)


class TestHighlightConfigDataclass:
    def test_default_values(self) -> None:
        config = HighlightConfig()
        assert config.class_prefix == "hljs-"
        assert config.language_class_prefix == "language-"
        assert config.line_class == "hll"
        assert config.lineno_class == "lineno"

    def test_immutability(self) -> None:
        config = HighlightConfig()
        with pytest.raises(AttributeError):
            config.class_prefix = "x-"  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = HighlightConfig.from_dict({"class_prefix": "tok-", "unknown": 1})
        assert config.class_prefix == "tok-"
        assert config.line_class == "hll"


class TestContextVarFunctions:
    def teardown_method(self) -> None:
        reset_highlight_config()

    def test_set_and_reset(self) -> None:
        set_highlight_config(HighlightConfig(class_prefix="a-"))
        assert get_highlight_config().class_prefix == "a-"
        reset_highlight_config()
        assert get_highlight_config() == HighlightConfig()

    def test_context_manager_restores(self) -> None:
        with highlight_config_context(HighlightConfig(language_class_prefix="lang-")):
            assert highlight("ENTRY", "ld").startswith('<pre><code class="lang-ldscript">')
        assert get_highlight_config().language_class_prefix == "language-"

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with highlight_config_context(HighlightConfig(class_prefix="z-")):
                raise RuntimeError("boom")
        assert get_highlight_config().class_prefix == "hljs-"

    def test_thread_isolation(self) -> None:
        """A config set in a worker thread does not leak into this one."""
        seen: dict[str, str] = {}

        def worker() -> None:
            set_highlight_config(HighlightConfig(class_prefix="worker-"))
            seen["thread"] = get_highlight_config().class_prefix

        thread = Thread(target=worker)
        thread.start()
        thread.join()
        assert seen["thread"] == "worker-"
        assert get_highlight_config().class_prefix == "hljs-"

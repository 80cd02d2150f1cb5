"""Error formatting and hierarchy tests."""

import pytest

from rulelex import DuplicateLanguageError, GrammarError, RulelexError, tokenize


class TestGrammarError:
    def test_format(self) -> None:
        err = GrammarError("ldscript", "rule pattern must be a non-empty string")
        assert str(err) == "Grammar 'ldscript': rule pattern must be a non-empty string"
        assert err.language == "ldscript"
        assert err.message == "rule pattern must be a non-empty string"

    def test_is_rulelex_error(self) -> None:
        assert isinstance(GrammarError("x", "y"), RulelexError)


class TestDuplicateLanguageError:
    def test_format(self) -> None:
        err = DuplicateLanguageError("lds", "ld", "ldscript")
        assert str(err) == "Grammar 'lds': 'ld' already registered by 'ldscript'"
        assert err.key == "ld"
        assert err.existing == "ldscript"

    def test_is_grammar_error(self) -> None:
        assert isinstance(DuplicateLanguageError("a", "b", "c"), GrammarError)


class TestScanNeverRaises:
    @pytest.mark.parametrize(
        "source",
        ["", "\x00", "/*", '"', "'", "#", "0x", "0b", "-", "\\", "﻿ENTRY", "é.text"],
    )
    def test_odd_inputs(self, source: str) -> None:
        tokens = list(tokenize(source, "ldscript"))
        assert "".join(t.text for t in tokens) == source

    def test_unknown_language_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            tokenize("x", "nope")

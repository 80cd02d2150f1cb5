"""Unterminated comments and strings are absorbed to end of input."""

import pytest

from rulelex import TokenCategory, tokenize


class TestUnterminatedBlockComment:
    def test_block_comment_runs_to_eof(self) -> None:
        source = "SECTIONS /* never closed\n.text : { }"
        tokens = list(tokenize(source, "ldscript"))

        comment = tokens[-1]
        assert comment.category is TokenCategory.COMMENT
        assert comment.start == source.index("/*")
        assert comment.end == len(source)

    def test_bare_opening_marker(self) -> None:
        tokens = list(tokenize("/*", "ldscript"))
        assert [(t.category, t.start, t.end) for t in tokens] == [(TokenCategory.COMMENT, 0, 2)]

    def test_block_comment_does_not_nest(self) -> None:
        source = "/* a /* b */ c */"
        tokens = list(tokenize(source, "ldscript"))
        assert tokens[0].text == "/* a /* b */"
        assert tokens[0].category is TokenCategory.COMMENT

    def test_closes_at_nearest_end_marker(self) -> None:
        tokens = list(tokenize("/* a */ENTRY/* b */", "ldscript"))
        assert [(t.category, t.text) for t in tokens] == [
            (TokenCategory.COMMENT, "/* a */"),
            (TokenCategory.KEYWORD, "ENTRY"),
            (TokenCategory.COMMENT, "/* b */"),
        ]


class TestUnterminatedString:
    @pytest.mark.parametrize(
        "source",
        ['"crt0.o', '"line one\nline two', '"ends in escape\\'],
    )
    def test_string_runs_to_eof(self, source: str) -> None:
        tokens = list(tokenize(source, "ldscript"))
        assert len(tokens) == 1
        assert tokens[0].category is TokenCategory.STRING
        assert tokens[0].text == source

    def test_escaped_quote_does_not_close(self) -> None:
        source = '"a\\"b" x'
        tokens = list(tokenize(source, "ldscript"))
        assert tokens[0].category is TokenCategory.STRING
        assert tokens[0].text == '"a\\"b"'


class TestLineComment:
    def test_newline_not_part_of_comment(self) -> None:
        tokens = list(tokenize("# note\nENTRY", "ldscript"))
        assert [(t.category, t.text) for t in tokens] == [
            (TokenCategory.COMMENT, "# note"),
            (TokenCategory.TEXT, "\n"),
            (TokenCategory.KEYWORD, "ENTRY"),
        ]

    def test_comment_at_eof(self) -> None:
        tokens = list(tokenize("ENTRY # trailing", "ldscript"))
        assert tokens[-1].category is TokenCategory.COMMENT
        assert tokens[-1].text == "# trailing"

"""GNU linker script grammar.

Highlights the command language read by ``ld -T``: top-level commands
(ENTRY, SECTIONS, PROVIDE, ...), well-known output section names, ``#``
and ``/* */`` comments, quoted file names, numbers with ``K``/``M``/``G``
size suffixes, and quoted symbol references.

Example:
    >>> from rulelex import tokenize
    >>> [t.category.value for t in tokenize("ENTRY(_start)", "ld")]
    ['keyword', 'text']

"""

from __future__ import annotations

from rulelex.grammar import GrammarDescriptor, KeywordSpec
from rulelex.languages import builtin_language
from rulelex.rules import C_BLOCK_COMMENT, QUOTE_STRING, Custom, Variant, comment
from rulelex.tokens import TokenCategory

KEYWORDS = (
    "OUTPUT_ARCH",
    "ENTRY",
    "SECTIONS",
    "ALIGN",
    "STARTUP",
    "SEARCH_DIR",
    "INCLUDE",
    "PROVIDE",
    "PROVIDE_HIDDEN",
    "MEMORY",
    "KEEP",
    "OUTPUT_FORMAT",
    "INPUT",
    "GROUP",
    "OUTPUT",
    "ASSERT",
)

BUILTINS = (
    "/DISCARD/",
    ".text",
    ".srodata",
    ".rodata",
    ".sdata",
    ".data",
    ".sbss",
    ".bss",
)

NUMBER = Custom(
    category=TokenCategory.NUMBER_DEC,
    variants=(
        Variant(r"0x[0-9a-fA-F]+", TokenCategory.NUMBER_HEX),
        Variant(r"0b[01]+", TokenCategory.NUMBER_BIN),
        # Not inside an identifier or after a dot; not a label or a float prefix
        Variant(r"(?<![\w.])-?(?:0|[1-9]\d*)[kKmMgG]?(?![:\w]|\.\d)", TokenCategory.NUMBER_DEC),
        Variant(r"\b-?\d+\.\d+", TokenCategory.NUMBER_FLOAT),
    ),
    relevance=0,
)

SYMBOL = Custom(
    category=TokenCategory.SYMBOL,
    pattern=r"'\.?[a-zA-Z_][a-zA-Z0-9_]*",
    relevance=0,
)


@builtin_language("ldscript")
def ldscript() -> GrammarDescriptor:
    return GrammarDescriptor(
        name="GNU linker script",
        aliases=("ld",),
        case_sensitive=True,
        keywords=KeywordSpec(
            pattern=r"\.?[a-zA-Z]\w*",
            keyword=KEYWORDS,
            builtin=BUILTINS,
        ),
        contains=(
            comment("#", "$"),
            C_BLOCK_COMMENT,
            QUOTE_STRING,
            NUMBER,
            SYMBOL,
        ),
    )

"""
Tokenizer facade for Habitat Studio command text

The public entry point. A Tokenizer owns its word-list configuration and
a shared, immutable pattern table; every call to tokenize() gets a fresh
cursor, context and sink, so one instance can be used from many threads.

Example:
    >>> tokenizer = Tokenizer()
    >>> [(t.text, t.category.name) for t in tokenizer.tokenize("hab sl")]
    [('hab ', 'BUILTIN'), ('sl', 'BUILTIN')]
"""

from typing import Iterable, Iterator, List, Optional

from ..models.scan import ScanCursor
from ..models.tokens import Token
from .engine import RuleEngine
from .log import LOG
from .patterns import BUILTINS, KEYWORDS, PatternTable, table_get
from .sink import TokenSink


class Tokenizer:
    """
    Splits studio source text into categorized tokens

    Attributes:
        table: Flattened pattern table for this configuration
        engine: Rule engine bound to the table
    """

    def __init__(
        self,
        keywords: Optional[Iterable[str]] = None,
        builtins: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            keywords: Words tagged KEYWORD (default: KEYWORDS)
            builtins: Words tagged BUILTIN (default: BUILTINS)
        """
        self.table: PatternTable = table_get(
            KEYWORDS if keywords is None else keywords,
            BUILTINS if builtins is None else builtins,
        )
        self.engine = RuleEngine(self.table)

    @property
    def keywords(self):
        return self.table.keywords

    @property
    def builtins(self):
        return self.table.builtins

    def tokenize(self, text: str) -> List[Token]:
        """
        Tokenize text completely.

        Never fails for input text: spans no rule recognises come back as
        PLAIN_TEXT, and unterminated strings or heredocs run to the end.

        Args:
            text: Studio source

        Returns:
            Tokens in source order; their texts concatenate to `text`
        """
        return list(self.tokens_iterate(text))

    def tokens_iterate(self, text: str) -> Iterator[Token]:
        """Yield tokens as the engine produces them"""
        cursor = ScanCursor(text)
        sink = TokenSink()
        emitted = 0
        while not cursor.exhausted:
            self.engine.step(cursor, sink)
            while emitted < len(sink.tokens):
                yield sink.tokens[emitted]
                emitted += 1
        LOG(f"Tokenized {len(text)} characters into {emitted} tokens", level=2)

"""
Emission sink: the ordered output of one scan
"""

from typing import Iterator, List

from ..models.tokens import Category, Token


class TokenSink:
    """Append-only list of tokens in cursor order"""

    def __init__(self) -> None:
        self.tokens: List[Token] = []

    def emit(self, text: str, category: Category, offset: int) -> None:
        # Empty spans (unmatched optional groups, zero-width rules) carry nothing
        if text:
            self.tokens.append(Token(text, category, offset))

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

"""
Token category and token record models

Defines the closed set of categories a studio tokenizer can assign to a
span of source text, and the Token record emitted for each span.
"""

from enum import Enum
from dataclasses import dataclass

from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
    _TokenType,
)


class Category(Enum):
    """
    Categories assigned to studio source spans

    Used by renderers to pick a visual style. The set is closed; every
    category maps onto exactly one Pygments token type.
    """
    COMMENT = "comment"                  # # trailing comment
    KEYWORD = "keyword"                  # if, then, fi, $(, }
    BUILTIN = "builtin"                  # hab, build, sl
    VARIABLE = "variable"                # $HOME, name=
    OPERATOR = "operator"                # =, &&, <<
    STRING_DOUBLE = "string.double"      # "..."
    STRING_SINGLE = "string.single"      # '...'
    STRING_ESCAPE = "string.escape"      # \n, \$
    STRING_HEREDOC = "string.heredoc"    # heredoc body
    STRING_BACKTICK = "string.backtick"  # `
    CONSTANT = "constant"                # heredoc delimiter word
    PUNCTUATION = "punctuation"          # ; ;; |
    NUMBER = "number"
    TAG = "tag"                          # --flag, -f
    PLAIN_TEXT = "text"

    @property
    def pygments_token(self) -> _TokenType:
        """Pygments token type used when rendering this category"""
        return PYGMENTS_TOKENS[self]


PYGMENTS_TOKENS = {
    Category.COMMENT: Comment,
    Category.KEYWORD: Keyword,
    Category.BUILTIN: Name.Builtin,
    Category.VARIABLE: Name.Variable,
    Category.OPERATOR: Operator,
    Category.STRING_DOUBLE: String.Double,
    Category.STRING_SINGLE: String.Single,
    Category.STRING_ESCAPE: String.Escape,
    Category.STRING_HEREDOC: String.Heredoc,
    Category.STRING_BACKTICK: String.Backtick,
    Category.CONSTANT: Name.Constant,
    Category.PUNCTUATION: Punctuation,
    Category.NUMBER: Number,
    Category.TAG: Name.Tag,
    Category.PLAIN_TEXT: Text,
}


@dataclass(frozen=True)
class Token:
    """
    A categorized span of source text

    Attributes:
        text: The exact source characters covered by this token
        category: Category assigned by the rule that matched
        offset: Character offset of text[0] within the scanned source

    Example:
        Tokenizing "fi" yields:
        Token(text="fi", category=Category.KEYWORD, offset=0)
    """
    text: str
    category: Category
    offset: int

    @property
    def end(self) -> int:
        """Offset one past the last character of this token"""
        return self.offset + len(self.text)

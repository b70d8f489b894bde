"""
Pygments lexer for Habitat Studio commands

Wraps the studiolex Tokenizer in the Pygments Lexer interface so any
Pygments-based renderer (Sphinx, MkDocs, the `pygmentize` CLI) can
highlight studio snippets under the alias `studio`.

The lexer is registered through the `pygments.lexers` entry point, so once
studiolex is installed:

    >>> from pygments.lexers import get_lexer_by_name
    >>> get_lexer_by_name("studio")
    <pygments.lexers.StudioLexer>

Lexer options:
    keywords: Override the keyword list (list or whitespace-separated string)
    builtins: Override the builtin list (list or whitespace-separated string)
"""

from typing import Iterator, Tuple

from pygments.lexer import Lexer
from pygments.token import _TokenType
from pygments.util import get_list_opt

from .patterns import BUILTINS, KEYWORDS
from .tokenizer import Tokenizer


class StudioLexer(Lexer):
    """
    Lexer for Habitat Studio command lines

    Mostly a shell lexer, but with the binaries, aliases and functions that
    exist inside the studio (hab, build, sl, sup-log) highlighted as
    builtins and most shell builtins left as plain words.

    Example:
        hab build ./plan.sh
        "hab "      → Name.Builtin (the trailing space is part of the span)
        "build"     → Name.Builtin
        " "         → Text
        "./plan.sh" → Text
    """

    name = 'Habitat Studio'
    aliases = ['studio']
    filenames = ['*.studio']
    mimetypes = ['text/x-habitat-studio']

    def __init__(self, **options):
        super().__init__(**options)
        self.tokenizer = Tokenizer(
            keywords=get_list_opt(options, 'keywords', list(KEYWORDS)),
            builtins=get_list_opt(options, 'builtins', list(BUILTINS)),
        )

    def get_tokens_unprocessed(self, text: str) -> Iterator[Tuple[int, _TokenType, str]]:
        for token in self.tokenizer.tokens_iterate(text):
            yield token.offset, token.category.pygments_token, token.text


def get_lexer(**options) -> StudioLexer:
    """
    Get a StudioLexer instance

    Returns:
        StudioLexer instance ready for use with Pygments
    """
    return StudioLexer(**options)

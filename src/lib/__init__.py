"""
studiolex - Habitat Studio command tokenizer

A state-machine tokenizer for highlighting Habitat Studio shell commands
in documentation.
"""

__version__ = "1.0.0"

from .tokenizer import Tokenizer
from .engine import RuleEngine, TokenizerStallError
from .patterns import PatternTable, PatternTableError, KEYWORDS, BUILTINS, table_get
from .lexer import StudioLexer, get_lexer
from .render import tokens_render, html_render, RenderError
from .wordlists import wordlists_load, WordListError
from .log import LOG, logger_configure, state_connectToLogger

__all__ = [
    "Tokenizer",
    "RuleEngine",
    "TokenizerStallError",
    "PatternTable",
    "PatternTableError",
    "KEYWORDS",
    "BUILTINS",
    "table_get",
    "StudioLexer",
    "get_lexer",
    "tokens_render",
    "html_render",
    "RenderError",
    "wordlists_load",
    "WordListError",
    "LOG",
    "logger_configure",
    "state_connectToLogger",
    "__version__",
]

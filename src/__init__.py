"""
studiolex - Habitat Studio command tokenizer

Tokenizes Habitat Studio shell commands into categorized spans for
syntax highlighting in documentation.
"""

__version__ = "1.0.0"

from .lib import Tokenizer, StudioLexer, get_lexer, LOG, state_connectToLogger
from .models import Category, Token

__all__ = [
    "Tokenizer",
    "StudioLexer",
    "get_lexer",
    "Category",
    "Token",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

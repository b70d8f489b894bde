"""
Renderers for tokenized studio source

Two output forms:
- tokens_render: a plain listing, one `CATEGORY<TAB>'text'` line per token,
  for inspecting what the tokenizer produced
- html_render: Pygments-highlighted HTML with inline styles
"""

from typing import Iterable, Optional, Sequence

from pygments import format as pygments_format, highlight
from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from ..models.tokens import Token
from .lexer import StudioLexer
from .log import LOG


class RenderError(Exception):
    """Raised when output cannot be rendered (e.g. unknown Pygments style)"""
    pass


def tokens_render(tokens: Iterable[Token]) -> str:
    """
    Render tokens as a tab-separated listing.

    Example:
        >>> tokens_render(Tokenizer().tokenize("fi"))
        "KEYWORD\\t'fi'\\n"
    """
    lines = [f"{token.category.name}\t{token.text!r}" for token in tokens]
    return "".join(line + "\n" for line in lines)


def html_render(
    source: str,
    style: str = "monokai",
    lexer: Optional[StudioLexer] = None,
    tokens: Optional[Sequence[Token]] = None,
) -> str:
    """
    Highlight studio source as standalone-ready HTML.

    Args:
        source: Studio source text
        style: Pygments style name
        lexer: Preconfigured lexer (default: StudioLexer())
        tokens: Tokens already produced for `source`; when given they are
            formatted as they are and the source is not scanned again

    Returns:
        HTML fragment with inline styles

    Raises:
        RenderError: If the style is not a known Pygments style
    """
    try:
        formatter = HtmlFormatter(style=style, noclasses=True)
    except ClassNotFound as e:
        raise RenderError(f"Unknown Pygments style '{style}': {e}")
    LOG(f"Rendering HTML with style '{style}'", level=2)
    if tokens is not None:
        stream = ((token.category.pygments_token, token.text) for token in tokens)
        return pygments_format(stream, formatter)
    if lexer is None:
        lexer = StudioLexer()
    return highlight(source, lexer, formatter)

"""
Rule data models

Type-safe structures describing the pattern table: lexer state names, the
closed set of rule actions and stack transitions, and the Rule record that
binds a compiled matcher to one action and one transition.

Actions and transitions are plain frozen dataclasses. The rule engine
dispatches on their type in a single handler, so a rule never carries
executable code of its own.
"""

import re
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .tokens import Category


class LexState(Enum):
    """
    Named lexer states

    ROOT is the bottom of every state stack. BASIC, DATA and INTERP are
    never pushed; they only exist to be included into other states.
    """
    ROOT = "root"
    BASIC = "basic"
    DATA = "data"
    INTERP = "interp"
    HEREDOC = "heredoc"
    HEREDOC_NL = "heredoc_nl"
    DOUBLE_QUOTES = "double_quotes"
    SINGLE_QUOTES = "single_quotes"
    ANSI_STRING = "ansi_string"
    CURLY = "curly"
    PAREN = "paren"
    MATH = "math"
    CASE = "case"
    CASE_STANZA = "case_stanza"
    BACKTICKS = "backticks"


# --------------------------------------------------------------------------
# Actions: what a matching rule emits
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class EmitSimple:
    """Emit the whole match as one token of the given category"""
    category: Category


@dataclass(frozen=True)
class EmitGrouped:
    """
    Emit one token per mapped capture group

    Attributes:
        groups: Capture group index -> category. Empty groups emit nothing;
                matched text outside every mapped group is emitted as
                PLAIN_TEXT so no character is dropped.
    """
    groups: Dict[int, Category]


@dataclass(frozen=True)
class EmitAndRecordContext:
    """
    Emit like EmitGrouped, then remember one group as the heredoc delimiter

    Attributes:
        groups: Capture group index -> category
        record: Index of the group holding the delimiter word
    """
    groups: Dict[int, Category]
    record: int


@dataclass(frozen=True)
class HeredocTerminatorCheck:
    """
    Compare a captured word with the remembered heredoc delimiter

    On a match the whole span is emitted as `closer` and `on_close` is
    applied; otherwise the span is emitted as `body` and the stack is left
    alone.

    Attributes:
        group: Index of the group holding the candidate word
        closer: Category for a terminator line
        body: Category for any other line
        on_close: Transition applied when the terminator is found
    """
    group: int
    closer: Category
    body: Category
    on_close: "Pop"


Action = Union[EmitSimple, EmitGrouped, EmitAndRecordContext, HeredocTerminatorCheck]


# --------------------------------------------------------------------------
# Transitions: how a matching rule moves the state stack
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class Push:
    state: LexState


@dataclass(frozen=True)
class Pop:
    count: int = 1


@dataclass(frozen=True)
class PopPush:
    count: int
    state: LexState


Transition = Optional[Union[Push, Pop, PopPush]]


@dataclass(frozen=True)
class Include:
    """Marker placed in a state definition to inline another state's rules"""
    state: LexState


@dataclass(frozen=True)
class Rule:
    """
    A compiled pattern bound to one action and one transition

    Attributes:
        pattern: Compiled regex, matched anchored at the cursor position
        action: What to emit for the matched span
        transition: Stack change applied after emission (None for no change)

    Example:
        Rule(re.compile(r";"), EmitSimple(Category.PUNCTUATION))
    """
    pattern: "re.Pattern[str]"
    action: Action
    transition: Transition = field(default=None)

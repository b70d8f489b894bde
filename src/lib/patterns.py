"""
Pattern table for the Habitat Studio shell dialect

Holds the ordered rules of every lexer state, with includes flattened at
build time so the rule engine only ever walks a flat tuple per state.

State layout:
- root: basic + data, the top-level command line
- basic: comments, keywords, builtins, assignments, operators, heredocs
- data: whitespace, quoting, flags, bare words, then interp
- interp: $var, ${...}, $(...), $((...)), backticks, escapes
- heredoc / heredoc_nl: heredoc body and the per-line terminator check
- double_quotes / single_quotes / ansi_string: quoted strings
- curly / paren / math / backticks / case / case_stanza: nested contexts

Rule order is significant: the first rule whose pattern matches at the
cursor wins, even if a later rule would match more text.

Example:
    >>> table = table_get(KEYWORDS, BUILTINS)
    >>> table.rules(LexState.PAREN)[0].pattern.pattern
    '\\\\)'
"""

import re
from functools import lru_cache
from typing import Dict, Iterable, List, Sequence, Set, Tuple, Union

from ..models.rules import (
    Action,
    EmitAndRecordContext,
    EmitGrouped,
    EmitSimple,
    HeredocTerminatorCheck,
    Include,
    LexState,
    Pop,
    Push,
    Rule,
    Transition,
)
from ..models.tokens import Category
from .log import LOG


KEYWORDS: Tuple[str, ...] = (
    "if", "fi", "else", "while", "do", "done", "for", "then", "return",
    "function", "select", "continue", "until", "esac", "elif", "in",
)

# Commands, aliases and functions that already exist inside the studio
BUILTINS: Tuple[str, ...] = ("hab", "build", "sl", "sup-log")

# Appended to every flattened state so that no position can stall
CATCH_ALL = Rule(re.compile(r"[\s\S]"), EmitSimple(Category.PLAIN_TEXT))

RuleSpec = Union[Include, Tuple[str, Action], Tuple[str, Action, Transition]]


class PatternTableError(ValueError):
    """Raised when state definitions reference unknown or cyclic includes"""
    pass


def words_normalize(words: Iterable[str]) -> Tuple[str, ...]:
    """
    Deduplicate a word list and order it longest first.

    Priority among words is by length, not by the order the caller listed
    them in: when two words both match at a position, the longer one wins,
    and words of equal length are tried alphabetically.
    """
    unique: Set[str] = {w.strip() for w in words if w and w.strip()}
    return tuple(sorted(unique, key=lambda w: (-len(w), w)))


def words_alternation(words: Sequence[str]) -> str:
    return "|".join(re.escape(w) for w in words)


def state_definitions(
    keywords: Sequence[str], builtins: Sequence[str]
) -> Dict[LexState, List[RuleSpec]]:
    """
    Build the unflattened rule lists of every state.

    Only the keyword and builtin rules depend on configuration. An empty
    word list drops its rule entirely, since an empty alternation would
    match the empty string.
    """
    basic: List[RuleSpec] = [(r"#.*", EmitSimple(Category.COMMENT))]
    if keywords:
        basic.append(
            (r"\b(?:%s)\s*\b" % words_alternation(keywords), EmitSimple(Category.KEYWORD))
        )
    basic.append((r"\bcase\b", EmitSimple(Category.KEYWORD), Push(LexState.CASE)))
    if builtins:
        basic.append(
            (r"\b(?:%s)\s*\b(?!\.|-)" % words_alternation(builtins), EmitSimple(Category.BUILTIN))
        )
    basic += [
        (r"[.](?=\s)", EmitSimple(Category.BUILTIN)),

        # name=value assignment
        (r"(\b\w+)(=)", EmitGrouped({1: Category.VARIABLE, 2: Category.OPERATOR})),

        (r"[\[\]{}()!=>]", EmitSimple(Category.OPERATOR)),
        (r"&&|\|\|", EmitSimple(Category.OPERATOR)),

        # here-string
        (r"<<<", EmitSimple(Category.OPERATOR)),

        # heredoc opener: <<EOF, <<-EOF, << 'EOF', <<\EOF
        (
            r"(<<-?)(\s*)('?)(\\?)(\w+)(\3)",
            EmitAndRecordContext(
                {
                    1: Category.OPERATOR,
                    2: Category.PLAIN_TEXT,
                    3: Category.STRING_HEREDOC,
                    4: Category.STRING_HEREDOC,
                    5: Category.CONSTANT,
                    6: Category.STRING_HEREDOC,
                },
                record=5,
            ),
            Push(LexState.HEREDOC),
        ),
    ]

    return {
        LexState.ROOT: [Include(LexState.BASIC), Include(LexState.DATA)],
        LexState.BASIC: basic,
        LexState.HEREDOC: [
            (r"\n", EmitSimple(Category.STRING_HEREDOC), Push(LexState.HEREDOC_NL)),
            (r"[^$\n]+", EmitSimple(Category.STRING_HEREDOC)),
            Include(LexState.INTERP),
            (r"[$]", EmitSimple(Category.STRING_HEREDOC)),
        ],
        LexState.HEREDOC_NL: [
            (
                r"\s*(\w+)\s*(?:\n|\Z)",
                HeredocTerminatorCheck(
                    group=1,
                    closer=Category.CONSTANT,
                    body=Category.STRING_HEREDOC,
                    on_close=Pop(2),
                ),
            ),
            # Not a candidate line: drop back to the body state
            (r"", EmitSimple(Category.STRING_HEREDOC), Pop()),
        ],
        LexState.DOUBLE_QUOTES: [
            # "abc$" is literally abc$, so $" closes the string
            (r"(?:\$#?)?\"", EmitSimple(Category.STRING_DOUBLE), Pop()),
            Include(LexState.INTERP),
            (r"[^\"`\\$]+", EmitSimple(Category.STRING_DOUBLE)),
        ],
        LexState.ANSI_STRING: [
            (r"\\.", EmitSimple(Category.STRING_ESCAPE)),
            (r"[^\\']+", EmitSimple(Category.STRING_SINGLE)),
            Include(LexState.SINGLE_QUOTES),
        ],
        LexState.SINGLE_QUOTES: [
            (r"'", EmitSimple(Category.STRING_SINGLE), Pop()),
            (r"[^']+", EmitSimple(Category.STRING_SINGLE)),
        ],
        LexState.DATA: [
            (r"\s+", EmitSimple(Category.PLAIN_TEXT)),
            (r"\\.", EmitSimple(Category.STRING_ESCAPE)),
            (r"\$?\"", EmitSimple(Category.STRING_DOUBLE), Push(LexState.DOUBLE_QUOTES)),
            (r"\$'", EmitSimple(Category.STRING_SINGLE), Push(LexState.ANSI_STRING)),

            # Single quotes preserve every character literally and cannot
            # contain a single quote, so scan straight to the next one.
            (r"'", EmitSimple(Category.STRING_SINGLE), Push(LexState.SINGLE_QUOTES)),

            (r"\*", EmitSimple(Category.KEYWORD)),
            (r";", EmitSimple(Category.PUNCTUATION)),
            (r"--?[\w-]+", EmitSimple(Category.TAG)),
            (r"[^=\*\s{}()$\"'`;\\<]+", EmitSimple(Category.PLAIN_TEXT)),
            (r"\d+(?= |\Z)", EmitSimple(Category.NUMBER)),
            (r"<", EmitSimple(Category.PLAIN_TEXT)),
            Include(LexState.INTERP),
        ],
        LexState.CURLY: [
            (r"\}", EmitSimple(Category.KEYWORD), Pop()),
            (r":-", EmitSimple(Category.KEYWORD)),
            (r"[a-zA-Z0-9_]+", EmitSimple(Category.VARIABLE)),
            (r"[^}:\"`'$]+", EmitSimple(Category.PUNCTUATION)),
            Include(LexState.ROOT),
        ],
        LexState.PAREN: [
            (r"\)", EmitSimple(Category.KEYWORD), Pop()),
            Include(LexState.ROOT),
        ],
        LexState.MATH: [
            (r"\)\)", EmitSimple(Category.KEYWORD), Pop()),
            (r"[-+*/%^|&!]|\*\*|\|\|", EmitSimple(Category.OPERATOR)),
            (r"\d+(?:#\w+)?", EmitSimple(Category.NUMBER)),
            Include(LexState.ROOT),
        ],
        LexState.CASE: [
            (r"\besac\b", EmitSimple(Category.KEYWORD), Pop()),
            (r"\|", EmitSimple(Category.PUNCTUATION)),
            (r"\)", EmitSimple(Category.PUNCTUATION), Push(LexState.CASE_STANZA)),
            Include(LexState.ROOT),
        ],
        LexState.CASE_STANZA: [
            (r";;", EmitSimple(Category.PUNCTUATION), Pop()),
            Include(LexState.ROOT),
        ],
        LexState.BACKTICKS: [
            (r"`", EmitSimple(Category.STRING_BACKTICK), Pop()),
            Include(LexState.ROOT),
        ],
        LexState.INTERP: [
            (r"\\$", EmitSimple(Category.STRING_ESCAPE)),  # line continuation
            (r"\\.", EmitSimple(Category.STRING_ESCAPE)),
            (r"\$\(\(", EmitSimple(Category.KEYWORD), Push(LexState.MATH)),
            (r"\$\(", EmitSimple(Category.KEYWORD), Push(LexState.PAREN)),
            (r"\$\{#?", EmitSimple(Category.KEYWORD), Push(LexState.CURLY)),
            (r"`", EmitSimple(Category.STRING_BACKTICK), Push(LexState.BACKTICKS)),
            (r"\$#?(?:\w+|.)", EmitSimple(Category.VARIABLE)),
            (r"\$[*@]", EmitSimple(Category.VARIABLE)),
        ],
    }


def rule_compile(entry: Tuple) -> Rule:
    pattern, action = entry[0], entry[1]
    transition = entry[2] if len(entry) > 2 else None
    # Shell names are ASCII; \w and \b must not match accented letters
    return Rule(re.compile(pattern, re.MULTILINE | re.ASCII), action, transition)


class PatternTable:
    """
    Flattened, read-only rules for every lexer state

    Built once per (keywords, builtins) configuration; see table_get().

    Attributes:
        keywords: Words tagged KEYWORD, longest first
        builtins: Words tagged BUILTIN, longest first
    """

    def __init__(self, keywords: Iterable[str] = KEYWORDS, builtins: Iterable[str] = BUILTINS):
        self.keywords: Tuple[str, ...] = words_normalize(keywords)
        self.builtins: Tuple[str, ...] = words_normalize(builtins)
        self._definitions = state_definitions(self.keywords, self.builtins)
        self._flat: Dict[LexState, Tuple[Rule, ...]] = {}

        for state in self._definitions:
            self._flat[state] = self._flatten(state, ()) + (CATCH_ALL,)

        LOG(
            f"Built pattern table: {len(self._flat)} states, "
            f"{len(self.keywords)} keywords, {len(self.builtins)} builtins",
            level=2,
        )

    def _flatten(self, state: LexState, including: Tuple[LexState, ...]) -> Tuple[Rule, ...]:
        """
        Inline included states in declaration order.

        Args:
            state: State whose rules to expand
            including: Chain of states currently being expanded

        Raises:
            PatternTableError: On an unknown state or an include cycle
        """
        if state in including:
            chain = " -> ".join(s.value for s in including + (state,))
            raise PatternTableError(f"Include cycle: {chain}")
        if state not in self._definitions:
            raise PatternTableError(f"Unknown state '{state.value}'")

        rules: List[Rule] = []
        for entry in self._definitions[state]:
            if isinstance(entry, Include):
                rules.extend(self._flatten(entry.state, including + (state,)))
            else:
                rules.append(rule_compile(entry))
        return tuple(rules)

    def rules(self, state: LexState) -> Tuple[Rule, ...]:
        """Ordered rules for state, includes expanded, catch-all last"""
        return self._flat[state]

    def states(self) -> Tuple[LexState, ...]:
        return tuple(self._flat)

    def __repr__(self) -> str:
        return f"PatternTable(keywords={len(self.keywords)}, builtins={len(self.builtins)})"


@lru_cache(maxsize=32)
def _table_cached(keywords: Tuple[str, ...], builtins: Tuple[str, ...]) -> PatternTable:
    return PatternTable(keywords, builtins)


def table_get(keywords: Iterable[str] = KEYWORDS, builtins: Iterable[str] = BUILTINS) -> PatternTable:
    """
    Return the shared pattern table for a word-list configuration.

    Tables are immutable after construction, so one instance is shared by
    every tokenizer built with the same words.
    """
    return _table_cached(words_normalize(keywords), words_normalize(builtins))

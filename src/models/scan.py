"""
Per-scan cursor and context

A ScanCursor is created at the start of every tokenize() call and thrown
away when it returns. Nothing in here is shared between scans.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from .rules import LexState


@dataclass
class ScanContext:
    """
    Memory carried between rules during one scan

    Attributes:
        heredoc: Escaped, compiled delimiter of the innermost open heredoc,
                 or None before the first heredoc opener
    """
    heredoc: Optional["re.Pattern[str]"] = field(default=None)

    def heredoc_record(self, word: str) -> None:
        self.heredoc = re.compile(re.escape(word))

    def heredoc_closes(self, word: str) -> bool:
        """True if word is exactly the remembered delimiter"""
        return self.heredoc is not None and self.heredoc.fullmatch(word) is not None


@dataclass
class ScanCursor:
    """
    Position, state stack and context for one tokenize() call

    Attributes:
        text: Source text being scanned
        position: Offset of the next unscanned character
        stack: Active states, bottom first; always starts as [ROOT]
        context: Cross-rule scan memory
    """
    text: str
    position: int = field(default=0)
    stack: List[LexState] = field(default_factory=lambda: [LexState.ROOT])
    context: ScanContext = field(default_factory=ScanContext)

    @property
    def state(self) -> LexState:
        return self.stack[-1]

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.text)

    def state_push(self, state: LexState) -> None:
        self.stack.append(state)

    def state_pop(self, count: int = 1) -> None:
        """Pop up to count states; the bottom ROOT entry is never removed"""
        for _ in range(count):
            if len(self.stack) > 1:
                self.stack.pop()

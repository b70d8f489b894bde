"""
Rule engine: the first-match-wins scanning loop

Each step looks at the state on top of the cursor's stack, tries that
state's flattened rules in declared order against the text at the cursor,
and applies the first one that matches:

1. emit tokens for the matched span, as directed by the rule's action
2. apply the rule's stack transition (or the action's own, for heredoc
   terminator checks)
3. move the cursor to the end of the match

A step must either consume text or change the stack. A step that does
neither is a defect in the pattern table and raises TokenizerStallError
rather than looping forever or silently dropping input.
"""

import re
from typing import Dict, Optional, Tuple

from loguru import logger

from ..models.rules import (
    EmitAndRecordContext,
    EmitGrouped,
    EmitSimple,
    HeredocTerminatorCheck,
    LexState,
    Pop,
    PopPush,
    Push,
    Rule,
    Transition,
)
from ..models.scan import ScanCursor
from ..models.tokens import Category
from .log import LOG
from .patterns import PatternTable
from .sink import TokenSink


class TokenizerStallError(RuntimeError):
    """Raised when a scan step neither consumes input nor changes state"""

    def __init__(self, state: LexState, position: int, text: str):
        self.state = state
        self.position = position
        snippet = text[position:position + 20]
        super().__init__(
            f"Tokenizer stalled in state '{state.value}' at offset {position}: {snippet!r}"
        )


class RuleEngine:
    """
    Drives a ScanCursor over its text using one PatternTable

    The engine holds no per-scan state; a single instance may serve any
    number of cursors, including concurrently.
    """

    def __init__(self, table: PatternTable):
        self.table = table

    def run(self, cursor: ScanCursor, sink: TokenSink) -> None:
        """Step until the cursor reaches the end of its text"""
        while not cursor.exhausted:
            self.step(cursor, sink)

    def step(self, cursor: ScanCursor, sink: TokenSink) -> None:
        """
        Apply exactly one rule at the cursor.

        Raises:
            TokenizerStallError: If no rule matches, or a zero-width match
                                 leaves the stack untouched
        """
        state = cursor.state
        for rule in self.table.rules(state):
            match = rule.pattern.match(cursor.text, cursor.position)
            if match is None:
                continue

            before: Optional[Tuple[LexState, ...]] = None
            if match.end() == cursor.position:
                before = tuple(cursor.stack)

            self.rule_apply(rule, match, cursor, sink)

            if before is not None and tuple(cursor.stack) == before:
                self.stall_raise(cursor)
            cursor.position = match.end()
            return

        self.stall_raise(cursor)

    def rule_apply(
        self, rule: Rule, match: "re.Match[str]", cursor: ScanCursor, sink: TokenSink
    ) -> None:
        """Dispatch on the rule's action, then apply its transition"""
        action = rule.action
        transition: Transition = rule.transition

        if isinstance(action, EmitSimple):
            sink.emit(match.group(0), action.category, match.start())

        elif isinstance(action, EmitGrouped):
            groups_emit(match, action.groups, sink)

        elif isinstance(action, EmitAndRecordContext):
            groups_emit(match, action.groups, sink)
            cursor.context.heredoc_record(match.group(action.record))
            LOG(f"heredoc delimiter '{match.group(action.record)}'", level=3)

        elif isinstance(action, HeredocTerminatorCheck):
            if cursor.context.heredoc_closes(match.group(action.group)):
                sink.emit(match.group(0), action.closer, match.start())
                transition = action.on_close
            else:
                sink.emit(match.group(0), action.body, match.start())

        else:
            raise TypeError(f"Unknown rule action: {action!r}")

        self.transition_apply(transition, cursor)

    def transition_apply(self, transition: Transition, cursor: ScanCursor) -> None:
        if transition is None:
            return
        if isinstance(transition, Push):
            cursor.state_push(transition.state)
            LOG(f"push {transition.state.value} @ {cursor.position}", level=3)
        elif isinstance(transition, Pop):
            cursor.state_pop(transition.count)
            LOG(f"pop {transition.count} -> {cursor.state.value} @ {cursor.position}", level=3)
        elif isinstance(transition, PopPush):
            cursor.state_pop(transition.count)
            cursor.state_push(transition.state)
            LOG(
                f"pop {transition.count}, push {transition.state.value} @ {cursor.position}",
                level=3,
            )
        else:
            raise TypeError(f"Unknown rule transition: {transition!r}")

    def stall_raise(self, cursor: ScanCursor) -> None:
        error = TokenizerStallError(cursor.state, cursor.position, cursor.text)
        logger.error(str(error))
        raise error


def groups_emit(match: "re.Match[str]", groups: Dict[int, Category], sink: TokenSink) -> None:
    """
    Emit one token per mapped group, left to right.

    Groups that did not participate are skipped. Text of the match that no
    mapped group covers is emitted as PLAIN_TEXT, so the emitted tokens
    always cover the whole match exactly once.
    """
    text = match.string
    position = match.start()
    for index in sorted(groups, key=lambda i: match.start(i)):
        start, end = match.span(index)
        if start < position:
            continue
        if start > position:
            sink.emit(text[position:start], Category.PLAIN_TEXT, position)
        sink.emit(text[start:end], groups[index], start)
        position = end
    if position < match.end():
        sink.emit(text[position:match.end()], Category.PLAIN_TEXT, position)
